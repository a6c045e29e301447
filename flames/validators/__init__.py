from flames.validators.squad_validator import SquadValidator

__all__ = ["SquadValidator"]
