from flames.generators.roster_generator import RosterGenerator, get_roster

__all__ = ["RosterGenerator", "get_roster"]
