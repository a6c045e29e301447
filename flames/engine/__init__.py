from flames.engine.match_engine import MatchSimulation, MatchState, MatchPhase
from flames.engine.match_clock import LiveMatch
from flames.engine.squad_engine import SquadEngine

__all__ = ["MatchSimulation", "MatchState", "MatchPhase", "LiveMatch", "SquadEngine"]
