"""Simulation engine components."""

from .events import EventLog, EventType, MoveLogEntry, MoveOutcome, RaceEvent
from .movement import compute_legal_moves, legal_moves
from .resolution import MoveResolver, apply_move, check_slipstream, next_speed
from .session import RaceSession, create_players, initialize_race

__all__ = [
    "EventLog",
    "EventType",
    "MoveLogEntry",
    "MoveOutcome",
    "MoveResolver",
    "RaceEvent",
    "RaceSession",
    "apply_move",
    "check_slipstream",
    "compute_legal_moves",
    "create_players",
    "initialize_race",
    "legal_moves",
    "next_speed",
]
