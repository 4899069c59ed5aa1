"""Turn-based vector racing on a grid."""

from .config import GameMode, RaceConfig, SpinPolicy
from .data import TrackKind, get_track
from .exceptions import InvalidMoveError, TrackConfigurationError, VectorRallyError
from .models import Direction, Player, PlayerColor, Position, Track
from .simulation import (
    MoveResolver,
    RaceSession,
    apply_move,
    compute_legal_moves,
    initialize_race,
)

__version__ = "0.1.0"

__all__ = [
    "Direction",
    "GameMode",
    "InvalidMoveError",
    "MoveResolver",
    "Player",
    "PlayerColor",
    "Position",
    "RaceConfig",
    "RaceSession",
    "SpinPolicy",
    "Track",
    "TrackConfigurationError",
    "TrackKind",
    "VectorRallyError",
    "apply_move",
    "compute_legal_moves",
    "get_track",
    "initialize_race",
]
