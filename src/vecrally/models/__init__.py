"""Data models for the race engine."""

from .geometry import Direction, Position
from .player import PLAYER_PALETTE, Player, PlayerColor
from .track import StartPose, Track

__all__ = [
    "Direction",
    "PLAYER_PALETTE",
    "Player",
    "PlayerColor",
    "Position",
    "StartPose",
    "Track",
]
