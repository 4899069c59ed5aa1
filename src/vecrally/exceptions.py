"""Errors raised by the race engine."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vecrally.models.geometry import Position


class VectorRallyError(Exception):
    """Base class for engine errors."""


class InvalidMoveError(VectorRallyError):
    """A player was asked to move somewhere the rules do not allow."""

    def __init__(
        self,
        player_id: int,
        destination: "Position",
        reason: str = "not a legal move",
    ):
        self.player_id = player_id
        self.destination = destination
        self.reason = reason
        super().__init__(
            f"Player {player_id} cannot move to {destination}: {reason}"
        )


class TrackConfigurationError(VectorRallyError):
    """A track description is internally inconsistent."""
