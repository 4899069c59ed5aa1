"""Player model with racing state."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from vecrally.models.geometry import Direction, Position

MOVE_HISTORY_LENGTH = 5


class PlayerColor(str, Enum):
    """Fixed car palette, assigned in player-id order."""

    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"


PLAYER_PALETTE: tuple[PlayerColor, ...] = tuple(PlayerColor)


class Player(BaseModel):
    """A racer and its per-turn state."""

    id: int = Field(..., ge=1, description="Stable 1-based player identifier")
    color: PlayerColor = Field(..., description="Car colour")

    # Race state (mutable during a race)
    position: Position = Field(..., description="Current cell")
    previous_position: Position | None = Field(
        default=None,
        description="Cell before the last move; defaults to the start cell",
    )
    direction: Direction = Field(..., description="Current facing")
    speed: int = Field(default=0, ge=0, description="Magnitude of momentum")
    checkpoints_passed: set[int] = Field(
        default_factory=set,
        description="Indices of checkpoint lines crossed this lap",
    )
    total_checkpoints: int = Field(default=0, ge=0, description="Checkpoints needed to finish")
    crashed: bool = Field(default=False, description="Eliminated from the race")
    is_finished: bool = Field(default=False, description="Crossed the finish with all checkpoints")
    move_history: list[Position] = Field(
        default_factory=list,
        description=f"Last {MOVE_HISTORY_LENGTH} positions before each move",
    )

    @model_validator(mode="after")
    def _default_previous_position(self) -> "Player":
        if self.previous_position is None:
            self.previous_position = self.position
        return self

    @property
    def momentum(self) -> tuple[int, int]:
        """Displacement of the last move (previous -> current position)."""
        return (
            self.position.x - self.previous_position.x,
            self.position.y - self.previous_position.y,
        )

    @property
    def is_active(self) -> bool:
        """Still racing: neither crashed nor finished."""
        return not self.crashed and not self.is_finished

    def record_history(self, position: Position) -> None:
        self.move_history.append(position)
        del self.move_history[:-MOVE_HISTORY_LENGTH]
