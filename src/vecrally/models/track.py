"""Track model: road tiles, checkpoint lines, finish line and start grid."""

from pydantic import BaseModel, Field, model_validator

from vecrally.exceptions import TrackConfigurationError
from vecrally.models.geometry import Direction, Position, within_bounds


class StartPose(BaseModel):
    """Starting grid slot for one player."""

    position: Position = Field(..., description="Starting cell")
    direction: Direction = Field(..., description="Initial facing")


class Track(BaseModel):
    """A race course laid out on a discrete grid.

    Immutable once the race starts. Validation runs at construction so a
    malformed layout fails at race setup rather than during a move.
    """

    id: str = Field(..., description="Track identifier (e.g., 'oval')")
    name: str = Field(default="", description="Display name")
    size: tuple[int, int] = Field(..., description="Board (width, height) in cells")

    track_tiles: frozenset[Position] = Field(
        ...,
        description="Drivable cells; everything else on the board is off-track",
    )
    checkpoints: list[list[Position]] = Field(
        default_factory=list,
        description="Checkpoint lines; crossing any tile of a line passes it",
    )
    finish_line: list[Position] = Field(
        default_factory=list,
        description="Finish tiles; crossing one with all checkpoints wins",
    )
    start_positions: list[StartPose] = Field(
        default_factory=list,
        description="One starting pose per player slot, in player-id order",
    )

    @model_validator(mode="after")
    def _check_layout(self) -> "Track":
        width, height = self.size
        if width <= 0 or height <= 0:
            raise TrackConfigurationError(f"Track {self.id!r}: board size must be positive, got {self.size}")
        if not self.track_tiles:
            raise TrackConfigurationError(f"Track {self.id!r}: no drivable tiles")

        outside = [t for t in self.track_tiles if not within_bounds(t, self.size)]
        if outside:
            raise TrackConfigurationError(
                f"Track {self.id!r}: {len(outside)} road tiles lie outside the board"
            )

        for index, line in enumerate(self.checkpoints):
            if not line:
                raise TrackConfigurationError(f"Track {self.id!r}: checkpoint {index} is empty")
            stray = [t for t in line if t not in self.track_tiles]
            if stray:
                raise TrackConfigurationError(
                    f"Track {self.id!r}: checkpoint {index} has off-track tiles "
                    f"{', '.join(str(t) for t in stray)}"
                )

        if not self.finish_line:
            raise TrackConfigurationError(f"Track {self.id!r}: no finish line")
        stray = [t for t in self.finish_line if t not in self.track_tiles]
        if stray:
            raise TrackConfigurationError(
                f"Track {self.id!r}: finish line has off-track tiles "
                f"{', '.join(str(t) for t in stray)}"
            )

        for slot, pose in enumerate(self.start_positions):
            if pose.position not in self.track_tiles:
                raise TrackConfigurationError(
                    f"Track {self.id!r}: start slot {slot} at {pose.position} is off-track"
                )
        return self

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def total_checkpoints(self) -> int:
        """Number of checkpoint lines a lap requires."""
        return len(self.checkpoints)

    def is_on_track(self, position: Position) -> bool:
        return position in self.track_tiles

    def distance_from_track(self, position: Position) -> int:
        """Manhattan distance to the nearest road tile (0 on the road)."""
        if position in self.track_tiles:
            return 0
        return min(
            abs(position.x - tile.x) + abs(position.y - tile.y)
            for tile in self.track_tiles
        )
