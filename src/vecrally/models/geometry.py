"""Grid positions, compass directions and discrete line geometry."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """A cell on the board grid."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="Column index")
    y: int = Field(..., description="Row index (grows downwards)")

    def offset(self, dx: int, dy: int) -> "Position":
        """Return the position displaced by (dx, dy)."""
        return Position(x=self.x + dx, y=self.y + dy)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Direction(str, Enum):
    """Eight compass headings, in clockwise order starting from north."""

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


# Screen coordinates: north is negative y
UNIT_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, -1),
    Direction.NE: (1, -1),
    Direction.E: (1, 0),
    Direction.SE: (1, 1),
    Direction.S: (0, 1),
    Direction.SW: (-1, 1),
    Direction.W: (-1, 0),
    Direction.NW: (-1, -1),
}

CARDINAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.N,
    Direction.E,
    Direction.S,
    Direction.W,
)

_CYCLE: list[Direction] = list(Direction)
_BY_SIGN: dict[tuple[int, int], Direction] = {v: d for d, v in UNIT_VECTORS.items()}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def unit_vector(direction: Direction) -> tuple[int, int]:
    """Unit displacement for a compass direction."""
    return UNIT_VECTORS[direction]


def direction_between(start: Position, end: Position) -> Direction:
    """Classify the displacement start -> end into one of the 8 octants.

    Only the signs of dx and dy are used, so (2, 1) and (1, 1) both map to
    SE. A zero displacement maps to N.
    """
    key = (_sign(end.x - start.x), _sign(end.y - start.y))
    return _BY_SIGN.get(key, Direction.N)


def adjacent_directions(direction: Direction) -> tuple[Direction, Direction]:
    """The two headings one step either side of ``direction`` in the cycle."""
    idx = _CYCLE.index(direction)
    return _CYCLE[(idx - 1) % len(_CYCLE)], _CYCLE[(idx + 1) % len(_CYCLE)]


def reverse_direction(direction: Direction) -> Direction:
    idx = _CYCLE.index(direction)
    return _CYCLE[(idx + 4) % len(_CYCLE)]


def within_bounds(position: Position, size: tuple[int, int]) -> bool:
    """Check ``0 <= x < width`` and ``0 <= y < height``."""
    width, height = size
    return 0 <= position.x < width and 0 <= position.y < height


def adjacent_positions(position: Position, size: tuple[int, int]) -> set[Position]:
    """In-bounds Moore neighbourhood (up to 8 cells) of ``position``."""
    neighbours = set()
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            candidate = position.offset(dx, dy)
            if within_bounds(candidate, size):
                neighbours.add(candidate)
    return neighbours


def chebyshev_distance(a: Position, b: Position) -> int:
    return max(abs(a.x - b.x), abs(a.y - b.y))


def line_tiles(start: Position, end: Position) -> list[Position]:
    """Bresenham rasterisation of start -> end, both endpoints excluded.

    Args:
        start: Segment origin
        end: Segment destination

    Returns:
        Cells strictly between the endpoints, in travel order
    """
    x0, y0 = start.x, start.y
    x1, y1 = end.x, end.y
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    tiles: list[Position] = []
    while True:
        if (x0, y0) != (start.x, start.y) and (x0, y0) != (end.x, end.y):
            tiles.append(Position(x=x0, y=y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy
    return tiles


def segment_crosses_tile(start: Position, end: Position, tile: Position) -> bool:
    """True if the travelled segment touches ``tile``, endpoints included."""
    if tile == start or tile == end:
        return True
    return tile in line_tiles(start, end)


def segment_crosses_line(start: Position, end: Position, line: list[Position]) -> bool:
    """True if the segment touches any tile of a checkpoint or finish line."""
    path = {start, end, *line_tiles(start, end)}
    return any(tile in path for tile in line)
