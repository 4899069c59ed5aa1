"""Built-in track layouts.

Every track here is fully tiled, so off-track detection works on all of
them. Builders are pure: calling one twice gives equal tracks.
"""

from enum import Enum

from vecrally.models import Direction, Position, StartPose, Track


class TrackKind(str, Enum):
    """Selectable track configurations."""

    OVAL = "oval"
    FIGURE8 = "figure8"


def horizontal_line(y: int, x_start: int, x_end: int) -> list[Position]:
    """Cells on row ``y`` from ``x_start`` to ``x_end`` inclusive."""
    return [Position(x=x, y=y) for x in range(x_start, x_end + 1)]


def vertical_line(x: int, y_start: int, y_end: int) -> list[Position]:
    """Cells on column ``x`` from ``y_start`` to ``y_end`` inclusive."""
    return [Position(x=x, y=y) for y in range(y_start, y_end + 1)]


def _rectangular_ring(
    x_min: int, y_min: int, x_max: int, y_max: int, band: int
) -> set[Position]:
    tiles = set()
    for x in range(x_min, x_max + 1):
        for y in range(y_min, y_max + 1):
            on_band = (
                x < x_min + band
                or x > x_max - band
                or y < y_min + band
                or y > y_max - band
            )
            if on_band:
                tiles.add(Position(x=x, y=y))
    return tiles


def build_oval_track(size: int = 20, track_width: int = 4, padding: int = 1) -> Track:
    """Build a rectangular ring raced clockwise, starting on the top straight.

    Args:
        size: Board width and height in cells
        track_width: Width of each straight in cells
        padding: Off-track margin between the board edge and the road

    Returns:
        Oval track with three checkpoint lines (left, bottom, right) and a
        finish line across the middle of the top straight
    """
    if track_width < 2:
        raise ValueError("track_width must be at least 2")
    inner = size - 2 * padding
    if inner < 2 * track_width + 1:
        raise ValueError(f"Board of size {size} is too small for width {track_width}")

    lo = padding
    hi = size - padding - 1
    mid = size // 2
    tiles = _rectangular_ring(lo, lo, hi, hi, track_width)

    top_band = (lo, lo + track_width - 1)
    bottom_band = (hi - track_width + 1, hi)
    left_band = (lo, lo + track_width - 1)
    right_band = (hi - track_width + 1, hi)

    checkpoints = [
        horizontal_line(mid, *left_band),
        vertical_line(mid, *bottom_band),
        horizontal_line(mid, *right_band),
    ]
    finish_line = vertical_line(mid, *top_band)

    # Two lanes in the middle of the top straight, two rows behind the line
    lanes = list(range(top_band[0], top_band[1] + 1))
    inner_lanes = [lanes[len(lanes) // 2 - 1], lanes[len(lanes) // 2]]
    start_positions = [
        StartPose(position=Position(x=column, y=lane), direction=Direction.E)
        for column in (mid - 2, mid - 4)
        for lane in inner_lanes
    ]

    return Track(
        id=TrackKind.OVAL.value,
        name="Oval",
        size=(size, size),
        track_tiles=frozenset(tiles),
        checkpoints=checkpoints,
        finish_line=finish_line,
        start_positions=start_positions,
    )


def build_figure8_track() -> Track:
    """Build a 12x12 figure-eight: two stacked loops sharing a crossbar.

    Checkpoints sit on both loops and on the crossbar, so a lap has to use
    the crossbar rather than circling the outer ring only.
    """
    size = 12
    tiles = _rectangular_ring(1, 1, 10, 10, 2)
    for y in (5, 6):
        tiles.update(horizontal_line(y, 1, 10))

    checkpoints = [
        horizontal_line(3, 1, 2),
        vertical_line(6, 5, 6),
        horizontal_line(8, 9, 10),
        horizontal_line(8, 1, 2),
        horizontal_line(3, 9, 10),
    ]
    finish_line = vertical_line(6, 1, 2)
    start_positions = [
        StartPose(position=Position(x=7, y=1), direction=Direction.W),
        StartPose(position=Position(x=7, y=2), direction=Direction.W),
        StartPose(position=Position(x=8, y=1), direction=Direction.W),
        StartPose(position=Position(x=8, y=2), direction=Direction.W),
    ]

    return Track(
        id=TrackKind.FIGURE8.value,
        name="Figure Eight",
        size=(size, size),
        track_tiles=frozenset(tiles),
        checkpoints=checkpoints,
        finish_line=finish_line,
        start_positions=start_positions,
    )


TRACK_CATALOG = {
    TrackKind.OVAL: build_oval_track,
    TrackKind.FIGURE8: build_figure8_track,
}


def get_track(kind: TrackKind | str) -> Track:
    """Build the named catalog track.

    Raises:
        ValueError: If ``kind`` is not a catalog track
    """
    try:
        kind = TrackKind(kind)
    except ValueError:
        known = ", ".join(k.value for k in TrackKind)
        raise ValueError(f"Unknown track {kind!r} (known: {known})") from None
    return TRACK_CATALOG[kind]()
