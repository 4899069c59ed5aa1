from vecrally.models import Direction, Position
from vecrally.models.geometry import (
    adjacent_directions,
    adjacent_positions,
    chebyshev_distance,
    direction_between,
    line_tiles,
    reverse_direction,
    segment_crosses_line,
    segment_crosses_tile,
    unit_vector,
    within_bounds,
)


def _p(x: int, y: int) -> Position:
    return Position(x=x, y=y)


def test_positions_compare_and_hash_by_value():
    assert _p(3, 4) == _p(3, 4)
    assert len({_p(3, 4), _p(3, 4), _p(4, 3)}) == 2


def test_unit_vectors_point_north_up_the_screen():
    assert unit_vector(Direction.N) == (0, -1)
    assert unit_vector(Direction.SE) == (1, 1)
    assert unit_vector(Direction.W) == (-1, 0)


def test_direction_between_axis_and_diagonal_moves():
    origin = _p(5, 5)
    assert direction_between(origin, _p(5, 2)) == Direction.N
    assert direction_between(origin, _p(8, 5)) == Direction.E
    assert direction_between(origin, _p(3, 7)) == Direction.SW
    assert direction_between(origin, _p(4, 4)) == Direction.NW


def test_direction_between_uses_signs_only():
    # (2, 1) is not on a 45 degree ray but still classifies as SE
    origin = _p(0, 0)
    assert direction_between(origin, _p(2, 1)) == Direction.SE
    assert direction_between(origin, _p(1, 1)) == Direction.SE
    assert direction_between(origin, _p(1, -3)) == Direction.NE


def test_direction_between_same_cell_defaults_to_north():
    assert direction_between(_p(2, 2), _p(2, 2)) == Direction.N


def test_adjacent_and_reverse_directions_wrap_around_the_cycle():
    assert adjacent_directions(Direction.N) == (Direction.NW, Direction.NE)
    assert adjacent_directions(Direction.E) == (Direction.NE, Direction.SE)
    assert reverse_direction(Direction.E) == Direction.W
    assert reverse_direction(Direction.NE) == Direction.SW
    assert reverse_direction(Direction.NW) == Direction.SE


def test_within_bounds_is_half_open():
    size = (5, 3)
    assert within_bounds(_p(0, 0), size)
    assert within_bounds(_p(4, 2), size)
    assert not within_bounds(_p(5, 0), size)
    assert not within_bounds(_p(0, 3), size)
    assert not within_bounds(_p(-1, 1), size)


def test_adjacent_positions_clip_to_board():
    assert adjacent_positions(_p(0, 0), (5, 5)) == {_p(1, 0), _p(0, 1), _p(1, 1)}
    middle = adjacent_positions(_p(2, 2), (5, 5))
    assert len(middle) == 8
    assert _p(2, 2) not in middle


def test_chebyshev_distance():
    assert chebyshev_distance(_p(0, 0), _p(3, 1)) == 3
    assert chebyshev_distance(_p(2, 2), _p(1, 1)) == 1


def test_line_tiles_exclude_endpoints():
    assert line_tiles(_p(0, 0), _p(3, 0)) == [_p(1, 0), _p(2, 0)]
    assert line_tiles(_p(0, 0), _p(1, 1)) == []
    assert line_tiles(_p(0, 0), _p(4, 2)) == [_p(1, 0), _p(2, 1), _p(3, 1)]
    assert line_tiles(_p(3, 3), _p(0, 0)) == [_p(2, 2), _p(1, 1)]


def test_segment_crosses_tile_counts_endpoints_and_path():
    start, end = _p(0, 0), _p(3, 0)
    assert segment_crosses_tile(start, end, start)
    assert segment_crosses_tile(start, end, end)
    assert segment_crosses_tile(start, end, _p(2, 0))
    assert not segment_crosses_tile(start, end, _p(2, 1))


def test_segment_crosses_line():
    line = [_p(5, y) for y in range(3)]
    assert segment_crosses_line(_p(3, 1), _p(6, 1), line)
    assert not segment_crosses_line(_p(1, 1), _p(4, 1), line)
