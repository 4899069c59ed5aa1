import pytest

from vecrally import TrackConfigurationError, TrackKind, get_track
from vecrally.data import build_figure8_track, build_oval_track
from vecrally.models import Direction, Position, StartPose, Track


def _p(x: int, y: int) -> Position:
    return Position(x=x, y=y)


def _row(y: int, x_start: int, x_end: int) -> list[Position]:
    return [_p(x, y) for x in range(x_start, x_end + 1)]


def test_oval_layout():
    track = build_oval_track()

    assert track.size == (20, 20)
    # 18x18 ring with a 10x10 infield
    assert len(track.track_tiles) == 18 * 18 - 10 * 10
    assert track.total_checkpoints == 3
    assert track.finish_line == [_p(10, y) for y in range(1, 5)]
    assert not track.is_on_track(_p(0, 0))
    assert not track.is_on_track(_p(10, 10))
    assert track.is_on_track(_p(1, 1))


def test_oval_lines_and_start_grid_are_on_the_road():
    track = build_oval_track()

    for line in track.checkpoints:
        assert all(tile in track.track_tiles for tile in line)
    assert all(tile in track.track_tiles for tile in track.finish_line)

    assert len(track.start_positions) == 4
    for pose in track.start_positions:
        assert pose.position in track.track_tiles
        assert pose.direction == Direction.E
    assert track.start_positions[0].position == _p(8, 2)


def test_track_builders_are_deterministic():
    assert build_oval_track() == build_oval_track()
    assert build_figure8_track() == build_figure8_track()
    assert get_track("oval").track_tiles == get_track(TrackKind.OVAL).track_tiles


def test_figure8_is_fully_tiled():
    track = build_figure8_track()

    # 10x10 ring of width 2 plus the inner part of the crossbar
    assert len(track.track_tiles) == 64 + 12
    assert track.is_on_track(_p(5, 5))
    assert not track.is_on_track(_p(4, 3))
    assert not track.is_on_track(_p(4, 8))
    assert track.total_checkpoints == 5
    assert [pose.direction for pose in track.start_positions] == [Direction.W] * 4


def test_unknown_track_kind():
    with pytest.raises(ValueError, match="Unknown track"):
        get_track("monaco")


def test_oval_rejects_narrow_road():
    with pytest.raises(ValueError):
        build_oval_track(track_width=1)


def test_checkpoint_off_the_road_is_a_configuration_error():
    with pytest.raises(TrackConfigurationError, match="checkpoint 0"):
        Track(
            id="bad",
            size=(6, 3),
            track_tiles=frozenset(_row(1, 0, 5)),
            checkpoints=[[_p(3, 1), _p(3, 2)]],
            finish_line=[_p(5, 1)],
        )


def test_finish_line_off_the_road_is_a_configuration_error():
    with pytest.raises(TrackConfigurationError, match="finish line"):
        Track(
            id="bad",
            size=(6, 3),
            track_tiles=frozenset(_row(1, 0, 5)),
            finish_line=[_p(5, 0)],
        )


def test_start_pose_off_the_road_is_a_configuration_error():
    with pytest.raises(TrackConfigurationError, match="start slot 0"):
        Track(
            id="bad",
            size=(6, 3),
            track_tiles=frozenset(_row(1, 0, 5)),
            finish_line=[_p(5, 1)],
            start_positions=[StartPose(position=_p(0, 2), direction=Direction.E)],
        )


def test_empty_road_is_a_configuration_error():
    with pytest.raises(TrackConfigurationError, match="no drivable tiles"):
        Track(id="bad", size=(6, 3), track_tiles=frozenset(), finish_line=[_p(1, 1)])


def test_distance_from_track():
    track = build_oval_track()
    assert track.distance_from_track(_p(2, 2)) == 0
    assert track.distance_from_track(_p(0, 0)) == 2
    assert track.distance_from_track(_p(10, 10)) == 5
