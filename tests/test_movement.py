from vecrally.data import build_oval_track
from vecrally.models import Direction, Player, PlayerColor, Position
from vecrally.simulation.movement import (
    compute_legal_moves,
    legal_moves,
    momentum_candidates,
    reachable_cells,
)


def _p(x: int, y: int) -> Position:
    return Position(x=x, y=y)


def _player(
    player_id: int = 1,
    position: Position = Position(x=8, y=2),
    previous: Position | None = None,
    speed: int = 0,
    direction: Direction = Direction.E,
    **kwargs,
) -> Player:
    return Player(
        id=player_id,
        color=list(PlayerColor)[player_id - 1],
        position=position,
        previous_position=previous,
        speed=speed,
        direction=direction,
        total_checkpoints=3,
        **kwargs,
    )


def test_standing_start_offers_only_the_forward_tile():
    track = build_oval_track()
    player = _player(position=_p(8, 2), direction=Direction.E)

    assert legal_moves(player, track) == {_p(9, 2)}


def test_standing_start_widens_when_forward_is_off_track():
    track = build_oval_track()
    player = _player(position=_p(1, 1), direction=Direction.N)

    assert legal_moves(player, track) == {_p(2, 1), _p(1, 2), _p(2, 2)}


def test_standing_start_with_forward_occupied_has_no_moves():
    track = build_oval_track()
    player = _player(position=_p(8, 2), direction=Direction.E)
    blocker = _player(player_id=2, position=_p(9, 2))

    assert legal_moves(player, track, [player, blocker]) == set()


def test_standing_start_off_track_forward_still_drops_occupied_tiles():
    track = build_oval_track()
    player = _player(position=_p(1, 1), direction=Direction.N)
    blocker = _player(player_id=2, position=_p(2, 1))

    assert legal_moves(player, track, [player, blocker]) == {_p(1, 2), _p(2, 2)}


def test_unit_momentum_gives_eight_continuations():
    track = build_oval_track()
    player = _player(position=_p(10, 2), previous=_p(9, 2), speed=1)

    moves = legal_moves(player, track)

    assert len(moves) == 8
    assert _p(10, 2) not in moves
    assert moves == {
        _p(10, 1), _p(10, 3),
        _p(11, 1), _p(11, 2), _p(11, 3),
        _p(12, 1), _p(12, 2), _p(12, 3),
    }


def test_faster_momentum_keeps_all_nine_perturbations():
    track = build_oval_track()
    player = _player(position=_p(10, 2), previous=_p(8, 2), speed=2)

    moves = legal_moves(player, track)

    assert len(moves) == 9
    assert min(p.x for p in moves) == 11
    assert max(p.x for p in moves) == 13


def test_momentum_uses_last_displacement_not_facing():
    track = build_oval_track()
    # Facing N but last moved diagonally down-right
    player = _player(
        position=_p(3, 8), previous=_p(2, 6), speed=2, direction=Direction.N
    )

    moves = legal_moves(player, track)

    assert _p(4, 10) in moves  # same vector again
    assert _p(3, 7) not in moves


def test_moves_are_clipped_to_road_and_board():
    track = build_oval_track()
    player = _player(position=_p(18, 2), previous=_p(17, 2), speed=1)

    moves = legal_moves(player, track)

    assert moves == {_p(18, 1), _p(18, 3)}
    for pos in moves:
        assert track.is_on_track(pos)


def test_occupied_tiles_are_removed_but_crashed_cars_do_not_block():
    track = build_oval_track()
    player = _player(position=_p(10, 2), previous=_p(9, 2), speed=1)
    other = _player(player_id=2, position=_p(11, 2))
    wreck = _player(player_id=3, position=_p(12, 2), crashed=True)

    moves = legal_moves(player, track, [player, other, wreck])

    assert _p(11, 2) not in moves
    assert _p(12, 2) in moves


def test_crashed_and_finished_players_have_no_moves():
    track = build_oval_track()
    assert legal_moves(_player(crashed=True), track) == set()
    assert legal_moves(_player(is_finished=True), track) == set()


def test_compute_legal_moves_is_row_major():
    track = build_oval_track()
    player = _player(position=_p(10, 2), previous=_p(9, 2), speed=1)

    moves = compute_legal_moves(player, track)

    assert moves[0] == _p(10, 1)
    assert moves[-1] == _p(12, 3)
    assert moves == sorted(moves, key=lambda p: (p.y, p.x))


def test_momentum_candidates_ignore_the_road():
    player = _player(position=_p(1, 1), previous=_p(0, 1), speed=1)

    candidates = momentum_candidates(player, (20, 20))

    assert _p(1, 0) in candidates
    assert _p(1, 1) not in candidates


def test_reachable_cells_for_a_standing_car_is_the_neighbourhood():
    player = _player(position=_p(8, 2), speed=0)
    assert len(reachable_cells(player, (20, 20))) == 8
