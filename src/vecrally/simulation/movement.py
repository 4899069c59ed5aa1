"""Momentum rule engine: which cells a car may reach this turn."""

import logging
from collections.abc import Iterable

from vecrally.models import Player, Position, Track
from vecrally.models.geometry import adjacent_positions, unit_vector, within_bounds

logger = logging.getLogger(__name__)


def is_drivable(position: Position, track: Track) -> bool:
    """In bounds and on a road tile."""
    return within_bounds(position, track.size) and track.is_on_track(position)


def occupied_positions(player: Player, players: Iterable[Player] | None) -> set[Position]:
    """Cells held by other cars that still block the road.

    Crashed cars are cleared from the road and never block.
    """
    if not players:
        return set()
    return {
        other.position
        for other in players
        if other.id != player.id and not other.crashed
    }


def momentum_candidates(player: Player, size: tuple[int, int]) -> set[Position]:
    """Every in-bounds cell the momentum rule allows, road or not.

    The new displacement must be within one cell per axis of the last one and
    may not be (0, 0).
    """
    dx, dy = player.momentum
    candidates = set()
    for sdx in (-1, 0, 1):
        for sdy in (-1, 0, 1):
            new_dx, new_dy = dx + sdx, dy + sdy
            if new_dx == 0 and new_dy == 0:
                continue
            candidate = player.position.offset(new_dx, new_dy)
            if within_bounds(candidate, size):
                candidates.add(candidate)
    return candidates


def _standing_start_moves(player: Player, track: Track) -> set[Position]:
    dx, dy = unit_vector(player.direction)
    forward = player.position.offset(dx, dy)
    if is_drivable(forward, track):
        return {forward}
    # Facing off the road: the car may pull away in any on-track direction
    return {
        pos for pos in adjacent_positions(player.position, track.size)
        if track.is_on_track(pos)
    }


def is_standing(player: Player) -> bool:
    """Stationary cars use the standing-start rule."""
    return player.speed == 0 or player.momentum == (0, 0)


def legal_moves(
    player: Player,
    track: Track,
    other_players: Iterable[Player] | None = None,
    reserved: Iterable[Position] = (),
) -> set[Position]:
    """Cells the player may move to this turn.

    Args:
        player: Car to move
        track: Active track
        other_players: Optional roster; cells held by other non-crashed cars
            are removed. The player itself may be included and is ignored.
        reserved: Extra cells to treat as occupied

    Returns:
        Set of legal destinations (empty for crashed or finished cars)
    """
    if not player.is_active:
        return set()

    blocked = occupied_positions(player, other_players) | set(reserved)
    if is_standing(player):
        moves = _standing_start_moves(player, track)
    else:
        moves = {
            pos for pos in momentum_candidates(player, track.size)
            if track.is_on_track(pos)
        }
    moves -= blocked

    logger.debug(
        "Player %d at %s speed %d momentum %s: %d legal moves",
        player.id, player.position, player.speed, player.momentum, len(moves),
    )
    return moves


def compute_legal_moves(
    player: Player,
    track: Track,
    all_players: Iterable[Player] | None = None,
    reserved: Iterable[Position] = (),
) -> list[Position]:
    """Legal moves in a stable row-major order, for highlighting in a UI."""
    moves = legal_moves(player, track, all_players, reserved)
    return sorted(moves, key=lambda p: (p.y, p.x))


def reachable_cells(player: Player, size: tuple[int, int]) -> set[Position]:
    """Cells a car can physically reach this turn, ignoring the road.

    Off-road cells in this set are accepted by non-strict resolution and end
    in a spin or a crash.
    """
    if is_standing(player):
        return adjacent_positions(player.position, size)
    return momentum_candidates(player, size)
