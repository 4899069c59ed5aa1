"""Move resolution: turns a chosen destination into a new player state."""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from vecrally.config import RaceConfig, SpinPolicy
from vecrally.exceptions import InvalidMoveError
from vecrally.models import Direction, Player, Position, Track
from vecrally.models.geometry import (
    CARDINAL_DIRECTIONS,
    adjacent_positions,
    chebyshev_distance,
    direction_between,
    reverse_direction,
    segment_crosses_line,
    unit_vector,
    within_bounds,
)
from vecrally.simulation.events import EventType, MoveLogEntry, MoveOutcome, RaceEvent
from vecrally.simulation.movement import (
    legal_moves,
    occupied_positions,
    reachable_cells,
)

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    """Outcome of resolving one player's move."""

    player: Player
    events: list[RaceEvent] = field(default_factory=list)
    log_entry: MoveLogEntry | None = None

    @property
    def outcome(self) -> MoveOutcome:
        return self.log_entry.outcome if self.log_entry else MoveOutcome.NONE


@dataclass
class MoveApplication:
    """Roster after a move, plus what happened."""

    updated_players: list[Player]
    events: list[RaceEvent]
    log_entry: MoveLogEntry | None = None


def next_speed(old_speed: int, distance: int) -> int:
    """Accelerate / hold / snap speed rule.

    Moving one cell further than the current speed accelerates by one,
    moving exactly the current speed holds it, anything else snaps the speed
    to the distance covered.
    """
    if distance == old_speed + 1:
        return old_speed + 1
    if distance == old_speed:
        return old_speed
    return distance


def check_slipstream(
    position: Position,
    direction: Direction,
    other_players: Iterable[Player],
    max_distance: float = 2.0,
) -> Player | None:
    """Find a car close ahead of ``position`` relative to ``direction``.

    "Ahead" is an 8-way cone: the relative offset must have a positive
    component along the heading and at most one cell of lateral offset. For
    N that means a negative relative y and |relative x| <= 1.

    Returns:
        The car providing the slipstream, or None
    """
    ux, uy = unit_vector(direction)
    for other in other_players:
        if other.crashed:
            continue
        rx = other.position.x - position.x
        ry = other.position.y - position.y
        if (rx, ry) == (0, 0):
            continue
        if math.hypot(rx, ry) > max_distance:
            continue
        along = rx * ux + ry * uy
        lateral = abs(rx * uy - ry * ux)
        if along > 0 and lateral <= 1:
            return other
    return None


class MoveResolver:
    """Applies the race rules to a single chosen move."""

    def __init__(
        self,
        config: RaceConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        """Initialize the resolver.

        Args:
            config: Rule options (defaults to ``RaceConfig()``)
            rng: Random number generator used for spin facing
        """
        self.config = config if config is not None else RaceConfig()
        if rng is None:
            rng = np.random.default_rng(self.config.seed)
        self.rng = rng

    def resolve_move(
        self,
        player: Player,
        destination: Position,
        track: Track,
        other_players: Sequence[Player] = (),
        round_number: int = 0,
    ) -> MoveResult:
        """Resolve a move and return the new player state.

        The input player is never mutated; the result holds an updated copy.

        Args:
            player: Moving car
            destination: Chosen cell
            track: Active track
            other_players: Rest of the roster (the mover may be included)
            round_number: Current round, for events and the move log

        Returns:
            MoveResult with the updated player, events and a log entry

        Raises:
            InvalidMoveError: If the player cannot move or the destination
                breaks the momentum rule (or, in strict mode, is not legal)
        """
        others = [p for p in other_players if p.id != player.id]
        self._validate(player, destination, track, others)

        start = player.position
        old_speed = player.speed
        momentum = (destination.x - start.x, destination.y - start.y)
        new_direction = direction_between(start, destination)
        new_speed = next_speed(old_speed, chebyshev_distance(start, destination))

        moved = player.model_copy(deep=True)
        moved.record_history(start)
        moved.previous_position = start
        moved.position = destination
        moved.direction = new_direction
        moved.speed = new_speed
        moved.total_checkpoints = track.total_checkpoints

        events: list[RaceEvent] = []
        blocked = occupied_positions(player, others)

        if destination in blocked:
            # First mover keeps the cell; the loser is wrecked where it stood
            moved.position = start
            self._crash(moved, events, round_number, collided=True)
        elif self._has_continuation(moved, track, others):
            source = check_slipstream(
                destination, new_direction, others, self.config.slipstream_range
            )
            if source is not None and self.config.slipstream_bonus:
                moved.speed += self.config.slipstream_bonus
                events.append(RaceEvent(
                    event_type=EventType.SLIPSTREAM,
                    player_id=player.id,
                    round=round_number,
                    description=f"Player {player.id} slipstreams player {source.id}",
                ))
        elif self._has_escape(destination, track, blocked):
            self._spin(moved, events, round_number)
        else:
            self._crash(moved, events, round_number)

        if not moved.crashed:
            self._check_checkpoints(moved, start, destination, track, events, round_number)
            self._check_finish(moved, start, destination, track, events, round_number)

        entry = MoveLogEntry(
            player_id=player.id,
            player_color=player.color.value,
            from_position=start,
            to_position=destination,
            round=round_number,
            speed_change=moved.speed - old_speed,
            momentum=momentum,
            outcome=self._outcome(moved, events),
        )
        logger.info(
            "Round %d: player %d %s -> %s speed %d->%d (%s)",
            round_number, player.id, start, destination,
            old_speed, moved.speed, entry.outcome.value,
        )
        return MoveResult(player=moved, events=events, log_entry=entry)

    def _validate(
        self,
        player: Player,
        destination: Position,
        track: Track,
        others: list[Player],
    ) -> None:
        if player.crashed:
            raise InvalidMoveError(player.id, destination, "player has crashed")
        if player.is_finished:
            raise InvalidMoveError(player.id, destination, "player has already finished")
        if not within_bounds(destination, track.size):
            raise InvalidMoveError(player.id, destination, "outside the board")
        if destination not in reachable_cells(player, track.size):
            raise InvalidMoveError(player.id, destination, "outside the momentum range")
        if self.config.strict_moves and destination not in legal_moves(player, track, others):
            logger.warning("Rejected move for player %d to %s", player.id, destination)
            raise InvalidMoveError(player.id, destination, "not a legal move")

    @staticmethod
    def _has_continuation(moved: Player, track: Track, others: list[Player]) -> bool:
        """Whether the car, as it now stands, has any legal move next turn."""
        if not track.is_on_track(moved.position):
            return False
        return bool(legal_moves(moved, track, others))

    @staticmethod
    def _has_escape(position: Position, track: Track, blocked: set[Position]) -> bool:
        """An open road cell next to ``position`` the car can spin onto."""
        return any(
            track.is_on_track(pos) and pos not in blocked
            for pos in adjacent_positions(position, track.size)
        )

    def _spin_direction(self, travel: Direction) -> Direction:
        if self.config.spin_policy == SpinPolicy.REVERSE:
            return reverse_direction(travel)
        return CARDINAL_DIRECTIONS[int(self.rng.integers(len(CARDINAL_DIRECTIONS)))]

    def _spin(self, moved: Player, events: list[RaceEvent], round_number: int) -> None:
        moved.direction = self._spin_direction(moved.direction)
        moved.speed = 0
        moved.previous_position = moved.position
        events.append(RaceEvent(
            event_type=EventType.SPIN,
            player_id=moved.id,
            round=round_number,
            description=f"Player {moved.id} spun out, now facing {moved.direction.value}",
        ))

    @staticmethod
    def _crash(
        moved: Player,
        events: list[RaceEvent],
        round_number: int,
        collided: bool = False,
    ) -> None:
        moved.crashed = True
        moved.speed = 0
        if collided:
            events.append(RaceEvent(
                event_type=EventType.COLLISION,
                player_id=moved.id,
                round=round_number,
                description=f"Player {moved.id} hit a car at {moved.position}",
            ))
        events.append(RaceEvent(
            event_type=EventType.CRASH,
            player_id=moved.id,
            round=round_number,
            description=f"Player {moved.id} crashed out of the race",
        ))

    @staticmethod
    def _check_checkpoints(
        moved: Player,
        start: Position,
        end: Position,
        track: Track,
        events: list[RaceEvent],
        round_number: int,
    ) -> None:
        for index, line in enumerate(track.checkpoints):
            if len(moved.checkpoints_passed) >= track.total_checkpoints:
                return
            if index in moved.checkpoints_passed:
                continue
            if not segment_crosses_line(start, end, line):
                continue
            moved.checkpoints_passed.add(index)
            events.append(RaceEvent(
                event_type=EventType.CHECKPOINT_PASSED,
                player_id=moved.id,
                round=round_number,
                checkpoint_index=index,
                description=(
                    f"Player {moved.id}: checkpoint "
                    f"{len(moved.checkpoints_passed)}/{track.total_checkpoints}"
                ),
            ))

    @staticmethod
    def _check_finish(
        moved: Player,
        start: Position,
        end: Position,
        track: Track,
        events: list[RaceEvent],
        round_number: int,
    ) -> None:
        if len(moved.checkpoints_passed) != track.total_checkpoints:
            return
        if not segment_crosses_line(start, end, track.finish_line):
            return
        moved.is_finished = True
        events.append(RaceEvent(
            event_type=EventType.WIN,
            player_id=moved.id,
            round=round_number,
            description=f"Player {moved.id} has won the race!",
        ))

    @staticmethod
    def _outcome(moved: Player, events: list[RaceEvent]) -> MoveOutcome:
        kinds = {e.event_type for e in events}
        if moved.crashed:
            return MoveOutcome.CRASH
        if EventType.WIN in kinds:
            return MoveOutcome.WIN
        if EventType.SPIN in kinds:
            return MoveOutcome.SPIN
        if EventType.CHECKPOINT_PASSED in kinds:
            return MoveOutcome.CHECKPOINT
        return MoveOutcome.NONE


def apply_move(
    player_index: int,
    destination: Position,
    players: Sequence[Player],
    track: Track,
    resolver: MoveResolver | None = None,
    round_number: int = 0,
) -> MoveApplication:
    """Resolve ``players[player_index]``'s move and return the new roster.

    The input roster is left untouched.
    """
    resolver = resolver if resolver is not None else MoveResolver()
    result = resolver.resolve_move(
        players[player_index], destination, track, players, round_number
    )
    updated = list(players)
    updated[player_index] = result.player
    return MoveApplication(
        updated_players=updated,
        events=result.events,
        log_entry=result.log_entry,
    )
