"""Race session: roster, turn order, rounds and programmed moves."""

import logging
from dataclasses import dataclass

import numpy as np

from vecrally.config import GameMode, RaceConfig
from vecrally.data import TrackKind, get_track
from vecrally.exceptions import InvalidMoveError
from vecrally.models import PLAYER_PALETTE, Player, Position, Track
from vecrally.simulation.events import EventLog, EventType, MoveLogEntry, MoveOutcome, RaceEvent
from vecrally.simulation.movement import compute_legal_moves, reachable_cells
from vecrally.simulation.resolution import MoveResolver

logger = logging.getLogger(__name__)


@dataclass
class RaceSetup:
    """Track and starting roster for a new race."""

    track: Track
    players: list[Player]


def create_players(track: Track, player_count: int) -> list[Player]:
    """Place ``player_count`` cars on the track's start grid.

    Raises:
        ValueError: If the palette or the start grid cannot seat that many
    """
    max_players = min(len(PLAYER_PALETTE), len(track.start_positions))
    if not 1 <= player_count <= max_players:
        raise ValueError(
            f"Track {track.id!r} seats 1 to {max_players} players, got {player_count}"
        )

    players = []
    for slot in range(player_count):
        pose = track.start_positions[slot]
        players.append(Player(
            id=slot + 1,
            color=PLAYER_PALETTE[slot],
            position=pose.position,
            direction=pose.direction,
            total_checkpoints=track.total_checkpoints,
        ))
    return players


def initialize_race(track_kind: TrackKind | str, player_count: int) -> RaceSetup:
    """Build a catalog track and its starting roster."""
    track = get_track(track_kind)
    return RaceSetup(track=track, players=create_players(track, player_count))


class RaceSession:
    """Owns the roster and drives turns for one race."""

    def __init__(
        self,
        track: Track,
        players: list[Player],
        config: RaceConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        """Initialize the session.

        Args:
            track: Active track
            players: Starting roster, in player-id order
            config: Rule options
            rng: Random number generator for spin facing
        """
        self.config = config if config is not None else RaceConfig()
        self.resolver = MoveResolver(config=self.config, rng=rng)
        self.track = track
        self.players = list(players)
        self.current_player_index = 0
        self.round = 1
        self.programmed_moves: dict[int, Position] = {}
        self.log = EventLog()
        self.winner: Player | None = None
        self._skip_to_active(from_index=0)

    @classmethod
    def start(
        cls,
        track_kind: TrackKind | str = TrackKind.OVAL,
        player_count: int = 2,
        config: RaceConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> "RaceSession":
        """Create a session on a catalog track."""
        setup = initialize_race(track_kind, player_count)
        logger.info("Starting %d-player race on %s", player_count, setup.track.id)
        return cls(setup.track, setup.players, config=config, rng=rng)

    @property
    def mode(self) -> GameMode:
        return self.config.mode

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def active_players(self) -> list[Player]:
        return [p for p in self.players if p.is_active]

    @property
    def is_over(self) -> bool:
        """A winner exists or nobody is left racing."""
        return self.winner is not None or not self.active_players

    def legal_moves(self) -> list[Position]:
        """Legal destinations for the player whose turn it is.

        In programming mode, cells already claimed by an earlier player's
        queued move are not offered.
        """
        if self.is_over:
            return []
        claimed = {
            pos for index, pos in self.programmed_moves.items()
            if index != self.current_player_index
        }
        return compute_legal_moves(
            self.current_player, self.track, self.players, reserved=claimed
        )

    def handle_move(self, destination: Position) -> list[RaceEvent]:
        """Take the current player's decision.

        In turn-based mode the move resolves immediately. In programming mode
        it is queued; the queue resolves once every active player has a move.

        Returns:
            Events produced by any moves resolved during this call

        Raises:
            InvalidMoveError: If the race is over or the move is rejected
        """
        player = self.current_player
        if self.is_over:
            raise InvalidMoveError(player.id, destination, "the race is over")

        if self.mode == GameMode.TURN_BASED:
            events = self._resolve(self.current_player_index, destination)
            self._advance_turn()
            return events

        if self.config.strict_moves:
            allowed = set(self.legal_moves())
        else:
            allowed = reachable_cells(player, self.track.size)
        if destination not in allowed:
            logger.warning("Rejected programmed move for player %d to %s", player.id, destination)
            raise InvalidMoveError(player.id, destination, "not a legal move")
        self.programmed_moves[self.current_player_index] = destination
        return self._advance_programming()

    def skip_turn(self) -> list[RaceEvent]:
        """Pass the current player's turn without moving."""
        if self.is_over:
            return []
        if self.mode == GameMode.PROGRAMMING:
            self.programmed_moves[self.current_player_index] = self.current_player.position
            return self._advance_programming()
        self._log_skip(self.current_player)
        self._advance_turn()
        return []

    def execute_programmed_moves(self) -> list[RaceEvent]:
        """Resolve every queued move in player-index order and start a new round.

        Moves queued behind a winning move are discarded.
        """
        events: list[RaceEvent] = []
        for index in sorted(self.programmed_moves):
            player = self.players[index]
            destination = self.programmed_moves[index]
            if not player.is_active:
                continue
            if destination == player.position:
                self._log_skip(player)
                continue
            events.extend(self._resolve(index, destination))
            if self.winner is not None:
                logger.info("Dropping remaining programmed moves after a win")
                break
        self.programmed_moves = {}
        self.round += 1
        self._skip_to_active(from_index=0)
        return events

    def reset(self) -> None:
        """Put every car back on the start grid."""
        self.players = create_players(self.track, len(self.players))
        self.current_player_index = 0
        self.round = 1
        self.programmed_moves = {}
        self.log.reset()
        self.winner = None

    def _resolve(self, index: int, destination: Position) -> list[RaceEvent]:
        result = self.resolver.resolve_move(
            self.players[index], destination, self.track, self.players, self.round
        )
        self.players[index] = result.player
        self.log.record(result.events, result.log_entry)
        if self.winner is None and any(e.event_type == EventType.WIN for e in result.events):
            self.winner = result.player
            logger.info("Player %d wins in round %d", result.player.id, self.round)
        return result.events

    def _log_skip(self, player: Player) -> None:
        self.log.record([], MoveLogEntry(
            player_id=player.id,
            player_color=player.color.value,
            from_position=player.position,
            to_position=player.position,
            round=self.round,
            speed_change=0,
            outcome=MoveOutcome.SKIP,
        ))

    def _advance_turn(self) -> None:
        """Move the pointer to the next active player, counting wraps as rounds."""
        count = len(self.players)
        index = self.current_player_index
        for _ in range(count):
            index = (index + 1) % count
            if index == 0:
                self.round += 1
            if self.players[index].is_active:
                self.current_player_index = index
                return

    def _advance_programming(self) -> list[RaceEvent]:
        for index in range(self.current_player_index + 1, len(self.players)):
            if self.players[index].is_active and index not in self.programmed_moves:
                self.current_player_index = index
                return []
        return self.execute_programmed_moves()

    def _skip_to_active(self, from_index: int) -> None:
        for index in range(from_index, len(self.players)):
            if self.players[index].is_active:
                self.current_player_index = index
                return
