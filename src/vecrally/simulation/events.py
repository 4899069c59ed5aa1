"""Race events: checkpoints, slipstreams, spins, crashes and wins."""

from dataclasses import dataclass, field
from enum import Enum

from vecrally.models import Position


class EventType(str, Enum):
    """Types of race events."""

    CHECKPOINT_PASSED = "checkpoint_passed"
    SLIPSTREAM = "slipstream"
    SPIN = "spin"
    CRASH = "crash"
    COLLISION = "collision"
    WIN = "win"


class MoveOutcome(str, Enum):
    """Headline result of a single move, for the move log."""

    NONE = "none"
    SKIP = "skip"
    SPIN = "spin"
    CRASH = "crash"
    CHECKPOINT = "checkpoint"
    WIN = "win"


@dataclass
class RaceEvent:
    """Represents a race event."""

    event_type: EventType
    player_id: int
    round: int = 0
    checkpoint_index: int | None = None
    description: str = ""


@dataclass
class MoveLogEntry:
    """One committed (or skipped) move."""

    player_id: int
    player_color: str
    from_position: Position
    to_position: Position
    round: int
    speed_change: int
    momentum: tuple[int, int] = (0, 0)
    outcome: MoveOutcome = MoveOutcome.NONE


@dataclass
class EventLog:
    """Accumulates events and move log entries over a race."""

    events: list[RaceEvent] = field(default_factory=list)
    moves: list[MoveLogEntry] = field(default_factory=list)

    def reset(self) -> None:
        """Reset for a new race."""
        self.events = []
        self.moves = []

    def record(self, events: list[RaceEvent], entry: MoveLogEntry | None = None) -> None:
        self.events.extend(events)
        if entry is not None:
            self.moves.append(entry)

    def events_for(self, player_id: int) -> list[RaceEvent]:
        return [e for e in self.events if e.player_id == player_id]

    def recent_moves(self, max_entries: int = 10) -> list[MoveLogEntry]:
        """Most recent moves first."""
        return list(reversed(self.moves))[:max_entries]
