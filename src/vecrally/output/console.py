"""Console output formatting."""

from collections.abc import Iterable

from vecrally.models import Player, Position, Track
from vecrally.simulation.events import MoveLogEntry, MoveOutcome

ROAD = "."
OFF_TRACK = " "
CHECKPOINT = "c"
FINISH = "F"
HIGHLIGHT = "*"
CRASHED = "x"


class ConsoleOutput:
    """Formats race state for console display."""

    @staticmethod
    def render_board(
        track: Track,
        players: Iterable[Player] = (),
        highlights: Iterable[Position] = (),
    ) -> str:
        """Draw the board as text, one row per line.

        Cars are drawn as their id (``x`` once crashed), legal moves as ``*``,
        finish tiles as ``F`` and checkpoint tiles as ``c``.
        """
        width, height = track.size
        cells = [[OFF_TRACK] * width for _ in range(height)]
        for tile in track.track_tiles:
            cells[tile.y][tile.x] = ROAD
        for line in track.checkpoints:
            for tile in line:
                cells[tile.y][tile.x] = CHECKPOINT
        for tile in track.finish_line:
            cells[tile.y][tile.x] = FINISH
        for pos in highlights:
            cells[pos.y][pos.x] = HIGHLIGHT
        for player in players:
            glyph = CRASHED if player.crashed else str(player.id)
            cells[player.position.y][player.position.x] = glyph

        border = "+" + "-" * width + "+"
        rows = ["|" + "".join(row) + "|" for row in cells]
        return "\n".join([border, *rows, border])

    @staticmethod
    def print_board(
        track: Track,
        players: Iterable[Player] = (),
        highlights: Iterable[Position] = (),
    ) -> None:
        print(ConsoleOutput.render_board(track, players, highlights))

    @staticmethod
    def format_move(entry: MoveLogEntry) -> str:
        """One move log line, e.g. ``R3 P1 (red): (5,5)->(7,5) +1``."""
        if entry.speed_change > 0:
            change = f"+{entry.speed_change}"
        elif entry.speed_change < 0:
            change = f"{entry.speed_change}"
        else:
            change = "±0"
        tag = "" if entry.outcome == MoveOutcome.NONE else f" [{entry.outcome.value}]"
        return (
            f"R{entry.round} P{entry.player_id} ({entry.player_color}): "
            f"{entry.from_position}->{entry.to_position} {change}{tag}"
        )

    @staticmethod
    def print_move_log(entries: list[MoveLogEntry], max_entries: int = 10) -> None:
        """Print the most recent moves, newest first.

        Args:
            entries: Move log in chronological order
            max_entries: How many moves to show
        """
        print("\nMOVE LOG")
        print("-" * 40)
        recent = list(reversed(entries))[:max_entries]
        if not recent:
            print("No moves yet")
        for entry in recent:
            print(ConsoleOutput.format_move(entry))

    @staticmethod
    def print_standings(players: list[Player], round_number: int) -> None:
        """Print each car's status and checkpoint progress."""
        print("\n" + "=" * 50)
        print(f"STANDINGS - ROUND {round_number}")
        print("=" * 50)
        print(f"{'Car':<4} {'Colour':<8} {'Pos':<8} {'Speed':<6} {'CP':<6} {'Status':<10}")
        print("-" * 50)
        for player in players:
            if player.crashed:
                status = "CRASHED"
            elif player.is_finished:
                status = "FINISHED"
            else:
                status = ""
            progress = f"{len(player.checkpoints_passed)}/{player.total_checkpoints}"
            print(
                f"{player.id:<4} "
                f"{player.color.value:<8} "
                f"{str(player.position):<8} "
                f"{player.speed:<6} "
                f"{progress:<6} "
                f"{status:<10}"
            )
        print("=" * 50)
