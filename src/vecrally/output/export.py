"""Export race logs to CSV and JSON."""

import csv
import json
from pathlib import Path
from typing import Any

from vecrally.simulation.events import EventLog, MoveLogEntry, RaceEvent


class Exporter:
    """Exports race logs to various formats."""

    def __init__(self, output_dir: str | Path = "output"):
        """Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_move_log_csv(
        self,
        moves: list[MoveLogEntry],
        filename: str = "move_log.csv",
    ) -> Path:
        """Export the move log to CSV.

        Args:
            moves: Move log entries in chronological order
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                "round", "player_id", "color", "from_x", "from_y",
                "to_x", "to_y", "momentum_x", "momentum_y",
                "speed_change", "outcome",
            ])
            for entry in moves:
                writer.writerow([
                    entry.round,
                    entry.player_id,
                    entry.player_color,
                    entry.from_position.x,
                    entry.from_position.y,
                    entry.to_position.x,
                    entry.to_position.y,
                    entry.momentum[0],
                    entry.momentum[1],
                    entry.speed_change,
                    entry.outcome.value,
                ])

        return filepath

    def export_events_json(
        self,
        events: list[RaceEvent],
        filename: str = "events.json",
    ) -> Path:
        """Export race events to JSON.

        Args:
            events: Race events in chronological order
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        data: list[dict[str, Any]] = [
            {
                "type": event.event_type.value,
                "player_id": event.player_id,
                "round": event.round,
                "checkpoint_index": event.checkpoint_index,
                "description": event.description,
            }
            for event in events
        ]

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        return filepath

    def export_all(self, log: EventLog, prefix: str = "race") -> dict[str, Path]:
        """Export the move log and events.

        Args:
            log: Event log of a race
            prefix: Filename prefix

        Returns:
            Dictionary of format -> filepath
        """
        return {
            "moves_csv": self.export_move_log_csv(log.moves, f"{prefix}_moves.csv"),
            "events_json": self.export_events_json(log.events, f"{prefix}_events.json"),
        }
