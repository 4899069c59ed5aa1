#!/usr/bin/env python3
"""Play a quick demo race with randomly driven cars.

Each car picks one of its legal moves at random, so most races end in a
string of spins and crashes. Useful for eyeballing the rules engine.

Usage:
    python examples/quick_race.py [--track oval] [--players 2] [--seed 7]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from vecrally import GameMode, RaceConfig, RaceSession, SpinPolicy, TrackKind
from vecrally.output import ConsoleOutput, Exporter


def main():
    parser = argparse.ArgumentParser(description="Run a demo vector rally race")
    parser.add_argument(
        "--track",
        choices=[k.value for k in TrackKind],
        default=TrackKind.OVAL.value,
        help="Track to race on (default: oval)",
    )
    parser.add_argument(
        "--players",
        "-p",
        type=int,
        default=2,
        help="Number of cars (default: 2)",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in GameMode],
        default=GameMode.TURN_BASED.value,
        help="Game mode (default: turn_based)",
    )
    parser.add_argument(
        "--spin-policy",
        choices=[s.value for s in SpinPolicy],
        default=SpinPolicy.RANDOM_CARDINAL.value,
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=60,
        help="Give up after this many rounds (default: 60)",
    )
    parser.add_argument("--seed", type=int, default=7, help="Random seed (default: 7)")
    parser.add_argument("--export", action="store_true", help="Export the race log")
    parser.add_argument("--output-dir", default="output", help="Export directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every move")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rng = np.random.default_rng(args.seed)
    config = RaceConfig(
        mode=GameMode(args.mode),
        spin_policy=SpinPolicy(args.spin_policy),
        seed=args.seed,
    )
    session = RaceSession.start(args.track, args.players, config=config)

    print(f"Track: {session.track.name} ({session.track.width}x{session.track.height})")
    print(f"Cars: {len(session.players)}  Mode: {session.mode.value}")
    ConsoleOutput.print_board(session.track, session.players)

    while not session.is_over and session.round <= args.rounds:
        moves = session.legal_moves()
        if not moves:
            session.skip_turn()
            continue
        choice = moves[int(rng.integers(len(moves)))]
        for event in session.handle_move(choice):
            print(f"  R{event.round}: {event.description}")

    ConsoleOutput.print_board(session.track, session.players)
    ConsoleOutput.print_move_log(session.log.moves)
    ConsoleOutput.print_standings(session.players, session.round)

    if session.winner is not None:
        print(f"\nWinner: player {session.winner.id} ({session.winner.color.value})")
    else:
        print("\nNo winner")

    if args.export:
        exporter = Exporter(output_dir=args.output_dir)
        files = exporter.export_all(session.log, prefix=f"{session.track.id}_{args.seed}")
        for fmt, path in files.items():
            print(f"  {fmt}: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
