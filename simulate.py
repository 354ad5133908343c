"""Headless score simulator.

Plays a batch of complete games with the autoplayer and prints aggregate
statistics, which is handy when tuning ``BingoRules`` values.

Run with: ``python simulate.py --games 1000 --seed 7``
"""
from __future__ import annotations

import argparse
import logging
import random
import statistics
import sys
from pathlib import Path

# Ensure src/ is on the import path when run from a checkout.
SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from slotbingo.ai.autoplay import AutoPlayer  # type: ignore
from slotbingo.components.rules import BingoRules  # type: ignore
from slotbingo.engine import BingoEngine  # type: ignore


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate slot bingo games")
    parser.add_argument("--games", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--max-spins", type=int, default=BingoRules().max_spins)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    if args.games < 1:
        parser.error("--games must be at least 1")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    rng = random.Random(args.seed)
    engine = BingoEngine(rng=rng, rules=BingoRules(max_spins=args.max_spins))
    player = AutoPlayer(engine, rng=rng)

    scores: list[int] = []
    lines: list[int] = []
    blackouts = 0
    for _ in range(args.games):
        summary = player.play()
        scores.append(summary.score)
        lines.append(summary.completed_lines)
        blackouts += int(summary.blackout)

    print(f"games:        {args.games}")
    print(f"mean score:   {statistics.fmean(scores):.1f}")
    print(f"median score: {statistics.median(scores)}")
    print(f"best score:   {max(scores)}")
    print(f"mean lines:   {statistics.fmean(lines):.2f}")
    print(f"blackouts:    {blackouts}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
