#!/usr/bin/env python3
from __future__ import annotations

import argparse
import itertools
import logging
import time
from collections import Counter
from typing import List, Optional, Sequence, Tuple

from calculator.cards import Card, build_deck, full_deck
from calculator.evaluator import evaluate_hand
from calculator.models import HandKind

LOGGER = logging.getLogger("bench_evaluator")


def collect_hands(count: int, seed: Optional[int] = None) -> List[Tuple[Card, ...]]:
    """First ``count`` 7-card combinations of the deck (fixed order unless seeded)."""
    deck = full_deck() if seed is None else build_deck(seed)
    return list(itertools.islice(itertools.combinations(deck, 7), count))


def run_benchmark(hands: Sequence[Tuple[Card, ...]]) -> Tuple[float, Counter]:
    kinds: Counter = Counter()
    started = time.perf_counter()
    for hand in hands:
        kinds[evaluate_hand(hand).kind] += 1
    return time.perf_counter() - started, kinds


def main() -> None:
    parser = argparse.ArgumentParser(description="Measure 7-card evaluator throughput")
    parser.add_argument("--hands", type=int, default=1_000_000)
    parser.add_argument("--seed", type=int, default=None, help="Shuffle the deck before drawing combinations")
    args = parser.parse_args()

    hands = collect_hands(args.hands, args.seed)
    LOGGER.info("Evaluating %s hands", len(hands))
    elapsed, kinds = run_benchmark(hands)

    LOGGER.info("Elapsed %.3fs (%.0f hands/s)", elapsed, len(hands) / elapsed if elapsed else 0.0)
    for kind in sorted(HandKind, reverse=True):
        LOGGER.info("%-16s %s", kind.name, kinds.get(kind, 0))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    main()
