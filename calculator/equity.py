from __future__ import annotations

import itertools
import logging
import math
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

from .cards import Card, cards_to_labels, full_deck
from .evaluator import evaluate_hand
from .models import ComputeResult, EquityConfig, EquityResult

LOGGER = logging.getLogger("poker_equity")

Hand = Sequence[Card]


class InvalidInput(ValueError):
    """Raised when hands or dead cards cannot come from a single deck."""


def _validate(hands: Sequence[Hand], dead_cards: Sequence[Card]) -> None:
    if len(hands) < 2:
        raise InvalidInput(f"At least 2 hands required, got {len(hands)}")
    for idx, hand in enumerate(hands):
        if len(hand) != 2:
            raise InvalidInput(f"Hand {idx + 1} must have exactly 2 cards, got {len(hand)}")

    seen = set()
    duplicates = []
    for card in itertools.chain(itertools.chain.from_iterable(hands), dead_cards):
        if card in seen:
            duplicates.append(card)
        seen.add(card)
    if duplicates:
        raise InvalidInput(f"Duplicate cards: {' '.join(cards_to_labels(duplicates))}")


def working_deck(hands: Sequence[Hand], dead_cards: Sequence[Card] = ()) -> List[Card]:
    """Cards still available for the board, in the fixed deck order."""
    _validate(hands, dead_cards)
    used = set(itertools.chain(itertools.chain.from_iterable(hands), dead_cards))
    return [card for card in full_deck() if card not in used]


def _tally_boards(
    hands: Sequence[Tuple[Card, Card]],
    deck: Sequence[Card],
    first_indices: Iterable[int],
) -> Tuple[List[int], List[int], int]:
    """Count wins and ties per hand over every board led by ``deck[i]``."""
    wins = [0] * len(hands)
    ties = [0] * len(hands)
    count = 0
    seats = range(len(hands))

    for first in first_indices:
        lead = deck[first]
        for rest in itertools.combinations(deck[first + 1 :], 4):
            board = (lead, *rest)
            evaluations = [evaluate_hand(board + hole) for hole in hands]
            best = max(evaluations)
            winners = [seat for seat in seats if evaluations[seat] == best]
            if len(winners) == 1:
                wins[winners[0]] += 1
            else:
                for seat in winners:
                    ties[seat] += 1
            count += 1
    return wins, ties, count


def _tally_partition(
    hands: Sequence[Tuple[Card, Card]], deck: Sequence[Card], first: int
) -> Tuple[List[int], List[int], int]:
    return _tally_boards(hands, deck, (first,))


def _merge_partitions(
    tallies: Iterable[Tuple[List[int], List[int], int]], wins: List[int], ties: List[int]
) -> int:
    """Sum partition tallies into ``wins`` and ``ties``; return the board count."""
    count = 0
    for first, (part_wins, part_ties, part_count) in enumerate(tallies):
        LOGGER.debug("Partition %s finished with %s boards", first, part_count)
        for seat, won in enumerate(part_wins):
            wins[seat] += won
            ties[seat] += part_ties[seat]
        count += part_count
    return count


def compute_equity(
    hands: Sequence[Hand],
    dead_cards: Sequence[Card] = (),
    config: Optional[EquityConfig] = None,
) -> List[EquityResult]:
    """Enumerate every 5-card board and tally wins, losses and ties per hand."""
    config = config or EquityConfig()
    deck = working_deck(hands, dead_cards)
    if len(deck) < 5:
        raise InvalidInput(f"Only {len(deck)} cards left for the board")

    holes = [tuple(hand) for hand in hands]
    boards = math.comb(len(deck), 5)
    LOGGER.info(
        "Enumerating %s boards for %s hands (%s cards in deck, %s workers)",
        boards,
        len(holes),
        len(deck),
        config.workers,
    )

    # Each partition fixes the first board card; the last four indices lead no board.
    partitions = range(len(deck) - 4)
    wins = [0] * len(holes)
    ties = [0] * len(holes)
    if config.workers > 1:
        with ProcessPoolExecutor(max_workers=config.workers) as executor:
            futures = [executor.submit(_tally_partition, holes, deck, first) for first in partitions]
            tallies = (future.result() for future in futures)
            count = _merge_partitions(tallies, wins, ties)
    else:
        tallies = (_tally_partition(holes, deck, first) for first in partitions)
        count = _merge_partitions(tallies, wins, ties)

    results = [
        EquityResult(
            win_count=wins[seat],
            loss_count=count - wins[seat] - ties[seat],
            tie_count=ties[seat],
            count=count,
        )
        for seat in range(len(holes))
    ]
    LOGGER.info("Finished %s boards", count)
    return results


def compute_result(
    hand1: Hand,
    hand2: Hand,
    dead_cards: Sequence[Card] = (),
    config: Optional[EquityConfig] = None,
) -> ComputeResult:
    """Equity of ``hand1`` against ``hand2``."""
    return compute_equity([hand1, hand2], dead_cards, config)[0]
