from __future__ import annotations

import itertools
from typing import Iterable, List, Sequence, Tuple

from calculator.cards import Card, full_deck, parse_cards


def cards(*labels: str) -> List[Card]:
    return parse_cards(labels)


def dead_except(keep: Iterable[Card], *hands: Sequence[Card]) -> List[Card]:
    """Every card outside ``keep`` and the hole cards, so the board is forced."""
    used = set(keep)
    for hand in hands:
        used.update(hand)
    return [card for card in full_deck() if card not in used]


def reference_rank(seven: Sequence[Card]) -> Tuple[int, List[int]]:
    """Slow but obvious best-of-21 ranking used to cross-check the evaluator."""
    return max(_rank_five(combo) for combo in itertools.combinations(seven, 5))


def _rank_five(five: Sequence[Card]) -> Tuple[int, List[int]]:
    values = sorted((int(card.rank) for card in five), reverse=True)
    is_flush = len({card.suit for card in five}) == 1

    straight_high = None
    if len(set(values)) == 5:
        if values[0] - values[4] == 4:
            straight_high = values[0]
        elif values == [14, 5, 4, 3, 2]:
            straight_high = 5

    counts = {value: values.count(value) for value in values}
    grouped = sorted(counts, key=lambda value: (counts[value], value), reverse=True)
    shape = sorted(counts.values(), reverse=True)

    if straight_high and is_flush:
        return 8, [straight_high]
    if shape[0] == 4:
        return 7, grouped
    if shape == [3, 2]:
        return 6, grouped
    if is_flush:
        return 5, values
    if straight_high:
        return 4, [straight_high]
    if shape[0] == 3:
        return 3, grouped
    if shape[:2] == [2, 2]:
        return 2, grouped
    if shape[0] == 2:
        return 1, grouped
    return 0, values
