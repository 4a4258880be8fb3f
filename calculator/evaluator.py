from __future__ import annotations

from typing import List, Optional, Sequence

from .cards import Card, Rank
from .models import HandEvaluation

ACE_BIT = Rank.ACE.bit
STRAIGHT_MASK = 0b11111
# Descending so the first hit is the highest straight.
RANKS_DESCENDING = tuple(reversed(Rank))


def check_for_straight(rank_bitset: int) -> Optional[Rank]:
    """Return the high card of the best straight in ``rank_bitset``, if any."""
    # The ace also plays low: mirror it into bit 1, just under the two.
    if rank_bitset & ACE_BIT:
        rank_bitset |= 0b10

    for shift in range(10, 0, -1):
        if (rank_bitset >> shift) & STRAIGHT_MASK == STRAIGHT_MASK:
            return Rank(shift + 4)
    return None


def highest_rank(rank_bitset: int) -> Rank:
    return Rank(rank_bitset.bit_length() - 1)


def keep_highest(rank_bitset: int, count: int) -> int:
    """Clear the lowest set bits until only ``count`` ranks remain."""
    for _ in range(rank_bitset.bit_count() - count):
        rank_bitset &= rank_bitset - 1
    return rank_bitset


def _find_count(count_by_rank: List[int], wanted: int) -> Optional[Rank]:
    for rank in RANKS_DESCENDING:
        if count_by_rank[rank] == wanted:
            return rank
    return None


def evaluate_hand(cards: Sequence[Card]) -> HandEvaluation:
    """Evaluate the best 5-card hand that can be made from 7 cards."""
    if len(cards) != 7:
        raise ValueError(f"Expected 7 cards, got {len(cards)}")

    count_by_suit = [0, 0, 0, 0]
    count_by_rank = [0] * 15
    rank_bitset = 0
    rank_bitset_by_suit = [0, 0, 0, 0]

    for card in cards:
        suit, rank = card.value >> 4, card.value & 0xF
        count_by_suit[suit] += 1
        count_by_rank[rank] += 1
        rank_bitset |= 1 << rank
        rank_bitset_by_suit[suit] |= 1 << rank

    # Straight flush. Seven cards hold at most one.
    for suit_bitset in rank_bitset_by_suit:
        high_card = check_for_straight(suit_bitset)
        if high_card is not None:
            return HandEvaluation.straight_flush(high_card)

    quads = _find_count(count_by_rank, 4)
    if quads is not None:
        kicker = highest_rank(rank_bitset & ~quads.bit)
        return HandEvaluation.four_of_a_kind(quads, kicker)

    # A second set of trips counts as the pair.
    trips = _find_count(count_by_rank, 3)
    if trips is not None:
        for rank in RANKS_DESCENDING:
            if rank != trips and count_by_rank[rank] >= 2:
                return HandEvaluation.full_house(trips, rank)

    for suit, count in enumerate(count_by_suit):
        if count >= 5:
            return HandEvaluation.flush(keep_highest(rank_bitset_by_suit[suit], 5))

    high_card = check_for_straight(rank_bitset)
    if high_card is not None:
        return HandEvaluation.straight(high_card)

    if trips is not None:
        kickers = keep_highest(rank_bitset & ~trips.bit, 2)
        return HandEvaluation.three_of_a_kind(trips, kickers)

    high_pair = _find_count(count_by_rank, 2)
    if high_pair is not None:
        for rank in RANKS_DESCENDING:
            if rank < high_pair and count_by_rank[rank] == 2:
                kicker = highest_rank(rank_bitset & ~high_pair.bit & ~rank.bit)
                return HandEvaluation.two_pair(high_pair, rank, kicker)

        kickers = keep_highest(rank_bitset & ~high_pair.bit, 3)
        return HandEvaluation.pair(high_pair, kickers)

    return HandEvaluation.high_card(keep_highest(rank_bitset, 5))
