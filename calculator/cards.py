from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

RANK_LABELS = "23456789TJQKA"
SUIT_LABELS = "hdcs"


class Suit(IntEnum):
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def label(self) -> str:
        return SUIT_LABELS[self]


class Rank(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def bit(self) -> int:
        return 1 << self

    @property
    def label(self) -> str:
        return RANK_LABELS[self - 2]


@dataclass(frozen=True, repr=False)
class Card:
    """A playing card packed into one small integer: ``suit << 4 | rank``."""

    value: int

    def __post_init__(self) -> None:
        rank = self.value & 0xF
        suit = self.value >> 4
        if not Rank.TWO <= rank <= Rank.ACE:
            raise ValueError(f"Invalid rank: {rank}")
        if not Suit.HEARTS <= suit <= Suit.SPADES:
            raise ValueError(f"Invalid suit: {suit}")

    @classmethod
    def new(cls, suit: Suit, rank: Rank) -> Card:
        return cls((int(suit) << 4) | int(rank))

    @property
    def suit(self) -> Suit:
        return Suit(self.value >> 4)

    @property
    def rank(self) -> Rank:
        return Rank(self.value & 0xF)

    @property
    def label(self) -> str:
        return f"{self.rank.label}{self.suit.label}"

    def __repr__(self) -> str:
        return f"Card(suit={self.suit.name.title()}, rank={self.rank.name.title()})"


def full_deck() -> List[Card]:
    """All 52 cards in a fixed order: suit by suit, Two through Ace."""
    return [Card.new(suit, rank) for suit in Suit for rank in Rank]


def build_deck(seed: Optional[int] = None) -> List[Card]:
    rng = random.Random(seed)
    deck = full_deck()
    rng.shuffle(deck)
    return deck


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    rank_char, suit_char = label[0].upper(), label[1].lower()
    if rank_char not in RANK_LABELS:
        raise ValueError(f"Invalid rank: {label[0]}")
    if suit_char not in SUIT_LABELS:
        raise ValueError(f"Invalid suit: {label[1]}")
    return Card.new(Suit(SUIT_LABELS.index(suit_char)), Rank(RANK_LABELS.index(rank_char) + 2))


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]


def parse_hand(text: str) -> Tuple[Card, Card]:
    """Parse two hole cards written back to back, e.g. ``"QhKh"``."""
    compact = text.replace(",", "").replace(" ", "")
    if len(compact) != 4:
        raise ValueError(f"Invalid hand: {text}")
    return parse_label(compact[:2]), parse_label(compact[2:])
