from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, NamedTuple, Tuple

from .cards import Rank


class HandKind(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


class HandEvaluation(NamedTuple):
    """Best 5-card hand out of 7, ordered by kind and then by ``values``.

    ``values`` holds three tiebreak bytes whose layout depends on ``kind``:
    plain rank codes for the named cards, and a rank bitset split into its
    high and low byte wherever a set of kickers has to be compared.
    Evaluations of different kinds never get as far as comparing ``values``.
    """

    kind: HandKind
    values: Tuple[int, int, int]

    @classmethod
    def straight_flush(cls, high_card: Rank) -> HandEvaluation:
        return cls(HandKind.STRAIGHT_FLUSH, (int(high_card), 0, 0))

    @classmethod
    def four_of_a_kind(cls, quads: Rank, kicker: Rank) -> HandEvaluation:
        return cls(HandKind.FOUR_OF_A_KIND, (int(quads), int(kicker), 0))

    @classmethod
    def full_house(cls, trips: Rank, pair: Rank) -> HandEvaluation:
        return cls(HandKind.FULL_HOUSE, (int(trips), int(pair), 0))

    @classmethod
    def flush(cls, cards: int) -> HandEvaluation:
        return cls(HandKind.FLUSH, (cards >> 8, cards & 0xFF, 0))

    @classmethod
    def straight(cls, high_card: Rank) -> HandEvaluation:
        return cls(HandKind.STRAIGHT, (int(high_card), 0, 0))

    @classmethod
    def three_of_a_kind(cls, trips: Rank, kickers: int) -> HandEvaluation:
        return cls(HandKind.THREE_OF_A_KIND, (int(trips), kickers >> 8, kickers & 0xFF))

    @classmethod
    def two_pair(cls, high_pair: Rank, low_pair: Rank, kicker: Rank) -> HandEvaluation:
        return cls(HandKind.TWO_PAIR, (int(high_pair), int(low_pair), int(kicker)))

    @classmethod
    def pair(cls, pair: Rank, kickers: int) -> HandEvaluation:
        return cls(HandKind.PAIR, (int(pair), kickers >> 8, kickers & 0xFF))

    @classmethod
    def high_card(cls, cards: int) -> HandEvaluation:
        return cls(HandKind.HIGH_CARD, (cards >> 8, cards & 0xFF, 0))


@dataclass(frozen=True)
class EquityResult:
    win_count: int
    loss_count: int
    tie_count: int
    count: int

    def _percentage(self, part: int) -> float:
        if self.count == 0:
            return 0.0
        return part / self.count * 100

    @property
    def win_percentage(self) -> float:
        return self._percentage(self.win_count)

    @property
    def loss_percentage(self) -> float:
        return self._percentage(self.loss_count)

    @property
    def tie_percentage(self) -> float:
        return self._percentage(self.tie_count)

    def to_dict(self) -> Dict[str, object]:
        return {
            "win_count": self.win_count,
            "loss_count": self.loss_count,
            "tie_count": self.tie_count,
            "count": self.count,
            "win_pct": round(self.win_percentage, 2),
            "loss_pct": round(self.loss_percentage, 2),
            "tie_pct": round(self.tie_percentage, 2),
        }


# Two-hand name kept for callers that only ever compare a pair of hands.
ComputeResult = EquityResult


@dataclass
class EquityConfig:
    workers: int = 1
