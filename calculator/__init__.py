"""Seven-card hand evaluation and exhaustive equity enumeration."""

from .cards import Card, Rank, Suit, build_deck, full_deck, parse_cards, parse_hand, parse_label
from .equity import InvalidInput, compute_equity, compute_result, working_deck
from .evaluator import evaluate_hand
from .models import ComputeResult, EquityConfig, EquityResult, HandEvaluation, HandKind

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "build_deck",
    "full_deck",
    "parse_cards",
    "parse_hand",
    "parse_label",
    "InvalidInput",
    "compute_equity",
    "compute_result",
    "working_deck",
    "evaluate_hand",
    "ComputeResult",
    "EquityConfig",
    "EquityResult",
    "HandEvaluation",
    "HandKind",
]
