import argparse
import logging
from typing import List, Optional, Sequence

from .cards import cards_to_labels, parse_hand, parse_label
from .equity import InvalidInput, compute_equity
from .models import EquityConfig

DEFAULT_HANDS = ["QhKh", "2s2h"]


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Exhaustive Texas Hold'em equity calculator")
    parser.add_argument(
        "hands",
        nargs="*",
        default=DEFAULT_HANDS,
        help="Starting hands as four characters each, e.g. QhKh 2s2h",
    )
    parser.add_argument("--dead", nargs="*", default=[], help="Cards removed from the deck, e.g. As 7d")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes for board enumeration")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level)

    try:
        hands = [parse_hand(text) for text in args.hands]
        dead = [parse_label(label) for label in args.dead]
        results = compute_equity(hands, dead, EquityConfig(workers=max(1, args.workers)))
    except InvalidInput as exc:
        parser.error(str(exc))
    except ValueError as exc:
        parser.error(f"Bad card: {exc}")

    lines: List[str] = []
    for hand, result in zip(hands, results):
        lines.append(" ".join(cards_to_labels(hand)))
        lines.append(f"Win: {result.win_percentage:.2f}")
        lines.append(f"Lose: {result.loss_percentage:.2f}")
        lines.append(f"Tie: {result.tie_percentage:.2f}")
        lines.append(f"Win: {result.win_count} Lose: {result.loss_count} Tie: {result.tie_count}")
        lines.append("")
    lines.append(f"Total: {results[0].count}")
    print("\n".join(lines))


if __name__ == "__main__":
    main()
