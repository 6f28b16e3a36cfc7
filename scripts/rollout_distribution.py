from __future__ import annotations

import argparse
import os
import sys
from typing import Iterable

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from rollout.canary import is_in_rollout, rollout_threshold
from rollout.errors import InvalidInput


def synthetic_identifiers(count: int, *, prefix: str = "user-") -> Iterable[str]:
    for i in range(int(count)):
        yield f"{prefix}{i}"


def count_inside(identifiers: Iterable[str], fraction: float) -> tuple[int, int]:
    inside = 0
    total = 0
    for ident in identifiers:
        total += 1
        if is_in_rollout(ident, fraction):
            inside += 1
    return inside, total


def summarize(*, count: int, fractions: list[float], prefix: str = "user-") -> str:
    lines = []
    for f in fractions:
        inside, total = count_inside(synthetic_identifiers(count, prefix=prefix), f)
        share = (inside / total) * 100.0 if total else 0.0
        lines.append(f"fraction={f:g} inside={inside}/{total} share={share:.2f}%")
    return "\n".join(lines)


def main() -> None:
    ap = argparse.ArgumentParser(description="Report how a synthetic user population splits across rollout fractions.")
    ap.add_argument("--count", type=int, default=100_000, help="Number of synthetic identifiers.")
    ap.add_argument(
        "--fraction",
        type=float,
        action="append",
        default=None,
        help="Rollout fraction in [0, 1]; may be repeated. Defaults to 0.1, 0.3, 0.5.",
    )
    ap.add_argument("--prefix", type=str, default="user-", help="Identifier prefix.")
    args = ap.parse_args()

    if args.count < 1:
        ap.error("--count must be >= 1")
    fractions = args.fraction or [0.1, 0.3, 0.5]
    for f in fractions:
        try:
            rollout_threshold(f)
        except InvalidInput as e:
            ap.error(f"--fraction {f:g}: {e}")
    print(summarize(count=args.count, fractions=fractions, prefix=args.prefix))


if __name__ == "__main__":
    main()
