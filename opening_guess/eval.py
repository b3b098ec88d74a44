"""
opening_guess/eval.py

Score candidate opening guesses by how well they split the 1296 codes.

Metrics per guess:
- worst_case: size of the largest bucket (lower is better; Knuth's criterion)
- knuth_score: number of codes the guess is sure to eliminate
- exp_remaining: expected remaining candidates after the first feedback
- entropy: information gain (higher is better)
- partitions: number of distinct feedback responses induced

Up to color and position symmetry there are only five distinct openings:
1111, 1112, 1122, 1123 and 1234.

Usage:
  python -m opening_guess.eval
  python -m opening_guess.eval --all --top 20 --out openings.csv
"""

from __future__ import annotations

import argparse
import csv
import time
from math import log2
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from mastermind.feedback import N_CODES, feedback_table
from mastermind.pattern import Pattern

CANONICAL_OPENINGS = ["1111", "1112", "1122", "1123", "1234"]


def _pattern_histogram(guess: Pattern, targets: np.ndarray) -> np.ndarray:
    """Histogram of feedback codes for `guess` across the target indices."""
    return np.bincount(feedback_table()[guess.index, targets], minlength=N_CODES)


def _metrics_from_counts(counts: np.ndarray, total: int) -> Tuple[float, float, int, int]:
    """
    Given a histogram of bucket counts and the total number of targets,
    compute (exp_remaining, entropy, worst_case, partitions).
    """
    if total <= 0:
        raise ValueError("total must be positive")
    buckets = counts[counts > 0]
    exp_remaining = float((buckets * buckets).sum()) / total
    entropy = 0.0
    for c in buckets:
        p = c / total
        entropy -= p * log2(p)
    return exp_remaining, entropy, int(buckets.max()), int(buckets.size)


def evaluate_openings(
    guesses: Iterable[Pattern],
    targets: Optional[Sequence[Pattern]] = None,
    *,
    progress: bool = False,
) -> List[Dict[str, float]]:
    """Return one metrics row per guess, best first (worst case, then expected remaining, then index)."""
    if targets is None:
        target_idx = np.arange(Pattern.cardinality())
    else:
        target_idx = np.array([t.index for t in targets], dtype=np.int64)
    total = int(target_idx.size)

    rows: List[Dict[str, float]] = []
    for gi, g in enumerate(guesses, start=1):
        counts = _pattern_histogram(g, target_idx)
        exp_remaining, entropy, worst_case, partitions = _metrics_from_counts(counts, total)
        rows.append(
            {
                "guess": str(g),
                "index": g.index,
                "worst_case": worst_case,
                "knuth_score": total - worst_case,
                "exp_remaining": round(exp_remaining, 3),
                "entropy": round(entropy, 4),
                "partitions": partitions,
            }
        )
        if progress and gi % 100 == 0:
            print(f"Scored {gi} guesses...", flush=True)

    rows.sort(key=lambda r: (r["worst_case"], r["exp_remaining"], r["index"]))
    return rows


def _write_csv(rows: List[Dict[str, float]], path: str) -> None:
    if not rows:
        return
    fieldnames = list(rows[0].keys())
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        w.writerows(rows)


def _print_top(results: List[Dict[str, float]], k: int = 10) -> None:
    print(f"\nTop {k} openings by worst case:")
    print(f"{'rank':>4}  {'guess':<6}  {'worst':>5}  {'exp_rem':>8}  {'entropy':>8}  {'parts':>5}")
    for idx, r in enumerate(results[:k], start=1):
        print(
            f"{idx:>4}  {r['guess']:<6}  {r['worst_case']:>5}  {r['exp_remaining']:>8.2f}  {r['entropy']:>8.3f}  {r['partitions']:>5}"
        )


def main():
    ap = argparse.ArgumentParser(description="Score Mastermind opening guesses by how they split the codes.")
    ap.add_argument("--first", nargs="*", default=None, help="Explicit openings to score, e.g. 1122 1234")
    ap.add_argument("--all", action="store_true", help="Score every one of the 1296 codes")
    ap.add_argument("--top", type=int, default=10, help="How many top rows to print")
    ap.add_argument("--out", default=None, help="Optional output CSV path")
    args = ap.parse_args()

    if args.all:
        guesses = list(Pattern.enumerate())
    else:
        guesses = [Pattern.from_digits(d) for d in (args.first or CANONICAL_OPENINGS)]

    t0 = time.perf_counter()
    results = evaluate_openings(guesses, progress=args.all)
    print(f"Scored {len(guesses)} openings in {time.perf_counter() - t0:.2f}s", flush=True)

    _print_top(results, k=args.top)
    if args.out:
        _write_csv(results, args.out)
        print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
