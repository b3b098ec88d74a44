"""
opening_guess/eval_whole_game_sim.py

Simulate *full games* to evaluate openings: for each opening, Knuth's solver
plays against every secret (or a random sample of them) until solved or out
of rows.

Usage examples:
  python -m opening_guess.eval_whole_game_sim
  python -m opening_guess.eval_whole_game_sim --first 1122 1123 1234 --rows 10
  python -m opening_guess.eval_whole_game_sim --sample 200 --seed 7 --out games.csv

Prints a summary per opening and the distribution of turns to win.
"""

from __future__ import annotations

import argparse
import time
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from mastermind.pattern import Pattern
from mastermind.sampler import SecretSampler
from mastermind.solver import DEFAULT_ROWS, solve
from opening_guess.eval import CANONICAL_OPENINGS


def simulate(
    openings: Iterable[Pattern],
    secrets: Optional[Sequence[Pattern]] = None,
    *,
    max_turns: int = DEFAULT_ROWS,
    progress: bool = False,
) -> pd.DataFrame:
    """One row per (opening, secret) with the number of turns played and whether it was solved."""
    if secrets is None:
        secrets = list(Pattern.enumerate())

    rows = []
    for opening in openings:
        for n, secret in enumerate(secrets, start=1):
            guesses = solve(secret, max_turns=max_turns, opening=opening)
            rows.append(
                {
                    "opening": str(opening),
                    "secret": str(secret),
                    "turns": len(guesses),
                    "solved": bool(guesses) and guesses[-1] == secret,
                    "guesses": " ".join(str(g) for g in guesses),
                }
            )
            if progress and n % 100 == 0:
                print(f"{opening}: played {n}/{len(secrets)} games...", flush=True)
    return pd.DataFrame(rows, columns=["opening", "secret", "turns", "solved", "guesses"])


def summarize(games: pd.DataFrame) -> pd.DataFrame:
    """Per opening: games, solve_rate, avg_turns and max_turns over solved games."""
    solved = games[games["solved"]]
    summary = games.groupby("opening").agg(games=("secret", "size"), solve_rate=("solved", "mean"))
    turns = solved.groupby("opening")["turns"].agg(avg_turns="mean", max_turns="max")
    summary = summary.join(turns).reset_index()
    summary["avg_turns"] = summary["avg_turns"].round(3)
    return summary.sort_values(["solve_rate", "max_turns", "avg_turns"], ascending=[False, True, True])


def turn_histogram(games: pd.DataFrame) -> pd.DataFrame:
    """Number of solved games per opening (rows) and turns to win (columns)."""
    solved = games[games["solved"]]
    return pd.crosstab(solved["opening"], solved["turns"])


def main():
    ap = argparse.ArgumentParser(description="Whole-game evaluation of Mastermind openings with Knuth's solver.")
    ap.add_argument("--first", nargs="*", default=None, help="Openings to evaluate (default: the five canonical ones)")
    ap.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Turn budget per game")
    ap.add_argument("--sample", type=int, default=None, help="Play only K random secrets instead of all 1296")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed for secret sampling")
    ap.add_argument("--out", default=None, help="Optional output CSV path for per-game rows")
    ap.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show progress during simulation (use --no-progress to disable)",
    )
    args = ap.parse_args()

    openings = [Pattern.from_digits(d) for d in (args.first or CANONICAL_OPENINGS)]
    secrets: Optional[List[Pattern]] = None
    if args.sample is not None:
        sampler = SecretSampler(seed=args.seed)
        secrets = [Pattern.at(i) for i in sampler.batch_indices(args.sample)]

    n_secrets = len(secrets) if secrets is not None else Pattern.cardinality()
    print(f"Playing {len(openings)} openings against {n_secrets} secrets (rows={args.rows})", flush=True)
    t0 = time.perf_counter()
    games = simulate(openings, secrets, max_turns=args.rows, progress=args.progress)
    print(f"Done in {time.perf_counter() - t0:.2f}s", flush=True)

    print(summarize(games).to_string(index=False))
    print()
    print(turn_histogram(games).to_string())

    if args.out:
        games.to_csv(args.out, index=False)
        print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
