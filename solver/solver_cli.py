"""
solver/solver_cli.py

Mastermind codebreaker from the command line.

play    The computer is codemaker and codebreaker: a secret is drawn (or given
        with --secret) and Knuth's solver plays it out, one line per turn.
assist  Human-in-the-loop: you play against a real codemaker. The solver
        suggests each guess and you type the key pegs you were given.
        Feedback accepted as: 'BWW', '-' (no pegs), or 'blacks,whites' like '1,2'.

Run:
  python -m solver.solver_cli play --secret 1234
  python -m solver.solver_cli assist --rows 10

Shortcuts:
  quit / q / exit  -> exit
"""
from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import Callable, List, Optional, Tuple

from mastermind.feedback import KeyPegs, score, shield
from mastermind.pattern import Pattern
from mastermind.sampler import SecretSampler
from mastermind.solver import DEFAULT_ROWS, InconsistentFeedbackError, Solver

QUIT = {"q", "quit", "exit"}


class QuitRequested(Exception):
    """The user typed quit at a prompt."""


def parse_feedback(s: str) -> KeyPegs:
    """Parse key pegs typed by a human.
    Accepted forms:
      - pegs:    BWW, bbw, or '-' / 'none' for no pegs
      - counts:  '1,2', '1 2' or '12' (blacks then whites)
    Raises ValueError on invalid input.
    """
    s = s.strip().lower()
    if not s:
        raise ValueError("empty feedback; type '-' for no pegs")
    if s == "none":
        return KeyPegs()
    nums = re.fullmatch(r"\[?\s*(\d)\s*[, ]?\s*(\d)\s*\]?", s)
    if nums:
        return KeyPegs(int(nums.group(1)), int(nums.group(2)))
    if not re.fullmatch(r"[bw]+|-", s):
        raise ValueError("feedback must be B/W pegs (e.g. BWW), '-' for none, or 'blacks,whites'")
    return KeyPegs.parse(s)


def play_game(secret: Pattern, rows: int = DEFAULT_ROWS, out=print) -> Tuple[bool, int]:
    """Let the solver break `secret`, reporting every turn. Returns (solved, turns)."""
    out(f"codemaker: {secret}")
    breaker = Solver(shield(secret))
    turns = 0
    solved = False
    for turn in range(1, rows + 1):
        guess = breaker.play()
        if guess is None:
            break
        feedback = score(secret, guess)
        out(f"turn {turn}:    {guess}  {feedback}")
        turns = turn
        if feedback.win:
            solved = True
            break
    if not solved:
        out(f"codebreaker failed to find {secret} in {rows} turns")
    return solved, turns


def _prompt_feedback(ask: Callable[[str], str]) -> Callable[[Pattern], KeyPegs]:
    """Build an oracle that asks the human for the key pegs of each guess."""
    def codemaker(guess: Pattern) -> KeyPegs:
        while True:
            fb = ask(f"Feedback for {guess} (BWW / - / b,w): ").strip()
            if fb.lower() in QUIT:
                raise QuitRequested()
            try:
                return parse_feedback(fb)
            except ValueError as e:
                print("Invalid feedback:", e)
    return codemaker


def assist(rows: int = DEFAULT_ROWS, ask: Callable[[str], str] = input) -> Optional[List[Pattern]]:
    """
    Suggest guesses to a human playing a real codemaker.

    Returns the guesses played if the code was broken, else None.
    """
    print("\nMastermind helper: play each suggested guess and type the key pegs you get.")
    print("Accepted: BWW, '-' for no pegs, or 'blacks,whites'. Type 'quit' to exit.\n")

    breaker = Solver(_prompt_feedback(ask))
    try:
        for turn in range(1, rows + 1):
            guess = breaker.play()
            if guess is None:
                break
            print(f"Turn {turn}: play {guess}  ({len(breaker.s)} codes still possible)")
        else:
            # The last row was played; one more answer tells whether it won.
            if breaker.play() is not None:
                print(f"Out of rows after {rows} guesses.")
                return None
    except QuitRequested:
        print("bye!")
        return None
    except InconsistentFeedbackError:
        print("No candidates remain. Check your feedback inputs.")
        return None

    print(f"Solved in {len(breaker.guessed)} guesses: {breaker.last_guess()}")
    return list(breaker.guessed)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Mastermind codebreaker (Knuth's five-guess algorithm)")
    ap.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Turn budget (rows on the decoding board)")
    ap.add_argument("--verbose", "-v", action="store_true", help="Log solver internals at DEBUG level")
    sub = ap.add_subparsers(dest="command", required=True)

    p_play = sub.add_parser("play", help="Computer plays both sides")
    p_play.add_argument("--secret", default=None, help="Hidden pattern, e.g. 1234 (random if omitted)")
    p_play.add_argument("--seed", type=int, default=None, help="RNG seed for the random secret")

    sub.add_parser("assist", help="Suggest guesses against a real codemaker")

    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        )
    if args.rows <= 0:
        ap.error("--rows must be positive")

    if args.command == "play":
        if args.secret is not None:
            try:
                secret = Pattern.from_digits(args.secret)
            except ValueError as e:
                ap.error(str(e))
        else:
            secret = SecretSampler(seed=args.seed).choice_pattern()
        solved, _ = play_game(secret, rows=args.rows)
        return 0 if solved else 1

    return 0 if assist(rows=args.rows) is not None else 1


if __name__ == "__main__":
    sys.exit(main())
