"""
solver.py

Mastermind codebreaker using Knuth's five-guess algorithm.

1. Create the set S of 1296 possible codes, 1111, 1112, .., 6666.
2. Start with initial guess 1122.
3. Play the guess to get a response of colored and white pegs.
4. If the response is four colored pegs, the game is won.
5. Otherwise, remove from S any code that would not give the same response
   if it (the guess) were the code.
6. Minimax: for every unused code of the 1296 (not just those in S), count
   how many members of S fall under each possible response. The score of a
   guess is |S| minus the largest of those counts, i.e. the minimum number
   of possibilities it is sure to eliminate. Among the guesses with the
   maximum score, choose a member of S whenever possible, otherwise the one
   with the least numeric value.
7. Repeat from step 3.
"""

from __future__ import annotations

import logging
from itertools import islice
from typing import Iterator, List, Optional

import numpy as np

from mastermind.constraints import CandidateSet
from mastermind.feedback import N_CODES, KeyPegs, Oracle, consistent_with, feedback_table, shield
from mastermind.pattern import CARDINALITY, Pattern

logger = logging.getLogger(__name__)

# Default number of rows on the decoding board.
DEFAULT_ROWS = 12


class InconsistentFeedbackError(RuntimeError):
    """No code is consistent with the feedback received so far."""


class Solver:
    """
    One codebreaking session against a single oracle.

    API
    ---
    play() -> Optional[Pattern]
        Returns the next guess, or None once the oracle has answered a win.
    iter(solver)
        Yields guesses until the game is won; bound it with itertools.islice.
    """

    def __init__(self, oracle: Oracle, opening: Optional[Pattern] = None) -> None:
        if not callable(oracle):
            raise TypeError("oracle must be callable: Pattern -> KeyPegs")
        self.codemaker = oracle
        self.opening = opening if opening is not None else Solver.initial_guess()
        self.s = Solver.possible_codes()
        self.guessed: List[Pattern] = []

    @staticmethod
    def possible_codes() -> CandidateSet:
        return CandidateSet.all()

    @staticmethod
    def initial_guess() -> Pattern:
        """Knuth's opening; 1123 or 1234 do not win in five on every code."""
        return Pattern.from_digits("1122")

    # -------------------------
    # Game loop
    # -------------------------
    def play(self) -> Optional[Pattern]:
        """Return Some(guess) or None if we already won."""
        if not self.guessed:
            guess = self.opening
            self.guessed.append(guess)
            logger.debug("guess 1: %s", guess)
            return guess

        prev = self.last_guess()
        response = self.codemaker(prev)
        if response.win:
            logger.debug("won with %s after %d guesses", prev, len(self.guessed))
            return None

        self.retain_same_response(response)
        guess = self.next_guess()
        self.guessed.append(guess)
        logger.debug(
            "guess %d: %s (after %s %s, %d candidates left)",
            len(self.guessed), guess, prev, response, len(self.s),
        )
        return guess

    def __iter__(self) -> Iterator[Pattern]:
        while True:
            guess = self.play()
            if guess is None:
                return
            yield guess

    def last_guess(self) -> Pattern:
        if not self.guessed:
            raise RuntimeError("no guess has been made yet; call play() first")
        return self.guessed[-1]

    # -------------------------
    # Algorithm steps
    # -------------------------
    def retain_same_response(self, response: KeyPegs) -> None:
        """5. Remove from S any code that would not give the same response."""
        the_guess = self.last_guess()
        self.s.filter_keep(lambda p: consistent_with(p, the_guess, response))

    def next_guess(self) -> Pattern:
        """6. From the guesses with the maximum score, choose a member of S whenever possible."""
        best = self.best_guesses()
        for g in best:
            if g in self.s:
                return g
        return best[0]

    def best_guesses(self) -> List[Pattern]:
        """All unused patterns with the maximum elimination score, in index order."""
        candidates = self.s.indices()
        if candidates.size == 0:
            logger.error(
                "empty candidate set after guesses %s", ", ".join(str(g) for g in self.guessed)
            )
            raise InconsistentFeedbackError(
                "no code is consistent with the feedback so far; is the oracle scoring correctly?"
            )

        unused = np.ones(CARDINALITY, dtype=bool)
        unused[[g.index for g in self.guessed]] = False
        guesses = np.flatnonzero(unused)

        scores = self._elimination_scores(guesses, candidates)
        high = scores.max()
        return [Pattern(int(i)) for i in guesses[scores == high]]

    def guess_score(self, guess: Pattern) -> int:
        """Minimum number of codes in S that `guess` is sure to eliminate."""
        candidates = self.s.indices()
        if candidates.size == 0:
            raise InconsistentFeedbackError("candidate set is empty")
        return int(self._elimination_scores(np.array([guess.index]), candidates)[0])

    @staticmethod
    def _elimination_scores(guesses: np.ndarray, candidates: np.ndarray) -> np.ndarray:
        # Hit counts per (guess, response) computed in one bincount over offset codes.
        codes = feedback_table()[np.ix_(guesses, candidates)].astype(np.int64)
        codes += (np.arange(guesses.size, dtype=np.int64) * N_CODES)[:, None]
        hits = np.bincount(codes.ravel(), minlength=guesses.size * N_CODES)
        highest_hit_count = hits.reshape(guesses.size, N_CODES).max(axis=1)
        return candidates.size - highest_hit_count


def solve(secret: Pattern, max_turns: int = DEFAULT_ROWS, opening: Optional[Pattern] = None) -> List[Pattern]:
    """
    Play one game against `secret` and return the guesses made, in order.

    The game is won iff the last guess equals `secret`; otherwise the turn
    budget ran out.
    """
    if max_turns <= 0:
        raise ValueError("max_turns must be a positive integer")
    breaker = Solver(shield(secret), opening=opening)
    return list(islice(breaker, max_turns))
