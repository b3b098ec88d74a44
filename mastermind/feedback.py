"""
Feedback utilities for Mastermind.

A black key peg is placed for each code peg from the guess which is correct
in both color and position. A white key peg indicates the existence of a
correct color code peg placed in the wrong position. Duplicate colors in the
guess are only credited up to their multiplicity in the secret.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable

import numpy as np

from mastermind.pattern import RADIX, SIZE, Pattern

# Feedback codes are blacks * (SIZE + 1) + whites, so 25 buckets cover every tally.
N_CODES = (SIZE + 1) * (SIZE + 1)

Oracle = Callable[[Pattern], "KeyPegs"]


@dataclass(frozen=True)
class KeyPegs:
    blacks: int = 0
    whites: int = 0

    def __post_init__(self) -> None:
        if self.blacks < 0 or self.whites < 0:
            raise ValueError(f"peg counts must be non-negative, got ({self.blacks}, {self.whites})")
        if self.blacks + self.whites > SIZE:
            raise ValueError(
                f"blacks + whites must be at most {SIZE}, got ({self.blacks}, {self.whites})"
            )

    @property
    def win(self) -> bool:
        """If the response is four colored pegs, the game is won."""
        return self.blacks == SIZE

    @classmethod
    def parse(cls, text: str) -> "KeyPegs":
        """Inverse of str(): 'BWW' -> KeyPegs(1, 2). Blacks must precede whites."""
        s = text.strip().upper()
        if s in ("", "-"):
            return cls()
        blacks = len(s) - len(s.lstrip("B"))
        rest = s[blacks:]
        if rest.strip("W"):
            raise ValueError(f"feedback must be B's followed by W's, got {text!r}")
        return cls(blacks, len(rest))

    def __str__(self) -> str:
        return "B" * self.blacks + "W" * self.whites


def score(secret: Pattern, guess: Pattern) -> KeyPegs:
    """
    Compare `guess` against `secret` and return the key pegs.

    Two passes over the decoded pegs:
    1) exact matches consume the position on both sides (blacks);
    2) every unconsumed guess peg scans the unconsumed secret pegs left to
       right and consumes the first one of the same color (whites).
    """
    s = secret.symbols()
    g = guess.symbols()

    s_used = [s[i] == g[i] for i in range(SIZE)]
    g_used = list(s_used)
    blacks = sum(s_used)

    whites = 0
    for gpos in range(SIZE):
        if g_used[gpos]:
            continue
        for spos in range(SIZE):
            if not s_used[spos] and s[spos] == g[gpos]:
                s_used[spos] = True
                whites += 1
                break

    return KeyPegs(blacks, whites)


def consistent_with(candidate: Pattern, guess: Pattern, feedback: KeyPegs) -> bool:
    """True iff `candidate`, taken as the secret, would answer `guess` with `feedback`."""
    return score(guess, candidate) == feedback


def shield(secret: Pattern) -> Oracle:
    """The codemaker: an oracle closing over the hidden pattern."""
    def codemaker(guess: Pattern) -> KeyPegs:
        return score(secret, guess)
    return codemaker


def decode(code: int) -> KeyPegs:
    blacks, whites = divmod(int(code), SIZE + 1)
    return KeyPegs(blacks, whites)


@lru_cache(maxsize=1)
def feedback_table() -> np.ndarray:
    """
    Feedback codes for every (guess, secret) pair as a (1296, 1296) int8 array.

    Computed from color multiplicities: the total number of pegs is the sum
    over colors of min(count in guess, count in secret), and whites are the
    total minus the blacks. This equals what `score` computes.
    """
    digits = np.array([p.symbols() for p in Pattern.enumerate()], dtype=np.int8)
    counts = np.stack([(digits == c).sum(axis=1) for c in range(RADIX)], axis=1).astype(np.int8)

    blacks = (digits[:, None, :] == digits[None, :, :]).sum(axis=2)
    total = np.minimum(counts[:, None, :], counts[None, :, :]).sum(axis=2)
    whites = total - blacks

    table = (blacks * (SIZE + 1) + whites).astype(np.int8)
    table.setflags(write=False)
    return table
