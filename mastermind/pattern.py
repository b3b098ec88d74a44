"""
pattern.py

Code patterns for Mastermind: four code pegs, six colors, duplicates allowed.

Every pattern is identified by a lexical index in [0, 6**4) using a
mixed-radix encoding with the first peg most significant, so the universe
enumerates as 1111, 1112, .., 6666.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Iterator, Sequence, Tuple

SIZE = 4
RADIX = 6
CARDINALITY = RADIX ** SIZE

DIGITS = "123456"


@dataclass(frozen=True, order=True)
class Pattern:
    index: int

    def __post_init__(self) -> None:
        if not isinstance(self.index, Integral) or isinstance(self.index, bool):
            raise TypeError(f"index must be an int, got {type(self.index).__name__}")
        object.__setattr__(self, "index", int(self.index))
        if self.index < 0 or self.index >= CARDINALITY:
            raise IndexError(f"pattern index out of range: {self.index}")

    # ---------- Board geometry ----------

    @staticmethod
    def size() -> int:
        """The codemaker chooses a pattern of four code pegs."""
        return SIZE

    @staticmethod
    def radix() -> int:
        """The game is played using code pegs of six different colors."""
        return RADIX

    @staticmethod
    def cardinality() -> int:
        """Size of the set of 1296 possible codes."""
        return CARDINALITY

    # ---------- Construction helpers ----------

    @classmethod
    def at(cls, index: int) -> "Pattern":
        """Return the pattern with lexical index `index`; raise IndexError if out of bounds."""
        return cls(index)

    @classmethod
    def from_symbols(cls, symbols: Sequence[int]) -> "Pattern":
        """
        Encode four zero-based color symbols, most significant first.

        Raises
        ------
        ValueError
            If there are not exactly four symbols or a symbol is outside [0, 6).
        """
        if len(symbols) != SIZE:
            raise ValueError(f"pattern must have {SIZE} symbols, got {len(symbols)}")
        index = 0
        for s in symbols:
            if not isinstance(s, Integral) or isinstance(s, bool) or s < 0 or s >= RADIX:
                raise ValueError(f"symbols must be integers in [0, {RADIX}), got {s!r}")
            index = index * RADIX + int(s)
        return cls(index)

    @classmethod
    def from_digits(cls, digits: str) -> "Pattern":
        """Parse the textual form, e.g. '1122'; raise ValueError on anything but four digits 1-6."""
        if not isinstance(digits, str):
            raise TypeError("digits must be a string")
        digits = digits.strip()
        if len(digits) != SIZE:
            raise ValueError(f"pattern must be {SIZE} digits, got {digits!r}")
        if any(ch not in DIGITS for ch in digits):
            raise ValueError(f"pattern digits must be in 1-{RADIX}, got {digits!r}")
        return cls.from_symbols([DIGITS.index(ch) for ch in digits])

    @classmethod
    def enumerate(cls) -> Iterator["Pattern"]:
        """Yield all 1296 patterns in increasing index order."""
        return (cls(i) for i in range(CARDINALITY))

    # ---------- Decoding ----------

    def symbols(self) -> Tuple[int, ...]:
        out = [0] * SIZE
        ith = self.index
        for pos in range(SIZE - 1, -1, -1):
            ith, out[pos] = divmod(ith, RADIX)
        return tuple(out)

    def __str__(self) -> str:
        return "".join(DIGITS[s] for s in self.symbols())

    def __repr__(self) -> str:
        return f"Pattern({str(self)!r})"
