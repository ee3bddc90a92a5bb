# alphabet_and_permutation.py
from __future__ import annotations

import re
from collections.abc import Iterator

from debug import Debug
from errors import EnigmaError

debug = Debug()

_cycle_re = re.compile(r"\(([^()]*)\)")


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """A contiguous run of symbols, numbered from 0."""

    def __init__(self, chars: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ") -> None:
        if not chars:
            raise EnigmaError("Alphabet must contain at least one symbol")

        begin = ord(chars[0])
        for i, ch in enumerate(chars):
            if ord(ch) - begin != i:
                raise EnigmaError(
                    f"Alphabet is not a contiguous run: {ch!r} at index {i}"
                )

        self._chars: str = chars
        self._first: int = begin
        self._last: int = begin + len(chars) - 1
        debug.log("alphabet", f"{chars[0]}..{chars[-1]} ({len(chars)} symbols)")

    @property
    def size(self) -> int:
        return len(self._chars)

    def contains(self, symbol: str) -> bool:
        return (
            isinstance(symbol, str)
            and len(symbol) == 1
            and self._first <= ord(symbol) <= self._last
        )

    # symbol → integer index
    def to_index(self, symbol: str) -> int:
        if not self.contains(symbol):
            raise EnigmaError(f"Symbol {symbol!r} is not in the alphabet")
        return ord(symbol) - self._first

    # integer index → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < self.size):
            hi = self.size - 1
            raise EnigmaError(f"Index {index} out of range 0–{hi}")
        return self._chars[index]

    # niceties
    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self.contains(symbol)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alphabet) and other._chars == self._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __str__(self) -> str:
        return self._chars

    def __repr__(self) -> str:
        return f"<Alphabet {self._chars[0]}..{self._chars[-1]}>"


# ── Permutation ───────────────────────────────────────────────────
class Permutation:
    """A bijection on the indices of an Alphabet, given in cycle notation.

    *cycles* has the form ``"(cccc) (cc) ..."``; whitespace between and inside
    the groups is ignored.  Symbols not named in any cycle map to themselves.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet: Alphabet = alphabet

        # integer lookup tables, identity until cycles are applied
        self._fwd: list[int] = list(range(alphabet.size))
        self._rev: list[int] = list(range(alphabet.size))

        self._cycles: list[str] = self._parse(cycles)
        for cycle in self._cycles:
            self._add_cycle(cycle)

        debug.log("permutation", f"built {self}")

    def _parse(self, text: str) -> list[str]:
        leftover = _cycle_re.sub(" ", text)
        if leftover.strip():
            raise EnigmaError(f"Malformed cycle notation: {text.strip()!r}")

        groups = ["".join(g.split()) for g in _cycle_re.findall(text)]
        seen: set[str] = set()
        for group in groups:
            for ch in group:
                if ch in seen:
                    raise EnigmaError(f"Symbol {ch!r} appears in more than one cycle position")
                seen.add(ch)
        return groups

    def _add_cycle(self, cycle: str) -> None:
        """Link c0 -> c1 -> ... -> cm -> c0."""
        m = len(cycle)
        if m < 2:
            return
        idx = [self.alphabet.to_index(ch) for ch in cycle]
        for i, cur in enumerate(idx):
            self._fwd[cur] = idx[(i + 1) % m]
            self._rev[cur] = idx[(i - 1) % m]

    # ── index API ───────────────────────────────────────────────
    @property
    def size(self) -> int:
        return self.alphabet.size

    def wrap(self, p: int) -> int:
        """Return *p* modulo the size of this permutation."""
        return p % self.size

    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    # ── symbol API ──────────────────────────────────────────────
    def permute_symbol(self, p: str) -> str:
        return self.alphabet.to_symbol(self.permute(self.alphabet.to_index(p)))

    def invert_symbol(self, c: str) -> str:
        return self.alphabet.to_symbol(self.invert(self.alphabet.to_index(c)))

    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(self._rev[i] != i for i in range(self.size))

    # niceties
    def __str__(self) -> str:
        return " ".join(f"({c})" for c in self._cycles if len(c) > 1)

    def __repr__(self) -> str:
        return f"<Permutation {self}>"
