# enigma.py  ───────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from copy import deepcopy

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import EnigmaError
from rotor_and_reflector import Rotor

debug = Debug()


class Machine:
    """A complete machine: *num_rotors* slots, the rightmost *num_pawls* of
    them driven by pawls, and a plugboard.

    Slot 0 always holds the reflector.  The machine is unusable until
    :meth:`setup` has been given a setting line.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor] | Mapping[str, Rotor],
    ) -> None:
        if num_rotors < 2:
            raise EnigmaError(f"A machine needs at least 2 rotor slots, got {num_rotors}")
        if not (0 <= num_pawls < num_rotors):
            raise EnigmaError(
                f"Pawl count must be in 0–{num_rotors - 1}, got {num_pawls}"
            )

        if isinstance(all_rotors, Mapping):
            all_rotors = all_rotors.values()

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls

        self._catalog: dict[str, Rotor] = {}
        for rotor in all_rotors:
            if rotor.name in self._catalog:
                raise EnigmaError(f"Duplicate rotor name {rotor.name!r}")
            if rotor.alphabet != alphabet:
                raise EnigmaError(f"Rotor {rotor.name} uses a different alphabet")
            self._catalog[rotor.name] = rotor

        self._rotors: list[Rotor] = []
        self._plugboard = Permutation("", alphabet)
        self._setting: str | None = None

    # ── read accessors ──────────────────────────────────────────

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._num_pawls

    @property
    def catalog(self) -> Mapping[str, Rotor]:
        return dict(self._catalog)

    @property
    def rotors(self) -> list[Rotor]:
        return list(self._rotors)

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    @property
    def setting(self) -> str | None:
        return self._setting

    @property
    def is_configured(self) -> bool:
        return len(self._rotors) == self._num_rotors

    @property
    def positions(self) -> str:
        """Window letters of every rotor except the reflector."""
        return "".join(r.position_symbol for r in self._rotors[1:])

    @property
    def ring_settings(self) -> str:
        return "".join(r.ring_symbol for r in self._rotors[1:])

    # ── setup ───────────────────────────────────────────────────

    def setup(self, setting: str) -> None:
        """Configure from a line such as ``* B Beta I II III AAAA AAAA (AQ) (EP)``.

        The names select rotors for slots 0..R-1, followed by the starting
        positions, optional ring settings, and plugboard cycles.
        """
        line = setting.strip()
        if line.startswith("*"):
            line = line[1:]

        cut = line.find("(")
        head, cycles = (line, "") if cut < 0 else (line[:cut], line[cut:])
        tokens = head.split()

        rotors = self._select(tokens[: self._num_rotors])
        rest = tokens[self._num_rotors :]
        if not rest:
            raise EnigmaError(
                f"Setting needs {self._num_rotors - 1} rotor positions after the rotor names"
            )
        if len(rest) > 2:
            raise EnigmaError(f"Unexpected text in setting: {' '.join(rest[2:])!r}")

        self._apply(rotors, rest[0], "position", Rotor.set_position)
        if len(rest) > 1:
            self._apply(rotors, rest[1], "ring setting", Rotor.set_ring)
        plugboard = Permutation(cycles, self._alphabet)

        # commit only once everything validated
        self._rotors = rotors
        self._plugboard = plugboard
        self._setting = setting.strip()
        debug.log(
            "machine",
            f"setup {[r.name for r in rotors]} pos={self.positions} "
            f"ring={self.ring_settings} plugboard={plugboard}",
        )

    def _select(self, names: list[str]) -> list[Rotor]:
        if len(names) < self._num_rotors:
            raise EnigmaError(
                f"This machine has {self._num_rotors} rotors, but only "
                f"{len(names)} were given"
            )

        first_pawl = self._num_rotors - self._num_pawls
        rotors: list[Rotor] = []
        for i, name in enumerate(names):
            try:
                rotor = deepcopy(self._catalog[name])
            except KeyError:
                raise EnigmaError(f"Unknown rotor {name!r}") from None

            if i == 0 and not rotor.reflecting():
                raise EnigmaError(f"The first rotor {name} is not a reflector")
            if i > 0 and rotor.reflecting():
                raise EnigmaError(f"Reflector {name} may only sit in the first slot")

            has_pawl = i >= first_pawl
            rotor.wire(i - 1 if has_pawl else None, has_pawl)
            rotors.append(rotor)
        return rotors

    def _apply(
        self,
        rotors: list[Rotor],
        symbols: str,
        what: str,
        setter: Callable[[Rotor, str], Rotor],
    ) -> None:
        need = self._num_rotors - 1
        if len(symbols) != need:
            raise EnigmaError(
                f"This machine needs {need} rotor {what}s, but was given {symbols!r}"
            )
        for rotor, ch in zip(rotors[1:], symbols):
            setter(rotor, ch)

    # ── encipher one symbol  ────────────────────────────────────

    def step_and_convert(self, c: int) -> int:
        """Advance the rotors, then run index *c* through the whole machine."""
        if not self.is_configured:
            raise EnigmaError("This machine has no rotors set up")
        if not (0 <= c < self._alphabet.size):
            raise EnigmaError(f"Index {c} is not in the alphabet")

        self._rotors[-1].advance(self._rotors)
        debug.log("stepping", f"positions {self.positions}")

        signal = self._plugboard.permute(c)
        for rotor in reversed(self._rotors[1:]):
            signal = rotor.convert_forward(signal)

        signal = self._rotors[0].convert_forward(signal)

        for rotor in self._rotors[1:]:
            signal = rotor.convert_backward(signal)

        out = self._plugboard.invert(signal)
        debug.log("plugboard", f"{c} -> {out}")
        return out

    def convert_text(self, msg: str) -> str:
        """Encode/decode *msg*; symbols outside the alphabet pass untouched."""
        out: list[str] = []
        for ch in msg:
            if ch not in self._alphabet:
                out.append(ch)
                continue
            idx = self.step_and_convert(self._alphabet.to_index(ch))
            out.append(self._alphabet.to_symbol(idx))
        return "".join(out)

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._rotors) or "unconfigured"
        return f"<Machine {names} pos={self.positions}>"
