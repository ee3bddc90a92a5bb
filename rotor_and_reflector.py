# rotor_and_reflector.py
from __future__ import annotations

from collections.abc import Sequence

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import EnigmaError

debug = Debug()

# rotor type tags, as written in machine descriptions
REFLECTOR = "R"
FIXED = "N"
MOVING = "M"
ROTOR_TYPES = (REFLECTOR, FIXED, MOVING)


class Rotor:
    """One wheel of the machine.

    A single class covers the three kinds of wheel; behaviour branches on
    ``kind``.  ``left`` is the slot index of the neighbouring rotor in the
    machine that currently holds this one, or ``None`` when unwired.
    """

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: str = FIXED,
        notches: str = "",
    ) -> None:
        if kind not in ROTOR_TYPES:
            raise EnigmaError(f"Rotor {name}: unsupported rotor type {kind!r}")
        if kind == REFLECTOR and not perm.derangement():
            raise EnigmaError(f"Reflector {name} maps a symbol to itself")

        self.name = name
        self.permutation = perm
        self.kind = kind

        self.notches: frozenset[str] = frozenset()
        if kind == MOVING:
            bad = [c for c in notches if c not in perm.alphabet]
            if bad:
                raise EnigmaError(f"Rotor {name}: notch {bad[0]!r} is not in the alphabet")
            self.notches = frozenset(notches)

        self.position = 0
        self.ring_setting = 0
        self.pawl = False
        self.left: int | None = None

    # ── capabilities ──────────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    @property
    def size(self) -> int:
        return self.permutation.size

    def rotates(self) -> bool:
        return self.kind == MOVING

    def reflecting(self) -> bool:
        return self.kind == REFLECTOR

    # ── position & ring ───────────────────────────────────────────
    def set_position(self, posn: int | str) -> "Rotor":
        self.position = self._setting(posn, "position")
        return self

    def set_ring(self, ring: int | str) -> "Rotor":
        self.ring_setting = self._setting(ring, "ring setting")
        return self

    def _setting(self, value: int | str, what: str) -> int:
        if isinstance(value, str):
            value = self.alphabet.to_index(value)
        else:
            value = self.permutation.wrap(value)
        if self.reflecting() and value != 0:
            raise EnigmaError(f"Reflector {self.name} cannot change its {what}")
        return value

    @property
    def position_symbol(self) -> str:
        return self.alphabet.to_symbol(self.position)

    @property
    def ring_symbol(self) -> str:
        return self.alphabet.to_symbol(self.ring_setting)

    def wire(self, left: int | None, pawl: bool) -> None:
        """Bind the left-neighbour slot and pawl flag for one machine setup.

        A wheel that does not rotate may sit under a pawl; it simply never
        moves when the pawl pushes it.
        """
        self.left = left
        self.pawl = pawl

    # ── signal paths ---------------------------------------------
    def convert_forward(self, p: int) -> int:
        offset = self.position + self.ring_setting
        out = self.permutation.wrap(self.permutation.permute(p + offset) - offset)
        debug.log("rotor", f"{self.name} fwd {p}->{out}")
        return out

    def convert_backward(self, e: int) -> int:
        offset = self.position + self.ring_setting
        out = self.permutation.wrap(self.permutation.invert(e + offset) - offset)
        debug.log("rotor", f"{self.name} bwd {e}->{out}")
        return out

    # ── stepping --------------------------------------------------
    def at_notch(self) -> bool:
        """True iff I sit where the rotor on my left may be carried along."""
        r = self.permutation.wrap(self.position + self.ring_setting)
        return self.alphabet.to_symbol(r) in self.notches

    def advance(self, slots: Sequence["Rotor"] = ()) -> None:
        """Step one position, carrying the left neighbour in *slots* as needed.

        A rotor standing on its notch kicks its neighbour before moving.  If
        it did not, the neighbour may still be standing on its own notch with
        a pawl engaged to its left; the pawl then catches the neighbour's
        notch directly and the neighbour steps again (the double step).
        """
        if not self.rotates():
            return

        neighbour = self._neighbour(slots)

        kicked = self.at_notch() and neighbour is not None and neighbour.pawl
        if kicked:
            debug.log("stepping", f"{self.name} at notch, carrying {neighbour.name}")
            neighbour.advance(slots)

        self.position = (self.position + 1) % self.size

        if (
            not kicked
            and neighbour is not None
            and neighbour.pawl
            and neighbour.at_notch()
        ):
            beyond = neighbour._neighbour(slots)
            if beyond is not None and beyond.pawl:
                debug.log("stepping", f"{neighbour.name} double-steps")
                neighbour.advance(slots)

    def _neighbour(self, slots: Sequence["Rotor"]) -> "Rotor | None":
        if self.left is None or not (0 <= self.left < len(slots)):
            return None
        return slots[self.left]

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"<Rotor {self.name} {self.kind}{''.join(sorted(self.notches))} "
            f"pos={self.position} ring={self.ring_setting}>"
        )


# ── constructors for the three kinds ──────────────────────────────
def moving_rotor(name: str, perm: Permutation, notches: str) -> Rotor:
    return Rotor(name, perm, MOVING, notches)


def fixed_rotor(name: str, perm: Permutation) -> Rotor:
    return Rotor(name, perm, FIXED)


def reflector(name: str, perm: Permutation) -> Rotor:
    return Rotor(name, perm, REFLECTOR)


def make_rotor(name: str, type_token: str, cycles: str, alphabet: Alphabet) -> Rotor:
    """Build a rotor from a catalog entry such as ``("I", "MQ", "(AELT...)")``."""
    if not type_token:
        raise EnigmaError(f"Rotor {name}: missing type")
    kind, notches = type_token[0], type_token[1:]
    if kind not in ROTOR_TYPES:
        raise EnigmaError(f"Rotor {name}: unsupported rotor type {kind!r}")
    return Rotor(name, Permutation(cycles, alphabet), kind, notches)
