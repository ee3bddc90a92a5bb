import logging

import pytest

from alphabet_and_permutation import Permutation
from debug import Debug
from errors import EnigmaError
from rotor_and_reflector import (
    FIXED,
    MOVING,
    REFLECTOR,
    fixed_rotor,
    make_rotor,
    moving_rotor,
    reflector,
)

ROTOR_I = "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)"
THIN_B = "(AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)"


@pytest.fixture
def rotor_i(upper):
    return moving_rotor("I", Permutation(ROTOR_I, upper), "Q")


def test_kinds(upper):
    perm = Permutation(THIN_B, upper)
    assert reflector("B", perm).reflecting()
    assert not reflector("B", perm).rotates()
    assert not fixed_rotor("Beta", perm).rotates()
    assert not fixed_rotor("Beta", perm).reflecting()
    assert moving_rotor("I", perm, "Q").rotates()


def test_make_rotor_reads_type_token(upper):
    r = make_rotor("VI", "MZM", ROTOR_I, upper)
    assert r.kind == MOVING
    assert r.notches == frozenset("ZM")
    assert make_rotor("Beta", "N", ROTOR_I, upper).kind == FIXED
    assert make_rotor("B", "R", THIN_B, upper).kind == REFLECTOR


@pytest.mark.parametrize("token", ["X", "Q", ""])
def test_make_rotor_rejects_unknown_type(upper, token):
    with pytest.raises(EnigmaError):
        make_rotor("Z", token, ROTOR_I, upper)


def test_notches_only_kept_for_moving_rotors(upper):
    assert make_rotor("Beta", "NQ", ROTOR_I, upper).notches == frozenset()


def test_notch_must_be_in_alphabet(upper):
    with pytest.raises(EnigmaError):
        moving_rotor("I", Permutation(ROTOR_I, upper), "q")


def test_reflector_needs_derangement(upper):
    with pytest.raises(EnigmaError):
        reflector("bad", Permutation(ROTOR_I, upper))  # S maps to itself


def test_reflector_cannot_turn(upper):
    refl = reflector("B", Permutation(THIN_B, upper))
    with pytest.raises(EnigmaError):
        refl.set_position("C")
    with pytest.raises(EnigmaError):
        refl.set_ring(1)
    refl.set_position("A")
    assert refl.position == 0
    refl.advance([refl])
    assert refl.position == 0


def test_settings_accept_symbols_or_indices(rotor_i):
    rotor_i.set_position("C").set_ring(27)
    assert rotor_i.position == 2
    assert rotor_i.ring_setting == 1
    assert rotor_i.position_symbol == "C"
    assert rotor_i.ring_symbol == "B"
    with pytest.raises(EnigmaError):
        rotor_i.set_position("c")


def test_convert_at_zero_setting(rotor_i):
    assert rotor_i.convert_forward(0) == 4
    assert rotor_i.convert_backward(4) == 0


def test_convert_shifts_by_position_plus_ring(rotor_i):
    rotor_i.set_position("B")
    assert rotor_i.convert_forward(0) == 9        # B -> K, shifted back to J
    rotor_i.set_position("A").set_ring("B")
    assert rotor_i.convert_forward(0) == 9


def test_convert_backward_undoes_forward(rotor_i):
    rotor_i.set_position("F").set_ring("K")
    for i in range(26):
        assert rotor_i.convert_backward(rotor_i.convert_forward(i)) == i


def test_notch_uses_position_plus_ring(rotor_i):
    rotor_i.set_position("Q")
    assert rotor_i.at_notch()
    rotor_i.set_ring("B")
    assert not rotor_i.at_notch()
    rotor_i.set_position("P")
    assert rotor_i.at_notch()


def test_advance_wraps(rotor_i):
    rotor_i.set_position("Z")
    rotor_i.advance()
    assert rotor_i.position_symbol == "A"


def test_fixed_rotor_never_advances(upper):
    beta = fixed_rotor("Beta", Permutation(ROTOR_I, upper))
    beta.set_position("D")
    beta.advance()
    assert beta.position_symbol == "D"


def test_fixed_rotor_under_pawl_stays_put(upper):
    slots = [
        reflector("B", Permutation(THIN_B, upper)),
        fixed_rotor("Beta", Permutation(ROTOR_I, upper)),
        moving_rotor("I", Permutation(ROTOR_I, upper), "Q"),
    ]
    beta, wheel = slots[1], slots[2]
    beta.wire(0, True)
    wheel.wire(1, True)
    beta.set_position("D")
    wheel.set_position("Q")

    assert beta.pawl and beta.left == 0
    beta.advance(slots)
    assert beta.position_symbol == "D"
    wheel.advance(slots)                  # notch kicks Beta, which ignores it
    assert (beta.position_symbol, wheel.position_symbol) == ("D", "R")


def _stack(upper, positions):
    """Reflector plus three moving rotors notched like I, II and III."""
    perm = Permutation(ROTOR_I, upper)
    slots = [
        reflector("B", Permutation(THIN_B, upper)),
        moving_rotor("L", perm, "Q"),
        moving_rotor("M", perm, "E"),
        moving_rotor("R", perm, "V"),
    ]
    for i, rotor in enumerate(slots[1:], start=1):
        rotor.wire(i - 1, True)
        rotor.set_position(positions[i - 1])
    return slots


def _positions(slots):
    return "".join(r.position_symbol for r in slots[1:])


def test_notch_kicks_left_neighbour(upper):
    slots = _stack(upper, "AAV")
    slots[-1].advance(slots)
    assert _positions(slots) == "ABW"


def test_middle_rotor_double_steps(upper):
    slots = _stack(upper, "ADV")
    slots[-1].advance(slots)
    assert _positions(slots) == "AEW"
    slots[-1].advance(slots)
    assert _positions(slots) == "BFX"
    slots[-1].advance(slots)
    assert _positions(slots) == "BFY"


def test_no_double_step_without_pawl_beyond_middle(upper):
    slots = _stack(upper, "ADV")
    slots[1].wire(None, False)
    slots[-1].advance(slots)
    assert _positions(slots) == "AEW"
    slots[-1].advance(slots)
    assert _positions(slots) == "AEX"


def test_rotor_component_traces_conversions(caplog, rotor_i):
    caplog.set_level(logging.DEBUG, logger="ENIGMA")
    debug = Debug()
    debug.enable("rotor")
    try:
        rotor_i.convert_forward(0)
        rotor_i.convert_backward(4)
    finally:
        debug.disable("rotor")
    messages = [r.getMessage() for r in caplog.records]
    assert "[ROTOR] I fwd 0->4" in messages
    assert "[ROTOR] I bwd 4->0" in messages


def test_neighbour_without_pawl_is_never_carried(upper):
    slots = _stack(upper, "AAV")
    slots[2].wire(None, False)
    slots[3].wire(2, True)
    slots[-1].advance(slots)
    assert _positions(slots) == "AAW"
