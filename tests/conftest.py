import pytest

from alphabet_and_permutation import Alphabet
from suites import ARMY, NAVAL
from utilities import build_machine, parse_config

# Three-letter machine whose rotors all carry a notch at C, so every
# carry and double step shows up within a handful of key presses.
SIMPLE = """\
ABC
5 3
I     MC   (ABC)
II    MC   (AB)
III   MC   (BC)
Beta  N    (AC)
B     R    (ABC)
"""


@pytest.fixture
def upper():
    return Alphabet()


@pytest.fixture
def naval():
    return build_machine(parse_config(NAVAL))


@pytest.fixture
def army():
    return build_machine(parse_config(ARMY))


@pytest.fixture
def simple():
    return build_machine(parse_config(SIMPLE))
