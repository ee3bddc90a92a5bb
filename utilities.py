# utilities.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from alphabet_and_permutation import Alphabet
from debug import Debug
from enigma import Machine
from errors import EnigmaError
from rotor_and_reflector import Rotor, make_rotor

debug = Debug()

# ────────────────────────────────────────────────────────────────────────
#  0. Parsed machine description
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class MachineConfig:
    """Everything a machine description file provides."""

    alphabet: Alphabet
    num_rotors: int
    num_pawls: int
    catalog: Dict[str, Rotor] = field(default_factory=dict)


def build_machine(cfg: MachineConfig) -> Machine:
    return Machine(cfg.alphabet, cfg.num_rotors, cfg.num_pawls, cfg.catalog)


def _add_rotor(catalog: Dict[str, Rotor], rotor: Rotor) -> None:
    if rotor.name in catalog:
        raise EnigmaError(f"Duplicate rotor name {rotor.name!r}")
    catalog[rotor.name] = rotor


# ────────────────────────────────────────────────────────────────────────
#  1. Text machine descriptions
# ────────────────────────────────────────────────────────────────────────


def _rotor_lines(lines: List[str]) -> List[str]:
    """Join continuation lines (those starting with '(') onto their rotor."""
    joined: List[str] = []
    for raw in lines:
        s = raw.strip()
        if not s:
            continue
        if s.startswith("("):
            if not joined:
                raise EnigmaError("bad rotor description: cycles before any rotor name")
            joined[-1] += " " + s
        else:
            joined.append(s)
    return joined


def _read_counts(line: str) -> tuple[int, int]:
    parts = line.split()
    if len(parts) < 2:
        raise EnigmaError("configuration file truncated")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise EnigmaError(f"bad rotor/pawl counts: {line.strip()!r}") from None


def read_rotor(line: str, alphabet: Alphabet) -> Rotor:
    """Parse ``NAME TYPE[NOTCHES] CYCLES`` into a catalog rotor."""
    parts = line.split(None, 2)
    if len(parts) < 2:
        raise EnigmaError(f"bad rotor description: {line!r}")
    name, type_token = parts[0], parts[1]
    cycles = parts[2] if len(parts) > 2 else ""
    return make_rotor(name, type_token, cycles, alphabet)


def parse_config(text: str) -> MachineConfig:
    """Parse a machine description in the plain text format.

    Line one is the alphabet, line two the slot and pawl counts, and every
    following line describes one rotor.
    """
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if len(lines) < 2:
        raise EnigmaError("configuration file truncated")

    alphabet = Alphabet(lines[0].strip())
    num_rotors, num_pawls = _read_counts(lines[1])

    catalog: Dict[str, Rotor] = {}
    for line in _rotor_lines(lines[2:]):
        _add_rotor(catalog, read_rotor(line, alphabet))

    debug.log("config", f"{len(catalog)} rotors, {num_rotors} slots, {num_pawls} pawls")
    return MachineConfig(alphabet, num_rotors, num_pawls, catalog)


# ────────────────────────────────────────────────────────────────────────
#  2. JSON machine descriptions
# ────────────────────────────────────────────────────────────────────────

_REQUIRED = {"alphabet", "rotors", "pawls", "catalog"}


def parse_json_config(data: dict) -> MachineConfig:
    missing = _REQUIRED - data.keys()
    if missing:
        raise EnigmaError(f"Missing keys in config: {', '.join(sorted(missing))}")

    alphabet = Alphabet(data["alphabet"])
    catalog: Dict[str, Rotor] = {}
    for entry in data["catalog"]:
        try:
            name, kind = entry["name"], entry["type"]
        except (KeyError, TypeError):
            raise EnigmaError(f"bad rotor description: {entry!r}") from None
        token = kind + entry.get("notches", "")
        _add_rotor(catalog, make_rotor(name, token, entry.get("cycles", ""), alphabet))

    try:
        num_rotors, num_pawls = int(data["rotors"]), int(data["pawls"])
    except (TypeError, ValueError):
        raise EnigmaError("bad rotor/pawl counts") from None
    return MachineConfig(alphabet, num_rotors, num_pawls, catalog)


def load_config(path: str | Path) -> MachineConfig:
    """Read a machine description; ``.json`` files use the JSON layout."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        raise EnigmaError(f"could not open {path}") from None

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise EnigmaError(f"{path}: invalid JSON ({exc.msg})") from None
        if not isinstance(data, dict):
            raise EnigmaError(f"{path}: expected a JSON object")
        return parse_json_config(data)
    return parse_config(text)


# ────────────────────────────────────────────────────────────────────────
#  3. Message helpers
# ────────────────────────────────────────────────────────────────────────


def is_setting_line(line: str) -> bool:
    return line.strip().startswith("*")


def preprocess_message(msg: str, upper: bool = False) -> str:
    """Drop whitespace, and upper-case when asked."""
    text = msg.upper() if upper else msg
    return "".join(text.split())


def group_text(msg: str, block: int = 5) -> str:
    """Split *msg* into space-separated groups of *block* symbols."""
    if block <= 0:
        return msg
    return " ".join(msg[i : i + block] for i in range(0, len(msg), block))


__all__ = [
    "MachineConfig",
    "build_machine",
    "group_text",
    "is_setting_line",
    "load_config",
    "parse_config",
    "parse_json_config",
    "preprocess_message",
    "read_rotor",
]
