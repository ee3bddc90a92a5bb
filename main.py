# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional, TextIO

from debug import Debug
from enigma import Machine
from errors import EnigmaError
from suites import SUITES
from utilities import (
    build_machine,
    group_text,
    is_setting_line,
    load_config,
    parse_config,
    preprocess_message,
)

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for message processing."""

    block: int = 5                  # output group size
    upper: bool = False             # upper-case message lines before converting


# ────────────────────────────────────────────────────────────────────────
#  1. Machine loading
# ────────────────────────────────────────────────────────────────────────


def load_machine(config: Optional[str], suite: Optional[str]) -> Machine:
    """Build a machine from a description file or a built-in suite name."""
    if (config is None) == (suite is None):
        raise EnigmaError("give exactly one of a configuration file or --suite")
    if suite is not None:
        try:
            return build_machine(parse_config(SUITES[suite]))
        except KeyError:
            raise EnigmaError(
                f"unknown suite {suite!r}; expected one of {', '.join(SUITES)}"
            ) from None
    return build_machine(load_config(config))


# ────────────────────────────────────────────────────────────────────────
#  2. Message processing
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, lines: Iterable[str], out: TextIO, cfg: Config) -> None:
    """Apply setting lines and convert message lines, writing the results."""
    for raw in lines:
        line = raw.strip()
        if is_setting_line(line):
            machine.setup(line)
            continue
        msg = machine.convert_text(preprocess_message(line, cfg.upper))
        out.write(group_text(msg, cfg.block) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("config", nargs="?", help="Machine description file (text, or .json).")
    p.add_argument("input", nargs="?", help="Message file. Default: standard input.")
    p.add_argument("output", nargs="?", help="Output file. Default: standard output.")
    p.add_argument("-s", "--suite", choices=sorted(SUITES), help="Use a built-in machine instead of a config file.")
    p.add_argument("--block", type=int, default=5, metavar="N", help="Output group size; 0 disables grouping. Default: 5")
    p.add_argument("--upper", action="store_true", help="Upper-case message lines before converting.")
    p.add_argument(
        "--debug", nargs="+", default=[], metavar="COMPONENT", choices=Debug.components(),
        help="Trace the given components (%(choices)s)."
    )
    args = p.parse_args(argv)

    # with --suite the positionals shift left by one
    if args.suite is not None and args.config is not None:
        if args.output is not None:
            p.error("too many arguments for --suite")
        args.config, args.input, args.output = None, args.config, args.input
    return args


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.debug:
        debug.enable(*args.debug)

    cfg = Config(block=args.block, upper=args.upper)
    try:
        machine = load_machine(args.config, args.suite)
        src = open(args.input, encoding="utf-8") if args.input else sys.stdin
        try:
            dst = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
            try:
                process(machine, src, dst, cfg)
            finally:
                if dst is not sys.stdout:
                    dst.close()
        finally:
            if src is not sys.stdin:
                src.close()
    except EnigmaError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: could not open {exc.filename}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
