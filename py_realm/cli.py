#!/usr/bin/env python3
"""
Run a realm command script.

Each non-blank line is an operation name followed by its arguments, e.g.::

    add_town hki "Helsinki" (100,200) 30
    add_road hki tre
    shortest_route hki tre

Lines starting with ``#`` are comments. Names may be quoted; coordinates are
written ``(x,y)`` or ``x,y``.
"""

import argparse
import shlex
import sys
from typing import Callable, Dict, List, Optional, Sequence, TextIO, Tuple

import structlog

from .config import settings
from .core import Coord, Realm, RealmOptions
from .exceptions import CommandError, RealmError
from .logging_config import configure_logging

logger = structlog.get_logger()


def parse_coord(text: str) -> Coord:
    parts = text.strip().strip("()").split(",")
    if len(parts) != 2:
        raise CommandError(f"Invalid coordinate {text!r}")
    try:
        return Coord(int(parts[0]), int(parts[1]))
    except ValueError as e:
        raise CommandError(f"Invalid coordinate {text!r}") from e


def parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError as e:
        raise CommandError(f"Invalid integer {text!r}") from e


# operation name -> argument parsers, in call order
COMMANDS: Dict[str, Tuple[Callable, ...]] = {
    "town_count": (),
    "clear_all": (),
    "add_town": (str, str, parse_coord, parse_int),
    "get_town_name": (str,),
    "get_town_coordinates": (str,),
    "get_town_tax": (str,),
    "all_towns": (),
    "find_towns": (str,),
    "change_town_name": (str, str),
    "towns_alphabetically": (),
    "towns_distance_increasing": (),
    "towns_nearest": (parse_coord,),
    "min_distance": (),
    "max_distance": (),
    "remove_town": (str,),
    "add_vassalship": (str, str),
    "get_town_vassals": (str,),
    "taxer_path": (str,),
    "longest_vassal_path": (str,),
    "total_net_tax": (str,),
    "clear_roads": (),
    "all_roads": (),
    "add_road": (str, str),
    "remove_road": (str, str),
    "get_roads_from": (str,),
    "any_route": (str, str),
    "least_towns_route": (str, str),
    "road_cycle_route": (str,),
    "shortest_route": (str, str),
    "trim_road_network": (),
}


def format_result(result) -> str:
    if result is None:
        return "ok"
    if isinstance(result, Coord):
        return f"({result.x},{result.y})"
    if isinstance(result, bool):
        return "true" if result else "false"
    if isinstance(result, list):
        if not result:
            return "(none)"
        return " ".join(
            f"{item[0]}-{item[1]}" if isinstance(item, tuple) else str(item)
            for item in result
        )
    return str(result)


def execute(realm: Realm, line: str) -> str:
    """Run one command line against ``realm`` and return its printable result."""
    try:
        tokens = shlex.split(line, comments=True)
    except ValueError as e:
        raise CommandError(f"Unparsable line: {e}") from e
    if not tokens:
        return ""

    name, raw_args = tokens[0], tokens[1:]
    if name not in COMMANDS:
        raise CommandError(f"Unknown command {name!r}")

    parsers = COMMANDS[name]
    if len(raw_args) != len(parsers):
        raise CommandError(
            f"{name} expects {len(parsers)} argument(s), got {len(raw_args)}"
        )

    args = [parse(raw) for parse, raw in zip(parsers, raw_args)]
    result = getattr(realm, name)(*args)
    if name in ("shortest_route", "any_route", "least_towns_route", "road_cycle_route"):
        distance = realm.route_distance(result)
        if len(result) > 1 and distance >= 0:
            return f"{format_result(result)} (distance {distance})"
    return format_result(result)


def run_script(realm: Realm, lines: Sequence[str], out: TextIO) -> int:
    """Execute every line; returns the number of lines that failed."""
    failures = 0
    for number, line in enumerate(lines, start=1):
        try:
            output = execute(realm, line)
        except RealmError as e:
            failures += 1
            logger.warning("Command failed", line=number, error=str(e))
            out.write(f"line {number}: error: {e}\n")
            continue
        if output:
            out.write(output + "\n")
    return failures


def read_script(path: str) -> List[str]:
    """Lines of the script at ``path``, or of standard input for ``-``."""
    if path == "-":
        return sys.stdin.read().splitlines()
    try:
        with open(path, encoding="utf-8") as f:
            return f.read().splitlines()
    except OSError as e:
        raise CommandError(f"Cannot read script {path!r}: {e.strerror}") from e


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a realm command script")
    parser.add_argument("script", help="Command script, or - for standard input")
    parser.add_argument("--log-level", help="Override the configured log level")
    parser.add_argument(
        "--no-cycle-guard",
        action="store_true",
        help="Allow vassalships that create cycles",
    )

    args = parser.parse_args(argv)

    run_settings = settings
    if args.log_level:
        run_settings = settings.model_copy(update={"log_level": args.log_level})
    configure_logging(run_settings)

    options = RealmOptions.from_settings(run_settings)
    if args.no_cycle_guard:
        options = options.model_copy(update={"vassal_cycle_guard": False})

    try:
        lines = read_script(args.script)
    except CommandError as e:
        logger.error("Command script unavailable", script=args.script, error=str(e))
        sys.stderr.write(f"error: {e}\n")
        return 1

    realm = Realm(options)
    logger.info("Running command script", script=args.script, lines=len(lines))
    failures = run_script(realm, lines, sys.stdout)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
