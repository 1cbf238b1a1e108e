"""monpos - compute the layout of relatively positioned monitors (cli)."""

import argparse
import json
import pathlib
import sys

import shtab

from .ansi import ReportStyles, paint, wants_color
from .config_loader import ConfigLoader
from .layout import generate_positions
from .logging_setup import get_logger, init_logger
from .models import ExitCode, MonposError, OverlapError, Rect
from .pipeline import Layout, check_config
from .version import VERSION

__all__ = ["get_parser", "main"]

TOML_FILE = {
    "bash": "_shtab_monpos_compgen_TOMLFiles",
    "zsh": "_files -g '(*.toml|*.TOML|*.json)'",
    "tcsh": "f:*.toml",
}

PREAMBLE = {
    "bash": """
# $1=COMP_WORDS[1]
_shtab_monpos_compgen_TOMLFiles() {
  compgen -d -- $1  # recurse into subdirs
  compgen -f -X '!*?.toml' -- $1
  compgen -f -X '!*?.json' -- $1
}
""",
    "zsh": "",
    "tcsh": "",
}


def get_parser() -> argparse.ArgumentParser:
    """Return the command line parser."""
    parser = argparse.ArgumentParser(prog="monpos", description="Compute the layout of relatively positioned monitors")
    parser.add_argument(
        "--debug",
        help="Enable debug mode and log to a file",
        metavar="filename",
    ).complete = shtab.FILE
    parser.add_argument(
        "--config",
        help="Use a different configuration file or directory",
        metavar="filename",
        type=pathlib.Path,
    ).complete = TOML_FILE
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    shtab.add_argument_to(parser, preamble=PREAMBLE)

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("check", help="Validate the configuration and print the placement order")
    subparsers.add_parser("order", help="Print the placement order, one monitor per line")
    subparsers.add_parser("layout", help="Print the position of every monitor (default)")
    return parser


def _style(text: str, style: tuple[int, ...]) -> str:
    """Colorize `text` if stdout is a terminal."""
    if wants_color(sys.stdout):
        return paint(text, style)
    return text


def format_positions(positions: dict[str, Rect]) -> str:
    """Format the rectangles as an aligned table."""
    width = max((len(name) for name in positions), default=0)
    return "\n".join(
        f"{_style(name.ljust(width), ReportStyles.MONITOR)}  {rect.width}x{rect.height} at ({rect.x}, {rect.y})"
        for name, rect in positions.items()
    )


def _print_layout(command: str, layout: Layout, as_json: bool) -> None:
    """Print the successful result of `command`."""
    if as_json:
        data = layout.as_dict()
        if command != "layout":
            data.pop("positions")
        print(json.dumps(data, indent=2))
    elif command == "order":
        print("\n".join(layout.order))
    elif command == "check":
        print(f"{_style('OK', ReportStyles.OK)} monitors placed from '{layout.root}': {' -> '.join(layout.order)}")
    else:
        print(format_positions(layout.positions))


def _print_overlap(error: OverlapError, order: list[str], as_json: bool) -> None:
    """Print the positions which were computed despite the overlap."""
    if as_json:
        data = Layout(order, error.positions).as_dict()
        data["overlaps"] = [list(pair) for pair in error.pairs]
        print(json.dumps(data, indent=2))
    else:
        print(format_positions(error.positions))
        for line in str(error).splitlines():
            print(f"{_style('ERROR', ReportStyles.FAILURE)} {line}", file=sys.stderr)


def run(command: str, config_path: pathlib.Path | None, as_json: bool) -> ExitCode:
    """Run a command and return the exit code."""
    log = get_logger("monpos")
    loader = ConfigLoader(get_logger("monpos.loader"))
    try:
        config = loader.load(config_path)
    except MonposError as e:
        print(f"{_style('ERROR', ReportStyles.FAILURE)} {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    try:
        order = check_config(config)
        layout = Layout(order)
        if command == "layout":
            layout.positions = generate_positions(config, order)
    except OverlapError as e:
        _print_overlap(e, order, as_json)
        return ExitCode.LAYOUT_ERROR
    except MonposError as e:
        log.debug("layout failed", exc_info=True)
        print(f"{_style('ERROR', ReportStyles.FAILURE)} {e}", file=sys.stderr)
        return ExitCode.LAYOUT_ERROR

    _print_layout(command, layout, as_json)
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> None:
    """Entry point for the monpos command."""
    args = get_parser().parse_args(argv)
    init_logger(args.debug, force_debug=bool(args.debug))
    sys.exit(run(args.command or "layout", args.config, args.json))
