from __future__ import annotations

import argparse
import logging
import shutil
import sys
from typing import Sequence


HELP_MAX_POSITION = 36
HELP_WIDTH = 110


class BackdropsHelpFormatter(argparse.HelpFormatter):
    def __init__(self, prog: str) -> None:
        term_width = shutil.get_terminal_size(fallback=(HELP_WIDTH, 24)).columns
        width = max(64, min(HELP_WIDTH, term_width - 2))
        max_help_position = max(22, min(HELP_MAX_POSITION, width // 3))
        super().__init__(prog, max_help_position=max_help_position, width=width)


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Terminal config directory holding 'backdrops/' "
        "(defaults to $WEZTERM_CONFIG_DIR, then $XDG_CONFIG_HOME/wezterm).",
    )
    parser.add_argument(
        "--background-color",
        default=None,
        help="Theme background colour used for the overlay layer.",
    )
    parser.add_argument(
        "--focus-color",
        default=None,
        help="Colour shown while focus mode is on (defaults to the background colour).",
    )
    parser.add_argument(
        "--state-file",
        default=None,
        help="Where the cursor is kept between runs "
        "(defaults to $XDG_STATE_HOME/backdrops/state.json).",
    )
    parser.add_argument(
        "--overrides-file",
        default=None,
        help="Where window overrides are written "
        "(defaults to $XDG_STATE_HOME/backdrops/overrides.json).",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug messages.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="backdrops",
        description="Rotate terminal background images.",
        formatter_class=BackdropsHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    _add_common_args(common)
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "random", parents=[common], help="Pick a random backdrop.", formatter_class=BackdropsHelpFormatter
    )
    subparsers.add_parser(
        "next", parents=[common], help="Move to the next backdrop.", formatter_class=BackdropsHelpFormatter
    )
    subparsers.add_parser(
        "prev",
        parents=[common],
        help="Move to the previous backdrop.",
        formatter_class=BackdropsHelpFormatter,
    )
    set_parser = subparsers.add_parser(
        "set",
        parents=[common],
        help="Select a backdrop by its 1-based index.",
        formatter_class=BackdropsHelpFormatter,
    )
    set_parser.add_argument("index", type=int, help="Index as listed by 'choices'.")
    subparsers.add_parser(
        "focus",
        parents=[common],
        help="Toggle focus mode (solid colour instead of the image).",
        formatter_class=BackdropsHelpFormatter,
    )
    subparsers.add_parser(
        "choices",
        parents=[common],
        help="List backdrops with their indices.",
        formatter_class=BackdropsHelpFormatter,
    )
    for name, help_text in (
        ("pick", "Choose a backdrop from the whole catalog."),
        ("browse", "Choose a folder, then an image inside it."),
    ):
        interactive = subparsers.add_parser(
            name, parents=[common], help=help_text, formatter_class=BackdropsHelpFormatter
        )
        interactive.add_argument(
            "--no-gui",
            action="store_true",
            help="Use a numbered list on the terminal instead of the raylib window.",
        )
    subparsers.add_parser(
        "current",
        parents=[common],
        help="Print the active backdrop path.",
        formatter_class=BackdropsHelpFormatter,
    )
    subparsers.add_parser(
        "diagnose",
        parents=[common],
        help="Print environment and catalog information.",
        formatter_class=BackdropsHelpFormatter,
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    args = list(argv if argv is not None else sys.argv[1:])
    return build_parser().parse_args(args)


def configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if getattr(args, "verbose", False):
        level = logging.DEBUG
    elif getattr(args, "quiet", False):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args)
    from backdrops.app import (
        run_browse,
        run_choices,
        run_current,
        run_cycle,
        run_diagnose,
        run_focus,
        run_pick,
        run_random,
        run_set,
    )

    runners = {
        "random": run_random,
        "next": run_cycle,
        "prev": run_cycle,
        "set": run_set,
        "focus": run_focus,
        "choices": run_choices,
        "pick": run_pick,
        "browse": run_browse,
        "current": run_current,
        "diagnose": run_diagnose,
    }
    return runners[args.command](args)
