"""CLI entrypoint for composing a crossword from word/definition text."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from crossgrid.core.constants import PlacementMode
from crossgrid.core.exceptions import CrosswordError
from crossgrid.engine.pipeline import PipelineConfig, run_pass
from crossgrid.io.placement import JsonFilePlacement, PlacementCollaborator, parse_mode
from crossgrid.utils.logger import configure_logging, get_logger
from crossgrid.utils.pretty import pretty_print_puzzle


LOGGER = get_logger("crossgrid.cli")


def read_input(path: Path | None) -> str:
    """Read the word list from ``path``, or from stdin when omitted."""
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compose a crossword grid and clue lists from 'word definition' lines",
    )
    parser.add_argument(
        "words_file",
        type=Path,
        nargs="?",
        help="File with one 'word definition...' entry per line (stdin when omitted)",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--placement",
        type=Path,
        metavar="FILE",
        help="JSON placement document produced by an external generator",
    )
    source.add_argument(
        "--placement-url",
        type=str,
        metavar="URL",
        help="Base URL of a placement service",
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=[m.value for m in PlacementMode],
        default=PlacementMode.INPUT_ORDER.value,
        help="Placement mode forwarded to the generator",
    )
    parser.add_argument(
        "--hide-letters",
        action="store_true",
        help="Print mode: hide letters, keep clue numbers",
    )
    parser.add_argument(
        "--strict-crossings",
        action="store_true",
        help="Fail when crossing words disagree on a shared letter",
    )
    parser.add_argument(
        "--skip-comments",
        action="store_true",
        help="Ignore input lines starting with '#'",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_collaborator(args: argparse.Namespace) -> PlacementCollaborator:
    if args.placement_url is not None:
        from crossgrid.io.placement_client import PlacementServiceClient

        return PlacementServiceClient(base_url=args.placement_url)
    return JsonFilePlacement(args.placement)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    config = PipelineConfig(
        strict_crossings=args.strict_crossings,
        comment_prefix="#" if args.skip_comments else None,
    )
    try:
        text = read_input(args.words_file)
    except OSError as exc:
        parser.error(f"cannot read {args.words_file}: {exc}")

    try:
        result = run_pass(text, parse_mode(args.mode), build_collaborator(args), config)
    except CrosswordError as exc:
        LOGGER.error("Composition failed: %s", exc)
        return 1

    if args.output:
        output_text = json.dumps(result.to_jsonable(), ensure_ascii=False, indent=2)
        args.output.write_text(output_text, encoding="utf-8")
    else:
        pretty_print_puzzle(result, hide_letters=args.hide_letters)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
