"""Command-line entry point: ``python -m fantasy_story [input] [output]``."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from contextlib import closing
from pathlib import Path

from fantasy_story.core.config import Settings, get_settings
from fantasy_story.core.exceptions import FantasyStoryError
from fantasy_story.core.logging import configure_logging, get_logger
from fantasy_story.engine.io import open_sink, read_script
from fantasy_story.engine.story import StoryEngine


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fantasy-story",
        description="Run a fantasy story script and write its output log.",
    )
    parser.add_argument("input", nargs="?", type=Path, help="Script to run (default: input.txt)")
    parser.add_argument(
        "output", nargs="?", type=Path, help="Output log to write (default: output.txt)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Silently ignore unknown command verbs",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Process exit code: 0 on success, 1 on a fatal startup error.
    """
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        overrides: dict[str, object] = {}
        if args.input is not None:
            overrides["input_path"] = args.input
        if args.output is not None:
            overrides["output_path"] = args.output
        if args.lenient:
            overrides["strict_commands"] = False
        if overrides:
            settings = Settings(**{**settings.model_dump(), **overrides})
    except FantasyStoryError as exc:
        print(f"fantasy-story: {exc}", file=sys.stderr)
        return 1

    configure_logging(
        level=args.log_level or settings.log_level,
        json_format=args.json_logs or settings.json_logs,
    )

    engine = StoryEngine(settings=settings)
    try:
        with closing(read_script(settings.input_path)) as lines:
            action_count = engine.read_header(lines)
            with open_sink(settings.output_path) as sink:
                engine.run_commands(lines, action_count, sink)
    except FantasyStoryError as exc:
        logger.error("Story aborted", error=exc.message, **exc.details)
        print(f"fantasy-story: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        logger.error("Cannot access story files", error=str(exc))
        print(f"fantasy-story: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
