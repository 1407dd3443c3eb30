"""Main CLI entry point for edn-tsv."""

import argparse
import io
import logging
import os
import sys

from .pipeline import Pipeline
from .utils import ParseError
from .writer import TsvWriter

logger = logging.getLogger(__name__)


def configure_logging(log_level: str) -> None:
    """Configure root logging for the CLI.

    Messages go to stderr unadorned so warnings read as plain diagnostic lines.
    """
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(message)s",
        stream=sys.stderr,
    )


def use_utf8(stream: object) -> None:
    """Switch a standard stream to UTF-8 where it is a reconfigurable text stream."""
    if isinstance(stream, io.TextIOWrapper) and stream.encoding.lower() not in ("utf-8", "utf8"):
        stream.reconfigure(encoding="utf-8")


def silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail again."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert line-delimited EDN maps from stdin into a tab-separated table on stdout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read EDN maps from stdin, write TSV to stdout
  edn-tsv < records.edn > records.tsv

  # Also show record counts on stderr
  edn-tsv --logLevel INFO < records.edn > records.tsv
        """,
    )
    parser.add_argument(
        "--logLevel",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for edn-tsv."""
    args = parse_args(argv)
    configure_logging(args.logLevel)

    use_utf8(sys.stdin)
    use_utf8(sys.stdout)

    try:
        stats = Pipeline(sys.stdin, TsvWriter(sys.stdout)).run()
        logger.info("Done! Rows written: %s | Columns: %s", stats["total_rows"], stats["num_columns"])

    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        sys.exit(130)

    except ParseError as e:
        # CRITICAL so no --logLevel can hide the fatal line
        logger.critical("error: %s", e)
        sys.exit(1)

    except (OSError, UnicodeError) as e:
        if isinstance(e, BrokenPipeError):
            silence_stdout()
        logger.critical("error: %s", e)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
