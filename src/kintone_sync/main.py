"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from kintone_sync.app import sync_entities
from kintone_sync.config import ConfigurationError, configure_logging
from kintone_sync.domain.ports import SourceConnectionError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise MySQL tables into Kintone apps")
    parser.add_argument(
        "--entity",
        dest="entities",
        action="append",
        metavar="NAME",
        help="Only synchronise this entity from APPS (repeatable)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Environment file to load before reading configuration (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help="Logging verbosity (default: %(default)s)",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=parsed_args.log_level)
    load_dotenv(parsed_args.env_file)

    try:
        sync_entities(entity_names=parsed_args.entities)
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except SourceConnectionError:
        log.exception("Database connection failed")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(130)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
