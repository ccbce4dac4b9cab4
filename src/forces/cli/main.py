"""Entry point for the forces command line."""

import argparse
import sys
from typing import Optional, Sequence

from loguru import logger

from forces import __version__
from forces.cli.commands import Command, build_command_table
from forces.config import Settings, load_settings
from forces.domain.exceptions import ForcesError
from forces.infrastructure.parsers import URLParsingError


def build_parser(commands: dict[str, Command]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forces",
        description="Parse Codeforces contests into local tests and solution stubs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-level", help="Log level (default: FORCES_LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    for command in commands.values():
        command.configure(subparsers.add_parser(command.name, help=command.help))
    return parser


def setup_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def dispatch(
    argv: Sequence[str],
    commands: dict[str, Command],
    settings: Settings,
) -> int:
    """Parse argv and run the selected command, returning its exit status."""
    args = build_parser(commands).parse_args(argv)

    level = "DEBUG" if args.verbose else (args.log_level or settings.log_level)
    setup_logging(level)

    try:
        return commands[args.command].handler(args, settings)
    except (ForcesError, URLParsingError) as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


def main(argv: Optional[Sequence[str]] = None) -> None:
    commands = build_command_table()
    settings = load_settings()
    sys.exit(dispatch(sys.argv[1:] if argv is None else argv, commands, settings))


if __name__ == "__main__":
    main()
