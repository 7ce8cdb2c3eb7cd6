"""Command-line interface for running the ``!faceit`` command against a roster file."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from .command import CommandOrchestrator, notify_admins
from .config import (
    CONFIG_FILE_NAME,
    PluginConfig,
    describe_api_key_problem,
    load_config,
)
from .host import ConsoleHost, load_roster
from .report import ANSI, PLAIN

LOG_FORMAT = "[Faceit Elo] %(asctime)s.%(msecs)03d %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="faceit-elo",
        description="Show FACEIT Elo ratings for the players on a CS2 server",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(CONFIG_FILE_NAME),
        help="Plugin config file, created with defaults if missing",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=Path(".env"),
        help="Optional .env file that may define FACEIT_API_KEY",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging regardless of the DebugMode setting",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Run !faceit as a player from the roster",
    )
    lookup_parser.add_argument(
        "--roster", type=Path, required=True, help="Roster snapshot JSON file"
    )
    lookup_parser.add_argument(
        "--invoker",
        required=True,
        help="Steam id of the player issuing the command",
    )
    lookup_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Print without ANSI colors",
    )
    lookup_parser.add_argument(
        "query",
        nargs="*",
        help="Player name for detailed stats; omit to list both teams",
    )

    subparsers.add_parser(
        "check-config",
        help="Create the config file if needed and validate the API key",
    )

    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )
    logging.getLogger("faceit_elo").setLevel(logging.DEBUG if debug else logging.INFO)


async def _lookup(
    host: ConsoleHost, config: PluginConfig, args: argparse.Namespace
) -> None:
    palette = PLAIN if args.no_color else ANSI
    problem = describe_api_key_problem(config)
    if problem is not None:
        await notify_admins(host, config, problem, is_error=True, palette=palette)
    orchestrator = CommandOrchestrator(host, config, palette=palette)
    await orchestrator.handle(args.invoker, args.query)


def _run_lookup(args: argparse.Namespace, config: PluginConfig) -> int:
    try:
        roster = load_roster(args.roster)
    except (OSError, ValueError, ValidationError) as exc:
        print(f"Could not read roster {args.roster}: {exc}", file=sys.stderr)
        return 1

    host = ConsoleHost(roster, viewer_id=args.invoker)
    asyncio.run(_lookup(host, config, args))
    return 0


def _run_check_config(args: argparse.Namespace, config: PluginConfig) -> int:
    problem = describe_api_key_problem(config)
    if problem is not None:
        print(f"{args.config}: {problem}", file=sys.stderr)
        return 1
    print(f"{args.config}: OK (visibility={config.output_visibility})")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    config = load_config(args.config, env_file=args.env_file)
    if config.debug_mode:
        _configure_logging(True)

    if args.command == "lookup":
        return _run_lookup(args, config)
    if args.command == "check-config":
        return _run_check_config(args, config)
    parser.error(f"Unknown command {args.command}")
    return 1


if __name__ == "__main__":  # pragma: no cover - entry point
    raise SystemExit(main())
