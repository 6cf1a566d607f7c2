# src/cli/main.py

import argparse
import asyncio
import sys
from typing import List, Optional

from agent.config import DEFAULT_CONFIG_PATH, ConfigError
from agent.shell import AgentShell


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="humini-agent",
        description="Humini agent shell: console commands and AI chat routing.",
    )
    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to the YAML configuration document (default: %(default)s)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Run without a game connection (console commands only)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    shell = AgentShell(args.config, offline=args.offline, debug=args.debug)

    try:
        return asyncio.run(shell.run())
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
