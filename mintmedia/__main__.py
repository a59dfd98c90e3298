"""
Command line entry point.

Usage:
    python -m mintmedia resolve ipfs://bafy... ar://abc123
    python -m mintmedia serve
"""

import argparse
import asyncio
import sys
from typing import Optional

from mintmedia.config import load_config
from mintmedia.context import build_resolver
from mintmedia.utils.logging_setup import setup_logging


async def _resolve(references: list[str], config_path: Optional[str]) -> list[str]:
    config = load_config(config_path)
    resolver = build_resolver(config)
    try:
        return await resolver.resolve_many(references)
    finally:
        await resolver.close()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="mintmedia", description=__doc__.splitlines()[1])
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--log-level", default="WARNING")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve references and print URLs")
    resolve_parser.add_argument("references", nargs="+")

    subparsers.add_parser("serve", help="Run the HTTP API")

    args = parser.parse_args(argv)

    if args.command == "serve":
        from mintmedia.main import main as serve
        serve(args.config)
        return 0

    setup_logging(log_level=args.log_level, log_to_file=False)
    for url in asyncio.run(_resolve(args.references, args.config)):
        print(url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
