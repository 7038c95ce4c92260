from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from .config import load_config
from .pipeline import MultiSourceFetcher


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )


async def run(args: argparse.Namespace) -> bool:
    settings = load_config(args.env_file)
    configure_logging(args.verbose)
    fetcher = MultiSourceFetcher(settings, logger=logging.getLogger("lotteryintel.fetcher"))

    if args.history is not None:
        outcome = await fetcher.fetch_history(args.history)
    else:
        outcome = await fetcher.fetch_latest_draw()

    print(json.dumps(outcome.to_dict(), indent=2))
    return outcome.success


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch the latest Powerball draw and jackpot")
    parser.add_argument("--env-file", type=str, default=None, help="Path to .env file")
    parser.add_argument(
        "--history",
        type=int,
        default=None,
        metavar="N",
        help="Fetch the N most recent drawings with statistics instead.",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging (default INFO)."
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    try:
        succeeded = asyncio.run(run(args))
    except KeyboardInterrupt:
        print("Fetch cancelled by user.", file=sys.stderr)
        sys.exit(130)
    sys.exit(0 if succeeded else 1)


if __name__ == "__main__":
    main()
