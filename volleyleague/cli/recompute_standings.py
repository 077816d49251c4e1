"""Check (and optionally repair) a season's stored tallies.

Season tallies are updated incrementally as results come in. This command
re-derives them from the raw game results and reports any team whose stored
totals disagree.

Usage:
    python -m volleyleague.cli.recompute_standings --season-id 3
    python -m volleyleague.cli.recompute_standings --season-id 3 --apply

Exit codes:
    0 - Success (drift is reported, not treated as failure)
    1 - Failure (check logs for details)
"""

import argparse
import asyncio
import logging
import sys

from volleyleague.services.standings_service import recompute_season_tallies
from volleyleague.utils.db_async import SessionLocal, dispose_engine

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("recompute_standings")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--season-id", type=int, required=True, help="Season to check")
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Overwrite stored tallies with the derived values",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        async with SessionLocal() as db:
            result = await recompute_season_tallies(db, args.season_id, apply=args.apply)

        if not result.drift:
            logger.info(
                f"Season {result.season_id}: {result.teams_checked} team(s) checked, no drift"
            )
        else:
            verb = "repaired" if result.applied else "found (rerun with --apply to fix)"
            logger.info(
                f"Season {result.season_id}: drift {verb} for "
                f"{len(result.drift)} of {result.teams_checked} team(s)"
            )
        return 0

    except Exception as e:
        logger.error(f"Recompute failed for season {args.season_id}: {e}", exc_info=True)
        return 1

    finally:
        await dispose_engine()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
