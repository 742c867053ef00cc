"""Seed the global permission catalog (idempotent: only missing pairs are inserted).

Usage:
    python -m scripts.seed_permissions [--check]
--check validates the seed list and exits without touching the database.
Run after migrations on every deployment.
"""

import argparse
import asyncio
import sys

from tenantguard.core.config import get_settings
from tenantguard.infrastructure.persistence.database import dispose_engine, get_session_factory
from tenantguard.infrastructure.services.permission_catalog import (
    PERMISSION_SEEDS,
    seed_missing_permissions,
    validate_permission_seeds,
)
from tenantguard.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Validate the seed list, then insert whatever the catalog is missing."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--check", action="store_true", help="validate the seed list only"
    )
    args = parser.parse_args()

    problems = validate_permission_seeds(PERMISSION_SEEDS)
    if problems:
        for problem in problems:
            print(f"Invalid seed: {problem}", file=sys.stderr)
        sys.exit(1)
    if args.check:
        print(f"{len(PERMISSION_SEEDS)} permission seeds OK")
        return

    get_settings()
    setup_logging()
    session_factory = get_session_factory()
    try:
        async with session_factory() as session:
            async with session.begin():
                inserted = await seed_missing_permissions(session)
    finally:
        await dispose_engine()
    print(f"Inserted {inserted} permission(s); catalog has {len(PERMISSION_SEEDS)} seeds")


if __name__ == "__main__":
    asyncio.run(main())
