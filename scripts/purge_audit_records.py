"""Purge audit records older than the retention window.

Usage:
    python -m scripts.purge_audit_records [--days N]
Defaults to AUDIT_RETENTION_DAYS. Intended for cron; never run from request handling.
"""

import argparse
import asyncio
import sys

from tenantguard.core.config import get_settings
from tenantguard.infrastructure.persistence.database import dispose_engine, get_session_factory
from tenantguard.infrastructure.services.audit_retention import purge_expired_audit_records
from tenantguard.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Delete expired audit records in one transaction."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--days",
        type=int,
        default=settings.audit_retention_days,
        help="retention window in days (default: AUDIT_RETENTION_DAYS)",
    )
    args = parser.parse_args()
    if args.days < 1:
        print("--days must be at least 1", file=sys.stderr)
        sys.exit(1)

    setup_logging()
    session_factory = get_session_factory()
    try:
        async with session_factory() as session:
            async with session.begin():
                deleted = await purge_expired_audit_records(session, args.days)
    finally:
        await dispose_engine()
    print(f"Purged {deleted} audit record(s) older than {args.days} day(s)")


if __name__ == "__main__":
    asyncio.run(main())
