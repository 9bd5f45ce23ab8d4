#!/usr/bin/env python
"""
Seed the database with built-in roles, permissions, accounts and vehicles.

The same reconciliation runs at application startup when SEED_ON_STARTUP is
true; this script is for databases served with seeding turned off.

Usage:
    python scripts/seed.py            # Reconcile and commit
    python scripts/seed.py --dry-run  # Report what would change, then roll back
"""

import argparse
import asyncio
import sys


# Add src to path for imports
sys.path.insert(0, "src")

from machine_emu.core.database import async_session_factory
from machine_emu.seeding import SeedReport, run_seed, seed_database


async def dry_run() -> SeedReport:
    """Run the seeding steps and roll them back."""
    async with async_session_factory() as session:
        report = await seed_database(session)
        await session.rollback()
    return report


async def main(dry: bool) -> None:
    report = await dry_run() if dry else await run_seed()

    verb = "Would change" if dry else "Changed"
    if not report.changed:
        print("Database already matches the seed policy")
        return

    print(f"{verb}:")
    for field, count in vars(report).items():
        if count:
            print(f"  {field.replace('_', ' ')}: {count}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed database with built-in data")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report changes without committing them",
    )
    args = parser.parse_args()

    asyncio.run(main(args.dry_run))
