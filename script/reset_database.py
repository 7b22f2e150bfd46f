#!/usr/bin/env python3
"""
Database Reset Script
Reset the PostgreSQL store used when STORE_BACKEND=postgres

Features:
1. Drop & Recreate Tables - bookings, tours and users are wiped
2. Seed Catalog - tours and users from SEED_DATA_PATH (or the bundled seed file)

Notes:
- Booked slot counters start at zero again, so run this only against dev databases
- Pass --no-seed to leave the tables empty
"""

import argparse
import asyncio

from src.platform.config.core_setting import settings
from src.platform.constant.path import DEFAULT_SEED_DATA_PATH
from src.platform.database.orm_db_setting import Database
import src.service.tour_booking.driven_adapter.model  # noqa: F401
from src.service.tour_booking.driven_adapter.seed_data_loader import load_seed_data, seed_postgres


async def reset_database(*, seed: bool) -> None:
    database = Database()
    try:
        print('🧹 Dropping tables...')
        await database.drop_tables()
        print('🏗️  Creating tables...')
        await database.create_tables()

        if seed:
            seed_path = settings.SEED_DATA_PATH or DEFAULT_SEED_DATA_PATH
            data = load_seed_data(seed_path)
            await seed_postgres(data, database=database)
            print(f'   ✅ Seeded {len(data.tours)} tours and {len(data.users)} users')
    finally:
        await database.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description='Reset the tour booking database')
    parser.add_argument('--no-seed', action='store_true', help='skip loading seed data')
    args = parser.parse_args()

    print(f'🚀 Resetting {settings.POSTGRES_DB} on {settings.POSTGRES_SERVER}')
    asyncio.run(reset_database(seed=not args.no_seed))
    print('🎉 Database reset complete')


if __name__ == '__main__':
    main()
