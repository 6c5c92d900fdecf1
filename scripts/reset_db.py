"""Drop and recreate the donor tables.

Run from the project root with ``python -m scripts.reset_db``.
"""

import argparse
import asyncio
import sys

from app.core.settings import get_settings
from app.db.postgres.session import Base, close_db_session, get_engine
from app.features.donors import models  # noqa: F401


async def reset_database(keep_data: bool) -> None:
    """Recreate every table registered on ``Base.metadata``.

    With ``keep_data`` only missing tables are created.
    """
    settings = get_settings()

    print(
        f"🔌 Connecting to database: {settings.postgres_db} on {settings.postgres_host}"
    )

    try:
        async with get_engine().begin() as conn:
            if not keep_data:
                print("🗑️  Dropping donor tables...")
                await conn.run_sync(Base.metadata.drop_all)

            print("✨ Creating donor tables...")
            await conn.run_sync(Base.metadata.create_all)

        print("✅ Database reset successfully.")
    except Exception as e:
        print(f"❌ Error resetting database: {e}")
        sys.exit(1)
    finally:
        await close_db_session()


def main():
    parser = argparse.ArgumentParser(description="Reset the donor tables.")
    parser.add_argument(
        "--keep-data",
        action="store_true",
        help="Only create missing tables; never drop existing ones.",
    )
    args = parser.parse_args()

    if not args.keep_data:
        print("⚠️  WARNING: This will DELETE ALL DONOR RECORDS in the database.")
        confirm = input("Are you sure you want to continue? (y/N): ")
        if confirm.lower() != "y":
            print("Operation cancelled.")
            sys.exit(0)

    asyncio.run(reset_database(args.keep_data))


if __name__ == "__main__":
    main()
