# scripts/setup/seed_db.py
"""
Load the sample fleet (10 vehicles, 15 shipments, 20 telemetry readings).

Usage:
    python scripts/setup/seed_db.py            # skip if vehicles already exist
    python scripts/setup/seed_db.py --reset    # wipe fleet tables first
"""

import sys
import os
import argparse
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy.exc import SQLAlchemyError
from app.database import SessionLocal, create_tables
from app.seed import seed_data
from app.services.errors import FleetError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Seed the fleet tracking database")
    parser.add_argument("--reset", action="store_true", help="Delete existing fleet data before seeding")
    args = parser.parse_args()

    create_tables()
    db = SessionLocal()
    try:
        if seed_data(db, reset=args.reset):
            print("✅ Database seeded successfully")
        else:
            print("ℹ️  Data already present: use --reset to reseed")
    except (FleetError, SQLAlchemyError) as e:
        logger.error(f"Error seeding database: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
