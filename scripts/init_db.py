#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the ledger tables and optionally records a sample meal for today
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("init_db")

SAMPLE_MEAL = {"name": "샘플 식사", "calories": 500, "carbs": 60, "protein": 20, "fat": 15}


def init_tables() -> bool:
    """Create the ledger tables"""
    logger.info("=" * 60)
    logger.info("Initializing ledger database...")
    logger.info("=" * 60)

    from sqlalchemy import inspect
    from sqlalchemy.exc import SQLAlchemyError

    from domain.models.database import engine, init_database

    try:
        init_database()
        tables = inspect(engine).get_table_names()
        logger.info(f"✓ Created {len(tables)} tables: {', '.join(tables)}")
        return True
    except SQLAlchemyError:
        logger.exception("✗ Failed to initialize database")
        return False


def seed_sample_meal() -> bool:
    """Record a sample meal on today's date"""
    from app.exceptions import LedgerError
    from core.utils.dates import today
    from domain.models import SessionLocal
    from repositories import MealRepository

    db = SessionLocal()
    try:
        meal = MealRepository(db).add(SAMPLE_MEAL, today())
        logger.info(f"✓ Seeded sample meal {meal.meal_id} on {meal.eaten_at.date()}")
        return True
    except LedgerError:
        logger.exception("✗ Failed to seed sample meal")
        return False
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the MealLedger database")
    parser.add_argument(
        "--seed", action="store_true", help="Record a sample meal for today"
    )
    args = parser.parse_args(argv)

    if not init_tables():
        return 1
    if args.seed and not seed_sample_meal():
        return 1
    return 0


if __name__ == "__main__":
    exit_code = main()

    print("\n" + "=" * 60)
    if exit_code == 0:
        print("SUCCESS! The meal ledger database is ready to use.")
    else:
        print("FAILED! Check the errors above.")
    print("=" * 60 + "\n")

    sys.exit(exit_code)
