# scripts/setup/init_db.py
"""
Initialize database: creates all tables and loads the demo data set.
Run once before first launch with STORAGE_BACKEND=database.
Usage: python scripts/setup/init_db.py [--no-seed]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import argparse
from piloo.database import SessionLocal, create_tables, engine
from piloo.config import settings
from piloo.services.seed import seed_demo_data
from piloo.storage.sql import DatabaseStorage
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError


def main(seed: bool = True):
    print("🗄️  Piloo DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    # Test connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except SQLAlchemyError as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  sudo systemctl start postgresql")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"✅ Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if seed:
        print("\n🌱 Loading demo data...")
        if seed_demo_data(DatabaseStorage(SessionLocal)):
            print("✅ Demo accounts: admin@company.com / admin123, security@company.com / security123")
        else:
            print("ℹ️  Accounts already present — demo data skipped")

    print("\n🎉 Database ready! Start the backend with STORAGE_BACKEND=database:")
    print(f"   uvicorn piloo.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create Piloo tables and demo data")
    parser.add_argument("--no-seed", action="store_true", help="Create tables only")
    args = parser.parse_args()
    main(seed=not args.no_seed)
