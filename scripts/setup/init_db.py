# scripts/setup/init_db.py
"""
Initialize the local database (DATA_BACKEND=sql) and create all tables.
Run once before first launch, or after adding new models.
Optionally seeds a role profile so a token for that user passes the role gate.

Usage:
  python scripts/setup/init_db.py
  python scripts/setup/init_db.py --seed-profile <user-id> --role MANAGER --email manager@test.com
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text

from app.auth.rbac import Role
from app.config import get_settings
from app.database import build_engine, build_session_factory, create_tables
from app.models.profile import Profile


def seed_profile(engine, user_id: str, role: Role, email: str = None):
    db = build_session_factory(engine)()
    try:
        profile = db.get(Profile, user_id) or Profile(id=user_id)
        profile.role = role.value
        profile.email = email or profile.email
        db.add(profile)
        db.commit()
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create the fleet schema in DATABASE_URL")
    parser.add_argument("--seed-profile", metavar="USER_ID", help="Insert or update a profile row")
    parser.add_argument("--role", default=Role.MANAGER.value, choices=[r.value for r in Role])
    parser.add_argument("--email", default=None)
    args = parser.parse_args()

    settings = get_settings()
    engine = build_engine(settings.DATABASE_URL)

    print("🗄️  Fleet DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    # Test connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nCheck DATABASE_URL in .env and that the server is running.")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables(engine)
    tables = sorted(inspect(engine).get_table_names())
    print(f"✅ Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.seed_profile:
        seed_profile(engine, args.seed_profile, Role(args.role), args.email)
        print(f"\n👤 Profile {args.seed_profile} → {args.role}")

    print("\n🎉 Database ready! Start the backend with DATA_BACKEND=sql:")
    print("   uvicorn app.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
