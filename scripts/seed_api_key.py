"""Seed script to insert a user with an API key for local development/testing.

Usage:
  python scripts/seed_api_key.py
  python scripts/seed_api_key.py --role candidate --email jane@example.com --name "Jane Doe" --key jane-key
  python scripts/seed_api_key.py --key my-secret-key --reset
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import argparse
import logging

from sqlmodel import Session
from sqlalchemy.exc import SQLAlchemyError

from api.auth import hash_api_key
from models.user import User, UserRole
from repositories.user_repository import UserRepository
from utils.database import get_engine, init_db
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_RAW_KEY = "talentflow-admin"
DEFAULT_EMAIL = "admin@talentflow.local"
DEFAULT_NAME = "Admin"


def seed_api_key(
    raw_key: str = DEFAULT_RAW_KEY,
    email: str = DEFAULT_EMAIL,
    name: str = DEFAULT_NAME,
    role: str = UserRole.ADMIN.value,
    reset: bool = False,
) -> bool:
    key_hash = hash_api_key(raw_key)

    try:
        init_db()
        with Session(get_engine()) as db:
            repo = UserRepository(db)

            if reset:
                matches = {u.id: u for u in (repo.get_by_hash(key_hash), repo.get_by_email(email)) if u}
                for existing in matches.values():
                    repo.delete(existing)
                print(f"Reset: removed {len(matches)} existing user(s)")

            existing = repo.get_by_hash(key_hash)
            if existing:
                print(f"API key already exists (user={existing.email}, role={existing.role})")
                return True

            if repo.get_by_email(email):
                print(f"ERROR: {email} already has a different key; use --reset to replace it", file=sys.stderr)
                return False

            user = repo.create(User(email=email, name=name, role=role, key_hash=key_hash))

            print("API key seeded successfully:")
            print(f"  Raw key: {raw_key}")
            print(f"  Hash:    {key_hash[:16]}...")
            print(f"  User:    {user.name} <{user.email}>")
            print(f"  Role:    {user.role}")
            print(f"  User ID: {user.id}")
            return True

    except SQLAlchemyError:
        logger.exception("Failed to seed API key")
        return False


if __name__ == "__main__":
    configure_logging()

    parser = argparse.ArgumentParser(description="Seed a user and API key for local dev/testing")
    parser.add_argument("--key", default=DEFAULT_RAW_KEY, help=f"Raw API key value (default: {DEFAULT_RAW_KEY})")
    parser.add_argument("--email", default=DEFAULT_EMAIL, help=f"User email (default: {DEFAULT_EMAIL})")
    parser.add_argument("--name", default=DEFAULT_NAME, help="Display name")
    parser.add_argument("--role", default=UserRole.ADMIN.value, choices=[r.value for r in UserRole])
    parser.add_argument("--reset", action="store_true", help="Remove the existing user with this key or email first")
    args = parser.parse_args()

    ok = seed_api_key(raw_key=args.key, email=args.email, name=args.name, role=args.role, reset=args.reset)
    sys.exit(0 if ok else 1)
