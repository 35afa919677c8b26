"""
Main seed runner script.
This script runs all seeding operations in the correct order.

Usage:
    python -m seed.run_all
"""

from seed.talent_seed import seed_talent_data
from utils.logging_config import configure_logging


def run_all_seeds():
    """Run all seed operations."""
    configure_logging()

    print("=" * 60)
    print("STARTING ALL SEEDING OPERATIONS")
    print("=" * 60)
    print()

    # Jobs, candidates with stage history, assessments
    if not seed_talent_data():
        print("Database already has jobs; nothing to seed")

    print()
    print("=" * 60)
    print("ALL SEEDING OPERATIONS COMPLETED")
    print("=" * 60)


if __name__ == "__main__":
    run_all_seeds()
