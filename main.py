"""
Main entry point for the TalentFlow API in local development.

Creates the tables, optionally loads the demo data, and serves the API.

Usage:
    python main.py            # create tables and serve
    python main.py --seed     # also load demo jobs, candidates and assessments
"""

import argparse

import uvicorn

from config.settings import settings
from seed.talent_seed import seed_talent_data
from utils.database import init_db
from utils.logging_config import configure_logging


def main():
    parser = argparse.ArgumentParser(description="Run the TalentFlow API")
    parser.add_argument("--seed", action="store_true", help="Load demo data into an empty database first")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    args = parser.parse_args()

    configure_logging()
    init_db()
    if args.seed:
        seed_talent_data()

    uvicorn.run(
        "api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
