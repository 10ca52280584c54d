#!/usr/bin/env python3
"""
Database Initialization Script
==============================

Initialize the Tierwise MongoDB database with indexes and optional seed data.

Usage:
    python scripts/init_databases.py
    python scripts/init_databases.py --seed

Version: 0.1.0
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.config import settings
from shared.logging import get_logger, setup_logging

setup_logging(
    log_level="INFO",
    json_logs=False,
    service_name="init-db",
    environment=settings.environment.value,
)
logger = get_logger(__name__)


async def init_mongodb() -> bool:
    """Initialize MongoDB with collections and indexes."""
    from shared.database.mongodb import MongoDBClient

    logger.info("mongodb_init_started")

    try:
        client = MongoDBClient.get_client()

        await MongoDBClient.create_indexes()

        info = await client.server_info()
        logger.info("mongodb_init_completed", version=info["version"])
        return True

    except Exception as e:
        logger.error("mongodb_init_failed", error=str(e))
        return False


async def seed_data() -> bool:
    """Seed a demo client and evaluation for development."""
    from services.client_evaluation.dependencies import (
        get_client_service,
        get_evaluation_service,
    )
    from services.client_evaluation.exceptions import ConflictError, ServiceError

    logger.info("seed_started")

    try:
        await get_client_service().register(
            {"name": "Acme", "email": "contact@acme.example", "website": "https://acme.example"}
        )
    except ConflictError:
        logger.info("seed_client_exists", email="contact@acme.example")
    except ServiceError as e:
        logger.error("seed_failed", error=e.message)
        return False

    try:
        evaluation = await get_evaluation_service().create(
            {
                "clientName": "Acme",
                "clientEmail": "contact@acme.example",
                "score": 750,
                "preciseScore": 740,
                "totalScore": 750,
            }
        )
    except ServiceError as e:
        logger.error("seed_failed", error=e.message)
        return False

    logger.info("seed_completed", evaluation_id=evaluation.id, tier=evaluation.tier)
    return True


async def main(args: argparse.Namespace) -> int:
    """Main initialization function."""
    from shared.database.mongodb import MongoDBClient

    results = {"MongoDB": await init_mongodb()}

    if args.seed and results["MongoDB"]:
        results["Seed Data"] = await seed_data()

    await MongoDBClient.close()

    failed = [name for name, success in results.items() if not success]
    for name, success in results.items():
        logger.info("init_result", component=name, ok=success)

    if failed:
        logger.error("init_failed", components=failed)
        return 1

    logger.info("init_succeeded")
    return 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Initialize the Tierwise database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--seed",
        action="store_true",
        help="Seed a demo client and evaluation",
    )

    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    exit_code = asyncio.run(main(args))
    sys.exit(exit_code)
