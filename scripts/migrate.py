#!/usr/bin/env python3
"""
Create the database if needed and apply all Alembic migrations.

Usage:
    ENVIRONMENT=production python scripts/migrate.py
"""

import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from carbon_tracker.core.config import get_config, get_config_file_for_environment
from carbon_tracker.database.base import apply_db_migration

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


if __name__ == "__main__":
    asyncio.run(apply_db_migration(get_config(get_config_file_for_environment())))
