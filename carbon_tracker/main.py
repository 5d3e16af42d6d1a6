"""
Main FastAPI application entry point.

The ENVIRONMENT variable picks the config file (development by default).
"""
import logging
import os

import uvicorn

from carbon_tracker.core.config import get_config_file_for_environment
from carbon_tracker.create_app import get_app

app = get_app(get_config_file_for_environment())


def run():
    """Run the API with uvicorn."""
    try:
        uvicorn.run(
            app,
            host="0.0.0.0",
            port=int(os.environ.get("PORT", 8000)),
            log_level="info",
            loop="asyncio",
        )
    except Exception as e:
        logging.error(f"Error running FastAPI: {e}")
        raise


if __name__ == "__main__":
    run()
