#!/usr/bin/env python3
"""
CLI script to seed the database with a demo account and sample emissions.

Usage:
    # Basic seeding
    python scripts/seed_database.py

    # Replace the demo account's existing emissions
    python scripts/seed_database.py --clear

    # Only the last 30 days, up to 4 activities a day
    python scripts/seed_database.py --days 30 --per-day 4
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path so we can import carbon_tracker modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from carbon_tracker.core.config import get_config, get_config_file_for_environment
from carbon_tracker.database.base import get_db_url, get_engine_kw
from carbon_tracker.database.session_manager.db_session import Database
from carbon_tracker.services.aggregators.emission_aggregator import round_co2e
from carbon_tracker.services.seed_database import DEMO_PASSWORD, DemoSeeder
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

console = Console()


def print_header(text: str, style: str = "bold cyan"):
    """Print a formatted header using Rich Panel."""
    console.print(
        Panel(
            Text(text, justify="center", style=style),
            border_style="cyan",
            padding=(1, 2),
        )
    )


def print_config(args, config_file: str):
    config_table = Table(show_header=False, box=None, padding=(0, 2))
    config_table.add_column("Setting", style="bold yellow")
    config_table.add_column("Value", style="green")

    config_table.add_row("Config", config_file)
    config_table.add_row("Days", str(args.days))
    config_table.add_row("Max per day", str(args.per_day))
    config_table.add_row("Clear existing", "Yes" if args.clear else "No")

    console.print(config_table)
    console.print()


def print_stats(stats: dict):
    """Print seeding statistics using Rich Table."""
    print_header("SEEDING STATISTICS", "bold green")

    stats_table = Table(show_header=True, box=None, padding=(0, 2))
    stats_table.add_column("Category", style="bold cyan", width=20)
    stats_table.add_column("kg CO2e", justify="right", style="bold green")

    ordered = sorted(stats["by_category"].items(), key=lambda item: item[1], reverse=True)
    for category, total in ordered:
        stats_table.add_row(category, f"{round_co2e(total):,.2f}")

    console.print(stats_table)
    console.print()

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("Label", style="bold yellow")
    summary.add_column("Value", style="bold magenta")
    summary.add_row("Emissions created", str(stats["emissions"]))
    summary.add_row("Demo login", f"{stats['user']} / {DEMO_PASSWORD}")
    summary.add_row("Account", "created" if stats["user_created"] else "reused")

    console.print(summary)
    console.print()


async def main():
    """Main entry point for the seeding script."""
    parser = argparse.ArgumentParser(
        description="Seed the database with a demo account and sample emissions"
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete the demo account's emissions before seeding",
    )
    parser.add_argument(
        "--days", type=int, default=365, help="Days of history to generate"
    )
    parser.add_argument(
        "--per-day", type=int, default=2, help="Maximum activities per day"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed")

    args = parser.parse_args()
    config_file = get_config_file_for_environment()

    print_header("DATABASE SEEDING", "bold cyan")
    print_config(args, config_file)

    try:
        config = get_config(config_file)
        async_db_url = get_db_url(config)
        Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))
        logger.info("Database initialized")

        with console.status("[bold cyan]Seeding database...", spinner="dots"):
            async with DemoSeeder(seed=args.seed) as seeder:
                stats = await seeder.seed_all(
                    clear_existing=args.clear, days=args.days, per_day=args.per_day
                )

        print_stats(stats)
        console.print(
            Panel(
                Text("SEEDING COMPLETED SUCCESSFULLY", justify="center"),
                border_style="bold green",
                style="bold green",
            )
        )

    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        console.print()
        console.print(
            Panel(
                f"[bold red]SEEDING FAILED[/bold red]\n\n[red]{e!s}[/red]",
                border_style="bold red",
            )
        )
        console.print()
        sys.exit(1)

    finally:
        await Database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
