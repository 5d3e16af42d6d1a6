"""
Application constants.
"""
from enum import Enum


class ConfigFile:
    """Configuration file names."""
    PRODUCTION = "production.toml"
    DEVELOPMENT = "development.toml"
    TEST = "test.toml"


class EmissionCategory:
    """Emission category constants."""
    TRANSPORTATION = "transportation"
    ENERGY = "energy"
    DIET = "diet"
    SHOPPING = "shopping"
    WASTE = "waste"


class EmissionCategoryEnum(str, Enum):
    """Emission category enum for API parameters."""
    TRANSPORTATION = "transportation"
    ENERGY = "energy"
    DIET = "diet"
    SHOPPING = "shopping"
    WASTE = "waste"


class Period:
    """Aggregation period tokens."""
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


# Bucket label formats for the time series
DAILY_BUCKET_FORMAT = "%Y-%m-%d"
MONTHLY_BUCKET_FORMAT = "%Y-%m"

NOTES_MAX_LENGTH = 500

# Stored precision of emissions.amount and emissions.co2e
AMOUNT_MAX_DIGITS = 12
AMOUNT_DECIMAL_PLACES = 4
CO2E_MAX_DIGITS = 24
CO2E_DECIMAL_PLACES = 10
DEFAULT_WEEKLY_GOAL = 50
RECENT_EMISSIONS_LIMIT = 100
