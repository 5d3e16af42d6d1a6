"""
Static emission factor table.

kg CO2e per unit of quantity: km for transportation, kWh / m3 / litre for
energy, kg for diet and waste, items (or kg for plastic) for shopping.
Built once at import time and exposed read-only.
"""
from decimal import Decimal
from types import MappingProxyType

from carbon_tracker.utils.constants import EmissionCategory


def _freeze(table: dict[str, dict[str, str]]) -> MappingProxyType:
    return MappingProxyType(
        {
            category: MappingProxyType(
                {activity: Decimal(factor) for activity, factor in factors.items()}
            )
            for category, factors in table.items()
        }
    )


EMISSION_FACTORS = _freeze(
    {
        EmissionCategory.TRANSPORTATION: {
            "car": "0.21",
            "bus": "0.08",
            "train": "0.04",
            "plane": "0.25",
            "motorcycle": "0.11",
            "bicycle": "0",
            "walking": "0",
        },
        EmissionCategory.ENERGY: {
            "electricity": "0.5",
            "natural_gas": "2.0",
            "heating_oil": "2.7",
            "propane": "1.5",
        },
        EmissionCategory.DIET: {
            "beef": "27.0",
            "chicken": "6.9",
            "pork": "12.1",
            "fish": "5.1",
            "eggs": "4.5",
            "dairy": "3.2",
            "vegetables": "2.0",
            "fruits": "1.1",
        },
        EmissionCategory.SHOPPING: {
            "electronics": "50.0",
            "clothing": "15.0",
            "furniture": "100.0",
            "plastic": "6.0",
        },
        EmissionCategory.WASTE: {
            "plastic": "3.0",
            "paper": "1.5",
            "food": "2.5",
            "glass": "1.0",
        },
    }
)

# Unit label suggested to clients for each category
DEFAULT_UNITS = MappingProxyType(
    {
        EmissionCategory.TRANSPORTATION: "km",
        EmissionCategory.ENERGY: "kWh",
        EmissionCategory.DIET: "kg",
        EmissionCategory.SHOPPING: "items",
        EmissionCategory.WASTE: "kg",
    }
)

FALLBACK_FACTOR = Decimal("1")
