"""Per-category coefficients behind the fallback calculators.

Placeholder magnitudes, not engineering data. Keep them here so they can be
tuned without touching the formulas.
"""

from __future__ import annotations

from typing import Dict, List, Tuple


# (bucket, title keywords, per-day rates); first matching bucket wins.
IMPACT_BUCKETS: List[Tuple[str, Tuple[str, ...], Dict[str, float]]] = [
    (
        "water_bottle",
        ("water", "bottle"),
        {"co2": 0.1, "water": 2, "energy": 0.5, "waste": 0.05},
    ),
    (
        "transport",
        ("walk", "bike", "transport"),
        {"co2": 2.5, "water": 1, "energy": 3, "waste": 0.1},
    ),
    (
        "food",
        ("food", "plant", "meat"),
        {"co2": 1.5, "water": 75, "energy": 1, "waste": 0.3},
    ),
    (
        "waste",
        ("waste", "recycle"),
        {"co2": 0.5, "water": 10, "energy": 0.8, "waste": 0.5},
    ),
]
IMPACT_GENERIC_RATES: Dict[str, float] = {
    "co2": 0.8,
    "water": 15,
    "energy": 1.2,
    "waste": 0.2,
}
IMPACT_DESCRIPTIONS: Dict[str, str] = {
    "water_bottle": "Using reusable water bottles for {days} days reduces plastic waste and manufacturing emissions",
    "transport": "Choosing eco-friendly transport for {days} days significantly reduces carbon emissions",
    "food": "Making sustainable food choices for {days} days reduces agricultural environmental impact",
    "waste": "Reducing waste for {days} days decreases landfill burden and resource consumption",
    "generic": "Maintaining this environmental habit for {days} days creates positive ecological impact",
}
DEFAULT_GOAL_DAYS = 7

# kg CO2 per operating hour, by equipment type.
EQUIPMENT_BASE_EMISSIONS: Dict[str, float] = {
    "Tractor": 25,
    "Harvester": 45,
    "Seeder": 18,
    "Sprayer": 12,
    "Cultivator": 15,
}
EQUIPMENT_DEFAULT_EMISSIONS = 20
FUEL_MULTIPLIERS: Dict[str, float] = {
    "Diesel": 1.0,
    "Petrol": 0.8,
    "Electric": 0.1,
    "Hybrid": 0.5,
}
FUEL_DEFAULT_MULTIPLIER = 1.0
WEEKS_PER_MONTH = 4.33
WEEKS_PER_YEAR = 52
KG_CO2_PER_LITRE_DIESEL = 2.68
FUEL_COST_PER_KG_CO2 = 0.15

SOLAR_PEAK_SUN_HOURS = 4
SOLAR_MIN_SYSTEM_KW = 3
SOLAR_SIZING_MARGIN = 1.2
SOLAR_PANEL_KW = 0.4
SOLAR_BATTERY_DAYS_FACTOR = 2
SOLAR_INVERTER_MARGIN = 1.2
SOLAR_COST_PER_KW = 1500
SOLAR_BASE_COST = 1000
SOLAR_REBATE_PER_KW = 300
SOLAR_SELF_CONSUMPTION_PCT = 70
ELECTRICITY_PRICE_PER_KWH = 0.3
SOLAR_ROI_YEARS = 20
SOLAR_ROI_EFFICIENCY = 0.8

DEFAULT_DAILY_WATER_USAGE = 300
DAYS_PER_MONTH = 30
