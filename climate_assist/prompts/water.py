from __future__ import annotations

from ..schemas import WaterConservationRequest
from .common import describe


_WATER_SHAPE = """{
  "current_usage_analysis": {
    "daily_usage": [number],
    "monthly_usage": [number],
    "usage_category": "low|average|high|excessive",
    "comparison_to_average": "string"
  },
  "conservation_strategies": [
    {
      "strategy": "string",
      "description": "string",
      "implementation_cost": [number],
      "annual_savings_liters": [number],
      "annual_savings_dollars": [number],
      "payback_period_months": [number],
      "difficulty": "easy|moderate|difficult",
      "priority": "high|medium|low"
    }
  ],
  "total_potential_savings": {
    "annual_liters": [number],
    "annual_dollars": [number],
    "percentage_reduction": [number]
  }
}"""


def build_water_prompt(request: WaterConservationRequest) -> str:
    location = describe(request.location, default="your region")
    budget = describe(request.budget if request.budget else 5000)
    return (
        f"You are a water conservation expert. Analyze water usage for {location} and "
        "provide practical conservation strategies.\n\n"
        f"Property: {describe(request.property_size)}\n"
        f"Current usage: {describe(request.current_usage)} L/day\n"
        f"Location: {location}\n"
        f"Budget: ${budget}\n"
        f"Water source: {describe(request.water_source, default='mains water')}\n\n"
        "All currency amounts must be in US dollars.\n\n"
        f"Return ONLY a JSON object:\n{_WATER_SHAPE}\n\n"
        "Base on regional water conservation practices."
    )
