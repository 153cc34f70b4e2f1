from __future__ import annotations

from ..domain.coefficients import DEFAULT_GOAL_DAYS
from ..schemas import ImpactRequest
from .common import describe


def build_impact_prompt(request: ImpactRequest) -> str:
    title = describe(request.goal_title, default="Environmental goal")
    description = describe(request.goal_description, default="No additional description")
    days = request.duration_days or DEFAULT_GOAL_DAYS
    return f"""You are an environmental impact calculator specializing in rural and regional areas. Calculate the realistic environmental impact of this goal for rural communities:

Goal: "{title}"
Description: "{description}"
Duration: {days} days

RURAL CONTEXT:
- Consider remote locations, extreme weather, and limited infrastructure
- Factor in long supply chains and transport distances to rural communities
- Account for water scarcity, wildfire risks, and drought conditions
- Include solar power potential and off-grid living benefits
- Consider local land management practices where relevant

Please calculate and return ONLY a JSON object with these exact fields:
{{
  "co2_saved": [number in kg],
  "water_saved": [number in liters],
  "energy_saved": [number in kWh],
  "waste_reduced": [number in kg],
  "impact_description": "[brief description focusing on rural environmental benefits]"
}}

Base calculations on rural conditions:
- Water conservation in drought-prone areas: higher impact per liter saved
- Solar energy adoption: significant benefits in sunny rural regions
- Reducing transport emissions: major impact due to long distances
- Waste reduction: critical in remote areas with limited disposal options
- Native plant gardening: supports local ecosystems and reduces water use

Make numbers realistic for rural conditions. Return ONLY the JSON object."""
