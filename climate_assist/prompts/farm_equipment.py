from __future__ import annotations

from ..schemas import FarmEquipmentRequest
from .common import JSON_ONLY_INSTRUCTION, describe


_EQUIPMENT_SHAPE = """{
  "carbonFootprint": {
    "weeklyEmissions": number (kg CO2),
    "monthlyEmissions": number (kg CO2),
    "annualEmissions": number (kg CO2),
    "fuelConsumption": number (liters per week),
    "costPerWeek": number (local currency)
  },
  "recommendations": [
    "string recommendation 1",
    "string recommendation 2",
    "string recommendation 3"
  ],
  "alternatives": [
    {
      "option": "string alternative name",
      "emissionReduction": "string percentage",
      "costImplication": "string cost description",
      "availability": "string availability in region"
    }
  ],
  "efficiencyTips": [
    "string tip 1",
    "string tip 2",
    "string tip 3"
  ]
}"""


def build_farm_equipment_prompt(request: FarmEquipmentRequest) -> str:
    return (
        "You are an agricultural carbon footprint expert. Calculate the carbon footprint "
        "and provide recommendations for farm equipment usage.\n\n"
        "EQUIPMENT DETAILS:\n"
        f"- Equipment Type: {describe(request.equipment_type)}\n"
        f"- Fuel Type: {describe(request.fuel_type)}\n"
        f"- Hours per Week: {describe(request.hours_per_week)}\n"
        f"- Farm Size: {describe(request.farm_size)} hectares\n"
        f"- Region: {describe(request.region, default='Rural area')}\n"
        f"- Country/Location: {describe(request.selected_country, default='Global')}\n\n"
        "Calculate realistic carbon emissions based on:\n"
        "- Standard fuel consumption rates for farm equipment\n"
        "- Regional factors (transport distances, fuel availability)\n"
        "- Equipment efficiency standards\n"
        "- Seasonal usage patterns in agriculture\n\n"
        f"{JSON_ONLY_INSTRUCTION}\n{_EQUIPMENT_SHAPE}\n\n"
        "Focus on practical farming conditions, equipment availability, and realistic "
        "emission calculations."
    )
