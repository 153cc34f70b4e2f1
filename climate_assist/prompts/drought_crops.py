from __future__ import annotations

from ..schemas import DroughtCropRequest
from .common import JSON_ONLY_INSTRUCTION, describe


_DROUGHT_CROPS_SHAPE = """{
  "recommendedCrops": [
    {
      "name": "Crop Name",
      "variety": "Specific variety",
      "waterRequirement": "Low/Medium/High",
      "plantingTime": "Month range",
      "harvestTime": "Month range",
      "yieldPotential": "tonnes per hectare",
      "marketPrice": "price per tonne in local currency",
      "advantages": ["advantage1", "advantage2"],
      "challenges": ["challenge1", "challenge2"]
    }
  ],
  "seasonalTips": {
    "spring": "spring advice",
    "summer": "summer advice",
    "autumn": "autumn advice",
    "winter": "winter advice"
  },
  "riskFactors": ["risk1", "risk2", "risk3"]
}"""


def build_drought_crops_prompt(request: DroughtCropRequest) -> str:
    return (
        "You are an agricultural expert specializing in drought-resistant crops. "
        "Provide crop recommendations based on the following conditions:\n\n"
        "FARM CONDITIONS:\n"
        f"- Region: {describe(request.region)}\n"
        f"- Soil Type: {describe(request.soil_type)}\n"
        f"- Annual Rainfall: {describe(request.rainfall)}mm\n"
        f"- Farm Size: {describe(request.farm_size)} hectares\n"
        f"- Current Crops: {describe(request.current_crops, default='None')}\n"
        f"- Country/Location: {describe(request.selected_country, default='Global')}\n\n"
        f"{JSON_ONLY_INSTRUCTION}\n{_DROUGHT_CROPS_SHAPE}"
    )
