from __future__ import annotations

from ..schemas import SolarRequest
from .common import JSON_ONLY_INSTRUCTION, describe


_SOLAR_SHAPE = """{
  "systemRecommendation": {
    "panelCapacity": number (kW),
    "numberOfPanels": number,
    "panelType": "string panel type",
    "batteryCapacity": number (kWh),
    "inverterSize": number (kW),
    "estimatedCost": number (US dollars)
  },
  "energyProduction": {
    "dailyGeneration": number (kWh),
    "monthlyGeneration": number (kWh),
    "annualGeneration": number (kWh),
    "selfConsumption": number (percentage),
    "gridExport": number (kWh)
  },
  "financialAnalysis": {
    "totalInvestment": number (US dollars),
    "annualSavings": number (US dollars),
    "paybackPeriod": "string years",
    "roi25Years": number (US dollars),
    "governmentRebates": number (US dollars)
  },
  "installationGuidance": {
    "optimalTilt": "string degrees",
    "orientation": "string direction",
    "shadingConsiderations": ["string consideration 1", "string consideration 2"],
    "gridConnection": "string connection type"
  },
  "maintenanceSchedule": [
    "string maintenance task 1",
    "string maintenance task 2",
    "string maintenance task 3"
  ]
}"""


def build_solar_prompt(request: SolarRequest) -> str:
    budget = f"${describe(request.budget)}" if request.budget else "Not specified"
    return (
        "You are a solar energy expert specializing in rural installations. Optimize "
        "solar panel placement and sizing for:\n\n"
        "PROPERTY DETAILS:\n"
        f"- Property Size: {describe(request.property_size)} hectares\n"
        f"- Available Roof Area: {describe(request.roof_area)} square meters\n"
        f"- Current Energy Usage: {describe(request.energy_usage)} kWh per month\n"
        f"- Location: {describe(request.location, default='Rural area')}\n"
        f"- Country/Location: {describe(request.selected_country, default='Global')}\n"
        f"- Budget: {budget}\n\n"
        "Consider regional solar irradiance, rural installation challenges, grid "
        "connection costs, and battery storage needs for remote properties.\n\n"
        f"{JSON_ONLY_INSTRUCTION}\n{_SOLAR_SHAPE}\n\n"
        "Focus on practical solutions for rural conditions with reliable equipment and "
        "realistic costs."
    )
