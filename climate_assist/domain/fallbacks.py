"""
Deterministic stand-ins for the generative model.

Each function takes the validated request of its feature and returns the
feature's result model. No I/O, no randomness, no clock.
"""

from __future__ import annotations

import math
from typing import List

from ..schemas import (
    ChatRequest,
    ChatResult,
    DroughtCropRequest,
    DroughtCropResult,
    FarmEquipmentRequest,
    FarmEquipmentResult,
    HabitatRequest,
    HabitatResult,
    ImageAnalysisRequest,
    ImageAnalysisResult,
    ImpactRequest,
    ImpactResult,
    NativeSpeciesRequest,
    NativeSpeciesResult,
    SolarRequest,
    SolarResult,
    WaterConservationRequest,
    WaterConservationResult,
)
from . import coefficients as coef


CHAT_APOLOGY = (
    "I apologize, but I encountered an error while processing your message. "
    "Please try again in a moment."
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, unlike the banker's rounding of round()."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def classify_goal(title: str) -> str:
    lowered = (title or "").lower()
    for bucket, keywords, _rates in coef.IMPACT_BUCKETS:
        if any(keyword in lowered for keyword in keywords):
            return bucket
    return "generic"


def _impact_rates(bucket: str) -> dict:
    for name, _keywords, rates in coef.IMPACT_BUCKETS:
        if name == bucket:
            return rates
    return coef.IMPACT_GENERIC_RATES


def impact_fallback(request: ImpactRequest) -> ImpactResult:
    days = request.duration_days or coef.DEFAULT_GOAL_DAYS
    bucket = classify_goal(request.goal_title or "")
    rates = _impact_rates(bucket)
    return ImpactResult(
        co2_saved=round_half_up(days * rates["co2"], 2),
        water_saved=round_half_up(days * rates["water"]),
        energy_saved=round_half_up(days * rates["energy"], 2),
        waste_reduced=round_half_up(days * rates["waste"], 2),
        impact_description=coef.IMPACT_DESCRIPTIONS[bucket].format(days=days),
    )


def water_fallback(request: WaterConservationRequest) -> WaterConservationResult:
    daily = int(request.current_usage) if request.current_usage else 0
    if daily == 0:
        daily = coef.DEFAULT_DAILY_WATER_USAGE
    return WaterConservationResult.model_validate(
        {
            "current_usage_analysis": {
                "daily_usage": daily,
                "monthly_usage": daily * coef.DAYS_PER_MONTH,
                "usage_category": "average",
                "comparison_to_average": "Your usage is within the typical range for households in your region",
            },
            "conservation_strategies": [
                {
                    "strategy": "Install low-flow showerheads",
                    "description": "Replace existing showerheads with water-efficient models",
                    "implementation_cost": 150,
                    "annual_savings_liters": 15000,
                    "annual_savings_dollars": 45,
                    "payback_period_months": 40,
                    "difficulty": "easy",
                    "priority": "high",
                },
                {
                    "strategy": "Fix leaks and drips",
                    "description": "Repair all visible leaks in taps, pipes, and toilets",
                    "implementation_cost": 200,
                    "annual_savings_liters": 20000,
                    "annual_savings_dollars": 60,
                    "payback_period_months": 40,
                    "difficulty": "moderate",
                    "priority": "high",
                },
                {
                    "strategy": "Install rainwater tank",
                    "description": "Collect rainwater for garden irrigation and toilet flushing",
                    "implementation_cost": 2500,
                    "annual_savings_liters": 50000,
                    "annual_savings_dollars": 150,
                    "payback_period_months": 200,
                    "difficulty": "difficult",
                    "priority": "medium",
                },
            ],
            "total_potential_savings": {
                "annual_liters": 85000,
                "annual_dollars": 255,
                "percentage_reduction": 25,
            },
        }
    )


def weekly_equipment_emissions(
    equipment_type: str, fuel_type: str, hours_per_week: float
) -> float:
    base = coef.EQUIPMENT_BASE_EMISSIONS.get(
        equipment_type, coef.EQUIPMENT_DEFAULT_EMISSIONS
    )
    multiplier = coef.FUEL_MULTIPLIERS.get(fuel_type, coef.FUEL_DEFAULT_MULTIPLIER)
    return base * multiplier * hours_per_week


def equipment_fallback(request: FarmEquipmentRequest) -> FarmEquipmentResult:
    weekly = weekly_equipment_emissions(
        request.equipment_type or "",
        request.fuel_type or "",
        request.hours_per_week or 0,
    )
    return FarmEquipmentResult(
        carbon_footprint={
            "weekly_emissions": round_half_up(weekly),
            "monthly_emissions": round_half_up(weekly * coef.WEEKS_PER_MONTH),
            "annual_emissions": round_half_up(weekly * coef.WEEKS_PER_YEAR),
            "fuel_consumption": round_half_up(weekly / coef.KG_CO2_PER_LITRE_DIESEL),
            "cost_per_week": round_half_up(weekly * coef.FUEL_COST_PER_KG_CO2),
        },
        recommendations=[
            "Consider upgrading to more fuel-efficient equipment",
            "Implement precision agriculture techniques to reduce operating hours",
            "Regular maintenance can improve fuel efficiency by 10-15%",
            "Plan field operations to minimize unnecessary travel",
        ],
        alternatives=[
            {
                "option": "Electric/Hybrid Equipment",
                "emission_reduction": "60-90%",
                "cost_implication": "Higher upfront, lower operating costs",
                "availability": "Limited for large equipment in rural areas",
            },
            {
                "option": "Biofuel Conversion",
                "emission_reduction": "20-40%",
                "cost_implication": "Moderate conversion cost",
                "availability": "Good availability in rural areas",
            },
        ],
        efficiency_tips=[
            "Maintain optimal tire pressure for fuel efficiency",
            "Use GPS guidance to minimize overlap and reduce fuel consumption",
            "Combine operations where possible (e.g., seeding and fertilizing)",
            "Service equipment regularly according to manufacturer schedules",
        ],
    )


def recommended_solar_size(monthly_usage_kwh: float) -> float:
    daily_usage = round_half_up(monthly_usage_kwh / coef.DAYS_PER_MONTH, 1)
    sized = math.ceil(daily_usage / coef.SOLAR_PEAK_SUN_HOURS) * coef.SOLAR_SIZING_MARGIN
    return max(coef.SOLAR_MIN_SYSTEM_KW, sized)


def solar_fallback(request: SolarRequest) -> SolarResult:
    energy = request.energy_usage or 0
    size = recommended_solar_size(energy)
    daily_generation = size * coef.SOLAR_PEAK_SUN_HOURS
    monthly_generation = daily_generation * coef.DAYS_PER_MONTH
    investment = round_half_up(size * coef.SOLAR_COST_PER_KW + coef.SOLAR_BASE_COST, 2)
    annual_savings = energy * coef.ELECTRICITY_PRICE_PER_KWH * 12
    location = (request.location or "Unknown").lower()
    if "remote" in location:
        grid_connection = "Off-grid with battery backup recommended"
    else:
        grid_connection = "Grid-tied with net metering"
    return SolarResult(
        system_recommendation={
            "panel_capacity": round_half_up(size, 2),
            "number_of_panels": math.ceil(size / coef.SOLAR_PANEL_KW),
            "panel_type": "Monocrystalline (Tier 1)",
            "battery_capacity": math.ceil(energy * coef.SOLAR_BATTERY_DAYS_FACTOR),
            "inverter_size": round_half_up(size * coef.SOLAR_INVERTER_MARGIN, 2),
            "estimated_cost": investment,
        },
        energy_production={
            "daily_generation": round_half_up(daily_generation, 1),
            "monthly_generation": round_half_up(monthly_generation, 1),
            "annual_generation": round_half_up(daily_generation * 365, 1),
            "self_consumption": coef.SOLAR_SELF_CONSUMPTION_PCT,
            "grid_export": round_half_up(max(0, monthly_generation - energy), 1),
        },
        financial_analysis={
            "total_investment": investment,
            "annual_savings": round_half_up(annual_savings),
            "payback_period": ("5-7" if size <= 3 else "7-10") + " years",
            "roi_25_years": round_half_up(
                annual_savings * coef.SOLAR_ROI_YEARS * coef.SOLAR_ROI_EFFICIENCY
            ),
            "government_rebates": round_half_up(size * coef.SOLAR_REBATE_PER_KW, 2),
        },
        installation_guidance={
            "optimal_tilt": "23-30 degrees (latitude optimized)",
            "orientation": "True north facing",
            "shading_considerations": [
                "Avoid trees",
                "Consider seasonal sun paths",
                "Account for future growth",
            ],
            "grid_connection": grid_connection,
        },
        maintenance_schedule=[
            "Monthly: Visual inspection and cleaning",
            "Quarterly: Performance monitoring and electrical connections check",
            "Annually: Professional inspection and inverter maintenance",
        ],
    )


def drought_crops_fallback(request: DroughtCropRequest) -> DroughtCropResult:
    return DroughtCropResult(
        recommended_crops=[
            {
                "name": "Sorghum",
                "variety": "Dryland Grain Sorghum",
                "water_requirement": "Low",
                "planting_time": "October-December",
                "harvest_time": "March-May",
                "yield_potential": "3-5 tonnes per hectare",
                "market_price": "$280-320 per tonne",
                "advantages": ["Drought tolerant", "Heat resistant", "Good feed value"],
                "challenges": ["Bird damage", "Market volatility"],
            }
        ],
        seasonal_tips={
            "spring": "Prepare soil and plan planting schedule",
            "summer": "Monitor water levels and pest control",
            "autumn": "Harvest and storage planning",
            "winter": "Soil preparation for next season",
        },
        risk_factors=["Drought conditions", "Market price fluctuations", "Pest pressure"],
    )


def image_analysis_fallback(request: ImageAnalysisRequest) -> ImageAnalysisResult:
    return ImageAnalysisResult(
        item_category="sustainable_item",
        carbon_footprint=12.3,
        alternatives=[
            {
                "name": "Solar Alternative",
                "carbon_reduction": 8.7,
                "description": "Solar-powered option perfect for sustainable living",
                "difficulty": "easy",
            },
            {
                "name": "Drought-Resistant Option",
                "carbon_reduction": 9.2,
                "description": "Water-efficient alternative suitable for global climate conditions",
                "difficulty": "medium",
            },
            {
                "name": "Local Supplier Alternative",
                "carbon_reduction": 6.8,
                "description": "Source from regional suppliers to reduce transport emissions",
                "difficulty": "medium",
            },
        ],
        confidence=75,
    )


def chat_fallback(request: ChatRequest) -> ChatResult:
    return ChatResult(response=CHAT_APOLOGY)


def _base_habitat_recommendations() -> List[dict]:
    return [
        {
            "id": "1",
            "title": "Establish Native Vegetation Corridors",
            "priority": "High",
            "category": "Connectivity",
            "description": "Create connected pathways of native vegetation to link habitat fragments and allow wildlife movement across the landscape.",
            "target_species": ["Native birds", "Small mammals", "Pollinators", "Reptiles"],
            "timeframe": "2-3 years",
            "cost": "$8,000-25,000",
            "difficulty": "Medium",
            "steps": [
                "Map existing vegetation and identify corridor opportunities",
                "Select appropriate native plant species for the region",
                "Prepare planting sites and control weeds",
                "Plant native vegetation in strategic locations",
                "Install protective fencing if needed",
                "Monitor establishment and maintain plantings",
            ],
            "expected_outcomes": [
                "Improved wildlife movement between habitats",
                "Enhanced genetic diversity in wildlife populations",
                "Increased ecosystem resilience",
                "Better pollination services for native plants",
            ],
            "funding_sources": [
                "Government Environment Restoration Fund",
                "State biodiversity conservation programs",
                "Local Landcare group grants",
            ],
        },
        {
            "id": "2",
            "title": "Control Invasive Species",
            "priority": "High",
            "category": "Restoration",
            "description": "Systematically remove invasive plants and animals that compete with native species and degrade habitat quality.",
            "target_species": ["All native species"],
            "timeframe": "1-2 years ongoing",
            "cost": "$3,000-12,000 per hectare",
            "difficulty": "Medium",
            "steps": [
                "Conduct invasive species survey and mapping",
                "Prioritize control based on threat level",
                "Apply appropriate control methods",
                "Follow up with repeat treatments",
                "Replant with native species where needed",
                "Establish ongoing monitoring program",
            ],
            "expected_outcomes": [
                "Reduced competition for native species",
                "Improved habitat structure and quality",
                "Increased native plant regeneration",
                "Enhanced ecosystem function",
            ],
            "funding_sources": [
                "National Landcare Program",
                "State weed control grants",
                "Local council environmental programs",
            ],
        },
    ]


_WATER_POINT_RECOMMENDATION = {
    "id": "3",
    "title": "Install Wildlife Water Points",
    "priority": "Critical",
    "category": "Protection",
    "description": "Establish reliable water sources to support wildlife during dry periods and improve habitat suitability.",
    "target_species": ["All wildlife", "Particularly birds and mammals"],
    "timeframe": "3-6 months",
    "cost": "$2,000-8,000 per water point",
    "difficulty": "Easy",
    "steps": [
        "Assess water needs and optimal locations",
        "Install tanks or troughs with wildlife-friendly design",
        "Set up reliable water supply system",
        "Create habitat plantings around water points",
        "Install monitoring equipment if needed",
        "Establish maintenance schedule",
    ],
    "expected_outcomes": [
        "Increased wildlife survival during droughts",
        "Greater species diversity on property",
        "Improved breeding success for water-dependent species",
        "Enhanced ecosystem resilience",
    ],
    "funding_sources": [
        "Drought resilience funding programs",
        "Wildlife conservation grants",
        "Water infrastructure support schemes",
    ],
}


def habitat_fallback(request: HabitatRequest) -> HabitatResult:
    recommendations = _base_habitat_recommendations()
    assessment = request.assessment
    if assessment is None or not assessment.water_sources:
        recommendations.append(dict(_WATER_POINT_RECOMMENDATION))
    return HabitatResult(
        recommendations=recommendations,
        property_specific_notes=(
            "These are general recommendations. For personalized advice, "
            "please consult with a local conservation expert."
        ),
    )


def native_species_fallback(request: NativeSpeciesRequest) -> NativeSpeciesResult:
    return NativeSpeciesResult(
        species=[
            {
                "name": "Red Kangaroo",
                "scientific_name": "Osphranter rufus",
                "type": "Fauna",
                "conservation_status": "Least Concern",
                "habitat": "Open plains, grasslands, and scrublands",
                "characteristics": "Largest marsupial, distinctive red-brown fur in males, powerful hind legs",
                "ecological_role": "Grazer that helps maintain grassland ecosystems",
                "threats": ["Habitat fragmentation", "Vehicle strikes", "Drought"],
                "conservation_actions": [
                    "Wildlife corridors",
                    "Speed limit enforcement",
                    "Water point management",
                ],
                "cultural_significance": "Important totem animal for many Aboriginal groups",
                "observation_tips": "Most active during dawn and dusk, often seen in groups",
            },
            {
                "name": "Sturt's Desert Pea",
                "scientific_name": "Swainsona formosa",
                "type": "Flora",
                "conservation_status": "Near Threatened",
                "habitat": "Arid and semi-arid regions, sandy soils",
                "characteristics": "Distinctive red and black flowers, prostrate growth habit",
                "ecological_role": "Nitrogen-fixing legume, provides habitat for insects",
                "threats": ["Overgrazing", "Habitat clearing", "Climate change"],
                "conservation_actions": [
                    "Seed collection",
                    "Habitat restoration",
                    "Grazing management",
                ],
                "cultural_significance": "Regional floral emblem",
                "planting_tips": "Requires well-drained sandy soil, minimal watering once established",
            },
        ],
        habitat_info={
            "description": "Arid ecosystems characterized by low rainfall and extreme temperatures",
            "key_features": ["Sparse vegetation", "Adapted wildlife", "Seasonal water sources"],
            "conservation_priority": "High",
            "threats": ["Climate change", "Invasive species", "Overgrazing"],
            "management_recommendations": [
                "Controlled grazing",
                "Weed management",
                "Water point planning",
            ],
        },
        resources={
            "government_programs": [
                "Environmental Stewardship Programs",
                "Biodiversity Conservation Trusts",
            ],
            "funding_opportunities": [
                "Government Environment Grants",
                "Regional conservation funding",
            ],
            "expert_contacts": ["Local Land Services", "Wildlife Conservancy Organizations"],
        },
    )
