"""Request payloads and result shapes of the AI-backed advisory features."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from .fields import (
    CamelModel,
    Identifier,
    Number,
    OptionalNumber,
    SnakeModel,
    Text,
)


# ---- image analysis -------------------------------------------------------


class ImageAnalysisRequest(CamelModel):
    image_data: Text = None


class EcoAlternative(SnakeModel):
    name: str
    carbon_reduction: Number
    description: str
    difficulty: Literal["easy", "medium", "hard"]


class ImageAnalysisResult(SnakeModel):
    item_category: str
    carbon_footprint: Number
    alternatives: List[EcoAlternative]
    confidence: Number


# ---- goal impact ----------------------------------------------------------


class ImpactRequest(SnakeModel):
    goal_title: Text = None
    goal_description: Text = None
    duration_days: Optional[int] = Field(default=None, ge=0)


class ImpactResult(SnakeModel):
    co2_saved: Number
    water_saved: Number
    energy_saved: Number
    waste_reduced: Number
    impact_description: str


# ---- chat -----------------------------------------------------------------


class ChatRequest(SnakeModel):
    message: Text = None


class ChatResult(SnakeModel):
    response: str


# ---- drought-resistant crops ----------------------------------------------


class DroughtCropRequest(CamelModel):
    region: Text = None
    soil_type: Text = None
    rainfall: Text = None
    farm_size: Text = None
    current_crops: Text = None
    selected_country: Text = None


class CropRecommendation(CamelModel):
    name: str
    variety: str
    water_requirement: str
    planting_time: str
    harvest_time: str
    yield_potential: str
    market_price: str
    advantages: List[str]
    challenges: List[str]


class SeasonalTips(CamelModel):
    spring: str
    summer: str
    autumn: str
    winter: str


class DroughtCropResult(CamelModel):
    recommended_crops: List[CropRecommendation] = Field(min_length=1)
    seasonal_tips: SeasonalTips
    risk_factors: List[str]


# ---- farm equipment footprint ---------------------------------------------


class FarmEquipmentRequest(CamelModel):
    equipment_type: Text = None
    fuel_type: Text = None
    hours_per_week: OptionalNumber = None
    farm_size: OptionalNumber = None
    region: Text = None
    selected_country: Text = None


class CarbonFootprint(CamelModel):
    weekly_emissions: Number
    monthly_emissions: Number
    annual_emissions: Number
    fuel_consumption: Number
    cost_per_week: Number


class EquipmentAlternative(CamelModel):
    option: str
    emission_reduction: str
    cost_implication: str
    availability: str


class FarmEquipmentResult(CamelModel):
    carbon_footprint: CarbonFootprint
    recommendations: List[str]
    alternatives: List[EquipmentAlternative]
    efficiency_tips: List[str]


# ---- solar sizing ---------------------------------------------------------


class SolarRequest(CamelModel):
    property_size: OptionalNumber = None
    roof_area: OptionalNumber = None
    energy_usage: OptionalNumber = None
    location: Text = None
    budget: OptionalNumber = None
    selected_country: Text = None


class SystemRecommendation(CamelModel):
    panel_capacity: Number
    number_of_panels: Number
    panel_type: str
    battery_capacity: Number
    inverter_size: Number
    estimated_cost: Number


class EnergyProduction(CamelModel):
    daily_generation: Number
    monthly_generation: Number
    annual_generation: Number
    self_consumption: Number
    grid_export: Number


class FinancialAnalysis(CamelModel):
    total_investment: Number
    annual_savings: Number
    payback_period: str
    roi_25_years: Number = Field(alias="roi25Years")
    government_rebates: Number


class InstallationGuidance(CamelModel):
    optimal_tilt: str
    orientation: str
    shading_considerations: List[str]
    grid_connection: str


class SolarResult(CamelModel):
    system_recommendation: SystemRecommendation
    energy_production: EnergyProduction
    financial_analysis: FinancialAnalysis
    installation_guidance: InstallationGuidance
    maintenance_schedule: List[str]


# ---- water conservation ---------------------------------------------------


class WaterConservationRequest(CamelModel):
    property_size: Text = None
    current_usage: OptionalNumber = None
    location: Text = None
    budget: OptionalNumber = None
    water_source: Text = None
    selected_country: Text = None


class UsageAnalysis(SnakeModel):
    daily_usage: Number
    monthly_usage: Number
    usage_category: Literal["low", "average", "high", "excessive"]
    comparison_to_average: str


class WaterStrategy(SnakeModel):
    strategy: str
    description: str
    implementation_cost: Number
    annual_savings_liters: Number
    annual_savings_dollars: Number
    payback_period_months: Number
    difficulty: Literal["easy", "moderate", "difficult"]
    priority: Literal["high", "medium", "low"]


class PotentialSavings(SnakeModel):
    annual_liters: Number
    annual_dollars: Number
    percentage_reduction: Number


class WaterConservationResult(SnakeModel):
    current_usage_analysis: UsageAnalysis
    conservation_strategies: List[WaterStrategy]
    total_potential_savings: PotentialSavings


# ---- habitat protection ---------------------------------------------------


class HabitatAssessment(CamelModel):
    property_size: OptionalNumber = None
    region: Text = None
    habitat_type: Text = None
    connectivity: Text = None
    current_management: Text = None
    threatened_species: bool = False
    water_sources: bool = False


class HabitatRequest(CamelModel):
    assessment: Optional[HabitatAssessment] = None


class HabitatRecommendation(CamelModel):
    id: Identifier
    title: str
    priority: Literal["Critical", "High", "Medium", "Low"]
    category: str
    description: str
    target_species: List[str]
    timeframe: str
    cost: str
    difficulty: Literal["Easy", "Medium", "Hard"]
    steps: List[str]
    expected_outcomes: List[str]
    funding_sources: List[str]


class HabitatResult(CamelModel):
    recommendations: List[HabitatRecommendation] = Field(min_length=1)
    property_specific_notes: str


# ---- native species -------------------------------------------------------


class NativeSpeciesRequest(CamelModel):
    region: Text = None
    habitat: Text = None
    purpose: Text = None


class SpeciesProfile(CamelModel):
    name: str
    scientific_name: str
    type: Literal["Flora", "Fauna"]
    conservation_status: str
    habitat: str
    characteristics: str
    ecological_role: str
    threats: List[str]
    conservation_actions: List[str]
    cultural_significance: Optional[str] = None
    planting_tips: Optional[str] = None
    observation_tips: Optional[str] = None


class HabitatInfo(CamelModel):
    description: str
    key_features: List[str]
    conservation_priority: str
    threats: List[str]
    management_recommendations: List[str]


class ConservationResources(CamelModel):
    government_programs: List[str]
    funding_opportunities: List[str]
    expert_contacts: List[str]


class NativeSpeciesResult(CamelModel):
    species: List[SpeciesProfile] = Field(min_length=1)
    habitat_info: HabitatInfo
    resources: ConservationResources
