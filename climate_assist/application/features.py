"""Registry of the AI-backed advisor features."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..domain import fallbacks
from ..domain.parsing import extract_text_reply
from ..infra.llm import InlineImage
from ..prompts.chat import build_chat_prompt
from ..prompts.drought_crops import build_drought_crops_prompt
from ..prompts.farm_equipment import build_farm_equipment_prompt
from ..prompts.habitat import build_habitat_prompt
from ..prompts.image_analysis import build_image_analysis_prompt
from ..prompts.impact import build_impact_prompt
from ..prompts.native_species import build_native_species_prompt
from ..prompts.solar import build_solar_prompt
from ..prompts.water import build_water_prompt
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
from .advisor import AdvisorFeature


def _decode_image(request: ImageAnalysisRequest) -> Optional[InlineImage]:
    return InlineImage.from_base64(request.image_data)


_FEATURES: Dict[str, AdvisorFeature] = {
    feature.name: feature
    for feature in (
        AdvisorFeature(
            name="analyze_image",
            request_model=ImageAnalysisRequest,
            result_model=ImageAnalysisResult,
            build_prompt=build_image_analysis_prompt,
            fallback=fallbacks.image_analysis_fallback,
            required_fields=("image_data",),
            missing_message="Image data is required",
            image=_decode_image,
        ),
        AdvisorFeature(
            name="calculate_impact",
            request_model=ImpactRequest,
            result_model=ImpactResult,
            build_prompt=build_impact_prompt,
            fallback=fallbacks.impact_fallback,
            required_fields=("goal_title",),
            missing_message="Goal title is required",
        ),
        AdvisorFeature(
            name="chat",
            request_model=ChatRequest,
            result_model=ChatResult,
            build_prompt=build_chat_prompt,
            fallback=fallbacks.chat_fallback,
            required_fields=("message",),
            missing_message="Message is required",
            parse=extract_text_reply,
        ),
        AdvisorFeature(
            name="drought_crops",
            request_model=DroughtCropRequest,
            result_model=DroughtCropResult,
            build_prompt=build_drought_crops_prompt,
            fallback=fallbacks.drought_crops_fallback,
            required_fields=("region", "soil_type"),
            missing_message="Region and soil type are required",
        ),
        AdvisorFeature(
            name="farm_equipment",
            request_model=FarmEquipmentRequest,
            result_model=FarmEquipmentResult,
            build_prompt=build_farm_equipment_prompt,
            fallback=fallbacks.equipment_fallback,
            required_fields=("equipment_type", "fuel_type", "hours_per_week"),
            missing_message="Equipment details are required",
        ),
        AdvisorFeature(
            name="solar_optimizer",
            request_model=SolarRequest,
            result_model=SolarResult,
            build_prompt=build_solar_prompt,
            fallback=fallbacks.solar_fallback,
            required_fields=("property_size", "energy_usage"),
            missing_message="Property size and energy usage are required",
        ),
        AdvisorFeature(
            name="water_conservation",
            request_model=WaterConservationRequest,
            result_model=WaterConservationResult,
            build_prompt=build_water_prompt,
            fallback=fallbacks.water_fallback,
        ),
        AdvisorFeature(
            name="habitat_protection",
            request_model=HabitatRequest,
            result_model=HabitatResult,
            build_prompt=build_habitat_prompt,
            fallback=fallbacks.habitat_fallback,
            required_fields=("assessment.region", "assessment.habitat_type"),
            missing_message="Property assessment data is required",
        ),
        AdvisorFeature(
            name="native_species",
            request_model=NativeSpeciesRequest,
            result_model=NativeSpeciesResult,
            build_prompt=build_native_species_prompt,
            fallback=fallbacks.native_species_fallback,
            required_fields=("region",),
            missing_message="Region is required",
        ),
    )
}


def get_feature(name: str) -> AdvisorFeature:
    try:
        return _FEATURES[name]
    except KeyError:
        raise KeyError(f"unknown advisor feature: {name}") from None


def list_features() -> List[str]:
    return sorted(_FEATURES)
