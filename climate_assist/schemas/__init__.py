from .advisors import (
    ChatRequest,
    ChatResult,
    DroughtCropRequest,
    DroughtCropResult,
    FarmEquipmentRequest,
    FarmEquipmentResult,
    HabitatAssessment,
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
from .records import (
    GoalAction,
    GoalCreate,
    MessageCreate,
    ScanCreate,
    TopicCreate,
    UserGoalCreate,
    UserGoalUpdate,
    WeatherRequest,
)

__all__ = [
    "ChatRequest",
    "ChatResult",
    "DroughtCropRequest",
    "DroughtCropResult",
    "FarmEquipmentRequest",
    "FarmEquipmentResult",
    "GoalAction",
    "GoalCreate",
    "HabitatAssessment",
    "HabitatRequest",
    "HabitatResult",
    "ImageAnalysisRequest",
    "ImageAnalysisResult",
    "ImpactRequest",
    "ImpactResult",
    "MessageCreate",
    "NativeSpeciesRequest",
    "NativeSpeciesResult",
    "ScanCreate",
    "SolarRequest",
    "SolarResult",
    "TopicCreate",
    "UserGoalCreate",
    "UserGoalUpdate",
    "WaterConservationRequest",
    "WaterConservationResult",
    "WeatherRequest",
]
