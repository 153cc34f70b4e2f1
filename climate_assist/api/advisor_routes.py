from __future__ import annotations

from typing import Any, Callable, Dict

from fastapi import APIRouter, Depends

from ..application.advisor import run_advisor
from ..application.features import get_feature
from ..infra.llm import GenerativeModelClient, get_model_client
from .auth import require_bearer_header
from .request_body import read_json_body


router = APIRouter(prefix="/api", tags=["advisors"])

# feature name -> (path, extra dependencies)
ADVISOR_ROUTES = {
    "analyze_image": ("/analyze-image", ()),
    "calculate_impact": ("/calculate-impact", (Depends(require_bearer_header),)),
    "chat": ("/chat", ()),
    "drought_crops": ("/drought-crops", ()),
    "farm_equipment": ("/farm-equipment", ()),
    "solar_optimizer": ("/solar-optimizer", ()),
    "water_conservation": ("/water-conservation", ()),
    "habitat_protection": ("/habitat-protection", ()),
    "native_species": ("/native-species", ()),
}


def _advisor_endpoint(name: str) -> Callable[..., Dict[str, Any]]:
    feature = get_feature(name)

    def endpoint(
        payload: Any = Depends(read_json_body),
        client: GenerativeModelClient = Depends(get_model_client),
    ) -> Dict[str, Any]:
        return run_advisor(feature, payload, client).result

    endpoint.__name__ = name
    return endpoint


for _name, (_path, _dependencies) in ADVISOR_ROUTES.items():
    router.add_api_route(
        _path,
        _advisor_endpoint(_name),
        methods=["POST"],
        dependencies=list(_dependencies),
        name=_name,
    )
