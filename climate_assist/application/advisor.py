"""
Model-with-fallback execution shared by every AI-backed feature.

A feature supplies its request/result models, a prompt builder and a
deterministic fallback; `run_advisor` owns the control flow:

    START -> VALIDATED_INPUT -> MODEL_CALLED -> RESPOND_MODEL
                                             -> RESPOND_FALLBACK
          -> REJECT_INPUT  (raised before any model call)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from ..domain.errors import InputValidationError, ModelInvocationError
from ..domain.parsing import extract_json_object
from ..infra.llm import GenerativeModelClient, InlineImage
from ..observability.logging_utils import log_event, summarize_text
from .validation import first_error_location, parse_payload


class AdvisorState(str, Enum):
    RESPOND_MODEL = "respond_model"
    RESPOND_FALLBACK = "respond_fallback"


class FallbackReason(str, Enum):
    MODEL_ERROR = "model_error"
    PARSE_ERROR = "parse_error"
    VALIDATION_ERROR = "validation_error"


@dataclass(frozen=True)
class AdvisorFeature:
    name: str
    request_model: Type[BaseModel]
    result_model: Type[BaseModel]
    build_prompt: Callable[[Any], str]
    fallback: Callable[[Any], BaseModel]
    required_fields: Tuple[str, ...] = ()
    missing_message: str = "Required fields are missing"
    image: Optional[Callable[[Any], Optional[InlineImage]]] = None
    parse: Callable[[str], Optional[Dict[str, Any]]] = extract_json_object


@dataclass(frozen=True)
class AdvisorOutcome:
    feature: str
    result: Dict[str, Any]
    state: AdvisorState
    fallback_reason: Optional[FallbackReason] = None

    @property
    def source(self) -> str:
        return "model" if self.state is AdvisorState.RESPOND_MODEL else "fallback"


def validate_request(feature: AdvisorFeature, payload: Mapping[str, Any]) -> BaseModel:
    return parse_payload(
        feature.request_model,
        payload,
        required=feature.required_fields,
        missing_message=feature.missing_message,
    )


def _serialize(result: BaseModel) -> Dict[str, Any]:
    return result.model_dump(mode="json", by_alias=True)


def _fallback_outcome(
    feature: AdvisorFeature, request: BaseModel, reason: FallbackReason, started: float
) -> AdvisorOutcome:
    result = feature.fallback(request)
    log_event(
        "advisor.fallback",
        feature=feature.name,
        reason=reason.value,
        latency_ms=int((time.perf_counter() - started) * 1000),
    )
    return AdvisorOutcome(
        feature=feature.name,
        result=_serialize(result),
        state=AdvisorState.RESPOND_FALLBACK,
        fallback_reason=reason,
    )


def run_advisor(
    feature: AdvisorFeature,
    payload: Mapping[str, Any],
    client: GenerativeModelClient,
) -> AdvisorOutcome:
    started = time.perf_counter()
    log_event("advisor.start", feature=feature.name, client=client.name)
    try:
        request = validate_request(feature, payload)
        image = feature.image(request) if feature.image else None
    except InputValidationError as exc:
        log_event(
            "advisor.rejected", feature=feature.name, missing=exc.missing_fields
        )
        raise

    prompt = feature.build_prompt(request)
    try:
        raw_text = client.generate(prompt, image=image)
    except ModelInvocationError as exc:
        log_event("advisor.model_error", feature=feature.name, error=str(exc))
        return _fallback_outcome(feature, request, FallbackReason.MODEL_ERROR, started)

    parsed = feature.parse(raw_text)
    if parsed is None:
        log_event(
            "advisor.parse_error",
            feature=feature.name,
            raw=summarize_text(raw_text),
        )
        return _fallback_outcome(feature, request, FallbackReason.PARSE_ERROR, started)

    try:
        result = feature.result_model.model_validate(parsed)
    except ValidationError as exc:
        log_event(
            "advisor.validation_error",
            feature=feature.name,
            errors=exc.error_count(),
            first=first_error_location(exc),
        )
        return _fallback_outcome(
            feature, request, FallbackReason.VALIDATION_ERROR, started
        )

    log_event(
        "advisor.model_ok",
        feature=feature.name,
        latency_ms=int((time.perf_counter() - started) * 1000),
    )
    return AdvisorOutcome(
        feature=feature.name,
        result=_serialize(result),
        state=AdvisorState.RESPOND_MODEL,
    )
