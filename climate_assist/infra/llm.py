"""Generative model clients.

Every client exposes ``generate(prompt, image=None) -> str``. Failures of any
kind surface as ``ModelInvocationError`` so callers can treat them uniformly.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI

from ..domain.errors import (
    InputValidationError,
    ModelInvocationError,
    ModelResponseError,
)
from .config import get_config

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/jpeg"


@dataclass(frozen=True)
class InlineImage:
    data: bytes
    mime_type: str = DEFAULT_IMAGE_MIME

    @classmethod
    def from_base64(cls, value: str) -> "InlineImage":
        """Decode raw base64 or a ``data:<mime>;base64,<payload>`` URL."""
        mime_type = DEFAULT_IMAGE_MIME
        payload = value.strip()
        if "," in payload:
            header, payload = payload.split(",", 1)
            if header.startswith("data:"):
                declared = header[len("data:") :].split(";", 1)[0].strip()
                if declared:
                    mime_type = declared
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InputValidationError("Image data is not valid base64") from exc
        if not data:
            raise InputValidationError("Image data is required", ["imageData"])
        return cls(data=data, mime_type=mime_type)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


class GenerativeModelClient:
    name = "base"

    def generate(self, prompt: str, image: Optional[InlineImage] = None) -> str:
        raise NotImplementedError


class OfflineModelClient(GenerativeModelClient):
    """Stands in when no provider is configured; every call fails."""

    name = "offline"

    def __init__(self, reason: str = "generative model disabled") -> None:
        self.reason = reason

    def generate(self, prompt: str, image: Optional[InlineImage] = None) -> str:
        raise ModelInvocationError(self.reason)


class GeminiModelClient(GenerativeModelClient):
    name = "gemini"

    def __init__(self, api_key: str, model: str, temperature: float = 0.2) -> None:
        from google import genai
        from google.genai import types

        self._types = types
        self._client = genai.Client(api_key=api_key)
        self._model = model
        self._temperature = temperature

    def generate(self, prompt: str, image: Optional[InlineImage] = None) -> str:
        contents = [prompt]
        if image is not None:
            contents.append(
                self._types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
            )
        try:
            response = self._client.models.generate_content(
                model=self._model,
                contents=contents,
                config=self._types.GenerateContentConfig(
                    temperature=self._temperature
                ),
            )
        except Exception as exc:
            raise ModelInvocationError(f"gemini request failed: {exc}") from exc
        text = getattr(response, "text", None)
        if not isinstance(text, str) or not text.strip():
            raise ModelResponseError("gemini response carried no text content")
        return text


class ChatModelClient(GenerativeModelClient):
    """Adapter for any LangChain chat model."""

    name = "langchain"

    def __init__(self, llm: BaseChatModel) -> None:
        self._llm = llm

    def generate(self, prompt: str, image: Optional[InlineImage] = None) -> str:
        if image is None:
            message = HumanMessage(content=prompt)
        else:
            data_url = f"data:{image.mime_type};base64,{image.to_base64()}"
            message = HumanMessage(
                content=[
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": data_url}},
                ]
            )
        try:
            result = self._llm.invoke([message])
        except Exception as exc:
            raise ModelInvocationError(f"chat model request failed: {exc}") from exc
        content = getattr(result, "content", None)
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part)
                for part in content
            )
        if not isinstance(content, str) or not content.strip():
            raise ModelResponseError("chat model response carried no text content")
        return content


def get_chat_model() -> BaseChatModel:
    cfg = get_config()
    if not cfg.openai_api_key:
        raise ValueError("OPENAI_API_KEY is not configured")
    kwargs = {
        "api_key": cfg.openai_api_key,
        "temperature": cfg.llm_temperature,
        "model": cfg.openai_model,
    }
    if cfg.openai_api_base:
        kwargs["base_url"] = cfg.openai_api_base
    return ChatOpenAI(**kwargs)


def build_model_client() -> GenerativeModelClient:
    cfg = get_config()
    provider = cfg.llm_provider
    if provider in {"offline", "disabled", "none"}:
        return OfflineModelClient()
    try:
        if provider == "gemini":
            if not cfg.gemini_api_key:
                raise ValueError("GOOGLE_GEMINI_API_KEY is not configured")
            return GeminiModelClient(
                api_key=cfg.gemini_api_key,
                model=cfg.gemini_model,
                temperature=cfg.llm_temperature,
            )
        if provider == "openai":
            return ChatModelClient(get_chat_model())
        raise ValueError(f"unsupported LLM_PROVIDER: {provider}")
    except ValueError as exc:
        logger.warning("generative model unavailable, serving fallbacks: %s", exc)
        return OfflineModelClient(str(exc))


@lru_cache(maxsize=1)
def get_model_client() -> GenerativeModelClient:
    return build_model_client()
