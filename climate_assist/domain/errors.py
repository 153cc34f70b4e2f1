from __future__ import annotations

from typing import Iterable, List


class ClimateAssistError(Exception):
    """Base error carrying the HTTP status and the client-facing message."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InputValidationError(ClimateAssistError):
    """Raised when a request is missing required fields or is malformed."""

    status_code = 400

    def __init__(self, message: str, missing_fields: Iterable[str] = ()):
        self.missing_fields: List[str] = list(missing_fields)
        super().__init__(message)


class AuthenticationError(ClimateAssistError):
    status_code = 401


class ResourceNotFoundError(ClimateAssistError):
    status_code = 404


class PersistenceError(ClimateAssistError):
    """Database failure; `detail` is logged, never returned to the client."""

    status_code = 500

    def __init__(self, message: str, detail: str = ""):
        self.detail = detail
        super().__init__(message)


class ConfigurationError(ClimateAssistError):
    status_code = 500


class UpstreamServiceError(ClimateAssistError):
    status_code = 502


class ModelInvocationError(ClimateAssistError):
    """The generative model could not be reached or answered with an error."""

    status_code = 502


class ModelResponseError(ModelInvocationError):
    """The model answered, but without usable text content."""
