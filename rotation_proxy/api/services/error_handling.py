"""Error handling services for API endpoints.

Every error leaves the proxy in the OpenAI shape:

    {
        "error": {
            "message": "<human readable>",
            "type": "<ErrorType>",
            "code": "<ErrorCode>",
            "details": {"provider": ..., "timestamp": ...}
        }
    }

``details`` gains ``last_error`` and ``key_statuses`` outside production.
API key values are never included.
"""

import logging
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from fastapi.responses import JSONResponse

from rotation_proxy.core.error_types import ErrorCode, ErrorType
from rotation_proxy.core.exceptions import (
    KeysExhaustedError,
    NoKeysConfiguredError,
    RotationError,
    UnsupportedProviderError,
)

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class ErrorResponseBuilder:
    """Centralized builder for consistent error responses across all endpoints.

    ``include_debug`` controls whether diagnostic fields (last upstream error,
    key statuses) are added to ``details``; it is off in production.
    """

    include_debug: bool = True

    def build(
        self,
        status_code: int,
        message: str,
        error_type: ErrorType,
        code: ErrorCode,
        *,
        provider: str | None = None,
        model: str | None = None,
        debug: dict[str, Any] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> JSONResponse:
        details: dict[str, Any] = {"timestamp": _timestamp()}
        if provider is not None:
            details["provider"] = provider
        if model is not None:
            details["model"] = model
        if extra:
            details.update(extra)
        if debug and self.include_debug:
            details.update(debug)
        return JSONResponse(
            status_code=status_code,
            content={
                "error": {
                    "message": message,
                    "type": error_type.value,
                    "code": code.value,
                    "details": details,
                }
            },
        )

    def validation_failed(self, errors: list[str]) -> JSONResponse:
        """Build a 400 response listing every request validation problem."""
        return self.build(
            400,
            f"Invalid request: {'; '.join(errors)}",
            ErrorType.INVALID_REQUEST,
            ErrorCode.VALIDATION_FAILED,
            extra={"errors": errors},
        )

    def model_not_found(self, model: str) -> JSONResponse:
        return self.build(
            400,
            f"Model '{model}' is not supported. Could not determine provider.",
            ErrorType.INVALID_REQUEST,
            ErrorCode.MODEL_NOT_FOUND,
            model=model,
        )

    def streaming_not_supported(self) -> JSONResponse:
        return self.build(
            400,
            "Streaming responses are not supported; send stream=false",
            ErrorType.INVALID_REQUEST,
            ErrorCode.VALIDATION_FAILED,
        )

    def timeout(self, provider: str | None, seconds: float) -> JSONResponse:
        """Build a 504 response for a request that outlived REQUEST_TIMEOUT."""
        return self.build(
            504,
            f"Request timed out after {seconds:g}s. Consider increasing REQUEST_TIMEOUT.",
            ErrorType.API_ERROR,
            ErrorCode.TIMEOUT,
            provider=provider,
        )

    def from_rotation_error(
        self,
        exc: RotationError,
        *,
        model: str | None = None,
        key_statuses: list[str] | None = None,
    ) -> JSONResponse:
        """Map an engine failure to its HTTP status and error code."""
        if isinstance(exc, NoKeysConfiguredError):
            return self.build(
                503,
                exc.message,
                ErrorType.API_ERROR,
                ErrorCode.NO_KEYS_CONFIGURED,
                provider=exc.provider,
                model=model,
            )
        if isinstance(exc, UnsupportedProviderError):
            return self.build(
                400,
                exc.message,
                ErrorType.INVALID_REQUEST,
                ErrorCode.UNSUPPORTED_PROVIDER,
                provider=exc.provider,
                model=model,
            )
        if isinstance(exc, KeysExhaustedError):
            debug: dict[str, Any] = {"last_error": exc.last_error, "attempts": exc.attempts}
            if key_statuses is not None:
                debug["key_statuses"] = key_statuses
            # The message embeds upstream error text, so production gets a generic one
            message = (
                exc.message
                if self.include_debug
                else f"All {exc.provider.capitalize()} API keys failed."
            )
            return self.build(
                502,
                message,
                ErrorType.API_ERROR,
                ErrorCode.KEYS_EXHAUSTED,
                provider=exc.provider,
                model=model,
                debug=debug,
            )
        return self.internal_error(exc)

    def internal_error(self, exc: BaseException) -> JSONResponse:
        _log_traceback()
        return self.build(
            500,
            "Internal server error",
            ErrorType.SERVER_ERROR,
            ErrorCode.INTERNAL_ERROR,
            debug={"last_error": str(exc) or type(exc).__name__},
        )


def _log_traceback(log: Any = logger) -> None:
    """Log full traceback for debugging."""
    log.error(traceback.format_exc())
