"""Error type enumeration for Rotation Proxy.

Provides type-safe error categorization for OpenAI-compatible error responses.
"""

from enum import Enum


class ErrorType(str, Enum):
    """The ``error.type`` field of an OpenAI-style error body.

    When adding new error types:
    1. Add the enum value here
    2. Map it in ErrorResponseBuilder
    """

    INVALID_REQUEST = "invalid_request_error"  # Malformed or unsupported request
    API_ERROR = "api_error"  # Upstream or rotation failure
    SERVER_ERROR = "server_error"  # Unhandled/unexpected error


class ErrorCode(str, Enum):
    """The ``error.code`` field of an OpenAI-style error body."""

    VALIDATION_FAILED = "validation_failed"
    MODEL_NOT_FOUND = "model_not_found"
    UNSUPPORTED_PROVIDER = "unsupported_provider"
    NO_KEYS_CONFIGURED = "no_keys_configured"
    KEYS_EXHAUSTED = "keys_exhausted"
    TIMEOUT = "timeout_error"
    INTERNAL_ERROR = "internal_error"
