"""API models for endpoint request/response DTOs.

This package provides type-safe data transfer objects (DTOs) for API endpoints,
ensuring clean separation between HTTP layer and business logic.
"""

from rotation_proxy.api.models.chat import (
    ChatCompletionChoice,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessageIn,
    CompletionUsage,
)
from rotation_proxy.api.models.endpoint_responses import (
    KeyStatusResponse,
    ModelEntry,
    ModelsListResponse,
)

__all__ = [
    "ChatCompletionChoice",
    "ChatCompletionMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessageIn",
    "CompletionUsage",
    "KeyStatusResponse",
    "ModelEntry",
    "ModelsListResponse",
]
