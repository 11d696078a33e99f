"""Conversions between the OpenAI wire format and the rotation engine.

- validate_chat_request: collect every problem with a raw request body
- build_llm_settings: OpenAI request plus config defaults to LlmSettings
- build_chat_completion: assistant text to an OpenAI chat.completion body
- estimate_tokens: heuristic token count used for ``usage``
"""

from __future__ import annotations

import math
import re
import time
import uuid
from collections.abc import Mapping, Sequence
from typing import Any

from rotation_proxy.api.models.chat import (
    ChatCompletionChoice,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    CompletionUsage,
)
from rotation_proxy.core.config.generation import GenerationConfig
from rotation_proxy.core.providers import Provider
from rotation_proxy.core.settings import VALID_ROLES, ChatMessage, LlmSettings, RawKeys

_WHITESPACE = re.compile(r"\s+")
_WORD_SEPARATORS = re.compile(r"[\s\-_.,!?;:()\[\]{}'\"]+")
_SPECIAL_CHARS = re.compile(r"[^\w\s]", re.ASCII)

ROLE_TOKEN_OVERHEAD = {"system": 4, "user": 3, "assistant": 4}
DEFAULT_ROLE_TOKEN_OVERHEAD = 2


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_chat_request(body: Any) -> list[str]:
    """Return every validation problem with a raw chat completion body.

    An empty list means the body can be parsed into ChatCompletionRequest.
    """
    if not isinstance(body, Mapping):
        return ["Request body must be a JSON object"]

    errors: list[str] = []
    model = body.get("model")
    if not model or not isinstance(model, str):
        errors.append("Model is required and must be a string")

    messages = body.get("messages")
    if not isinstance(messages, list):
        errors.append("Messages is required and must be an array")
    else:
        if not messages:
            errors.append("Messages array cannot be empty")
        for i, message in enumerate(messages):
            if not isinstance(message, Mapping):
                errors.append(f"Message {i}: must be an object")
                continue
            if message.get("role") not in VALID_ROLES:
                errors.append(f"Message {i}: role must be 'system', 'user', or 'assistant'")
            content = message.get("content")
            if not content or not isinstance(content, str):
                errors.append(f"Message {i}: content is required and must be a string")

    temperature = body.get("temperature")
    if temperature is not None and (not _is_number(temperature) or not 0 <= temperature <= 2):
        errors.append("Temperature must be a number between 0 and 2")

    max_tokens = body.get("max_tokens")
    if max_tokens is not None and (not _is_number(max_tokens) or max_tokens < 1):
        errors.append("max_tokens must be a positive number")

    top_p = body.get("top_p")
    if top_p is not None and (not _is_number(top_p) or not 0 <= top_p <= 1):
        errors.append("top_p must be a number between 0 and 1")

    return errors


def to_chat_messages(request: ChatCompletionRequest) -> list[ChatMessage]:
    return [ChatMessage(role=m.role, content=m.content) for m in request.messages]


def build_llm_settings(
    request: ChatCompletionRequest,
    provider: Provider,
    api_keys: Mapping[str, RawKeys],
    defaults: GenerationConfig,
    *,
    site_url: str | None = None,
    site_name: str | None = None,
) -> LlmSettings:
    """Merge request parameters over configured defaults.

    ``site_url`` and ``site_name`` come from the client's ``HTTP-Referer``
    and ``X-Title`` headers and win over the configured values.
    """
    return LlmSettings(
        provider=provider,
        model=request.model.strip(),
        api_keys=api_keys,
        temperature=request.temperature if request.temperature is not None else defaults.temperature,
        max_tokens=int(request.max_tokens) if request.max_tokens is not None else defaults.max_tokens,
        top_p=request.top_p if request.top_p is not None else defaults.top_p,
        site_url=site_url or defaults.site_url,
        site_name=site_name or defaults.site_name,
    )


def _text_of(value: str | ChatMessage | Sequence[ChatMessage] | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, ChatMessage):
        return value.content
    return " ".join(m.content for m in value)


def estimate_tokens(value: str | ChatMessage | Sequence[ChatMessage] | None) -> int:
    """Estimate the token count of text, a message, or a conversation.

    Words up to 4 characters count as one token, up to 8 characters as one
    token per 4 characters, and longer words as one per 3.5 characters.
    Punctuation adds one token per 4 symbols. Non-empty text is at least 1.
    """
    text = _WHITESPACE.sub(" ", _text_of(value).strip())
    if not text:
        return 0

    count = 0.0
    for word in _WORD_SEPARATORS.split(text):
        if not word:
            continue
        if len(word) <= 4:
            count += 1
        elif len(word) <= 8:
            count += math.ceil(len(word) / 4)
        else:
            count += math.ceil(len(word) / 3.5)

    count += math.ceil(len(_SPECIAL_CHARS.findall(text)) / 4)
    return max(1, round(count))


def estimate_tokens_with_roles(messages: Sequence[ChatMessage]) -> int:
    """Estimate prompt tokens including per-role and per-conversation overhead."""
    total = sum(
        estimate_tokens(m.content) + ROLE_TOKEN_OVERHEAD.get(m.role, DEFAULT_ROLE_TOKEN_OVERHEAD)
        for m in messages
    )
    return total + max(2, math.ceil(len(messages) / 2))


def new_completion_id(request_id: str | None = None) -> str:
    return f"chatcmpl-{request_id or uuid.uuid4().hex}"


def build_chat_completion(
    content: str,
    model: str,
    messages: Sequence[ChatMessage],
    request_id: str | None = None,
) -> ChatCompletionResponse:
    """Wrap assistant text in an OpenAI chat.completion object with estimated usage."""
    prompt_tokens = estimate_tokens(messages)
    completion_tokens = estimate_tokens(content)
    return ChatCompletionResponse(
        id=new_completion_id(request_id),
        created=int(time.time()),
        model=model,
        choices=[ChatCompletionChoice(message=ChatCompletionMessage(content=content))],
        usage=CompletionUsage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        ),
    )
