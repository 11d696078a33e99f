import asyncio
import time
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from rotation_proxy import __version__
from rotation_proxy.api.models import (
    ChatCompletionRequest,
    KeyStatusResponse,
    ModelEntry,
    ModelsListResponse,
)
from rotation_proxy.api.services.error_handling import ErrorResponseBuilder
from rotation_proxy.api.services.transformations import (
    build_chat_completion,
    build_llm_settings,
    estimate_tokens_with_roles,
    to_chat_messages,
    validate_chat_request,
)
from rotation_proxy.core.config import Config
from rotation_proxy.core.exceptions import RotationError
from rotation_proxy.core.logging import ConversationLogger, conversation_logger
from rotation_proxy.core.model_catalog import iter_catalog
from rotation_proxy.core.provider import ApiKeyRotator
from rotation_proxy.core.provider_detection import detect_provider
from rotation_proxy.core.providers import SUPPORTED_PROVIDERS

router = APIRouter()


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_rotator(request: Request) -> ApiKeyRotator:
    return request.app.state.rotator


def get_error_builder(config: Config = Depends(get_config)) -> ErrorResponseBuilder:
    return ErrorResponseBuilder(include_debug=not config.is_production)


@router.post("/v1/chat/completions")
async def chat_completions(
    http_request: Request,
    http_referer: str | None = Header(None, alias="HTTP-Referer"),
    x_title: str | None = Header(None, alias="X-Title"),
    config: Config = Depends(get_config),
    rotator: ApiKeyRotator = Depends(get_rotator),
    errors: ErrorResponseBuilder = Depends(get_error_builder),
) -> JSONResponse:
    request_id = uuid.uuid4().hex

    with ConversationLogger.correlation_context(request_id):
        try:
            body = await http_request.json()
        except ValueError:
            return errors.validation_failed(["Request body must be valid JSON"])

        problems = validate_chat_request(body)
        if problems:
            conversation_logger.info(f"Rejected chat request: {'; '.join(problems)}")
            return errors.validation_failed(problems)

        try:
            request = ChatCompletionRequest.model_validate(body)
        except ValidationError as e:
            return errors.validation_failed(
                [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            )

        if request.stream:
            return errors.streaming_not_supported()

        detection = detect_provider(request.model)
        if detection.provider is None:
            conversation_logger.info(f"No provider matches model '{request.model}'")
            return errors.model_not_found(request.model)

        provider = detection.provider
        messages = to_chat_messages(request)
        settings = build_llm_settings(
            request,
            provider,
            config.api_keys_by_provider(),
            config.generation,
            site_url=http_referer,
            site_name=x_title,
        )

        conversation_logger.info(
            f"📤 CHAT | Model: {settings.model} | Provider: {provider.value} "
            f"({detection.reason.value}, {detection.confidence:.2f}) | "
            f"Messages: {len(messages)} | ~{estimate_tokens_with_roles(messages)} prompt tokens"
        )
        start_time = time.time()

        try:
            text = await asyncio.wait_for(
                rotator.generate(messages, settings), timeout=config.request_timeout
            )
        except asyncio.TimeoutError:
            conversation_logger.error(
                f"Chat request for {provider.value} timed out after {config.request_timeout:g}s"
            )
            return errors.timeout(provider.value, config.request_timeout)
        except RotationError as e:
            return errors.from_rotation_error(
                e,
                model=settings.model,
                key_statuses=[s.value for s in rotator.key_statuses(provider)],
            )

        completion = build_chat_completion(text, request.model, messages, request_id)
        conversation_logger.info(
            f"📥 CHAT | Provider: {provider.value} | "
            f"Duration: {(time.time() - start_time) * 1000:.0f}ms | "
            f"Tokens: {completion.usage.total_tokens}"
        )
        return JSONResponse(content=completion.model_dump())


@router.get("/v1/models")
async def list_models() -> JSONResponse:
    created = int(time.time())
    entries = [
        ModelEntry(id=model.id, owned_by=provider.value, created=created)
        for provider, model in iter_catalog()
    ]
    return ModelsListResponse(data=entries).to_response()


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    uptime_ms = int((time.monotonic() - request.app.state.started_at) * 1000)
    return JSONResponse(
        content={
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "uptime_ms": uptime_ms,
            "version": __version__,
        }
    )


@router.get("/v1/keys/status")
async def key_status(
    config: Config = Depends(get_config),
    rotator: ApiKeyRotator = Depends(get_rotator),
) -> JSONResponse:
    snapshot = rotator.key_status_snapshot()
    providers: dict[str, dict[str, object]] = {}
    for provider in SUPPORTED_PROVIDERS:
        state = snapshot.get(provider.value, {})
        providers[provider.value] = {
            "configured_keys": config.key_count(provider),
            "statuses": state.get("statuses", []),
            "next_index": state.get("next_index", 0),
        }
    return KeyStatusResponse(providers=providers).to_response()
