import logging
import sys
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rotation_proxy import __version__
from rotation_proxy.api.endpoints import router as api_router
from rotation_proxy.api.services.error_handling import ErrorResponseBuilder
from rotation_proxy.core.config import Config, ConfigSchema
from rotation_proxy.core.exceptions import RotationError
from rotation_proxy.core.logging import configure_root_logging
from rotation_proxy.core.provider import ApiKeyRotator, build_default_registry

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    rotator: ApiKeyRotator | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    The rotator (and with it all key health and cursor state) is created
    here and stored on ``app.state``, so each app instance starts clean.

    Args:
        config: Loaded configuration; read from the environment when omitted.
        http_client: Shared client for provider calls; closed on shutdown
            only when created here.
        rotator: Pre-built rotator, mainly for tests.
    """
    config = config or Config()
    owns_client = http_client is None
    client = http_client or httpx.AsyncClient(
        timeout=httpx.Timeout(config.request_timeout, connect=10.0)
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_client:
            await client.aclose()

    app = FastAPI(title="Rotation Proxy", version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.http_client = client
    app.state.rotator = rotator or ApiKeyRotator(registry=build_default_registry(client))
    app.state.started_at = time.monotonic()

    errors = ErrorResponseBuilder(include_debug=not config.is_production)

    @app.exception_handler(RotationError)
    async def rotation_error_handler(request: Request, exc: RotationError) -> JSONResponse:
        return errors.from_rotation_error(exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return errors.internal_error(exc)

    app.include_router(api_router)
    return app


def print_startup_summary(config: Config) -> None:
    print(f"🚀 Rotation Proxy v{__version__}")
    print("✅ Configuration loaded successfully")
    print(f"   Server: {config.host}:{config.port}")
    print(f"   Environment: {config.environment}")
    print(f"   Request Timeout: {config.request_timeout:g}s")
    configured = config.provider_keys.summary()
    providers = ", ".join(f"{name} ({count})" for name, count in configured.items() if count)
    print(f"   Providers with keys: {providers or 'none'}")
    print("")


def main() -> None:
    if len(sys.argv) > 1 and sys.argv[1] == "--help":
        print(f"Rotation Proxy v{__version__}")
        print("")
        print("Usage: python -m rotation_proxy.main")
        print("       or: rotproxy start")
        print("")
        print(ConfigSchema.generate_markdown_docs())
        sys.exit(0)

    config = Config()
    log_level = configure_root_logging(config.log_level)
    print_startup_summary(config)

    uvicorn.run(
        "rotation_proxy.main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        log_level=log_level.lower(),
        access_log=log_level == "DEBUG",
        reload=False,
    )


if __name__ == "__main__":
    main()
