"""Server command for the rotproxy CLI."""

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from rotation_proxy.core.config import Config
from rotation_proxy.core.logging import configure_root_logging


def start(
    host: str = typer.Option(None, "--host", help="Override host"),
    port: int = typer.Option(None, "--port", help="Override port"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
) -> None:
    """Start the proxy server."""
    console = Console()
    config = Config()

    server_host = host or config.host
    server_port = port or config.port

    table = Table(title="Rotation Proxy Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Server URL", f"http://{server_host}:{server_port}")
    table.add_row("Environment", config.environment)
    table.add_row("Request Timeout", f"{config.request_timeout:g}s")
    for name, count in config.provider_keys.summary().items():
        if count:
            table.add_row(f"{name} keys", str(count))

    console.print(table)

    if not config.provider_keys.configured_providers():
        console.print(
            "[yellow]⚠️  No provider API keys configured; every chat request will fail.[/yellow]"
        )

    log_level = configure_root_logging(config.log_level)
    uvicorn.run(
        "rotation_proxy.main:create_app",
        factory=True,
        host=server_host,
        port=server_port,
        reload=reload,
        log_level=log_level.lower(),
        access_log=log_level == "DEBUG",
    )
