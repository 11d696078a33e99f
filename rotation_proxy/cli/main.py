"""Main CLI entry point for rotation-proxy."""

import logging

import typer
from rich.console import Console

from rotation_proxy.cli.commands import config, models, server

app = typer.Typer(
    name="rotproxy",
    help="Rotation Proxy CLI - run and inspect the key-rotating LLM gateway",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(server.start)
app.command()(models.models)
app.command()(models.detect)
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    from rotation_proxy import __version__

    console = Console()
    console.print(f"[bold cyan]rotproxy[/bold cyan] version [green]{__version__}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Rotation Proxy CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


if __name__ == "__main__":
    app()
