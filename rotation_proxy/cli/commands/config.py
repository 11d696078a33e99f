"""Configuration commands for the rotproxy CLI."""

import typer
from rich.console import Console
from rich.table import Table

from rotation_proxy.core.config import Config, ConfigError, ConfigSchema, validate_all

app = typer.Typer(help="Configuration management")


@app.command()
def show() -> None:
    """Show the current configuration (key counts only)."""
    console = Console()
    try:
        config = Config()
    except ConfigError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    summary = config.safe_summary()
    key_counts = summary.pop("api_keys")

    table = Table(title="Rotation Proxy Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for name, value in summary.items():
        table.add_row(name, str(value))
    console.print(table)

    keys_table = Table(title="Provider API Keys")
    keys_table.add_column("Provider", style="cyan")
    keys_table.add_column("Keys", style="green")
    for name, count in key_counts.items():
        keys_table.add_row(name, str(count) if count else "[dim]not set[/dim]")
    console.print(keys_table)


@app.command()
def validate() -> None:
    """Validate every environment variable and report all problems."""
    console = Console()
    errors = validate_all()
    if errors:
        for error in errors:
            console.print(f"[red]❌ {error.env_var}[/red]: {error.message} (got {error.value!r})")
        raise typer.Exit(1)
    console.print("[green]✅ Configuration is valid[/green]")


@app.command()
def docs() -> None:
    """Print Markdown documentation for all settings."""
    typer.echo(ConfigSchema.generate_markdown_docs())
