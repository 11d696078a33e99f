"""Model catalog and provider detection commands."""

import typer
from rich.console import Console
from rich.table import Table

from rotation_proxy.core.model_catalog import MODEL_CATALOG
from rotation_proxy.core.provider_detection import detect_provider
from rotation_proxy.core.providers import Provider


def models(
    provider: str = typer.Option(None, "--provider", "-p", help="Only list this provider"),
) -> None:
    """List the known models per provider."""
    console = Console()

    if provider:
        try:
            selected = [Provider.parse(provider)]
        except ValueError as e:
            console.print(f"[red]❌ {e}[/red]")
            raise typer.Exit(1) from None
    else:
        selected = list(MODEL_CATALOG.keys())

    table = Table(title="Model Catalog")
    table.add_column("Provider", style="cyan")
    table.add_column("Model", style="green")
    table.add_column("Name")
    table.add_column("Free", style="yellow")

    for p in selected:
        for model in MODEL_CATALOG.get(p, ()):
            table.add_row(p.value, model.id, model.name, "✓" if model.free else "")

    console.print(table)


def detect(
    model: str = typer.Argument(..., help="Model name as a client would send it"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw detection result"),
) -> None:
    """Show which provider a model name routes to."""
    console = Console()
    result = detect_provider(model)

    if as_json:
        console.print_json(data=result.to_dict())
        return

    if result.provider is None:
        console.print(f"[red]❌ No provider matches '{model}'[/red]")
        raise typer.Exit(1)

    console.print(f"✅ Provider: [bold cyan]{result.provider.value}[/bold cyan]")
    console.print(f"   Reason: {result.reason.value}")
    console.print(f"   Confidence: {result.confidence:.2f}")
    if result.alternatives:
        console.print(f"   Alternatives: {', '.join(p.value for p in result.alternatives)}")
