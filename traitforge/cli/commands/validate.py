"""Validate command: check config, catalog and rules without generating."""

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from ...core.errors import TraitForgeError
from ..app import app, console, fail, setup_logging
from ._shared import load_inputs


@app.command()
def validate(
    config_path: Path = typer.Argument(..., help="Edition config YAML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Load the catalog and rules and print trait rarities."""
    setup_logging(verbose)

    try:
        config, catalog, rules, warnings = load_inputs(config_path)
    except TraitForgeError as e:
        fail(str(e))

    table = Table(title="Trait catalog")
    table.add_column("Layer")
    table.add_column("Trait")
    table.add_column("Weight", justify="right")
    table.add_column("Chance", justify="right")

    for layer in catalog.layers:
        total = layer.total_weight
        for element in layer.elements:
            table.add_row(
                escape(layer.id),
                escape(element.name),
                str(element.weight),
                f"{100 * element.weight / total:.1f}%",
            )
    console.print(table)

    console.print(
        f"Layers: {len(catalog.layers)}  "
        f"Incompatibility rules: {len(rules.incompatible)}  "
        f"Requirement rules: {len(rules.requires)}"
    )

    for warning in warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")

    if not config.layer_presence and catalog.combinations < config.edition_size:
        console.print(
            f"[yellow]Warning:[/yellow] only {catalog.combinations} distinct combinations "
            f"for an edition of {config.edition_size}"
        )

    console.print("[green]Config OK[/green]")
