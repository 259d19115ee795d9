"""Generate command: run a full edition."""

import time
from pathlib import Path

import typer
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from ...core.errors import TraitForgeError
from ...core.models import Token
from ...generator import generate_edition
from ...output import DirectoryWriter, PillowCompositor, build_preview
from ..app import app, console, fail, setup_logging
from ._shared import load_inputs


@app.command()
def generate(
    config_path: Path = typer.Argument(..., help="Edition config YAML file"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed for a reproducible run"),
    size: int | None = typer.Option(None, "--size", min=1, help="Override edition size"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Override output directory"),
    no_preview: bool = typer.Option(False, "--no-preview", help="Skip the preview sheet"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Generate images and metadata for a whole edition."""
    setup_logging(verbose)
    start = time.perf_counter()

    overrides = {
        "seed": seed,
        "edition_size": size,
        "output_dir": output.resolve() if output else None,
    }
    try:
        config, catalog, rules, warnings = load_inputs(config_path, overrides)
    except TraitForgeError as e:
        fail(str(e))

    for warning in warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")

    writer = DirectoryWriter(config.output_dir, config.images_subdir, config.metadata_subdir)
    writer.ensure_dirs()
    compositor = PillowCompositor(config.width, config.height)

    with Progress(
        TextColumn("Generating"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("generate", total=config.edition_size)

        def on_progress(token: Token, total: int) -> None:
            progress.update(task, completed=token.edition)

        result = generate_edition(
            catalog,
            rules,
            config,
            compositor=compositor,
            writer=writer,
            on_progress=on_progress,
        )

    if not no_preview:
        build_preview(
            result.image_paths,
            config.preview,
            config.width,
            config.height,
            config.output_dir,
        )

    console.print(
        f"[green]Done.[/green] {len(result.tokens)} tokens. "
        f"Images: {escape(str(writer.images_dir))}  Metadata: {escape(str(writer.metadata_dir))}"
    )
    if result.shortfall:
        console.print(
            f"[yellow]Note:[/yellow] {result.shortfall} token(s) were skipped due to "
            f"uniqueness pressure. Increase max_attempts or relax rules/weights."
        )
    console.print(f"Elapsed: {time.perf_counter() - start:.2f}s")
