"""rankmedian CLI: Typer + Rich terminal interface.

Commands: heuristics, tally, consensus, export, config.
All output is Rich-powered tables and panels.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from rankmedian import __version__
from rankmedian.config_loader import default_config_path, load_engine_config
from rankmedian.schemas.catalog import Heuristic
from rankmedian.schemas.engine import MAX_SEARCH_ITEMS, Dataset, EngineConfig

console = Console()
# notices go here so exports printed to stdout stay parseable
err_console = Console(stderr=True)

# ── App and sub-apps ─────────────────────────────────────────────

app = typer.Typer(
    name="rankmedian",
    help="Exact consensus (median) rankings for small expert panels.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    name="config",
    help="Show engine configuration.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")


# ── Version callback ───────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"rankmedian {__version__}")
        raise typer.Exit()


# ── App Callback ────────────────────────────────────────────────


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log engine diagnostics.",
    ),
) -> None:
    """rankmedian: exact consensus rankings for small expert panels."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# ── Helpers ──────────────────────────────────────────────────────


def _load_dataset(path: Path) -> Dataset:
    """Load a dataset file, exit on error."""
    from rankmedian.persistence.dataset import load_dataset

    try:
        return load_dataset(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading dataset:[/red] {e}")
        raise typer.Exit(1) from None


def _load_config(path: Path | None = None) -> EngineConfig:
    """Load engine config, exit on error."""
    try:
        return load_engine_config(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(1) from None


def _resolve_heuristic(name: str | None, config: EngineConfig) -> Heuristic:
    from rankmedian.consensus.tally import resolve_heuristic

    try:
        return resolve_heuristic(name or config.default_heuristic)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from None


def _engine_config(
    config_path: Path | None,
    max_items: int | None,
    partial: bool,
    seed: int | None,
) -> EngineConfig:
    """Apply command-line overrides on top of the loaded config."""
    config = _load_config(config_path)
    overrides: dict[str, object] = {}
    if max_items is not None:
        overrides["max_items"] = max_items
    if partial:
        overrides["allow_partial_rows"] = True
    if seed is not None:
        overrides["reference_seed"] = seed
    if not overrides:
        return config
    try:
        return EngineConfig(**(config.model_dump() | overrides))
    except ValueError as e:
        console.print(f"[red]Invalid option:[/red] {e}")
        raise typer.Exit(1) from None


_DATASET_ARG = typer.Argument(..., help="JSON dataset with items, votes and experts")
_HEURISTIC_OPT = typer.Option(
    None, "--heuristic", "-H",
    help="Heuristic: standard, h1-h7 (default from config)",
)
_CONFIG_OPT = typer.Option(None, "--config", help="Path to an engine defaults.toml")


# ── Commands ─────────────────────────────────────────────────────


@app.command()
def heuristics() -> None:
    """List the item selection heuristics."""
    from rankmedian.cli_display import render_heuristics

    render_heuristics(console)


@app.command()
def tally(
    dataset: Path = _DATASET_ARG,
    heuristic: str = _HEURISTIC_OPT,
    config_path: Path = _CONFIG_OPT,
) -> None:
    """Show vote totals for the items a heuristic selects."""
    from rankmedian.cli_display import render_tally
    from rankmedian.consensus.tally import apply_heuristic

    config = _load_config(config_path)
    selected = _resolve_heuristic(heuristic, config)
    data = _load_dataset(dataset)

    results = apply_heuristic(data.votes, data.items, selected)
    render_tally(console, results, selected)


@app.command()
def consensus(
    dataset: Path = _DATASET_ARG,
    heuristic: str = _HEURISTIC_OPT,
    seed: int = typer.Option(None, "--seed", help="Seed for the reference ranking"),
    max_items: int = typer.Option(
        None, "--max-items",
        help=f"Item cap for the permutation search (1-{MAX_SEARCH_ITEMS})",
    ),
    partial: bool = typer.Option(
        False, "--partial",
        help="Also search expert rows that leave items unranked",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result bundle as JSON"),
    config_path: Path = _CONFIG_OPT,
) -> None:
    """Compute the four median rankings for a dataset."""
    from rankmedian.cli_display import (
        render_matrix,
        render_medians,
        render_notices,
        render_reference,
        render_statistics,
    )
    from rankmedian.consensus.engine import ConsensusEngine
    from rankmedian.consensus.statistics import compute_statistics
    from rankmedian.persistence.export import export_json

    config = _engine_config(config_path, max_items, partial, seed)
    selected = _resolve_heuristic(heuristic, config)
    data = _load_dataset(dataset)

    bundle = ConsensusEngine(config).process(data.items, data.votes, data.experts, selected)

    if as_json:
        print(export_json(bundle))
        return

    render_notices(console, bundle.notices)
    if bundle.ranking_matrix.items:
        render_matrix(console, bundle)
    if bundle.medians is None:
        return

    render_reference(console, bundle)
    render_medians(console, bundle)
    stats = compute_statistics(bundle)
    if stats is not None:
        render_statistics(console, stats)


@app.command()
def export(
    dataset: Path = _DATASET_ARG,
    heuristic: str = _HEURISTIC_OPT,
    fmt: str = typer.Option("csv", "--format", "-f", help="Export format: csv, json, markdown"),
    output: Path = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout"),
    all_ties: bool = typer.Option(
        False, "--all-ties", help="Export every tied ranking, not just the first",
    ),
    seed: int = typer.Option(None, "--seed", help="Seed for the reference ranking"),
    max_items: int = typer.Option(
        None, "--max-items",
        help=f"Item cap for the permutation search (1-{MAX_SEARCH_ITEMS})",
    ),
    partial: bool = typer.Option(
        False, "--partial",
        help="Also search expert rows that leave items unranked",
    ),
    config_path: Path = _CONFIG_OPT,
) -> None:
    """Export median rankings as CSV, JSON or Markdown."""
    from rankmedian.cli_display import render_notices
    from rankmedian.consensus.engine import ConsensusEngine
    from rankmedian.persistence.export import export_csv, export_json, export_markdown

    if fmt not in ("csv", "json", "markdown"):
        console.print(f"[red]Unknown format:[/red] '{fmt}'. Choose from: csv, json, markdown")
        raise typer.Exit(1)

    config = _engine_config(config_path, max_items, partial, seed)
    selected = _resolve_heuristic(heuristic, config)
    data = _load_dataset(dataset)

    bundle = ConsensusEngine(config).process(data.items, data.votes, data.experts, selected)

    if bundle.medians is None:
        render_notices(err_console, bundle.notices)

    if fmt == "csv":
        content = export_csv(bundle, all_ties=all_ties)
    elif fmt == "json":
        content = export_json(bundle)
    else:
        content = export_markdown(bundle)

    if output is None:
        print(content, end="" if content.endswith("\n") else "\n")
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    console.print(f"[green]Exported {fmt} to[/green] {output}")


# ── Config subcommands ──────────────────────────────────────────


@config_app.command("show")
def config_show(config_path: Path = _CONFIG_OPT) -> None:
    """Show current engine configuration."""
    config = _load_config(config_path)

    table = Table(title="Engine Configuration", show_header=False, show_lines=True)
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("Config File", str(config_path or default_config_path()))
    table.add_row("Max Items", str(config.max_items))
    table.add_row("Allow Partial Rows", str(config.allow_partial_rows))
    table.add_row("Default Heuristic", config.default_heuristic.value)
    table.add_row(
        "Reference Seed",
        "random" if config.reference_seed is None else str(config.reference_seed),
    )

    console.print(table)
