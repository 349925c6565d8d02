#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.table import Table

from workshop.config import get_settings
from workshop.core.simulation import run_input
from workshop.core.workshop import Workshop
from workshop.errors import InputError
from workshop.io.reader import read_input
from workshop.io.report import INPUT_ERROR_TOKEN, format_provenance
from workshop.observability.logging import get_logger
from workshop.observability.metrics import MetricsRecorder

app = typer.Typer(add_completion=False)


def _state_table(shop: Workshop) -> Table:
    table = Table(title="Final state", show_lines=False)
    table.add_column("store", style="cyan")
    table.add_column("capacity", justify="right")
    table.add_column("items (newest first)")
    bench = shop.workbench_item
    table.add_row("workbench", "1", "" if bench is None else str(bench))
    for index, tier in enumerate(shop.tiers, start=1):
        table.add_row(f"tier {index}", str(tier.capacity), " ".join(str(i) for i in tier))
    table.add_row("overflow", "-", " ".join(str(i) for i in shop.overflow))
    return table


@app.command()
def run(
    input_path: Optional[Path] = typer.Option(
        None, "--input", "-i", help="Read the simulation input from a file instead of stdin"
    ),
    show_all: bool = typer.Option(False, "--all", help="Print the outcome of every item, not only the last"),
    show_state: bool = typer.Option(False, "--show-state", help="Print the final store contents"),
    max_tiers: Optional[int] = typer.Option(None, "--max-tiers", help="Tier count limit (default from .env)"),
    max_capacity: Optional[int] = typer.Option(
        None, "--max-capacity", help="Tier capacity limit (default from .env)"
    ),
):
    """
    Run the tiered workshop simulation. Input: a line of tier capacities, an
    item count, then one item per line. Prints the tier number the last item
    came from, OUTSIDE or NEW.
    """
    settings = get_settings()
    get_logger("workshop", level=settings.log_level)
    log = get_logger("workshop.cli")
    limits = dict(
        max_tiers=settings.max_tiers if max_tiers is None else max_tiers,
        max_capacity=settings.max_capacity if max_capacity is None else max_capacity,
    )

    try:
        if input_path is not None:
            with input_path.open("r", encoding="utf-8") as f:
                data = read_input(f, **limits)
        else:
            data = read_input(sys.stdin, **limits)
    except (InputError, OSError, UnicodeDecodeError) as e:
        log.debug("input rejected: %s", e)
        rprint(INPUT_ERROR_TOKEN)
        raise typer.Exit(code=1)

    recorder = MetricsRecorder(settings.traces_dir) if settings.obs_metrics_enabled else None
    shop = Workshop(data.capacities)
    label = input_path.name if input_path is not None else "stdin"
    results = run_input(data, recorder=recorder, workshop=shop, label=label)

    if show_all:
        for p in results:
            rprint(format_provenance(p))
    else:
        rprint(format_provenance(results[-1]))
    if show_state:
        rprint(_state_table(shop))


def main():
    app()


if __name__ == "__main__":
    main()
