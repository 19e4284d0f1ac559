"""
Filter Command - Summarize the visible subgraph for a set of filters.
"""

import json
import sys
from typing import Tuple

import click
from rich.console import Console
from rich.table import Table

from ...core.types import NodeKind
from ..utils import load_controller

console = Console()


@click.command("filter")
@click.option("-g", "--graph", "topology_file", default="topology.json",
              help="Path to topology JSON file or directory")
@click.option("-f", "--filter", "filters", multiple=True,
              help="Filter key to activate (e.g. ns:default, app:payment). Repeatable.")
@click.option("-c", "--config", "config_path", default=None,
              help="Path to config.yaml (default: .topolens/config.yaml)")
@click.option("--json", "as_json", is_flag=True, help="Output the visible subgraph as JSON")
def filter_cmd(topology_file: str, filters: Tuple[str, ...], config_path: str | None,
               as_json: bool) -> None:
    """
    Apply filters to a topology and report what remains visible.
    """
    controller = load_controller(topology_file, config_path, filters)
    if controller is None:
        sys.exit(1)

    visible = controller.visible_graph()
    canonical = controller.store.snapshot()

    if as_json:
        click.echo(json.dumps(visible.model_dump(mode="json"), indent=2))
        return

    active = sorted(controller.state.filters)
    table = Table(title=f"Visible topology ({', '.join(active) or 'no filters'})")
    table.add_column("Layer", style="cyan")
    table.add_column("Visible", justify="right", style="bold")
    table.add_column("Total", justify="right")

    totals = controller.store.get_stats()["nodes_by_kind"]
    visible_totals = controller.view.layer_totals
    for kind in NodeKind:
        total = totals.get(kind.value, 0)
        if total:
            table.add_row(kind.value, str(visible_totals.get(kind.value, 0)), str(total))
    console.print(table)

    click.echo(f"Nodes: {len(visible.nodes)}/{len(canonical.nodes)}  "
               f"Edges: {len(visible.edges)}/{len(canonical.edges)}")
    dropped = controller.store.dropped_edges
    if dropped:
        click.echo(click.style(f"⚠️  {len(dropped)} edge(s) dropped: missing endpoints", fg="yellow"))
