"""
Highlight Command - Show the dependency closure of a selected node.
"""

import sys
from typing import Tuple

import click
from rich.console import Console
from rich.table import Table

from ...core.types import NodeKind
from ..utils import echo_error, load_controller

console = Console()


@click.command()
@click.argument("node_id")
@click.option("-g", "--graph", "topology_file", default="topology.json",
              help="Path to topology JSON file or directory")
@click.option("-f", "--filter", "filters", multiple=True,
              help="Filter key to activate (e.g. ns:default, app:payment). Repeatable.")
@click.option("-c", "--config", "config_path", default=None,
              help="Path to config.yaml (default: .topolens/config.yaml)")
@click.option("--json", "as_json", is_flag=True, help="Output the view model as JSON")
def highlight(node_id: str, topology_file: str, filters: Tuple[str, ...],
              config_path: str | None, as_json: bool) -> None:
    """
    Select a node and show everything connected to it.

    Traversal only follows edges that survive the active filters.
    """
    controller = load_controller(topology_file, config_path, filters)
    if controller is None:
        sys.exit(1)

    view = controller.node_click(node_id)

    if as_json:
        click.echo(view.model_dump_json(indent=2))
        return

    if view.selection is None:
        echo_error(f"Node not visible: {node_id}")
        return

    counts = view.related_counts or {}
    table = Table(title=f"Dependencies of {node_id}")
    table.add_column("Layer", style="cyan")
    table.add_column("Related", justify="right", style="bold blue")
    table.add_column("Visible", justify="right")
    for kind in NodeKind:
        total = view.layer_totals.get(kind.value, 0)
        if total:
            table.add_row(kind.value, str(counts.get(kind.value, 0)), str(total))
    console.print(table)

    related = sorted(view.highlighted_ids)
    click.echo(f"{len(related)} related node(s):")
    for i, related_id in enumerate(related):
        connector = "└─" if i == len(related) - 1 else "├─"
        style = {"fg": "green", "bold": True} if related_id == node_id else {}
        click.echo(f"  {connector} {click.style(related_id, **style)}")
