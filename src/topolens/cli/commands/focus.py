"""
Focus Command - Resolve which node a scoped view would focus.
"""

import sys

import click

from ...core.scope import ScopeResolver
from ...core.types import ScopeKind
from ..utils import echo_info, load_topology


@click.command()
@click.argument("scope", type=click.Choice([s.value for s in ScopeKind]))
@click.argument("scope_id", default="")
@click.option("-l", "--label", default="", help="Display label of the scope item")
@click.option("-g", "--graph", "topology_file", default="topology.json",
              help="Path to topology JSON file or directory")
def focus(scope: str, scope_id: str, label: str, topology_file: str) -> None:
    """
    Show the initial focus target for SCOPE / SCOPE_ID.

    Matching is best-effort; when nothing matches the view is fitted instead.
    """
    graph = load_topology(topology_file)
    if graph is None:
        sys.exit(1)

    target = ScopeResolver().resolve(ScopeKind(scope), scope_id, label, graph)
    if target is None:
        click.echo(click.style("No focus target", fg="yellow") + " - view will be fitted")
        return

    node = graph.get_node(target)
    click.echo(f"🎯 Focus: {click.style(target, fg='cyan', bold=True)}")
    if node is not None:
        echo_info(f"{node.type.value}: {node.label}")
        echo_info(f"position: ({node.position.x:g}, {node.position.y:g})")
