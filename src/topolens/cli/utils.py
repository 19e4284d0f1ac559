"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing and topology loading used across
the CLI commands.
"""

import json
from pathlib import Path
from typing import Iterable, Optional

import click
from pydantic import ValidationError

from ..config import load_config
from ..core.exceptions import GraphNotFoundError, TopologyError
from ..core.selection import SelectionController
from ..core.types import Graph, ScopeKind

DEFAULT_TOPOLOGY_FILES = ("topology.json", ".topolens/topology.json")


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def read_topology(topology_file: str) -> Graph:
    """
    Read a topology document from a file or directory path.

    Directories are searched for ``topology.json`` then
    ``.topolens/topology.json``.

    Raises:
        GraphNotFoundError: If no topology file exists at the path.
        ValidationError: If the document is not a valid graph.
    """
    path = Path(topology_file)

    if path.is_dir():
        candidates = [path / name for name in DEFAULT_TOPOLOGY_FILES]
        found = next((p for p in candidates if p.exists()), None)
        if found is None:
            raise GraphNotFoundError(str(candidates[0]))
        path = found

    if not path.exists():
        raise GraphNotFoundError(topology_file)

    return Graph.model_validate(json.loads(path.read_text()))


def load_topology(topology_file: str) -> Optional[Graph]:
    """
    Load a topology document, reporting failures instead of raising.

    Args:
        topology_file (str): Path to a JSON file or a directory containing one.

    Returns:
        Optional[Graph]: The parsed graph, or None if loading failed.
    """
    try:
        return read_topology(topology_file)
    except GraphNotFoundError as e:
        echo_error(str(e))
        click.echo("Run 'topolens init --demo' to create a sample topology.")
        return None
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        echo_error(f"Failed to load topology: {e}")
        return None


def load_controller(
    topology_file: str,
    config_path: Optional[str] = None,
    filters: Iterable[str] = (),
) -> Optional[SelectionController]:
    """
    Mount a loaded topology at global scope and activate ``filters``.

    Returns None (after reporting) if the topology or config cannot be used.
    """
    graph = load_topology(topology_file)
    if graph is None:
        return None

    try:
        config = load_config(Path(config_path) if config_path else None)
        controller = SelectionController(config=config)
        controller.mount(ScopeKind.GLOBAL, "", "", graph)
    except TopologyError as e:
        echo_error(str(e))
        return None

    for key in filters:
        if key not in controller.state.filters:
            controller.toggle_filter(key)
    return controller
