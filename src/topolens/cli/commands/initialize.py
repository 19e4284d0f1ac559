"""
Init Command - Project bootstrap.

Writes ``.topolens/config.yaml`` with the default visual settings and,
with ``--demo``, a sample topology to explore.
"""

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from ...config import TopologyConfig, dump_config
from ...core.demo import DemoManager

console = Console()


def _init_project(root_dir: Path, force: bool, is_demo: bool) -> bool:
    """Internal helper to initialize a project. Returns False if aborted."""
    config_file = root_dir / ".topolens" / "config.yaml"

    if config_file.exists() and not force:
        if not Confirm.ask(f"{config_file} already exists. Overwrite?", default=False):
            console.print("[yellow]Aborted.[/yellow]")
            return False

    dump_config(TopologyConfig(), config_file)
    console.print(f"✅ Wrote [cyan]{config_file}[/cyan]")

    if is_demo:
        topology_file = DemoManager(root_dir).provision()
        console.print(f"✅ Wrote demo topology [cyan]{topology_file}[/cyan]")

    return True


@click.command()
@click.option("--demo", is_flag=True, help="Also write a sample topology.json")
@click.option("--force", is_flag=True, help="Overwrite an existing config without asking")
def init(demo: bool, force: bool) -> None:
    """
    Initialize topolens in the current directory.
    """
    root_dir = Path.cwd()
    if not _init_project(root_dir, force, demo):
        return

    next_steps = "topolens filter -f ns:default\ntopolens highlight svc-pay"
    console.print(Panel(next_steps, title="Initialized successfully", expand=False))
