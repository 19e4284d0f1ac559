"""
topolens CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import filter as filter_command
from .commands import focus, highlight, initialize


@click.group()
@click.version_option(package_name="topolens")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """topolens: Topology Scoping & Dependency Highlighting.

    Narrows an infrastructure graph to a scope, applies filters, and
    shows the connected dependencies of a selected node.

    \b
    Quick Start:
      topolens init --demo
      topolens focus pod pod-pay-0
      topolens highlight svc-pay -f ns:default
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(initialize.init)
main.add_command(focus.focus)
main.add_command(filter_command.filter_cmd, name="filter")
main.add_command(highlight.highlight)

if __name__ == "__main__":
    main()
