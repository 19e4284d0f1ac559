"""
Topolens - Topology scoping and dependency highlighting.

Takes an infrastructure graph (hosts, workloads, pods, services, external
systems and the calls between them), narrows it to a requested scope,
applies filter-bar predicates, and on selection computes the connected
dependency subgraph together with the visual state a renderer needs to
distinguish it from everything else.

Key Components:
- core: Data types, canonical graph store, scope resolution, filtering,
  view projection and the selection state machine
- analysis: Dependency highlighting
- cli: Command line entry points

Usage:
    from topolens import SelectionController

    controller = SelectionController()
    view = controller.mount("pod", "pod-pay-0", "payment-gateway-0", graph)
    view = controller.node_click("svc-pay")
"""

__version__ = "0.1.0"

from .core.types import (
    Edge, Graph, Node, NodeKind, Position, ScopeKind, ViewMode,
)
from .core.selection import SelectionController
from .core.view import ViewModel, ViewState, project

__all__ = [
    "__version__",
    "Edge",
    "Graph",
    "Node",
    "NodeKind",
    "Position",
    "ScopeKind",
    "ViewMode",
    "SelectionController",
    "ViewModel",
    "ViewState",
    "project",
]
