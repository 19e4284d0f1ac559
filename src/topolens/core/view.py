"""
View state and projection.

All UI-relevant state for one mounted topology view lives in a single
immutable ``ViewState``. The renderer never receives patched node objects;
it receives a ``ViewModel`` computed by ``project`` from the canonical
graph and that state, recomputed on every event.
"""

from collections import defaultdict
from typing import Any, Dict, FrozenSet, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..analysis.highlight import DependencyHighlighter
from .filters import FilterEngine
from .types import Edge, EdgeVisualState, Graph, Node, NodeKind, NodeVisualState, ScopeKind, ViewMode


class Scope(BaseModel):
    kind: ScopeKind = ScopeKind.GLOBAL
    id: str = ""
    label: str = ""

    model_config = ConfigDict(frozen=True)


class CameraRequest(BaseModel):
    """
    Fire-and-forget instruction for the renderer's camera.

    Each event replaces the previous request; a renderer still animating an
    older one should abandon it.
    """
    action: Literal["center", "fit"]
    x: float = 0.0
    y: float = 0.0
    zoom: Optional[float] = None
    padding: Optional[float] = None
    duration_ms: int = 0

    model_config = ConfigDict(frozen=True)


class ViewState(BaseModel):
    scope: Scope = Field(default_factory=Scope)
    filters: FrozenSet[str] = frozenset()
    selection: Optional[str] = None
    view_mode: ViewMode = ViewMode.TOPOLOGY
    active_layer: Optional[NodeKind] = None

    model_config = ConfigDict(frozen=True)


class NodeView(BaseModel):
    node: Node
    state: NodeVisualState
    show_vulnerability: bool = False

    model_config = ConfigDict(frozen=True)


class EdgeView(BaseModel):
    edge: Edge
    state: EdgeVisualState

    model_config = ConfigDict(frozen=True)


class ViewModel(BaseModel):
    """Everything the renderer, sidebar and detail panel need for one frame."""
    state: ViewState
    nodes: List[NodeView] = Field(default_factory=list)
    edges: List[EdgeView] = Field(default_factory=list)
    related_counts: Optional[Dict[str, int]] = None
    related_nodes: FrozenSet[str] = frozenset()
    layer_totals: Dict[str, int] = Field(default_factory=dict)
    detail: Optional[Dict[str, Any]] = None
    camera: Optional[CameraRequest] = None

    model_config = ConfigDict(frozen=True)

    @property
    def selection(self) -> Optional[str]:
        return self.state.selection

    @property
    def highlighted_ids(self) -> set[str]:
        """Ids in the selection's connected closure; empty while Idle."""
        return set(self.related_nodes)

    def node_view(self, node_id: str) -> Optional[NodeView]:
        return next((view for view in self.nodes if view.node.id == node_id), None)

    def edge_view(self, edge_id: str) -> Optional[EdgeView]:
        return next((view for view in self.edges if view.edge.id == edge_id), None)


def layer_totals(graph: Graph) -> Dict[str, int]:
    totals: Dict[str, int] = defaultdict(int)
    for node in graph.nodes:
        totals[node.type.value] += 1
    return dict(totals)


def project(
    canonical: Graph,
    state: ViewState,
    highlighter: Optional[DependencyHighlighter] = None,
    camera: Optional[CameraRequest] = None,
    filter_engine: Optional[FilterEngine] = None,
) -> ViewModel:
    """
    Pure projection ``(canonical graph, state) -> ViewModel``.

    A selection that is not part of the visible subgraph projects as Idle.
    """
    highlighter = highlighter or DependencyHighlighter()
    filter_engine = filter_engine or FilterEngine()

    visible = filter_engine.apply(canonical, state.filters)
    result = highlighter.highlight(visible, state.selection)

    show_vulnerability = state.view_mode == ViewMode.VULNERABILITY
    nodes = [
        NodeView(node=node, state=result.node_states[node.id], show_vulnerability=show_vulnerability)
        for node in visible.nodes
    ]
    edges = [
        EdgeView(edge=edge, state=result.edge_states[edge.id])
        for edge in visible.edges
        if edge.id in result.edge_states
    ]

    if state.selection is not None and not result.is_focused:
        state = state.model_copy(update={"selection": None})

    detail = None
    if result.selected is not None:
        selected = visible.get_node(result.selected)
        detail = selected.payload() if selected else None

    return ViewModel(
        state=state,
        nodes=nodes,
        edges=edges,
        related_counts=result.related_counts,
        related_nodes=result.related_nodes,
        layer_totals=layer_totals(visible),
        detail=detail,
        camera=camera,
    )
