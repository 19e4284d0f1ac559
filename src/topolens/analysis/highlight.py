"""
Dependency Highlighting.

Computes the connected dependency subgraph around a selected node and the
per-node / per-edge visual state that distinguishes it from everything
else in the current view. Traversal only ever walks the visible subgraph,
so nodes hidden by filters are never re-added through a hidden edge.
"""

import logging
from collections import defaultdict, deque
from typing import Dict, FrozenSet, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from ..config import (
    DIMMED_EDGE_WIDTH,
    HIGHLIGHT_EDGE_OPACITY,
    IDLE_DASHED_EDGE_WIDTH,
    IDLE_EDGE_WIDTH,
    RELATED_OPACITY,
    StyleConfig,
)
from ..core.types import Edge, EdgeVisualState, Graph, NodeVisualState

logger = logging.getLogger(__name__)


class HighlightResult(BaseModel):
    """
    Visual annotations for one visible subgraph.

    ``related_counts`` is None when nothing is selected, which tells the
    sidebar to show plain totals instead of "related / total".
    """
    selected: Optional[str] = None
    related_nodes: FrozenSet[str] = frozenset()
    related_edges: FrozenSet[str] = frozenset()
    node_states: Dict[str, NodeVisualState] = Field(default_factory=dict)
    edge_states: Dict[str, EdgeVisualState] = Field(default_factory=dict)
    related_counts: Optional[Dict[str, int]] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_focused(self) -> bool:
        return self.selected is not None


class DependencyHighlighter:
    """
    Breadth-first closure over undirected visible edges.

    Each call is independent: there is no incremental patching of a previous
    result, so a highlight can never outlive the filter state it was built
    against.
    """

    def __init__(self, style: Optional[StyleConfig] = None):
        self.style = style or StyleConfig()

    def highlight(self, graph: Graph, selected_id: Optional[str]) -> HighlightResult:
        visible_ids = graph.node_ids()
        if selected_id is None:
            return self.reset(graph)
        if selected_id not in visible_ids:
            logger.debug(f"Selection {selected_id} is not visible, resetting highlight")
            return self.reset(graph)

        related_nodes, related_edges = self.closure(graph, selected_id)

        node_states = {
            node.id: self._node_state(node.id in related_nodes)
            for node in graph.nodes
        }
        edge_states = {
            edge.id: self._edge_state(edge.id in related_edges)
            for edge in graph.edges
            if edge.source in visible_ids and edge.target in visible_ids
        }

        counts: Dict[str, int] = defaultdict(int)
        for node in graph.nodes:
            if node.id in related_nodes:
                counts[node.type.value] += 1

        logger.debug(
            f"Highlight {selected_id}: {len(related_nodes)} nodes, {len(related_edges)} edges"
        )
        return HighlightResult(
            selected=selected_id,
            related_nodes=frozenset(related_nodes),
            related_edges=frozenset(related_edges),
            node_states=node_states,
            edge_states=edge_states,
            related_counts=dict(counts),
        )

    def reset(self, graph: Graph) -> HighlightResult:
        """Idle state: everything opaque, every edge breathing."""
        visible_ids = graph.node_ids()
        return HighlightResult(
            node_states={node.id: NodeVisualState(opacity=RELATED_OPACITY) for node in graph.nodes},
            edge_states={
                edge.id: self._idle_edge_state(edge)
                for edge in graph.edges
                if edge.source in visible_ids and edge.target in visible_ids
            },
        )

    @staticmethod
    def closure(graph: Graph, start_id: str) -> tuple[Set[str], Set[str]]:
        """
        Connected component of ``start_id`` over the graph's edges.

        Returns the node ids and edge ids of the component. Edges with an
        endpoint outside the graph are ignored.
        """
        visible_ids = graph.node_ids()
        if start_id not in visible_ids:
            return set(), set()

        adjacency: Dict[str, List[Edge]] = defaultdict(list)
        for edge in graph.edges:
            if edge.source not in visible_ids or edge.target not in visible_ids:
                continue
            adjacency[edge.source].append(edge)
            if edge.target != edge.source:
                adjacency[edge.target].append(edge)

        related_nodes: Set[str] = {start_id}
        related_edges: Set[str] = set()
        queue = deque([start_id])

        while queue:
            current = queue.popleft()
            for edge in adjacency.get(current, []):
                related_edges.add(edge.id)
                neighbor = edge.other_end(current)
                if neighbor not in related_nodes:
                    related_nodes.add(neighbor)
                    queue.append(neighbor)

        return related_nodes, related_edges

    def _node_state(self, related: bool) -> NodeVisualState:
        if related:
            return NodeVisualState(opacity=RELATED_OPACITY, grayscale=False)
        return NodeVisualState(opacity=self.style.dimmed_opacity, grayscale=True)

    def _edge_state(self, related: bool) -> EdgeVisualState:
        if related:
            return EdgeVisualState(
                animated=True,
                stroke_opacity=HIGHLIGHT_EDGE_OPACITY,
                stroke_width=self.style.highlight_edge_width,
                stroke_color=self.style.highlight_color,
            )
        return EdgeVisualState(
            animated=False,
            stroke_opacity=self.style.dimmed_edge_opacity,
            stroke_width=DIMMED_EDGE_WIDTH,
            stroke_color=self.style.neutral_color,
        )

    def _idle_edge_state(self, edge: Edge) -> EdgeVisualState:
        return EdgeVisualState(
            animated=True,
            stroke_opacity=self.style.idle_edge_opacity,
            stroke_width=IDLE_DASHED_EDGE_WIDTH if edge.dashed else IDLE_EDGE_WIDTH,
            stroke_color=self.style.idle_color,
        )
