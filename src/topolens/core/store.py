"""
Canonical graph store backed by rustworkx.

The store owns the full node/edge set for the current scope. It is
replace-only: ``load`` swaps in a freshly built graph and nothing mutates
it afterwards, so any filter or highlight computation always reads a
consistent snapshot.

It manages:
- The bimap between string node ids and rustworkx integer indices.
- A per-kind index used for layer totals and scope lookups.
- Dropping edges whose endpoints are missing (data-quality issue, not an error).
"""

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, List, Optional, Set

import rustworkx as rx

from .exceptions import DuplicateEdgeError, DuplicateNodeError
from .types import Edge, Graph, Node, NodeKind

logger = logging.getLogger(__name__)


class GraphStore:
    """
    Holds the canonical topology for the current scope.

    Features:
    - O(1) node lookup via ID-to-Index bimap
    - Snapshot is built once per load and shared by every reader
    """

    def __init__(self):
        self._graph = rx.PyDiGraph(multigraph=True)
        self._id_to_idx: Dict[str, int] = {}
        self._nodes_by_kind: Dict[NodeKind, Set[str]] = defaultdict(set)
        self._snapshot = Graph()
        self._dropped_edges: List[Edge] = []

    def load(self, graph: Graph) -> None:
        """
        Replace the canonical graph wholesale.

        Raises:
            DuplicateNodeError: If two nodes share an id.
            DuplicateEdgeError: If two edges share an id; visual state is
                keyed by edge id.
        """
        counts = Counter(node.id for node in graph.nodes)
        duplicates = [node_id for node_id, count in counts.items() if count > 1]
        if duplicates:
            raise DuplicateNodeError(duplicates)

        edge_counts = Counter(edge.id for edge in graph.edges)
        duplicate_edges = [edge_id for edge_id, count in edge_counts.items() if count > 1]
        if duplicate_edges:
            raise DuplicateEdgeError(duplicate_edges)

        new_graph = rx.PyDiGraph(multigraph=True)
        id_to_idx: Dict[str, int] = {}
        nodes_by_kind: Dict[NodeKind, Set[str]] = defaultdict(set)

        for node in graph.nodes:
            id_to_idx[node.id] = new_graph.add_node(node)
            nodes_by_kind[node.type].add(node.id)

        kept: List[Edge] = []
        dropped: List[Edge] = []
        for edge in graph.edges:
            if edge.source not in id_to_idx or edge.target not in id_to_idx:
                logger.warning(
                    f"Dropping edge {edge.id}: endpoint missing ({edge.source} -> {edge.target})"
                )
                dropped.append(edge)
                continue
            new_graph.add_edge(id_to_idx[edge.source], id_to_idx[edge.target], edge)
            kept.append(edge)

        # Swap only once the new graph is complete
        self._graph = new_graph
        self._id_to_idx = id_to_idx
        self._nodes_by_kind = nodes_by_kind
        self._dropped_edges = dropped
        self._snapshot = Graph(nodes=tuple(graph.nodes), edges=tuple(kept))

        logger.debug(
            f"Loaded topology: {len(graph.nodes)} nodes, {len(kept)} edges "
            f"({len(dropped)} dropped)"
        )

    def snapshot(self) -> Graph:
        """Return the current canonical graph."""
        return self._snapshot

    def get_node(self, node_id: str) -> Optional[Node]:
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return None
        return self._graph[idx]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._id_to_idx

    def get_nodes_by_kind(self, kind: NodeKind) -> List[Node]:
        """Nodes of one kind, in load order."""
        ids = self._nodes_by_kind.get(kind, set())
        return [node for node in self._snapshot.nodes if node.id in ids]

    @property
    def dropped_edges(self) -> List[Edge]:
        """Edges discarded by the last load because an endpoint was missing."""
        return list(self._dropped_edges)

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def get_stats(self) -> Dict[str, Any]:
        node_counts = {
            kind.value: len(ids)
            for kind, ids in self._nodes_by_kind.items()
        }
        components = rx.number_weakly_connected_components(self._graph) if self.node_count else 0
        orphans = len([
            idx for idx in self._graph.node_indices()
            if self._graph.in_degree(idx) == 0 and self._graph.out_degree(idx) == 0
        ])
        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "nodes_by_kind": node_counts,
            "dropped_edges": len(self._dropped_edges),
            "components": components,
            "orphans": orphans,
        }
