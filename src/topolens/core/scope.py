"""
Scope resolution.

Given the scope a topology view is mounted for, find the node that should
receive initial focus. Matching is deliberately lenient: the id handed in
by a detail panel may not exist verbatim in the generated layout, so each
scope falls back through a fixed sequence of weaker matches. A miss is not
an error; callers fit the whole view instead.
"""

import logging
from typing import Callable, Dict, Optional

from .types import Graph, Node, NodeKind, ScopeKind

logger = logging.getLogger(__name__)

SYSTEM_NAMESPACE_ID = "ns-system"
DEFAULT_NAMESPACE_ID = "ns-default"


def _first(graph: Graph, predicate: Callable[[Node], bool]) -> Optional[Node]:
    return next((node for node in graph.nodes if predicate(node)), None)


class ScopeResolver:
    """
    Pure function of ``(scope, scope_id, label, graph)``.

    First match wins, in node order of the graph.
    """

    def __init__(self):
        self._strategies: Dict[ScopeKind, Callable[[str, str, Graph], Optional[Node]]] = {
            ScopeKind.NODE: self._resolve_node,
            ScopeKind.NAMESPACE: self._resolve_namespace,
            ScopeKind.CLUSTER: self._resolve_cluster,
            ScopeKind.POD: self._resolve_pod,
        }

    def resolve(self, scope: ScopeKind | str, scope_id: str, label: str, graph: Graph) -> Optional[str]:
        """Return the id of the node to focus, or None to fit the view."""
        strategy = self._strategies.get(ScopeKind(scope))
        if strategy is None:
            return None

        target = strategy(scope_id, label, graph)
        if target is None:
            logger.debug(f"No focus target for scope {scope}:{scope_id} ({label})")
            return None
        return target.id

    @staticmethod
    def _resolve_node(scope_id: str, label: str, graph: Graph) -> Optional[Node]:
        return _first(
            graph,
            lambda n: n.id == scope_id
            or scope_id in n.id
            or (n.type == NodeKind.NODE and n.label == label),
        )

    @staticmethod
    def _resolve_namespace(scope_id: str, label: str, graph: Graph) -> Optional[Node]:
        # Namespaces are matched by name convention, not by the incoming id
        ns_id = SYSTEM_NAMESPACE_ID if "system" in label else DEFAULT_NAMESPACE_ID
        return _first(graph, lambda n: n.id == ns_id)

    @staticmethod
    def _resolve_cluster(scope_id: str, label: str, graph: Graph) -> Optional[Node]:
        # Clusters have no node of their own; a physical host stands in
        return _first(graph, lambda n: n.type == NodeKind.NODE)

    @staticmethod
    def _resolve_pod(scope_id: str, label: str, graph: Graph) -> Optional[Node]:
        exact = _first(
            graph,
            lambda n: n.id == scope_id or (n.type == NodeKind.POD and n.label == label),
        )
        if exact is not None:
            return exact
        return _first(graph, lambda n: n.type == NodeKind.POD)


def resolve_scope(scope: ScopeKind | str, scope_id: str, label: str, graph: Graph) -> Optional[str]:
    """Convenience wrapper around ``ScopeResolver().resolve``."""
    return ScopeResolver().resolve(scope, scope_id, label, graph)
