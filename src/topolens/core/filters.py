"""
Filter engine.

Filter keys arrive from the filter bar as strings (``ns:default``,
``app:payment``). They are parsed into explicit filter variants and applied
to the canonical graph to produce the visible subgraph. Filtering never
touches the canonical graph; it always returns a new Graph (or the same
immutable Graph when nothing is active).

Combination rules:
- Non-app filters are AND-combined.
- ``app:`` filters are OR-combined among themselves, and backbone kinds
  (node, namespace, external) are exempt from them.
- Unrecognised keys are kept in the active set but match everything.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List

from ..config import APP_FILTER_EXEMPT_KINDS
from .types import Graph, Node

logger = logging.getLogger(__name__)

NAMESPACE_PREFIX = "ns"
APP_PREFIX = "app"


class NodeFilter(ABC):
    """Abstract base class for all filter variants."""

    key: str

    @abstractmethod
    def matches(self, node: Node) -> bool:
        pass


@dataclass(frozen=True)
class NamespaceFilter(NodeFilter):
    """
    ``ns:<value>``.

    Namespace membership is not a structured field on nodes, so
    ``ns:default`` works by excluding anything whose id or label mentions
    ``system``. Other namespace values are accepted but have no effect.
    """
    key: str
    value: str

    def matches(self, node: Node) -> bool:
        if self.value != "default":
            return True
        return "system" not in node.id and "system" not in node.label


@dataclass(frozen=True)
class AppFilter(NodeFilter):
    """
    ``app:<value>``: substring of the lowercased label or sub-label.

    The value itself is not lowercased, so mixed-case values match nothing.
    """
    key: str
    value: str

    def matches(self, node: Node) -> bool:
        if self.value in node.label.lower():
            return True
        return node.sub_label is not None and self.value in node.sub_label.lower()


@dataclass(frozen=True)
class UnknownFilter(NodeFilter):
    """Any key without a recognised prefix. Fails open."""
    key: str

    def matches(self, node: Node) -> bool:
        return True


def parse_filter(key: str) -> NodeFilter:
    """The value is the second colon-separated segment; later segments are ignored."""
    parts = key.split(":")
    if len(parts) > 1:
        prefix, value = parts[0], parts[1]
        if prefix == NAMESPACE_PREFIX:
            return NamespaceFilter(key=key, value=value)
        if prefix == APP_PREFIX:
            return AppFilter(key=key, value=value)
    logger.debug(f"Unrecognised filter key '{key}', ignoring")
    return UnknownFilter(key=key)


def toggle(filters: FrozenSet[str], key: str) -> FrozenSet[str]:
    """Return ``filters`` with ``key`` added if absent, removed if present."""
    if key in filters:
        return filters - {key}
    return filters | {key}


class FilterEngine:
    """Derives the visible subgraph from the canonical graph."""

    def apply(self, graph: Graph, filters: Iterable[str]) -> Graph:
        active = frozenset(filters)
        if not active:
            return graph

        parsed = [parse_filter(key) for key in sorted(active)]
        app_filters: List[NodeFilter] = [f for f in parsed if isinstance(f, AppFilter)]
        other_filters: List[NodeFilter] = [f for f in parsed if not isinstance(f, AppFilter)]

        def is_visible(node: Node) -> bool:
            if not all(f.matches(node) for f in other_filters):
                return False
            if not app_filters or node.type in APP_FILTER_EXEMPT_KINDS:
                return True
            return any(f.matches(node) for f in app_filters)

        nodes = tuple(node for node in graph.nodes if is_visible(node))
        visible_ids = {node.id for node in nodes}
        edges = tuple(
            edge for edge in graph.edges
            if edge.source in visible_ids and edge.target in visible_ids
        )

        logger.debug(
            f"Filters {sorted(active)}: {len(nodes)}/{len(graph.nodes)} nodes, "
            f"{len(edges)}/{len(graph.edges)} edges visible"
        )
        return Graph(nodes=nodes, edges=edges)


def apply_filters(graph: Graph, filters: Iterable[str]) -> Graph:
    return FilterEngine().apply(graph, filters)
