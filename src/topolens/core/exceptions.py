"""
Exception hierarchy for topolens.

Most bad input is absorbed as a no-op (unknown filter keys, selections of
hidden nodes, dangling edges). These exceptions cover the cases that are
genuine precondition violations or user-facing load failures.
"""

from typing import Iterable


class TopologyError(Exception):
    """Base class for all topolens errors."""


class DuplicateNodeError(TopologyError):
    """A graph handed to the store repeats one or more node ids."""

    def __init__(self, node_ids: Iterable[str]):
        self.node_ids = sorted(set(node_ids))
        super().__init__(f"Duplicate node ids in graph: {', '.join(self.node_ids)}")


class DuplicateEdgeError(TopologyError):
    """A graph handed to the store repeats one or more edge ids."""

    def __init__(self, edge_ids: Iterable[str]):
        self.edge_ids = sorted(set(edge_ids))
        super().__init__(f"Duplicate edge ids in graph: {', '.join(self.edge_ids)}")


class GraphNotFoundError(TopologyError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Topology file not found: {path}")


class ConfigError(TopologyError):
    """The project config file exists but cannot be used."""
