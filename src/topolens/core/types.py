"""
Core type definitions for topolens.

Nodes and edges are immutable records. Every derived view (filtered
subgraph, highlight annotations, view model) is a new object built from
them, never a patch applied to them.
"""

from enum import StrEnum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NodeKind(StrEnum):
    """Infrastructure kinds a topology node can represent."""
    NODE = "node"
    WORKLOAD = "workload"
    POD = "pod"
    NAMESPACE = "namespace"
    SERVICE = "service"
    EXTERNAL = "external"


class ScopeKind(StrEnum):
    """Granularity at which a topology view is focused."""
    GLOBAL = "global"
    NAMESPACE = "namespace"
    CLUSTER = "cluster"
    POD = "pod"
    NODE = "node"


class ViewMode(StrEnum):
    TOPOLOGY = "topology"
    VULNERABILITY = "vulnerability"


class Position(BaseModel):
    """Layout coordinate. Opaque to everything except camera centering."""
    x: float = 0.0
    y: float = 0.0

    model_config = ConfigDict(frozen=True)


class Node(BaseModel):
    """
    A host, workload, pod, namespace, service or external system.

    Only ``id``, ``type`` and ``label`` take part in scoping and filtering.
    The remaining fields travel with the record so the detail panel can
    show them.
    """
    id: str
    type: NodeKind
    label: str
    sub_label: Optional[str] = Field(default=None, alias="subLabel")
    position: Position = Field(default_factory=Position)

    status: str = "healthy"
    notification_count: int = Field(default=0, alias="notificationCount")
    technology: Optional[str] = None
    vulnerability: str = "none"

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def payload(self) -> Dict[str, Any]:
        """Full record handed to the detail panel."""
        return self.model_dump(mode="json")


class Edge(BaseModel):
    """
    Observed call between two nodes.

    Direction is kept for rendering arrows only; dependency traversal
    treats every edge as undirected.
    """
    id: str = ""
    source: str
    target: str
    dashed: bool = False

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _default_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id"):
            data = {**data, "id": f"e-{data.get('source')}-{data.get('target')}"}
        return data

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def other_end(self, node_id: str) -> str:
        return self.target if self.source == node_id else self.source


class Graph(BaseModel):
    """A snapshot of nodes and edges."""
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    model_config = ConfigDict(frozen=True)

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def edge_ids(self) -> set[str]:
        return {edge.id for edge in self.edges}

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


class NodeVisualState(BaseModel):
    opacity: float = 1.0
    grayscale: bool = False

    model_config = ConfigDict(frozen=True)


class EdgeVisualState(BaseModel):
    animated: bool = True
    stroke_opacity: float = 0.6
    stroke_width: float = 2.0
    stroke_color: str = "#555"

    model_config = ConfigDict(frozen=True)
