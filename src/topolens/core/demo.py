"""
Demo Manager - Scaffolds a sample Kubernetes topology.

Produces a fixed, reproducible topology document (hosts, pods, workloads,
services, namespaces and external systems) so a user can try scoping,
filtering and highlighting without wiring up a real layout provider.
Coordinates follow a simple stacked arrangement: one row per layer.
"""

import json
import logging
from pathlib import Path
from typing import List, Tuple

from .types import Edge, Graph, Node, NodeKind, Position

logger = logging.getLogger(__name__)

# Row of each layer, bottom (hosts) to top (externals)
LAYER_LEVELS = {
    NodeKind.NODE: 1,
    NodeKind.POD: 2,
    NodeKind.WORKLOAD: 3,
    NodeKind.SERVICE: 4,
    NodeKind.NAMESPACE: 5,
    NodeKind.EXTERNAL: 6,
}
X_SPACING = 200
Y_SPACING = -250


class DemoManager:
    """
    Manages the creation of the demo topology.
    """

    HOST_COUNT = 5
    PODS_PER_SERVICE = 3

    SERVICES: List[Tuple[str, str, str]] = [
        ("auth", "auth-service", "java"),
        ("pay", "payment-gateway", "java"),
        ("ord", "order-service", "java"),
        ("inv", "inventory-service", "nodejs"),
        ("not", "notification-service", "nodejs"),
        ("usr", "user-profile", "python"),
        ("ana", "analytics-worker", "python"),
        ("rep", "reporting-api", "go"),
    ]

    EXTERNALS: List[Tuple[str, str, str]] = [
        ("ext-rds", "AWS RDS Postgres", "aws"),
        ("ext-kafka", "Kafka Cluster", "linux"),
        ("ext-stripe", "Stripe API", "stripe"),
        ("ext-redis", "Redis Cache", "redis"),
        ("ext-s3", "AWS S3 Assets", "aws"),
    ]

    # Service mesh calls and calls out to external systems
    CALLS: List[Tuple[str, str]] = [
        ("svc-ord", "svc-pay"),
        ("svc-ord", "svc-inv"),
        ("svc-pay", "svc-usr"),
        ("svc-pay", "svc-auth"),
        ("pod-pay-0", "ext-stripe"),
        ("pod-inv-1", "ext-rds"),
        ("pod-ana-0", "ext-kafka"),
        ("pod-usr-0", "ext-redis"),
        ("svc-rep", "ext-s3"),
    ]

    def __init__(self, root_dir: Path):
        self.root_dir = Path(root_dir)

    def build(self) -> Graph:
        nodes: List[Node] = []
        edges: List[Edge] = []

        def add_node(node_id: str, label: str, kind: NodeKind, x: float, **extra) -> None:
            nodes.append(Node(
                id=node_id,
                type=kind,
                label=label,
                position=Position(x=x * X_SPACING, y=LAYER_LEVELS[kind] * Y_SPACING),
                **extra,
            ))

        def add_edge(source: str, target: str, dashed: bool = False) -> None:
            edges.append(Edge(source=source, target=target, dashed=dashed))

        hosts = [f"node-{i}" for i in range(self.HOST_COUNT)]
        for i, host in enumerate(hosts):
            add_node(host, f"worker-node-{i + 1}", NodeKind.NODE, i * 2.5,
                     sub_label="Ready", technology="linux")

        pod_index = 0
        for i, (short, label, tech) in enumerate(self.SERVICES):
            svc_id = f"svc-{short}"
            workload_id = f"deploy-{short}"
            add_node(svc_id, label, NodeKind.SERVICE, i * 2, sub_label="ClusterIP", technology=tech)
            add_node(workload_id, f"{label}-deploy", NodeKind.WORKLOAD, i * 2,
                     sub_label="Deployment", technology="k8s")
            add_edge(workload_id, svc_id, dashed=True)

            for j in range(self.PODS_PER_SERVICE):
                pod_id = f"pod-{short}-{j}"
                offset = (j - (self.PODS_PER_SERVICE - 1) / 2) * 0.5
                add_node(pod_id, f"{label}-{j}", NodeKind.POD, i * 2 + offset,
                         sub_label="Running", technology="docker")
                add_edge(pod_id, workload_id)
                add_edge(hosts[pod_index % len(hosts)], pod_id, dashed=True)
                pod_index += 1

        add_node("ns-default", "default", NodeKind.NAMESPACE, 4, sub_label="Active")
        add_node("ns-system", "kube-system", NodeKind.NAMESPACE, 10, sub_label="System")
        for i, (ext_id, label, tech) in enumerate(self.EXTERNALS):
            add_node(ext_id, label, NodeKind.EXTERNAL, i * 3 + 1, sub_label="External", technology=tech)

        for source, target in self.CALLS:
            add_edge(source, target, dashed=source.startswith("pod-") or target.startswith("ext-"))
        for short, _, _ in self.SERVICES:
            add_edge("ns-default", f"svc-{short}", dashed=True)

        return Graph(nodes=tuple(nodes), edges=tuple(edges))

    def provision(self, filename: str = "topology.json") -> Path:
        """Write the demo topology under ``root_dir`` and return its path."""
        self.root_dir.mkdir(parents=True, exist_ok=True)
        path = self.root_dir / filename
        graph = self.build()
        path.write_text(json.dumps(graph.model_dump(mode="json"), indent=2))
        logger.info(f"Wrote demo topology to {path}")
        return path
