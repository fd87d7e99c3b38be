# src/kubeview/collectors/node_collector.py

import asyncio
import logging
from collections import Counter
from typing import Dict, List

from ..core.k8s_client import ClusterClients
from ..models.node import NodeInfo, ResourceQuantities
from ..utils.k8s_utils import parse_cpu, parse_memory
from .base_collector import BaseCollector, process_isolated

logger = logging.getLogger(__name__)

INSTANCE_TYPE_LABELS = (
    "node.kubernetes.io/instance-type",
    "beta.kubernetes.io/instance-type",
)
# Labels under these prefixes are Kubernetes/cloud bookkeeping, not user tags.
INTERNAL_LABEL_PREFIXES = ("kubernetes.io/", "k8s.io/")


class NodeCollector(BaseCollector):
    """Collects nodes with capacity, allocatable, usage and pod counts."""

    async def collect_from(self, clients: ClusterClients) -> List[NodeInfo]:
        """
        Lists nodes (failure raises ClusterQueryError), then node metrics and
        all pods concurrently; both of those degrade to empty on failure.
        """
        node_list = await self._primary(
            "nodes", clients.core.list_node(watch=False, _request_timeout=self.request_timeout)
        )
        nodes = node_list.items or []
        logger.info("Fetched %d nodes from context '%s'", len(nodes), clients.context_name)

        node_metrics, pods = await asyncio.gather(
            self._best_effort("node metrics", clients.metrics.get_node_metrics(), []),
            self._best_effort("pods", self._list_pods(clients), []),
        )

        usage_by_node = self._usage_by_node(node_metrics)
        pods_per_node = Counter(
            pod.spec.node_name for pod in pods if getattr(pod, "spec", None) and pod.spec.node_name
        )

        return process_isolated(
            nodes,
            lambda node: self._build_node(node, usage_by_node, pods_per_node),
            self._minimal_node,
            lambda node: f"node '{_node_name(node)}'",
        )

    async def _list_pods(self, clients: ClusterClients) -> list:
        pod_list = await clients.core.list_pod_for_all_namespaces(watch=False, _request_timeout=self.request_timeout)
        return pod_list.items or []

    @staticmethod
    def _usage_by_node(node_metrics: List[dict]) -> Dict[str, dict]:
        usage = {}
        for item in node_metrics:
            name = (item.get("metadata") or {}).get("name")
            if name:
                usage[name] = item.get("usage") or {}
        return usage

    def _build_node(self, node, usage_by_node: Dict[str, dict], pods_per_node: Counter) -> NodeInfo:
        name = node.metadata.name
        labels = node.metadata.labels or {}
        capacity = (node.status.capacity if node.status else None) or {}
        allocatable = (node.status.allocatable if node.status else None) or {}
        usage = usage_by_node.get(name, {})

        cpu_capacity = parse_cpu(capacity.get("cpu", "0"))
        memory_capacity = parse_memory(capacity.get("memory", "0"))
        cpu_allocatable = parse_cpu(allocatable.get("cpu", "0"))
        memory_allocatable = parse_memory(allocatable.get("memory", "0"))

        # metrics-server samples race with capacity changes and can briefly report
        # more than the node has.
        cpu_usage = min(parse_cpu(usage.get("cpu", "0")), cpu_capacity)
        memory_usage = min(parse_memory(usage.get("memory", "0")), memory_allocatable)

        node_info = NodeInfo(
            name=name,
            instance_type=self._extract_instance_type(labels),
            tags=self._extract_tags(labels),
            capacity=ResourceQuantities(cpu_cores=cpu_capacity, memory_bytes=memory_capacity),
            allocatable=ResourceQuantities(cpu_cores=cpu_allocatable, memory_bytes=memory_allocatable),
            usage=ResourceQuantities(cpu_cores=cpu_usage, memory_bytes=memory_usage),
            pod_count=pods_per_node.get(name, 0),
        )
        logger.debug(
            " -> Node '%s': instance=%s, cpu=%s/%s, mem=%s/%s, pods=%d",
            name,
            node_info.instance_type,
            node_info.usage.cpu,
            node_info.capacity.cpu,
            node_info.usage.memory,
            node_info.allocatable.memory,
            node_info.pod_count,
        )
        return node_info

    @staticmethod
    def _minimal_node(node) -> NodeInfo:
        return NodeInfo(name=_node_name(node))

    @staticmethod
    def _extract_instance_type(labels: dict) -> str:
        """Reads the instance type from the current label, then the legacy beta label."""
        for key in INSTANCE_TYPE_LABELS:
            if labels.get(key):
                return labels[key]
        return "unknown"

    @staticmethod
    def _extract_tags(labels: dict) -> Dict[str, str]:
        return {
            key: value
            for key, value in labels.items()
            if not key.startswith(INTERNAL_LABEL_PREFIXES) and "instance-type" not in key
        }


def _node_name(node) -> str:
    metadata = getattr(node, "metadata", None)
    return getattr(metadata, "name", None) or "unknown"
