# src/kubeview/collectors/node_group_collector.py
"""
Groups nodes into provider node groups / pools and sums their capacity and
usage.

Grouping evaluates NODE_GROUP_RULES in order and the first rule with a
non-empty label wins. A cluster is expected to be provisioned by a single
tool, so a node carrying labels from several providers is grouped by the
highest-priority one.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from ..core.config import Config
from ..core.config import config as global_config
from ..core.k8s_client import ClusterClientFactory, ClusterClients
from ..models.node import NodeGroup, NodeInfo
from ..utils.k8s_utils import round_half_up
from .base_collector import BaseCollector
from .node_collector import NodeCollector

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "default"


@dataclass(frozen=True)
class GroupingRule:
    """A provider's node-group label(s), tried in order."""

    provider: str
    label_keys: Tuple[str, ...]

    def extract(self, labels: Dict[str, str]) -> Optional[str]:
        for key in self.label_keys:
            value = labels.get(key)
            if value:
                return value
        return None


NODE_GROUP_RULES: Tuple[GroupingRule, ...] = (
    GroupingRule("eks", ("eks.amazonaws.com/nodegroup",)),
    GroupingRule("kops", ("kops.k8s.io/instancegroup",)),
    GroupingRule("gke", ("cloud.google.com/gke-nodepool",)),
    GroupingRule("aks", ("agentpool", "kubernetes.azure.com/agentpool")),
)


def node_group_name(labels: Dict[str, str], rules: Iterable[GroupingRule] = NODE_GROUP_RULES) -> str:
    """Returns the group of the first matching rule, or 'default'."""
    for rule in rules:
        value = rule.extract(labels or {})
        if value:
            return value
    return DEFAULT_GROUP


def utilisation_percent(used: float, total: float) -> int:
    """round(min(used / total, 1) * 100), or 0 when total is not positive."""
    if not total or total <= 0:
        return 0
    return round_half_up(max(0.0, min(used / total, 1.0)) * 100)


class _GroupTotals(NamedTuple):
    nodes: Tuple[NodeInfo, ...] = ()
    total_cpu: float = 0.0
    used_cpu: float = 0.0
    total_memory: float = 0.0
    used_memory: float = 0.0
    pods: int = 0

    def add(self, node: NodeInfo) -> "_GroupTotals":
        return _GroupTotals(
            nodes=self.nodes + (node,),
            total_cpu=self.total_cpu + node.capacity.cpu_cores,
            used_cpu=self.used_cpu + min(node.usage.cpu_cores, node.capacity.cpu_cores),
            total_memory=self.total_memory + node.capacity.memory_bytes,
            used_memory=self.used_memory + min(node.usage.memory_bytes, node.allocatable.memory_bytes),
            pods=self.pods + node.pod_count,
        )


class NodeGroupCollector(BaseCollector):
    """Collects node groups built from the NodeCollector output."""

    def __init__(
        self,
        factory: ClusterClientFactory = None,
        settings: Config = global_config,
        node_collector: Optional[NodeCollector] = None,
        rules: Tuple[GroupingRule, ...] = NODE_GROUP_RULES,
    ):
        super().__init__(factory, settings)
        self.node_collector = node_collector or NodeCollector(self.factory, settings)
        self.rules = rules

    async def collect_from(self, clients: ClusterClients) -> List[NodeGroup]:
        nodes = await self.node_collector.collect_from(clients)
        groups = self.group(nodes)
        logger.info("Grouped %d nodes into %d node groups", len(nodes), len(groups))
        return groups

    def group(self, nodes: Iterable[NodeInfo]) -> List[NodeGroup]:
        """Partitions nodes into groups, in order of first appearance."""
        totals = self._accumulate(nodes)
        return [self._finalize(name, group_totals) for name, group_totals in totals.items()]

    def _accumulate(self, nodes: Iterable[NodeInfo]) -> Dict[str, _GroupTotals]:
        totals: Dict[str, _GroupTotals] = {}
        for node in nodes:
            name = node_group_name(node.tags, self.rules)
            totals[name] = totals.get(name, _GroupTotals()).add(node)
        return totals

    @staticmethod
    def _finalize(name: str, totals: _GroupTotals) -> NodeGroup:
        fields = dict(
            name=name,
            nodes=list(totals.nodes),
            total_cpu_cores=totals.total_cpu,
            used_cpu_cores=totals.used_cpu,
            total_memory_bytes=totals.total_memory,
            used_memory_bytes=totals.used_memory,
            pods_count=totals.pods,
        )
        try:
            return NodeGroup(
                **fields,
                cpu_percent=utilisation_percent(totals.used_cpu, totals.total_cpu),
                mem_percent=utilisation_percent(totals.used_memory, totals.total_memory),
            )
        except Exception as e:
            logger.error("Error computing utilisation for node group '%s': %s", name, e)
            return NodeGroup(**fields, cpu_percent=0, mem_percent=0)
