from .node_collector import NodeCollector
from .node_group_collector import NodeGroupCollector
from .pod_collector import PodCollector

__all__ = [
    "NodeCollector",
    "NodeGroupCollector",
    "PodCollector",
]
