from .cluster import Cluster
from .node import NodeGroup, NodeInfo, ResourceQuantities
from .operations import OperationResult, PodDetailsResult, PodLogsResult
from .pod import PodInfo

__all__ = [
    "Cluster",
    "NodeGroup",
    "NodeInfo",
    "OperationResult",
    "PodDetailsResult",
    "PodInfo",
    "PodLogsResult",
    "ResourceQuantities",
]
