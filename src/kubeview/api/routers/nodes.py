# src/kubeview/api/routers/nodes.py
"""
API routes for the nodes and node groups of a cluster.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from kubeview.api.dependencies import get_cluster_name, get_node_collector, get_node_group_collector
from kubeview.collectors import NodeCollector, NodeGroupCollector
from kubeview.models.node import NodeGroup, NodeInfo

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/clusters/{cluster:path}/nodes", response_model=List[NodeInfo])
async def list_nodes(
    cluster_name: str = Depends(get_cluster_name),
    collector: NodeCollector = Depends(get_node_collector),
):
    """Return every node with capacity, allocatable, usage and pod count."""
    return await collector.collect(cluster_name)


@router.get("/clusters/{cluster:path}/nodegroups", response_model=List[NodeGroup])
async def list_node_groups(
    cluster_name: str = Depends(get_cluster_name),
    collector: NodeGroupCollector = Depends(get_node_group_collector),
):
    """Return the cluster's node groups with summed usage and utilisation percentages."""
    return await collector.collect(cluster_name)
