# src/kubeview/api/routers/clusters.py
"""
API routes for the clusters (kubeconfig contexts) the dashboard can show.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from kubeview.api.dependencies import get_cluster_registry
from kubeview.api.schemas import DisplayNameRequest, DisplayNameResponse
from kubeview.core.cluster_registry import ClusterRegistry
from kubeview.models.cluster import Cluster

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/clusters", response_model=List[Cluster])
async def list_clusters(registry: ClusterRegistry = Depends(get_cluster_registry)):
    """List every kubeconfig context. An empty list means none are configured."""
    return registry.list_clusters()


@router.post("/clusters/display-name", response_model=DisplayNameResponse)
async def update_display_name(request: DisplayNameRequest):
    """Acknowledge a display name change; the browser keeps the actual mapping."""
    if not request.cluster_name:
        raise HTTPException(status_code=400, detail="Cluster name is required")
    logger.info("Display name for cluster '%s' set to '%s'", request.cluster_name, request.display_name)
    return DisplayNameResponse(
        success=True,
        message="Display name updated",
        cluster_name=request.cluster_name,
        display_name=request.display_name,
    )
