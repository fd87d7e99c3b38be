# src/kubeview/api/routers/pods.py
"""
API routes for listing pods and for pod-scoped operations.

Operation routes always answer with the result envelope; its status_code
becomes the HTTP status.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from kubeview.api.dependencies import get_cluster_name, get_pod_collector, get_pod_operations
from kubeview.collectors import PodCollector
from kubeview.core.config import config
from kubeview.core.pod_operations import PodOperations
from kubeview.models.operations import OperationResult, PodDetailsResult, PodLogsResult
from kubeview.models.pod import PodInfo

logger = logging.getLogger(__name__)

router = APIRouter()

# Not-found, forbidden and bad requests would fail the same way through kubectl.
NO_FALLBACK_STATUSES = (400, 403, 404)


def _envelope(result) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.model_dump(mode="json", exclude_none=True))


@router.get(
    "/clusters/{cluster:path}/pods",
    response_model=List[PodInfo],
    response_model_exclude_none=True,
)
async def list_pods(
    cluster_name: str = Depends(get_cluster_name),
    collector: PodCollector = Depends(get_pod_collector),
):
    """Return every pod with its summed usage, Helm metadata and age."""
    return await collector.collect(cluster_name)


@router.get("/clusters/{cluster:path}/pods/{namespace}/{pod}/logs", response_model=PodLogsResult)
async def get_pod_logs(
    namespace: str,
    pod: str,
    container: Optional[str] = Query(None, description="Container name; all containers when omitted."),
    tail: Optional[int] = Query(None, ge=0, description="Number of lines from the end of the log."),
    cluster_name: str = Depends(get_cluster_name),
    operations: PodOperations = Depends(get_pod_operations),
):
    result = await operations.get_pod_logs(cluster_name, namespace, pod, container=container or None, tail_lines=tail)
    if not result.success:
        logger.error("Pod logs request failed: %s", result.message)
    return _envelope(result)


@router.get("/clusters/{cluster:path}/pods/{namespace}/{pod}/details", response_model=PodDetailsResult)
async def get_pod_details(
    namespace: str,
    pod: str,
    cluster_name: str = Depends(get_cluster_name),
    operations: PodOperations = Depends(get_pod_operations),
):
    """
    Return the structured pod resource, falling back to parsed
    `kubectl describe` output when the API read fails unexpectedly.
    """
    result = await operations.get_pod_details(cluster_name, namespace, pod)
    if not result.success and result.status_code not in NO_FALLBACK_STATUSES and config.KUBECTL_FALLBACK_ENABLED:
        logger.warning("Structured read of pod %s/%s failed (%s); trying kubectl.", namespace, pod, result.message)
        fallback = await operations.describe_pod(cluster_name, namespace, pod)
        if fallback.success:
            return _envelope(fallback)
    return _envelope(result)


@router.delete("/clusters/{cluster:path}/pods/{namespace}/{pod}", response_model=OperationResult)
async def delete_pod(
    namespace: str,
    pod: str,
    cluster_name: str = Depends(get_cluster_name),
    operations: PodOperations = Depends(get_pod_operations),
):
    return _envelope(await operations.delete_pod(cluster_name, namespace, pod))
