# src/kubeview/collectors/pod_collector.py
"""
Collects every pod in the cluster together with its summed container usage
from the metrics API, its Helm chart metadata and a coarse age.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from ..core.config import Config
from ..core.config import config as global_config
from ..core.k8s_client import ClusterClientFactory, ClusterClients
from ..models.pod import PodInfo
from ..utils.date_utils import age_bucket
from ..utils.k8s_utils import parse_cpu, parse_memory
from .base_collector import BaseCollector, process_isolated

logger = logging.getLogger(__name__)

HELM_NAME_LABEL = "app.kubernetes.io/name"
HELM_VERSION_LABEL = "app.kubernetes.io/version"
HELM_CHART_LABEL = "helm.sh/chart"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _chart_segment(labels: Dict[str, str], index: int) -> Optional[str]:
    chart = labels.get(HELM_CHART_LABEL)
    if not chart:
        return None
    parts = chart.split("-")
    return parts[index] if len(parts) > index and parts[index] else None


def extract_helm_chart(labels: Dict[str, str]) -> Optional[str]:
    """Chart name from app.kubernetes.io/name, else the first segment of helm.sh/chart."""
    return labels.get(HELM_NAME_LABEL) or _chart_segment(labels, 0)


def extract_helm_version(labels: Dict[str, str]) -> Optional[str]:
    """Version from app.kubernetes.io/version, else the second segment of helm.sh/chart."""
    return labels.get(HELM_VERSION_LABEL) or _chart_segment(labels, 1)


def sum_container_usage(metrics_item: Optional[dict]) -> Tuple[float, float]:
    """
    Sums CPU cores and memory bytes over the containers of a PodMetrics item.
    A container whose usage cannot be read is skipped.
    """
    cpu_total, memory_total = 0.0, 0.0
    if not metrics_item:
        return cpu_total, memory_total

    for container in metrics_item.get("containers") or []:
        try:
            usage = container.get("usage") or {}
            cpu = parse_cpu(usage.get("cpu", "0"))
            memory = parse_memory(usage.get("memory", "0"))
        except Exception as e:
            logger.warning("Skipping usage of container %s: %s", container, e)
            continue
        cpu_total += cpu
        memory_total += memory
    return cpu_total, memory_total


class PodCollector(BaseCollector):
    """
    Lists pods cluster-wide (failure raises ClusterQueryError) and joins them
    with pod metrics on (namespace, name). Missing metrics give zero usage.
    """

    def __init__(
        self,
        factory: ClusterClientFactory = None,
        settings: Config = global_config,
        clock: Callable[[], datetime] = _utcnow,
    ):
        super().__init__(factory, settings)
        self.clock = clock

    async def collect_from(self, clients: ClusterClients) -> List[PodInfo]:
        metrics_task = asyncio.create_task(
            self._best_effort("pod metrics", clients.metrics.get_pod_metrics(), [])
        )
        try:
            pod_list = await self._primary(
                "pods",
                clients.core.list_pod_for_all_namespaces(watch=False, _request_timeout=self.request_timeout),
            )
        except BaseException:
            # Clients close on return; the metrics call must be finished by then.
            metrics_task.cancel()
            await asyncio.wait([metrics_task])
            raise
        pod_metrics = await metrics_task
        pods = pod_list.items or []
        logger.info("Fetched %d pods from context '%s'", len(pods), clients.context_name)

        metrics_by_pod = self._metrics_by_pod(pod_metrics)
        now = self.clock()
        return process_isolated(
            pods,
            lambda pod: self._build_pod(pod, metrics_by_pod, now),
            self._minimal_pod,
            lambda pod: f"pod '{_pod_key(pod)}'",
        )

    @staticmethod
    def _metrics_by_pod(pod_metrics: List[dict]) -> Dict[Tuple[str, str], dict]:
        by_pod = {}
        for item in pod_metrics:
            metadata = item.get("metadata") or {}
            if metadata.get("name"):
                by_pod[(metadata.get("namespace") or "default", metadata["name"])] = item
        return by_pod

    @staticmethod
    def _build_pod(pod, metrics_by_pod: Dict[Tuple[str, str], dict], now: datetime) -> PodInfo:
        metadata = pod.metadata
        labels = metadata.labels or {}
        namespace = metadata.namespace or "default"
        cpu_usage, memory_usage = sum_container_usage(metrics_by_pod.get((namespace, metadata.name)))

        return PodInfo(
            name=metadata.name,
            namespace=namespace,
            status=(pod.status.phase if pod.status else None) or "Unknown",
            helm_chart=extract_helm_chart(labels),
            helm_version=extract_helm_version(labels),
            cpu_usage_cores=cpu_usage,
            memory_usage_bytes=memory_usage,
            node_name=(pod.spec.node_name if pod.spec else None) or "unknown",
            age=age_bucket(metadata.creation_timestamp, now),
        )

    @staticmethod
    def _minimal_pod(pod) -> PodInfo:
        metadata = getattr(pod, "metadata", None)
        status = getattr(pod, "status", None)
        return PodInfo(
            name=getattr(metadata, "name", None) or "unknown",
            namespace=getattr(metadata, "namespace", None) or "default",
            status=getattr(status, "phase", None) or "Unknown",
        )


def _pod_key(pod) -> str:
    metadata = getattr(pod, "metadata", None)
    return f"{getattr(metadata, 'namespace', None)}/{getattr(metadata, 'name', None)}"
