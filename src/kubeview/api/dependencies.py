# src/kubeview/api/dependencies.py
"""
FastAPI dependency injection functions.

These functions provide registry, collector and operation instances to API
route handlers via FastAPI's Depends() mechanism, so tests can swap them out
through `app.dependency_overrides`.
"""

import logging
from urllib.parse import unquote

from kubeview.collectors import NodeCollector, NodeGroupCollector, PodCollector
from kubeview.core.cluster_registry import ClusterRegistry
from kubeview.core.k8s_client import ClusterClientFactory
from kubeview.core.pod_operations import PodOperations

logger = logging.getLogger(__name__)


def get_cluster_registry() -> ClusterRegistry:
    """Provides a ClusterRegistry reading the configured kubeconfig."""
    return ClusterRegistry()


def get_client_factory() -> ClusterClientFactory:
    """Provides the ClusterClientFactory shared by a request's collectors."""
    return ClusterClientFactory(registry=get_cluster_registry())


def get_node_collector() -> NodeCollector:
    return NodeCollector(get_client_factory())


def get_node_group_collector() -> NodeGroupCollector:
    return NodeGroupCollector(get_client_factory())


def get_pod_collector() -> PodCollector:
    return PodCollector(get_client_factory())


def get_pod_operations() -> PodOperations:
    return PodOperations(get_client_factory())


def get_cluster_name(cluster: str) -> str:
    """
    The `{cluster}` path segment, percent-decoded. Context names can be cloud
    ARNs containing '/' and ':' which clients send encoded.
    """
    return unquote(cluster)
