# tests/api/conftest.py
"""
Shared fixtures for API tests.
Uses FastAPI's TestClient with dependency overrides to inject mock
collectors, registry and pod operations.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from kubeview.api.app import create_app
from kubeview.api.dependencies import (
    get_cluster_registry,
    get_node_collector,
    get_node_group_collector,
    get_pod_collector,
    get_pod_operations,
)
from kubeview.models.cluster import Cluster
from kubeview.models.node import NodeGroup, NodeInfo, ResourceQuantities
from kubeview.models.pod import PodInfo
from kubeview.utils.k8s_utils import GIB


@pytest.fixture
def mock_registry():
    registry = MagicMock()
    registry.list_clusters.return_value = []
    return registry


@pytest.fixture
def mock_node_collector():
    collector = MagicMock()
    collector.collect = AsyncMock(return_value=[])
    return collector


@pytest.fixture
def mock_node_group_collector():
    collector = MagicMock()
    collector.collect = AsyncMock(return_value=[])
    return collector


@pytest.fixture
def mock_pod_collector():
    collector = MagicMock()
    collector.collect = AsyncMock(return_value=[])
    return collector


@pytest.fixture
def mock_pod_operations():
    return MagicMock()


@pytest.fixture
def client(mock_registry, mock_node_collector, mock_node_group_collector, mock_pod_collector, mock_pod_operations):
    """Creates a TestClient with dependency overrides for every provider."""
    app = create_app()
    app.dependency_overrides[get_cluster_registry] = lambda: mock_registry
    app.dependency_overrides[get_node_collector] = lambda: mock_node_collector
    app.dependency_overrides[get_node_group_collector] = lambda: mock_node_group_collector
    app.dependency_overrides[get_pod_collector] = lambda: mock_pod_collector
    app.dependency_overrides[get_pod_operations] = lambda: mock_pod_operations
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def sample_clusters():
    return [
        Cluster(name="prod", context="prod-cluster", server="https://prod", display_name="prod", is_active=True),
        Cluster(
            name="arn:aws:eks:eu-west-1:123456789012:cluster/shop",
            context="shop",
            display_name="arn:aws:eks:eu-west-1:123456789012:cluster/shop",
        ),
    ]


@pytest.fixture
def sample_nodes():
    return [
        NodeInfo(
            name="node-1",
            instance_type="m5.xlarge",
            tags={"eks.amazonaws.com/nodegroup": "workers"},
            capacity=ResourceQuantities(cpu_cores=4, memory_bytes=16 * GIB),
            allocatable=ResourceQuantities(cpu_cores=3.8, memory_bytes=15 * GIB),
            usage=ResourceQuantities(cpu_cores=0.25, memory_bytes=2 * GIB),
            pod_count=7,
        )
    ]


@pytest.fixture
def sample_node_groups(sample_nodes):
    return [
        NodeGroup(
            name="workers",
            nodes=sample_nodes,
            total_cpu_cores=4,
            used_cpu_cores=0.25,
            total_memory_bytes=16 * GIB,
            used_memory_bytes=2 * GIB,
            pods_count=7,
            cpu_percent=6,
            mem_percent=13,
        )
    ]


@pytest.fixture
def sample_pods():
    return [
        PodInfo(name="web-1", namespace="shop", status="Running", helm_chart="web", helm_version="1.2.0", node_name="node-1", age="2d"),
        PodInfo(name="job-1", namespace="batch", status="Succeeded", node_name="node-1", age="new"),
    ]
