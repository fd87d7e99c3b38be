# tests/conftest.py

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from kubernetes_asyncio import client

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch, tmp_path):
    """
    Pytest fixture to isolate tests from the developer's kubeconfig.

    This fixture runs automatically for every test (`autouse=True`). KUBECONFIG
    points at a file that does not exist, so nothing reads ~/.kube/config.
    """
    monkeypatch.setenv("KUBECONFIG", str(tmp_path / "missing-kubeconfig"))


@pytest.fixture
def make_node():
    """Returns a builder for V1Node objects."""

    def _make(name, cpu="4", memory="16Gi", allocatable_cpu=None, allocatable_memory=None, labels=None):
        return client.V1Node(
            metadata=client.V1ObjectMeta(name=name, labels=labels or {}),
            status=client.V1NodeStatus(
                capacity={"cpu": cpu, "memory": memory},
                allocatable={"cpu": allocatable_cpu or cpu, "memory": allocatable_memory or memory},
            ),
        )

    return _make


@pytest.fixture
def make_pod():
    """Returns a builder for V1Pod objects."""

    def _make(
        name,
        namespace="default",
        node_name="node-1",
        phase="Running",
        labels=None,
        containers=("app",),
        created=NOW,
    ):
        return client.V1Pod(
            metadata=client.V1ObjectMeta(
                name=name,
                namespace=namespace,
                labels=labels or {},
                creation_timestamp=created,
            ),
            spec=client.V1PodSpec(
                node_name=node_name,
                containers=[client.V1Container(name=c) for c in containers],
            ),
            status=client.V1PodStatus(phase=phase),
        )

    return _make


@pytest.fixture
def make_clients():
    """
    Returns a builder for a ClusterClients stand-in whose core and metrics
    calls are AsyncMocks returning the given objects.
    """

    def _make(nodes=(), pods=(), node_metrics=(), pod_metrics=()):
        clients = MagicMock()
        clients.context_name = "test-context"
        clients.core.list_node = AsyncMock(return_value=client.V1NodeList(items=list(nodes)))
        clients.core.list_pod_for_all_namespaces = AsyncMock(return_value=client.V1PodList(items=list(pods)))
        clients.metrics.get_node_metrics = AsyncMock(return_value=list(node_metrics))
        clients.metrics.get_pod_metrics = AsyncMock(return_value=list(pod_metrics))
        clients.__aenter__.return_value = clients
        clients.__aexit__.return_value = False
        return clients

    return _make


@pytest.fixture
def mock_factory(make_clients):
    """A ClusterClientFactory stand-in handing out `make_clients()` objects."""
    factory = MagicMock()
    factory.clients = make_clients()
    factory.clients_for = AsyncMock(return_value=factory.clients)
    factory.registry.resolve_context_alias = MagicMock(side_effect=lambda name, handle=None: name)
    factory.registry.placeholder = "loaded-context"
    return factory
