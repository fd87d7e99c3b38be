# tests/core/test_k8s_client.py
"""
Tests for ClusterClientFactory: context switching, fallbacks and cleanup.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from kubernetes_asyncio import client
from kubernetes_asyncio import config as k8s_config

from kubeview.core.cluster_registry import ClusterRegistry
from kubeview.core.config import Config
from kubeview.core.exceptions import ClusterConnectionError
from kubeview.core.k8s_client import IN_CLUSTER_CONTEXT, ClusterClientFactory, ClusterClients
from kubeview.core.kubeconfig import KubeConfigHandle
from kubeview.core.metrics_client import EmptyMetricsSource


@pytest.fixture
def settings():
    settings = MagicMock(spec=Config)
    settings.DEFAULT_CONTEXT_PLACEHOLDER = "loaded-context"
    settings.METRICS_VERIFY_CERTS = False
    settings.METRICS_API_PATH = "/apis/metrics.k8s.io/v1beta1"
    return settings


def factory_for(handle, settings):
    registry = ClusterRegistry(loader=lambda: handle, settings=settings)
    return ClusterClientFactory(registry=registry, settings=settings)


def make_handle(current="prod"):
    return KubeConfigHandle(
        contexts=[{"name": "prod", "cluster": "p"}, {"name": "staging", "cluster": "s"}],
        clusters=[{"name": "p", "cluster": {"server": "https://prod"}}],
        current_context=current,
        config_files=["/tmp/kubeconfig"],
    )


def fake_api_client(host="https://prod"):
    api_client = MagicMock()
    api_client.configuration = client.Configuration(host=host, api_key={"BearerToken": "Bearer abc"})
    api_client.close = AsyncMock()
    return api_client


@patch("kubeview.core.k8s_client.config.new_client_from_config", new_callable=AsyncMock)
async def test_clients_for_switches_context(mock_new_client, settings):
    mock_new_client.return_value = fake_api_client()

    clients = await factory_for(make_handle(), settings).clients_for("staging")

    assert clients.context_name == "staging"
    mock_new_client.assert_awaited_once_with(config_file="/tmp/kubeconfig", context="staging", persist_config=False)
    assert clients.metrics.headers == {"authorization": "Bearer abc"}


@patch("kubeview.core.k8s_client.config.new_client_from_config", new_callable=AsyncMock)
async def test_clients_for_unknown_context_keeps_current(mock_new_client, settings, caplog):
    mock_new_client.return_value = fake_api_client()

    clients = await factory_for(make_handle(), settings).clients_for("does-not-exist")

    assert clients.context_name == "prod"
    mock_new_client.assert_awaited_once_with(config_file="/tmp/kubeconfig", context="prod", persist_config=False)
    assert "Continuing with current context 'prod'" in caplog.text


@patch("kubeview.core.k8s_client.config.new_client_from_config", new_callable=AsyncMock)
async def test_clients_for_resolves_placeholder(mock_new_client, settings):
    mock_new_client.return_value = fake_api_client()

    clients = await factory_for(make_handle(), settings).clients_for("loaded-context")

    assert clients.context_name == "prod"


@patch("kubeview.core.k8s_client.config.new_client_from_config", new_callable=AsyncMock)
async def test_clients_for_without_current_context_uses_first(mock_new_client, settings):
    mock_new_client.return_value = fake_api_client()

    clients = await factory_for(make_handle(current=None), settings).clients_for("missing")

    assert clients.context_name == "prod"


@patch("kubeview.core.k8s_client.config.new_client_from_config", new_callable=AsyncMock)
async def test_clients_for_wraps_client_errors(mock_new_client, settings):
    mock_new_client.side_effect = k8s_config.ConfigException("bad credentials")

    with pytest.raises(ClusterConnectionError, match="bad credentials"):
        await factory_for(make_handle(), settings).clients_for("prod")


@patch("kubeview.core.k8s_client.config.load_incluster_config")
async def test_clients_for_falls_back_to_in_cluster(mock_incluster, settings):
    clients = await factory_for(KubeConfigHandle(), settings).clients_for("anything")

    assert clients.context_name == IN_CLUSTER_CONTEXT
    mock_incluster.assert_called_once()
    await clients.close()


@patch("kubeview.core.k8s_client.config.load_incluster_config")
async def test_clients_for_without_any_config_raises(mock_incluster, settings):
    mock_incluster.side_effect = k8s_config.ConfigException("not in a pod")

    with pytest.raises(ClusterConnectionError):
        await factory_for(KubeConfigHandle(), settings).clients_for("anything")


async def test_cluster_clients_close_on_exit():
    api_client = fake_api_client()
    metrics = EmptyMetricsSource()
    metrics.close = AsyncMock()

    async with ClusterClients("prod", api_client, metrics, core=MagicMock()) as clients:
        assert clients.context_name == "prod"

    metrics.close.assert_awaited_once()
    api_client.close.assert_awaited_once()
