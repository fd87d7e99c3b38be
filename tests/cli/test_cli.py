# tests/cli/test_cli.py
"""
Unit tests for the kubeview Command-Line Interface (CLI).
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from typer.testing import CliRunner

from kubeview import __version__
from kubeview.cli import app
from kubeview.core.exceptions import ClusterConnectionError
from kubeview.models.pod import PodInfo

runner = CliRunner()


@pytest.fixture
def mock_reporter(mocker):
    """
    Fixture to patch ConsoleReporter and provide a mock instance.
    """
    mock_reporter_class = mocker.patch("kubeview.cli.commands.ConsoleReporter")
    mock_reporter_instance = MagicMock()
    mock_reporter_class.return_value = mock_reporter_instance
    return mock_reporter_instance


def patch_collector(mocker, name, result=None, error=None):
    collector = MagicMock()
    collector.collect = AsyncMock(return_value=result or [], side_effect=error)
    mocker.patch(f"kubeview.cli.commands.{name}", return_value=collector)
    return collector


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"kubeview version: {__version__}" in result.stdout


def test_version_option():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_clusters(mocker, mock_reporter):
    registry = mocker.patch("kubeview.cli.commands.ClusterRegistry").return_value
    registry.list_clusters.return_value = ["c"]

    result = runner.invoke(app, ["clusters"])

    assert result.exit_code == 0
    mock_reporter.report_clusters.assert_called_once_with(["c"])


def test_nodes_defaults_to_current_context(mocker, mock_reporter):
    collector = patch_collector(mocker, "NodeCollector", result=["n"])

    result = runner.invoke(app, ["nodes"])

    assert result.exit_code == 0
    collector.collect.assert_awaited_once_with("loaded-context")
    mock_reporter.report_nodes.assert_called_once_with(["n"])


def test_nodegroups_for_named_cluster(mocker, mock_reporter):
    collector = patch_collector(mocker, "NodeGroupCollector", result=["g"])

    result = runner.invoke(app, ["nodegroups", "prod"])

    assert result.exit_code == 0
    collector.collect.assert_awaited_once_with("prod")
    mock_reporter.report_node_groups.assert_called_once_with(["g"])


def test_pods_namespace_filter(mocker, mock_reporter):
    pods = [PodInfo(name="a", namespace="shop"), PodInfo(name="b", namespace="batch")]
    patch_collector(mocker, "PodCollector", result=pods)

    result = runner.invoke(app, ["pods", "prod", "--namespace", "shop"])

    assert result.exit_code == 0
    mock_reporter.report_pods.assert_called_once_with([pods[0]])


def test_cluster_error_exits_with_code_1(mocker, mock_reporter):
    patch_collector(mocker, "NodeCollector", error=ClusterConnectionError("No Kubernetes configuration available"))

    result = runner.invoke(app, ["nodes", "prod"])

    assert result.exit_code == 1
    mock_reporter.report_nodes.assert_not_called()


def test_serve_runs_uvicorn(mocker):
    mock_run = mocker.patch("uvicorn.run")

    result = runner.invoke(app, ["serve", "--port", "9999"])

    assert result.exit_code == 0
    assert mock_run.call_args.kwargs["port"] == 9999
