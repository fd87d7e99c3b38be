# src/kubeview/cli/commands.py
"""
Commands of the kubeview CLI. Each listing command takes an optional
cluster (kubeconfig context) name and defaults to the current context.
"""

import asyncio
import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from ..collectors import NodeCollector, NodeGroupCollector, PodCollector
from ..core.cluster_registry import ClusterRegistry
from ..core.config import config
from ..core.exceptions import ClusterError
from ..reporters.console_reporter import ConsoleReporter

logger = logging.getLogger(__name__)

ClusterArgument = Annotated[
    str,
    typer.Argument(help="Kubeconfig context name. Defaults to the current context."),
]


def _collect(collector, cluster: str):
    try:
        return asyncio.run(collector.collect(cluster))
    except ClusterError as e:
        logger.error("Failed to query cluster '%s': %s", cluster, e)
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def serve(
    host: Annotated[Optional[str], typer.Option(help="Interface to bind.")] = None,
    port: Annotated[Optional[int], typer.Option(help="Port to listen on.")] = None,
):
    """
    Start the kubeview API server.
    """
    import uvicorn

    from ..api.app import create_app

    host = host or config.API_HOST
    port = port or config.API_PORT
    logger.info("Starting kubeview API on %s:%s", host, port)
    uvicorn.run(create_app(), host=host, port=port)


def clusters():
    """
    List the clusters (contexts) found in the kubeconfig.
    """
    ConsoleReporter().report_clusters(ClusterRegistry().list_clusters())


def nodes(cluster: ClusterArgument = config.DEFAULT_CONTEXT_PLACEHOLDER):
    """
    Show nodes with capacity, usage and pod counts.
    """
    ConsoleReporter().report_nodes(_collect(NodeCollector(), cluster))


def nodegroups(cluster: ClusterArgument = config.DEFAULT_CONTEXT_PLACEHOLDER):
    """
    Show node groups (EKS nodegroups, GKE/AKS pools, kOps instance groups) with utilisation.
    """
    ConsoleReporter().report_node_groups(_collect(NodeGroupCollector(), cluster))


def pods(
    cluster: ClusterArgument = config.DEFAULT_CONTEXT_PLACEHOLDER,
    namespace: Annotated[Optional[str], typer.Option("--namespace", "-n", help="Only show this namespace.")] = None,
):
    """
    Show pods with usage, Helm chart and age.
    """
    result = _collect(PodCollector(), cluster)
    if namespace:
        result = [pod for pod in result if pod.namespace == namespace]
    ConsoleReporter().report_pods(result)
