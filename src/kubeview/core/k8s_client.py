import logging
from typing import Optional

from kubernetes_asyncio import client, config

from .cluster_registry import ClusterRegistry
from .config import Config
from .config import config as global_config
from .exceptions import ClusterConnectionError, KubeConfigError
from .kubeconfig import KubeConfigHandle
from .metrics_client import MetricsSource, build_metrics_source

logger = logging.getLogger(__name__)

IN_CLUSTER_CONTEXT = "in-cluster"


class ClusterClients:
    """
    API handles for one cluster, scoped to a single request.
    Use as an async context manager so the underlying sessions are closed.
    """

    def __init__(
        self,
        context_name: str,
        api_client: client.ApiClient,
        metrics: MetricsSource,
        core: Optional[client.CoreV1Api] = None,
    ):
        self.context_name = context_name
        self.api_client = api_client
        self.core = core or client.CoreV1Api(api_client)
        self.metrics = metrics

    async def close(self):
        await self.metrics.close()
        await self.api_client.close()
        logger.debug("Closed Kubernetes clients for context '%s'.", self.context_name)

    async def __aenter__(self) -> "ClusterClients":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


class ClusterClientFactory:
    """Builds ClusterClients for a kubeconfig context name."""

    def __init__(self, registry: Optional[ClusterRegistry] = None, settings: Config = global_config):
        self.registry = registry or ClusterRegistry(settings=settings)
        self.settings = settings

    async def clients_for(self, cluster_name: str) -> ClusterClients:
        """
        Switches to `cluster_name` and returns clients for it. When the switch
        fails the already current context is used instead: a stale view of a
        reachable cluster is preferred over an error page.

        Raises:
            ClusterConnectionError: if no client can be built at all.
        """
        handle = self.registry.load()
        requested = self.registry.resolve_context_alias(cluster_name, handle)
        try:
            handle.set_current_context(requested)
        except KubeConfigError as e:
            logger.warning(
                "Failed to set context to '%s': %s. Continuing with current context '%s'.",
                requested,
                e,
                handle.get_current_context(),
            )

        context = handle.get_current_context()
        if not context and not handle.is_empty():
            context = handle.context_names()[0]

        api_client = await self._build_api_client(handle, context)
        metrics = await build_metrics_source(api_client, self.settings)
        return ClusterClients(context or IN_CLUSTER_CONTEXT, api_client, metrics)

    async def _build_api_client(self, handle: KubeConfigHandle, context: Optional[str]) -> client.ApiClient:
        if context:
            try:
                api_client = await config.new_client_from_config(
                    config_file=handle.config_file, context=context, persist_config=False
                )
                logger.debug("Built Kubernetes client for context '%s'.", context)
                return api_client
            except Exception as e:
                logger.error("Could not load kubeconfig context '%s': %s", context, e)
                raise ClusterConnectionError(f"Could not connect using context '{context}': {e}") from e

        # No kubeconfig contexts: we may be running inside a pod.
        try:
            configuration = client.Configuration()
            config.load_incluster_config(client_configuration=configuration)
            logger.info("Loaded in-cluster Kubernetes configuration.")
            return client.ApiClient(configuration=configuration)
        except config.ConfigException as e:
            logger.warning("No kubeconfig contexts and no in-cluster configuration: %s", e)
            raise ClusterConnectionError("No Kubernetes configuration available") from e
