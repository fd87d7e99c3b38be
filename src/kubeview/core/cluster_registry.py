# src/kubeview/core/cluster_registry.py
"""
Enumerates the clusters (kubeconfig contexts) the dashboard can show and
resolves the dashboard's "current context" placeholder to a real name.
"""

import logging
from typing import Callable, List, Optional

from ..models.cluster import Cluster
from .config import Config
from .config import config as global_config
from .kubeconfig import KubeConfigHandle, load_kubeconfig

logger = logging.getLogger(__name__)


class ClusterRegistry:
    """Reads clusters from the kubeconfig on every call; nothing is cached."""

    def __init__(
        self,
        loader: Callable[[], KubeConfigHandle] = load_kubeconfig,
        settings: Config = global_config,
    ):
        self._loader = loader
        self.placeholder = settings.DEFAULT_CONTEXT_PLACEHOLDER

    def load(self) -> KubeConfigHandle:
        """Loads a fresh handle, falling back to an empty one if the loader fails."""
        try:
            return self._loader()
        except Exception as e:
            logger.error("Failed to load kubeconfig: %s", e)
            return KubeConfigHandle()

    def list_clusters(self) -> List[Cluster]:
        """
        Lists every kubeconfig context as a Cluster. An empty list means no
        clusters are configured; this method does not raise.
        """
        handle = self.load()
        try:
            current = handle.get_current_context()
            clusters = []
            for context in handle.list_contexts():
                cluster_entry = handle.get_cluster(context["cluster"]) or {}
                clusters.append(
                    Cluster(
                        name=context["name"],
                        context=context["cluster"] or "",
                        server=cluster_entry.get("server") or "Unknown",
                        display_name=context["name"],
                        is_active=context["name"] == current,
                    )
                )
            return clusters
        except Exception as e:
            logger.error("Failed to enumerate kubeconfig contexts: %s", e, exc_info=True)
            return []

    def get_cluster(self, name: str) -> Optional[Cluster]:
        """Returns the cluster registered under `name`, or None."""
        return next((c for c in self.list_clusters() if c.name == name), None)

    def get_current_context_name(self, handle: Optional[KubeConfigHandle] = None) -> str:
        """
        Current context, else the first context, else the placeholder.
        Never raises.
        """
        handle = handle or self.load()
        current = handle.get_current_context()
        if current:
            return current

        names = handle.context_names()
        if names:
            logger.warning("No current-context set in kubeconfig; using first context '%s'.", names[0])
            return names[0]

        logger.warning("Kubeconfig has no contexts; using placeholder '%s'.", self.placeholder)
        return self.placeholder

    def resolve_context_alias(self, name: str, handle: Optional[KubeConfigHandle] = None) -> str:
        """Replaces the placeholder name with the actual current context name."""
        if name == self.placeholder:
            resolved = self.get_current_context_name(handle)
            if resolved != name:
                logger.debug("Resolved placeholder context '%s' to '%s'.", name, resolved)
            return resolved
        return name
