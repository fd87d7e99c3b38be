# src/kubeview/core/kubeconfig.py
"""
Read-only view over the user's kubeconfig file(s).

Only the parts the dashboard needs are read: contexts, cluster servers and the
current context. Building authenticated API clients is left to
kubernetes_asyncio, which re-reads the same files for the chosen context.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from .config import config
from .exceptions import KubeConfigError

logger = logging.getLogger(__name__)


class KubeConfigHandle:
    """Merged contexts and clusters from one or more kubeconfig files."""

    def __init__(
        self,
        contexts: Optional[List[Dict[str, Any]]] = None,
        clusters: Optional[List[Dict[str, Any]]] = None,
        current_context: Optional[str] = None,
        config_files: Optional[List[str]] = None,
    ):
        self._contexts = list(contexts or [])
        self._clusters = {c.get("name"): c.get("cluster") or {} for c in clusters or [] if c.get("name")}
        self._current_context = current_context or None
        self.config_files = list(config_files or [])

    @property
    def config_file(self) -> Optional[str]:
        """The loaded files in the KUBECONFIG path-list form kubernetes_asyncio accepts."""
        return os.pathsep.join(self.config_files) if self.config_files else None

    def is_empty(self) -> bool:
        return not self._contexts

    def list_contexts(self) -> List[Dict[str, Any]]:
        return list(self._contexts)

    def context_names(self) -> List[str]:
        return [c["name"] for c in self._contexts]

    def get_context(self, name: str) -> Optional[Dict[str, Any]]:
        for context in self._contexts:
            if context["name"] == name:
                return context
        return None

    def get_cluster(self, name: Optional[str]) -> Optional[Dict[str, Any]]:
        """Returns the cluster entry (server, CA, ...) registered under `name`."""
        if not name:
            return None
        return self._clusters.get(name)

    def get_current_context(self) -> Optional[str]:
        return self._current_context

    def set_current_context(self, name: str) -> None:
        """Switches the current context in memory; the file is never written."""
        if self.get_context(name) is None:
            raise KubeConfigError(f"Context '{name}' not found in kubeconfig")
        self._current_context = name


def _read_file(path: str) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug("Kubeconfig file not found at %s", path)
        return None
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read kubeconfig %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring kubeconfig %s: not a mapping", path)
        return None
    return data


def _normalise_context(entry: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(entry, dict) or not entry.get("name"):
        return None
    body = entry.get("context") or {}
    return {
        "name": str(entry["name"]),
        "cluster": body.get("cluster", ""),
        "user": body.get("user", ""),
        "namespace": body.get("namespace"),
    }


def load_kubeconfig(paths: Optional[List[str]] = None) -> KubeConfigHandle:
    """
    Loads and merges the kubeconfig files in `paths` (default: KUBECONFIG or
    ~/.kube/config). The first file that defines a context or cluster name
    wins, as kubectl does. Never raises: missing or broken files give an
    empty handle.
    """
    paths = paths if paths is not None else config.kubeconfig_paths

    contexts: List[Dict[str, Any]] = []
    clusters: List[Dict[str, Any]] = []
    seen_contexts, seen_clusters = set(), set()
    current_context = None
    loaded_files = []

    for path in paths:
        data = _read_file(os.path.expanduser(path))
        if data is None:
            continue
        loaded_files.append(path)

        for entry in data.get("contexts") or []:
            context = _normalise_context(entry)
            if context and context["name"] not in seen_contexts:
                seen_contexts.add(context["name"])
                contexts.append(context)

        for entry in data.get("clusters") or []:
            if isinstance(entry, dict) and entry.get("name") and entry["name"] not in seen_clusters:
                seen_clusters.add(entry["name"])
                clusters.append(entry)

        if not current_context and data.get("current-context"):
            current_context = str(data["current-context"])

    if not loaded_files:
        logger.warning("No kubeconfig found in %s; using an empty configuration.", ", ".join(paths) or "<none>")
    else:
        logger.debug("Loaded %d contexts from %s", len(contexts), ", ".join(loaded_files))

    return KubeConfigHandle(contexts, clusters, current_context, loaded_files)
