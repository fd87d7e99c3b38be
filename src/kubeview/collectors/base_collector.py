# src/kubeview/collectors/base_collector.py
"""
This module defines the abstract base class for all cluster collectors.
Collectors open their own clients through the ClusterClientFactory and
share the same failure policy:

- primary listings (the call the result cannot exist without) raise
  ClusterQueryError;
- secondary listings degrade to an empty collection;
- a failure while building one record never aborts the batch.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Iterable, List, TypeVar

from kubernetes_asyncio.client.rest import ApiException

from ..core.config import Config
from ..core.config import config as global_config
from ..core.exceptions import ClusterQueryError
from ..core.k8s_client import ClusterClientFactory, ClusterClients

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def process_isolated(
    items: Iterable[T],
    build: Callable[[T], R],
    fallback: Callable[[T], R],
    describe: Callable[[T], str],
) -> List[R]:
    """
    Maps `build` over `items`. When `build` fails for an item the error is
    logged and `fallback(item)` is emitted in its place.
    """
    results: List[R] = []
    for item in items:
        try:
            results.append(build(item))
        except Exception as e:
            logger.warning("Error processing %s: %s. Emitting a minimal record.", describe(item), e, exc_info=True)
            results.append(fallback(item))
    return results


class BaseCollector(ABC):
    """
    Abstract Base Class for all cluster collectors.
    """

    def __init__(self, factory: ClusterClientFactory = None, settings: Config = global_config):
        self.factory = factory or ClusterClientFactory(settings=settings)
        self.settings = settings

    async def collect(self, cluster_name: str) -> List[Any]:
        """
        Opens clients for `cluster_name`, collects, and closes the clients.
        """
        async with await self.factory.clients_for(cluster_name) as clients:
            return await self.collect_from(clients)

    @abstractmethod
    async def collect_from(self, clients: ClusterClients) -> List[Any]:
        """
        Fetch data through already-open clients, parse it, and return a list
        of Pydantic models.
        """
        pass

    @property
    def request_timeout(self) -> float:
        return self.settings.K8S_REQUEST_TIMEOUT

    async def _primary(self, what: str, call: Awaitable[T]) -> T:
        """Awaits a listing the caller cannot do without; failures raise ClusterQueryError."""
        try:
            return await call
        except ApiException as e:
            logger.error("Kubernetes API error while listing %s: %s %s", what, e.status, e.reason)
            raise ClusterQueryError(f"Failed to list {what}: {e.status} {e.reason}") from e
        except asyncio.TimeoutError as e:
            logger.error("Timed out listing %s after %ss", what, self.request_timeout)
            raise ClusterQueryError(f"Timed out listing {what}") from e
        except Exception as e:
            logger.error("An unexpected error occurred while listing %s: %s", what, e)
            raise ClusterQueryError(f"Failed to list {what}: {e}") from e

    async def _best_effort(self, what: str, call: Awaitable[T], default: T) -> T:
        """Awaits a secondary listing, returning `default` if it fails."""
        try:
            return await call
        except Exception as e:
            logger.warning("Error fetching %s: %s. Continuing without it.", what, e)
            return default
