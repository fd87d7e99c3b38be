# src/kubeview/core/metrics_client.py
"""
Best-effort access to the metrics aggregation API (metrics.k8s.io).

Clusters without metrics-server are common, so every method here returns an
empty list instead of raising; aggregators then report zero usage.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import httpx

from ..utils.http_client import get_async_http_client
from .config import Config
from .config import config as global_config

logger = logging.getLogger(__name__)


class MetricsSource(ABC):
    """Point-in-time node and pod usage. Implementations never raise on fetch."""

    @abstractmethod
    async def get_node_metrics(self) -> List[Dict[str, Any]]:
        """Returns NodeMetrics items, or [] when usage is unavailable."""
        pass

    @abstractmethod
    async def get_pod_metrics(self) -> List[Dict[str, Any]]:
        """Returns PodMetrics items, or [] when usage is unavailable."""
        pass

    async def close(self):
        pass


class EmptyMetricsSource(MetricsSource):
    """Used when no metrics client could be built for the cluster."""

    def __init__(self, reason: str = ""):
        self.reason = reason

    async def get_node_metrics(self) -> List[Dict[str, Any]]:
        return []

    async def get_pod_metrics(self) -> List[Dict[str, Any]]:
        return []


class MetricsClient(MetricsSource):
    """
    Queries metrics.k8s.io over raw HTTPS using the credentials of an existing
    API client. TLS verification is controlled by METRICS_VERIFY_CERTS and is
    off by default, which suits a dashboard run locally against trusted
    clusters.
    """

    def __init__(
        self,
        host: str,
        headers: Optional[Dict[str, str]] = None,
        cert: Optional[Tuple[str, str]] = None,
        verify=None,
        settings: Config = global_config,
    ):
        self.host = host.rstrip("/")
        self.headers = headers or {}
        self.cert = cert
        self.verify = settings.METRICS_VERIFY_CERTS if verify is None else verify
        self.settings = settings

    async def get_node_metrics(self) -> List[Dict[str, Any]]:
        return await self._list("nodes")

    async def get_pod_metrics(self) -> List[Dict[str, Any]]:
        return await self._list("pods")

    async def _list(self, plural: str) -> List[Dict[str, Any]]:
        path = f"{self.settings.METRICS_API_PATH}/{plural}"
        logger.debug("Fetching %s metrics from %s%s", plural, self.host, path)
        try:
            async with get_async_http_client(
                base_url=self.host,
                verify=self.verify,
                headers=self.headers,
                cert=self.cert,
            ) as http:
                response = await http.get(path)
                response.raise_for_status()
                items = response.json().get("items") or []
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Metrics API returned %s for %s%s; continuing without %s metrics.",
                e.response.status_code,
                self.host,
                path,
                plural,
            )
            return []
        except httpx.HTTPError as e:
            logger.warning("Metrics API unreachable at %s (%s); continuing without %s metrics.", self.host, e, plural)
            return []
        except Exception as e:
            logger.error("Unexpected error reading %s metrics from %s: %s", plural, self.host, e)
            return []

        logger.info("Fetched metrics for %d %s", len(items), plural)
        return items


async def _auth_headers(configuration) -> Dict[str, str]:
    headers = {}
    for setting in (await configuration.auth_settings() or {}).values():
        if setting.get("in") == "header" and setting.get("value"):
            headers[setting["key"]] = setting["value"]
    return headers


async def build_metrics_source(api_client, settings: Config = global_config) -> MetricsSource:
    """
    Builds a MetricsClient sharing the host and credentials of `api_client`.
    Any failure yields an EmptyMetricsSource so callers never need to know
    whether metrics are available.
    """
    try:
        configuration = api_client.configuration
        if not configuration.host:
            raise ValueError("API client has no host configured")

        cert = None
        if configuration.cert_file and configuration.key_file:
            cert = (configuration.cert_file, configuration.key_file)

        verify = settings.METRICS_VERIFY_CERTS
        if verify and configuration.ssl_ca_cert:
            verify = configuration.ssl_ca_cert

        return MetricsClient(
            host=configuration.host,
            headers=await _auth_headers(configuration),
            cert=cert,
            verify=verify,
            settings=settings,
        )
    except Exception as e:
        logger.warning("Could not create metrics client: %s. Usage will be reported as zero.", e)
        return EmptyMetricsSource(reason=str(e))
