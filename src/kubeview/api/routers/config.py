# src/kubeview/api/routers/config.py
"""
API routes for exposing non-sensitive configuration and version information.
"""

import logging

from fastapi import APIRouter

from kubeview import __version__
from kubeview.api.schemas import ConfigResponse, HealthResponse, VersionResponse
from kubeview.core.config import config

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/version", response_model=VersionResponse)
async def version():
    """Return the current application version."""
    return VersionResponse(version=__version__)


@router.get("/config", response_model=ConfigResponse)
async def get_config():
    """Return non-sensitive configuration values.

    Kubeconfig paths and credentials are never exposed.
    """
    return ConfigResponse(
        log_level=config.LOG_LEVEL,
        api_host=config.API_HOST,
        api_port=config.API_PORT,
        default_context_placeholder=config.DEFAULT_CONTEXT_PLACEHOLDER,
        k8s_request_timeout=config.K8S_REQUEST_TIMEOUT,
        metrics_api_path=config.METRICS_API_PATH,
        metrics_verify_certs=config.METRICS_VERIFY_CERTS,
        kubectl_fallback_enabled=config.KUBECTL_FALLBACK_ENABLED,
    )
