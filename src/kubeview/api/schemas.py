# src/kubeview/api/schemas.py
"""
Pydantic request/response schemas for the API.
Keeps API-specific shapes separate from internal domain models.
"""

from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str = Field(..., description="Health status of the API.")
    version: str = Field(..., description="Current application version.")


class VersionResponse(BaseModel):
    """Response schema for the version endpoint."""

    version: str = Field(..., description="Current application version.")


class ConfigResponse(BaseModel):
    """Non-sensitive configuration values."""

    log_level: str
    api_host: str
    api_port: int
    default_context_placeholder: str
    k8s_request_timeout: float
    metrics_api_path: str
    metrics_verify_certs: bool
    kubectl_fallback_enabled: bool


class DisplayNameRequest(BaseModel):
    """A user-chosen label for a cluster. The label itself is stored by the browser."""

    cluster_name: Optional[str] = Field(None, description="Kubeconfig context name.")
    display_name: Optional[str] = Field(None, description="Label to show instead of the context name.")


class DisplayNameResponse(BaseModel):
    success: bool
    message: str
    cluster_name: str
    display_name: Optional[str] = None
