# src/kubeview/models/cluster.py

from pydantic import BaseModel, ConfigDict, Field


class Cluster(BaseModel):
    """
    A cluster as configured in the kubeconfig. Identity is the context name.

    Attributes:
        name: Kubeconfig context name
        context: Name of the cluster entry the context points at
        server: API server URL, "Unknown" when the cluster entry is missing
        display_name: Label shown in the dashboard (defaults to the name)
        is_active: Whether this is the kubeconfig's current context
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Kubeconfig context name")
    context: str = Field("", description="Referenced kubeconfig cluster entry")
    server: str = Field("Unknown", description="API server URL")
    display_name: str = Field("", description="Display name")
    is_active: bool = Field(False, description="Whether this is the current context")
