# src/kubeview/models/pod.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..utils.k8s_utils import format_cpu, format_memory


class PodInfo(BaseModel):
    """
    Point-in-time view of a pod with its summed container usage.
    Identity is the (namespace, name) pair.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Pod name")
    namespace: str = Field("default", description="Pod namespace")
    status: str = Field("Unknown", description="Pod phase")
    helm_chart: Optional[str] = Field(None, description="Chart name, absent without Helm labels")
    helm_version: Optional[str] = Field(None, description="Chart/app version, absent without Helm labels")
    cpu_usage_cores: float = Field(0.0, description="Summed container CPU usage in cores")
    memory_usage_bytes: float = Field(0.0, description="Summed container memory usage in bytes")
    node_name: str = Field("unknown", description="Node the pod is scheduled on")
    age: str = Field("unknown", description="Coarse age: '3d', '5h', 'new' or 'unknown'")

    @computed_field
    @property
    def cpu_usage(self) -> str:
        return format_cpu(self.cpu_usage_cores)

    @computed_field
    @property
    def memory_usage(self) -> str:
        return format_memory(self.memory_usage_bytes)
