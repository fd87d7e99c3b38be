# src/kubeview/models/node.py

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..utils.k8s_utils import format_cpu, format_group_memory, format_memory, format_whole_gibibytes


class ResourceQuantities(BaseModel):
    """CPU and memory of a node, normalised to cores and bytes."""

    model_config = ConfigDict(frozen=True)

    cpu_cores: float = Field(0.0, description="CPU in cores")
    memory_bytes: float = Field(0.0, description="Memory in bytes")

    @computed_field
    @property
    def cpu(self) -> str:
        return format_cpu(self.cpu_cores)

    @computed_field
    @property
    def memory(self) -> str:
        return format_memory(self.memory_bytes)


class NodeInfo(BaseModel):
    """
    Point-in-time view of a single node.

    Attributes:
        name: Node name
        instance_type: Instance type label value, "unknown" when absent
        tags: Node labels minus Kubernetes-internal prefixes and the instance type
        capacity: Raw node capacity
        allocatable: Capacity left for pods after system reservations
        usage: Usage reported by the metrics API, clamped to capacity (CPU)
            and allocatable (memory)
        pod_count: Number of pods scheduled on the node
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Node name")
    instance_type: str = Field("unknown", description="Instance type")
    tags: Dict[str, str] = Field(default_factory=dict, description="Filtered node labels")
    capacity: ResourceQuantities = Field(default_factory=ResourceQuantities)
    allocatable: ResourceQuantities = Field(default_factory=ResourceQuantities)
    usage: ResourceQuantities = Field(default_factory=ResourceQuantities)
    pod_count: int = Field(0, description="Pods scheduled on the node")


class NodeGroup(BaseModel):
    """
    Nodes sharing a provider node group / pool, with summed capacity and usage.
    Percentages are saturated at 100 and are 0 when the total is 0.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Node group name, 'default' when unlabelled")
    nodes: List[NodeInfo] = Field(default_factory=list)
    total_cpu_cores: float = 0.0
    used_cpu_cores: float = 0.0
    total_memory_bytes: float = 0.0
    used_memory_bytes: float = 0.0
    pods_count: int = 0
    cpu_percent: int = Field(0, ge=0, le=100)
    mem_percent: int = Field(0, ge=0, le=100)

    @computed_field
    @property
    def total_cpu(self) -> str:
        return format_cpu(self.total_cpu_cores)

    @computed_field
    @property
    def used_cpu(self) -> str:
        return format_cpu(self.used_cpu_cores)

    @computed_field
    @property
    def total_memory(self) -> str:
        return format_whole_gibibytes(self.total_memory_bytes)

    @computed_field
    @property
    def used_memory(self) -> str:
        return format_group_memory(self.used_memory_bytes)
