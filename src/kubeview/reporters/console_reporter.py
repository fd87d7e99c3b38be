# src/kubeview/reporters/console_reporter.py
"""
Renders clusters, nodes, node groups and pods as tables in the console.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..models.cluster import Cluster
from ..models.node import NodeGroup, NodeInfo
from ..models.pod import PodInfo

logger = logging.getLogger(__name__)


def _percent_style(percent: int) -> str:
    if percent >= 90:
        return "bold red"
    if percent >= 70:
        return "yellow"
    return "green"


class ConsoleReporter:
    """
    Renders kubeview records to the console using the 'rich' library.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def report_clusters(self, clusters: List[Cluster]):
        if not clusters:
            self.console.print("No clusters found in kubeconfig.", style="yellow")
            return

        table = Table(title="Clusters", header_style="bold magenta")
        table.add_column("", width=1)
        table.add_column("Name", style="cyan")
        table.add_column("Cluster", style="cyan")
        table.add_column("Server", style="dim")
        for cluster in clusters:
            table.add_row("*" if cluster.is_active else "", cluster.display_name, cluster.context, cluster.server)
        self.console.print(table)

    def report_nodes(self, nodes: List[NodeInfo]):
        if not nodes:
            self.console.print("No nodes to report.", style="yellow")
            return

        table = Table(title="Nodes", header_style="bold magenta", show_lines=True)
        table.add_column("Name", style="cyan")
        table.add_column("Instance Type", style="cyan")
        table.add_column("CPU (used/capacity)", style="blue", justify="right")
        table.add_column("Memory (used/allocatable)", style="blue", justify="right")
        table.add_column("Pods", justify="right")
        table.add_column("Tags", style="dim")
        for node in nodes:
            table.add_row(
                node.name,
                node.instance_type,
                f"{node.usage.cpu} / {node.capacity.cpu}",
                f"{node.usage.memory} / {node.allocatable.memory}",
                str(node.pod_count),
                ", ".join(f"{k}={v}" for k, v in sorted(node.tags.items())),
            )
        self.console.print(table)

    def report_node_groups(self, groups: List[NodeGroup]):
        if not groups:
            self.console.print("No node groups to report.", style="yellow")
            return

        table = Table(title="Node Groups", header_style="bold magenta", show_lines=True)
        table.add_column("Group", style="cyan")
        table.add_column("Nodes", justify="right")
        table.add_column("CPU (used/total)", style="blue", justify="right")
        table.add_column("CPU %", justify="right")
        table.add_column("Memory (used/total)", style="blue", justify="right")
        table.add_column("Mem %", justify="right")
        table.add_column("Pods", justify="right")
        for group in groups:
            table.add_row(
                group.name,
                str(len(group.nodes)),
                f"{group.used_cpu} / {group.total_cpu}",
                f"[{_percent_style(group.cpu_percent)}]{group.cpu_percent}%[/]",
                f"{group.used_memory} / {group.total_memory}",
                f"[{_percent_style(group.mem_percent)}]{group.mem_percent}%[/]",
                str(group.pods_count),
            )
        self.console.print(table)

    def report_pods(self, pods: List[PodInfo]):
        if not pods:
            self.console.print("No pods to report.", style="yellow")
            return

        table = Table(title="Pods", header_style="bold magenta")
        table.add_column("Namespace", style="cyan")
        table.add_column("Name", style="cyan")
        table.add_column("Status")
        table.add_column("Helm Chart", style="dim")
        table.add_column("CPU", style="blue", justify="right")
        table.add_column("Memory", style="blue", justify="right")
        table.add_column("Node", style="dim")
        table.add_column("Age", justify="right")
        for pod in pods:
            chart = "-"
            if pod.helm_chart:
                chart = f"{pod.helm_chart} ({pod.helm_version})" if pod.helm_version else pod.helm_chart
            status_style = "green" if pod.status in ("Running", "Succeeded") else "yellow"
            table.add_row(
                pod.namespace,
                pod.name,
                f"[{status_style}]{pod.status}[/]",
                chart,
                pod.cpu_usage,
                pod.memory_usage,
                pod.node_name,
                pod.age,
            )
        self.console.print(table)
