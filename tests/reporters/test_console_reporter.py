# tests/reporters/test_console_reporter.py

import io

from rich.console import Console

from kubeview.models.cluster import Cluster
from kubeview.models.node import NodeGroup, NodeInfo, ResourceQuantities
from kubeview.models.pod import PodInfo
from kubeview.reporters.console_reporter import ConsoleReporter
from kubeview.utils.k8s_utils import GIB


def make_reporter():
    buffer = io.StringIO()
    return ConsoleReporter(console=Console(file=buffer, width=200, color_system=None)), buffer


def test_report_clusters_marks_active():
    reporter, buffer = make_reporter()

    reporter.report_clusters([Cluster(name="prod", display_name="prod", is_active=True, server="https://prod")])

    output = buffer.getvalue()
    assert "prod" in output
    assert "https://prod" in output
    assert "*" in output


def test_report_nodes():
    reporter, buffer = make_reporter()
    node = NodeInfo(
        name="node-1",
        instance_type="m5.xlarge",
        capacity=ResourceQuantities(cpu_cores=4, memory_bytes=16 * GIB),
        allocatable=ResourceQuantities(cpu_cores=4, memory_bytes=15 * GIB),
        usage=ResourceQuantities(cpu_cores=0.5, memory_bytes=2 * GIB),
        pod_count=3,
    )

    reporter.report_nodes([node])

    output = buffer.getvalue()
    assert "node-1" in output
    assert "500m / 4" in output
    assert "2Gi / 15Gi" in output


def test_report_node_groups():
    reporter, buffer = make_reporter()
    group = NodeGroup(name="workers", total_cpu_cores=8, used_cpu_cores=6, cpu_percent=75, mem_percent=95)

    reporter.report_node_groups([group])

    output = buffer.getvalue()
    assert "workers" in output
    assert "75%" in output
    assert "95%" in output


def test_report_pods_with_and_without_helm():
    reporter, buffer = make_reporter()

    reporter.report_pods(
        [
            PodInfo(name="web-1", namespace="shop", status="Running", helm_chart="web", helm_version="1.2.0"),
            PodInfo(name="job-1", namespace="batch", status="Pending"),
        ]
    )

    output = buffer.getvalue()
    assert "web (1.2.0)" in output
    assert "job-1" in output


def test_empty_reports():
    reporter, buffer = make_reporter()

    reporter.report_clusters([])
    reporter.report_nodes([])
    reporter.report_node_groups([])
    reporter.report_pods([])

    output = buffer.getvalue()
    assert "No clusters found in kubeconfig." in output
    assert "No pods to report." in output
