# tests/utils/test_describe_parser.py

from kubeview.utils.describe_parser import parse_describe_output

DESCRIBE_OUTPUT = """Name:             web-7d4b9c-x2k8p
Namespace:        shop
Priority:         0
Node:             ip-10-0-1-12.ec2.internal/10.0.1.12
Labels:           app=web
                  pod-template-hash=7d4b9c
Annotations:      kubectl.kubernetes.io/restartedAt: 2026-02-28T10:00:00Z
Status:           Running
IP:               10.0.1.55
Controlled By:    ReplicaSet/web-7d4b9c
Containers:
  web:
    Container ID:   containerd://abc
    Image:          nginx:1.25
    Image ID:       docker.io/library/nginx@sha256:123
    Port:           80/TCP
    State:          Running
      Started:      Sat, 28 Feb 2026 10:00:05 +0000
    Ready:          True
    Restart Count:  2
  sidecar:
    Image:          busybox:1.36
    State:          Waiting
      Reason:       CrashLoopBackOff
    Ready:          False
    Restart Count:  7
Conditions:
  Type              Status
  Ready             False
Events:           <none>
"""


def test_parses_metadata():
    details = parse_describe_output(DESCRIBE_OUTPUT)

    assert details["metadata"]["name"] == "web-7d4b9c-x2k8p"
    assert details["metadata"]["namespace"] == "shop"
    assert details["metadata"]["labels"] == {"app": "web", "pod-template-hash": "7d4b9c"}
    assert details["metadata"]["annotations"] == {"kubectl.kubernetes.io/restartedAt": "2026-02-28T10:00:00Z"}
    assert details["status"]["phase"] == "Running"


def test_parses_containers():
    details = parse_describe_output(DESCRIBE_OUTPUT)

    assert details["spec"]["containers"] == [
        {"name": "web", "image": "nginx:1.25"},
        {"name": "sidecar", "image": "busybox:1.36"},
    ]
    web, sidecar = details["status"]["containerStatuses"]
    assert web == {"name": "web", "image": "nginx:1.25", "state": "Running", "ready": True, "restartCount": 2}
    assert sidecar["state"] == "Waiting"
    assert sidecar["ready"] is False
    assert sidecar["restartCount"] == 7


def test_keeps_raw_output():
    assert parse_describe_output(DESCRIBE_OUTPUT)["rawOutput"] == DESCRIBE_OUTPUT


def test_labels_none_and_missing_sections():
    details = parse_describe_output("Name:  lonely\nNamespace:  default\nLabels:  <none>\nStatus:  Pending\n")

    assert details["metadata"]["labels"] == {}
    assert details["metadata"]["annotations"] == {}
    assert details["spec"]["containers"] == []
    assert details["status"]["phase"] == "Pending"


def test_empty_output():
    details = parse_describe_output("")
    assert details["metadata"]["name"] == ""
    assert details["status"]["containerStatuses"] == []
