# src/kubeview/utils/describe_parser.py
"""
Parses the text printed by `kubectl describe pod` into the same rough shape
the structured API returns, so the details view can render either source.
"""

import re
from typing import Any, Dict, List

_NAME = re.compile(r"^Name:\s+(.+)$", re.MULTILINE)
_NAMESPACE = re.compile(r"^Namespace:\s+(.+)$", re.MULTILINE)
_STATUS = re.compile(r"^Status:\s+(.+)$", re.MULTILINE)
_LABELS = re.compile(r"^Labels:\s+(.*?)(?=^\S[^:\n]*:|\Z)", re.MULTILINE | re.DOTALL)
_ANNOTATIONS = re.compile(r"^Annotations:\s+(.*?)(?=^\S[^:\n]*:|\Z)", re.MULTILINE | re.DOTALL)
_CONTAINERS = re.compile(r"^Containers:\s*\n(.*?)(?=^\S[^:\n]*:|\Z)", re.MULTILINE | re.DOTALL)
# Container blocks start with a two-space indented "name:" line.
_CONTAINER_HEADER = re.compile(r"^  (\S[^:\n]*):\s*$", re.MULTILINE)


def _field(pattern: "re.Pattern[str]", text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def _container_field(name: str, block: str) -> str:
    match = re.search(rf"^\s+{re.escape(name)}:\s+(.+)$", block, re.MULTILINE)
    return match.group(1).strip() if match else ""


def _parse_pairs(section: str, separator: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for line in section.strip().splitlines():
        line = line.strip()
        if not line or line == "<none>" or separator not in line:
            continue
        key, value = line.split(separator, 1)
        if key.strip():
            pairs[key.strip()] = value.strip()
    return pairs


def _parse_containers(section: str) -> List[Dict[str, Any]]:
    headers = list(_CONTAINER_HEADER.finditer(section))
    containers = []
    for index, header in enumerate(headers):
        end = headers[index + 1].start() if index + 1 < len(headers) else len(section)
        block = section[header.end() : end]
        restarts = _container_field("Restart Count", block)
        containers.append(
            {
                "name": header.group(1).strip(),
                "image": _container_field("Image", block),
                "state": _container_field("State", block) or "unknown",
                "ready": _container_field("Ready", block).lower() == "true",
                "restartCount": int(restarts) if restarts.isdigit() else 0,
            }
        )
    return containers


def parse_describe_output(output: str) -> Dict[str, Any]:
    """
    Extracts Name/Namespace/Status, Labels, Annotations and the Containers
    section from `kubectl describe pod` output. Unknown sections are ignored
    and the raw text is kept under "rawOutput".
    """
    labels_match = _LABELS.search(output)
    annotations_match = _ANNOTATIONS.search(output)
    containers_match = _CONTAINERS.search(output)
    containers = _parse_containers(containers_match.group(1)) if containers_match else []

    return {
        "metadata": {
            "name": _field(_NAME, output),
            "namespace": _field(_NAMESPACE, output),
            "labels": _parse_pairs(labels_match.group(1), "=") if labels_match else {},
            "annotations": _parse_pairs(annotations_match.group(1), ":") if annotations_match else {},
        },
        "spec": {"containers": [{"name": c["name"], "image": c["image"]} for c in containers]},
        "status": {
            "phase": _field(_STATUS, output),
            "containerStatuses": containers,
        },
        "rawOutput": output,
    }
