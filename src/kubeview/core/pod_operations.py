# src/kubeview/core/pod_operations.py
"""
Pod-scoped operations: delete, logs and details.

None of these raise to the caller. Every outcome, including Kubernetes API
errors, is returned as a result envelope whose `status_code` tells the HTTP
layer how to answer.
"""

import asyncio
import json
import logging
from typing import Optional

from kubernetes_asyncio.client.rest import ApiException

from ..models.operations import OperationResult, PodDetailsResult, PodLogsResult
from ..utils.describe_parser import parse_describe_output
from .config import Config
from .config import config as global_config
from .exceptions import ClusterError
from .k8s_client import ClusterClientFactory

logger = logging.getLogger(__name__)


def _missing_parameters(cluster: str, namespace: str, pod_name: str) -> Optional[str]:
    missing = [
        label for label, value in (("cluster", cluster), ("namespace", namespace), ("podName", pod_name)) if not value
    ]
    if missing:
        return f"Missing required parameters: {' '.join(missing)}"
    return None


def _api_error_message(e: ApiException) -> str:
    """Extracts the Status message from an ApiException body when there is one."""
    try:
        body = json.loads(e.body) if e.body else {}
    except (TypeError, ValueError):
        body = {}
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return e.reason or "Unknown error"


def _describe_api_error(e: ApiException, namespace: str, pod_name: str, what: str = "pod") -> tuple[int, str]:
    if e.status == 404:
        return 404, f"Pod {namespace}/{pod_name} not found"
    if e.status == 403:
        return 403, f"Access denied for {what} {namespace}/{pod_name}"
    return 500, f"Kubernetes API error ({e.status}): {_api_error_message(e)}"


class PodOperations:
    """Single-pod operations against a cluster picked by name."""

    def __init__(self, factory: ClusterClientFactory = None, settings: Config = global_config):
        self.factory = factory or ClusterClientFactory(settings=settings)
        self.settings = settings

    @property
    def request_timeout(self) -> float:
        return self.settings.K8S_REQUEST_TIMEOUT

    async def delete_pod(self, cluster: str, namespace: str, pod_name: str) -> OperationResult:
        missing = _missing_parameters(cluster, namespace, pod_name)
        if missing:
            return OperationResult(success=False, message=missing, status_code=400)

        try:
            async with await self.factory.clients_for(cluster) as clients:
                await clients.core.delete_namespaced_pod(pod_name, namespace, _request_timeout=self.request_timeout)
        except ApiException as e:
            logger.error("Error deleting pod %s/%s: %s %s", namespace, pod_name, e.status, e.reason)
            status_code, message = _describe_api_error(e, namespace, pod_name)
            return OperationResult(success=False, message=message, status_code=status_code)
        except ClusterError as e:
            logger.error("Cannot reach cluster '%s' to delete pod %s/%s: %s", cluster, namespace, pod_name, e)
            return OperationResult(success=False, message=str(e), status_code=502)
        except Exception as e:
            logger.error("Error deleting pod %s/%s: %s", namespace, pod_name, e, exc_info=True)
            return OperationResult(
                success=False,
                message=str(e) or "Unknown error occurred while deleting pod",
                status_code=500,
            )

        logger.info("Deleted pod %s/%s in cluster '%s'", namespace, pod_name, cluster)
        return OperationResult(success=True, message=f"Pod {namespace}/{pod_name} deleted successfully")

    async def get_pod_logs(
        self,
        cluster: str,
        namespace: str,
        pod_name: str,
        container: Optional[str] = None,
        tail_lines: Optional[int] = None,
    ) -> PodLogsResult:
        """
        Returns the logs of `container`, or of every container of the pod when
        no container is given. In the latter case each container gets a
        '--- Container: <name> ---' section and a container whose logs cannot
        be read gets an error note in its section instead.
        """
        missing = _missing_parameters(cluster, namespace, pod_name)
        if missing:
            logger.error("Cannot fetch pod logs: %s", missing)
            return PodLogsResult(success=False, message=missing, status_code=400)

        logger.debug("Fetching logs for pod %s/%s in cluster '%s' (container=%s, tail=%s)",
                     namespace, pod_name, cluster, container, tail_lines)
        try:
            async with await self.factory.clients_for(cluster) as clients:
                if container:
                    logs = await self._read_log(clients, namespace, pod_name, container, tail_lines)
                    return PodLogsResult(success=True, logs=logs)

                pod = await clients.core.read_namespaced_pod(pod_name, namespace, _request_timeout=self.request_timeout)
                containers = [c.name for c in ((pod.spec.containers if pod.spec else None) or [])]
                logger.debug("Found %d containers in pod %s/%s", len(containers), namespace, pod_name)
                if not containers:
                    return PodLogsResult(success=True, logs="No containers found in pod")

                sections = []
                for name in containers:
                    try:
                        body = await self._read_log(clients, namespace, pod_name, name, tail_lines)
                    except Exception as e:
                        logger.warning("Error fetching logs for container %s of %s/%s: %s", name, namespace, pod_name, e)
                        body = f"Error fetching logs: {_exception_text(e)}"
                    sections.append(f"\n--- Container: {name} ---\n{body}\n")
                return PodLogsResult(success=True, logs="".join(sections))
        except ApiException as e:
            logger.error("Error getting logs for pod %s/%s: %s %s", namespace, pod_name, e.status, e.reason)
            status_code, message = _describe_api_error(e, namespace, pod_name, what="pod logs")
            return PodLogsResult(success=False, message=message, status_code=status_code)
        except ClusterError as e:
            logger.error("Cannot reach cluster '%s' for pod logs: %s", cluster, e)
            return PodLogsResult(success=False, message=str(e), status_code=502)
        except Exception as e:
            logger.error("Error getting logs for pod %s/%s: %s", namespace, pod_name, e, exc_info=True)
            return PodLogsResult(
                success=False,
                message=str(e) or "Unknown error occurred while fetching logs",
                status_code=500,
            )

    async def _read_log(self, clients, namespace: str, pod_name: str, container: str, tail_lines: Optional[int]) -> str:
        kwargs = {"container": container, "_request_timeout": self.request_timeout}
        if tail_lines is not None:
            kwargs["tail_lines"] = tail_lines
        return await clients.core.read_namespaced_pod_log(pod_name, namespace, **kwargs)

    async def get_pod_details(self, cluster: str, namespace: str, pod_name: str) -> PodDetailsResult:
        """Returns the full pod resource as a JSON-ready dict (camelCase, as the API serves it)."""
        missing = _missing_parameters(cluster, namespace, pod_name)
        if missing:
            return PodDetailsResult(success=False, message=missing, status_code=400)

        try:
            async with await self.factory.clients_for(cluster) as clients:
                pod = await clients.core.read_namespaced_pod(pod_name, namespace, _request_timeout=self.request_timeout)
                details = clients.api_client.sanitize_for_serialization(pod)
        except ApiException as e:
            logger.error("Error getting details for pod %s/%s: %s %s", namespace, pod_name, e.status, e.reason)
            status_code, message = _describe_api_error(e, namespace, pod_name)
            return PodDetailsResult(success=False, message=message, status_code=status_code)
        except ClusterError as e:
            logger.error("Cannot reach cluster '%s' for pod details: %s", cluster, e)
            return PodDetailsResult(success=False, message=str(e), status_code=502)
        except Exception as e:
            logger.error("Error getting details for pod %s/%s: %s", namespace, pod_name, e, exc_info=True)
            return PodDetailsResult(
                success=False,
                message=str(e) or "Unknown error occurred while fetching pod details",
                status_code=500,
            )

        logger.debug("Fetched details for pod %s/%s", namespace, pod_name)
        return PodDetailsResult(success=True, details=details)

    async def describe_pod(self, cluster: str, namespace: str, pod_name: str) -> PodDetailsResult:
        """
        Runs `kubectl describe pod` and parses its text output. Used when the
        structured read fails for reasons other than not-found or forbidden.
        """
        missing = _missing_parameters(cluster, namespace, pod_name)
        if missing:
            return PodDetailsResult(success=False, message=missing, status_code=400)

        context = self.factory.registry.resolve_context_alias(cluster)
        command = [self.settings.KUBECTL_BINARY, "describe", "pod", pod_name, "-n", namespace]
        if context and context != self.factory.registry.placeholder:
            command += ["--context", context]

        logger.info("Falling back to '%s'", " ".join(command))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error("Could not run %s: %s", self.settings.KUBECTL_BINARY, e)
            return PodDetailsResult(
                success=False,
                message=f"Failed to get pod details using kubectl: {e}",
                status_code=500,
            )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.request_timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.error("kubectl describe pod %s/%s timed out", namespace, pod_name)
            return PodDetailsResult(
                success=False,
                message=f"kubectl describe timed out after {self.request_timeout}s",
                status_code=500,
            )

        output = stdout.decode("utf-8", errors="replace")
        error_output = stderr.decode("utf-8", errors="replace").strip()
        if process.returncode != 0:
            logger.error("kubectl describe exited with %s: %s", process.returncode, error_output)
            return PodDetailsResult(
                success=False,
                message=f"Failed to get pod details using kubectl: {error_output or f'exit code {process.returncode}'}",
                status_code=500,
            )
        if error_output:
            logger.error("kubectl stderr: %s", error_output)
            return PodDetailsResult(success=False, message=f"kubectl error: {error_output}", status_code=500)

        return PodDetailsResult(success=True, details=parse_describe_output(output), raw_output=output)


def _exception_text(e: Exception) -> str:
    if isinstance(e, ApiException):
        return f"({e.status}) {_api_error_message(e)}"
    return str(e) or "Unknown error"
