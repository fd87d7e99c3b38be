# src/kubeview/core/config.py

import logging
import os

from dotenv import load_dotenv

from kubeview import __version__

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

_TRUE_VALUES = ("true", "1", "t", "y", "yes")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- API variables ---
    API_HOST = os.getenv("API_HOST", "127.0.0.1")
    API_PORT = int(os.getenv("API_PORT", "8000"))
    CORS_ALLOW_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]

    # --- Kubeconfig variables ---
    # Placeholder the dashboard uses before it knows the real current-context name.
    DEFAULT_CONTEXT_PLACEHOLDER = os.getenv("DEFAULT_CONTEXT_PLACEHOLDER", "loaded-context")

    # --- Kubernetes API variables ---
    K8S_REQUEST_TIMEOUT = float(os.getenv("K8S_REQUEST_TIMEOUT", "20"))

    # --- Metrics API variables (raw HTTP path) ---
    METRICS_API_PATH = os.getenv("METRICS_API_PATH", "/apis/metrics.k8s.io/v1beta1")
    METRICS_VERIFY_CERTS = os.getenv("METRICS_VERIFY_CERTS", "False").lower() in _TRUE_VALUES
    DEFAULT_TIMEOUT_CONNECT = float(os.getenv("DEFAULT_TIMEOUT_CONNECT", "5"))
    DEFAULT_TIMEOUT_READ = float(os.getenv("DEFAULT_TIMEOUT_READ", "20"))
    USER_AGENT = os.getenv("USER_AGENT", f"kubeview/{__version__}")

    # --- kubectl describe fallback ---
    KUBECTL_FALLBACK_ENABLED = os.getenv("KUBECTL_FALLBACK_ENABLED", "True").lower() in _TRUE_VALUES
    KUBECTL_BINARY = os.getenv("KUBECTL_BINARY", "kubectl")

    # KUBECONFIG is resolved at access time so tests and the CLI can point the
    # registry at another file after import.
    @property
    def KUBECONFIG(self) -> str | None:
        return os.getenv("KUBECONFIG") or None

    @property
    def kubeconfig_paths(self) -> list[str]:
        """Kubeconfig files to read, in precedence order."""
        if self.KUBECONFIG:
            return [p for p in self.KUBECONFIG.split(os.pathsep) if p]
        return [os.path.join(os.path.expanduser("~"), ".kube", "config")]

    def validate_instance(self):
        if self.LOG_LEVEL.upper() not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        if not 0 < self.API_PORT < 65536:
            raise ValueError("API_PORT must be between 1 and 65535")
        for name in ("K8S_REQUEST_TIMEOUT", "DEFAULT_TIMEOUT_CONNECT", "DEFAULT_TIMEOUT_READ"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be a positive number of seconds")
        if not self.METRICS_API_PATH.startswith("/"):
            raise ValueError("METRICS_API_PATH must start with '/'")
        if not self.METRICS_VERIFY_CERTS:
            logging.getLogger(__name__).debug("TLS verification is disabled for the raw metrics API path.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
