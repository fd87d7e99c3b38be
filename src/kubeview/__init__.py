"""kubeview - a local dashboard backend for inspecting Kubernetes clusters."""

__version__ = "0.3.0"
