class KubeViewError(Exception):
    """Base exception for kubeview."""

    pass


class KubeConfigError(KubeViewError):
    """Raised when a kubeconfig operation cannot be honoured (e.g. unknown context)."""

    pass


class ClusterError(KubeViewError):
    """Base exception for errors talking to a cluster."""

    pass


class ClusterConnectionError(ClusterError):
    """Raised when no usable API client can be built for a cluster."""

    pass


class ClusterQueryError(ClusterError):
    """Raised when a primary listing call (nodes, pods) fails."""

    pass
