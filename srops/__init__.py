"""Build and compare Kubernetes manifests for StarRocks-style clusters."""

__version__ = "0.1.0"

__all__ = [
    "autoscaler",
    "deployment",
    "hashing",
    "load",
    "metadata",
    "model",
    "ports",
    "service_templates",
    "services",
    "statefulset",
    "statefulsets",
]