"""Label selectors, data classes, CPU samples and rolling-update ordering for Elasticsearch data nodes."""

__version__ = "0.1.0"

__all__ = [
    "labels",
    "metrics",
    "models",
    "updates",
    "workloads",
]