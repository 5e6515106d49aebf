"""
Document builders.

Each builder converts an engine record directly into a datastore-ready
document (a flat dict).
"""

from backendlistener.builders.metric import MetricBuilder, build_metric

__all__ = [
    "MetricBuilder",
    "build_metric",
]
