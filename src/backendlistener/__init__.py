"""
ES Backend Listener - load-test sample to datastore document conversion.

This package turns completed load-test samples into flat documents ready
to be indexed into a search/analytics datastore.
"""

__version__ = "0.1.0"

from backendlistener.builders import MetricBuilder, build_metric
from backendlistener.config import ListenerSettings
from backendlistener.context import ParameterContext, TestRunContext
from backendlistener.enums import ReportingMode
from backendlistener.host import HostResolutionError, resolve_injector_hostname
from backendlistener.models import AssertionResult, SampleResult
from backendlistener.serializers import DocumentEncoder, document_to_json
from backendlistener.timeformat import DateFormat, InvalidPatternError

__all__ = [
    # Builders
    "MetricBuilder",
    "build_metric",
    # Models
    "SampleResult",
    "AssertionResult",
    # Contexts and configuration
    "ParameterContext",
    "TestRunContext",
    "ListenerSettings",
    "ReportingMode",
    # Formatting
    "DateFormat",
    "InvalidPatternError",
    # Host
    "HostResolutionError",
    "resolve_injector_hostname",
    # Serialization
    "DocumentEncoder",
    "document_to_json",
]
