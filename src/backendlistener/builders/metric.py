"""
Metric document builder.

Turns one completed sample into the flat document the listener indexes.
"""

import logging
from datetime import tzinfo
from typing import Any, Optional

from dateutil import tz as dateutil_tz

from backendlistener.builders.utils import (
    BUILD_COMPARISON_DATE,
    assertion_records,
    elapsed_datetime,
)
from backendlistener.config import ListenerSettings
from backendlistener.context import ParameterContext, TestRunContext
from backendlistener.enums import ReportingMode
from backendlistener.host import resolve_injector_hostname
from backendlistener.models import SampleResult
from backendlistener.timeformat import DateFormat, from_millis

logger = logging.getLogger(__name__)

RESERVED_PARAMETER_MARKER = "es."

DETAIL_MODES = (ReportingMode.DEBUG, ReportingMode.ERROR)


class MetricBuilder:
    """
    Builds the datastore document for a single sample.

    One builder is created per sample and used for one build_document()
    call. The mode and pattern strings are trimmed but not validated: an
    unknown mode attaches no detail, and a bad pattern fails the build.

    Usage:
        builder = MetricBuilder(sample, "info", "yyyy-MM-dd HH:mm:ss", 0, run_context)
        document = builder.build_document(parameter_context)
    """

    def __init__(
        self,
        sample: SampleResult,
        test_mode: str,
        timestamp: str,
        build_number: int,
        run_context: TestRunContext,
        tz: Optional[tzinfo] = None,
    ):
        """
        Initialize the builder.

        Args:
            sample: The completed sample
            test_mode: Reporting mode (debug, error, info)
            timestamp: Java-style pattern for every time field
            build_number: CI build number, 0 when not under CI
            run_context: Test start instant and clock
            tz: Zone for rendered timestamps (local when omitted)
        """
        self.sample = sample
        self.test_mode = test_mode.strip()
        self.timestamp = timestamp.strip()
        self.build_number = build_number
        self.run_context = run_context
        self.tz = tz or dateutil_tz.tzlocal()

    def build_document(self, context: ParameterContext) -> dict[str, Any]:
        """
        Build the document for the sample.

        Args:
            context: Listener parameters; non-reserved ones become fields

        Returns:
            Field name to value mapping

        Raises:
            InvalidPatternError: If the timestamp pattern is malformed
            HostResolutionError: If the injector host name cannot be resolved
        """
        date_format = DateFormat(self.timestamp)
        sample = self.sample

        document: dict[str, Any] = {
            "AllThreads": sample.all_threads,
            "BodySize": sample.body_size,
            "Bytes": sample.received_bytes,
            "SentBytes": sample.sent_bytes,
            "ConnectTime": sample.connect_time,
            "ContentType": sample.content_type,
            "DataType": sample.data_type,
            "ErrorCount": sample.error_count,
            "GrpThreads": sample.group_threads,
            "IdleTime": sample.idle_time,
            "Latency": sample.latency,
            "ResponseTime": sample.response_time,
            "SampleCount": sample.sample_count,
            "SampleLabel": sample.sample_label,
            "ThreadName": sample.thread_name,
            "URL": sample.url,
            "ResponseCode": sample.response_code,
            "StartTime": date_format.format_millis(sample.start_time, self.tz),
            "EndTime": date_format.format_millis(sample.end_time, self.tz),
            "Timestamp": date_format.format_millis(sample.timestamp, self.tz),
            "InjectorHostname": resolve_injector_hostname(),
        }

        if self._should_attach_details():
            self._add_details(document)

        self._add_assertions(document)
        self._add_elapsed_time(document, date_format)
        self._add_custom_fields(document, context)

        return document

    def _should_attach_details(self) -> bool:
        if self.test_mode in DETAIL_MODES:
            return True
        if self.test_mode == ReportingMode.INFO:
            return not self.sample.successful
        return False

    def _add_details(self, document: dict[str, Any]) -> None:
        """Attach request and response headers/bodies."""
        logger.debug(f"Attaching request/response detail for '{self.sample.sample_label}'")
        document["RequestHeaders"] = self.sample.request_headers
        document["RequestBody"] = self.sample.sampler_data
        document["ResponseHeaders"] = self.sample.response_headers
        document["ResponseBody"] = self.sample.response_data_as_string()
        document["ResponseMessage"] = self.sample.response_message

    def _add_assertions(self, document: dict[str, Any]) -> None:
        # None means "no assertions recorded"; the key is left out entirely
        if self.sample.assertion_results is not None:
            document["AssertionResults"] = assertion_records(self.sample.assertion_results)

    def _add_elapsed_time(self, document: dict[str, Any], date_format: DateFormat) -> None:
        """
        Add the elapsed time since the test run started.

        Under CI (build number != 0) a second copy is laid onto a fixed day
        so that dashboards can overlay builds on one time axis.
        """
        if self.build_number != 0:
            document["BuildNumber"] = self.build_number
            elapsed = self._format_elapsed_time(date_format, for_build_comparison=True)
            if elapsed is not None:
                document["ElapsedTimeComparison"] = elapsed

        elapsed = self._format_elapsed_time(date_format, for_build_comparison=False)
        if elapsed is not None:
            document["ElapsedTime"] = elapsed

    def _format_elapsed_time(
        self, date_format: DateFormat, for_build_comparison: bool
    ) -> Optional[str]:
        """Render elapsed time onto the comparison day or today; None on failure."""
        try:
            if for_build_comparison:
                day = BUILD_COMPARISON_DATE
            else:
                day = from_millis(self.run_context.now(), self.tz).date()
            value = elapsed_datetime(day, self.run_context.elapsed_millis(), self.tz)
            return date_format.format(value)
        except (ValueError, OverflowError):
            logger.exception("Unexpected error computing elapsed time")
            return None

    def _add_custom_fields(self, document: dict[str, Any], context: ParameterContext) -> None:
        """Copy user parameters that are neither reserved nor blank."""
        for name in context.parameter_names():
            if RESERVED_PARAMETER_MARKER in name:
                continue
            value = (context.get_parameter(name) or "").strip()
            if value:
                if name in document:
                    logger.debug(f"Custom field '{name}' overrides a built-in field")
                document[name] = value


def build_metric(
    sample: SampleResult,
    context: ParameterContext,
    run_context: TestRunContext,
    settings: Optional[ListenerSettings] = None,
) -> dict[str, Any]:
    """
    Convenience function to build one document from listener parameters.

    Args:
        sample: The completed sample
        context: Listener parameters
        run_context: Test start instant and clock
        settings: Explicit settings (read from context and environment if omitted)

    Returns:
        The sample's document

    Example:
        run_context = TestRunContext.start()
        context = ParameterContext({"es.test.mode": "debug", "env": "staging"})
        document = build_metric(sample, context, run_context)
    """
    if settings is None:
        settings = ListenerSettings.from_parameters(context)

    builder = MetricBuilder(
        sample,
        settings.test_mode,
        settings.timestamp,
        settings.build_number,
        run_context,
        tz=settings.zone,
    )
    return builder.build_document(context)
