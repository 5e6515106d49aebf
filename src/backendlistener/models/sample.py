"""
Sample result model.

Represents one completed unit of work executed by the load-testing engine
(typically a single request/response cycle) along with its measurements.
"""

from typing import Optional, Union

from pydantic import Field

from backendlistener.models.assertion import AssertionResult
from backendlistener.models.base import Record

DEFAULT_ENCODING = "utf-8"


class SampleResult(Record):
    """
    A completed test sample.

    All timestamps are epoch milliseconds; all durations are milliseconds.

    Attributes:
        all_threads: Active threads across the whole test
        group_threads: Active threads in this sample's thread group
        body_size: Size of the response body in bytes
        received_bytes: Total bytes received (headers and body)
        sent_bytes: Total bytes sent
        connect_time: Time to establish the connection
        latency: Time to first byte
        idle_time: Time spent idle (timers, pauses)
        response_time: Total elapsed time of the sample
        start_time: When the sample started
        end_time: When the sample ended
        timestamp: The sample's reference timestamp
        successful: Whether the sample passed
        assertion_results: Assertion outcomes, or None if none were recorded
    """

    # Thread counts
    all_threads: int = Field(default=0, description="Active threads in the test")
    group_threads: int = Field(default=0, description="Active threads in the group")

    # Sizes
    body_size: int = Field(default=0, ge=0, description="Response body size in bytes")
    received_bytes: int = Field(
        default=0,
        ge=0,
        alias="bytes",
        description="Bytes received",
    )
    sent_bytes: int = Field(default=0, ge=0, description="Bytes sent")

    # Timings
    connect_time: int = Field(default=0, description="Connect time in ms")
    idle_time: int = Field(default=0, description="Idle time in ms")
    latency: int = Field(default=0, description="Time to first byte in ms")
    response_time: int = Field(
        default=0,
        alias="time",
        description="Total sample time in ms",
    )

    # Counts
    error_count: int = Field(default=0, ge=0, description="Failed samples in this result")
    sample_count: int = Field(default=1, ge=0, description="Samples in this result")

    # Identification
    content_type: str = Field(default="", description="Response content type")
    data_type: str = Field(default="", description="Response data type (text/bin)")
    sample_label: str = Field(default="", description="Sampler label")
    thread_name: str = Field(default="", description="Name of the executing thread")
    url: Optional[str] = Field(default=None, alias="URL", description="Request URL")
    response_code: str = Field(default="", description="Response status code")

    # Timestamps (epoch millis)
    start_time: int = Field(default=0, description="Sample start")
    end_time: int = Field(default=0, description="Sample end")
    timestamp: int = Field(default=0, alias="timeStamp", description="Sample timestamp")

    successful: bool = Field(default=True, description="Whether the sample passed")

    # Request/response detail
    request_headers: str = Field(default="", description="Raw request headers")
    sampler_data: Optional[str] = Field(default=None, description="Request body")
    response_headers: str = Field(default="", description="Raw response headers")
    response_data: Union[str, bytes] = Field(default="", description="Response body")
    data_encoding: Optional[str] = Field(
        default=None,
        description="Encoding of response_data when it is bytes",
    )
    response_message: str = Field(default="", description="Response status message")

    assertion_results: Optional[list[AssertionResult]] = Field(
        default=None,
        description="Assertion outcomes in evaluation order",
    )

    def response_data_as_string(self) -> str:
        """Response body as text, decoding bytes with the sample's encoding."""
        if isinstance(self.response_data, bytes):
            encoding = self.data_encoding or DEFAULT_ENCODING
            return self.response_data.decode(encoding, errors="replace")
        return self.response_data

    def __str__(self) -> str:
        """String representation."""
        status = "OK" if self.successful else "FAILED"
        return f"Sample '{self.sample_label}' [{self.response_code}] {status} in {self.response_time} ms"
