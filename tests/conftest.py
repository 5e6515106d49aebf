"""
Shared fixtures for listener tests.
"""

import pytest

from backendlistener.builders import metric
from backendlistener.context import TestRunContext
from backendlistener.models import AssertionResult, SampleResult

# 2024-01-15 10:30:45 UTC
SAMPLE_START = 1705314645000


@pytest.fixture(autouse=True)
def fixed_hostname(monkeypatch):
    """Keep documents independent of the machine running the tests."""
    monkeypatch.setattr(metric, "resolve_injector_hostname", lambda: "injector-01")
    return "injector-01"


@pytest.fixture
def sample_start():
    """Epoch millis of the shared sample and test start (2024-01-15 10:30:45 UTC)."""
    return SAMPLE_START


@pytest.fixture
def run_context():
    """A test run that started at SAMPLE_START and is 2m05s in."""
    return TestRunContext(start_time=SAMPLE_START, clock=lambda: SAMPLE_START + 125_000)


@pytest.fixture
def sample():
    """A successful HTTP sample with two assertions."""
    return SampleResult(
        all_threads=10,
        group_threads=5,
        body_size=512,
        received_bytes=740,
        sent_bytes=180,
        connect_time=12,
        content_type="application/json",
        data_type="text",
        error_count=0,
        idle_time=3,
        latency=80,
        response_time=150,
        sample_count=1,
        sample_label="GET /api/orders",
        thread_name="Thread Group 1-1",
        url="https://shop.example.com/api/orders",
        response_code="200",
        start_time=SAMPLE_START,
        end_time=SAMPLE_START + 150,
        timestamp=SAMPLE_START,
        successful=True,
        request_headers="Accept: application/json",
        sampler_data="GET https://shop.example.com/api/orders",
        response_headers="HTTP/1.1 200 OK\nContent-Type: application/json",
        response_data='{"orders": []}',
        response_message="OK",
        assertion_results=[
            AssertionResult(name="Status is 200"),
            AssertionResult(name="Has orders", failure=True, failure_message="orders is empty"),
        ],
    )
