"""
Pydantic models for load-test sample records.

These models describe what the load-testing engine hands to the listener:
- SampleResult
- AssertionResult
"""

from backendlistener.models.assertion import AssertionResult
from backendlistener.models.base import Record
from backendlistener.models.sample import SampleResult

__all__ = [
    "Record",
    "SampleResult",
    "AssertionResult",
]
