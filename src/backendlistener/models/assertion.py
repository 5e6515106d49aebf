"""
Assertion outcome model.
"""

from typing import Optional

from pydantic import Field

from backendlistener.models.base import Record


class AssertionResult(Record):
    """
    Outcome of one assertion evaluated against a sample.

    Attributes:
        name: Assertion name as configured in the test plan
        failure: The assertion condition did not hold
        error: The assertion itself could not be evaluated
        failure_message: Human-readable reason, if any
    """

    name: str = Field(
        default="",
        description="Assertion name",
    )

    failure: bool = Field(
        default=False,
        description="Whether the assertion condition failed",
    )

    error: bool = Field(
        default=False,
        description="Whether evaluating the assertion raised an error",
    )

    failure_message: Optional[str] = Field(
        default=None,
        description="Reason reported by the assertion",
    )

    @property
    def is_failed(self) -> bool:
        """A failed or errored assertion counts as a failure."""
        return self.failure or self.error
