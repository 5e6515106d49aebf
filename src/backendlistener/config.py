"""
Listener settings read from the parameter context and the environment.

Every setting the listener consumes is named with the reserved ``es.``
prefix so it never leaks into documents as a custom field. The build
number comes from the CI environment (``BUILD_NUMBER``), with 0 meaning
"not running under CI".
"""

import logging
import os
from datetime import tzinfo
from typing import Mapping, Optional

from dateutil import tz as dateutil_tz
from pydantic import BaseModel, ConfigDict, Field, field_validator

from backendlistener.context import ParameterContext
from backendlistener.enums import ReportingMode

logger = logging.getLogger(__name__)

TEST_MODE_PARAMETER = "es.test.mode"
TIMESTAMP_PARAMETER = "es.timestamp"
TIMEZONE_PARAMETER = "es.timezone"
BUILD_NUMBER_VARIABLE = "BUILD_NUMBER"

DEFAULT_TIMESTAMP = "yyyy-MM-dd'T'HH:mm:ss.SSSZZ"


class ListenerSettings(BaseModel):
    """
    Configuration consumed directly by the metric builder.

    Attributes:
        test_mode: Reporting mode; unknown values attach no detail
        timestamp: Java-style timestamp pattern
        timezone: IANA zone name for rendered timestamps (local if None)
        build_number: CI build number, 0 when absent
    """

    model_config = ConfigDict(frozen=True)

    test_mode: str = Field(
        default=ReportingMode.INFO.value,
        description="Reporting mode (debug, error, info)",
    )

    timestamp: str = Field(
        default=DEFAULT_TIMESTAMP,
        description="Timestamp pattern applied to all time fields",
    )

    timezone: Optional[str] = Field(
        default=None,
        description="Time zone name for rendered timestamps",
    )

    build_number: int = Field(
        default=0,
        description="CI build number (0 = not under CI)",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Blank means local; anything else must be a known zone."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        if dateutil_tz.gettz(v) is None:
            raise ValueError(f"Unknown time zone: {v}")
        return v

    @property
    def zone(self) -> tzinfo:
        """The configured zone, or the local zone."""
        if self.timezone:
            return dateutil_tz.gettz(self.timezone)
        return dateutil_tz.tzlocal()

    @classmethod
    def from_parameters(
        cls,
        context: ParameterContext,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ListenerSettings":
        """
        Read settings from listener parameters and the environment.

        Args:
            context: Listener parameters
            environ: Environment variables (defaults to os.environ)

        Returns:
            ListenerSettings with defaults for anything undeclared or blank
        """
        if environ is None:
            environ = os.environ

        values: dict = {}

        test_mode = (context.get_parameter(TEST_MODE_PARAMETER) or "").strip()
        if test_mode:
            if test_mode not in {mode.value for mode in ReportingMode}:
                logger.warning(
                    f"Unknown {TEST_MODE_PARAMETER} '{test_mode}', no request/response detail will be sent"
                )
            values["test_mode"] = test_mode

        timestamp = (context.get_parameter(TIMESTAMP_PARAMETER) or "").strip()
        if timestamp:
            values["timestamp"] = timestamp

        timezone_name = context.get_parameter(TIMEZONE_PARAMETER)
        if timezone_name:
            values["timezone"] = timezone_name

        values["build_number"] = _read_build_number(environ)

        return cls(**values)


def _read_build_number(environ: Mapping[str, str]) -> int:
    """Parse BUILD_NUMBER; missing or malformed values mean 0."""
    raw = environ.get(BUILD_NUMBER_VARIABLE)
    if raw is None or not raw.strip():
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring non-numeric {BUILD_NUMBER_VARIABLE}: {raw!r}")
        return 0
