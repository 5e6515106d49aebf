"""
Enums for listener configuration.

These enums define the recognised values for key configuration attributes.
"""

from enum import Enum


class ReportingMode(str, Enum):
    """
    How much request/response detail a document carries.

    Attributes:
        DEBUG: Attach detail to every sample
        ERROR: Attach detail to every sample
        INFO: Attach detail only to failed samples
    """

    DEBUG = "debug"
    ERROR = "error"
    INFO = "info"
