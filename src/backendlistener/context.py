"""
Collaborator contexts handed to the metric builder by the host engine.

- ParameterContext: the user-declared listener parameters
- TestRunContext: when the current test run started, and a clock
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)


def current_millis() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


class ParameterContext:
    """
    Ordered, read-only view of the listener's configured parameters.

    Parameter names keep their declaration order; values are strings.

    Usage:
        context = ParameterContext({"es.test.mode": "info", "env": "staging"})
        for name in context.parameter_names():
            print(name, context.get_parameter(name))
    """

    def __init__(self, parameters: Optional[Mapping[str, str]] = None):
        """
        Initialize the context.

        Args:
            parameters: Parameter names mapped to their string values
        """
        self._parameters: dict[str, str] = dict(parameters or {})

    @classmethod
    def from_pairs(cls, pairs: list[str]) -> "ParameterContext":
        """
        Build a context from ``KEY=VALUE`` strings.

        Raises:
            ValueError: If a pair has no '=' or an empty key
        """
        parameters: dict[str, str] = {}
        for pair in pairs:
            name, sep, value = pair.partition("=")
            name = name.strip()
            if not sep or not name:
                raise ValueError(f"Expected KEY=VALUE, got: {pair!r}")
            parameters[name] = value
        return cls(parameters)

    def parameter_names(self) -> Iterator[str]:
        """Iterate parameter names in declaration order."""
        return iter(list(self._parameters))

    def get_parameter(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a parameter value, or ``default`` when undeclared."""
        return self._parameters.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._parameters

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"ParameterContext({self._parameters!r})"


@dataclass(frozen=True)
class TestRunContext:
    """
    Process-wide facts about the running test, passed explicitly.

    Attributes:
        start_time: Epoch millis when the test run started
        clock: Returns the current epoch millis
    """

    # Not a test class, despite the name
    __test__ = False

    start_time: int
    clock: Callable[[], int] = field(default=current_millis, compare=False, repr=False)

    @classmethod
    def start(cls, clock: Callable[[], int] = current_millis) -> "TestRunContext":
        """Create a context whose test run starts now."""
        context = cls(start_time=clock(), clock=clock)
        logger.debug(f"Test run started at {context.start_time}")
        return context

    def now(self) -> int:
        """Current epoch millis according to the context's clock."""
        return self.clock()

    def elapsed_millis(self) -> int:
        """Milliseconds since the test run started."""
        return self.clock() - self.start_time
