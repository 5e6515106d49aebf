"""
Injector host identification.

The injector is the machine running the load-testing engine. Its name is
resolved at call time; nothing is cached.
"""

import logging
import socket

logger = logging.getLogger(__name__)


class HostResolutionError(OSError):
    """Raised when the local host name cannot be resolved."""


def resolve_injector_hostname() -> str:
    """
    Resolve the local host name.

    The name must resolve to an address, mirroring how the engine looks up
    its own identity. May block on the system resolver.

    Returns:
        The local host name

    Raises:
        HostResolutionError: If the name is unavailable or does not resolve
    """
    try:
        hostname = socket.gethostname()
        # Any address family will do; IPv6-only hosts are valid injectors
        socket.getaddrinfo(hostname, None)
    except OSError as e:
        raise HostResolutionError(f"Could not resolve local host name: {e}") from e

    if not hostname:
        raise HostResolutionError("Local host name is empty")

    logger.debug(f"Resolved injector hostname: {hostname}")
    return hostname
