"""
Tests for injector hostname resolution.
"""

import socket

import pytest

from backendlistener import host
from backendlistener.host import HostResolutionError, resolve_injector_hostname


def _ipv4_entry(address):
    return (socket.AF_INET, socket.SOCK_STREAM, 6, "", (address, 0))


def _ipv6_entry(address):
    return (socket.AF_INET6, socket.SOCK_STREAM, 6, "", (address, 0, 0, 0))


class TestResolveInjectorHostname:
    """Tests for resolve_injector_hostname."""

    def test_returns_local_name(self, monkeypatch):
        """Test that a resolvable name is returned."""
        monkeypatch.setattr(host.socket, "gethostname", lambda: "injector-07")
        monkeypatch.setattr(host.socket, "getaddrinfo", lambda name, port: [_ipv4_entry("10.0.0.7")])

        assert resolve_injector_hostname() == "injector-07"

    def test_unresolvable_name_raises(self, monkeypatch):
        """Test that resolver failures surface as HostResolutionError."""

        def fail(name, port):
            raise socket.gaierror(-2, "Name or service not known")

        monkeypatch.setattr(host.socket, "gethostname", lambda: "ghost")
        monkeypatch.setattr(host.socket, "getaddrinfo", fail)

        with pytest.raises(HostResolutionError) as exc_info:
            resolve_injector_hostname()
        assert isinstance(exc_info.value.__cause__, socket.gaierror)

    def test_ipv6_only_name_resolves(self, monkeypatch):
        """Test that a name with only an IPv6 address is accepted."""

        def no_ipv4(name):
            raise socket.gaierror(-2, "Name or service not known")

        monkeypatch.setattr(host.socket, "gethostname", lambda: "injector-v6")
        monkeypatch.setattr(host.socket, "gethostbyname", no_ipv4)
        monkeypatch.setattr(host.socket, "getaddrinfo", lambda name, port: [_ipv6_entry("fd00::7")])

        assert resolve_injector_hostname() == "injector-v6"

    def test_empty_name_raises(self, monkeypatch):
        """Test that an empty host name is rejected."""
        monkeypatch.setattr(host.socket, "gethostname", lambda: "")
        monkeypatch.setattr(host.socket, "getaddrinfo", lambda name, port: [_ipv4_entry("127.0.0.1")])

        with pytest.raises(HostResolutionError):
            resolve_injector_hostname()

    def test_is_os_error(self):
        """Test that callers can catch resolution failures as OSError."""
        assert issubclass(HostResolutionError, OSError)
