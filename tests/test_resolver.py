"""Tests for target resolution and family filtering."""

import socket

import pytest

from tcprobe.errors import InvalidPortError, NoMatchingAddressError
from tcprobe.models import IpFamily
from tcprobe.network import resolver


def _v4(ip, port):
    return (socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, '', (ip, port))


def _v6(ip, port, scope_id=0):
    return (socket.AF_INET6, socket.SOCK_STREAM, socket.IPPROTO_TCP, '', (ip, port, 0, scope_id))


@pytest.fixture
def lookups(monkeypatch):
    """Replaces getaddrinfo with a table lookup and records the calls."""
    table = {}
    calls = []

    def fake_getaddrinfo(host, port, family=0, type=0, proto=0, flags=0):
        calls.append((host, port))
        if host not in table:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        return [(f, t, p, c, (sa[0], port) + tuple(sa[2:])) for f, t, p, c, sa in table[host]]

    monkeypatch.setattr(resolver.socket, "getaddrinfo", fake_getaddrinfo)
    return table, calls


class TestResolve:
    """Tests for resolve()."""

    def test_host_port_form(self, lookups):
        table, calls = lookups
        table["10.0.0.1"] = [_v4("10.0.0.1", 0)]
        address = resolver.resolve("10.0.0.1:9090", "80", IpFamily.ANY)
        assert (address.ip, address.port) == ("10.0.0.1", 9090)
        assert calls == [("10.0.0.1", 9090)]

    def test_bracketed_with_port_ipv6_only(self, lookups):
        table, _ = lookups
        table["fe80::1"] = [_v6("fe80::1", 0)]
        address = resolver.resolve("[fe80::1]:22", "80", IpFamily.IPV6)
        assert address.family == socket.AF_INET6
        assert (address.ip, address.port) == ("fe80::1", 22)
        assert str(address) == "[fe80::1]:22"

    def test_bracketed_without_port_uses_default(self, lookups):
        table, _ = lookups
        table["::1"] = [_v6("::1", 0)]
        address = resolver.resolve("[::1]", "80")
        assert (address.ip, address.port) == ("::1", 80)

    def test_plain_host_uses_default_port(self, lookups):
        table, _ = lookups
        table["example.com"] = [_v4("93.184.216.34", 0)]
        address = resolver.resolve("example.com", "8080")
        assert str(address) == "93.184.216.34:8080"

    def test_any_keeps_resolver_order(self, lookups):
        table, _ = lookups
        table["dual.example"] = [_v6("2001:db8::1", 0), _v4("192.0.2.1", 0)]
        address = resolver.resolve("dual.example", "80", IpFamily.ANY)
        assert address.ip == "2001:db8::1"

    def test_ipv4_only_skips_ipv6(self, lookups):
        table, _ = lookups
        table["dual.example"] = [_v6("2001:db8::1", 0), _v4("192.0.2.1", 0), _v4("192.0.2.2", 0)]
        address = resolver.resolve("dual.example", "80", IpFamily.IPV4)
        assert address.family == socket.AF_INET
        assert address.ip == "192.0.2.1"

    def test_ipv6_only_skips_ipv4(self, lookups):
        table, _ = lookups
        table["dual.example"] = [_v4("192.0.2.1", 0), _v6("2001:db8::1", 0)]
        address = resolver.resolve("dual.example", "80", IpFamily.IPV6)
        assert address.ip == "2001:db8::1"

    def test_ipv4_only_with_only_ipv6_candidates(self, lookups):
        table, _ = lookups
        table["v6.example"] = [_v6("2001:db8::1", 0)]
        with pytest.raises(NoMatchingAddressError, match="cannot resolve hostname"):
            resolver.resolve("v6.example", "80", IpFamily.IPV4)

    def test_empty_candidate_list(self, lookups):
        table, _ = lookups
        table["empty.example"] = []
        with pytest.raises(NoMatchingAddressError):
            resolver.resolve("empty.example", "80")

    def test_lookup_failure_is_wrapped(self, lookups):
        with pytest.raises(NoMatchingAddressError) as exc_info:
            resolver.resolve("missing.example", "80")
        assert isinstance(exc_info.value.__cause__, socket.gaierror)
        assert exc_info.value.host == "missing.example"

    def test_invalid_port_fails_before_lookup(self, lookups):
        _, calls = lookups
        with pytest.raises(InvalidPortError):
            resolver.resolve("example.com:http", "80")
        with pytest.raises(InvalidPortError):
            resolver.resolve("example.com", "70000")
        assert calls == []

    def test_scope_id_is_kept(self, lookups):
        table, _ = lookups
        table["fe80::1%eth0"] = [_v6("fe80::1", 0, scope_id=2)]
        address = resolver.resolve("[fe80::1%eth0]:22", "80")
        assert address.sockaddr == ("fe80::1", 22, 0, 2)
        assert str(address) == "[fe80::1%2]:22"
