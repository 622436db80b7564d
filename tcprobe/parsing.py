"""
Splits a user supplied host string into a host and a port.

The host may carry its own port ("host:port", "[v6addr]:port"), be a
bracketed IPv6 literal ("[v6addr]") or be a plain hostname/IP. The
forms are tried in a fixed order and the first match wins.
"""
from __future__ import annotations
import re
from enum import Enum
from typing import Tuple

from .errors import InvalidPortError

_PORT_RE = re.compile(r'\+?[0-9]+')
MAX_PORT = 65535


class HostForm(Enum):
    """The shapes a raw host string can take, in matching order."""
    HOST_PORT = "host:port"
    BRACKETED_WITH_PORT = "[host]:port"
    BRACKETED = "[host]"
    PLAIN = "host"


def classify_host(raw_host: str) -> HostForm:
    """Returns the first HostForm that matches raw_host."""
    # A bare IPv6 literal always has more than one colon.
    if raw_host.count(':') == 1:
        return HostForm.HOST_PORT
    if ']:' in raw_host:
        return HostForm.BRACKETED_WITH_PORT
    if len(raw_host) >= 2 and raw_host.startswith('[') and raw_host.endswith(']'):
        return HostForm.BRACKETED
    return HostForm.PLAIN


def split_host_port(raw_host: str, raw_port: str) -> Tuple[str, str]:
    """
    Extracts the host and the port text to use for resolution.

    raw_port is only used when raw_host does not embed a port.
    """
    form = classify_host(raw_host)
    if form is HostForm.HOST_PORT:
        host, _, port = raw_host.partition(':')
        return host, port
    if form is HostForm.BRACKETED_WITH_PORT:
        position = raw_host.rfind(':')
        # Drop the leading '[' and the ']' right before the port colon.
        return raw_host[1:position - 1], raw_host[position + 1:]
    if form is HostForm.BRACKETED:
        return raw_host[1:-1], raw_port
    return raw_host, raw_port


def parse_port(port_text: str) -> int:
    """Parses a decimal port number in the range 0-65535."""
    if not _PORT_RE.fullmatch(port_text):
        raise InvalidPortError(port_text)
    port = int(port_text)
    if port > MAX_PORT:
        raise InvalidPortError(port_text)
    return port
