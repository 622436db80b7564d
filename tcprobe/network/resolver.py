"""
Resolves a raw host/port pair to the single address that will be probed.
"""
from __future__ import annotations
import logging
import socket
from typing import cast

from ..errors import NoMatchingAddressError
from ..models import IpFamily, ResolvedAddress
from ..parsing import parse_port, split_host_port

logger = logging.getLogger(__name__)


def resolve(raw_host: str, raw_port: str, family: IpFamily = IpFamily.ANY) -> ResolvedAddress:
    """
    Turns user input into a ResolvedAddress.

    The resolver's ordering is kept as is; the first candidate allowed by
    `family` is returned.

    Raises:
        InvalidPortError: the port text is not a valid port number.
        NoMatchingAddressError: the lookup failed or no candidate matched.
    """
    host, port_text = split_host_port(raw_host, raw_port)
    port = parse_port(port_text)
    logger.debug("Resolving host '%s' port %d (family %s)", host, port, family.name)

    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except (OSError, ValueError) as e:
        logger.debug("Lookup of '%s' failed: %s", host, e)
        raise NoMatchingAddressError(host) from e

    for addr_family, _socktype, _proto, _canonname, sockaddr in infos:
        if not family.accepts(addr_family):
            logger.debug("Skipping candidate %s (%s)", sockaddr[0], addr_family)
            continue
        if addr_family == socket.AF_INET6:
            ip6, port6, flowinfo, scope_id = cast(tuple, sockaddr)
            resolved = ResolvedAddress(addr_family, ip6, port6, flowinfo, scope_id)
        else:
            resolved = ResolvedAddress(addr_family, cast(str, sockaddr[0]), cast(int, sockaddr[1]))
        logger.info("Resolved '%s' to %s", host, resolved)
        return resolved

    raise NoMatchingAddressError(host)
