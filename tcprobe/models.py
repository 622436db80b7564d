from __future__ import annotations
import math
import socket
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple, Union

from .errors import ConfigurationError


class IpFamily(Enum):
    """The IP family a resolved target is allowed to have."""
    ANY = auto()
    IPV4 = auto()
    IPV6 = auto()

    @classmethod
    def from_flags(cls, ipv4: bool, ipv6: bool) -> IpFamily:
        if ipv4 and ipv6:
            raise ConfigurationError("ipv4 and ipv6 cannot be specified at same time")
        if ipv4:
            return cls.IPV4
        if ipv6:
            return cls.IPV6
        return cls.ANY

    @classmethod
    def from_name(cls, name: str) -> IpFamily:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ConfigurationError(f"unknown ip family '{name}', expected any, ipv4 or ipv6") from None

    def accepts(self, address_family: int) -> bool:
        """Whether a getaddrinfo candidate of this address family may be used."""
        if self is IpFamily.IPV4:
            return address_family != socket.AF_INET6
        if self is IpFamily.IPV6:
            return address_family != socket.AF_INET
        return True


@dataclass(frozen=True)
class ResolvedAddress:
    """The concrete (IP, port) pair every probe attempt connects to."""
    family: int
    ip: str
    port: int
    flowinfo: int = 0
    scope_id: int = 0

    @property
    def sockaddr(self) -> Union[Tuple[str, int], Tuple[str, int, int, int]]:
        if self.family == socket.AF_INET6:
            return (self.ip, self.port, self.flowinfo, self.scope_id)
        return (self.ip, self.port)

    def __str__(self) -> str:
        if self.family == socket.AF_INET6:
            host = self.ip.split('%')[0]
            if self.scope_id:
                host = f"{host}%{self.scope_id}"
            return f"[{host}]:{self.port}"
        return f"{self.ip}:{self.port}"


class ProbeStatus(Enum):
    """How a single connection attempt ended."""
    CONNECTED = auto()
    TIMED_OUT = auto()
    FAILED = auto()


@dataclass
class ProbeOutcome:
    """Result of one connection attempt."""
    status: ProbeStatus
    target: ResolvedAddress
    elapsed_ms: int

    def render(self) -> str:
        """Formats the outcome as a single output line."""
        if self.status is ProbeStatus.CONNECTED:
            return f"connected to {self.target} {self.elapsed_ms}ms"
        if self.status is ProbeStatus.TIMED_OUT:
            return f"connected to {self.target} timeout {self.elapsed_ms}ms"
        return f"connected to {self.target} failed {self.elapsed_ms}ms"


# Upper bound accepted by socket timeouts and time.sleep on every platform.
MAX_DURATION_SECONDS = 2 ** 31 - 1


def _check_duration(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number of seconds")
    if not math.isfinite(value) or value < 0:
        raise ConfigurationError(f"{name} must be a non-negative number of seconds")
    if value > MAX_DURATION_SECONDS:
        raise ConfigurationError(f"{name} must be at most {MAX_DURATION_SECONDS} seconds")
    return float(value)


@dataclass(frozen=True)
class ProbePlan:
    """
    How many attempts to make and how to pace them.

    A count of None means probe until the process is terminated.
    """
    count: Optional[int]
    interval: float
    timeout: float

    def __post_init__(self):
        if self.count is not None and self.count < 1:
            raise ConfigurationError("count must be a positive integer")
        object.__setattr__(self, 'interval', _check_duration("interval", self.interval))
        object.__setattr__(self, 'timeout', _check_duration("timeout", self.timeout))

    @property
    def is_unbounded(self) -> bool:
        return self.count is None


class RunnerState(Enum):
    """Lifecycle of a probe run."""
    ATTEMPT_PENDING = auto()
    DONE = auto()
