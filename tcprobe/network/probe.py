"""
Performs a single timed TCP connection attempt.
"""
import logging
import socket
import time

from ..models import ProbeOutcome, ProbeStatus, ResolvedAddress

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.monotonic() - start) * 1000))


def tcp_probe(target: ResolvedAddress, timeout: float) -> ProbeOutcome:
    """
    Connects to target and drops the connection without sending data.

    The elapsed time covers the whole attempt whatever its result. A
    timeout of 0 puts the socket in non-blocking mode, so only a connect
    that completes instantly succeeds.
    """
    start = time.monotonic()
    try:
        with socket.socket(target.family, socket.SOCK_STREAM) as sock:
            sock.settimeout(timeout)
            sock.connect(target.sockaddr)
            elapsed = _elapsed_ms(start)
    except (socket.timeout, TimeoutError):
        return ProbeOutcome(ProbeStatus.TIMED_OUT, target, _elapsed_ms(start))
    except OSError as e:
        elapsed = _elapsed_ms(start)
        logger.debug("Connection to %s failed: %s", target, e)
        return ProbeOutcome(ProbeStatus.FAILED, target, elapsed)
    return ProbeOutcome(ProbeStatus.CONNECTED, target, elapsed)
