"""
Exception types raised by tcprobe.
"""


class TcprobeError(Exception):
    """Base class for fatal tcprobe errors."""


class ConfigurationError(TcprobeError):
    """Raised when options or the defaults file are inconsistent or invalid."""


class ResolutionError(TcprobeError):
    """Raised when a target cannot be turned into a socket address."""


class InvalidPortError(ResolutionError):
    """The port text is not an integer in the range 0-65535."""

    def __init__(self, port_text: str):
        super().__init__(f"invalid port number: '{port_text}'")
        self.port_text = port_text


class NoMatchingAddressError(ResolutionError):
    """No resolved candidate matched the requested IP family."""

    def __init__(self, host: str):
        super().__init__("cannot resolve hostname")
        self.host = host
