"""
Name resolution and connection probing for tcprobe.
"""

from .probe import tcp_probe
from .resolver import resolve

__all__ = [
    "resolve",
    "tcp_probe",
]
