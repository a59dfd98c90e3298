"""Utility modules for mintmedia"""

from .logging_setup import log_exception, parse_size, setup_logging

__all__ = [
    "log_exception",
    "parse_size",
    "setup_logging",
]
