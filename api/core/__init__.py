"""Core utilities for the MasterClass Certificates API.

This module exports commonly used utilities for easy importing:
    from core import get_logger
"""

from core.logger import configure_logging, get_logger
from core.telemetry import annotate_request

__all__ = [
    "annotate_request",
    "configure_logging",
    "get_logger",
]
