"""
Utilities package initialization.
"""
from .logger import get_logger, log_business_event, log_performance, setup_logging
from .money import to_decimal, to_float, format_idr
from .time import utc_now

__all__ = [
    "get_logger",
    "log_business_event",
    "log_performance",
    "setup_logging",
    "to_decimal",
    "to_float",
    "format_idr",
    "utc_now",
]
