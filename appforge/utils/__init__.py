"""Utility functions for appforge."""

from appforge.utils.debug import save_debug_data, save_run_debug
from appforge.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "save_debug_data",
    "save_run_debug",
]
