"""Logging utilities for the podcast feed ingestion project."""

from .logging_decorator import setup_logging, log_function
from .progress import setup_progress_logging, log_progress, format_progress

__all__ = [
    "setup_logging",
    "log_function",
    "setup_progress_logging",
    "log_progress",
    "format_progress",
]
