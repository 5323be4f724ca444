"""
Utility helpers - logging and hosting-environment detection.
"""

from .environment import EnvironmentInfo, Platform, find_project_root
from .logging import configure_logging, get_logger

__all__ = [
    "EnvironmentInfo",
    "Platform",
    "find_project_root",
    "configure_logging",
    "get_logger",
]
