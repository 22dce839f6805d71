"""Core configuration, logging and error types."""

from .config import Settings, get_global_settings
from .logging import setup_logging, get_logger

__all__ = ["Settings", "get_global_settings", "setup_logging", "get_logger"]
