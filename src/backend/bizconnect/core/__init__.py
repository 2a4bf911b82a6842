"""
Core module containing configuration, settings, and foundational utilities.
"""

from bizconnect.core.config import get_settings, Settings
from bizconnect.core.logging import get_logger, setup_logging

__all__ = ["get_settings", "Settings", "get_logger", "setup_logging"]
