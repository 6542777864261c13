"""
Utility modules for configuration, logging and metrics
"""

from .config import load_config, save_config, get_default_config
from .logger import setup_logger
from .metrics import MetricsCalculator

__all__ = ["load_config", "save_config", "get_default_config", "setup_logger", "MetricsCalculator"]
