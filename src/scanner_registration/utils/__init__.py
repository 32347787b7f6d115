"""
Utility Functions Module

This module provides common utility functions used across the project.
- Logging setup
- Typed YAML configuration
- Export of registration results
"""

from .logging import setup_logger
from .config import AppConfig, load_config
from .export import export_global_map, global_map_to_dict

__all__ = [
    "setup_logger",
    "AppConfig",
    "load_config",
    "export_global_map",
    "global_map_to_dict",
]
