"""Configuration module."""

from src.config.logging import bind_context, clear_context, configure_logging, get_logger
from src.config.settings import (
    InventorySettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "InventorySettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "bind_context",
    "clear_context",
    "get_logger",
]
