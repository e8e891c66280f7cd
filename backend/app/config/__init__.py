"""Config package exporting loader helpers."""

from .loader import LoggingConfig, Settings, StoreConfig, load_settings

__all__ = ["Settings", "StoreConfig", "LoggingConfig", "load_settings"]
