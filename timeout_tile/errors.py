"""
Error types for the timeout tile.

Every failure the tile can recover from is a TileError subclass carrying
an error code and a context dict for logging.
"""

from typing import Any


class TileError(Exception):
    """Base error with an error code and logging context."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        super().__init__(self.message)


class SettingStoreError(TileError):
    """Unexpected setting store failure."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "STORE_FAILED", context)


class SettingNotFoundError(SettingStoreError):
    """The setting has never been written."""

    def __init__(self, key: str, context: dict[str, Any] | None = None):
        ctx = {"key": key, **(context or {})}
        TileError.__init__(self, f"Setting '{key}' not found", "SETTING_NOT_FOUND", ctx)


class SettingPermissionError(SettingStoreError):
    """The store refused access to the setting."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        TileError.__init__(self, f"Permission denied: {message}", "PERMISSION_DENIED", context)


class SettingWriteError(SettingStoreError):
    """A write failed for a reason other than permission."""

    def __init__(self, message: str, value: int | None = None, context: dict[str, Any] | None = None):
        ctx = {"value": value, **(context or {})} if value is not None else (context or {})
        TileError.__init__(self, f"Write failed: {message}", "WRITE_FAILED", ctx)


class RemediationLaunchError(TileError):
    """The permission-grant surface could not be opened."""

    def __init__(self, message: str, target: str | None = None, context: dict[str, Any] | None = None):
        ctx = {"target": target, **(context or {})} if target else (context or {})
        super().__init__(f"Could not open settings: {message}", "REMEDIATION_FAILED", ctx)


class ConfigError(TileError):
    """Configuration file is invalid."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "CONFIG_INVALID", context)
