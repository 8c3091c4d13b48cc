"""
Setting store backends.
"""

from pathlib import Path

from ..config import StoreConfig
from ..ha.client import HAClient
from .base import SettingStore
from .file import FileSettingStore
from .gsettings import GSettingsStore
from .homeassistant import HomeAssistantSettingStore

__all__ = [
    "FileSettingStore",
    "GSettingsStore",
    "HomeAssistantSettingStore",
    "SettingStore",
    "create_store",
]


def create_store(config: StoreConfig) -> SettingStore:
    """Create the store selected by the config."""
    if config.backend == "gsettings":
        return GSettingsStore(schema=config.schema, key=config.gsettings_key)
    if config.backend == "home_assistant":
        client = HAClient(url=config.url, token=config.token)
        return HomeAssistantSettingStore(client, config.entity_id, unit=config.unit)
    return FileSettingStore(Path(config.path), key=config.key)
