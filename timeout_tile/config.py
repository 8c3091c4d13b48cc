"""
Configuration loading and validation.

Handles YAML config parsing with environment variable expansion.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .candidates import DEFAULT_CANDIDATES, CandidateList
from .errors import ConfigError
from .strings import DEFAULT_STRINGS, Strings, strings_from_dict

DEFAULT_CONFIG_PATH = Path("config.yaml")
DEFAULT_STORE_PATH = "~/.config/timeout-tile/settings.yaml"

BACKENDS = ("file", "gsettings", "home_assistant")
NOTIFIERS = ("console", "desktop")
TRIGGER_TYPES = ("control_change", "note_on")


@dataclass
class StoreConfig:
    """Which setting store to use and how to reach it."""
    backend: str = "file"
    # file
    path: str = DEFAULT_STORE_PATH
    key: str = "screen_off_timeout"
    # gsettings
    schema: str = "org.gnome.desktop.session"
    gsettings_key: str = "idle-delay"
    # home_assistant
    url: str = ""
    token: str = ""
    entity_id: str = ""
    unit: str = "seconds"


@dataclass
class TriggerConfig:
    """MIDI message that activates the tile."""
    port: str
    type: str = "control_change"
    channel: int | None = None
    control: int | None = None  # For CC
    note: int | None = None  # For Note On
    value_min: int = 1  # Ignore pedal/button release (value 0)


@dataclass
class Config:
    """Root configuration object."""
    app_id: str = "timeout-tile"
    log_level: str = "INFO"
    candidates: CandidateList = field(default_factory=CandidateList)
    store: StoreConfig = field(default_factory=StoreConfig)
    notifications: str = "console"
    strings: Strings = DEFAULT_STRINGS
    trigger: TriggerConfig | None = None


def expand_env_vars(value: str) -> str:
    """Expand environment variables in a string.

    Supports ${VAR} syntax.
    """
    pattern = re.compile(r'\$\{([^}]+)\}')

    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        return os.environ.get(var_name, "")

    return pattern.sub(replacer, value)


def expand_env_vars_recursive(obj: Any) -> Any:
    """Recursively expand environment variables in a data structure."""
    if isinstance(obj, str):
        return expand_env_vars(obj)
    elif isinstance(obj, dict):
        return {k: expand_env_vars_recursive(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [expand_env_vars_recursive(item) for item in obj]
    return obj


def parse_store_config(data: dict[str, Any]) -> StoreConfig:
    """Parse the store section."""
    store = StoreConfig(
        backend=data.get("backend", "file"),
        path=data.get("path", DEFAULT_STORE_PATH),
        key=data.get("key", "screen_off_timeout"),
        schema=data.get("schema", "org.gnome.desktop.session"),
        gsettings_key=data.get("gsettings_key", "idle-delay"),
        url=str(data.get("url", "")).rstrip("/"),
        token=data.get("token", ""),
        entity_id=data.get("entity_id", ""),
        unit=data.get("unit", "seconds"),
    )

    if store.backend not in BACKENDS:
        raise ConfigError(f"Unknown store backend: {store.backend}", {"backends": list(BACKENDS)})
    if store.backend == "home_assistant" and not (store.url and store.entity_id):
        raise ConfigError("home_assistant store needs url and entity_id")
    if store.unit not in ("seconds", "milliseconds"):
        raise ConfigError(f"Unknown unit: {store.unit}")
    return store


def parse_trigger_config(data: dict[str, Any]) -> TriggerConfig:
    """Parse the MIDI trigger section."""
    if "port" not in data:
        raise ConfigError("trigger needs a port")

    trigger = TriggerConfig(
        port=data["port"],
        type=data.get("type", "control_change"),
        channel=data.get("channel"),
        control=data.get("control"),
        note=data.get("note"),
        value_min=data.get("value_min", 1),
    )
    if trigger.type not in TRIGGER_TYPES:
        raise ConfigError(f"Unknown trigger type: {trigger.type}", {"types": list(TRIGGER_TYPES)})
    return trigger


def parse_config(raw: dict[str, Any] | None) -> Config:
    """Build a Config from already-loaded YAML data."""
    raw = expand_env_vars_recursive(raw or {})
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")

    candidates = raw.get("candidates", list(DEFAULT_CANDIDATES))
    if not isinstance(candidates, list):
        raise ConfigError("candidates must be a list of milliseconds")

    notifications = raw.get("notifications", "console")
    if notifications not in NOTIFIERS:
        raise ConfigError(f"Unknown notifications kind: {notifications}")

    store = raw.get("store") or {}
    strings = raw.get("strings") or {}
    trigger_data = raw.get("trigger") or {}
    for name, section in (("store", store), ("strings", strings), ("trigger", trigger_data)):
        if not isinstance(section, dict):
            raise ConfigError(f"{name} must be a mapping", {"section": name})

    trigger = None
    if trigger_data:
        trigger = parse_trigger_config(trigger_data)

    return Config(
        app_id=raw.get("app_id", "timeout-tile"),
        log_level=str(raw.get("log_level", "INFO")).upper(),
        candidates=CandidateList.of(candidates),
        store=parse_store_config(store),
        notifications=notifications,
        strings=strings_from_dict(strings),
        trigger=trigger,
    )


def load_config(path: Path) -> Config:
    """Load configuration from a YAML file. A missing file gives the defaults."""
    if not path.exists():
        return parse_config({})

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    return parse_config(raw)
