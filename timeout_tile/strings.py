"""
Text resources shown by the tile and its notices.
"""

from dataclasses import dataclass, fields, replace
from typing import Any


@dataclass(frozen=True)
class Strings:
    """User-visible text. Templates take a single `{n}` or `{value}` field."""
    tile_label: str = "Screen Timeout"
    permission_needed: str = "Permission needed"
    timeout_never: str = "Never"
    unit_second: str = "{n} second"
    unit_seconds: str = "{n} seconds"
    unit_minute: str = "{n} minute"
    unit_minutes: str = "{n} minutes"
    timeout_set_to: str = "Timeout set to {value}"
    error_setting_timeout: str = "Could not change screen timeout"
    grant_write_settings_prompt: str = "Allow Screen Timeout to modify system settings"
    error_opening_settings: str = "Could not open the permission settings"

    def seconds(self, n: int) -> str:
        template = self.unit_second if n == 1 else self.unit_seconds
        return template.format(n=n)

    def minutes(self, n: int) -> str:
        template = self.unit_minute if n == 1 else self.unit_minutes
        return template.format(n=n)


DEFAULT_STRINGS = Strings()


def strings_from_dict(data: dict[str, Any] | None) -> Strings:
    """Build Strings from config overrides, ignoring unknown keys."""
    if not data:
        return DEFAULT_STRINGS
    known = {f.name for f in fields(Strings)}
    overrides = {k: str(v) for k, v in data.items() if k in known}
    return replace(DEFAULT_STRINGS, **overrides)
