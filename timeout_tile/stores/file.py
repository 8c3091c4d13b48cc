"""
YAML file setting store.
"""

import logging
import os
from pathlib import Path

import yaml

from ..errors import SettingNotFoundError, SettingPermissionError, SettingStoreError, SettingWriteError
from ..permission import CommandRemediation

log = logging.getLogger("timeout_tile.stores.file")


class FileSettingStore:
    """
    Keeps the timeout in a YAML mapping on disk.

    Other keys in the file are preserved on write. Write permission is the
    file's (or, before the first write, its directory's) access mode.
    """

    def __init__(self, path: Path, key: str = "screen_off_timeout"):
        self.path = Path(path).expanduser()
        self.key = key

    def _load(self) -> dict:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise SettingNotFoundError(self.key, {"path": str(self.path)}) from e
        except PermissionError as e:
            raise SettingPermissionError(f"cannot read {self.path}", {"path": str(self.path)}) from e
        except (OSError, yaml.YAMLError) as e:
            raise SettingStoreError(f"Cannot read {self.path}: {e}", {"path": str(self.path)}) from e

        if not isinstance(data, dict):
            raise SettingStoreError(f"{self.path} does not contain a mapping", {"path": str(self.path)})
        return data

    def get(self) -> int:
        data = self._load()
        if self.key not in data:
            raise SettingNotFoundError(self.key, {"path": str(self.path)})

        value = data[self.key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise SettingStoreError(f"{self.key} is not an integer: {value!r}", {"path": str(self.path)})
        return value

    def set(self, value: int) -> None:
        try:
            data = self._load()
        except SettingNotFoundError:
            data = {}
        except SettingPermissionError:
            raise
        except SettingStoreError as e:
            raise SettingWriteError(e.message, value, {"path": str(self.path)}) from e

        data[self.key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except PermissionError as e:
            raise SettingPermissionError(f"cannot write {self.path}", {"path": str(self.path)}) from e
        except OSError as e:
            raise SettingWriteError(str(e), value, {"path": str(self.path)}) from e
        log.debug("Wrote %s=%s to %s", self.key, value, self.path)

    def can_write(self) -> bool:
        if self.path.exists():
            return os.access(self.path, os.W_OK)

        # First write creates the file; the nearest existing ancestor decides
        parent = self.path.parent
        while not parent.exists() and parent != parent.parent:
            parent = parent.parent
        return os.access(parent, os.W_OK)

    def remediation(self) -> CommandRemediation:
        return CommandRemediation(["xdg-open", str(self.path.parent)])
