"""
GNOME gsettings setting store.

GNOME keeps the idle delay in seconds, with 0 meaning never. Values are
converted to and from milliseconds at this boundary.
"""

import logging
import subprocess

from ..candidates import NEVER_TIMEOUT
from ..errors import SettingNotFoundError, SettingPermissionError, SettingStoreError, SettingWriteError
from ..permission import CommandRemediation

log = logging.getLogger("timeout_tile.stores.gsettings")


def parse_gvariant_int(text: str) -> int:
    """Parse gsettings integer output such as "uint32 300" or "300"."""
    token = text.strip().split()[-1] if text.strip() else ""
    try:
        return int(token)
    except ValueError:
        raise SettingStoreError(f"Unexpected gsettings output: {text.strip()!r}") from None


class GSettingsStore:
    """Reads and writes the timeout through the `gsettings` command."""

    def __init__(
        self,
        schema: str = "org.gnome.desktop.session",
        key: str = "idle-delay",
        timeout: float = 5.0,
    ):
        self.schema = schema
        self.key = key
        self.timeout = timeout

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        command = ["gsettings", *args]
        try:
            return subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SettingStoreError(f"gsettings timed out after {self.timeout}s",
                                    {"command": " ".join(command)}) from e
        except OSError as e:
            raise SettingStoreError(f"Cannot run gsettings: {e}", {"command": " ".join(command)}) from e

    def _context(self) -> dict[str, str]:
        return {"schema": self.schema, "key": self.key}

    def get(self) -> int:
        result = self._run("get", self.schema, self.key)
        if result.returncode != 0:
            stderr = result.stderr.strip()
            if "No such schema" in stderr or "No such key" in stderr:
                raise SettingNotFoundError(f"{self.schema} {self.key}")
            raise SettingStoreError(f"gsettings get failed: {stderr}", self._context())

        seconds = parse_gvariant_int(result.stdout)
        if seconds == 0:
            return NEVER_TIMEOUT
        return seconds * 1000

    def set(self, value: int) -> None:
        seconds = 0 if value == NEVER_TIMEOUT else value // 1000
        try:
            result = self._run("set", self.schema, self.key, str(seconds))
        except SettingStoreError as e:
            raise SettingWriteError(e.message, value, self._context()) from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            if "not writable" in stderr:
                raise SettingPermissionError(stderr, self._context())
            raise SettingWriteError(stderr or f"exit status {result.returncode}", value, self._context())
        log.debug("Set %s %s to %ss", self.schema, self.key, seconds)

    def can_write(self) -> bool:
        try:
            result = self._run("writable", self.schema, self.key)
        except SettingStoreError as e:
            log.warning("Cannot probe gsettings: %s", e.message)
            return False
        return result.returncode == 0 and result.stdout.strip() == "true"

    def remediation(self) -> CommandRemediation:
        return CommandRemediation(["gnome-control-center", "power"])
