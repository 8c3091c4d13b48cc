"""
User notices (the tile's toasts).
"""

import logging
import shutil
import subprocess
from typing import Protocol

log = logging.getLogger("timeout_tile.notify")


class Notifier(Protocol):
    """Shows a short transient message to the user."""

    def notify(self, text: str, long: bool = False) -> None:
        ...


class ConsoleNotifier:
    """Prints notices to stdout."""

    def notify(self, text: str, long: bool = False) -> None:
        print(f"  -> {text}")


class DesktopNotifier:
    """
    Sends desktop notifications through notify-send.

    Falls back to the console when notify-send is missing or fails.
    """

    def __init__(self, app_name: str = "Screen Timeout", fallback: Notifier | None = None):
        self.app_name = app_name
        self.fallback = fallback or ConsoleNotifier()

    def notify(self, text: str, long: bool = False) -> None:
        if shutil.which("notify-send") is None:
            self.fallback.notify(text, long)
            return

        expire_ms = "3500" if long else "2000"
        try:
            subprocess.run(
                ["notify-send", "-a", self.app_name, "-t", expire_ms, self.app_name, text],
                capture_output=True,
                timeout=5,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            log.warning("notify-send failed, using console: %s", e)
            self.fallback.notify(text, long)


def create_notifier(kind: str, app_name: str) -> Notifier:
    """Create the notifier named in the config ("console" or "desktop")."""
    if kind == "desktop":
        return DesktopNotifier(app_name=app_name)
    return ConsoleNotifier()
