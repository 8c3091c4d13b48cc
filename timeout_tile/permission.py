"""
Permission gate.

Wraps the store's write-permission probe and the action that sends the
user to the place where the permission can be granted.
"""

import logging
import subprocess
import webbrowser
from dataclasses import dataclass
from typing import Callable, Protocol

from .errors import RemediationLaunchError
from .notify import Notifier
from .strings import DEFAULT_STRINGS, Strings

log = logging.getLogger("timeout_tile.permission")


class RemediationTarget(Protocol):
    """A permission-grant surface that can be opened for an application."""

    def launch(self, identity: str) -> None:
        """Start opening the surface. Raises RemediationLaunchError."""
        ...


@dataclass
class CommandRemediation:
    """
    Opens the surface by spawning a command.

    `{app_id}` in any argument is replaced with the application identity.
    The process is not waited on.
    """
    command: list[str]

    def launch(self, identity: str) -> None:
        argv = [arg.replace("{app_id}", identity) for arg in self.command]
        try:
            subprocess.Popen(
                argv,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            raise RemediationLaunchError(str(e), target=" ".join(argv)) from e

    def __str__(self) -> str:
        return " ".join(self.command)


@dataclass
class BrowserRemediation:
    """Opens the surface as a web page. `{app_id}` is substituted in the URL."""
    url: str

    def launch(self, identity: str) -> None:
        url = self.url.replace("{app_id}", identity)
        try:
            opened = webbrowser.open(url, new=2)
        except webbrowser.Error as e:
            raise RemediationLaunchError(str(e), target=url) from e
        if not opened:
            raise RemediationLaunchError("no browser available", target=url)

    def __str__(self) -> str:
        return self.url


class PermissionGate:
    """
    Decides whether the tile may change the setting.

    The probe is never cached: permission can be granted or revoked at any
    time outside the tile's control.
    """

    def __init__(
        self,
        probe: Callable[[], bool],
        remediation: RemediationTarget,
        notifier: Notifier,
        identity: str,
        strings: Strings = DEFAULT_STRINGS,
    ):
        self._probe = probe
        self.remediation = remediation
        self.notifier = notifier
        self.identity = identity
        self.strings = strings

    def probe(self) -> bool:
        """Check write permission right now. A failing probe counts as denied."""
        try:
            allowed = bool(self._probe())
        except Exception as e:
            log.warning("Permission probe failed, treating as denied: %s", e)
            return False
        log.debug("Permission probe -> %s", allowed)
        return allowed

    def request_remediation(self) -> bool:
        """
        Prompt the user and open the permission-grant surface.

        Fire-and-forget. A launch failure is logged and shown to the user
        instead of being raised.

        Returns:
            True if the surface was launched, False otherwise.
        """
        self.notifier.notify(self.strings.grant_write_settings_prompt, long=True)
        try:
            self.remediation.launch(self.identity)
        except RemediationLaunchError as e:
            log.error("Failed to open permission settings [%s]: %s", e.error_code, e.message,
                      extra={"context": e.context})
            self.notifier.notify(self.strings.error_opening_settings, long=True)
            return False

        log.info("Opened permission settings for %s via %s", self.identity, self.remediation)
        return True
