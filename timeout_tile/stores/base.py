"""
Setting store interface.

A store holds the screen-off timeout outside the tile. Other programs can
change it at any time, so every call is a fresh round trip.
"""

from typing import Protocol

from ..permission import RemediationTarget


class SettingStore(Protocol):
    """The external, authoritative holder of the timeout (milliseconds)."""

    def get(self) -> int:
        """
        Read the current timeout.

        Raises:
            SettingNotFoundError: The setting was never written.
            SettingPermissionError: Reading is not allowed.
            SettingStoreError: Any other failure.
        """
        ...

    def set(self, value: int) -> None:
        """
        Write a new timeout.

        Raises:
            SettingPermissionError: Writing is not allowed.
            SettingStoreError: Any other failure.
        """
        ...

    def can_write(self) -> bool:
        """Probe whether set() is currently permitted."""
        ...

    def remediation(self) -> RemediationTarget:
        """Where to send the user to grant write permission."""
        ...
