from __future__ import annotations

import pytest

from timeout_tile.candidates import CandidateList
from timeout_tile.display import TileState
from timeout_tile.errors import RemediationLaunchError, SettingNotFoundError
from timeout_tile.permission import PermissionGate
from timeout_tile.tile import TimeoutTile


class MemoryStore:
    """In-memory SettingStore that another "process" can poke at."""

    def __init__(self, value: int | None = 30_000, writable: bool = True) -> None:
        self.value = value
        self.writable = writable
        self.get_error: Exception | None = None
        self.set_error: Exception | None = None
        self.writes: list[int] = []
        self.probes = 0

    def get(self) -> int:
        if self.get_error is not None:
            raise self.get_error
        if self.value is None:
            raise SettingNotFoundError("screen_off_timeout")
        return self.value

    def set(self, value: int) -> None:
        if self.set_error is not None:
            raise self.set_error
        self.writes.append(value)
        self.value = value

    def can_write(self) -> bool:
        self.probes += 1
        return self.writable

    def remediation(self) -> "RecordingRemediation":
        return RecordingRemediation()


class RecordingRemediation:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.launched: list[str] = []

    def launch(self, identity: str) -> None:
        if self.fail:
            raise RemediationLaunchError("no activity host", target="settings")
        self.launched.append(identity)


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, text: str, long: bool = False) -> None:
        self.messages.append(text)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def remediation() -> RecordingRemediation:
    return RecordingRemediation()


@pytest.fixture
def rendered() -> list[TileState]:
    return []


@pytest.fixture
def tile(store, notifier, remediation, rendered) -> TimeoutTile:
    gate = PermissionGate(
        probe=store.can_write,
        remediation=remediation,
        notifier=notifier,
        identity="timeout-tile",
    )
    return TimeoutTile(
        store=store,
        gate=gate,
        notifier=notifier,
        candidates=CandidateList(),
        display=rendered.append,
    )
