from __future__ import annotations

from timeout_tile.candidates import DEFAULT_TIMEOUT_MS
from timeout_tile.display import TileIcon
from timeout_tile.errors import SettingPermissionError, SettingStoreError, SettingWriteError
from timeout_tile.permission import PermissionGate
from timeout_tile.tile import Outcome


def test_activate_advances_and_confirms(tile, store, notifier, rendered) -> None:
    store.value = 30_000

    result = tile.activate()

    assert result.outcome is Outcome.CHANGED
    assert (result.previous, result.value) == (30_000, 60_000)
    assert store.writes == [60_000]
    assert notifier.messages == ["Timeout set to 1 minute"]
    assert rendered[-1].subtitle == "1 minute"
    assert rendered[-1].active is True
    assert tile.refresh().subtitle == "1 minute"


def test_activate_without_permission_remediates_and_does_not_write(
    tile, store, notifier, remediation, rendered
) -> None:
    store.writable = False

    result = tile.activate()

    assert result.outcome is Outcome.PERMISSION_DENIED
    assert store.writes == []
    assert remediation.launched == ["timeout-tile"]
    assert notifier.messages == ["Allow Screen Timeout to modify system settings"]
    assert rendered[-1].subtitle == "Permission needed"
    assert rendered[-1].active is False
    assert rendered[-1].icon is TileIcon.TIMEOUT_OFF


def test_remediation_launch_failure_is_reported(tile, store, notifier, remediation) -> None:
    store.writable = False
    remediation.fail = True

    result = tile.activate()

    assert result.outcome is Outcome.PERMISSION_DENIED
    assert notifier.messages[-1] == "Could not open the permission settings"


def test_missing_setting_reads_as_default(tile, store) -> None:
    store.value = None

    assert tile.read_current() == DEFAULT_TIMEOUT_MS == 30_000
    assert tile.refresh().subtitle == "30 seconds"


def test_read_failure_degrades_to_default(tile, store) -> None:
    store.get_error = SettingStoreError("disk on fire")

    state = tile.refresh()

    assert state.subtitle == "30 seconds"
    assert state.active is True


def test_unexpected_read_error_degrades_to_default(tile, store) -> None:
    store.get_error = RuntimeError("malformed response")

    assert tile.refresh().subtitle == "30 seconds"

    store.get_error = OverflowError("cannot convert float infinity to integer")
    result = tile.activate()

    assert result.changed
    assert store.writes == [60_000]


def test_missing_setting_cycles_from_default(tile, store) -> None:
    store.value = None

    result = tile.activate()

    assert result.value == 60_000


def test_unknown_value_cycles_to_first_candidate(tile, store) -> None:
    store.value = 45_000

    result = tile.activate()

    assert result.value == 15_000
    assert store.value == 15_000


def test_last_candidate_wraps_around(tile, store) -> None:
    store.value = 1_800_000

    tile.activate()

    assert store.value == 15_000


def test_write_failure_is_reported_and_tile_keeps_working(tile, store, notifier, rendered) -> None:
    store.set_error = SettingWriteError("device busy", 60_000)

    result = tile.activate()

    assert result.outcome is Outcome.WRITE_FAILED
    assert store.value == 30_000
    assert notifier.messages == ["Could not change screen timeout"]
    assert rendered[-1].subtitle == "30 seconds"

    store.set_error = None
    assert tile.activate().changed
    assert store.value == 60_000


def test_write_permission_failure_does_not_escape(tile, store, notifier) -> None:
    store.set_error = SettingPermissionError("revoked mid-click")

    result = tile.activate()

    assert result.outcome is Outcome.WRITE_FAILED
    assert notifier.messages == ["Could not change screen timeout"]


def test_unexpected_write_error_does_not_escape(tile, store, notifier) -> None:
    store.set_error = RuntimeError("boom")

    result = tile.activate()

    assert result.outcome is Outcome.WRITE_FAILED
    assert notifier.messages == ["Could not change screen timeout"]


def test_refresh_is_idempotent(tile) -> None:
    assert tile.refresh() == tile.refresh()


def test_refresh_sees_external_changes(tile, store) -> None:
    assert tile.refresh().subtitle == "30 seconds"

    store.value = 300_000
    assert tile.refresh().subtitle == "5 minutes"

    store.writable = False
    assert tile.refresh().subtitle == "Permission needed"

    store.writable = True
    assert tile.refresh().subtitle == "5 minutes"


def test_probe_is_not_cached(tile, store) -> None:
    tile.refresh()
    tile.refresh()
    tile.activate()

    # activate probes once and then refreshes
    assert store.probes == 4


def test_failing_probe_counts_as_denied(tile, notifier, remediation) -> None:
    def broken_probe() -> bool:
        raise OSError("no settings service")

    tile.gate = PermissionGate(broken_probe, remediation, notifier, identity="timeout-tile")

    state = tile.refresh()

    assert state.active is False
    assert state.subtitle == "Permission needed"


def test_display_failure_does_not_escape(tile) -> None:
    def broken_display(state) -> None:
        raise RuntimeError("host gone")

    tile.display = broken_display

    assert tile.refresh().active is True


def test_lifecycle_hooks_refresh(tile, rendered) -> None:
    tile.on_tile_added()
    tile.on_start_listening()
    tile.on_stop_listening()
    tile.on_tile_removed()

    assert len(rendered) == 2
    assert rendered[0].label == "Screen Timeout"
