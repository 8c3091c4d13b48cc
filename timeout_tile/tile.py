"""
The screen timeout tile.

Each activation advances the stored timeout to the next candidate. The tile
never keeps its own copy of the setting: every refresh probes permission and
reads the store again, so a value changed by another program shows up on
the next refresh.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .candidates import DEFAULT_TIMEOUT_MS, CandidateList
from .config import Config
from .cycle import format_timeout, next_value
from .display import Display, TileIcon, TileState, print_tile
from .errors import SettingNotFoundError, SettingStoreError
from .notify import Notifier
from .permission import PermissionGate
from .stores.base import SettingStore
from .strings import DEFAULT_STRINGS, Strings

log = logging.getLogger("timeout_tile.tile")


class Outcome(Enum):
    """How an activation ended."""
    CHANGED = "changed"
    PERMISSION_DENIED = "permission_denied"
    WRITE_FAILED = "write_failed"


@dataclass(frozen=True)
class ActivationResult:
    """Result of one activation."""
    outcome: Outcome
    previous: int | None = None
    value: int | None = None

    @property
    def changed(self) -> bool:
        return self.outcome is Outcome.CHANGED


class TimeoutTile:
    """
    Cycles the screen-off timeout through a fixed candidate list.

    The host calls refresh() whenever the tile becomes visible and
    activate() on each click. Neither raises: every failure ends in a
    rendered state and, where the user needs to know, a notice.
    """

    def __init__(
        self,
        store: SettingStore,
        gate: PermissionGate,
        notifier: Notifier,
        candidates: CandidateList | None = None,
        strings: Strings = DEFAULT_STRINGS,
        display: Display = print_tile,
    ):
        self.store = store
        self.gate = gate
        self.notifier = notifier
        self.candidates = candidates or CandidateList()
        self.strings = strings
        self.display = display

    # --- Host lifecycle ---

    def on_tile_added(self) -> TileState:
        log.debug("Tile added by user")
        return self.refresh()

    def on_start_listening(self) -> TileState:
        log.debug("Starting to listen")
        return self.refresh()

    def on_stop_listening(self) -> None:
        log.debug("Stopping listening")

    def on_tile_removed(self) -> None:
        log.debug("Tile removed by user")

    # --- Core ---

    def read_current(self) -> int:
        """
        Read the stored timeout.

        A setting that was never written reads as DEFAULT_TIMEOUT_MS, the
        same default the platform assumes. Other read failures fall back to
        the same default so the tile always has something to show.
        """
        try:
            return self.store.get()
        except SettingNotFoundError:
            log.warning("Screen timeout setting not found, using default (%d ms)", DEFAULT_TIMEOUT_MS)
        except SettingStoreError as e:
            log.warning("Cannot read screen timeout [%s]: %s; using default (%d ms)",
                        e.error_code, e.message, DEFAULT_TIMEOUT_MS)
        except Exception:
            log.exception("Unexpected error reading screen timeout, using default (%d ms)", DEFAULT_TIMEOUT_MS)
        return DEFAULT_TIMEOUT_MS

    def refresh(self) -> TileState:
        """Rebuild the tile state from a fresh probe and read, and push it to the display."""
        if not self.gate.probe():
            state = TileState(
                label=self.strings.tile_label,
                subtitle=self.strings.permission_needed,
                active=False,
                icon=TileIcon.TIMEOUT_OFF,
            )
        else:
            current = self.read_current()
            subtitle = format_timeout(current, self.strings)
            log.debug("Updating tile. Current timeout: %d ms (%s)", current, subtitle)
            state = TileState(
                label=self.strings.tile_label,
                subtitle=subtitle,
                active=True,
                icon=TileIcon.TIMEOUT_ON,
            )

        try:
            self.display(state)
        except Exception:
            log.exception("Display callback failed")
        return state

    def activate(self) -> ActivationResult:
        """Handle a click: advance the timeout, or ask for permission."""
        log.debug("Tile clicked")

        if not self.gate.probe():
            log.info("No permission to change screen timeout, requesting it")
            self.gate.request_remediation()
            self.refresh()
            return ActivationResult(Outcome.PERMISSION_DENIED)

        result = self._change_timeout()
        self.refresh()
        return result

    def _change_timeout(self) -> ActivationResult:
        current = self.read_current()
        target = next_value(current, self.candidates)
        log.info("Changing timeout from %d ms to %d ms", current, target)

        try:
            self.store.set(target)
        except SettingStoreError as e:
            log.error("Failed to write screen timeout setting [%s]: %s", e.error_code, e.message,
                      extra={"context": e.context})
            self.notifier.notify(self.strings.error_setting_timeout, long=True)
            return ActivationResult(Outcome.WRITE_FAILED, previous=current, value=target)
        except Exception:
            log.exception("Unexpected error writing screen timeout setting")
            self.notifier.notify(self.strings.error_setting_timeout, long=True)
            return ActivationResult(Outcome.WRITE_FAILED, previous=current, value=target)

        message = self.strings.timeout_set_to.format(value=format_timeout(target, self.strings))
        self.notifier.notify(message)
        return ActivationResult(Outcome.CHANGED, previous=current, value=target)


def create_tile(
    config: Config,
    store: SettingStore,
    notifier: Notifier,
    display: Display = print_tile,
) -> TimeoutTile:
    """Wire a tile from a Config and its collaborators."""
    gate = PermissionGate(
        probe=store.can_write,
        remediation=store.remediation(),
        notifier=notifier,
        identity=config.app_id,
        strings=config.strings,
    )
    return TimeoutTile(
        store=store,
        gate=gate,
        notifier=notifier,
        candidates=config.candidates,
        strings=config.strings,
        display=display,
    )
