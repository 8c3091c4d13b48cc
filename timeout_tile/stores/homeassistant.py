"""
Home Assistant setting store.

Drives a number entity such as the companion app's screen-off timeout or a
kiosk browser's screen-off timer.
"""

import logging

from ..candidates import NEVER_TIMEOUT
from ..errors import SettingNotFoundError, SettingStoreError
from ..ha.client import HAClient
from ..permission import BrowserRemediation

log = logging.getLogger("timeout_tile.stores.homeassistant")

UNIT_FACTORS = {"milliseconds": 1, "seconds": 1000}


class HomeAssistantSettingStore:
    """
    Keeps the timeout in a Home Assistant number entity.

    The entity's unit is configurable; an entity value of 0 means never.
    """

    def __init__(self, client: HAClient, entity_id: str, unit: str = "seconds"):
        if unit not in UNIT_FACTORS:
            raise ValueError(f"Unknown unit: {unit}")
        self.client = client
        self.entity_id = entity_id
        self.unit = unit

    @property
    def _factor(self) -> int:
        return UNIT_FACTORS[self.unit]

    def get(self) -> int:
        state = self.client.get_state(self.entity_id)
        raw = state.get("state")
        if raw in (None, "unknown", "unavailable"):
            raise SettingNotFoundError(self.entity_id, {"state": raw})

        try:
            value = int(float(raw))
        except (TypeError, ValueError, OverflowError):
            raise SettingStoreError(f"{self.entity_id} has non-numeric state {raw!r}") from None

        if value == 0:
            return NEVER_TIMEOUT
        return value * self._factor

    def set(self, value: int) -> None:
        entity_value = 0 if value == NEVER_TIMEOUT else value // self._factor
        self.client.set_value(self.entity_id, entity_value)
        log.debug("Set %s to %s %s", self.entity_id, entity_value, self.unit)

    def can_write(self) -> bool:
        return bool(self.client.token) and self.client.ping()

    def remediation(self) -> BrowserRemediation:
        return BrowserRemediation(f"{self.client.url}/profile/security")
