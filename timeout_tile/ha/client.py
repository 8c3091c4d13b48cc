"""
Home Assistant API client.
"""

from dataclasses import dataclass
from typing import Any

import requests

from ..errors import SettingNotFoundError, SettingPermissionError, SettingStoreError, SettingWriteError


@dataclass
class HAClient:
    """Client for reading and setting entity state through the Home Assistant API."""
    url: str
    token: str
    timeout: float = 5.0

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def ping(self) -> bool:
        """Check that the API is reachable and the token is accepted."""
        try:
            response = requests.get(f"{self.url}/api/", headers=self.headers, timeout=self.timeout)
            return response.ok
        except requests.RequestException:
            return False

    def get_state(self, entity_id: str) -> dict[str, Any]:
        """
        Fetch the state object of an entity.

        Raises:
            SettingNotFoundError: The entity does not exist.
            SettingPermissionError: The token was rejected.
            SettingStoreError: Any other failure.
        """
        url = f"{self.url}/api/states/{entity_id}"
        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise SettingStoreError(f"Cannot reach Home Assistant: {e}", {"url": url}) from e

        if response.status_code == 404:
            raise SettingNotFoundError(entity_id)
        if response.status_code in (401, 403):
            raise SettingPermissionError(f"Home Assistant rejected token ({response.status_code})",
                                         {"entity_id": entity_id})
        if not response.ok:
            raise SettingStoreError(f"Home Assistant returned {response.status_code}",
                                    {"entity_id": entity_id})
        try:
            payload = response.json()
        except ValueError as e:
            raise SettingStoreError(f"Invalid response for {entity_id}", {"entity_id": entity_id}) from e
        if not isinstance(payload, dict):
            raise SettingStoreError(f"Unexpected state payload for {entity_id}", {"entity_id": entity_id})
        return payload

    def call_service(self, service: str, data: dict) -> None:
        """
        Call a Home Assistant service.

        Args:
            service: Service name (e.g., "number/set_value")
            data: Service data (e.g., {"entity_id": "number.tablet_screen_off_timeout", "value": 60})

        Raises:
            SettingPermissionError: The token was rejected.
            SettingWriteError: Any other failure.
        """
        url = f"{self.url}/api/services/{service}"
        try:
            response = requests.post(url, headers=self.headers, json=data, timeout=self.timeout)
        except requests.RequestException as e:
            raise SettingWriteError(f"Cannot reach Home Assistant: {e}", context={"service": service}) from e

        if response.status_code in (401, 403):
            raise SettingPermissionError(f"Home Assistant rejected token ({response.status_code})",
                                         {"service": service})
        if not response.ok:
            raise SettingWriteError(f"{service} returned {response.status_code}", context={"service": service})

    def set_value(self, entity_id: str, value: int | float) -> None:
        """Set a number or input_number entity."""
        domain = entity_id.split(".", 1)[0]
        self.call_service(f"{domain}/set_value", {"entity_id": entity_id, "value": value})
