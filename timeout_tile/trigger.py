"""
MIDI trigger for the tile.

Listens on a MIDI input port and activates the tile whenever the configured
control or note arrives. Messages are handled one at a time, in order.
"""

import asyncio
import logging
from typing import Callable

import mido

from .config import TriggerConfig

log = logging.getLogger("timeout_tile.trigger")


def list_midi_ports() -> list[str]:
    """List all available MIDI input ports."""
    return mido.get_input_names()


def find_trigger_port(match: str, ports: list[str] | None = None) -> str | None:
    """
    Find the first input port whose name contains `match`.

    "*" matches any port.
    """
    for port_name in ports if ports is not None else list_midi_ports():
        if match == "*" or match in port_name:
            return port_name
    return None


def matches_trigger(trigger: TriggerConfig, msg) -> bool:
    """
    Check if a mido message is the configured trigger.

    Args:
        trigger: The trigger to check against.
        msg: A mido Message.

    Returns:
        True if the message should activate the tile.
    """
    if msg.type != trigger.type:
        return False

    # Check channel (None means match any)
    if trigger.channel is not None and msg.channel != trigger.channel:
        return False

    if msg.type == "control_change":
        if trigger.control is not None and msg.control != trigger.control:
            return False
        return msg.value >= trigger.value_min

    # note_on with velocity 0 is a note off
    if trigger.note is not None and msg.note != trigger.note:
        return False
    return msg.velocity >= max(trigger.value_min, 1)


async def listen(trigger: TriggerConfig, on_trigger: Callable[[], object]) -> None:
    """
    Call on_trigger for every matching message until cancelled.

    Uses asyncio.to_thread() to wrap mido's blocking reads.

    Raises:
        LookupError: No input port matches the trigger.
    """
    port_name = find_trigger_port(trigger.port)
    if port_name is None:
        raise LookupError(f"No MIDI input port matches '{trigger.port}'")

    def blocking_read():
        """Blocking read that runs in a thread."""
        with mido.open_input(port_name) as port:
            log.info("Listening on: %s", port_name)
            for msg in port:
                if matches_trigger(trigger, msg):
                    log.debug("Trigger: %s", msg)
                    on_trigger()

    try:
        await asyncio.to_thread(blocking_read)
    except OSError as e:
        log.error("MIDI port %s disconnected: %s", port_name, e)
