from __future__ import annotations

import mido

from timeout_tile.config import TriggerConfig
from timeout_tile.trigger import find_trigger_port, matches_trigger


def test_control_change_trigger() -> None:
    trigger = TriggerConfig(port="Quad Cortex", channel=0, control=64)

    assert matches_trigger(trigger, mido.Message("control_change", channel=0, control=64, value=127))
    # pedal release
    assert not matches_trigger(trigger, mido.Message("control_change", channel=0, control=64, value=0))
    assert not matches_trigger(trigger, mido.Message("control_change", channel=1, control=64, value=127))
    assert not matches_trigger(trigger, mido.Message("control_change", channel=0, control=65, value=127))
    assert not matches_trigger(trigger, mido.Message("note_on", channel=0, note=64, velocity=100))


def test_note_on_trigger_ignores_zero_velocity() -> None:
    trigger = TriggerConfig(port="*", type="note_on", note=60, value_min=0)

    assert matches_trigger(trigger, mido.Message("note_on", note=60, velocity=90))
    assert not matches_trigger(trigger, mido.Message("note_on", note=60, velocity=0))
    assert not matches_trigger(trigger, mido.Message("note_on", note=61, velocity=90))


def test_any_channel_when_unset() -> None:
    trigger = TriggerConfig(port="*", control=64)

    assert matches_trigger(trigger, mido.Message("control_change", channel=9, control=64, value=1))


def test_find_trigger_port_by_substring() -> None:
    ports = ["Midi Through Port-0", "Quad Cortex MIDI 1", "Quad Cortex MIDI 2"]

    assert find_trigger_port("Quad Cortex", ports) == "Quad Cortex MIDI 1"
    assert find_trigger_port("*", ports) == "Midi Through Port-0"
    assert find_trigger_port("Helix", ports) is None
