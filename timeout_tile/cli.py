"""
Command-line interface for the screen timeout tile.
"""

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

from .config import Config, load_config
from .cycle import format_timeout
from .display import Display, TileState, print_tile
from .errors import ConfigError
from .logsetup import setup_logging
from .notify import create_notifier
from .stores import create_store
from .tile import TimeoutTile, create_tile
from .trigger import list_midi_ports, listen

log = logging.getLogger("timeout_tile.cli")


def build_tile(config: Config, display: Display = print_tile) -> TimeoutTile:
    """Create the tile described by the config."""
    store = create_store(config.store)
    notifier = create_notifier(config.notifications, config.strings.tile_label)
    return create_tile(config, store, notifier, display=display)


def cmd_status(config: Config, args: argparse.Namespace) -> int:
    """Show the tile's current state."""
    tile = build_tile(config)
    tile.on_start_listening()
    tile.on_stop_listening()
    return 0


def cmd_cycle(config: Config, args: argparse.Namespace) -> int:
    """Advance the timeout to the next value."""
    tile = build_tile(config)
    result = tile.activate()
    return 0 if result.changed else 1


def cmd_watch(config: Config, args: argparse.Namespace) -> int:
    """Refresh the tile periodically until interrupted."""
    shown: list[TileState] = []

    def show_changes(state: TileState) -> None:
        if not shown or shown[-1] != state:
            print_tile(state)
            shown[:] = [state]

    tile = build_tile(config, display=show_changes)

    print("-" * 60)
    print("Press Ctrl+C to stop")
    print("-" * 60)
    print()

    tile.on_start_listening()
    try:
        while True:
            time.sleep(args.interval)
            tile.refresh()
    except KeyboardInterrupt:
        print("\n" + "-" * 60)
        print("Stopped.")
    finally:
        tile.on_stop_listening()

    return 0


def cmd_list_values(config: Config, args: argparse.Namespace) -> int:
    """List the candidate timeouts in cycle order."""
    print("Timeout values:")
    print()
    for i, value in enumerate(config.candidates, 1):
        print(f"  [{i}] {value:>9} ms  {format_timeout(value, config.strings)}")
    print()
    return 0


def cmd_listen(config: Config, args: argparse.Namespace) -> int:
    """Cycle the timeout from a MIDI button or pedal."""
    if config.trigger is None:
        print("Error: No trigger configured.")
        print("Add a 'trigger' section with the MIDI port and control to config.yaml.")
        return 1

    tile = build_tile(config)
    tile.on_start_listening()

    print()
    print("-" * 60)
    print("Press Ctrl+C to stop")
    print("-" * 60)
    print()

    try:
        asyncio.run(listen(config.trigger, tile.activate))
    except LookupError as e:
        print(f"\nError: {e}")
        print("Available ports:")
        for port in list_midi_ports():
            print(f"  - {port}")
        return 1
    except KeyboardInterrupt:
        print("\n" + "-" * 60)
        print("Stopped.")
    finally:
        tile.on_stop_listening()

    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="timeout_tile",
        description="Cycle the screen-off timeout through a fixed list of values",
    )
    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # status command (default)
    status_parser = subparsers.add_parser("status", help="Show the current timeout")
    status_parser.set_defaults(func=cmd_status)

    # cycle command
    cycle_parser = subparsers.add_parser("cycle", help="Advance to the next timeout")
    cycle_parser.set_defaults(func=cmd_cycle)

    # watch command
    watch_parser = subparsers.add_parser("watch", help="Keep the tile in sync with the setting")
    watch_parser.add_argument(
        "-i", "--interval",
        type=float,
        default=2.0,
        help="Seconds between refreshes (default: 2)",
    )
    watch_parser.set_defaults(func=cmd_watch)

    # list-values command
    list_parser = subparsers.add_parser("list-values", help="List the timeout values")
    list_parser.set_defaults(func=cmd_list_values)

    # listen command
    listen_parser = subparsers.add_parser("listen", help="Cycle from a MIDI trigger")
    listen_parser.set_defaults(func=cmd_listen)

    args = parser.parse_args()

    # Default to 'status' if no command specified
    if args.command is None:
        args.func = cmd_status

    try:
        config = load_config(Path(args.config))
    except ConfigError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    setup_logging(args.log_level or config.log_level)
    log.debug("Loaded config from %s (store: %s)", args.config, config.store.backend)

    # Ensure unbuffered output
    sys.stdout.reconfigure(line_buffering=True)

    sys.exit(args.func(config, args))
