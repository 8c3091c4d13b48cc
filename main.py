#!/usr/bin/env python3
"""
Screen Timeout Tile - Entry point.

Cycles the screen-off timeout through a fixed list of values.
"""

from timeout_tile.cli import main

if __name__ == "__main__":
    main()
