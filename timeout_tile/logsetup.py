"""
Logging setup for the command-line tools.
"""

import logging
import os
import sys


def setup_logging(level: str | None = None) -> None:
    lvl_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    lvl = getattr(logging, lvl_name, logging.INFO)

    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )
    # mido backends are chatty at DEBUG
    logging.getLogger("mido").setLevel(max(lvl, logging.INFO))
