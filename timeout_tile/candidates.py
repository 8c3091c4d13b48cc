"""
Timeout values and the candidate list the tile cycles through.

All values are milliseconds.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import ConfigError

# Stored value meaning the screen never turns off
NEVER_TIMEOUT = -1

# What the platform assumes when the setting was never written
DEFAULT_TIMEOUT_MS = 30_000

DEFAULT_CANDIDATES = (
    15_000,     # 15 seconds
    30_000,     # 30 seconds
    60_000,     # 1 minute
    120_000,    # 2 minutes
    300_000,    # 5 minutes
    600_000,    # 10 minutes
    1_800_000,  # 30 minutes
)


@dataclass(frozen=True)
class CandidateList:
    """
    Ordered, duplicate-free list of timeout values.

    Index order is cycle order. Raises ConfigError if the list is empty,
    contains duplicates, or holds a value that is neither positive nor
    NEVER_TIMEOUT.
    """
    values: tuple[int, ...] = DEFAULT_CANDIDATES

    def __post_init__(self) -> None:
        if not self.values:
            raise ConfigError("Candidate list must not be empty")

        seen: set[int] = set()
        for value in self.values:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"Candidate {value!r} is not an integer", {"value": value})
            if value <= 0 and value != NEVER_TIMEOUT:
                raise ConfigError(f"Candidate {value} must be positive", {"value": value})
            if value in seen:
                raise ConfigError(f"Duplicate candidate {value}", {"value": value})
            seen.add(value)

    @classmethod
    def of(cls, values: Iterable[int]) -> "CandidateList":
        return cls(tuple(values))

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __contains__(self, value: object) -> bool:
        return value in self.values

    def index_of(self, value: int) -> int:
        """Position of value in the list, or -1 if it is not a candidate."""
        try:
            return self.values.index(value)
        except ValueError:
            return -1
