"""
Cycle computation.

Pure functions for advancing through the candidate list and rendering
timeout values as text.
"""

from .candidates import NEVER_TIMEOUT, CandidateList
from .strings import DEFAULT_STRINGS, Strings


def next_value(current: int, candidates: CandidateList) -> int:
    """
    Get the candidate that follows the current value.

    A value that is not in the list (for example one set by another tool)
    counts as index -1, so cycling from it lands on the first candidate.

    Args:
        current: The value currently stored.
        candidates: Values to cycle through.

    Returns:
        The next value to store.
    """
    index = candidates.index_of(current)
    return candidates[(index + 1) % len(candidates)]


def format_timeout(value: int, strings: Strings = DEFAULT_STRINGS) -> str:
    """
    Render a timeout for display.

    Whole seconds below one minute, whole minutes from one minute up.
    Remainders are dropped, so 90000 ms shows as one minute.
    """
    if value == NEVER_TIMEOUT:
        return strings.timeout_never
    if 1 <= value < 60_000:
        return strings.seconds(value // 1000)
    if value < 0:
        # truncate toward zero for stray negative values
        return strings.minutes(-(-value // 60_000))
    return strings.minutes(value // 60_000)
