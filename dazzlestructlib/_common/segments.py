"""Path segment normalization.

A segment is one key in an address. Numbers and booleans are turned into
their string form; strings are kept; composite values and None pass through
untouched so callers can decide whether to accept them.
"""

from enum import Enum
from numbers import Number
from typing import Any


class SegmentKind(Enum):
    """The closed set of shapes a raw path segment can take."""
    KEY = "key"                 # string, number or boolean
    COMPOSITE = "composite"     # any other object (dict, list, custom class)
    ABSENT = "absent"           # None


def segment_kind(value: Any) -> SegmentKind:
    """Classify a raw segment value.

    Args:
        value: Raw segment

    Returns:
        SegmentKind of the value
    """
    if value is None:
        return SegmentKind.ABSENT
    if isinstance(value, (str, bool, Number)):
        return SegmentKind.KEY
    return SegmentKind.COMPOSITE


def normalize_segment(value: Any) -> Any:
    """Convert a raw value into a path segment.

    Args:
        value: Raw segment

    Returns:
        ``'true'``/``'false'`` for booleans, ``str(value)`` for numbers,
        the value itself for everything else
    """
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, Number):
        return str(value)
    return value
