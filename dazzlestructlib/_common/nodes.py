"""Helpers describing the shape of nested key-value structures.

Mappings and lists/tuples are composite and have children; everything
else is a leaf. List children are keyed by their index as a string.
"""

from collections.abc import Mapping
from typing import Any, Iterator, Tuple

from .segments import normalize_segment

COMPOSITE_SEQUENCE_TYPES = (list, tuple)


def is_composite(node: Any) -> bool:
    """Check if a node can hold named children."""
    return isinstance(node, Mapping) or isinstance(node, COMPOSITE_SEQUENCE_TYPES)


def iter_children(node: Any) -> Iterator[Tuple[Any, Any]]:
    """Iterate over (segment, child) pairs of a composite node.

    Mappings yield in insertion order, sequences in index order.
    Leaves yield nothing.

    Args:
        node: Node whose children to list

    Yields:
        Tuples of (normalized key, child node)
    """
    if isinstance(node, Mapping):
        for key, child in node.items():
            yield normalize_segment(key), child
    elif isinstance(node, COMPOSITE_SEQUENCE_TYPES):
        for index, child in enumerate(node):
            yield str(index), child


def is_hashable(value: Any) -> bool:
    """Check if a value can be used as a mapping key."""
    try:
        hash(value)
    except TypeError:
        return False
    return True
