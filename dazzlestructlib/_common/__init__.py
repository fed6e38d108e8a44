"""Common components shared across DazzleStructLib.

This internal package contains pure helpers used by the core modules.
It should NOT be imported directly by users.

Components here include:
- Argument contract checks (InvalidArgumentError on violation)
- Path segment normalization
- Node shape helpers for nested structures

Important: This package must NEVER import from core to avoid
circular dependencies.
"""

from .segments import SegmentKind, segment_kind, normalize_segment
from .nodes import is_composite, iter_children

__all__ = [
    'SegmentKind',
    'segment_kind',
    'normalize_segment',
    'is_composite',
    'iter_children',
]
