"""Configuration system for DazzleStructLib.

This module defines how users pick a traversal strategy for trees, how
strictly tree addresses are checked, and how prefix searches behave at
the top of the character range.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class TraversalStrategy(Enum):
    """How to walk a nested structure.

    Both strategies visit the same elements in the same order; they only
    differ in how they keep track of where they are.
    """
    ITERATIVE = "iterative"     # Explicit stack, unbounded depth
    RECURSIVE = "recursive"     # Native recursion, bounded by the call stack


class PrefixOverflowPolicy(Enum):
    """What a prefix search does when the prefix ends in the highest code point.

    The exclusive upper bound of a prefix range is built by incrementing the
    last character, which is impossible for ``chr(sys.maxunicode)``.
    """
    CARRY = "carry"     # Drop trailing max characters and increment the one before
    ERROR = "error"     # Reject the prefix


@dataclass
class TreeConfig:
    """Configuration for a Tree facade.

    The Tree validates this on construction and refuses to start with an
    inconsistent configuration.
    """

    # Traversal algorithm used by walk(), paths() and query()
    strategy: TraversalStrategy = TraversalStrategy.ITERATIVE

    # Reject composite or None segments when addressing nodes
    strict_segments: bool = True

    # Expected maximum nesting depth (None = unknown)
    max_depth_hint: Optional[int] = None

    @classmethod
    def iterative(cls) -> 'TreeConfig':
        """Create config using the explicit-stack walker.

        Returns:
            TreeConfig for iterative traversal
        """
        return cls(strategy=TraversalStrategy.ITERATIVE)

    @classmethod
    def recursive(cls, max_depth_hint: Optional[int] = None) -> 'TreeConfig':
        """Create config using the recursive walker.

        Args:
            max_depth_hint: Expected maximum nesting depth, if known

        Returns:
            TreeConfig for recursive traversal
        """
        return cls(
            strategy=TraversalStrategy.RECURSIVE,
            max_depth_hint=max_depth_hint
        )

    @classmethod
    def permissive(cls) -> 'TreeConfig':
        """Create config that lets composite and None segments through.

        Returns:
            TreeConfig with strict segment checking disabled
        """
        return cls(strict_segments=False)

    def exceeds_recursion_limit(self) -> bool:
        """Check if the depth hint is beyond what recursion can handle.

        Returns:
            True if the recursive strategy is selected and the hint is
            larger than the interpreter recursion limit
        """
        if self.strategy != TraversalStrategy.RECURSIVE or self.max_depth_hint is None:
            return False
        return self.max_depth_hint >= sys.getrecursionlimit()

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.strategy, TraversalStrategy):
            errors.append(f"strategy must be a TraversalStrategy, got {self.strategy!r}")

        if not isinstance(self.strict_segments, bool):
            errors.append("strict_segments must be a boolean")

        if self.max_depth_hint is not None:
            if isinstance(self.max_depth_hint, bool) or not isinstance(self.max_depth_hint, int):
                errors.append("max_depth_hint must be an integer")
            elif self.max_depth_hint <= 0:
                errors.append("max_depth_hint must be positive")

        return errors
