"""Tree walking strategies for DazzleStructLib.

Two interchangeable strategies implement the TreeWalker contract:

- IterativeTreeWalker keeps an explicit stack, so nesting depth is limited
  only by memory.
- RecursiveTreeWalker uses native recursion, so nesting depth is limited by
  the interpreter recursion limit.

Both report the same (path, key) sequence and stop at the same point.
"""

from typing import Any, Iterator, List, Tuple, Union

from .._common.nodes import is_composite, iter_children
from ..config import TraversalStrategy
from ..errors import InvalidArgumentError
from .path import Path
from .walker import Handler, TreeWalker


class IterativeTreeWalker(TreeWalker):
    """Depth-first pre-order walker using an explicit stack.

    The stack holds one child iterator per open composite node, and ``keys``
    holds the key of every open node below the root, so
    ``len(keys) == len(stack) - 1``. Visiting a composite node pushes its
    iterator, so its children are handled before its remaining siblings.
    Only the current path is kept, so memory grows linearly with depth.
    """

    def _walk(self, root: Any) -> None:
        stack: List[Iterator[Tuple[Any, Any]]] = [iter_children(root)]
        keys: List[Any] = []

        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                if stack:
                    keys.pop()
                continue

            key, node = entry
            keys.append(key)
            if self._visit(Path._from_segments(tuple(keys)), key, node):
                return

            if is_composite(node):
                stack.append(iter_children(node))
            else:
                keys.pop()


class RecursiveTreeWalker(TreeWalker):
    """Depth-first pre-order walker using native recursion.

    Simpler than the iterative walker but raises RecursionError on
    structures nested deeper than the interpreter allows.
    """

    def _walk(self, root: Any) -> None:
        self._walk_node(root, ())

    def _walk_node(self, node: Any, prefix: Tuple[Any, ...]) -> bool:
        """Visit the children of node and their descendants.

        Returns:
            True if the walk was cancelled
        """
        for key, child in iter_children(node):
            segments = prefix + (key,)
            if self._visit(Path._from_segments(segments), key, child):
                return True
            if is_composite(child) and self._walk_node(child, segments):
                return True
        return False


_STRATEGIES = {
    TraversalStrategy.ITERATIVE: IterativeTreeWalker,
    TraversalStrategy.RECURSIVE: RecursiveTreeWalker,
}

_STRATEGY_NAMES = {
    'iterative': TraversalStrategy.ITERATIVE,
    'stack': TraversalStrategy.ITERATIVE,
    'recursive': TraversalStrategy.RECURSIVE,
    'recursion': TraversalStrategy.RECURSIVE,
}


def parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum.

    Args:
        strategy: Strategy as enum or name

    Returns:
        TraversalStrategy enum value

    Raises:
        InvalidArgumentError: If the name is not recognized
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in _STRATEGY_NAMES:
        return _STRATEGY_NAMES[strategy_lower]

    raise InvalidArgumentError(
        f"Unknown traversal strategy: {strategy}. "
        f"Choose from: {', '.join(_STRATEGY_NAMES.keys())}"
    )


# Factory function for creating walkers by strategy
def create_walker(strategy: Union[TraversalStrategy, str], handler: Handler) -> TreeWalker:
    """Create a walker instance by strategy.

    Args:
        strategy: TraversalStrategy or its name (iterative, stack,
            recursive, recursion)
        handler: Callable invoked as ``handler(path, key)`` per element

    Returns:
        TreeWalker instance

    Raises:
        InvalidArgumentError: If strategy is not recognized or handler is
            not callable
    """
    return _STRATEGIES[parse_strategy(strategy)](handler)
