"""High-level API for DazzleStructLib.

This module provides simple, functional interfaces for common operations
on nested structures and sorted string collections. These functions wrap
the object-oriented API for ease of use in simple cases.
"""

from typing import Any, Dict, Iterable, List, Tuple, Union

from ._common.nodes import is_composite
from .config import TraversalStrategy
from .core.ordered import OrderedStringList
from .core.path import Path
from .core.query import Query
from .core.traverser import create_walker
from .core.walker import Handler, TreeWalker


def walk_tree(
    root: Any,
    handler: Handler,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.ITERATIVE,
) -> TreeWalker:
    """Simple interface for walking a nested structure.

    Args:
        root: Mapping or list to walk
        handler: Callable invoked as ``handler(path, key)``; return STOP
            to cancel
        strategy: Walking strategy (iterative or recursive)

    Returns:
        The walker after the walk, idle, with ``stopped`` set if the
        handler cancelled it

    Example:
        >>> def show(path, key):
        ...     print(path)
        >>> _ = walk_tree({'foo': {'bar': 1}}, show)
        foo
        foo.bar
    """
    return create_walker(strategy, handler).walk(root)


def _collect(root: Any, strategy) -> List[Tuple[Path, Any]]:
    """Walk root and collect (path, node) for every element."""
    visited: List[Tuple[Path, Any]] = []

    def handler(path: Path, key: Any) -> None:
        visited.append((path, walker.current_node))

    walker = create_walker(strategy, handler)
    walker.walk(root)
    return visited


def get_tree_paths(
    root: Any,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.ITERATIVE,
) -> List[Path]:
    """Get the path of every element, in pre-order.

    Example:
        >>> [str(p) for p in get_tree_paths({'moo': {'says': 'cow'}})]
        ['moo', 'moo.says']
    """
    return [path for path, _ in _collect(root, strategy)]


def count_nodes(
    root: Any,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.ITERATIVE,
) -> int:
    """Count every element below root."""
    count = 0

    def handler(path: Path, key: Any) -> None:
        nonlocal count
        count += 1

    create_walker(strategy, handler).walk(root)
    return count


def get_leaf_items(
    root: Any,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.ITERATIVE,
) -> List[Tuple[Path, Any]]:
    """Get (path, value) for every leaf (non-composite) element.

    Example:
        >>> [(str(p), v) for p, v in get_leaf_items({'a': {'b': 1}, 'c': 2})]
        [('a.b', 1), ('c', 2)]
    """
    return [(path, node) for path, node in _collect(root, strategy)
            if not is_composite(node)]


def find_nodes(
    root: Any,
    patterns: Union[str, List[Any], Query],
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.ITERATIVE,
) -> List[Any]:
    """Find nodes matching per-level patterns.

    Args:
        root: Mapping or list to search
        patterns: Query, pattern sequence or dot-separated pattern string
        strategy: Walking strategy

    Returns:
        Matching nodes in pre-order

    Example:
        >>> find_nodes({'a': {'x': 1}, 'b': {'x': 2}}, '*.x')
        [1, 2]
    """
    query = Query(patterns)
    return [node for path, node in _collect(root, strategy)
            if query.matches(path, node)]


def get_tree_stats(
    root: Any,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.ITERATIVE,
) -> Dict[str, Any]:
    """Get statistics about a nested structure.

    Returns:
        Dictionary with total_nodes, leaf_nodes, internal_nodes, max_depth
        and a per-depth node count under depths (depth 1 = root's children)
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {}
    }

    for path, node in _collect(root, strategy):
        depth = len(path)
        stats['total_nodes'] += 1

        if not is_composite(node):
            stats['leaf_nodes'] += 1

        stats['max_depth'] = max(stats['max_depth'], depth)

        if depth not in stats['depths']:
            stats['depths'][depth] = 0
        stats['depths'][depth] += 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    return stats


def prefix_search(items: Iterable[str], prefix: str) -> List[str]:
    """Return the strings in items that start with prefix, sorted.

    Example:
        >>> prefix_search(['insert', 'item', 'insect'], 'ins')
        ['insect', 'insert']
    """
    return OrderedStringList(items).get_range_by_prefix(prefix)
