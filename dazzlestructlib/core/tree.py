"""Tree facade for DazzleStructLib.

A Tree owns a nested key-value structure and gives path-addressed read and
write access to it. Whole-structure operations (walking, listing paths,
pattern queries) are delegated to a walking strategy selected by the
Tree's configuration.
"""

from collections.abc import MutableMapping
from typing import Any, Callable, List, Optional, Tuple, Union

from .._common import contracts
from .._common.nodes import COMPOSITE_SEQUENCE_TYPES, is_composite, is_hashable
from ..config import TraversalStrategy, TreeConfig
from ..errors import ConfigurationError
from ..logger import get_logger
from .capabilities import Addressable
from .path import ABSENT, Path, check_addressable
from .query import Query
from .traverser import create_walker, parse_strategy
from .walker import Handler, TreeWalker

logger = get_logger("core.tree")

PathLike = Union[Path, str, list, tuple]


class Tree(Addressable):
    """Path-addressed access to a nested structure.

    The root passed in is retained, not copied, so changes made through the
    Tree are visible to everyone holding the same dict.

    Example:
        >>> tree = Tree()
        >>> tree.set('foo.bar', 'Hello world!').get('foo.bar')
        'Hello world!'
        >>> tree.query(['foo', '*'])
        ['Hello world!']
    """

    def __init__(self,
                 items: Optional[MutableMapping] = None,
                 config: Optional[TreeConfig] = None):
        """Create a tree.

        Args:
            items: Root mapping (default: new empty dict)
            config: TreeConfig (default: iterative, strict segments)

        Raises:
            InvalidArgumentError: If items is not a mutable mapping
            ConfigurationError: If config fails validation
        """
        contracts.require_mutable_mapping_optional(items, "Invalid tree root")
        config = config if config is not None else TreeConfig()

        config_errors = config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )
        if config.exceeds_recursion_limit():
            logger.warning(
                "max_depth_hint %d exceeds the recursion limit; "
                "deep walks may fail with the recursive strategy",
                config.max_depth_hint
            )

        self.items = items if items is not None else {}
        self.config = config

    def _address(self, path: PathLike) -> Path:
        path = Path.coerce(path)
        if self.config.strict_segments:
            check_addressable(path)
        return path

    # Node access

    def get(self, path: PathLike) -> Any:
        """Retrieve the value at the specified path.

        Args:
            path: Path to node; the empty path addresses the root

        Returns:
            Whatever value is found at path, or ABSENT
        """
        return self._address(path).resolve(self.items)

    def _parent_for_write(self, path: Path) -> Tuple[Any, Any]:
        """Resolve or build the parent of path for assignment.

        All checks run before anything is built.

        Returns:
            Tuple of (parent node, last key)
        """
        contracts.require(len(path) > 0, "Cannot address the tree root for writing")
        last_key = path.last
        parent = path.trim().resolve(self.items)
        if isinstance(parent, COMPOSITE_SEQUENCE_TYPES):
            contracts.require(
                isinstance(parent, list)
                and isinstance(last_key, str) and last_key.isdigit()
                and int(last_key) < len(parent),
                f"Cannot assign key {last_key!r} inside a sequence"
            )
            return parent, int(last_key)
        contracts.require(
            path.is_addressable or is_hashable(last_key),
            f"Unhashable key {last_key!r}"
        )
        return path.trim().resolve_or_build(self.items), last_key

    def set(self, path: PathLike, value: Any) -> 'Tree':
        """Set the node at the specified path, building it as needed.

        Args:
            path: Path to node
            value: Node value to set

        Returns:
            self
        """
        path = self._address(path)
        parent, last_key = self._parent_for_write(path)
        parent[last_key] = value
        logger.debug("Set node %s", path)
        return self

    def get_or_create(self, path: PathLike, factory: Callable[[], Any]) -> Any:
        """Retrieve the node at path, or create it from factory.

        When the path does not exist it is built and the return value of
        factory is stored at its end.

        Args:
            path: Path to node
            factory: Callable returning the value for a new node

        Returns:
            Existing or newly created node
        """
        contracts.require_callable(factory, "Invalid node factory")
        path = self._address(path)
        existing = path.resolve(self.items)
        if existing is not ABSENT:
            return existing

        parent, last_key = self._parent_for_write(path)
        value = factory()
        parent[last_key] = value
        logger.debug("Created node %s", path)
        return value

    def unset(self, path: PathLike) -> 'Tree':
        """Remove the node at the specified path, if present.

        Args:
            path: Path to node

        Returns:
            self
        """
        path = self._address(path)
        contracts.require(len(path) > 0, "Cannot remove the tree root")
        parent = path.trim().resolve(self.items)
        if isinstance(parent, MutableMapping) and path.last in parent:
            del parent[path.last]
            logger.debug("Removed node %s", path)
        return self

    def unset_path(self, path: PathLike) -> 'Tree':
        """Remove the node at path along with the ancestors it leaves empty.

        Pruning stops at the root, at a sequence, and at the first ancestor
        that still has other children.

        Args:
            path: Path to node

        Returns:
            self

        Example:
            >>> Tree({'a': {'b': {'c': 1}}, 'd': 2}).unset_path('a.b.c').items
            {'d': 2}
        """
        path = self._address(path)
        contracts.require(len(path) > 0, "Cannot remove the tree root")
        parent_path = path.trim()
        parent = parent_path.resolve(self.items)
        if not (isinstance(parent, MutableMapping) and path.last in parent):
            return self

        del parent[path.last]
        removed = path
        while parent_path and not parent:
            key = parent_path.last
            parent_path = parent_path.trim()
            parent = parent_path.resolve(self.items)
            if not isinstance(parent, MutableMapping):
                break
            del parent[key]
            removed = parent_path.append(key)
        logger.debug("Removed node %s, pruned up to %s", path, removed)
        return self

    def move(self, from_path: PathLike, to_path: PathLike) -> 'Tree':
        """Move the node at from_path to to_path.

        The target is built the same way :meth:`set` builds it. Nothing
        changes if any check fails.

        Args:
            from_path: Path of the node to move
            to_path: Destination path

        Returns:
            self

        Raises:
            InvalidArgumentError: If there is no node at from_path to remove
                from a mapping, or to_path lies below from_path
        """
        from_path = self._address(from_path)
        to_path = self._address(to_path)
        contracts.require(len(from_path) > 0, "Cannot move the tree root")
        if from_path == to_path:
            return self
        contracts.require(
            not to_path.is_relative_to(from_path),
            f"Cannot move {from_path} below itself"
        )

        source = from_path.trim().resolve(self.items)
        contracts.require(
            isinstance(source, MutableMapping) and from_path.last in source,
            f"No node to move at {from_path}"
        )
        target, last_key = self._parent_for_write(to_path)
        target[last_key] = source.pop(from_path.last)
        logger.debug("Moved node %s to %s", from_path, to_path)
        return self

    def __contains__(self, path: PathLike) -> bool:
        return self.get(path) is not ABSENT

    # Traversal

    def create_walker(self,
                      handler: Handler,
                      strategy: Union[TraversalStrategy, str, None] = None) -> TreeWalker:
        """Create a walker for this tree's strategy (or an override)."""
        strategy = parse_strategy(strategy) if strategy is not None else self.config.strategy
        return create_walker(strategy, handler)

    def walk(self,
             handler: Handler,
             strategy: Union[TraversalStrategy, str, None] = None) -> TreeWalker:
        """Walk the whole tree in pre-order.

        Args:
            handler: Callable invoked as ``handler(path, key)``; return
                STOP to cancel
            strategy: Override of the configured strategy

        Returns:
            The walker, idle again, with ``stopped`` telling whether the
            handler cancelled the walk
        """
        return self.create_walker(handler, strategy).walk(self.items)

    def paths(self) -> List[Path]:
        """List the path of every node in pre-order."""
        collected: List[Path] = []
        self.walk(lambda path, key: collected.append(path))
        return collected

    def query_items(self, patterns: Union[str, list, tuple, Query]) -> List[Tuple[Path, Any]]:
        """Collect (path, node) pairs matching a query.

        Only the subtree below the query's stem (its leading exact keys) is
        walked.

        Args:
            patterns: Query, pattern sequence, or dot-separated pattern string

        Returns:
            Matching (path, node) pairs in pre-order
        """
        query = Query(patterns)
        stem = query.stem
        start = stem.resolve(self.items)
        matches: List[Tuple[Path, Any]] = []
        if start is ABSENT:
            return matches
        if len(stem) == query.depth:
            if query.matches(stem, start):
                matches.append((stem, start))
            return matches
        if not is_composite(start):
            return matches

        def handler(path: Path, key: Any) -> None:
            node = walker.current_node
            full_path = path.prepend(stem)
            if query.matches(full_path, node):
                matches.append((full_path, node))

        walker = self.create_walker(handler)
        walker.walk(start)
        return matches

    def query(self, patterns: Union[str, list, tuple, Query]) -> List[Any]:
        """Collect nodes matching a query.

        Args:
            patterns: Query, pattern sequence, or dot-separated pattern string

        Returns:
            Matching nodes in pre-order
        """
        return [node for _, node in self.query_items(patterns)]

    def query_keys(self, patterns: Union[str, list, tuple, Query]) -> List[Any]:
        """Collect the keys of nodes matching a query, in pre-order."""
        return [path.last for path, _ in self.query_items(patterns)]

    def query_paths(self, patterns: Union[str, list, tuple, Query]) -> List[Path]:
        """Collect the paths of nodes matching a query, in pre-order."""
        return [path for path, _ in self.query_items(patterns)]

    def __repr__(self) -> str:
        return f"Tree({self.items!r})"
