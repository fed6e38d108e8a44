"""TreeWalker cursor contract for DazzleStructLib.

A TreeWalker walks a nested key-value structure and calls a handler once
per visited element. While it walks it exposes the element being visited
through three cursor fields:

- current_key: segment name of the element within its parent
- current_node: the element itself (borrowed from the structure)
- current_path: Path from the root to and including current_key

The handler is called as ``handler(path, key)``. Returning :data:`STOP`
halts the walk immediately; any other value, including None, continues.
Handlers that need the node read ``walker.current_node``.
"""

from abc import abstractmethod
from enum import Enum
from typing import Any, Callable, Optional

from .._common import contracts
from .._common.nodes import is_composite
from ..errors import TraversalInProgressError
from ..logger import get_logger
from .capabilities import Traversable
from .path import Path

logger = get_logger("core.walker")


class _Stop:
    """Cancellation sentinel returned by handlers."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'STOP'


STOP = _Stop()

Handler = Callable[[Path, Any], Any]


class WalkerState(Enum):
    """The two states of a walker cursor."""
    IDLE = "idle"       # All cursor fields unset
    ACTIVE = "active"   # Fields reflect the most recently visited element


class TreeWalker(Traversable):
    """Abstract base class for tree walking strategies.

    Subclasses implement :meth:`_walk`, the algorithm that enumerates
    elements. Each visit goes through :meth:`_visit`, which updates the
    cursor and asks the handler whether to continue, so every strategy
    reports exactly the same thing for the same element.

    A walker is not reentrant. Calling walk() from inside its own handler
    raises TraversalInProgressError; use a fresh walker instead.
    """

    def __init__(self, handler: Handler):
        """Initialize walker with a handler.

        Args:
            handler: Callable invoked as ``handler(path, key)`` per element

        Raises:
            InvalidArgumentError: If handler is not callable
        """
        contracts.require_callable(handler, "Invalid walker handler")
        self.handler = handler
        self._walking = False
        self.current_key: Optional[Any] = None
        self.current_node: Optional[Any] = None
        self.current_path: Optional[Path] = None
        self.stopped = False

    @property
    def state(self) -> WalkerState:
        if self.current_path is None:
            return WalkerState.IDLE
        return WalkerState.ACTIVE

    @property
    def walking(self) -> bool:
        """True only while a walk is in progress."""
        return self._walking

    def reset(self) -> 'TreeWalker':
        """Return the cursor to the idle state.

        Returns:
            self, for chaining
        """
        self.current_key = None
        self.current_node = None
        self.current_path = None
        return self

    def walk(self, root: Any) -> 'TreeWalker':
        """Walk every element below root in pre-order.

        The root itself is not reported. The cursor is only active while the
        walk runs and is reset once it finishes, even when the handler
        raises. ``stopped`` survives the reset and tells whether the handler
        cancelled the walk.

        Args:
            root: Composite node (mapping or list) to walk

        Returns:
            self, for chaining

        Raises:
            InvalidArgumentError: If root is not composite
            TraversalInProgressError: If this walker is already walking
        """
        contracts.require(is_composite(root), "Walk root must be a mapping or a list")
        if self._walking:
            raise TraversalInProgressError(
                f"{self.__class__.__name__} is already walking; use a fresh walker"
            )

        self.reset()
        self.stopped = False
        self._walking = True
        logger.debug("%s starting walk", self.__class__.__name__)
        try:
            self._walk(root)
            if self.stopped:
                logger.debug("%s cancelled at %s", self.__class__.__name__, self.current_path)
        finally:
            self._walking = False
            self.reset()
        return self

    def _visit(self, path: Path, key: Any, node: Any) -> bool:
        """Move the cursor to an element and call the handler.

        Returns:
            True if the handler asked to stop
        """
        self.current_key = key
        self.current_node = node
        self.current_path = path
        if self.handler(path, key) is STOP:
            self.stopped = True
        return self.stopped

    @abstractmethod
    def _walk(self, root: Any) -> None:
        """Enumerate every element below root, calling _visit for each.

        Implementations must visit in pre-order, children in natural key
        order, and return as soon as _visit returns True.
        """
        pass
