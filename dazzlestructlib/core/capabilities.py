"""Capability contracts for DazzleStructLib.

Concrete types are composed by implementing the capabilities they need
rather than by inheriting behavior from each other:

- Ordered: keeps items sorted and answers binary searches
- Traversable: walks a nested structure and reports each element
- Addressable: reads and writes nodes by path
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List


class Ordered(ABC):
    """A container that keeps its items sorted at every observable point."""

    @property
    @abstractmethod
    def items(self) -> List[Any]:
        """Sorted snapshot of the items."""
        pass

    @abstractmethod
    def index_of(self, value: Any) -> int:
        """Return the floor index of value.

        Args:
            value: Lookup value

        Returns:
            Largest index whose item is <= value, clamped to 0
        """
        pass

    @abstractmethod
    def splice_index_of(self, value: Any) -> int:
        """Return the lowest index at which value would be inserted."""
        pass

    @abstractmethod
    def add_item(self, value: Any) -> int:
        """Insert value keeping order and return its index."""
        pass

    @abstractmethod
    def remove_item(self, value: Any) -> int:
        """Remove one occurrence of value and return its index, or -1."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def add_items(self, values: Iterable[Any]) -> 'Ordered':
        for value in values:
            self.add_item(value)
        return self

    def remove_items(self, values: Iterable[Any]) -> 'Ordered':
        for value in values:
            self.remove_item(value)
        return self


class Traversable(ABC):
    """Something that can walk a nested key-value structure."""

    @abstractmethod
    def walk(self, root: Any) -> 'Traversable':
        """Visit every element below root in pre-order.

        Args:
            root: Composite node to walk

        Returns:
            self, for chaining
        """
        pass


class Addressable(ABC):
    """Something whose nodes can be read and written by path."""

    @abstractmethod
    def get(self, path: Any) -> Any:
        pass

    @abstractmethod
    def set(self, path: Any, value: Any) -> 'Addressable':
        pass

    @abstractmethod
    def unset(self, path: Any) -> 'Addressable':
        pass
