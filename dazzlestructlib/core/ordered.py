"""Self-sorting containers for DazzleStructLib.

OrderedArray keeps a sequence sorted under a comparator and answers floor
and splice searches by binary search. OrderedList composes an OrderedArray
and adds half-open range queries. OrderedStringList specializes the list to
strings and adds prefix search.

Storage is a ``sortedcontainers`` sorted list, so every search and insert is
logarithmic.
"""

import sys
from functools import cmp_to_key
from typing import Any, Callable, Iterable, Iterator, List, Optional

from sortedcontainers import SortedKeyList, SortedList

from .._common import contracts
from ..config import PrefixOverflowPolicy
from ..errors import InvalidArgumentError
from ..logger import get_logger
from .capabilities import Ordered

logger = get_logger("core.ordered")

Comparator = Callable[[Any, Any], int]

MAX_CHAR = chr(sys.maxunicode)


class OrderedArray(Ordered):
    """Sequence kept sorted ascending by a comparator.

    The comparator follows the classic ``cmp(a, b)`` protocol: negative when
    ``a < b``, zero when equal, positive when ``a > b``. Without one, items use
    their natural ordering.

    Example:
        >>> array = OrderedArray([5, 1, 3])
        >>> array.items
        [1, 3, 5]
        >>> array.index_of(4)
        1
    """

    def __init__(self,
                 items: Optional[Iterable[Any]] = None,
                 comparator: Optional[Comparator] = None):
        """Create an ordered array.

        Args:
            items: Initial values (any iterable except strings and mappings)
            comparator: Optional ``cmp(a, b)`` function

        Raises:
            InvalidArgumentError: If items is not a sequence, comparator is
                not callable, or the items cannot be compared
        """
        contracts.require_sequence_optional(items, "Invalid initial items")
        contracts.require_callable_optional(comparator, "Invalid comparator")

        self.comparator = comparator
        self._items = self._new_storage(items if items is not None else [])

    def _new_storage(self, values: Iterable[Any]):
        """Build sorted storage from values.

        Raises:
            InvalidArgumentError: If values cannot be ordered
        """
        try:
            if self.comparator is None:
                return SortedList(values)
            return SortedKeyList(values, key=cmp_to_key(self.comparator))
        except TypeError as e:
            raise InvalidArgumentError(f"Items cannot be ordered: {e}") from e

    # Querying

    @property
    def items(self) -> List[Any]:
        """Sorted snapshot of the items."""
        return list(self._items)

    def index_of(self, value: Any) -> int:
        """Return the floor index of value.

        The floor index is the largest ``i`` such that ``items[i] <= value``.
        A value below every item gives 0, a value at or above the last item
        gives the last index, and an empty array gives 0.

        Args:
            value: Lookup value

        Returns:
            Floor index, never negative
        """
        if not self._items:
            return 0
        position = self._bisect_right(value) - 1
        return position if position > 0 else 0

    def splice_index_of(self, value: Any) -> int:
        """Return the lowest index at which value would be spliced in.

        For exact hits this is the position of the first equal item, but no
        information is given whether value is present.

        Args:
            value: Lookup value

        Returns:
            Index in ``[0, len(self)]``
        """
        try:
            return self._items.bisect_left(value)
        except TypeError as e:
            raise InvalidArgumentError(f"Value {value!r} cannot be compared: {e}") from e

    def _bisect_right(self, value: Any) -> int:
        try:
            return self._items.bisect_right(value)
        except TypeError as e:
            raise InvalidArgumentError(f"Value {value!r} cannot be compared: {e}") from e

    # Content manipulation

    def add_item(self, value: Any) -> int:
        """Insert a single value while retaining order.

        Args:
            value: Value to insert

        Returns:
            The index at which the value was inserted
        """
        index = self._bisect_right(value)
        self._items.add(value)
        return index

    def add_items(self, values: Iterable[Any]) -> 'OrderedArray':
        """Insert multiple values.

        Either all values are inserted or, if any of them cannot be ordered,
        none are.

        Args:
            values: Values to insert

        Returns:
            self
        """
        contracts.require_sequence(values, "Invalid item values")
        self._items = self._new_storage(list(self._items) + list(values))
        return self

    def remove_item(self, value: Any) -> int:
        """Delete one occurrence of value while retaining order.

        Args:
            value: Value to remove

        Returns:
            The index from which the item was removed, -1 if it was absent
        """
        start = self.splice_index_of(value)
        end = self._bisect_right(value)
        # The comparator may call distinct values equal; look for the exact one
        for index in range(start, end):
            if self._items[index] == value:
                del self._items[index]
                return index
        return -1

    def remove_items(self, values: Iterable[Any]) -> 'OrderedArray':
        """Remove one occurrence of each value.

        Args:
            values: Values to remove

        Returns:
            self
        """
        contracts.require_sequence(values, "Invalid item values")
        values = list(values)
        original = self._items
        self._items = self._new_storage(original)
        try:
            for value in values:
                self.remove_item(value)
        except InvalidArgumentError:
            self._items = original
            raise
        return self

    def remove_slice(self, start_index: int, end_index: int) -> None:
        """Delete items between two indexes (used by range removal)."""
        if end_index > start_index:
            del self._items[start_index:end_index]

    def clear(self) -> 'OrderedArray':
        """Remove every item.

        Returns:
            self
        """
        self._items.clear()
        return self

    # Sequence protocol

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __contains__(self, value: Any) -> bool:
        start = self.splice_index_of(value)
        return any(self._items[i] == value for i in range(start, self._bisect_right(value)))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.items!r})"


class OrderedList(Ordered):
    """Ordered container with half-open range queries.

    Wraps an OrderedArray and adds range extraction and range removal on top
    of the array's searches.

    Example:
        >>> ordered = OrderedList([9, 1, 5, 3])
        >>> ordered.get_range(3, 9)
        [3, 5]
    """

    def __init__(self,
                 items: Optional[Iterable[Any]] = None,
                 comparator: Optional[Comparator] = None):
        """Create an ordered list.

        Args:
            items: Initial values
            comparator: Optional ``cmp(a, b)`` function
        """
        self._array = OrderedArray(items, comparator)

    @property
    def comparator(self) -> Optional[Comparator]:
        return self._array.comparator

    @property
    def items(self) -> List[Any]:
        return self._array.items

    def index_of(self, value: Any) -> int:
        return self._array.index_of(value)

    def splice_index_of(self, value: Any) -> int:
        return self._array.splice_index_of(value)

    # Range queries

    def _range_indexes(self, start_value: Any, end_value: Any):
        start_index = self._array.splice_index_of(start_value)
        if end_value is None:
            end_index = len(self._array)
        else:
            end_index = self._array.splice_index_of(end_value)
        return start_index, end_index

    def get_range(self, start_value: Any, end_value: Any = None) -> List[Any]:
        """Return items from start_value up to but not including end_value.

        An item equal to start_value is included, an item equal to end_value
        is not.

        Args:
            start_value: Inclusive lower bound
            end_value: Exclusive upper bound (None = up to the last item)

        Returns:
            List of items in ``[start_value, end_value)``, in order
        """
        start_index, end_index = self._range_indexes(start_value, end_value)
        if end_index <= start_index:
            return []
        return self._array[start_index:end_index]

    # Content manipulation

    def add_item(self, value: Any) -> int:
        return self._array.add_item(value)

    def add_items(self, values: Iterable[Any]) -> 'OrderedList':
        self._array.add_items(values)
        return self

    def remove_item(self, value: Any) -> int:
        return self._array.remove_item(value)

    def remove_items(self, values: Iterable[Any]) -> 'OrderedList':
        self._array.remove_items(values)
        return self

    def remove_range(self, start_value: Any, end_value: Any = None) -> int:
        """Remove items from start_value up to but not including end_value.

        Args:
            start_value: Inclusive lower bound
            end_value: Exclusive upper bound (None = up to the last item)

        Returns:
            The starting position of the removal
        """
        start_index, end_index = self._range_indexes(start_value, end_value)
        self._array.remove_slice(start_index, end_index)
        return start_index

    def clear(self) -> 'OrderedList':
        self._array.clear()
        return self

    def __len__(self) -> int:
        return len(self._array)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._array)

    def __getitem__(self, index):
        return self._array[index]

    def __contains__(self, value: Any) -> bool:
        return value in self._array

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.items!r})"


class OrderedStringList(OrderedList):
    """Ordered list of strings with prefix search.

    Strings compare by code point, so every string starting with a prefix
    sorts between the prefix itself and the prefix with its last character
    incremented.

    Example:
        >>> names = OrderedStringList(["ant", "bar", "animal", "apple"])
        >>> names.get_range_by_prefix("an")
        ['animal', 'ant']
    """

    def __init__(self,
                 items: Optional[Iterable[str]] = None,
                 overflow_policy: PrefixOverflowPolicy = PrefixOverflowPolicy.CARRY):
        """Create an ordered string list.

        Args:
            items: Initial strings
            overflow_policy: What prefix search does when the prefix ends in
                the highest code point

        Raises:
            InvalidArgumentError: If any item is not a string
        """
        contracts.require_sequence_optional(items, "Invalid initial items")
        items = list(items) if items is not None else []
        contracts.require(
            all(isinstance(item, str) for item in items),
            "OrderedStringList items must be strings"
        )
        contracts.require(
            isinstance(overflow_policy, PrefixOverflowPolicy),
            "Invalid prefix overflow policy"
        )
        super().__init__(items)
        self.overflow_policy = overflow_policy

    @staticmethod
    def _get_end_value(start_value: str) -> Optional[str]:
        """Calculate the exclusive end of a prefix range.

        Increments the code point of the last character. Trailing characters
        that are already the highest code point are dropped first and the
        increment carries to the character before them. Returns None when
        every character is the highest code point, as no string above the
        prefix can then fail to start with it.
        """
        stem = start_value.rstrip(MAX_CHAR)
        if not stem:
            return None
        return stem[:-1] + chr(ord(stem[-1]) + 1)

    @staticmethod
    def _get_next_value(start_value: str) -> str:
        """Return the lowest string that sorts after the input."""
        return start_value + chr(0)

    def get_range_by_prefix(self, prefix: str, exclude_original: bool = False) -> List[str]:
        """Retrieve every item that starts with prefix.

        Args:
            prefix: Non-empty prefix string
            exclude_original: Whether to leave out items equal to the prefix

        Returns:
            Matching strings in sorted order

        Raises:
            InvalidArgumentError: If prefix is empty or not a string, or it
                ends in the highest code point under the ERROR policy
        """
        contracts.require_non_empty_string(prefix, "Empty prefix")
        contracts.require_bool(exclude_original, "Invalid exclude_original flag")

        if prefix[-1] == MAX_CHAR:
            if self.overflow_policy == PrefixOverflowPolicy.ERROR:
                raise InvalidArgumentError(
                    f"Prefix {prefix!r} ends in the highest code point"
                )
            logger.debug("Prefix %r ends in the highest code point, carrying", prefix)
        end_value = self._get_end_value(prefix)

        start_value = self._get_next_value(prefix) if exclude_original else prefix
        return self.get_range(start_value, end_value)

    def add_item(self, value: str) -> int:
        contracts.require_string(value, "OrderedStringList items must be strings")
        return super().add_item(value)

    def add_items(self, values: Iterable[str]) -> 'OrderedStringList':
        contracts.require_sequence(values, "Invalid item values")
        values = list(values)
        contracts.require(
            all(isinstance(value, str) for value in values),
            "OrderedStringList items must be strings"
        )
        super().add_items(values)
        return self

    def remove_all(self, value: str) -> 'OrderedStringList':
        """Remove every occurrence of a string.

        Args:
            value: String to remove

        Returns:
            self
        """
        contracts.require_string(value, "Invalid value")
        self.remove_range(value, self._get_next_value(value))
        return self
