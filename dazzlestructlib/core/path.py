"""Path addresses for nested structures.

A Path is an immutable sequence of normalized segments identifying a
location in a nested key-value structure. It is built from a raw sequence
or from a dot-separated string.

    >>> Path('foo.bar').segments
    ('foo', 'bar')
    >>> str(Path(['foo', 5, True]))
    'foo.5.true'
"""

import re
from collections.abc import Mapping, MutableMapping, Sequence
from functools import total_ordering
from typing import Any, Iterable, Iterator, List, Tuple, Union
from urllib.parse import quote, unquote

from .._common import contracts
from .._common.nodes import COMPOSITE_SEQUENCE_TYPES, is_composite, is_hashable
from .._common.segments import SegmentKind, normalize_segment, segment_kind
from ..errors import DecodingError, InvalidArgumentError

PATH_DELIMITER = '.'

# A '%' not followed by two hex digits
_RE_BAD_PERCENT = re.compile(r'%(?![0-9A-Fa-f]{2})')


class _Absent:
    """Sentinel for nodes that do not exist."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'ABSENT'

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


def normalize(sequence: Iterable[Any]) -> List[Any]:
    """Normalize a raw sequence into path segments.

    Numbers and booleans become strings; strings, composite values and None
    are passed through unchanged.

    Args:
        sequence: Raw segment values

    Returns:
        List of normalized segments

    Example:
        >>> normalize(['foo', 5, True, {}, None])
        ['foo', '5', 'true', {}, None]
    """
    contracts.require_sequence(sequence, "Invalid path sequence")
    return [normalize_segment(value) for value in sequence]


def encode_segments(segments: Iterable[str]) -> List[str]:
    """Percent-encode each segment independently.

    Every reserved character is encoded, including the path delimiter, so
    encoded segments can be joined safely.

    Args:
        segments: Raw string segments

    Returns:
        Encoded segments, same order and count
    """
    contracts.require_sequence(segments, "Invalid segment sequence")
    encoded = []
    for segment in segments:
        contracts.require_string(segment, f"Segment {segment!r} is not a string")
        encoded.append(quote(segment, safe='').replace('.', '%2E'))
    return encoded


def decode_segments(segments: Iterable[str]) -> List[str]:
    """Decode percent-encoded segments independently.

    Args:
        segments: Encoded string segments

    Returns:
        Decoded segments, same order and count

    Raises:
        DecodingError: If a segment holds a malformed percent sequence or
            does not decode to valid UTF-8
    """
    contracts.require_sequence(segments, "Invalid segment sequence")
    decoded = []
    for segment in segments:
        contracts.require_string(segment, f"Segment {segment!r} is not a string")
        if _RE_BAD_PERCENT.search(segment):
            raise DecodingError(f"Malformed percent sequence in segment {segment!r}")
        try:
            decoded.append(unquote(segment, errors='strict'))
        except UnicodeDecodeError as e:
            raise DecodingError(f"Segment {segment!r} is not valid UTF-8: {e}") from e
    return decoded


def _child(node: Any, segment: Any) -> Any:
    """Look up a single child, returning ABSENT when it does not exist."""
    if isinstance(node, Mapping):
        return node.get(segment, ABSENT) if is_hashable(segment) else ABSENT
    if isinstance(node, COMPOSITE_SEQUENCE_TYPES):
        index = _as_index(segment)
        if index is not None and index < len(node):
            return node[index]
    return ABSENT


def _as_index(segment: Any):
    if isinstance(segment, str) and segment.isdigit():
        return int(segment)
    return None


@total_ordering
class Path:
    """Immutable address of a node in a nested structure.

    Equality, hashing and ordering are segment-wise. Ordering is total:
    plain keys sort before None segments, which sort before composite
    segments. Paths holding composite segments compare fine for equality
    but cannot be hashed.
    """

    __slots__ = ('_segments',)

    def __init__(self, address: Union['Path', str, Sequence, None] = None):
        """Create a path.

        Args:
            address: Dot-separated string, raw segment sequence, another
                Path, or None for the empty path

        Raises:
            InvalidArgumentError: If address has none of those shapes
        """
        if address is None:
            segments = ()
        elif isinstance(address, Path):
            segments = address.segments
        elif isinstance(address, str):
            segments = _split(address)
        elif isinstance(address, Mapping) or isinstance(address, bytes):
            raise InvalidArgumentError(f"Invalid path: {address!r}")
        elif isinstance(address, Iterable):
            segments = tuple(normalize(address))
        else:
            raise InvalidArgumentError(f"Invalid path: {address!r}")
        self._segments = segments

    @classmethod
    def _from_segments(cls, segments: Tuple[Any, ...]) -> 'Path':
        """Build a path from already-normalized segments."""
        path = cls.__new__(cls)
        path._segments = segments
        return path

    @classmethod
    def parse(cls, string: str) -> 'Path':
        """Parse a dot-separated string. The empty string is the empty path."""
        contracts.require_string(string, "Invalid path string")
        return cls._from_segments(_split(string))

    @classmethod
    def coerce(cls, value: Any) -> 'Path':
        """Return value if it is a Path, otherwise build one from it."""
        return value if isinstance(value, Path) else cls(value)

    @classmethod
    def from_encoded_string(cls, string: str) -> 'Path':
        """Parse a string produced by :meth:`to_encoded_string`.

        Raises:
            DecodingError: If a segment is not valid percent encoding
        """
        contracts.require_string(string, "Invalid path string")
        return cls._from_segments(tuple(decode_segments(_split(string))))

    # Accessors

    @property
    def segments(self) -> Tuple[Any, ...]:
        return self._segments

    @property
    def as_list(self) -> List[Any]:
        return list(self._segments)

    @property
    def last(self) -> Any:
        """The final segment, or None for the empty path."""
        return self._segments[-1] if self._segments else None

    @property
    def is_addressable(self) -> bool:
        """True when every segment is a plain key usable for tree addressing."""
        return all(segment_kind(s) == SegmentKind.KEY for s in self._segments)

    # Derived paths

    def clone(self) -> 'Path':
        return self._from_segments(self._segments)

    def trim(self) -> 'Path':
        """Return a new path without the last segment."""
        return self._from_segments(self._segments[:-1])

    def prepend(self, path: Union['Path', str, Sequence]) -> 'Path':
        """Return a new path with another path in front of this one."""
        return self._from_segments(Path.coerce(path).segments + self._segments)

    def append(self, *segments: Any) -> 'Path':
        """Return a new path with extra segments at the end."""
        return self._from_segments(self._segments + tuple(normalize(segments)))

    # Comparison

    def equals(self, other: Union['Path', str, Sequence]) -> bool:
        return self._segments == Path.coerce(other).segments

    def is_relative_to(self, root: 'Path') -> bool:
        """Tell whether root matches the beginning of this path entirely.

        Args:
            root: Candidate ancestor path

        Returns:
            True if this path starts with every segment of root
        """
        contracts.require(isinstance(root, Path), "Invalid path")
        root_segments = root.segments
        if len(root_segments) > len(self._segments):
            return False
        return self._segments[:len(root_segments)] == root_segments

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._segments == other._segments

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def _sort_key(self) -> Tuple[Tuple[int, str, str], ...]:
        return tuple(_segment_sort_key(segment) for segment in self._segments)

    def __hash__(self) -> int:
        return hash(self._segments)

    # Resolution

    def resolve(self, context: Any) -> Any:
        """Resolve this path against a nested structure.

        Args:
            context: Composite root to resolve against

        Returns:
            The node at the end of the path, or ABSENT if any step is missing

        Raises:
            InvalidArgumentError: If context is not composite
        """
        contracts.require(is_composite(context), "Invalid path context")

        result = context
        for segment in self._segments:
            result = _child(result, segment)
            if result is ABSENT:
                break
        return result

    def resolve_or_build(self, context: MutableMapping) -> Any:
        """Same as resolve, but builds the path where it does not exist.

        Missing or non-composite nodes along the way are replaced by empty
        dicts. Existing list nodes are descended into by index.

        Args:
            context: Mutable mapping to resolve against

        Returns:
            The node found or created at the end of the path

        Raises:
            InvalidArgumentError: If context is not a mutable mapping, or a
                list along the way cannot be indexed by the next segment
        """
        contracts.require(isinstance(context, MutableMapping), "Invalid path context")
        self._check_buildable(context)

        result = context
        for segment in self._segments:
            child = _child(result, segment)
            if not is_composite(child):
                child = {}
                result[segment] = child
            result = child
        return result

    def _check_buildable(self, context: Any) -> None:
        """Verify resolve_or_build can finish before it changes anything."""
        node = context
        for segment in self._segments:
            if isinstance(node, COMPOSITE_SEQUENCE_TYPES):
                index = _as_index(segment)
                contracts.require(
                    index is not None and index < len(node),
                    f"Cannot build segment {segment!r} inside a sequence"
                )
                node = node[index]
                # Sequence items cannot be replaced by a fresh dict
                contracts.require(
                    is_composite(node),
                    f"Cannot build below non-composite item {segment!r}"
                )
            else:
                contracts.require(is_hashable(segment), f"Unhashable segment {segment!r}")
                child = node.get(segment, ABSENT)
                # Everything below a missing or leaf child is freshly built
                node = child if is_composite(child) else {}

    # Serialization

    def to_string(self) -> str:
        """Join segments with the path delimiter."""
        return PATH_DELIMITER.join(str(segment) for segment in self._segments)

    def to_encoded_string(self) -> str:
        """Join percent-encoded segments, safe for segments holding '.'."""
        return PATH_DELIMITER.join(encode_segments([str(s) for s in self._segments]))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Path({self.to_string()!r})"

    # Sequence protocol

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._segments)

    def __getitem__(self, index):
        return self._segments[index]

    def __bool__(self) -> bool:
        return bool(self._segments)


_KIND_RANK = {SegmentKind.KEY: 0, SegmentKind.ABSENT: 1, SegmentKind.COMPOSITE: 2}


def _segment_sort_key(segment: Any) -> Tuple[int, str, str]:
    """Order keys first, then None, then composites by type name and repr."""
    kind = segment_kind(segment)
    if kind == SegmentKind.KEY:
        return (_KIND_RANK[kind], str(segment), '')
    if kind == SegmentKind.ABSENT:
        return (_KIND_RANK[kind], '', '')
    return (_KIND_RANK[kind], type(segment).__name__, repr(segment))


def _split(string: str) -> Tuple[str, ...]:
    if string == '':
        return ()
    return tuple(string.split(PATH_DELIMITER))


def check_addressable(path: Path) -> None:
    """Reject paths with composite or None segments.

    Raises:
        InvalidArgumentError: If any segment is not a plain key
    """
    contracts.require(path.is_addressable, f"Path {path!r} holds non-key segments")


__all__ = [
    'ABSENT',
    'PATH_DELIMITER',
    'Path',
    'normalize',
    'encode_segments',
    'decode_segments',
    'check_addressable',
]
