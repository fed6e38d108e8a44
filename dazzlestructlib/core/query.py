"""Per-level query patterns for Tree.query().

A query is an ordered sequence of matchers, usually one per nesting level:

- ExactKey: matches one key
- Wildcard: matches any key
- Options: matches any of a fixed set of keys
- Skip: matches any run of levels, so the next matcher may sit at any depth
- ValuePredicate: final level only; matches any key whose node value
  satisfies a predicate
- KeyValue: final level only; a key matcher plus the value the node must hold

Raw patterns are converted as follows: matcher instances are kept, callables
become a ValuePredicate, lists and tuples become Options, and strings are
parsed with the marker syntax below. Numbers and booleans are normalized
into an ExactKey.

String marker syntax (per level):

    ``*``          any key
    ``\\``         skip any number of levels
    ``a<b<c``      one of the listed keys
    ``key^value``  key (or ``*`` / options) whose node equals value

    >>> Query('users.*.email').depth
    3
    >>> Query('\\\\.name^ada').matches(Path('team.lead.name'), 'ada')
    True
"""

from dataclasses import dataclass
from typing import Any, Callable, Sequence, Tuple, Union

from .._common import contracts
from .._common.segments import SegmentKind, normalize_segment, segment_kind
from .path import PATH_DELIMITER, Path

WILDCARD_MARKER = '*'
SKIP_MARKER = '\\'
OPTION_SEPARATOR = '<'
VALUE_SEPARATOR = '^'


@dataclass(frozen=True)
class ExactKey:
    """Matches exactly one key."""
    key: Any

    def matches_key(self, key: Any) -> bool:
        return key == self.key

    def matches_node(self, node: Any) -> bool:
        return True


@dataclass(frozen=True)
class Wildcard:
    """Matches any key at its level."""

    def matches_key(self, key: Any) -> bool:
        return True

    def matches_node(self, node: Any) -> bool:
        return True


@dataclass(frozen=True)
class Options:
    """Matches any of the listed keys."""
    keys: Tuple[Any, ...]

    def matches_key(self, key: Any) -> bool:
        return key in self.keys

    def matches_node(self, node: Any) -> bool:
        return True


@dataclass(frozen=True)
class Skip:
    """Matches zero or more levels.

    A trailing Skip needs at least one level, so ``a.\\`` selects what is
    below ``a`` but not ``a`` itself.
    """

    def matches_key(self, key: Any) -> bool:
        return True

    def matches_node(self, node: Any) -> bool:
        return True


@dataclass(frozen=True)
class ValuePredicate:
    """Matches any key whose node value satisfies the predicate."""
    predicate: Callable[[Any], bool]

    def matches_key(self, key: Any) -> bool:
        return True

    def matches_node(self, node: Any) -> bool:
        return bool(self.predicate(node))


@dataclass(frozen=True)
class KeyValue:
    """Matches a key whose node holds a given value.

    Values are compared after segment normalization, so ``'5'`` matches a
    stored ``5`` and ``'true'`` matches a stored ``True``.
    """
    key: Union[ExactKey, Wildcard, Options]
    value: Any

    def matches_key(self, key: Any) -> bool:
        return self.key.matches_key(key)

    def matches_node(self, node: Any) -> bool:
        return normalize_segment(node) == normalize_segment(self.value)


Matcher = Union[ExactKey, Wildcard, Options, Skip, ValuePredicate, KeyValue]

_MATCHER_TYPES = (ExactKey, Wildcard, Options, Skip, ValuePredicate, KeyValue)
_NODE_MATCHER_TYPES = (ValuePredicate, KeyValue)

WILDCARD = Wildcard()
SKIP = Skip()


def _to_key(value: Any) -> Any:
    contracts.require(
        segment_kind(value) == SegmentKind.KEY,
        f"Invalid query key: {value!r}"
    )
    return normalize_segment(value)


def _to_options(keys: Sequence[Any]) -> Options:
    contracts.require(len(keys) > 0, "Key options cannot be empty")
    return Options(tuple(_to_key(key) for key in keys))


def _parse_key(text: str) -> Union[ExactKey, Wildcard, Options]:
    if text == WILDCARD_MARKER:
        return WILDCARD
    if OPTION_SEPARATOR in text:
        return _to_options(text.split(OPTION_SEPARATOR))
    return ExactKey(text)


def _parse_string(pattern: str) -> Matcher:
    key_text, separator, value = pattern.partition(VALUE_SEPARATOR)
    if key_text == SKIP_MARKER:
        contracts.require(not separator, "A skip pattern cannot carry a value")
        return SKIP

    key = _parse_key(key_text)
    if separator:
        return KeyValue(key, value)
    return key


def _to_matcher(pattern: Any) -> Matcher:
    if isinstance(pattern, _MATCHER_TYPES):
        return pattern
    if isinstance(pattern, str):
        return _parse_string(pattern)
    if callable(pattern):
        return ValuePredicate(pattern)
    if isinstance(pattern, (list, tuple)):
        return _to_options(pattern)
    return ExactKey(_to_key(pattern))


class Query:
    """A compiled sequence of matchers.

    Without Skip matchers a path matches when it has one segment per
    matcher. Each Skip absorbs any run of segments in between.

    Example:
        >>> query = Query(['foo', '*', lambda value: value == 'x'])
        >>> query.matches(Path('foo.boo.1'), 'x')
        True
        >>> Query('foo.\\\\.1').matches(Path('foo.boo.1'), 'x')
        True
    """

    def __init__(self, patterns: Union[str, Sequence[Any], 'Query']):
        """Compile patterns into matchers.

        Args:
            patterns: Sequence of raw patterns, a dot-separated string
                using the marker syntax, or another Query

        Raises:
            InvalidArgumentError: If patterns are empty, a pattern has an
                invalid shape, or a value constraint is not at the last level
        """
        if isinstance(patterns, Query):
            self.matchers: Tuple[Matcher, ...] = patterns.matchers
            return

        if isinstance(patterns, str):
            raw = patterns.split(PATH_DELIMITER) if patterns else []
        else:
            contracts.require_sequence(patterns, "Invalid query patterns")
            raw = list(patterns)

        contracts.require(len(raw) > 0, "Query needs at least one pattern")
        matchers = [_to_matcher(pattern) for pattern in raw]
        for matcher in matchers[:-1]:
            contracts.require(
                not isinstance(matcher, _NODE_MATCHER_TYPES),
                "Value constraints are only allowed at the last level"
            )
        self.matchers = tuple(matchers)

    @property
    def depth(self) -> int:
        """Number of matchers, Skip included."""
        return len(self.matchers)

    @property
    def stem(self) -> Path:
        """Longest leading run of exact keys, as a Path.

        Every path the query matches starts with the stem, so a search can
        begin at the node the stem addresses.
        """
        keys = []
        for matcher in self.matchers:
            if not isinstance(matcher, ExactKey):
                break
            keys.append(matcher.key)
        return Path._from_segments(tuple(keys))

    def matches(self, path: Path, node: Any) -> bool:
        """Check if a visited element matches the query.

        Args:
            path: Path of the element from the root
            node: Value of the element

        Returns:
            True if the segments of path line up with the matchers and the
            last matcher accepts the node
        """
        matchers = self.matchers
        if isinstance(matchers[-1], Skip):
            # At least one level below what precedes the trailing skip
            matchers = matchers[:-1] + (WILDCARD, SKIP)
        if not _match_keys(matchers, path.segments):
            return False
        return matchers[-1].matches_node(node)

    def __repr__(self) -> str:
        return f"Query({list(self.matchers)!r})"


def _match_keys(matchers: Tuple[Matcher, ...], segments: Tuple[Any, ...]) -> bool:
    """Match segments against matchers, each Skip taking zero or more segments.

    Backtracks to the most recent Skip on a mismatch.
    """
    i = j = 0
    skip_at = -1
    resume_at = 0
    while i < len(segments):
        if j < len(matchers) and isinstance(matchers[j], Skip):
            skip_at, resume_at = j, i
            j += 1
        elif j < len(matchers) and matchers[j].matches_key(segments[i]):
            i += 1
            j += 1
        elif skip_at >= 0:
            # Let the last Skip absorb one more segment and retry
            resume_at += 1
            i, j = resume_at, skip_at + 1
        else:
            return False

    while j < len(matchers) and isinstance(matchers[j], Skip):
        j += 1
    return j == len(matchers)


__all__ = [
    'ExactKey',
    'Wildcard',
    'Options',
    'Skip',
    'ValuePredicate',
    'KeyValue',
    'WILDCARD',
    'SKIP',
    'WILDCARD_MARKER',
    'SKIP_MARKER',
    'OPTION_SEPARATOR',
    'VALUE_SEPARATOR',
    'Query',
    'Matcher',
]
