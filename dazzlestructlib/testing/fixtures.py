"""Test fixtures for DazzleStructLib consumers.

These fixtures make it easy to check what a walker reported without
writing a handler by hand in every test.
"""

from typing import Any, List, Optional, Tuple

from ..core.walker import STOP

# Expected pre-order for sample_structure()
SAMPLE_KEYS = ['hello', 'foo', 'bar', 'boo', '1', 'moo', 'says']
SAMPLE_PATHS = ['hello', 'foo', 'foo.bar', 'foo.boo', 'foo.boo.1', 'moo', 'moo.says']


def sample_structure() -> dict:
    """Return a fresh copy of the reference nested structure."""
    return {
        'hello': 'world',
        'foo': {
            'bar': 'woohoo',
            'boo': {
                '1': 'x'
            }
        },
        'moo': {
            'says': 'cow'
        }
    }


class RecordingHandler:
    """Walker handler that records every (path, key) it receives.

    Example:
        handler = RecordingHandler(stop_at='1')
        IterativeTreeWalker(handler).walk(sample_structure())
        assert handler.keys == ['hello', 'foo', 'bar', 'boo', '1']
    """

    def __init__(self, stop_at: Optional[Any] = None):
        """Initialize the recorder.

        Args:
            stop_at: Key at which to return STOP (None = never stop)
        """
        self.stop_at = stop_at
        self.calls: List[Tuple[Any, Any]] = []

    def __call__(self, path, key):
        self.calls.append((path, key))
        if self.stop_at is not None and key == self.stop_at:
            return STOP
        return None

    @property
    def keys(self) -> List[Any]:
        return [key for _, key in self.calls]

    @property
    def paths(self) -> List[str]:
        return [str(path) for path, _ in self.calls]

    def clear(self) -> None:
        self.calls = []
