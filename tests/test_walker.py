"""Unit tests for the TreeWalker cursor and the walker factory."""

import sys
import unittest
from pathlib import Path as FsPath

# Add parent directory to path for imports
sys.path.insert(0, str(FsPath(__file__).parent.parent))

from dazzlestructlib import (
    STOP,
    InvalidArgumentError,
    IterativeTreeWalker,
    Path,
    RecursiveTreeWalker,
    TraversalInProgressError,
    TraversalStrategy,
    TreeWalker,
    WalkerState,
    create_walker,
)
from dazzlestructlib.testing import RecordingHandler, sample_structure


class TestWalkerCursor(unittest.TestCase):
    """Test cursor state before, during and after a walk."""

    def setUp(self):
        self.handler = RecordingHandler()
        self.walker = IterativeTreeWalker(self.handler)

    def test_initially_idle(self):
        self.assertEqual(self.walker.state, WalkerState.IDLE)
        self.assertIsNone(self.walker.current_key)
        self.assertIsNone(self.walker.current_node)
        self.assertIsNone(self.walker.current_path)
        self.assertFalse(self.walker.walking)
        self.assertFalse(self.walker.stopped)

    def test_cursor_after_walk(self):
        """The cursor is reset once the walk finishes."""
        result = self.walker.walk(sample_structure())
        self.assertIs(result, self.walker)
        self.assertEqual(self.walker.state, WalkerState.IDLE)
        self.assertIsNone(self.walker.current_key)
        self.assertIsNone(self.walker.current_node)
        self.assertIsNone(self.walker.current_path)
        self.assertFalse(self.walker.walking)
        self.assertFalse(self.walker.stopped)
        self.assertEqual(self.handler.calls[-1], (Path('moo.says'), 'says'))

    def test_cursor_after_stopped_walk(self):
        """A cancelled walk keeps the stopped flag but not the cursor."""
        walker = IterativeTreeWalker(RecordingHandler(stop_at='boo'))
        walker.walk(sample_structure())
        self.assertTrue(walker.stopped)
        self.assertEqual(walker.state, WalkerState.IDLE)
        self.assertIsNone(walker.current_path)

    def test_cursor_during_walk(self):
        seen = []

        def handler(path, key):
            seen.append((walker.walking, walker.current_key, walker.current_path, path))

        walker = IterativeTreeWalker(handler)
        walker.walk({'a': {'b': 1}})
        self.assertEqual(seen, [
            (True, 'a', Path('a'), Path('a')),
            (True, 'b', Path('a.b'), Path('a.b')),
        ])

    def test_empty_root_leaves_cursor_idle(self):
        self.walker.walk({})
        self.assertEqual(self.walker.state, WalkerState.IDLE)
        self.assertEqual(self.handler.calls, [])

    def test_reset(self):
        self.walker.walk(sample_structure())
        self.assertIs(self.walker.reset(), self.walker)
        self.assertEqual(self.walker.state, WalkerState.IDLE)
        self.assertIsNone(self.walker.current_node)
        self.assertIs(self.walker.reset().reset(), self.walker)
        self.assertEqual(self.walker.state, WalkerState.IDLE)

    def test_reset_keeps_stop_flag(self):
        walker = IterativeTreeWalker(RecordingHandler(stop_at='hello'))
        walker.walk(sample_structure())
        walker.reset()
        self.assertTrue(walker.stopped)

    def test_stop_flag_cleared_by_next_walk(self):
        walker = IterativeTreeWalker(RecordingHandler(stop_at='hello'))
        walker.walk(sample_structure())
        self.assertTrue(walker.stopped)
        walker.walk({'other': 1})
        self.assertFalse(walker.stopped)

    def test_walker_reusable(self):
        data = sample_structure()
        self.walker.walk(data)
        self.walker.walk(data)
        self.assertEqual(len(self.handler.calls), 14)


class TestWalkerArguments(unittest.TestCase):
    """Test argument checks on walkers."""

    def test_non_callable_handler(self):
        for walker_class in (IterativeTreeWalker, RecursiveTreeWalker):
            with self.assertRaises(InvalidArgumentError):
                walker_class('not callable')

    def test_non_composite_root(self):
        walker = RecursiveTreeWalker(RecordingHandler())
        for root in ['text', 5, None]:
            with self.assertRaises(InvalidArgumentError):
                walker.walk(root)
        self.assertFalse(walker.walking)

    def test_abstract_base(self):
        with self.assertRaises(TypeError):
            TreeWalker(RecordingHandler())

    def test_stop_sentinel(self):
        self.assertEqual(repr(STOP), 'STOP')
        self.assertIs(type(STOP)(), STOP)


class TestWalkerReentrancy(unittest.TestCase):
    """A walker cannot be walked again from inside its own handler."""

    def test_nested_walk_raises(self):
        for walker_class in (IterativeTreeWalker, RecursiveTreeWalker):
            def handler(path, key):
                walker.walk({'x': 1})

            walker = walker_class(handler)
            with self.assertRaises(TraversalInProgressError):
                walker.walk({'a': 1})
            self.assertFalse(walker.walking)

    def test_fresh_walker_inside_handler(self):
        inner_keys = []

        def handler(path, key):
            IterativeTreeWalker(lambda p, k: inner_keys.append(k)).walk({'x': 1})

        IterativeTreeWalker(handler).walk({'a': 1, 'b': 2})
        self.assertEqual(inner_keys, ['x', 'x'])

    def test_handler_errors_propagate(self):
        def handler(path, key):
            raise KeyError(key)

        walker = IterativeTreeWalker(handler)
        with self.assertRaises(KeyError):
            walker.walk({'a': 1})
        self.assertFalse(walker.walking)
        self.assertEqual(walker.state, WalkerState.IDLE)
        walker.handler = RecordingHandler()
        walker.walk({'a': 1})
        self.assertEqual(walker.handler.keys, ['a'])


class TestCreateWalker(unittest.TestCase):
    """Test strategy selection."""

    def test_by_enum(self):
        handler = RecordingHandler()
        self.assertIsInstance(create_walker(TraversalStrategy.ITERATIVE, handler), IterativeTreeWalker)
        self.assertIsInstance(create_walker(TraversalStrategy.RECURSIVE, handler), RecursiveTreeWalker)

    def test_by_name(self):
        handler = RecordingHandler()
        self.assertIsInstance(create_walker('iterative', handler), IterativeTreeWalker)
        self.assertIsInstance(create_walker('STACK', handler), IterativeTreeWalker)
        self.assertIsInstance(create_walker('recursive', handler), RecursiveTreeWalker)
        self.assertIsInstance(create_walker('Recursion', handler), RecursiveTreeWalker)

    def test_unknown_strategy(self):
        with self.assertRaises(InvalidArgumentError):
            create_walker('breadth-first', RecordingHandler())
        with self.assertRaises(InvalidArgumentError):
            create_walker(3, RecordingHandler())

    def test_invalid_handler(self):
        with self.assertRaises(InvalidArgumentError):
            create_walker(TraversalStrategy.ITERATIVE, None)


if __name__ == '__main__':
    unittest.main()
