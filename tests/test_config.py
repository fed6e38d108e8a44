"""Unit tests for configuration and logging setup."""

import logging
import os
import sys
import unittest
from pathlib import Path as FsPath
from unittest import mock

# Add parent directory to path for imports
sys.path.insert(0, str(FsPath(__file__).parent.parent))

from dazzlestructlib import PrefixOverflowPolicy, TraversalStrategy, TreeConfig
from dazzlestructlib.logger import LOG_LEVEL_ENV, ROOT_LOGGER_NAME, get_logger, setup_logger


class TestTreeConfig(unittest.TestCase):
    """Test TreeConfig defaults, factories and validation."""

    def test_defaults(self):
        config = TreeConfig()
        self.assertEqual(config.strategy, TraversalStrategy.ITERATIVE)
        self.assertTrue(config.strict_segments)
        self.assertIsNone(config.max_depth_hint)
        self.assertEqual(config.validate(), [])

    def test_factories(self):
        self.assertEqual(TreeConfig.iterative().strategy, TraversalStrategy.ITERATIVE)

        recursive = TreeConfig.recursive(max_depth_hint=50)
        self.assertEqual(recursive.strategy, TraversalStrategy.RECURSIVE)
        self.assertEqual(recursive.max_depth_hint, 50)

        self.assertFalse(TreeConfig.permissive().strict_segments)

    def test_invalid_strategy(self):
        errors = TreeConfig(strategy='iterative').validate()
        self.assertEqual(len(errors), 1)
        self.assertIn("strategy", errors[0])

    def test_invalid_strict_segments(self):
        self.assertEqual(len(TreeConfig(strict_segments=1).validate()), 1)

    def test_invalid_depth_hints(self):
        for hint in [0, -5, True, 1.5, '10']:
            errors = TreeConfig(max_depth_hint=hint).validate()
            self.assertEqual(len(errors), 1, f"hint {hint!r} should be rejected")

    def test_multiple_errors(self):
        config = TreeConfig(strategy=None, strict_segments=None, max_depth_hint=0)
        self.assertEqual(len(config.validate()), 3)

    def test_exceeds_recursion_limit(self):
        limit = sys.getrecursionlimit()
        self.assertTrue(TreeConfig.recursive(max_depth_hint=limit + 1).exceeds_recursion_limit())
        self.assertFalse(TreeConfig.recursive(max_depth_hint=10).exceeds_recursion_limit())
        self.assertFalse(TreeConfig.recursive().exceeds_recursion_limit())
        self.assertFalse(TreeConfig(max_depth_hint=limit * 10).exceeds_recursion_limit())

    def test_enum_values(self):
        self.assertEqual(TraversalStrategy('recursive'), TraversalStrategy.RECURSIVE)
        self.assertEqual(PrefixOverflowPolicy('carry'), PrefixOverflowPolicy.CARRY)


class TestLogger(unittest.TestCase):
    """Test the logging helpers."""

    def setUp(self):
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self.saved = (list(self.root_logger.handlers), self.root_logger.level,
                      self.root_logger.propagate)

    def tearDown(self):
        handlers, level, propagate = self.saved
        self.root_logger.handlers = handlers
        self.root_logger.setLevel(level)
        self.root_logger.propagate = propagate

    def _stream_handlers(self):
        return [h for h in self.root_logger.handlers
                if not isinstance(h, logging.NullHandler)]

    def test_get_logger_namespace(self):
        logger = get_logger("core.tree")
        self.assertEqual(logger.name, "dazzlestructlib.core.tree")
        self.assertIs(logger.parent, self.root_logger)

    def test_library_is_silent_by_default(self):
        self.assertTrue(any(isinstance(h, logging.NullHandler)
                            for h in self.root_logger.handlers))

    def test_setup_logger(self):
        logger = setup_logger("DEBUG")
        self.assertIs(logger, self.root_logger)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertFalse(logger.propagate)
        self.assertEqual(len(self._stream_handlers()), 1)

    def test_setup_logger_once(self):
        setup_logger("INFO")
        setup_logger("DEBUG")
        self.assertEqual(len(self._stream_handlers()), 1)
        self.assertEqual(self.root_logger.level, logging.INFO)

    def test_level_from_environment(self):
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: "WARNING"}):
            logger = setup_logger()
        self.assertEqual(logger.level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
