"""Testing utilities for DazzleStructLib consumers."""

from .fixtures import RecordingHandler, sample_structure, SAMPLE_KEYS, SAMPLE_PATHS

__all__ = ['RecordingHandler', 'sample_structure', 'SAMPLE_KEYS', 'SAMPLE_PATHS']
