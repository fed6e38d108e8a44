"""Exception types for DazzleStructLib.

Every violation is a programmer error surfaced immediately to the caller.
Nothing in the library retries or recovers from these.
"""


class DazzleStructError(Exception):
    """Base class for all DazzleStructLib errors."""
    pass


class InvalidArgumentError(DazzleStructError, ValueError):
    """Raised when an argument is missing, mis-shaped, or violates a precondition.

    Always raised before any state is mutated.
    """
    pass


class DecodingError(DazzleStructError, ValueError):
    """Raised when a percent-encoded path segment cannot be decoded."""
    pass


class TraversalInProgressError(DazzleStructError, RuntimeError):
    """Raised when a walker is asked to walk while it is already walking."""
    pass


class ConfigurationError(DazzleStructError):
    """Raised when a configuration object fails validation."""
    pass
