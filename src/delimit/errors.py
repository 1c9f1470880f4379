"""Exception classes for delimit.

Provides standardized exceptions for error handling throughout delimit.
Reader failures are not wrapped: they propagate from the source unchanged.
"""

from __future__ import annotations


class DelimitError(Exception):
    """Base exception for all delimit errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(DelimitError):
    """Invalid scan configuration value."""

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending ScanConfig field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"Invalid config '{field}': {message}")


class WindowOverflowError(DelimitError):
    """Unresolved scan window grew past the configured limit.

    Raised when ``max_window`` is set and the engine would need to read
    more input to resolve the current window.
    """

    def __init__(self, window_size: int, max_window: int) -> None:
        """Initialize window overflow error.

        Args:
            window_size: Bytes buffered when the limit was hit
            max_window: Configured limit
        """
        self.window_size = window_size
        self.max_window = max_window
        super().__init__(
            f"Scan window of {window_size} bytes reached max_window={max_window} "
            "without resolving a region"
        )


class EngineStateError(DelimitError):
    """Operation not valid in the engine's current state.

    Engines are single-use: a second run raises this error.
    """

    pass
