"""ContextVar-based scan configuration for delimit.

Provides context-local configuration using Python's ContextVars (PEP 567).
An engine captures the active config when it is constructed, unless one is
passed explicitly.

Usage:
    # Explicit config
    engine = RegionReplacer(reader, pairs, config=ScanConfig(read_size=65536))

    # Or set it for every engine built in the context
    with scan_config_context(ScanConfig(max_window=1 << 20)):
        engine = RegionReplacer(reader, pairs)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from delimit.errors import ConfigError

DEFAULT_READ_SIZE = 4096


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        read_size: Bytes requested from the reader per refill
        max_window: Largest unresolved window allowed before
            WindowOverflowError is raised (None = unbounded)

    """

    read_size: int = DEFAULT_READ_SIZE
    max_window: int | None = None

    def __post_init__(self) -> None:
        if self.read_size < 1:
            raise ConfigError("read_size", f"must be >= 1, got {self.read_size}")
        if self.max_window is not None and self.max_window < 1:
            raise ConfigError("max_window", f"must be >= 1 or None, got {self.max_window}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ScanConfig attribute names.

        Returns:
            New ScanConfig instance with values from dict.

        Example:
            >>> config = ScanConfig.from_dict({"read_size": 512, "verbose": True})
            >>> config.read_size
            512

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get the scan configuration active in this context."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for the current context.

    Args:
        config: ScanConfig instance to use for this context.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to the module-level default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ScanConfig to use within the context.

    Yields:
        None

    Example:
        >>> with scan_config_context(ScanConfig(read_size=1)):
        ...     get_scan_config().read_size
        1

    Properly restores the previous config even if an exception is raised.

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "DEFAULT_READ_SIZE",
    "ScanConfig",
    "get_scan_config",
    "reset_scan_config",
    "scan_config_context",
    "set_scan_config",
]
