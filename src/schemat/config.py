"""ContextVar-based format configuration for schemat.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The layout style is fixed; the only setting is the column budget handed
to the layout engine.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Per call
    from schemat import format
    text = format(source, max_width=100)

    # For a block of calls
    from schemat.config import FormatConfig, format_config_context

    with format_config_context(FormatConfig(max_width=100)):
        text = format(source)

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

DEFAULT_MAX_WIDTH = 80
INDENT_WIDTH = 2


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable format configuration.

    Attributes:
        max_width: Column budget for the layout engine

    """

    max_width: int = DEFAULT_MAX_WIDTH

    def __post_init__(self) -> None:
        if self.max_width < 1:
            raise ValueError(f"max_width must be positive, got {self.max_width}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FormatConfig":
        """Create FormatConfig from dictionary.

        Only includes keys that are valid FormatConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                FormatConfig attribute names.

        Returns:
            New FormatConfig instance with values from dict.

        Example:
            >>> FormatConfig.from_dict({"max_width": 100, "color": True}).max_width
            100

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: FormatConfig = FormatConfig()

# Thread-local configuration via ContextVar
_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current format configuration (thread-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set format configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.

    """
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to the module-level default configuration."""
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with format_config_context(FormatConfig(max_width=40)):
        ...     get_format_config().max_width
        40

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "DEFAULT_MAX_WIDTH",
    "INDENT_WIDTH",
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
]
