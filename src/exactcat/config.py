"""ContextVar-based concatenation configuration for exactcat.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The pipeline reads the active config once per concatenation call.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from exactcat import cat
    from exactcat.config import CatConfig, cat_config_context

    # Skip the final UTF-8 check on a hot path
    with cat_config_context(CatConfig(validate_utf8=False)):
        line = cat("request ", 42, " done")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CatConfig:
    """Immutable concatenation configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        validate_utf8: Decode text output strictly. When False, invalid
            sequences are carried through as lone surrogates
            (``surrogateescape``) instead of raising.
        check_lengths: Compare every element's written byte count with its
            declared length and raise on mismatch.

    """

    validate_utf8: bool = True
    check_lengths: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "CatConfig":
        """Create CatConfig from dictionary.

        Only includes keys that are valid CatConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                CatConfig attribute names.

        Returns:
            New CatConfig instance with values from dict.

        Example:
            >>> config = CatConfig.from_dict({
            ...     "validate_utf8": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.validate_utf8
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: CatConfig = CatConfig()

_cat_config: ContextVar[CatConfig] = ContextVar(
    "cat_config",
    default=_DEFAULT_CONFIG,
)


def get_cat_config() -> CatConfig:
    """Get current concatenation configuration (thread-local).

    Returns:
        The active CatConfig for this thread/context.

    """
    return _cat_config.get()


def set_cat_config(config: CatConfig) -> None:
    """Set concatenation configuration for current context.

    Args:
        config: CatConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _cat_config.set(config)


def reset_cat_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _cat_config.set(_DEFAULT_CONFIG)


@contextmanager
def cat_config_context(config: CatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: CatConfig to use within the context.

    Yields:
        None

    Example:
        >>> with cat_config_context(CatConfig(check_lengths=False)):
        ...     s = cat("a", 1)
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _cat_config.get()
    _cat_config.set(config)
    try:
        yield
    finally:
        _cat_config.set(previous)


__all__ = [
    "CatConfig",
    "get_cat_config",
    "set_cat_config",
    "reset_cat_config",
    "cat_config_context",
]
