"""ContextVar-based parse configuration for curlymark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set for the duration of a parse and read by the Parser.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # One-off, via the top-level API
    nodes = parse(source, config=ParseConfig(keep_comments=False))

    # Direct parser usage (advanced)
    from curlymark.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(keep_whitespace_text=False)):
        nodes = Parser(source).parse()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Note: source_file is per-call state, not configuration. It stays on
    the Parser instance.

    Attributes:
        keep_comments: Produce Comment nodes for ``<!-- -->``
        keep_whitespace_text: Produce PlainText nodes that contain only whitespace

    """

    keep_comments: bool = True
    keep_whitespace_text: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ParseConfig attribute names.

        Returns:
            New ParseConfig instance with values from dict.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "keep_comments": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.keep_comments
            False

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "curlymark_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton.
    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Args:
        config: ParseConfig to use within the context.

    Example:
        >>> with parse_config_context(ParseConfig(keep_comments=False)):
        ...     nodes = Parser("<!-- x --><br/>").parse()
        >>> len(nodes)
        1

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
