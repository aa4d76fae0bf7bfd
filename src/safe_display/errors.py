"""Exception taxonomy.

The normalizer raises ``SerializationFailure``, ``MalformedRecord`` and
``DepthExceeded`` internally and always recovers from them; callers of
``normalize``/``display`` never see them. ``ConfigError`` is the one that
propagates, for unreadable or invalid configuration.
"""

from __future__ import annotations


class SafeDisplayError(Exception):
    """Base class for every error defined by safe_display."""


class SerializationFailure(SafeDisplayError):
    """An opaque object could not be structurally serialized."""


class MalformedRecord(SafeDisplayError):
    """A record's identifier cannot be converted to a string."""


class DepthExceeded(SafeDisplayError):
    """Nesting went past ``NormalizeConfig.max_depth``."""

    def __init__(self, depth: int) -> None:
        super().__init__(f"nesting depth {depth} exceeds the configured maximum")
        self.depth = depth


class ConfigError(SafeDisplayError):
    """Configuration file or environment value is invalid."""
