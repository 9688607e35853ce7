"""
Swallow Configuration
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field

from .layouts.disambiguation import PartialPolicy

TRUE_VALUES = ("1", "true", "yes", "on")


def parse_flag(value: "str | bool | None") -> bool:
    """Parse an on/off value from the environment."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return value.strip().lower() in TRUE_VALUES


@dataclass
class SwallowConfig:
    """Swallow configuration."""

    # Used when a command does not say whether to be aggressive
    aggressive: bool = False

    # Neighbors whose windows only partly face the focus
    partial_policy: PartialPolicy = PartialPolicy.AGGRESSIVE

    # Compare window rectangles, not only the window set, against the snapshot
    check_stale_geometry: bool = True

    # Print diagnostics and every bus event
    debug: bool = field(default_factory=lambda: parse_flag(os.getenv("SWALLOW_DEBUG")))

    def __post_init__(self):
        """Parse policy names into enum values."""
        self.partial_policy = PartialPolicy.parse(self.partial_policy)

    @classmethod
    def from_env(cls, **overrides) -> "SwallowConfig":
        """
        Build a configuration from SWALLOW_* environment variables.

        Reads SWALLOW_AGGRESSIVE, SWALLOW_PARTIAL_POLICY and SWALLOW_DEBUG.
        Keyword arguments take precedence over the environment.
        """
        values = {
            "aggressive": parse_flag(os.getenv("SWALLOW_AGGRESSIVE")),
            "partial_policy": os.getenv("SWALLOW_PARTIAL_POLICY", "aggressive"),
            "debug": parse_flag(os.getenv("SWALLOW_DEBUG")),
        }
        values.update(overrides)
        return cls(**values)
