# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for catalog widths and type inference
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the compiler. These can be overridden via
environment variables, or by passing an explicit CompilerDefaults to
default_catalog() / SchemaCompiler.

Design:
- Immutable dataclass for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CompilerDefaults:
    """
    Defaults for category widths and inference.

    Widths for string categories are maximum character counts; integer
    widths are bits.
    """
    # Conventional maximum for free text and most string categories
    default_text_width: int = 255

    # MSI identifiers are limited to 72 characters
    identifier_width: int = 72

    # {XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX}
    guid_width: int = 38

    # Width inferred for a plain `int` annotation (16 or 32)
    plain_int_width: int = 32

    def __post_init__(self):
        if self.plain_int_width not in (16, 32):
            raise ValueError(
                f"plain_int_width must be 16 or 32, got {self.plain_int_width}"
            )
        for name in ("default_text_width", "identifier_width", "guid_width"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @classmethod
    def from_env(cls) -> "CompilerDefaults":
        """Create from environment variables."""
        return cls(
            default_text_width=int(os.getenv("MSI_SCHEMA_DEFAULT_TEXT_WIDTH", 255)),
            identifier_width=int(os.getenv("MSI_SCHEMA_IDENTIFIER_WIDTH", 72)),
            guid_width=int(os.getenv("MSI_SCHEMA_GUID_WIDTH", 38)),
            plain_int_width=int(os.getenv("MSI_SCHEMA_PLAIN_INT_WIDTH", 32)),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

_defaults: Optional[CompilerDefaults] = None


def get_defaults() -> CompilerDefaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = CompilerDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CompilerDefaults",
    "get_defaults",
    "reset_defaults",
]
