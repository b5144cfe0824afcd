# ============================================================================
# IDENTIFIER GENERATION
# ============================================================================
# STATUS: Core - Primary identifier values
# PURPOSE: Hand out unused, table-prefixed identifiers
# CREATED: 18 OCT 2026
# EXPORTS: IdentifierGenerator
# ============================================================================
"""
Identifier Generation

Tables whose primary identifier is marked `generated` can have its values
supplied instead of written by hand. A generator for the Directory table
issues DIRECTORY1, DIRECTORY2, ...

Identifiers live in one namespace per installer database, so every
generator of a database shares one `used` set. It holds every identifier
already sitting in a primary-key column; candidates found there are
skipped, and each issued identifier is added to it.
"""

from typing import Optional, Set


class IdentifierGenerator:
    """Sequential identifiers for one table, skipping any already used."""

    def __init__(self, prefix: str, used: Optional[Set[str]] = None):
        if not prefix:
            raise ValueError("identifier prefix must not be empty")
        self.prefix = prefix
        self.used = used if used is not None else set()
        self.count = 0

    def __repr__(self) -> str:
        return f"IdentifierGenerator({self.prefix!r}, count={self.count})"

    def generate(self) -> str:
        """Next identifier not in the used set. Marks it used."""
        while True:
            self.count += 1
            candidate = f"{self.prefix}{self.count}"
            if candidate not in self.used:
                self.used.add(candidate)
                return candidate


__all__ = ["IdentifierGenerator"]
