"""Data models for package identity."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PackageIdentity:
    """A validated package id with its normalized version."""
    id: str
    version: str
    raw_token: str = ""

    @property
    def key(self) -> "PackageKey":
        """Case-insensitive lookup key; package ids are not case sensitive."""
        return (self.id.lower(), self.version.lower())

    def __str__(self) -> str:
        return f"{self.id} {self.version}"


# Type alias for stable map key for lookups.
PackageKey = Tuple[str, str]
