"""Deterministic framework orderings.

Non-equivalent order ranks identifiers by the precedence table (unknown
identifiers after, special frameworks last), then family name, version,
platform and profile.

Equivalent order is used among members of one equivalence class, where
precedence is tied by definition: family name ascending, version
descending, shorter profile first, then profile name.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from . import mappings
from .models import NuGetFramework


def precedence_key(framework: NuGetFramework) -> Tuple:
    """Sort key for the non-equivalent order."""
    rank = mappings.FRAMEWORK_PRECEDENCE.get(framework.framework.lower(), len(mappings.FRAMEWORK_PRECEDENCE))
    return (
        0 if framework.is_specific else 1,
        rank,
        framework.framework.lower(),
        framework.version,
        framework.platform.lower(),
        framework.platform_version,
        framework.profile.lower(),
    )


def equivalent_key(framework: NuGetFramework) -> Tuple:
    """Sort key for members of the same equivalence class."""
    return (
        framework.framework.lower(),
        tuple(-part for part in framework.version),
        len(framework.profile),
        framework.profile.lower(),
        framework.platform.lower(),
        tuple(-part for part in framework.platform_version),
    )


class FrameworkPrecedenceSorter:
    """Sorts frameworks in one of the two orders above."""

    def __init__(self, all_equivalent: bool = False):
        self.all_equivalent = all_equivalent

    def key(self, framework: NuGetFramework) -> Tuple:
        return equivalent_key(framework) if self.all_equivalent else precedence_key(framework)

    def sort(self, frameworks: Iterable[NuGetFramework]) -> List[NuGetFramework]:
        return sorted(frameworks, key=self.key)
