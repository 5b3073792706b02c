"""Framework compatibility.

``is_compatible(target, candidate)`` answers: can a project targeting
``target`` consume assets built for ``candidate``? Two frameworks are
equivalent when each is compatible with the other.
"""

from __future__ import annotations

import functools
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from . import mappings
from .models import EMPTY_VERSION, NuGetFramework, Version
from .names import get_portable_frameworks, get_portable_profile_number


def _build_equivalent_index() -> Dict[NuGetFramework, List[NuGetFramework]]:
    index: Dict[NuGetFramework, List[NuGetFramework]] = defaultdict(list)
    for left, right in mappings.EQUIVALENT_FRAMEWORKS:
        index[left].append(right)
        index[right].append(left)
    return dict(index)


_EQUIVALENT_INDEX = _build_equivalent_index()


def direct_equivalents(framework: NuGetFramework) -> List[NuGetFramework]:
    result = list(_EQUIVALENT_INDEX.get(framework, ()))
    profiles = mappings.EQUIVALENT_PROFILES.get(framework.framework.lower())
    if profiles and not framework.has_platform:
        lowered = [p.lower() for p in profiles]
        if framework.profile.lower() in lowered:
            for profile in profiles:
                if profile.lower() != framework.profile.lower():
                    result.append(NuGetFramework(framework.framework, framework.version, profile))
    return result


@functools.lru_cache(maxsize=None)
def equivalent_closure(framework: NuGetFramework) -> Tuple[NuGetFramework, ...]:
    """The framework plus everything reachable through the equivalence tables."""
    seen = [framework]
    queue = [framework]
    while queue:
        current = queue.pop(0)
        for other in direct_equivalents(current):
            if other not in seen:
                seen.append(other)
                queue.append(other)
    return tuple(seen)


def _version_satisfies(target: Version, candidate: Version) -> bool:
    return candidate == EMPTY_VERSION or candidate <= target


def _compatible_direct(target: NuGetFramework, candidate: NuGetFramework) -> bool:
    if target.same_framework(candidate) and _version_satisfies(target.version, candidate.version):
        if target.has_platform:
            if not candidate.has_platform:
                return True
            return (
                target.platform.lower() == candidate.platform.lower()
                and _version_satisfies(target.platform_version, candidate.platform_version)
            )
        if not candidate.has_platform:
            return True

    for mapping in mappings.COMPATIBILITY_MAPPINGS:
        if mapping.target_range.satisfies(target) and mapping.supported_range.satisfies(candidate):
            return True
    return False


class CompatibilityProvider:
    """Answers compatibility questions from the framework tables."""

    def is_compatible(self, target: NuGetFramework, candidate: NuGetFramework) -> bool:
        """True when a project on target can consume assets for candidate."""
        return _is_compatible_cached(target, candidate)

    def is_equivalent(self, first: NuGetFramework, second: NuGetFramework) -> bool:
        """Mutual compatibility."""
        return self.is_compatible(first, second) and self.is_compatible(second, first)


def _special_compatibility(target: NuGetFramework, candidate: NuGetFramework) -> Optional[bool]:
    if target.is_any or candidate.is_any:
        return True
    if target.is_unsupported:
        return False
    if candidate.is_agnostic:
        return True
    if candidate.is_unsupported:
        return False
    return None


def _pcl_members(framework: NuGetFramework) -> Optional[List[NuGetFramework]]:
    if framework.is_pcl:
        return get_portable_frameworks(framework.profile, include_optional=False)
    return [framework]


def _pcl_compatible(target: NuGetFramework, candidate: NuGetFramework) -> bool:
    if target.is_pcl and not candidate.is_pcl:
        number = get_portable_profile_number(target.profile)
        supported = mappings.PORTABLE_COMPATIBILITY_MAPPINGS.get(number) if number is not None else None
        if supported is not None and any(supported.satisfies(c) for c in equivalent_closure(candidate)):
            return True

    target_members = _pcl_members(target)
    candidate_members = _pcl_members(candidate)
    if not target_members or not candidate_members:
        return False
    if len(target_members) > len(candidate_members):
        return False
    return all(
        any(_is_compatible_cached(t, c) for c in candidate_members)
        for t in target_members
    )


@functools.lru_cache(maxsize=65536)
def _is_compatible_cached(target: NuGetFramework, candidate: NuGetFramework) -> bool:
    if target == candidate:
        return True
    if not target.is_specific or not candidate.is_specific:
        special = _special_compatibility(target, candidate)
        if special is not None:
            return special
    if target.is_pcl or candidate.is_pcl:
        return _pcl_compatible(target, candidate)

    return any(
        _compatible_direct(t, c)
        for t in equivalent_closure(target)
        for c in equivalent_closure(candidate)
    )


DEFAULT_PROVIDER = CompatibilityProvider()
