"""Transitive expansion of a framework into related frameworks."""

from __future__ import annotations

from typing import Iterator, List

from . import mappings
from .compatibility import direct_equivalents
from .models import MAX_VERSION, NuGetFramework
from .names import get_portable_profile_number


class FrameworkExpander:
    """Finds every framework related to a given one.

    Related means reachable through equivalent frameworks, equivalent
    profiles, or the bounds of a compatibility range the framework satisfies.
    """

    def expand(self, framework: NuGetFramework) -> List[NuGetFramework]:
        """Transitive closure of related frameworks, excluding the input."""
        seen = [framework]
        queue = [framework]
        while queue:
            current = queue.pop(0)
            for related in self._expand_once(current):
                if related not in seen:
                    seen.append(related)
                    queue.append(related)
        return seen[1:]

    @staticmethod
    def _expand_once(framework: NuGetFramework) -> Iterator[NuGetFramework]:
        yield from direct_equivalents(framework)

        for mapping in mappings.COMPATIBILITY_MAPPINGS:
            if mapping.target_range.satisfies(framework):
                supported = mapping.supported_range
                yield supported.min
                if supported.max.version != MAX_VERSION:
                    yield supported.max

        if framework.is_pcl:
            number = get_portable_profile_number(framework.profile)
            supported = mappings.PORTABLE_COMPATIBILITY_MAPPINGS.get(number) if number is not None else None
            if supported is not None:
                yield supported.min
                yield supported.max
