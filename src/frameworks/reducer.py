"""Reductions over sets of frameworks."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .compatibility import DEFAULT_PROVIDER, CompatibilityProvider
from .models import NuGetFramework
from .sorting import FrameworkPrecedenceSorter


def _distinct(frameworks: Iterable[NuGetFramework]) -> List[NuGetFramework]:
    result: List[NuGetFramework] = []
    for framework in frameworks:
        if framework not in result:
            result.append(framework)
    return result


class FrameworkReducer:
    """Nearest match and downwards/upwards reduction of framework sets."""

    def __init__(self, provider: Optional[CompatibilityProvider] = None):
        self.provider = provider or DEFAULT_PROVIDER
        self._sorter = FrameworkPrecedenceSorter()

    def reduce_equivalent(self, frameworks: Iterable[NuGetFramework]) -> List[NuGetFramework]:
        """Keep one member of every group of mutually compatible frameworks."""
        result: List[NuGetFramework] = []
        for framework in self._sorter.sort(_distinct(frameworks)):
            if any(self.provider.is_equivalent(framework, kept) for kept in result):
                continue
            result.append(framework)
        return result

    def reduce_downwards(self, frameworks: Iterable[NuGetFramework]) -> List[NuGetFramework]:
        """Drop every framework that can consume another one in the set.

        What remains are the lowest frameworks: the set a package must
        target to reach every project the input reaches.
        """
        reduced = self.reduce_equivalent(frameworks)
        return [
            framework
            for framework in reduced
            if not any(other is not framework and self.provider.is_compatible(framework, other) for other in reduced)
        ]

    def reduce_upwards(self, frameworks: Iterable[NuGetFramework]) -> List[NuGetFramework]:
        """Drop every framework that another one in the set can consume."""
        reduced = self.reduce_equivalent(frameworks)
        return [
            framework
            for framework in reduced
            if not any(other is not framework and self.provider.is_compatible(other, framework) for other in reduced)
        ]

    def get_nearest(self, project: NuGetFramework, candidates: Iterable[NuGetFramework]) -> Optional[NuGetFramework]:
        """Best candidate a project on project can consume, or None.

        Args:
            project: framework of the consuming project.
            candidates: frameworks the package provides assets for.

        Returns:
            NuGetFramework or None: the most specific compatible candidate.
        """
        compatible = [c for c in _distinct(candidates) if self.provider.is_compatible(project, c)]
        if not compatible:
            return None
        if project in compatible:
            return project
        nearest = self.reduce_upwards(compatible)
        non_pcl = [f for f in nearest if not f.is_pcl]
        if non_pcl:
            nearest = non_pcl
        return self._sorter.sort(nearest)[0]
