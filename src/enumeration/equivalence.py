"""Partition frameworks into equivalence classes and keep one per class."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from common.logging_utils import extra_context
from errors import InternalConsistencyError
from frameworks.compatibility import DEFAULT_PROVIDER, CompatibilityProvider
from frameworks.models import NuGetFramework
from frameworks.sorting import FrameworkPrecedenceSorter

logger = logging.getLogger(__name__)


def _fail(first: NuGetFramework, second: NuGetFramework, detail: str = "") -> InternalConsistencyError:
    error = InternalConsistencyError(first, second, detail)
    logger.error(
        str(error),
        extra=extra_context(event="consistency_error", component="equivalence", action="cluster", outcome="error"),
    )
    return error


def find_equivalence_classes(
    frameworks: Iterable[NuGetFramework],
    provider: Optional[CompatibilityProvider] = None,
) -> List[List[NuGetFramework]]:
    """Group mutually compatible frameworks.

    Frameworks are visited in non-equivalent precedence order and every
    unordered pair is checked. A pair whose members already belong to two
    different classes means equivalence is not transitive, and so does a
    finished class containing a pair that is not mutually compatible; both
    raise InternalConsistencyError.

    Returns:
        list: classes with more than one member, in discovery order.
    """
    provider = provider or DEFAULT_PROVIDER
    ordered = FrameworkPrecedenceSorter().sort(f for f in frameworks if f.is_specific)

    classes: List[List[NuGetFramework]] = []
    membership: Dict[NuGetFramework, int] = {}
    for i, first in enumerate(ordered):
        for second in ordered[i + 1:]:
            if not provider.is_equivalent(first, second):
                continue
            first_class = membership.get(first)
            second_class = membership.get(second)
            if first_class is None and second_class is None:
                membership[first] = membership[second] = len(classes)
                classes.append([first, second])
            elif second_class is None:
                classes[first_class].append(second)
                membership[second] = first_class
            elif first_class is None:
                classes[second_class].append(first)
                membership[first] = second_class
            elif first_class != second_class:
                raise _fail(first, second)

    for members in classes:
        for i, first in enumerate(members):
            for second in members[i + 1:]:
                if not provider.is_equivalent(first, second):
                    raise _fail(first, second, "They share an equivalence class but are not mutually compatible.")
    return classes


def get_non_equivalent_frameworks(
    frameworks: Iterable[NuGetFramework],
    provider: Optional[CompatibilityProvider] = None,
) -> List[NuGetFramework]:
    """One canonical framework per equivalence class, in precedence order.

    Sentinels are ignored. Within a class the canonical member is the first
    one under the equivalent order (family name, then highest version, then
    shortest profile).
    """
    specific = [f for f in frameworks if f.is_specific]
    excluded = set()
    tie_breaker = FrameworkPrecedenceSorter(all_equivalent=True)
    for members in find_equivalence_classes(specific, provider):
        excluded.update(tie_breaker.sort(members)[1:])

    result = []
    seen = set()
    for framework in FrameworkPrecedenceSorter().sort(specific):
        if framework in excluded or framework in seen:
            continue
        seen.add(framework)
        result.append(framework)
    return result
