"""Process-wide framework universe.

Built on first use behind a lock and never mutated afterwards, so any number
of threads may read it once ``get_enumerated_frameworks()`` has returned.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Tuple

from common.logging_utils import Timer, extra_context
from constants import Constants
from frameworks.compatibility import CompatibilityProvider
from frameworks.models import SPECIAL_FRAMEWORKS, NuGetFramework

from .enumerator import FrameworkEnumerationOptions, FrameworkEnumerator
from .equivalence import get_non_equivalent_frameworks

logger = logging.getLogger(__name__)

# Guarded by _catalog_lock; built once per process.
_catalog: Optional["EnumeratedFrameworks"] = None
_catalog_lock = threading.Lock()


@dataclass(frozen=True)
class EnumeratedFrameworks:
    """The universe and its canonical, non-equivalent subset."""

    all: Tuple[NuGetFramework, ...]
    non_equivalent: Tuple[NuGetFramework, ...]

    @classmethod
    def build(
        cls,
        include_special: bool = False,
        enumerator: Optional[FrameworkEnumerator] = None,
        provider: Optional[CompatibilityProvider] = None,
    ) -> "EnumeratedFrameworks":
        """Enumerate and reduce; raises InternalConsistencyError on bad tables.

        Args:
            include_special: keep Any, Agnostic and Unsupported in both lists.
            enumerator: enumerator to use, defaults to a fresh one.
            provider: compatibility provider for the reduction.
        """
        options = FrameworkEnumerationOptions.ALL
        if not include_special:
            options &= ~FrameworkEnumerationOptions.SPECIAL_FRAMEWORKS

        with Timer() as timer:
            universe = (enumerator or FrameworkEnumerator()).enumerate(options)
            if not include_special:
                universe = [f for f in universe if f.is_specific]
            canonical = get_non_equivalent_frameworks(universe, provider)
            if include_special:
                canonical.extend(f for f in SPECIAL_FRAMEWORKS if f in universe)

        logger.info(
            "Enumerated %d frameworks (%d non-equivalent) in %d ms",
            len(universe), len(canonical), timer.duration_ms(),
            extra=extra_context(
                event="enumeration", component="catalog", action="build", outcome="success",
                count=len(universe), duration_ms=timer.duration_ms(),
            ),
        )
        return cls(all=tuple(universe), non_equivalent=tuple(canonical))


def get_enumerated_frameworks() -> EnumeratedFrameworks:
    """Return the shared universe, building it on first call."""
    global _catalog  # pylint: disable=global-statement
    if _catalog is not None:
        return _catalog
    with _catalog_lock:
        if _catalog is None:
            _catalog = EnumeratedFrameworks.build(include_special=Constants.INCLUDE_SPECIAL_FRAMEWORKS)
    return _catalog


def reset_enumerated_frameworks() -> None:
    """Forget the shared universe; the next call rebuilds it."""
    global _catalog  # pylint: disable=global-statement
    with _catalog_lock:
        _catalog = None
