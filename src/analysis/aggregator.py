"""Runs detection strategies over one package and surfaces disagreement.

Results are compared, never merged: the report keeps every strategy's set
as produced, its downward-reduced form, and flags describing where the
reduced sets differ. A failing strategy is recorded and the others still run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants, StrategyNames
from errors import InternalConsistencyError, ManifestParseError
from frameworks.models import NuGetFramework
from frameworks.reducer import FrameworkReducer
from frameworks.sorting import precedence_key
from nuspec.reader import load_document

from .strategies import STRATEGIES, ManifestFactory, Strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyFailure:
    """A strategy that raised instead of producing a set."""

    strategy: StrategyNames
    error_type: str
    message: str


@dataclass(frozen=True)
class DetectionResult:
    """Frameworks found by one strategy."""

    strategy: StrategyNames
    frameworks: Tuple[NuGetFramework, ...]
    reduced: Tuple[NuGetFramework, ...]
    duration_ms: int = 0


@dataclass(frozen=True)
class DivergenceFlags:
    """Where successful strategies disagree.

    Attributes:
        has_different: at least two reduced sets differ.
        has_any: some set contains the Any framework.
        any_mismatch: some sets contain Any and others do not.
        differing: framework -> strategies whose set contains it, for every
            framework missing from at least one set.
    """

    has_different: bool = False
    has_any: bool = False
    any_mismatch: bool = False
    differing: Dict[NuGetFramework, Tuple[StrategyNames, ...]] = field(default_factory=dict)


@dataclass
class AnalysisReport:
    """Per-strategy results and failures for one package."""

    results: Dict[StrategyNames, DetectionResult] = field(default_factory=dict)
    failures: Dict[StrategyNames, StrategyFailure] = field(default_factory=dict)
    divergence: DivergenceFlags = field(default_factory=DivergenceFlags)

    def _frameworks(self, strategy: StrategyNames) -> Optional[Tuple[NuGetFramework, ...]]:
        result = self.results.get(strategy)
        return result.frameworks if result is not None else None

    @property
    def declared_frameworks(self) -> Optional[Tuple[NuGetFramework, ...]]:
        return self._frameworks(StrategyNames.MANIFEST)

    @property
    def scanned_frameworks(self) -> Optional[Tuple[NuGetFramework, ...]]:
        return self._frameworks(StrategyNames.PATTERN_SETS)

    @property
    def brute_force_frameworks(self) -> Optional[Tuple[NuGetFramework, ...]]:
        return self._frameworks(StrategyNames.ENUMERATION)


def reduce_frameworks(
    frameworks: Iterable[NuGetFramework],
    reducer: Optional[FrameworkReducer] = None,
) -> Tuple[NuGetFramework, ...]:
    """Reduce specific frameworks downwards and keep sentinels as they are."""
    reducer = reducer or FrameworkReducer()
    items = list(frameworks)
    specific = reducer.reduce_downwards(f for f in items if f.is_specific)
    special = [f for f in dict.fromkeys(items) if not f.is_specific]
    return tuple(sorted(specific + special, key=precedence_key))


def compute_divergence(results: Sequence[DetectionResult]) -> DivergenceFlags:
    """Compare the reduced sets of successful strategies."""
    sets = {r.strategy: set(r.reduced) for r in results}
    if not sets:
        return DivergenceFlags()
    union = set().union(*sets.values())
    differing = {
        framework: tuple(name for name, found in sets.items() if framework in found)
        for framework in sorted(union, key=precedence_key)
        if not all(framework in found for found in sets.values())
    }
    with_any = [name for name, found in sets.items() if any(f.is_any for f in found)]
    return DivergenceFlags(
        has_different=any(found != other for found in sets.values() for other in sets.values()),
        has_any=bool(with_any),
        any_mismatch=bool(with_any) and len(with_any) != len(sets),
        differing=differing,
    )


def _resolve_package_id(package_id: Optional[str], manifest_factory: ManifestFactory) -> Optional[str]:
    if package_id:
        return package_id
    stream = manifest_factory()
    try:
        return load_document(stream).id or None
    except ManifestParseError:
        return None
    finally:
        stream.close()


def analyze(
    files: Sequence[str],
    manifest_factory: ManifestFactory,
    allow_expensive_strategy: Optional[bool] = None,
    package_id: Optional[str] = None,
    strategies: Optional[Dict[StrategyNames, Strategy]] = None,
) -> AnalysisReport:
    """Run every strategy over one package.

    Args:
        files: package file paths, forward-slash separated.
        manifest_factory: returns a fresh manifest stream on every call.
        allow_expensive_strategy: run the enumeration strategy; defaults to
            Constants.ALLOW_ENUMERATION.
        package_id: declared id; read from the manifest when omitted.
        strategies: strategy table override, mostly for tests.

    Returns:
        AnalysisReport: results, failures and divergence flags.
    """
    if allow_expensive_strategy is None:
        allow_expensive_strategy = Constants.ALLOW_ENUMERATION
    table = dict(strategies if strategies is not None else STRATEGIES)
    if not allow_expensive_strategy:
        table.pop(StrategyNames.ENUMERATION, None)

    files = list(files)
    package_id = _resolve_package_id(package_id, manifest_factory)
    reducer = FrameworkReducer()
    report = AnalysisReport()

    for name, strategy in table.items():
        try:
            with Timer() as timer:
                found = tuple(strategy(files, manifest_factory, package_id))
        except InternalConsistencyError:
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            report.failures[name] = StrategyFailure(name, type(exc).__name__, str(exc))
            logger.warning(
                "Strategy %s failed: %s", name.value, exc,
                extra=extra_context(
                    event="strategy", component="aggregator", action=name.value, outcome="error",
                    package_id=package_id,
                ),
            )
            continue

        report.results[name] = DetectionResult(
            strategy=name,
            frameworks=found,
            reduced=reduce_frameworks(found, reducer),
            duration_ms=timer.duration_ms(),
        )
        if is_debug_enabled(logger):
            logger.debug("Strategy finished", extra=extra_context(
                event="strategy", component="aggregator", action=name.value, outcome="success",
                count=len(found), duration_ms=timer.duration_ms(), package_id=package_id,
            ))

    report.divergence = compute_divergence(list(report.results.values()))
    return report


def summarize(report: AnalysisReport) -> List[str]:
    """Human readable lines, one per strategy, for logging."""
    # pylint: disable=import-outside-toplevel
    from frameworks.names import try_get_short_folder_name

    lines = []
    for name, result in report.results.items():
        names = [try_get_short_folder_name(f) or str(f) for f in result.reduced]
        lines.append(f"{name.value}: {', '.join(names) or '(none)'}")
    for name, failure in report.failures.items():
        lines.append(f"{name.value}: failed ({failure.error_type}: {failure.message})")
    return lines
