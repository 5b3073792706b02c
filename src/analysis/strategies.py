"""Independent framework detection strategies.

Every strategy takes the package file list, a factory returning a fresh
manifest stream, and the package id, and returns the frameworks it believes
the package supports.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import BinaryIO, Callable, Dict, Optional, Sequence, Tuple

from assets.scanner import AssetScanner
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants, StrategyNames
from enumeration.catalog import get_enumerated_frameworks
from frameworks.models import NuGetFramework
from nuspec.reader import extract_declared_frameworks, load_document

from .simulation import RestoreSimulator

logger = logging.getLogger(__name__)

ManifestFactory = Callable[[], BinaryIO]
Strategy = Callable[[Sequence[str], ManifestFactory, Optional[str]], Tuple[NuGetFramework, ...]]


def detect_from_manifest(
    files: Sequence[str],
    manifest_factory: ManifestFactory,
    package_id: Optional[str] = None,
) -> Tuple[NuGetFramework, ...]:
    """Frameworks declared by frameworkAssemblies and frameworkReferences."""
    stream = manifest_factory()
    try:
        return extract_declared_frameworks(stream)
    finally:
        stream.close()


def detect_from_pattern_sets(
    files: Sequence[str],
    manifest_factory: ManifestFactory,
    package_id: Optional[str] = None,
) -> Tuple[NuGetFramework, ...]:
    """Frameworks bound by asset path templates, plus Any for assembly-less packages."""
    return AssetScanner().scan(files, package_id=package_id).frameworks


def detect_by_enumeration(
    files: Sequence[str],
    manifest_factory: ManifestFactory,
    package_id: Optional[str] = None,
    candidates: Optional[Sequence[NuGetFramework]] = None,
    max_workers: Optional[int] = None,
) -> Tuple[NuGetFramework, ...]:
    """Canonical frameworks for which a simulated restore finds assets.

    Args:
        candidates: frameworks to try; defaults to the non-equivalent universe.
        max_workers: thread pool size; defaults to Constants.ENUMERATION_MAX_WORKERS.
    """
    stream = manifest_factory()
    try:
        document = load_document(stream)
    finally:
        stream.close()

    simulator = RestoreSimulator(files, document, package_id)
    frameworks = list(candidates if candidates is not None else get_enumerated_frameworks().non_equivalent)
    workers = max(1, max_workers or Constants.ENUMERATION_MAX_WORKERS)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        verdicts = list(pool.map(simulator.is_compatible, frameworks))

    supported = tuple(f for f, ok in zip(frameworks, verdicts) if ok)
    if is_debug_enabled(logger):
        logger.debug("Simulated restore over enumerated frameworks", extra=extra_context(
            event="strategy", component="strategies", action="enumerate", outcome="success",
            count=len(frameworks), supported=len(supported),
        ))
    return supported


STRATEGIES: Dict[StrategyNames, Strategy] = {
    StrategyNames.MANIFEST: detect_from_manifest,
    StrategyNames.PATTERN_SETS: detect_from_pattern_sets,
    StrategyNames.ENUMERATION: detect_by_enumeration,
}
