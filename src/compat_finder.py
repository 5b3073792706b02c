"""Package compatibility service.

Looks a package up in a ``PackageSource``, buffers its manifest once so every
strategy reads a fresh copy, runs the aggregator, and times each step.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from analysis.aggregator import AnalysisReport, analyze, summarize
from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled
from constants import Constants, _load_yaml_config, apply_config
from errors import ManifestParseError
from nuspec.reader import NuspecDocument, load_document
from registry.source import PackageSource
from versioning.models import PackageIdentity
from versioning.parser import parse_package

logger = logging.getLogger(__name__)

T = TypeVar("T")


def configure(config_path: Optional[str] = None) -> None:
    """Load YAML config onto Constants and set up logging.

    Args:
        config_path: explicit config file; otherwise the default search order applies.
    """
    apply_config(_load_yaml_config(config_path))
    configure_logging(Constants.LOG_LEVEL)


@dataclass(frozen=True)
class ResultWithDuration(Generic[T]):
    """A value and how long producing it took."""

    result: T
    duration_ms: int


class CompatibilityResultType(Enum):
    """Outcome of a compatibility lookup."""

    OK = "ok"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class CompatibilityResult:
    """Service output; everything but ``type`` is None for NOT_FOUND."""

    type: CompatibilityResultType
    package: Optional[PackageIdentity] = None
    files: Optional[ResultWithDuration[List[str]]] = None
    manifest: Optional[ResultWithDuration[Optional[NuspecDocument]]] = None
    manifest_error: Optional[str] = None
    analysis: Optional[ResultWithDuration[AnalysisReport]] = None

    @classmethod
    def not_found(cls, package: Optional[PackageIdentity] = None) -> "CompatibilityResult":
        return cls(CompatibilityResultType.NOT_FOUND, package=package)

    @property
    def ok(self) -> bool:
        return self.type is CompatibilityResultType.OK


class CompatibilityService:
    """Computes the supported frameworks of packages from one source."""

    def __init__(self, source: PackageSource):
        self.source = source

    def get_compatibility(
        self,
        package_id: str,
        version: str,
        allow_enumeration: Optional[bool] = None,
    ) -> CompatibilityResult:
        """Analyze one package.

        Args:
            package_id: package id; validated.
            version: package version; validated and normalized.
            allow_enumeration: run the expensive strategy; defaults to
                Constants.ALLOW_ENUMERATION.

        Returns:
            CompatibilityResult: NOT_FOUND when the source has no such package.

        Raises:
            PackageInputError: invalid id or version.
        """
        package = parse_package(package_id, version)
        if allow_enumeration is None:
            allow_enumeration = Constants.ALLOW_ENUMERATION

        with Timer() as timer:
            files = self.source.get_package_file_list(package.id, package.version)
        if files is None:
            logger.info("Package %s not found", package, extra=extra_context(
                event="lookup", component="service", action="get_compatibility", outcome="not_found",
                package_id=package.id,
            ))
            return CompatibilityResult.not_found(package)
        files_result = ResultWithDuration(list(files), timer.duration_ms())

        with Timer() as timer:
            stream = self.source.get_manifest_stream(package.id, package.version)
            try:
                manifest_bytes = stream.read()
            finally:
                stream.close()
            document: Optional[NuspecDocument] = None
            manifest_error: Optional[str] = None
            try:
                document = load_document(manifest_bytes)
            except ManifestParseError as exc:
                manifest_error = str(exc)
                logger.warning("Manifest for %s is invalid: %s", package, exc)
        manifest_result = ResultWithDuration(document, timer.duration_ms())

        with Timer() as timer:
            report = analyze(
                files_result.result,
                lambda: io.BytesIO(manifest_bytes),
                allow_expensive_strategy=allow_enumeration,
                package_id=package.id,
            )
        analysis_result = ResultWithDuration(report, timer.duration_ms())

        if is_debug_enabled(logger):
            logger.debug("Compatibility computed", extra=extra_context(
                event="function_exit", component="service", action="get_compatibility", outcome="success",
                package_id=package.id, count=len(files_result.result), duration_ms=analysis_result.duration_ms,
            ))
            for line in summarize(report):
                logger.debug("%s %s", package, line)
        return CompatibilityResult(
            CompatibilityResultType.OK,
            package=package,
            files=files_result,
            manifest=manifest_result,
            manifest_error=manifest_error,
            analysis=analysis_result,
        )
