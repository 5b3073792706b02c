"""Classify package files into asset groups and collect their frameworks."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Collection, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import AssetCategory, Constants
from frameworks.models import ANY_FRAMEWORK, NuGetFramework
from frameworks.sorting import precedence_key

from .patterns import DEFAULT_TEMPLATES, AssetMatch, AssetPatternTemplate

logger = logging.getLogger(__name__)

BUILD_CATEGORIES = frozenset({AssetCategory.BUILD, AssetCategory.BUILD_MULTITARGETING})


@dataclass
class AssetGroup:
    """Files of one category sharing the same framework and bindings."""

    category: AssetCategory
    framework: NuGetFramework
    properties: Tuple[Tuple[str, object], ...] = ()
    files: List[str] = field(default_factory=list)


@dataclass
class ScanResult:
    """Output of one scan."""

    groups: Dict[AssetCategory, List[AssetGroup]] = field(default_factory=dict)
    frameworks: Tuple[NuGetFramework, ...] = ()
    has_assemblies: bool = False

    def frameworks_for(self, category: AssetCategory) -> Tuple[NuGetFramework, ...]:
        """Distinct frameworks bound by one category, in precedence order."""
        found = {g.framework for g in self.groups.get(category, ())}
        return tuple(sorted(found, key=precedence_key))


def normalize_file_list(files: Iterable[str]) -> List[str]:
    """Deduplicate, keep order, and use forward slashes without a leading one."""
    result: List[str] = []
    seen = set()
    for path in files:
        normalized = path.replace("\\", "/").lstrip("/")
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def has_assembly_files(files: Iterable[str]) -> bool:
    return any(f.lower().startswith(Constants.ASSEMBLY_PREFIXES) for f in files)


def _file_name(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def _build_file_allowed(file_name: str, package_id: Optional[str]) -> bool:
    if file_name == Constants.EMPTY_FOLDER_MARKER:
        return True
    if not package_id:
        return False
    lowered = file_name.lower()
    return any(lowered == f"{package_id.lower()}{ext}" for ext in Constants.MSBUILD_EXTENSIONS)


class AssetScanner:
    """Matches every file against every category's templates."""

    def __init__(self, templates: Optional[Mapping[AssetCategory, Sequence[AssetPatternTemplate]]] = None):
        self.templates = templates if templates is not None else DEFAULT_TEMPLATES

    def match_file(self, path: str, category: AssetCategory) -> Optional[AssetMatch]:
        """First matching template of the category, if any."""
        for template in self.templates.get(category, ()):
            found = template.match(path)
            if found is not None:
                return found
        return None

    def scan(
        self,
        files: Iterable[str],
        package_id: Optional[str] = None,
        reference_filter: Optional[Collection[str]] = None,
    ) -> ScanResult:
        """Scan a file list.

        Args:
            files: package paths, forward-slash separated.
            package_id: declared package id; build scripts must be named after it.
            reference_filter: exact compile-time file names to keep, if declared.

        Returns:
            ScanResult: groups per category and the union of their frameworks,
            plus Any when no file lives under lib/ or ref/.
        """
        paths = normalize_file_list(files)
        groups: Dict[AssetCategory, List[AssetGroup]] = {}
        index: Dict[Tuple[AssetCategory, NuGetFramework, Tuple], AssetGroup] = {}

        for path in paths:
            for category in self.templates:
                found = self.match_file(path, category)
                if found is None:
                    continue
                name = _file_name(path)
                if category in BUILD_CATEGORIES and not _build_file_allowed(name, package_id):
                    if is_debug_enabled(logger):
                        logger.debug("Discarded build file not named after package", extra=extra_context(
                            event="decision", component="scanner", action="filter_build",
                            outcome="discarded", target=path,
                        ))
                    continue
                if (
                    category is AssetCategory.COMPILE
                    and reference_filter is not None
                    and name != Constants.EMPTY_FOLDER_MARKER
                    and name not in reference_filter
                ):
                    continue
                key = (category, found.framework, found.group_key)
                group = index.get(key)
                if group is None:
                    group = AssetGroup(category, found.framework, found.group_key)
                    index[key] = group
                    groups.setdefault(category, []).append(group)
                group.files.append(path)

        has_assemblies = has_assembly_files(paths)
        frameworks = {g.framework for category_groups in groups.values() for g in category_groups}
        if not has_assemblies:
            frameworks.add(ANY_FRAMEWORK)

        result = ScanResult(
            groups=groups,
            frameworks=tuple(sorted(frameworks, key=precedence_key)),
            has_assemblies=has_assemblies,
        )
        if is_debug_enabled(logger):
            logger.debug("Scanned package files", extra=extra_context(
                event="scan", component="scanner", action="scan", outcome="success",
                count=len(paths), frameworks=len(result.frameworks),
            ))
        return result
