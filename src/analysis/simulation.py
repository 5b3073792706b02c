"""Single-package restore simulation.

Decides whether a project targeting a given framework would get any assets
from one package, the way a restore picks the nearest group per asset kind.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from constants import AssetCategory, Constants
from assets.scanner import AssetGroup, AssetScanner, ScanResult
from frameworks.models import NuGetFramework
from frameworks.reducer import FrameworkReducer
from nuspec.reader import FrameworkSpecificGroup, NuspecDocument


def _index(pairs) -> Dict[NuGetFramework, List[str]]:
    by_framework: Dict[NuGetFramework, List[str]] = {}
    for framework, items in pairs:
        by_framework.setdefault(framework, []).extend(items)
    return by_framework


def _asset_index(groups: Sequence[AssetGroup]) -> Dict[NuGetFramework, List[str]]:
    return _index((g.framework, g.files) for g in groups)


def _declared_index(groups: Sequence[FrameworkSpecificGroup]) -> Dict[NuGetFramework, List[str]]:
    return _index((g.target_framework, g.items) for g in groups)


def _compile_index(groups: Sequence[AssetGroup], from_ref: bool) -> Dict[NuGetFramework, List[str]]:
    # ref/ and lib/ files for one tfm share a scanner group
    pairs = []
    for group in groups:
        files = [f for f in group.files if f.lower().startswith("ref/") == from_ref]
        if files:
            pairs.append((group.framework, files))
    return _index(pairs)


class RestoreSimulator:
    """Answers "would a project on this framework get assets?" for one package."""

    def __init__(
        self,
        files: Sequence[str],
        document: Optional[NuspecDocument] = None,
        package_id: Optional[str] = None,
        reducer: Optional[FrameworkReducer] = None,
        scanner: Optional[AssetScanner] = None,
    ):
        self.reducer = reducer or FrameworkReducer()
        self.document = document or NuspecDocument()
        scan: ScanResult = (scanner or AssetScanner()).scan(files, package_id=package_id or self.document.id)
        self.has_assemblies = scan.has_assemblies

        compile_groups = scan.groups.get(AssetCategory.COMPILE, [])
        self._compile_ref = _compile_index(compile_groups, from_ref=True)
        self._compile_lib = _compile_index(compile_groups, from_ref=False)
        self._runtime = _asset_index(
            g for g in scan.groups.get(AssetCategory.RUNTIME, []) if not g.properties
        )
        self._others = [
            _asset_index(scan.groups.get(category, []))
            for category in (AssetCategory.CONTENT, AssetCategory.BUILD, AssetCategory.BUILD_MULTITARGETING)
        ]
        self._declared = [
            _declared_index(self.document.framework_assemblies),
            _declared_index(self.document.framework_references),
        ]
        self._references = _declared_index(self.document.reference_groups)

    def _nearest(self, project: NuGetFramework, index: Dict[NuGetFramework, List[str]]) -> Optional[List[str]]:
        nearest = self.reducer.get_nearest(project, index)
        return None if nearest is None else index[nearest]

    def compile_items(self, project: NuGetFramework) -> List[str]:
        """Nearest compile-time assets, narrowed to declared references if any.

        The nearest ref/ group wins; the nearest lib/ group is used only when
        no ref/ group fits the project framework.
        """
        items = self._nearest(project, self._compile_ref)
        if items is None:
            items = self._nearest(project, self._compile_lib) or []
        allowed = self._nearest(project, self._references) if self._references else None
        if allowed is None:
            return items
        names = set(allowed)
        return [
            path for path in items
            if path.rsplit("/", 1)[-1] in names or path.rsplit("/", 1)[-1] == Constants.EMPTY_FOLDER_MARKER
        ]

    def is_compatible(self, project: NuGetFramework) -> bool:
        """True if the package has no lib/ or ref/ assets or any nearest group has items."""
        if not self.has_assemblies:
            return True
        if self.compile_items(project):
            return True
        if self._nearest(project, self._runtime):
            return True
        if any(self._nearest(project, index) for index in self._others):
            return True
        return any(self._nearest(project, index) is not None for index in self._declared)
