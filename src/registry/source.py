"""Package sources: where file listings and manifests come from.

Network retrieval is out of scope; callers plug in any object implementing
``PackageSource``. Two local implementations are provided: an in-memory one
and one reading ``.nupkg`` archives from a directory.
"""
from __future__ import annotations

import io
import logging
import os
import zipfile
from urllib.parse import unquote
from typing import BinaryIO, Dict, List, Optional, Protocol, Sequence, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import PackageIdentity, PackageKey

logger = logging.getLogger(__name__)

# Archive entries that belong to the package format rather than the package.
_PACKAGING_PREFIXES = ("_rels/", "package/")
_PACKAGING_FILES = ("[content_types].xml", ".signature.p7s")


class PackageSource(Protocol):
    """Collaborator delivering a package's files and manifest."""

    def get_package_file_list(self, package_id: str, version: str) -> Optional[List[str]]:
        """Ordered package paths, or None when the package does not exist."""

    def get_manifest_stream(self, package_id: str, version: str) -> BinaryIO:
        """A fresh binary stream over the package's .nuspec."""


class InMemoryPackageSource:
    """Packages registered up front, keyed case-insensitively by id and version."""

    def __init__(self) -> None:
        self._packages: Dict[PackageKey, Tuple[List[str], bytes]] = {}

    def add_package(self, package_id: str, version: str, files: Sequence[str], manifest: bytes) -> None:
        self._packages[PackageIdentity(package_id, version).key] = (list(files), manifest)

    def get_package_file_list(self, package_id: str, version: str) -> Optional[List[str]]:
        entry = self._packages.get(PackageIdentity(package_id, version).key)
        return list(entry[0]) if entry is not None else None

    def get_manifest_stream(self, package_id: str, version: str) -> BinaryIO:
        entry = self._packages.get(PackageIdentity(package_id, version).key)
        if entry is None:
            raise FileNotFoundError(f"No manifest for {package_id} {version}")
        return io.BytesIO(entry[1])


def _is_package_content(name: str) -> bool:
    lowered = name.lower()
    if lowered.endswith("/"):
        return False
    if lowered.startswith(_PACKAGING_PREFIXES) or lowered in _PACKAGING_FILES:
        return False
    return "/" in lowered or not lowered.endswith(".nuspec")


class NupkgDirectorySource:
    """Reads ``<id>.<version>.nupkg`` archives from a local directory."""

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def _archive_path(self, package_id: str, version: str) -> Optional[str]:
        wanted = f"{package_id}.{version}.nupkg".lower()
        try:
            names = os.listdir(self.directory)
        except OSError as exc:
            logger.warning("Couldn't list package directory %s: %s", self.directory, exc)
            return None
        for name in names:
            if name.lower() == wanted:
                return os.path.join(self.directory, name)
        return None

    def get_package_file_list(self, package_id: str, version: str) -> Optional[List[str]]:
        path = self._archive_path(package_id, version)
        if path is None:
            if is_debug_enabled(logger):
                logger.debug("Package archive not found", extra=extra_context(
                    event="lookup", component="source", action="get_package_file_list",
                    outcome="not_found", target=f"{package_id}.{version}.nupkg",
                ))
            return None
        with zipfile.ZipFile(path) as archive:
            return [unquote(name) for name in archive.namelist() if _is_package_content(name)]

    def get_manifest_stream(self, package_id: str, version: str) -> BinaryIO:
        path = self._archive_path(package_id, version)
        if path is None:
            raise FileNotFoundError(f"No package archive for {package_id} {version}")
        with zipfile.ZipFile(path) as archive:
            for name in archive.namelist():
                if "/" not in name and name.lower().endswith(".nuspec"):
                    return io.BytesIO(archive.read(name))
        raise FileNotFoundError(f"No .nuspec in {path}")
