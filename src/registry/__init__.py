"""Package sources."""

from .source import InMemoryPackageSource, NupkgDirectorySource, PackageSource

__all__ = ["InMemoryPackageSource", "NupkgDirectorySource", "PackageSource"]
