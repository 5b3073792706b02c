"""Package asset pattern matching."""

from .patterns import DEFAULT_TEMPLATES, AssetMatch, AssetPatternTemplate
from .scanner import AssetGroup, AssetScanner, ScanResult, normalize_file_list

__all__ = [
    "AssetGroup",
    "AssetMatch",
    "AssetPatternTemplate",
    "AssetScanner",
    "DEFAULT_TEMPLATES",
    "ScanResult",
    "normalize_file_list",
]
