"""Package identity parsing and validation."""

from .models import PackageIdentity, PackageKey
from .parser import normalize_version, parse_package, parse_package_token, tokenize_rightmost_colon, validate_package_id

__all__ = [
    "PackageIdentity",
    "PackageKey",
    "normalize_version",
    "parse_package",
    "parse_package_token",
    "tokenize_rightmost_colon",
    "validate_package_id",
]
