"""Package id and version validation."""

import re
from typing import Optional, Tuple

import semantic_version

from constants import Constants
from errors import PackageInputError

from .models import PackageIdentity

_PACKAGE_ID_PATTERN = re.compile(r"^\w+([.-]\w+)*$")


def tokenize_rightmost_colon(s: str) -> Tuple[str, Optional[str]]:
    """Return (identifier, version or None) using the rightmost-colon rule."""
    s = s.strip()
    if ':' not in s:
        return s, None
    parts = s.rsplit(':', 1)
    identifier = parts[0].strip()
    version_part = parts[1].strip() if len(parts) > 1 else ''
    version = version_part if version_part else None
    return identifier, version


def validate_package_id(package_id: Optional[str]) -> str:
    """Return the trimmed id or raise PackageInputError.

    Ids are word characters separated by single dots or dashes, at most
    Constants.MAX_PACKAGE_ID_LENGTH characters long.
    """
    value = (package_id or "").strip()
    if not value:
        raise PackageInputError("Package id is required")
    if len(value) > Constants.MAX_PACKAGE_ID_LENGTH:
        raise PackageInputError(
            f"Package id must be at most {Constants.MAX_PACKAGE_ID_LENGTH} characters: {value[:20]}..."
        )
    if not _PACKAGE_ID_PATTERN.match(value):
        raise PackageInputError(f"Invalid package id: {value!r}")
    return value


def normalize_version(raw: Optional[str]) -> str:
    """Normalize a NuGet version string.

    Accepts one to four numeric parts plus an optional prerelease label;
    build metadata is dropped. The fourth part is kept only when non-zero,
    e.g. ``1.0`` -> ``1.0.0`` and ``1.2.3.4-Beta`` -> ``1.2.3.4-Beta``.
    """
    text = (raw or "").strip()
    if not text:
        raise PackageInputError("Package version is required")
    base = text.split("+", 1)[0]
    main, _, prerelease = base.partition("-")
    parts = main.split(".")
    if not 1 <= len(parts) <= 4 or not all(p.isdigit() for p in parts):
        raise PackageInputError(f"Invalid package version: {text!r}")
    numbers = [int(p) for p in parts] + [0] * (4 - len(parts))

    semver_text = f"{numbers[0]}.{numbers[1]}.{numbers[2]}"
    if prerelease:
        semver_text += f"-{prerelease}"
    try:
        parsed = semantic_version.Version(semver_text)
    except ValueError as exc:
        raise PackageInputError(f"Invalid package version: {text!r}") from exc

    normalized = f"{parsed.major}.{parsed.minor}.{parsed.patch}"
    if numbers[3]:
        normalized += f".{numbers[3]}"
    if parsed.prerelease:
        normalized += "-" + ".".join(parsed.prerelease)
    return normalized


def parse_package(package_id: Optional[str], version: Optional[str]) -> PackageIdentity:
    """Validate and normalize an id/version pair."""
    return PackageIdentity(id=validate_package_id(package_id), version=normalize_version(version))


def parse_package_token(token: str) -> PackageIdentity:
    """Parse ``Id:Version`` using the rightmost colon."""
    identifier, version = tokenize_rightmost_colon(token)
    if version is None:
        raise PackageInputError(f"Missing version in {token!r}; expected Id:Version")
    identity = parse_package(identifier, version)
    return PackageIdentity(id=identity.id, version=identity.version, raw_token=token)
