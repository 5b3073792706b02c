"""Parsing and rendering of framework names.

Two textual forms exist:
- short folder names, as used in package paths (``net45``, ``netstandard2.0``,
  ``portable-net45+win8``, ``net6.0-windows10.0.19041``)
- long .NET framework names (``.NETFramework,Version=v4.5,Profile=Client``)

``parse_folder`` never raises; unknown input becomes the Unsupported
framework. ``parse_framework_name`` raises ``FrameworkError`` on malformed
input. ``get_short_folder_name`` raises ``UnrenderableFrameworkError`` for
frameworks without a short form.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from common.logging_utils import extra_context, is_debug_enabled
from errors import FrameworkError, UnrenderableFrameworkError

from . import mappings
from .models import (
    AGNOSTIC_FRAMEWORK,
    ANY_FRAMEWORK,
    EMPTY_VERSION,
    UNSUPPORTED_FRAMEWORK,
    FrameworkIdentifiers as F,
    NuGetFramework,
    Version,
    format_version,
    normalize_version,
)

logger = logging.getLogger(__name__)

_FOLDER_PATTERN = re.compile(r"^(?P<id>[A-Za-z]+)(?P<version>[0-9][0-9.]*)?(?:-(?P<suffix>.+))?$")
_PLATFORM_PATTERN = re.compile(r"^(?P<name>[A-Za-z]+)(?P<version>[0-9][0-9.]*)?$")
_PROFILE_NUMBER_PATTERN = re.compile(r"^profile(?P<number>\d+)$", re.IGNORECASE)
_COMPACT_LONG_PATTERN = re.compile(r"^(?P<id>\.?[A-Za-z][A-Za-z.]*?)\s*[vV]?(?P<version>[0-9][0-9.]*)?$")

_SPECIAL_BY_NAME = {
    F.ANY.lower(): ANY_FRAMEWORK,
    F.AGNOSTIC.lower(): AGNOSTIC_FRAMEWORK,
    F.UNSUPPORTED.lower(): UNSUPPORTED_FRAMEWORK,
}


def _parse_version_text(text: str) -> Version:
    """Dotted text is split on dots; bare digits are one digit per part."""
    if not text:
        return EMPTY_VERSION
    if "." in text:
        parts = text.split(".")
        if any(not p.isdigit() for p in parts):
            raise ValueError(f"Invalid version: {text!r}")
        return normalize_version(parts)
    if not text.isdigit():
        raise ValueError(f"Invalid version: {text!r}")
    return normalize_version(list(text))


def _short_version(framework: NuGetFramework) -> str:
    version = framework.version
    if version == EMPTY_VERSION:
        return ""
    identifier = framework.framework.lower()
    if identifier in mappings.DECIMAL_POINT_IDENTIFIERS:
        return format_version(version)
    parts = list(version)
    while len(parts) > 2 and parts[-1] == 0:
        parts.pop()
    if any(p > 9 for p in parts):
        return format_version(version)
    if identifier in mappings.SINGLE_DIGIT_IDENTIFIERS and all(p == 0 for p in parts[1:]):
        return str(parts[0])
    return "".join(str(p) for p in parts)


_OPTIONAL_PORTABLE_IDENTIFIERS = frozenset(
    f.framework.lower() for members in mappings.PORTABLE_OPTIONAL_FRAMEWORKS.values() for f in members
)


def _is_optional_portable_member(framework: NuGetFramework) -> bool:
    return framework.framework.lower() in _OPTIONAL_PORTABLE_IDENTIFIERS


def _portable_profile_from_members(members: List[NuGetFramework]) -> Optional[str]:
    required = [m for m in members if not _is_optional_portable_member(m)]
    has_optional = len(required) != len(members)
    wanted = set(required)
    for number, profile_members in mappings.PORTABLE_PROFILES.items():
        if set(profile_members) != wanted:
            continue
        if has_optional and number not in mappings.PORTABLE_OPTIONAL_FRAMEWORKS:
            continue
        return f"Profile{number}"
    return None


def get_portable_frameworks(profile: str, include_optional: bool = False) -> Optional[List[NuGetFramework]]:
    """Member frameworks of a portable profile, or None if it cannot be resolved.

    Accepts numbered profiles (``Profile7``) and member lists (``net45+win8``).
    """
    match = _PROFILE_NUMBER_PATTERN.match(profile or "")
    if match:
        number = int(match.group("number"))
        members = mappings.PORTABLE_PROFILES.get(number)
        if members is None:
            return None
        result = list(members)
        if include_optional:
            result.extend(mappings.PORTABLE_OPTIONAL_FRAMEWORKS.get(number, ()))
        return result
    if not profile:
        return None
    result = []
    for piece in profile.split("+"):
        member = parse_folder(piece)
        if not member.is_specific or member.is_pcl:
            return None
        if include_optional or not _is_optional_portable_member(member):
            result.append(member)
    return result or None


def get_portable_profile_number(profile: str) -> Optional[int]:
    match = _PROFILE_NUMBER_PATTERN.match(profile or "")
    return int(match.group("number")) if match else None


def _parse_portable(version: Version, suffix: Optional[str]) -> NuGetFramework:
    if not suffix:
        return UNSUPPORTED_FRAMEWORK
    number = get_portable_profile_number(suffix)
    if number is not None:
        return NuGetFramework(F.PORTABLE, version, f"Profile{number}")
    members = []
    for piece in suffix.split("+"):
        member = parse_folder(piece)
        if not member.is_specific or member.is_pcl:
            return UNSUPPORTED_FRAMEWORK
        members.append(member)
    profile = _portable_profile_from_members(members) or suffix.lower()
    return NuGetFramework(F.PORTABLE, version, profile)


def parse_folder(folder: str) -> NuGetFramework:
    """Parse a short folder name; unknown or malformed names are Unsupported."""
    text = (folder or "").strip()
    special = _SPECIAL_BY_NAME.get(text.lower())
    if special is not None:
        return special

    match = _FOLDER_PATTERN.match(text)
    if not match:
        return UNSUPPORTED_FRAMEWORK
    identifier = mappings.SHORT_NAME_IDENTIFIERS.get(match.group("id").lower())
    if identifier is None:
        return UNSUPPORTED_FRAMEWORK

    version_text = match.group("version") or ""
    try:
        version = _parse_version_text(version_text)
    except ValueError:
        return UNSUPPORTED_FRAMEWORK

    if identifier == F.NET and "." in version_text and version[0] >= 5:
        identifier = F.NET_CORE_APP

    suffix = match.group("suffix")
    if identifier == F.PORTABLE:
        return _parse_portable(version, suffix)
    if not suffix:
        return NuGetFramework(identifier, version)

    if identifier == F.NET_CORE_APP and version[0] >= 5:
        platform_match = _PLATFORM_PATTERN.match(suffix)
        if not platform_match:
            return UNSUPPORTED_FRAMEWORK
        try:
            platform_version = _parse_version_text(platform_match.group("version") or "")
        except ValueError:
            return UNSUPPORTED_FRAMEWORK
        return NuGetFramework(
            identifier, version, platform=platform_match.group("name").lower(), platform_version=platform_version
        )

    profile = mappings.SHORT_PROFILE_NAMES.get(suffix.lower(), suffix)
    return NuGetFramework(identifier, version, profile)


def parse_framework_name(name: str) -> NuGetFramework:
    """Parse a long name such as ``.NETFramework,Version=v4.5,Profile=Client``."""
    parts = [p.strip() for p in (name or "").split(",")]
    if not parts[0]:
        raise FrameworkError(f"Invalid framework name: {name!r}")
    identifier = mappings.CANONICAL_IDENTIFIERS.get(parts[0].lower(), parts[0])
    special = _SPECIAL_BY_NAME.get(identifier.lower())
    if special is not None:
        return special

    version = EMPTY_VERSION
    profile = ""
    for part in parts[1:]:
        key, sep, value = part.partition("=")
        if not sep:
            raise FrameworkError(f"Invalid framework name component {part!r} in {name!r}")
        key = key.strip().lower()
        value = value.strip()
        if key == "version":
            try:
                version = _parse_version_text(value.lstrip("vV"))
            except ValueError as exc:
                raise FrameworkError(f"Invalid framework version in {name!r}") from exc
        elif key == "profile":
            profile = value
        else:
            raise FrameworkError(f"Unknown framework name component {key!r} in {name!r}")
    return NuGetFramework(identifier, version, profile)


def parse(text: str) -> NuGetFramework:
    """Parse either form: a comma means long form, anything else a folder name.

    Compact long names such as ``.NETFramework4.5`` are accepted as well.
    """
    if "," in (text or ""):
        return parse_framework_name(text)
    framework = parse_folder(text)
    if framework.is_unsupported:
        match = _COMPACT_LONG_PATTERN.match((text or "").strip())
        if match and match.group("id").lower() in mappings.CANONICAL_IDENTIFIERS:
            version = match.group("version")
            name = match.group("id") + (f",Version=v{version}" if version else "")
            return parse_framework_name(name)
    return framework


def _replace(framework: NuGetFramework, table) -> NuGetFramework:
    for key, value in table:
        if key == framework:
            return value
    return framework


def get_dotnet_framework_name(framework: NuGetFramework) -> str:
    """Long name, honoring the full name replacement table."""
    return _replace(framework, mappings.FULL_NAME_REPLACEMENTS).dotnet_framework_name


def get_short_folder_name(framework: NuGetFramework) -> str:
    """Render the short folder name; raises UnrenderableFrameworkError."""
    if not framework.is_specific:
        return framework.framework.lower()

    framework = _replace(framework, mappings.SHORT_NAME_REPLACEMENTS)
    identifier = framework.framework.lower()

    if identifier == F.PORTABLE.lower():
        if not framework.has_profile:
            raise UnrenderableFrameworkError(framework, "portable framework without a profile")
        members = get_portable_frameworks(framework.profile, include_optional=False)
        if not members:
            raise UnrenderableFrameworkError(framework, f"unknown portable profile {framework.profile!r}")
        return "portable-" + "+".join(get_short_folder_name(m) for m in members)

    short_id = mappings.IDENTIFIER_SHORT_NAMES.get(mappings.CANONICAL_IDENTIFIERS.get(identifier, ""))
    if short_id is None:
        raise UnrenderableFrameworkError(framework, "no short name for identifier")

    if framework.is_net5_era:
        result = "net" + format_version(framework.version)
    else:
        if framework.has_platform:
            raise UnrenderableFrameworkError(framework, "platforms require net5.0 or later")
        result = short_id + _short_version(framework)

    if framework.has_platform:
        result += "-" + framework.platform.lower()
        if framework.platform_version != EMPTY_VERSION:
            result += format_version(framework.platform_version)
    elif framework.has_profile:
        short_profile = None
        for profile, short in mappings.PROFILE_SHORT_NAMES.items():
            if profile.lower() == framework.profile.lower():
                short_profile = short
                break
        if short_profile is None:
            short_profile = framework.profile.lower()
        if short_profile:
            result += "-" + short_profile
    return result


def try_get_short_folder_name(framework: NuGetFramework) -> Optional[str]:
    try:
        return get_short_folder_name(framework)
    except UnrenderableFrameworkError as exc:
        if is_debug_enabled(logger):
            logger.debug("No short folder name: %s", exc, extra=extra_context(
                event="decision", component="names", action="render_short", outcome="unrenderable",
                target=str(framework),
            ))
        return None
