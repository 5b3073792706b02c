"""Path templates for package assets.

A template is a slash-separated list of segments. Literal segments match
case-insensitively; ``{name}`` segments are placeholders validated by the
parser registered for that name. A trailing ``{any}`` swallows one or more
remaining segments.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from constants import AssetCategory, Constants
from frameworks.models import ANY_FRAMEWORK, FrameworkIdentifiers, NuGetFramework
from frameworks.names import parse_folder

TFM = "tfm"
WILDCARD = "any"

_LOCALE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$")


def _parse_tfm(segment: str):
    framework = parse_folder(segment)
    return framework if framework.is_specific or framework.is_any else None


def _parse_assembly(segment: str):
    lowered = segment.lower()
    if segment == Constants.EMPTY_FOLDER_MARKER or lowered.endswith(Constants.ASSEMBLY_EXTENSIONS):
        return segment
    return None


def _parse_msbuild(segment: str):
    lowered = segment.lower()
    if segment == Constants.EMPTY_FOLDER_MARKER or lowered.endswith(Constants.MSBUILD_EXTENSIONS):
        return segment
    return None


def _parse_resources(segment: str):
    return segment if segment.lower().endswith(Constants.RESOURCE_ASSEMBLY_SUFFIX) else None


def _parse_locale(segment: str):
    return segment if _LOCALE_PATTERN.match(segment) else None


def _parse_code_language(segment: str):
    return segment.lower() or None


def _parse_token(segment: str):
    return segment or None


PLACEHOLDER_PARSERS: Dict[str, Callable[[str], object]] = {
    TFM: _parse_tfm,
    "rid": _parse_token,
    "assembly": _parse_assembly,
    "msbuild": _parse_msbuild,
    "resources": _parse_resources,
    "locale": _parse_locale,
    "codeLanguage": _parse_code_language,
}

# Placeholders naming the file itself rather than grouping it.
FILE_PLACEHOLDERS = frozenset({"assembly", "msbuild", "resources", WILDCARD})


@dataclass(frozen=True)
class AssetMatch:
    """Successful match of one path against one template."""

    template: "AssetPatternTemplate"
    framework: NuGetFramework
    bindings: Tuple[Tuple[str, object], ...]

    @property
    def group_key(self) -> Tuple[Tuple[str, object], ...]:
        return tuple((k, v) for k, v in self.bindings if k not in FILE_PLACEHOLDERS and k != TFM)


@dataclass(frozen=True)
class AssetPatternTemplate:
    """A path template bound to an asset category.

    Args:
        category: the asset role this template identifies.
        pattern: template text such as ``lib/{tfm}/{assembly}``.
        default_framework: framework reported when the template has no tfm.
    """

    category: AssetCategory
    pattern: str
    default_framework: Optional[NuGetFramework] = None
    segments: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        segments = tuple(self.pattern.split("/"))
        for index, segment in enumerate(segments):
            name = _placeholder_name(segment)
            if name is None:
                continue
            if name == WILDCARD:
                if index != len(segments) - 1:
                    raise ValueError(f"Wildcard must be the last segment: {self.pattern}")
            elif name not in PLACEHOLDER_PARSERS:
                raise ValueError(f"Unknown placeholder {{{name}}} in {self.pattern}")
        object.__setattr__(self, "segments", segments)

    @property
    def has_framework(self) -> bool:
        return any(_placeholder_name(s) == TFM for s in self.segments)

    def match(self, path: str) -> Optional[AssetMatch]:
        """Match a forward-slash path, or return None."""
        parts = path.split("/")
        segments = self.segments
        has_wildcard = _placeholder_name(segments[-1]) == WILDCARD
        if has_wildcard:
            if len(parts) < len(segments):
                return None
        elif len(parts) != len(segments):
            return None

        bindings: List[Tuple[str, object]] = []
        framework = self.default_framework
        for index, segment in enumerate(segments):
            name = _placeholder_name(segment)
            if name == WILDCARD:
                rest = "/".join(parts[index:])
                if not all(parts[index:]):
                    return None
                bindings.append((WILDCARD, rest))
                break
            part = parts[index]
            if name is None:
                if part.lower() != segment.lower():
                    return None
                continue
            value = PLACEHOLDER_PARSERS[name](part)
            if value is None:
                return None
            if name == TFM:
                framework = value
            bindings.append((name, value))

        if framework is None:
            return None
        return AssetMatch(self, framework, tuple(bindings))


def _placeholder_name(segment: str) -> Optional[str]:
    if len(segment) > 2 and segment.startswith("{") and segment.endswith("}"):
        return segment[1:-1]
    return None


_NET = NuGetFramework(FrameworkIdentifiers.NET)


def _templates(category: AssetCategory, default: Optional[NuGetFramework], *patterns: str):
    return tuple(AssetPatternTemplate(category, p, default) for p in patterns)


DEFAULT_TEMPLATES: Mapping[AssetCategory, Sequence[AssetPatternTemplate]] = {
    AssetCategory.RUNTIME: _templates(
        AssetCategory.RUNTIME, _NET,
        "runtimes/{rid}/lib/{tfm}/{assembly}",
        "lib/{tfm}/{assembly}",
        "lib/{assembly}",
    ),
    AssetCategory.COMPILE: _templates(
        AssetCategory.COMPILE, _NET,
        "ref/{tfm}/{assembly}",
        "lib/{tfm}/{assembly}",
        "lib/{assembly}",
    ),
    AssetCategory.CONTENT: _templates(
        AssetCategory.CONTENT, None,
        "contentFiles/{codeLanguage}/{tfm}/{any}",
    ),
    AssetCategory.RESOURCE: _templates(
        AssetCategory.RESOURCE, _NET,
        "runtimes/{rid}/lib/{tfm}/{locale}/{resources}",
        "lib/{tfm}/{locale}/{resources}",
    ),
    AssetCategory.BUILD: _templates(
        AssetCategory.BUILD, ANY_FRAMEWORK,
        "buildTransitive/{tfm}/{msbuild}",
        "buildTransitive/{msbuild}",
        "build/{tfm}/{msbuild}",
        "build/{msbuild}",
    ),
    AssetCategory.BUILD_MULTITARGETING: _templates(
        AssetCategory.BUILD_MULTITARGETING, ANY_FRAMEWORK,
        "buildMultiTargeting/{msbuild}",
        "buildCrossTargeting/{msbuild}",
    ),
}
