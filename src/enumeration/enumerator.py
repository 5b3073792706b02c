"""Enumerates a representative universe of target frameworks.

Seeds come from the framework tables (see ``FrameworkEnumerationOptions``);
every seed is then expanded independently (see ``FrameworkExpansionOptions``).
Only novel frameworks are added, and anything that has no short folder name
is dropped at the end.
"""

from __future__ import annotations

import logging
from enum import IntFlag
from typing import Iterable, List, Optional

from common.logging_utils import extra_context, is_debug_enabled
from errors import FrameworkError
from frameworks import mappings
from frameworks.expander import FrameworkExpander
from frameworks.models import (
    EMPTY_VERSION,
    MAX_VERSION,
    SPECIAL_FRAMEWORKS,
    FrameworkIdentifiers,
    NuGetFramework,
)
from frameworks.names import (
    get_dotnet_framework_name,
    get_portable_frameworks,
    parse_folder,
    parse_framework_name,
    try_get_short_folder_name,
)

logger = logging.getLogger(__name__)


class FrameworkEnumerationOptions(IntFlag):
    """Seed sources for enumeration."""

    NONE = 0
    FRAMEWORK_NAME_PROVIDER = 1
    COMMON_FRAMEWORKS = 2
    FRAMEWORK_MAPPINGS = 4
    PORTABLE_FRAMEWORK_MAPPINGS = 8
    SPECIAL_FRAMEWORKS = 16
    ALL = 31


class FrameworkExpansionOptions(IntFlag):
    """Expansion steps applied to each seed."""

    NONE = 0
    ROUND_TRIP_DOTNET_FRAMEWORK_NAME = 1
    ROUND_TRIP_SHORT_FOLDER_NAME = 2
    FRAMEWORK_EXPANDER = 4
    MINIMUM_VERSION = 8
    REMOVE_PROFILE = 16
    ALL = 31


def _add_framework(output: List[NuGetFramework], seen: set, framework: Optional[NuGetFramework]) -> bool:
    if framework is None or framework in seen:
        return False
    if framework.version == MAX_VERSION:
        return False
    seen.add(framework)
    output.append(framework)
    return True


class FrameworkEnumerator:
    """Builds the framework universe from the tables in ``frameworks.mappings``."""

    def __init__(self, expander: Optional[FrameworkExpander] = None):
        self.expander = expander or FrameworkExpander()

    def enumerate(
        self,
        enumeration_options: FrameworkEnumerationOptions = FrameworkEnumerationOptions.ALL,
        expansion_options: FrameworkExpansionOptions = FrameworkExpansionOptions.ALL,
    ) -> List[NuGetFramework]:
        """Seed, expand and filter.

        Args:
            enumeration_options: which seed sources to use.
            expansion_options: which expansion steps to apply to every seed.

        Returns:
            list: distinct renderable frameworks in a stable order.
        """
        output: List[NuGetFramework] = []
        seen: set = set()
        for seed in self._seeds(enumeration_options):
            _add_framework(output, seen, seed)

        expanded: List[NuGetFramework] = []
        expanded_seen: set = set()
        for framework in output:
            _add_framework(expanded, expanded_seen, framework)
            for variant in self.expand(framework, expansion_options):
                _add_framework(expanded, expanded_seen, variant)

        result = [f for f in expanded if try_get_short_folder_name(f) is not None]
        if is_debug_enabled(logger):
            logger.debug(
                "Framework enumeration finished",
                extra=extra_context(
                    event="enumeration",
                    component="enumerator",
                    action="enumerate",
                    outcome="success",
                    count=len(result),
                    dropped=len(expanded) - len(result),
                ),
            )
        return result

    def expand(
        self,
        framework: NuGetFramework,
        options: FrameworkExpansionOptions = FrameworkExpansionOptions.ALL,
    ) -> List[NuGetFramework]:
        """Variants of one framework per the requested expansion steps."""
        variants: List[NuGetFramework] = []
        if options & FrameworkExpansionOptions.ROUND_TRIP_DOTNET_FRAMEWORK_NAME:
            try:
                variants.append(parse_framework_name(get_dotnet_framework_name(framework)))
            except FrameworkError:
                pass
        if options & FrameworkExpansionOptions.ROUND_TRIP_SHORT_FOLDER_NAME:
            short_name = try_get_short_folder_name(framework)
            if short_name is not None:
                variants.append(parse_folder(short_name))
        if options & FrameworkExpansionOptions.FRAMEWORK_EXPANDER:
            variants.extend(self.expander.expand(framework))
        if framework.is_specific:
            if options & FrameworkExpansionOptions.MINIMUM_VERSION:
                variants.append(framework.with_version(EMPTY_VERSION))
            if options & FrameworkExpansionOptions.REMOVE_PROFILE and framework.has_profile:
                variants.append(framework.without_profile())
        return variants

    def _seeds(self, options: FrameworkEnumerationOptions) -> Iterable[NuGetFramework]:
        if options & FrameworkEnumerationOptions.FRAMEWORK_NAME_PROVIDER:
            for identifier in mappings.IDENTIFIER_SHORT_NAMES:
                yield NuGetFramework(identifier)

        if options & FrameworkEnumerationOptions.COMMON_FRAMEWORKS:
            yield from mappings.COMMON_FRAMEWORKS

        if options & FrameworkEnumerationOptions.FRAMEWORK_MAPPINGS:
            for left, right in mappings.EQUIVALENT_FRAMEWORKS:
                yield left
                yield right
            for mapping in mappings.COMPATIBILITY_MAPPINGS:
                yield mapping.target_range.min
                yield mapping.target_range.max
                yield mapping.supported_range.min
                yield mapping.supported_range.max
            for key, value in mappings.SHORT_NAME_REPLACEMENTS + mappings.FULL_NAME_REPLACEMENTS:
                yield key
                yield value

        if options & FrameworkEnumerationOptions.PORTABLE_FRAMEWORK_MAPPINGS:
            for number in mappings.PORTABLE_PROFILES:
                yield from get_portable_frameworks(f"Profile{number}") or ()
                yield NuGetFramework(FrameworkIdentifiers.PORTABLE, profile=f"Profile{number}")
            for members in mappings.PORTABLE_OPTIONAL_FRAMEWORKS.values():
                yield from members
            for number, supported in mappings.PORTABLE_COMPATIBILITY_MAPPINGS.items():
                yield NuGetFramework(FrameworkIdentifiers.PORTABLE, profile=f"Profile{number}")
                yield supported.min
                yield supported.max

        if options & FrameworkEnumerationOptions.SPECIAL_FRAMEWORKS:
            yield from SPECIAL_FRAMEWORKS
