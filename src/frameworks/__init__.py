"""Target framework model: parsing, rendering, compatibility and ordering."""

from .compatibility import DEFAULT_PROVIDER, CompatibilityProvider
from .expander import FrameworkExpander
from .models import (
    AGNOSTIC_FRAMEWORK,
    ANY_FRAMEWORK,
    SPECIAL_FRAMEWORKS,
    UNSUPPORTED_FRAMEWORK,
    FrameworkIdentifiers,
    NuGetFramework,
)
from .names import (
    get_dotnet_framework_name,
    get_short_folder_name,
    parse,
    parse_folder,
    parse_framework_name,
    try_get_short_folder_name,
)
from .reducer import FrameworkReducer
from .sorting import FrameworkPrecedenceSorter

__all__ = [
    "AGNOSTIC_FRAMEWORK",
    "ANY_FRAMEWORK",
    "SPECIAL_FRAMEWORKS",
    "UNSUPPORTED_FRAMEWORK",
    "CompatibilityProvider",
    "DEFAULT_PROVIDER",
    "FrameworkExpander",
    "FrameworkIdentifiers",
    "FrameworkPrecedenceSorter",
    "FrameworkReducer",
    "NuGetFramework",
    "get_dotnet_framework_name",
    "get_short_folder_name",
    "parse",
    "parse_folder",
    "parse_framework_name",
    "try_get_short_folder_name",
]
