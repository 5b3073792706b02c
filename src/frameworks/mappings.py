"""Hand-maintained framework tables.

Short names, equivalences, one-way compatibility ranges, name replacements,
portable profiles and precedence. This is data, not logic: everything that
reasons about frameworks reads it through the functions in this package.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from .models import (
    MAX_VERSION,
    FrameworkIdentifiers as F,
    FrameworkRange,
    NuGetFramework,
    OneWayCompatibilityMapping,
)


def _fw(identifier: str, *version: int, profile: str = "", platform: str = "") -> NuGetFramework:
    return NuGetFramework(identifier, tuple(version) or (0,), profile, platform)


def _range(identifier: str, low, high=None, profile: str = "") -> FrameworkRange:
    high_version = MAX_VERSION if high is None else high
    return FrameworkRange(
        NuGetFramework(identifier, low, profile),
        NuGetFramework(identifier, high_version, profile),
    )


def _maps(target: FrameworkRange, supported: FrameworkRange) -> OneWayCompatibilityMapping:
    return OneWayCompatibilityMapping(target, supported)


# identifier -> short folder name
IDENTIFIER_SHORT_NAMES: Dict[str, str] = {
    F.NET: "net",
    F.NET_CORE_APP: "netcoreapp",
    F.NET_STANDARD: "netstandard",
    F.NET_STANDARD_APP: "netstandardapp",
    F.NET_PLATFORM: "dotnet",
    F.NET_CORE: "netcore",
    F.NET_MICRO: "netmf",
    F.NET_NANO: "netnano",
    F.PORTABLE: "portable",
    F.WINRT: "winrt",
    F.WINDOWS: "win",
    F.WINDOWS_PHONE: "wp",
    F.WINDOWS_PHONE_APP: "wpa",
    F.SILVERLIGHT: "sl",
    F.UAP: "uap",
    F.DNX: "dnx",
    F.DNX_CORE: "dnxcore",
    F.ASP_NET: "aspnet",
    F.ASP_NET_CORE: "aspnetcore",
    F.NATIVE: "native",
    F.MONO_ANDROID: "monoandroid",
    F.MONO_TOUCH: "monotouch",
    F.MONO_MAC: "monomac",
    F.XAMARIN_IOS: "xamarinios",
    F.XAMARIN_MAC: "xamarinmac",
    F.XAMARIN_PS3: "xamarinpsthree",
    F.XAMARIN_PS4: "xamarinpsfour",
    F.XAMARIN_PSVITA: "xamarinpsvita",
    F.XAMARIN_WATCHOS: "xamarinwatchos",
    F.XAMARIN_TVOS: "xamarintvos",
    F.XAMARIN_XBOX360: "xamarinxboxthreesixty",
    F.XAMARIN_XBOXONE: "xamarinxboxone",
    F.TIZEN: "tizen",
}

SHORT_NAME_IDENTIFIERS: Dict[str, str] = {v: k for k, v in IDENTIFIER_SHORT_NAMES.items()}

# lowercase identifier -> canonical casing, for long names typed in any case
CANONICAL_IDENTIFIERS: Dict[str, str] = {
    k.lower(): k for k in list(IDENTIFIER_SHORT_NAMES) + [F.ANY, F.AGNOSTIC, F.UNSUPPORTED]
}

# profile -> short folder suffix; an empty suffix means "renders without a profile"
PROFILE_SHORT_NAMES: Dict[str, str] = {
    "Client": "client",
    "CompactFramework": "cf",
    "Full": "",
    "WindowsPhone": "wp",
    "WindowsPhone71": "wp71",
}

SHORT_PROFILE_NAMES: Dict[str, str] = {v: k for k, v in PROFILE_SHORT_NAMES.items() if v}

# Versions render with a decimal point ("netstandard2.0") for these identifiers.
DECIMAL_POINT_IDENTIFIERS = frozenset(
    x.lower() for x in (F.NET_STANDARD, F.NET_STANDARD_APP, F.NET_CORE_APP, F.NET_PLATFORM, F.TIZEN, F.NET_NANO)
)

# A lone major version renders as one digit ("win8", "sl5") for these; others pad ("net40").
SINGLE_DIGIT_IDENTIFIERS = frozenset(x.lower() for x in (F.WINDOWS, F.WINDOWS_PHONE, F.SILVERLIGHT))

# Profiles interchangeable for a given identifier.
EQUIVALENT_PROFILES: Dict[str, Tuple[str, ...]] = {
    F.NET.lower(): ("", "Client", "Full"),
}

EQUIVALENT_FRAMEWORKS: List[Tuple[NuGetFramework, NuGetFramework]] = [
    (_fw(F.WINDOWS), _fw(F.WINDOWS, 8, 0)),
    (_fw(F.WINDOWS, 8, 0), _fw(F.NET_CORE, 4, 5)),
    (_fw(F.NET_CORE, 4, 5), _fw(F.WINRT, 4, 5)),
    (_fw(F.WINDOWS, 8, 1), _fw(F.NET_CORE, 4, 5, 1)),
    (_fw(F.WINDOWS_PHONE), _fw(F.WINDOWS_PHONE, 7, 0)),
    (_fw(F.WINDOWS_PHONE, 7, 0), _fw(F.SILVERLIGHT, 3, 0, profile="WindowsPhone")),
    (_fw(F.WINDOWS_PHONE, 7, 1), _fw(F.SILVERLIGHT, 4, 0, profile="WindowsPhone71")),
    (_fw(F.WINDOWS_PHONE, 8, 0), _fw(F.SILVERLIGHT, 8, 0, profile="WindowsPhone")),
    (_fw(F.WINDOWS_PHONE, 8, 1), _fw(F.SILVERLIGHT, 8, 1, profile="WindowsPhone")),
    (_fw(F.WINDOWS_PHONE_APP), _fw(F.WINDOWS_PHONE_APP, 8, 1)),
    (_fw(F.UAP), _fw(F.UAP, 10, 0)),
    (_fw(F.TIZEN), _fw(F.TIZEN, 3, 0)),
    (_fw(F.DNX), _fw(F.DNX, 4, 5)),
    (_fw(F.DNX_CORE), _fw(F.DNX_CORE, 5, 0)),
    (_fw(F.ASP_NET), _fw(F.ASP_NET, 5, 0)),
    (_fw(F.ASP_NET_CORE), _fw(F.ASP_NET_CORE, 5, 0)),
    (_fw(F.NET_PLATFORM), _fw(F.NET_PLATFORM, 5, 0)),
]

# Short names render the value instead of the key.
SHORT_NAME_REPLACEMENTS: List[Tuple[NuGetFramework, NuGetFramework]] = [
    (_fw(F.NET_PLATFORM, 5, 0), _fw(F.NET_PLATFORM)),
]

# Long names render the value instead of the key.
FULL_NAME_REPLACEMENTS: List[Tuple[NuGetFramework, NuGetFramework]] = [
    (_fw(F.NET_PLATFORM), _fw(F.NET_PLATFORM, 5, 0)),
]

_XAMARIN = (
    F.MONO_ANDROID, F.MONO_TOUCH, F.MONO_MAC, F.XAMARIN_IOS, F.XAMARIN_MAC,
    F.XAMARIN_TVOS, F.XAMARIN_WATCHOS,
)

COMPATIBILITY_MAPPINGS: List[OneWayCompatibilityMapping] = [
    # UWP
    _maps(_range(F.UAP, (10, 0)), _range(F.WINDOWS, (0, 0), (8, 1))),
    _maps(_range(F.UAP, (10, 0)), _range(F.WINDOWS_PHONE_APP, (0, 0), (8, 1))),
    _maps(_range(F.UAP, (10, 0)), _range(F.NET_CORE, (0, 0), (5, 0))),
    # .NET Standard generations
    _maps(_range(F.NET, (4, 5)), _range(F.NET_STANDARD, (0, 0), (1, 1))),
    _maps(_range(F.NET, (4, 5, 1)), _range(F.NET_STANDARD, (0, 0), (1, 2))),
    _maps(_range(F.NET, (4, 6)), _range(F.NET_STANDARD, (0, 0), (1, 3))),
    _maps(_range(F.NET, (4, 6, 1)), _range(F.NET_STANDARD, (0, 0), (2, 0))),
    _maps(_range(F.NET_CORE, (4, 5)), _range(F.NET_STANDARD, (0, 0), (1, 1))),
    _maps(_range(F.NET_CORE, (4, 5, 1)), _range(F.NET_STANDARD, (0, 0), (1, 2))),
    _maps(_range(F.NET_CORE, (5, 0)), _range(F.NET_STANDARD, (0, 0), (1, 4))),
    _maps(_range(F.WINDOWS, (8, 0)), _range(F.NET_STANDARD, (0, 0), (1, 1))),
    _maps(_range(F.WINDOWS, (8, 1)), _range(F.NET_STANDARD, (0, 0), (1, 2))),
    _maps(_range(F.WINDOWS_PHONE, (8, 1)), _range(F.NET_STANDARD, (0, 0), (1, 0))),
    _maps(_range(F.WINDOWS_PHONE_APP, (8, 1)), _range(F.NET_STANDARD, (0, 0), (1, 2))),
    _maps(_range(F.UAP, (10, 0)), _range(F.NET_STANDARD, (0, 0), (1, 4))),
    _maps(_range(F.UAP, (10, 0, 15064)), _range(F.NET_STANDARD, (0, 0), (2, 0))),
    _maps(_range(F.NET_CORE_APP, (1, 0)), _range(F.NET_STANDARD, (0, 0), (1, 6))),
    _maps(_range(F.NET_CORE_APP, (2, 0)), _range(F.NET_STANDARD, (0, 0), (2, 0))),
    _maps(_range(F.NET_CORE_APP, (3, 0)), _range(F.NET_STANDARD, (0, 0), (2, 1))),
    _maps(_range(F.NET_STANDARD_APP, (1, 5)), _range(F.NET_STANDARD, (0, 0), (1, 5))),
    _maps(_range(F.TIZEN, (3, 0)), _range(F.NET_STANDARD, (0, 0), (1, 6))),
    _maps(_range(F.TIZEN, (4, 0)), _range(F.NET_STANDARD, (0, 0), (2, 0))),
    _maps(_range(F.DNX_CORE, (5, 0)), _range(F.NET_STANDARD, (0, 0), (1, 5))),
    # dotnet5.x generations
    _maps(_range(F.NET, (4, 5)), _range(F.NET_PLATFORM, (5, 0), (5, 2))),
    _maps(_range(F.NET, (4, 5, 1)), _range(F.NET_PLATFORM, (5, 0), (5, 3))),
    _maps(_range(F.NET, (4, 6)), _range(F.NET_PLATFORM, (5, 0), (5, 4))),
    _maps(_range(F.NET, (4, 6, 1)), _range(F.NET_PLATFORM, (5, 0), (5, 5))),
    _maps(_range(F.NET_CORE, (5, 0)), _range(F.NET_PLATFORM, (5, 0), (5, 5))),
    _maps(_range(F.NET_CORE_APP, (1, 0)), _range(F.NET_PLATFORM, (5, 0), (5, 6))),
    _maps(_range(F.DNX_CORE, (5, 0)), _range(F.NET_PLATFORM, (5, 0), (5, 6))),
] + [
    _maps(_range(identifier, (0, 0)), _range(F.NET_STANDARD, (0, 0), (2, 1)))
    for identifier in _XAMARIN
]

# Portable class library profiles: number -> member frameworks.
PORTABLE_PROFILES: Dict[int, Tuple[NuGetFramework, ...]] = {
    2: (_fw(F.NET, 4, 0), _fw(F.WINDOWS, 8, 0), _fw(F.SILVERLIGHT, 4, 0), _fw(F.WINDOWS_PHONE, 7, 0)),
    3: (_fw(F.NET, 4, 0), _fw(F.SILVERLIGHT, 4, 0)),
    4: (_fw(F.NET, 4, 5), _fw(F.SILVERLIGHT, 4, 0), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE, 7, 0)),
    5: (_fw(F.NET, 4, 0), _fw(F.WINDOWS, 8, 0)),
    6: (_fw(F.NET, 4, 0, 3), _fw(F.WINDOWS, 8, 0)),
    7: (_fw(F.NET, 4, 5), _fw(F.WINDOWS, 8, 0)),
    14: (_fw(F.NET, 4, 0), _fw(F.SILVERLIGHT, 5, 0)),
    18: (_fw(F.NET, 4, 0, 3), _fw(F.SILVERLIGHT, 4, 0)),
    19: (_fw(F.NET, 4, 0, 3), _fw(F.SILVERLIGHT, 5, 0)),
    23: (_fw(F.NET, 4, 5), _fw(F.SILVERLIGHT, 4, 0)),
    24: (_fw(F.NET, 4, 5), _fw(F.SILVERLIGHT, 5, 0)),
    31: (_fw(F.WINDOWS, 8, 1), _fw(F.WINDOWS_PHONE, 8, 1)),
    32: (_fw(F.WINDOWS, 8, 1), _fw(F.WINDOWS_PHONE_APP, 8, 1)),
    36: (_fw(F.NET, 4, 0), _fw(F.SILVERLIGHT, 4, 0), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE, 8, 0)),
    37: (_fw(F.NET, 4, 0), _fw(F.SILVERLIGHT, 5, 0), _fw(F.WINDOWS, 8, 0)),
    41: (_fw(F.NET, 4, 0, 3), _fw(F.SILVERLIGHT, 4, 0), _fw(F.WINDOWS, 8, 0)),
    42: (_fw(F.NET, 4, 0, 3), _fw(F.SILVERLIGHT, 5, 0), _fw(F.WINDOWS, 8, 0)),
    44: (_fw(F.NET, 4, 5, 1), _fw(F.WINDOWS, 8, 1)),
    46: (_fw(F.NET, 4, 5), _fw(F.SILVERLIGHT, 4, 0), _fw(F.WINDOWS, 8, 0)),
    47: (_fw(F.NET, 4, 5), _fw(F.SILVERLIGHT, 5, 0), _fw(F.WINDOWS, 8, 0)),
    49: (_fw(F.NET, 4, 5), _fw(F.WINDOWS_PHONE, 8, 0)),
    78: (_fw(F.NET, 4, 5), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE, 8, 0)),
    84: (_fw(F.WINDOWS_PHONE, 8, 1), _fw(F.WINDOWS_PHONE_APP, 8, 1)),
    92: (_fw(F.NET, 4, 0), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE_APP, 8, 1)),
    102: (_fw(F.NET, 4, 0, 3), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE_APP, 8, 1)),
    111: (_fw(F.NET, 4, 5), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE_APP, 8, 1)),
    136: (_fw(F.NET, 4, 0), _fw(F.SILVERLIGHT, 5, 0), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE, 8, 0)),
    147: (_fw(F.NET, 4, 0, 3), _fw(F.SILVERLIGHT, 5, 0), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE, 8, 0)),
    151: (_fw(F.NET, 4, 5, 1), _fw(F.WINDOWS, 8, 1), _fw(F.WINDOWS_PHONE_APP, 8, 1)),
    157: (_fw(F.WINDOWS, 8, 1), _fw(F.WINDOWS_PHONE, 8, 1), _fw(F.WINDOWS_PHONE_APP, 8, 1)),
    158: (_fw(F.NET, 4, 5), _fw(F.SILVERLIGHT, 5, 0), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE, 8, 0)),
    225: (_fw(F.NET, 4, 0), _fw(F.SILVERLIGHT, 5, 0), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE_APP, 8, 1)),
    259: (_fw(F.NET, 4, 5), _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS_PHONE_APP, 8, 1), _fw(F.WINDOWS_PHONE, 8, 0)),
    328: (
        _fw(F.NET, 4, 0), _fw(F.SILVERLIGHT, 5, 0), _fw(F.WINDOWS, 8, 0),
        _fw(F.WINDOWS_PHONE_APP, 8, 1), _fw(F.WINDOWS_PHONE, 8, 0),
    ),
    344: (
        _fw(F.NET, 4, 5), _fw(F.SILVERLIGHT, 5, 0), _fw(F.WINDOWS, 8, 0),
        _fw(F.WINDOWS_PHONE_APP, 8, 1), _fw(F.WINDOWS_PHONE, 8, 0),
    ),
}

_PORTABLE_OPTIONAL_MEMBERS = (
    _fw(F.MONO_ANDROID, 1, 0), _fw(F.MONO_TOUCH, 1, 0), _fw(F.XAMARIN_IOS, 1, 0),
    _fw(F.XAMARIN_MAC, 2, 0), _fw(F.XAMARIN_PS3), _fw(F.XAMARIN_PS4), _fw(F.XAMARIN_PSVITA),
    _fw(F.XAMARIN_WATCHOS), _fw(F.XAMARIN_TVOS), _fw(F.XAMARIN_XBOX360), _fw(F.XAMARIN_XBOXONE),
)

# Profiles whose folder names may also list Xamarin members without changing identity.
PORTABLE_OPTIONAL_FRAMEWORKS: Dict[int, Tuple[NuGetFramework, ...]] = {
    number: _PORTABLE_OPTIONAL_MEMBERS
    for number in (5, 6, 7, 14, 19, 24, 37, 42, 44, 47, 49, 78, 92, 102, 111, 136, 147, 151, 158, 225, 259, 328, 344)
}

# Profile number -> .NETStandard versions a project on that profile can consume.
PORTABLE_COMPATIBILITY_MAPPINGS: Dict[int, FrameworkRange] = {
    7: _range(F.NET_STANDARD, (1, 0), (1, 1)),
    31: _range(F.NET_STANDARD, (1, 0), (1, 0)),
    32: _range(F.NET_STANDARD, (1, 0), (1, 2)),
    44: _range(F.NET_STANDARD, (1, 0), (1, 2)),
    49: _range(F.NET_STANDARD, (1, 0), (1, 0)),
    78: _range(F.NET_STANDARD, (1, 0), (1, 0)),
    84: _range(F.NET_STANDARD, (1, 0), (1, 0)),
    111: _range(F.NET_STANDARD, (1, 0), (1, 1)),
    151: _range(F.NET_STANDARD, (1, 0), (1, 2)),
    157: _range(F.NET_STANDARD, (1, 0), (1, 0)),
    259: _range(F.NET_STANDARD, (1, 0), (1, 0)),
}

# Sort order for non package based frameworks, then package based ones.
NON_PACKAGE_BASED_PRECEDENCE = (F.NET, F.NET_CORE, F.WINDOWS, F.WINDOWS_PHONE_APP)
PACKAGE_BASED_PRECEDENCE = (F.NET_CORE_APP, F.NET_STANDARD_APP, F.NET_STANDARD, F.NET_PLATFORM)

FRAMEWORK_PRECEDENCE: Dict[str, int] = {
    identifier.lower(): index
    for index, identifier in enumerate(NON_PACKAGE_BASED_PRECEDENCE + PACKAGE_BASED_PRECEDENCE)
}

# Well known frameworks seeding enumeration (hand maintained).
COMMON_FRAMEWORKS: Tuple[NuGetFramework, ...] = (
    _fw(F.NET, 1, 1), _fw(F.NET, 2, 0), _fw(F.NET, 3, 5), _fw(F.NET, 4, 0), _fw(F.NET, 4, 0, 3),
    _fw(F.NET, 4, 5), _fw(F.NET, 4, 5, 1), _fw(F.NET, 4, 5, 2), _fw(F.NET, 4, 6), _fw(F.NET, 4, 6, 1),
    _fw(F.NET, 4, 6, 2), _fw(F.NET, 4, 6, 3), _fw(F.NET, 4, 7), _fw(F.NET, 4, 7, 1), _fw(F.NET, 4, 7, 2),
    _fw(F.NET, 4, 8), _fw(F.NET, 4, 8, 1),
    _fw(F.NET, 3, 5, profile="Client"), _fw(F.NET, 4, 0, profile="Client"), _fw(F.NET, 4, 0, profile="Full"),
    _fw(F.NET, 3, 5, profile="CompactFramework"),
    _fw(F.NET_CORE), _fw(F.NET_CORE, 4, 5), _fw(F.NET_CORE, 4, 5, 1), _fw(F.NET_CORE, 5, 0),
    _fw(F.WINDOWS, 8, 0), _fw(F.WINDOWS, 8, 1), _fw(F.WINDOWS, 10, 0),
    _fw(F.SILVERLIGHT, 4, 0), _fw(F.SILVERLIGHT, 5, 0),
    _fw(F.WINDOWS_PHONE, 7, 0), _fw(F.WINDOWS_PHONE, 7, 5), _fw(F.WINDOWS_PHONE, 8, 0), _fw(F.WINDOWS_PHONE, 8, 1),
    _fw(F.WINDOWS_PHONE_APP, 8, 1),
    _fw(F.UAP, 10, 0), _fw(F.UAP, 10, 0, 15064), _fw(F.TIZEN, 3, 0), _fw(F.TIZEN, 4, 0),
    _fw(F.NET_STANDARD, 1, 0), _fw(F.NET_STANDARD, 1, 1), _fw(F.NET_STANDARD, 1, 2), _fw(F.NET_STANDARD, 1, 3),
    _fw(F.NET_STANDARD, 1, 4), _fw(F.NET_STANDARD, 1, 5), _fw(F.NET_STANDARD, 1, 6), _fw(F.NET_STANDARD, 2, 0),
    _fw(F.NET_STANDARD, 2, 1), _fw(F.NET_STANDARD_APP, 1, 5),
    _fw(F.NET_CORE_APP, 1, 0), _fw(F.NET_CORE_APP, 1, 1), _fw(F.NET_CORE_APP, 2, 0), _fw(F.NET_CORE_APP, 2, 1),
    _fw(F.NET_CORE_APP, 2, 2), _fw(F.NET_CORE_APP, 3, 0), _fw(F.NET_CORE_APP, 3, 1),
    _fw(F.NET_CORE_APP, 5, 0), _fw(F.NET_CORE_APP, 6, 0), _fw(F.NET_CORE_APP, 7, 0), _fw(F.NET_CORE_APP, 8, 0),
    _fw(F.NET_CORE_APP, 5, 0, platform="windows"), _fw(F.NET_CORE_APP, 6, 0, platform="windows"),
    _fw(F.NET_CORE_APP, 6, 0, platform="android"), _fw(F.NET_CORE_APP, 6, 0, platform="ios"),
    _fw(F.NET_CORE_APP, 6, 0, platform="maccatalyst"), _fw(F.NET_CORE_APP, 6, 0, platform="macos"),
    _fw(F.NET_CORE_APP, 6, 0, platform="tvos"),
    _fw(F.DNX, 4, 5), _fw(F.DNX, 4, 5, 1), _fw(F.DNX, 4, 5, 2), _fw(F.DNX_CORE, 5, 0),
    _fw(F.NET_PLATFORM, 5, 1), _fw(F.NET_PLATFORM, 5, 2), _fw(F.NET_PLATFORM, 5, 3), _fw(F.NET_PLATFORM, 5, 4),
    _fw(F.NET_PLATFORM, 5, 5), _fw(F.NET_PLATFORM, 5, 6),
    _fw(F.MONO_ANDROID, 1, 0), _fw(F.MONO_TOUCH, 1, 0), _fw(F.MONO_MAC, 2, 0),
    _fw(F.XAMARIN_IOS, 1, 0), _fw(F.XAMARIN_MAC, 2, 0), _fw(F.NET_MICRO, 4, 3), _fw(F.NET_NANO, 1, 0),
)
