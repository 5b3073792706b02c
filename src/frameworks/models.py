"""Target framework value types.

A ``NuGetFramework`` is an immutable value: framework identifier, a four part
version, and either a profile or (for .NET 5 and later) a platform with its
own version. Equality and hashing ignore case in every string field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Version = Tuple[int, int, int, int]

EMPTY_VERSION: Version = (0, 0, 0, 0)
MAX_VERSION: Version = (2147483647, 2147483647, 2147483647, 2147483647)


class FrameworkIdentifiers:  # pylint: disable=too-few-public-methods
    """Canonical framework identifier strings."""

    NET = ".NETFramework"
    NET_CORE = ".NETCore"
    NET_CORE_APP = ".NETCoreApp"
    NET_STANDARD = ".NETStandard"
    NET_STANDARD_APP = ".NETStandardApp"
    NET_PLATFORM = ".NETPlatform"
    NET_MICRO = ".NETMicroFramework"
    NET_NANO = ".NETnanoFramework"
    PORTABLE = ".NETPortable"
    WINRT = "WinRT"
    WINDOWS = "Windows"
    WINDOWS_PHONE = "WindowsPhone"
    WINDOWS_PHONE_APP = "WindowsPhoneApp"
    SILVERLIGHT = "Silverlight"
    UAP = "UAP"
    DNX = "DNX"
    DNX_CORE = "DNXCore"
    ASP_NET = "ASP.NET"
    ASP_NET_CORE = "ASP.NETCore"
    NATIVE = "native"
    MONO_ANDROID = "MonoAndroid"
    MONO_TOUCH = "MonoTouch"
    MONO_MAC = "MonoMac"
    XAMARIN_IOS = "Xamarin.iOS"
    XAMARIN_MAC = "Xamarin.Mac"
    XAMARIN_PS3 = "Xamarin.PlayStation3"
    XAMARIN_PS4 = "Xamarin.PlayStation4"
    XAMARIN_PSVITA = "Xamarin.PlayStationVita"
    XAMARIN_WATCHOS = "Xamarin.WatchOS"
    XAMARIN_TVOS = "Xamarin.TVOS"
    XAMARIN_XBOX360 = "Xamarin.Xbox360"
    XAMARIN_XBOXONE = "Xamarin.XboxOne"
    TIZEN = "Tizen"

    ANY = "Any"
    AGNOSTIC = "Agnostic"
    UNSUPPORTED = "Unsupported"


SPECIAL_IDENTIFIERS = frozenset(
    x.lower() for x in (FrameworkIdentifiers.ANY, FrameworkIdentifiers.AGNOSTIC, FrameworkIdentifiers.UNSUPPORTED)
)


def normalize_version(parts) -> Version:
    """Pad or validate a version to exactly four non-negative integers."""
    values = tuple(int(p) for p in parts)
    if len(values) > 4 or any(v < 0 for v in values):
        raise ValueError(f"Invalid framework version: {parts!r}")
    return values + (0,) * (4 - len(values))  # type: ignore[return-value]


def format_version(version: Version, min_parts: int = 2) -> str:
    """Dotted version with trailing zero parts trimmed (at least min_parts)."""
    parts = list(version)
    while len(parts) > min_parts and parts[-1] == 0:
        parts.pop()
    return ".".join(str(p) for p in parts)


@dataclass(frozen=True, eq=False)
class NuGetFramework:
    """A target framework moniker."""

    framework: str
    version: Version = EMPTY_VERSION
    profile: str = ""
    platform: str = ""
    platform_version: Version = EMPTY_VERSION

    def __post_init__(self):
        object.__setattr__(self, "version", normalize_version(self.version))
        object.__setattr__(self, "platform_version", normalize_version(self.platform_version))
        object.__setattr__(self, "profile", self.profile or "")
        object.__setattr__(self, "platform", self.platform or "")

    def _key(self):
        return (
            self.framework.lower(),
            self.version,
            self.profile.lower(),
            self.platform.lower(),
            self.platform_version,
        )

    def __eq__(self, other):
        if not isinstance(other, NuGetFramework):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"NuGetFramework({self.dotnet_framework_name!r}{', ' + self.platform if self.platform else ''})"

    def __str__(self):
        return self.dotnet_framework_name

    @property
    def has_profile(self) -> bool:
        return bool(self.profile)

    @property
    def has_platform(self) -> bool:
        return bool(self.platform)

    @property
    def is_any(self) -> bool:
        return self.framework.lower() == FrameworkIdentifiers.ANY.lower()

    @property
    def is_agnostic(self) -> bool:
        return self.framework.lower() == FrameworkIdentifiers.AGNOSTIC.lower()

    @property
    def is_unsupported(self) -> bool:
        return self.framework.lower() == FrameworkIdentifiers.UNSUPPORTED.lower()

    @property
    def is_specific(self) -> bool:
        """False for the Any, Agnostic and Unsupported sentinels."""
        return self.framework.lower() not in SPECIAL_IDENTIFIERS

    @property
    def is_pcl(self) -> bool:
        return (
            self.framework.lower() == FrameworkIdentifiers.PORTABLE.lower()
            and self.version[0] < 5
            and self.has_profile
        )

    @property
    def is_net5_era(self) -> bool:
        """.NETCoreApp 5.0 and later, rendered as ``net5.0`` and friends."""
        return self.framework.lower() == FrameworkIdentifiers.NET_CORE_APP.lower() and self.version[0] >= 5

    @property
    def dotnet_framework_name(self) -> str:
        """Long form, e.g. ``.NETFramework,Version=v4.0,Profile=Client``.

        Platforms are not part of the long form.
        """
        if not self.is_specific:
            return self.framework
        name = f"{self.framework},Version=v{format_version(self.version)}"
        if self.has_profile:
            name += f",Profile={self.profile}"
        return name

    def same_framework(self, other: "NuGetFramework") -> bool:
        """Identifier and profile match, ignoring case and version."""
        return (
            self.framework.lower() == other.framework.lower()
            and self.profile.lower() == other.profile.lower()
        )

    def with_version(self, version: Version) -> "NuGetFramework":
        """Copy with a new version; platform is dropped, profile kept."""
        return NuGetFramework(self.framework, version, self.profile)

    def without_profile(self) -> "NuGetFramework":
        """Copy with profile and platform removed."""
        return NuGetFramework(self.framework, self.version)


ANY_FRAMEWORK = NuGetFramework(FrameworkIdentifiers.ANY)
AGNOSTIC_FRAMEWORK = NuGetFramework(FrameworkIdentifiers.AGNOSTIC)
UNSUPPORTED_FRAMEWORK = NuGetFramework(FrameworkIdentifiers.UNSUPPORTED)

SPECIAL_FRAMEWORKS = (AGNOSTIC_FRAMEWORK, ANY_FRAMEWORK, UNSUPPORTED_FRAMEWORK)


@dataclass(frozen=True)
class FrameworkRange:
    """Inclusive version range over a single framework identifier and profile."""

    min: NuGetFramework
    max: NuGetFramework
    include_min: bool = True
    include_max: bool = True

    def __post_init__(self):
        if not self.min.same_framework(self.max):
            raise ValueError(f"Range bounds differ in framework: {self.min} / {self.max}")

    def satisfies(self, framework: NuGetFramework) -> bool:
        if not self.min.same_framework(framework):
            return False
        low_ok = framework.version >= self.min.version if self.include_min else framework.version > self.min.version
        high_ok = framework.version <= self.max.version if self.include_max else framework.version < self.max.version
        return low_ok and high_ok


@dataclass(frozen=True)
class OneWayCompatibilityMapping:
    """Projects in target_range can consume assets built for supported_range."""

    target_range: FrameworkRange
    supported_range: FrameworkRange
