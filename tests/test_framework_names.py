"""Tests for parsing and rendering framework names."""

import logging

import pytest

from errors import FrameworkError, UnrenderableFrameworkError
from frameworks.models import (
    ANY_FRAMEWORK,
    UNSUPPORTED_FRAMEWORK,
    FrameworkIdentifiers as F,
    NuGetFramework,
)
from frameworks.names import (
    get_dotnet_framework_name,
    get_portable_frameworks,
    get_short_folder_name,
    parse,
    parse_folder,
    parse_framework_name,
    try_get_short_folder_name,
)


class TestParseFolder:
    """Test short folder name parsing."""

    @pytest.mark.parametrize(
        "folder,expected",
        [
            ("net45", NuGetFramework(F.NET, (4, 5))),
            ("net451", NuGetFramework(F.NET, (4, 5, 1))),
            ("net403", NuGetFramework(F.NET, (4, 0, 3))),
            ("netstandard2.0", NuGetFramework(F.NET_STANDARD, (2, 0))),
            ("netcoreapp3.1", NuGetFramework(F.NET_CORE_APP, (3, 1))),
            ("win8", NuGetFramework(F.WINDOWS, (8, 0))),
            ("win10.0", NuGetFramework(F.WINDOWS, (10, 0))),
            ("wp75", NuGetFramework(F.WINDOWS_PHONE, (7, 5))),
            ("uap10.0.15064", NuGetFramework(F.UAP, (10, 0, 15064))),
            ("xamarinios10", NuGetFramework(F.XAMARIN_IOS, (1, 0))),
            ("dotnet", NuGetFramework(F.NET_PLATFORM)),
        ],
    )
    def test_parses_versions(self, folder, expected):
        """Test dotted and concatenated versions map to four-part versions."""
        assert parse_folder(folder) == expected

    def test_dotted_net5_is_netcoreapp(self):
        """Test net5.0 means .NETCoreApp while net50 stays .NETFramework."""
        assert parse_folder("net5.0") == NuGetFramework(F.NET_CORE_APP, (5, 0))
        assert parse_folder("net50") == NuGetFramework(F.NET, (5, 0))

    def test_parses_platform(self):
        """Test the suffix of a net5+ folder is a platform with a version."""
        framework = parse_folder("net6.0-windows10.0.19041")
        assert framework.framework == F.NET_CORE_APP
        assert framework.platform == "windows"
        assert framework.platform_version == (10, 0, 19041, 0)
        assert framework.profile == ""

    def test_parses_profiles(self):
        """Test short profile names are expanded, unknown ones kept."""
        assert parse_folder("net40-client").profile == "Client"
        assert parse_folder("net35-cf").profile == "CompactFramework"
        assert parse_folder("sl3-wp") == NuGetFramework(F.SILVERLIGHT, (3, 0), "WindowsPhone")
        assert parse_folder("net40-custom").profile == "custom"

    def test_parses_portable_members(self):
        """Test portable member lists resolve to profile numbers."""
        assert parse_folder("portable-net45+win8") == NuGetFramework(F.PORTABLE, profile="Profile7")
        assert parse_folder("portable-win8+net45") == NuGetFramework(F.PORTABLE, profile="Profile7")
        assert parse_folder("portable-Profile78").profile == "Profile78"

    def test_portable_optional_members_are_ignored(self):
        """Test Xamarin members do not change the matched profile."""
        framework = parse_folder("portable-net45+win8+monoandroid10+xamarinios10")
        assert framework.profile == "Profile7"

    def test_unknown_portable_members_keep_custom_profile(self):
        """Test member lists without a matching profile are kept verbatim."""
        framework = parse_folder("portable-net45+netcoreapp1.0")
        assert framework.framework == F.PORTABLE
        assert framework.profile == "net45+netcoreapp1.0"

    @pytest.mark.parametrize("folder", ["foo42", "", "net4x", "portable", "portable-foo+bar", "-net45"])
    def test_unknown_is_unsupported(self, folder):
        """Test unknown or malformed names never raise."""
        assert parse_folder(folder) == UNSUPPORTED_FRAMEWORK

    def test_special_names(self):
        """Test special framework names."""
        assert parse_folder("any") == ANY_FRAMEWORK
        assert parse_folder("Any").is_any
        assert parse_folder("agnostic").is_agnostic


class TestShortFolderName:
    """Test short folder name rendering."""

    @pytest.mark.parametrize(
        "framework,expected",
        [
            (NuGetFramework(F.NET, (4, 5)), "net45"),
            (NuGetFramework(F.NET, (4, 5, 1)), "net451"),
            (NuGetFramework(F.NET, (4, 0), "Client"), "net40-client"),
            (NuGetFramework(F.NET, (4, 0), "Full"), "net40"),
            (NuGetFramework(F.NET, (5, 0)), "net50"),
            (NuGetFramework(F.NET), "net"),
            (NuGetFramework(F.WINDOWS, (8, 0)), "win8"),
            (NuGetFramework(F.WINDOWS, (8, 1)), "win81"),
            (NuGetFramework(F.WINDOWS, (10, 0)), "win10.0"),
            (NuGetFramework(F.SILVERLIGHT, (3, 0), "WindowsPhone"), "sl3-wp"),
            (NuGetFramework(F.NET_STANDARD, (2, 0)), "netstandard2.0"),
            (NuGetFramework(F.NET_CORE_APP, (3, 1)), "netcoreapp3.1"),
            (NuGetFramework(F.NET_CORE_APP, (5, 0)), "net5.0"),
            (NuGetFramework(F.NET_CORE_APP, (6, 0), platform="windows"), "net6.0-windows"),
            (NuGetFramework(F.NET_CORE_APP, (6, 0), platform="ios", platform_version=(15, 0)), "net6.0-ios15.0"),
            (NuGetFramework(F.NET_PLATFORM, (5, 0)), "dotnet"),
            (NuGetFramework(F.NET_PLATFORM, (5, 1)), "dotnet5.1"),
            (NuGetFramework(F.PORTABLE, profile="Profile7"), "portable-net45+win8"),
            (NuGetFramework(F.XAMARIN_PS3), "xamarinpsthree"),
            (ANY_FRAMEWORK, "any"),
        ],
    )
    def test_renders(self, framework, expected):
        """Test rendering rules for versions, profiles and platforms."""
        assert get_short_folder_name(framework) == expected

    @pytest.mark.parametrize(
        "framework",
        [
            NuGetFramework("Foo", (1, 0)),
            NuGetFramework(F.PORTABLE),
            NuGetFramework(F.PORTABLE, profile="Profile999"),
            NuGetFramework(F.NET_CORE_APP, (3, 1), platform="windows"),
        ],
    )
    def test_unrenderable(self, framework):
        """Test frameworks without a short name raise and the try variant returns None."""
        with pytest.raises(UnrenderableFrameworkError):
            get_short_folder_name(framework)
        assert try_get_short_folder_name(framework) is None

    def test_unrenderable_is_logged_at_debug(self, caplog):
        """Test the try variant records why a framework has no short name."""
        with caplog.at_level(logging.DEBUG, logger="frameworks.names"):
            assert try_get_short_folder_name(NuGetFramework("Foo", (1, 0))) is None
        assert "No short folder name" in caplog.text

    @pytest.mark.parametrize(
        "folder",
        ["net45", "net40-client", "netstandard1.3", "net6.0-android31.0", "portable-net40+sl5+win8+wp8", "wp81"],
    )
    def test_round_trip(self, folder):
        """Test rendering a parsed folder name gives the name back."""
        assert get_short_folder_name(parse_folder(folder)) == folder


class TestLongNames:
    """Test .NET framework name parsing and rendering."""

    def test_renders_long_name(self):
        """Test long names include the profile but not the platform."""
        assert get_dotnet_framework_name(NuGetFramework(F.NET, (4, 0), "Client")) == (
            ".NETFramework,Version=v4.0,Profile=Client"
        )
        net6_windows = NuGetFramework(F.NET_CORE_APP, (6, 0), platform="windows")
        assert get_dotnet_framework_name(net6_windows) == ".NETCoreApp,Version=v6.0"

    def test_full_name_replacement(self):
        """Test dotnet renders as .NETPlatform 5.0."""
        assert get_dotnet_framework_name(NuGetFramework(F.NET_PLATFORM)) == ".NETPlatform,Version=v5.0"

    def test_parses_long_name(self):
        """Test parsing long names, including lowercase identifiers."""
        assert parse_framework_name(".NETFramework,Version=v4.5") == NuGetFramework(F.NET, (4, 5))
        assert parse_framework_name(".netstandard,Version=v2.0") == NuGetFramework(F.NET_STANDARD, (2, 0))
        assert parse_framework_name(".NETFramework,Version=v4.0,Profile=Client").profile == "Client"

    def test_invalid_long_name(self):
        """Test malformed long names raise FrameworkError."""
        with pytest.raises(FrameworkError):
            parse_framework_name(".NETFramework,Bogus=1")
        with pytest.raises(FrameworkError):
            parse_framework_name(".NETFramework,Version=vX")

    def test_parse_dispatches_on_comma(self):
        """Test parse accepts long, compact long and folder forms."""
        net45 = NuGetFramework(F.NET, (4, 5))
        assert parse(".NETFramework,Version=v4.5") == net45
        assert parse(".NETFramework4.5") == net45
        assert parse("net45") == net45


class TestModel:
    """Test the framework value type."""

    def test_equality_ignores_case(self):
        """Test equality and hashing are case-insensitive."""
        first = NuGetFramework(".netframework", (4, 5), "client")
        second = NuGetFramework(".NETFramework", (4, 5), "Client")
        assert first == second
        assert hash(first) == hash(second)

    def test_versions_are_padded(self):
        """Test versions are normalized to four parts."""
        assert NuGetFramework(F.NET, (4,)).version == (4, 0, 0, 0)
        with pytest.raises(ValueError):
            NuGetFramework(F.NET, (1, 2, 3, 4, 5))

    def test_pcl_flags(self):
        """Test only profiled portable frameworks are PCLs."""
        assert NuGetFramework(F.PORTABLE, profile="Profile7").is_pcl
        assert not NuGetFramework(F.PORTABLE).is_pcl
        assert not ANY_FRAMEWORK.is_specific

    def test_portable_members(self):
        """Test portable profile member lookup."""
        assert get_portable_frameworks("Profile7") == [NuGetFramework(F.NET, (4, 5)), NuGetFramework(F.WINDOWS, (8, 0))]
        assert len(get_portable_frameworks("Profile7", include_optional=True)) > 2
        assert get_portable_frameworks("Profile999") is None
