"""Tests for the asset pattern scanner."""

import pytest

from assets.patterns import AssetPatternTemplate
from assets.scanner import AssetScanner, has_assembly_files, normalize_file_list
from constants import AssetCategory
from frameworks.models import ANY_FRAMEWORK
from frameworks.names import parse_folder


def fw(name):
    return parse_folder(name)


class TestScanFrameworks:
    """Test the frameworks a scan reports."""

    def setup_method(self):
        """Create a scanner with the default templates."""
        self.scanner = AssetScanner()

    def test_lib_folders(self):
        """Test lib folders bind runtime and compile frameworks."""
        result = self.scanner.scan(["lib/net45/a.dll", "lib/netstandard2.0/a.dll"])
        assert result.frameworks == (fw("net45"), fw("netstandard2.0"))
        assert result.frameworks_for(AssetCategory.RUNTIME) == (fw("net45"), fw("netstandard2.0"))
        assert result.frameworks_for(AssetCategory.COMPILE) == (fw("net45"), fw("netstandard2.0"))
        assert result.has_assemblies

    def test_build_only_package_is_any(self):
        """Test a package with only build scripts named after it supports Any."""
        result = self.scanner.scan(["build/x.props", "build/x.targets"], package_id="x")
        assert result.frameworks == (ANY_FRAMEWORK,)
        assert result.frameworks_for(AssetCategory.BUILD) == (ANY_FRAMEWORK,)
        assert not result.has_assemblies

    def test_build_file_not_named_after_package(self):
        """Test foreign build scripts are discarded but the package still supports Any."""
        result = self.scanner.scan(["build/other.props"], package_id="x")
        assert AssetCategory.BUILD not in result.groups
        assert result.frameworks == (ANY_FRAMEWORK,)

    def test_build_file_name_ignores_case(self):
        """Test build script names are compared case-insensitively."""
        result = self.scanner.scan(["build/X.PROPS"], package_id="x")
        assert result.frameworks_for(AssetCategory.BUILD) == (ANY_FRAMEWORK,)

    def test_build_without_package_id_keeps_only_marker(self):
        """Test without a package id only the empty folder marker passes."""
        result = self.scanner.scan(["build/net45/x.props", "build/net46/_._"])
        assert result.frameworks_for(AssetCategory.BUILD) == (fw("net46"),)

    def test_build_folder_framework(self):
        """Test build scripts under a framework folder bind it."""
        result = self.scanner.scan(["buildTransitive/net45/x.targets"], package_id="x")
        assert result.frameworks_for(AssetCategory.BUILD) == (fw("net45"),)

    def test_multitargeting(self):
        """Test multi-targeting build scripts bind Any."""
        result = self.scanner.scan(["buildMultiTargeting/x.targets", "lib/net45/x.dll"], package_id="x")
        assert result.frameworks_for(AssetCategory.BUILD_MULTITARGETING) == (ANY_FRAMEWORK,)
        assert result.frameworks == (fw("net45"), ANY_FRAMEWORK)

    def test_empty_folder_marker(self):
        """Test the empty folder marker binds the framework like an assembly."""
        result = self.scanner.scan(["lib/net45/_._"])
        assert result.frameworks_for(AssetCategory.RUNTIME) == (fw("net45"),)

    def test_lib_root_is_net(self):
        """Test assemblies directly under lib bind .NETFramework without a version."""
        result = self.scanner.scan(["lib/a.dll"])
        assert result.frameworks == (fw("net"),)

    def test_unparseable_framework_folder(self):
        """Test unknown framework folders match nothing."""
        result = self.scanner.scan(["lib/foo/a.dll"])
        assert result.groups == {}
        assert result.frameworks == ()
        assert result.has_assemblies

    def test_literals_ignore_case(self):
        """Test literal segments match case-insensitively."""
        result = self.scanner.scan(["LIB/net45/a.dll"])
        assert result.frameworks == (fw("net45"),)

    def test_idempotent(self):
        """Test scanning the same list twice gives the same answer."""
        files = ["lib/net45/a.dll", "ref/netstandard2.0/a.dll", "build/x.props", "contentFiles/cs/net46/a.cs"]
        assert self.scanner.scan(files, package_id="x").frameworks == self.scanner.scan(
            files, package_id="x"
        ).frameworks


class TestScanGroups:
    """Test asset grouping per category."""

    def setup_method(self):
        """Create a scanner with the default templates."""
        self.scanner = AssetScanner()

    def test_runtime_identifier_groups(self):
        """Test runtime-specific assemblies keep their rid and make the package Any."""
        result = self.scanner.scan(["runtimes/win-x64/lib/net6.0/a.dll"])
        group = result.groups[AssetCategory.RUNTIME][0]
        assert group.framework == fw("net6.0")
        assert group.properties == (("rid", "win-x64"),)
        assert ANY_FRAMEWORK in result.frameworks

    def test_resource_assemblies(self):
        """Test satellite assemblies are resources, not runtime assets."""
        result = self.scanner.scan(["lib/net45/de/a.resources.dll", "lib/net45/a.dll"])
        resources = result.groups[AssetCategory.RESOURCE]
        assert [g.files for g in resources] == [["lib/net45/de/a.resources.dll"]]
        assert resources[0].properties == (("locale", "de"),)
        assert result.groups[AssetCategory.RUNTIME][0].files == ["lib/net45/a.dll"]

    def test_resources_need_a_framework_folder(self):
        """Test a resource assembly directly under a tfm folder is not bound to a locale."""
        result = self.scanner.scan(["lib/net/x.resources.dll"])
        assert AssetCategory.RESOURCE not in result.groups
        assert result.groups[AssetCategory.RUNTIME][0].files == ["lib/net/x.resources.dll"]

    def test_content_files(self):
        """Test any code language folder is accepted and lowercased."""
        result = self.scanner.scan(
            ["contentFiles/CS/net45/a.cs", "contentFiles/xx/net46/b.cs", "contentFiles/cs/notatfm/c.cs"]
        )
        assert result.frameworks_for(AssetCategory.CONTENT) == (fw("net45"), fw("net46"))
        assert [g.properties for g in result.groups[AssetCategory.CONTENT]] == [
            (("codeLanguage", "cs"),),
            (("codeLanguage", "xx"),),
        ]

    def test_files_grouped_by_framework(self):
        """Test files of one framework share a group and duplicates collapse."""
        result = self.scanner.scan(["lib/net45/a.dll", "lib\\net45\\b.dll", "/lib/net45/a.dll"])
        runtime = result.groups[AssetCategory.RUNTIME]
        assert len(runtime) == 1
        assert runtime[0].files == ["lib/net45/a.dll", "lib/net45/b.dll"]

    def test_reference_filter(self):
        """Test declared references restrict compile assets by exact name."""
        files = ["lib/net45/a.dll", "lib/net45/b.dll"]
        result = self.scanner.scan(files, reference_filter={"a.dll"})
        assert result.groups[AssetCategory.COMPILE][0].files == ["lib/net45/a.dll"]
        assert result.groups[AssetCategory.RUNTIME][0].files == files

    def test_reference_filter_is_case_sensitive(self):
        """Test reference names must match exactly."""
        result = self.scanner.scan(["lib/net45/a.dll"], reference_filter={"A.dll"})
        assert AssetCategory.COMPILE not in result.groups
        assert AssetCategory.RUNTIME in result.groups

    def test_match_file(self):
        """Test single file matching reports bindings."""
        found = self.scanner.match_file("ref/netstandard2.0/a.dll", AssetCategory.COMPILE)
        assert found.framework == fw("netstandard2.0")
        assert found.template.pattern == "ref/{tfm}/{assembly}"
        assert self.scanner.match_file("ref/netstandard2.0/a.dll", AssetCategory.RUNTIME) is None


class TestTemplates:
    """Test path template validation and helpers."""

    def test_unknown_placeholder(self):
        """Test unknown placeholders are rejected."""
        with pytest.raises(ValueError):
            AssetPatternTemplate(AssetCategory.RUNTIME, "lib/{bogus}/{assembly}")

    def test_wildcard_must_be_last(self):
        """Test the wildcard placeholder only ends a template."""
        with pytest.raises(ValueError):
            AssetPatternTemplate(AssetCategory.CONTENT, "contentFiles/{any}/{tfm}")

    def test_wildcard_consumes_rest(self):
        """Test a trailing wildcard matches nested paths."""
        template = AssetPatternTemplate(AssetCategory.CONTENT, "contentFiles/{codeLanguage}/{tfm}/{any}")
        found = template.match("contentFiles/any/net45/dir/sub/a.txt")
        assert found is not None
        assert ("any", "dir/sub/a.txt") in found.bindings
        assert template.match("contentFiles/any/net45") is None

    def test_has_framework(self):
        """Test templates report whether they bind a framework."""
        assert AssetPatternTemplate(AssetCategory.RUNTIME, "lib/{tfm}/{assembly}").has_framework
        assert not AssetPatternTemplate(AssetCategory.BUILD, "build/{msbuild}").has_framework

    def test_normalize_file_list(self):
        """Test slashes are normalized and duplicates removed in order."""
        assert normalize_file_list(["\\lib\\a.dll", "lib/a.dll", "", "b.txt"]) == ["lib/a.dll", "b.txt"]

    def test_has_assembly_files(self):
        """Test lib and ref prefixes mark assembly files."""
        assert has_assembly_files(["ref/net45/a.dll"])
        assert not has_assembly_files(["content/lib/a.dll"])
