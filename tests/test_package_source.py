"""Tests for local package sources."""

import zipfile

import pytest

from registry.source import InMemoryPackageSource, NupkgDirectorySource

MANIFEST = b"<package><metadata><id>Foo</id><version>1.0.0</version></metadata></package>"


class TestInMemoryPackageSource:
    """Test the in-memory source."""

    def setup_method(self):
        """Register one package."""
        self.source = InMemoryPackageSource()
        self.source.add_package("Foo", "1.0.0", ["lib/net45/Foo.dll"], MANIFEST)

    def test_file_list(self):
        """Test lookups ignore case and return copies."""
        files = self.source.get_package_file_list("FOO", "1.0.0")
        assert files == ["lib/net45/Foo.dll"]
        files.append("extra")
        assert self.source.get_package_file_list("foo", "1.0.0") == ["lib/net45/Foo.dll"]

    def test_missing(self):
        """Test unknown packages have no file list and no manifest."""
        assert self.source.get_package_file_list("Bar", "1.0.0") is None
        with pytest.raises(FileNotFoundError):
            self.source.get_manifest_stream("Bar", "1.0.0")

    def test_fresh_manifest_streams(self):
        """Test every call returns a new stream."""
        first = self.source.get_manifest_stream("Foo", "1.0.0")
        second = self.source.get_manifest_stream("Foo", "1.0.0")
        assert first is not second
        assert first.read() == second.read() == MANIFEST


class TestNupkgDirectorySource:
    """Test reading .nupkg archives from a directory."""

    def _write_package(self, directory, name="Foo.1.0.0.nupkg"):
        with zipfile.ZipFile(directory / name, "w") as archive:
            archive.writestr("_rels/.rels", "")
            archive.writestr("[Content_Types].xml", "")
            archive.writestr("package/services/metadata/core-properties/x.psmdcp", "")
            archive.writestr(".signature.p7s", "")
            archive.writestr("Foo.nuspec", MANIFEST)
            archive.writestr("lib/net45/Foo.dll", "")
            archive.writestr("content/My%20File.txt", "")

    def test_file_list_skips_packaging_entries(self, tmp_path):
        """Test packaging parts are hidden and names are unescaped."""
        self._write_package(tmp_path)
        source = NupkgDirectorySource(str(tmp_path))
        assert source.get_package_file_list("foo", "1.0.0") == ["lib/net45/Foo.dll", "content/My File.txt"]

    def test_manifest(self, tmp_path):
        """Test the root .nuspec is returned as a stream."""
        self._write_package(tmp_path)
        stream = NupkgDirectorySource(str(tmp_path)).get_manifest_stream("Foo", "1.0.0")
        assert stream.read() == MANIFEST

    def test_missing_archive(self, tmp_path):
        """Test a missing archive means not found."""
        source = NupkgDirectorySource(str(tmp_path))
        assert source.get_package_file_list("Foo", "2.0.0") is None
        with pytest.raises(FileNotFoundError):
            source.get_manifest_stream("Foo", "2.0.0")

    def test_missing_directory(self, tmp_path):
        """Test an unreadable directory behaves like an empty one."""
        source = NupkgDirectorySource(str(tmp_path / "absent"))
        assert source.get_package_file_list("Foo", "1.0.0") is None
