"""Read framework declarations from a .nuspec manifest.

The document is decoded by sniffing its byte order mark, rejected if it
carries a DTD or entity declarations (so nothing external is ever resolved),
and parsed with ElementTree with namespaces stripped. Comments, processing
instructions and insignificant whitespace are ignored.
"""
from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional, Tuple, Union

from common.logging_utils import extra_context, is_debug_enabled
from errors import FrameworkError, ManifestParseError
from frameworks.models import ANY_FRAMEWORK, NuGetFramework
from frameworks.names import parse
from frameworks.sorting import precedence_key

logger = logging.getLogger(__name__)

_BOMS = (
    (b"\xef\xbb\xbf", "utf-8-sig"),
    (b"\xff\xfe", "utf-16-le"),
    (b"\xfe\xff", "utf-16-be"),
)
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


class _ManifestTreeBuilder(ET.TreeBuilder):
    """Tree builder that refuses documents carrying a document type declaration."""

    def doctype(self, name, pubid, system):  # pylint: disable=unused-argument
        raise ManifestParseError("Manifest must not contain DTD or entity declarations")


@dataclass
class FrameworkSpecificGroup:
    """Items declared for one target framework."""

    target_framework: NuGetFramework
    items: List[str] = field(default_factory=list)


@dataclass
class NuspecDocument:
    """The parts of a .nuspec this project cares about."""

    id: str = ""
    version: str = ""
    framework_assemblies: List[FrameworkSpecificGroup] = field(default_factory=list)
    framework_references: List[FrameworkSpecificGroup] = field(default_factory=list)
    reference_groups: List[FrameworkSpecificGroup] = field(default_factory=list)

    def declared_frameworks(self) -> Tuple[NuGetFramework, ...]:
        """Distinct frameworks from framework assemblies and framework references."""
        found = {g.target_framework for g in self.framework_assemblies + self.framework_references}
        return tuple(sorted(found, key=precedence_key))


def decode_manifest(data: bytes) -> str:
    """Decode manifest bytes, honoring a UTF-8 or UTF-16 byte order mark."""
    encoding = "utf-8"
    for bom, name in _BOMS:
        if data.startswith(bom):
            encoding = name
            if name != "utf-8-sig":
                data = data[len(bom):]
            break
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise ManifestParseError(f"Manifest is not valid {encoding}: {exc}") from exc


def _parse_framework(value: Optional[str]) -> NuGetFramework:
    text = (value or "").strip()
    if not text:
        return ANY_FRAMEWORK
    try:
        return parse(text)
    except FrameworkError as exc:
        raise ManifestParseError(f"Invalid targetFramework {text!r}: {exc}") from exc


def _add_item(groups: List[FrameworkSpecificGroup], framework: NuGetFramework, item: Optional[str]) -> None:
    for group in groups:
        if group.target_framework == framework:
            break
    else:
        group = FrameworkSpecificGroup(framework)
        groups.append(group)
    if item:
        group.items.append(item)


def _read_metadata(metadata: ET.Element, document: NuspecDocument) -> None:
    document.id = (metadata.findtext("id") or "").strip()
    document.version = (metadata.findtext("version") or "").strip()

    for assembly in metadata.findall("./frameworkAssemblies/frameworkAssembly"):
        name = assembly.get("assemblyName")
        target = assembly.get("targetFramework") or ""
        pieces = [p for p in (t.strip() for t in target.split(",")) if p] or [""]
        for piece in pieces:
            _add_item(document.framework_assemblies, _parse_framework(piece), name)

    for group in metadata.findall("./frameworkReferences/group"):
        framework = _parse_framework(group.get("targetFramework"))
        _add_item(document.framework_references, framework, None)
        for reference in group.findall("frameworkReference"):
            _add_item(document.framework_references, framework, reference.get("name"))

    references = metadata.find("references")
    if references is not None:
        for reference in references.findall("reference"):
            _add_item(document.reference_groups, ANY_FRAMEWORK, reference.get("file"))
        for group in references.findall("group"):
            framework = _parse_framework(group.get("targetFramework"))
            _add_item(document.reference_groups, framework, None)
            for reference in group.findall("reference"):
                _add_item(document.reference_groups, framework, reference.get("file"))


def load_document(source: Union[bytes, BinaryIO]) -> NuspecDocument:
    """Parse a manifest from bytes or a binary stream.

    Raises:
        ManifestParseError: malformed XML, bad encoding, a DTD or entity
            declaration, or a root element other than <package>.
    """
    data = source if isinstance(source, (bytes, bytearray)) else source.read()
    text = decode_manifest(bytes(data))
    parser = ET.XMLParser(target=_ManifestTreeBuilder())
    try:
        root = ET.fromstring(_XML_DECLARATION.sub("", text, count=1).encode("utf-8"), parser=parser)
    except ET.ParseError as exc:
        raise ManifestParseError(f"Malformed manifest: {exc}") from exc

    # Remove namespace for easier parsing
    for elem in root.iter():
        if isinstance(elem.tag, str) and '}' in elem.tag:
            elem.tag = elem.tag.split('}')[1]
    if root.tag != "package":
        raise ManifestParseError(f"Unexpected manifest root element <{root.tag}>")

    document = NuspecDocument()
    metadata = root.find("metadata")
    if metadata is not None:
        _read_metadata(metadata, document)

    if is_debug_enabled(logger):
        logger.debug("Parsed manifest", extra=extra_context(
            event="parse", component="nuspec", action="load_document", outcome="success",
            package_id=document.id or None,
        ))
    return document


def extract_declared_frameworks(source: Union[bytes, BinaryIO]) -> Tuple[NuGetFramework, ...]:
    """Frameworks explicitly declared by the manifest; empty if none."""
    return load_document(source).declared_frameworks()
