"""Nuspec manifest reading."""

from .reader import FrameworkSpecificGroup, NuspecDocument, decode_manifest, extract_declared_frameworks, load_document

__all__ = [
    "FrameworkSpecificGroup",
    "NuspecDocument",
    "decode_manifest",
    "extract_declared_frameworks",
    "load_document",
]
