"""Error taxonomy shared by the framework model, scanners and analysis."""

from __future__ import annotations

from typing import Any


class FrameworkError(ValueError):
    """A target framework could not be parsed or is invalid."""


class UnrenderableFrameworkError(FrameworkError):
    """A target framework has no short folder name representation."""

    def __init__(self, framework: Any, reason: str):
        super().__init__(f"Cannot render {framework!r} as a short folder name: {reason}")
        self.framework = framework
        self.reason = reason


class ManifestParseError(ValueError):
    """The .nuspec document is malformed or uses forbidden constructs."""


class InternalConsistencyError(RuntimeError):
    """Equivalence between two frameworks is not transitive.

    Raised while reducing the enumerated frameworks; names both frameworks.
    """

    def __init__(self, first: Any, second: Any, detail: str = ""):
        message = f"The equivalent sets for {first} and {second} should be the same."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)
        self.first = first
        self.second = second


class PackageInputError(ValueError):
    """A package id or version supplied by the caller is invalid."""
