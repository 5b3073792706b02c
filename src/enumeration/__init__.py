"""Framework universe enumeration and equivalence reduction."""

from .catalog import EnumeratedFrameworks, get_enumerated_frameworks, reset_enumerated_frameworks
from .enumerator import FrameworkEnumerationOptions, FrameworkEnumerator, FrameworkExpansionOptions
from .equivalence import find_equivalence_classes, get_non_equivalent_frameworks

__all__ = [
    "EnumeratedFrameworks",
    "FrameworkEnumerationOptions",
    "FrameworkEnumerator",
    "FrameworkExpansionOptions",
    "find_equivalence_classes",
    "get_enumerated_frameworks",
    "get_non_equivalent_frameworks",
    "reset_enumerated_frameworks",
]
