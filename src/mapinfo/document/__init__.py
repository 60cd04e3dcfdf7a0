"""
mapinfo.document - Generic Documents

Typed, order-preserving document trees and the Unity YAML loader
that produces them.
"""

from mapinfo.document.model import (
    DocNode,
    NodeKind,
    DocumentError,
    DocumentLoadError,
    DocumentShapeError,
    DocumentAccessError,
    MissingFieldError,
    FieldTypeError,
)
from mapinfo.document.loader import (
    normalize_unity_yaml,
    load_document,
    load_document_text,
)

__all__ = [
    # Model
    "DocNode",
    "NodeKind",
    # Errors
    "DocumentError",
    "DocumentLoadError",
    "DocumentShapeError",
    "DocumentAccessError",
    "MissingFieldError",
    "FieldTypeError",
    # Loader
    "normalize_unity_yaml",
    "load_document",
    "load_document_text",
]
