"""
Generic Document Model

A schema-less, order-preserving tree of maps, arrays and scalars.
Every node knows its own location (``path``) so that access failures can
say exactly which field was missing or malformed.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, Optional


# =============================================================================
# ERRORS
# =============================================================================

class DocumentError(Exception):
    """Base class for all document errors."""


class DocumentLoadError(DocumentError):
    """A document could not be produced from its source file."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class DocumentShapeError(DocumentError):
    """Python data that cannot be represented as a document."""


class DocumentAccessError(DocumentError):
    """A field or element was not what the caller asked for."""

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class MissingFieldError(DocumentAccessError):
    """A required map field is absent."""


class FieldTypeError(DocumentAccessError):
    """A node has the wrong kind for the requested access."""


# =============================================================================
# NODES
# =============================================================================

class NodeKind(Enum):
    """Kinds of document nodes."""
    NULL = auto()
    BOOL = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    MAP = auto()


@dataclass
class DocNode:
    """A single node in a generic document."""
    kind: NodeKind
    value: Any = None
    path: str = "$"

    def __repr__(self):
        if self.kind in (NodeKind.ARRAY, NodeKind.MAP):
            return f"DocNode({self.kind.name}, {len(self.value)} items, {self.path})"
        return f"DocNode({self.kind.name}, {self.value!r}, {self.path})"

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_python(cls, obj: Any, path: str = "$") -> "DocNode":
        """
        Build a document from plain Python data.

        Dicts keep their insertion order. Keys are converted to strings.
        """
        if obj is None:
            return cls(NodeKind.NULL, None, path)
        # bool before int: bool is an int subclass
        if isinstance(obj, bool):
            return cls(NodeKind.BOOL, obj, path)
        if isinstance(obj, (int, float)):
            return cls(NodeKind.NUMBER, obj, path)
        if isinstance(obj, str):
            return cls(NodeKind.STRING, obj, path)
        if isinstance(obj, (list, tuple)):
            items = [cls.from_python(item, f"{path}[{i}]") for i, item in enumerate(obj)]
            return cls(NodeKind.ARRAY, items, path)
        if isinstance(obj, dict):
            entries: Dict[str, DocNode] = {}
            for key, item in obj.items():
                name = str(key)
                entries[name] = cls.from_python(item, f"{path}.{name}")
            return cls(NodeKind.MAP, entries, path)
        raise DocumentShapeError(f"{path}: unsupported value type {type(obj).__name__}")

    # -------------------------------------------------------------------------
    # Map access
    # -------------------------------------------------------------------------

    def _require_map(self) -> Dict[str, "DocNode"]:
        if self.kind != NodeKind.MAP:
            raise FieldTypeError(f"expected a map, found {self.kind.name.lower()}", self.path)
        return self.value

    def field(self, name: str) -> "DocNode":
        """Get a required field. Raises MissingFieldError if absent."""
        entries = self._require_map()
        if name not in entries:
            raise MissingFieldError(f"missing field '{name}'", self.path)
        return entries[name]

    def get(self, name: str, default: Optional["DocNode"] = None) -> Optional["DocNode"]:
        """Get an optional field, or ``default`` if absent."""
        return self._require_map().get(name, default)

    def has(self, name: str) -> bool:
        return self.kind == NodeKind.MAP and name in self.value

    def keys(self) -> List[str]:
        return list(self._require_map().keys())

    # -------------------------------------------------------------------------
    # Array access
    # -------------------------------------------------------------------------

    def iter_array(self) -> Iterator["DocNode"]:
        """
        Iterate over array elements in document order.

        A null node iterates as empty, since YAML writes an empty
        sequence field as a bare key.
        """
        if self.kind == NodeKind.NULL:
            return iter(())
        if self.kind != NodeKind.ARRAY:
            raise FieldTypeError(f"expected an array, found {self.kind.name.lower()}", self.path)
        return iter(self.value)

    # -------------------------------------------------------------------------
    # Scalar access
    # -------------------------------------------------------------------------

    def as_str(self) -> str:
        """Scalar value as a string. Null reads as the empty string."""
        if self.kind == NodeKind.NULL:
            return ""
        if self.kind == NodeKind.STRING:
            return self.value
        if self.kind == NodeKind.NUMBER:
            return str(self.value)
        raise FieldTypeError(f"expected a string, found {self.kind.name.lower()}", self.path)

    def as_int(self) -> int:
        """Scalar value as an integer (numbers and numeric strings)."""
        if self.kind == NodeKind.NUMBER and float(self.value).is_integer():
            return int(self.value)
        if self.kind == NodeKind.STRING:
            try:
                return int(self.value.strip())
            except ValueError:
                pass
        raise FieldTypeError(f"expected an integer, found {self.kind.name.lower()}", self.path)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_python(self) -> Any:
        """Convert back to plain Python data."""
        if self.kind == NodeKind.ARRAY:
            return [item.to_python() for item in self.value]
        if self.kind == NodeKind.MAP:
            return {key: item.to_python() for key, item in self.value.items()}
        return self.value

    def __len__(self):
        if self.kind in (NodeKind.ARRAY, NodeKind.MAP):
            return len(self.value)
        return 0
