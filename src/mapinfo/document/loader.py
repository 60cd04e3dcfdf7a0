"""
Unity YAML Loader

Loads the text assets written by the asset extractor (.asset, .meta)
into generic documents.

Unity serializes each object as a YAML document introduced by a tagged
separator such as ``--- !u!114 &11400000``. The ``!u!`` tag handle is
declared with a ``%TAG`` directive and means nothing outside Unity, so
directives and separator annotations are stripped before parsing.

All scalars are kept as strings (PyYAML's BaseLoader). Guids are hex
strings that may consist only of digits, and must never be coerced
into numbers.
"""

import logging
import re
from pathlib import Path
from typing import Union

import yaml

from mapinfo.document.model import DocNode, DocumentLoadError

logger = logging.getLogger(__name__)


# "--- !u!114 &11400000", "--- !u!1 &123 stripped"
_SEPARATOR_RE = re.compile(r'^---(?:\s+!u!\d+)?(?:\s+&-?\d+)?(?:\s+stripped)?\s*$')


def normalize_unity_yaml(text: str) -> str:
    """Strip Unity-specific directives and tag annotations from YAML text."""
    lines = []
    for line in text.splitlines():
        if line.startswith('%YAML') or line.startswith('%TAG'):
            continue
        if line.startswith('---') and _SEPARATOR_RE.match(line):
            lines.append('---')
            continue
        lines.append(line)
    return '\n'.join(lines) + '\n'


def load_document_text(text: str, source: str = "<string>") -> DocNode:
    """
    Parse Unity YAML text into a document.

    Only the first non-empty YAML document is returned; asset files
    written for a single ScriptableObject contain exactly one.
    """
    normalized = normalize_unity_yaml(text)
    try:
        for data in yaml.load_all(normalized, Loader=yaml.BaseLoader):
            if data is None or data == '':
                continue
            return DocNode.from_python(data)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"invalid YAML: {e}", source) from e

    raise DocumentLoadError("document is empty", source)


def load_document(path: Union[str, Path]) -> DocNode:
    """Load a Unity YAML file into a document. Handles encoding fallback."""
    path = Path(path)
    source = None
    # Try UTF-8 with BOM first, then UTF-8, then latin-1 (which always succeeds)
    for encoding in ['utf-8-sig', 'utf-8', 'latin-1']:
        try:
            with open(path, 'r', encoding=encoding) as f:
                source = f.read()
            break
        except UnicodeDecodeError:
            continue
        except OSError as e:
            raise DocumentLoadError(f"cannot read file: {e.strerror or e}", str(path)) from e

    logger.debug(f"Loaded {path} ({len(source)} chars)")
    return load_document_text(source, str(path))
