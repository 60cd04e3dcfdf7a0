"""
Preset Cache

Indexes every preset asset of a bundle by the guid from its sidecar
.meta file, so child preset references can be followed.

Per-file problems never fail the build: the file is skipped, a warning
is logged, and the preset is simply absent from the cache.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from mapinfo.document import DocumentError, DocumentLoadError, load_document
from mapinfo.resolver.presets import PresetDocument, read_guid

logger = logging.getLogger(__name__)


class PresetCache:
    """guid -> PresetDocument, populated once and read-only afterwards."""

    def __init__(self):
        self._presets: Dict[str, PresetDocument] = {}
        # (guid, displaced preset) for every overwritten entry
        self.duplicates: List[Tuple[str, PresetDocument]] = []
        # (file path, error message) for every skipped file
        self.errors: List[Tuple[str, str]] = []

    def add(self, guid: str, preset: PresetDocument) -> Optional[PresetDocument]:
        """
        Add a preset. If the guid is already present the new preset wins
        and the displaced one is returned.
        """
        previous = self._presets.get(guid)
        if previous is not None:
            self.duplicates.append((guid, previous))
            logger.warning(
                f"Duplicate preset guid {guid}: {preset.source} replaces {previous.source}"
            )
        self._presets[guid] = preset
        return previous

    def get(self, guid: str) -> Optional[PresetDocument]:
        return self._presets.get(guid)

    def __contains__(self, guid: str) -> bool:
        return guid in self._presets

    def __len__(self) -> int:
        return len(self._presets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._presets)

    def __repr__(self):
        return f"PresetCache({len(self)} presets, {len(self.errors)} errors)"


def load_preset_file(
    path: Path,
    identity_suffix: str = ".meta",
    require_guid: bool = True,
) -> PresetDocument:
    """
    Load a preset asset together with its sidecar guid.

    With ``require_guid`` False a missing or unreadable sidecar is
    tolerated and the preset is returned without a guid.
    """
    meta_path = path.with_name(path.name + identity_suffix)
    guid = None
    if require_guid:
        guid = read_guid(load_document(meta_path))
    elif meta_path.exists():
        try:
            guid = read_guid(load_document(meta_path))
        except DocumentError as e:
            logger.warning(f"Ignoring sidecar {meta_path}: {e}")

    doc = load_document(path)
    return PresetDocument.from_document(doc, guid=guid, source=str(path))


def build_preset_cache(
    directory: Union[str, Path],
    asset_extension: str = ".asset",
    identity_suffix: str = ".meta",
) -> PresetCache:
    """
    Build the preset cache from a directory of preset assets.

    Only direct children of ``directory`` are considered, in filename
    order. If two files carry the same guid, the later one wins.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DocumentLoadError("preset directory not found", str(directory))

    cache = PresetCache()
    files = sorted(p for p in directory.iterdir() if p.is_file() and p.name.endswith(asset_extension))

    for file_path in files:
        try:
            preset = load_preset_file(file_path, identity_suffix)
        except DocumentError as e:
            logger.warning(f"Error reading meta or preset {file_path}: {e}")
            cache.errors.append((str(file_path), str(e)))
            continue

        cache.add(preset.guid, preset)

    logger.info(f"Cached {len(cache)} presets from {directory} ({len(cache.errors)} skipped)")
    return cache
