"""
Preset Directory Walker

Drives a full run:
1. Load the scene build-index table (fatal if missing)
2. Find the exported bundle folder(s)
3. Build the preset cache for each bundle
4. Walk the location presets, resolve each one and group its scenes
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from mapinfo.config import MapInfoConfig
from mapinfo.document import DocumentError
from mapinfo.extractor.report import group_scenes
from mapinfo.extractor.state import ExtractionContext, ExtractionResult, PresetReport
from mapinfo.resolver.build_index import load_index_table
from mapinfo.resolver.preset_cache import build_preset_cache, load_preset_file
from mapinfo.resolver.preset_graph import PresetGraphResolver

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """The extracted data is not laid out as expected; nothing can be reported."""


def find_bundle_dirs(extract_dir: Union[str, Path], marker: str = ".bundle") -> List[Path]:
    """Exported bundle folders directly under ``extract_dir``, sorted by name."""
    extract_dir = Path(extract_dir)
    if not extract_dir.is_dir():
        raise ExtractionError(f"Extract folder not found: {extract_dir}")
    return sorted(p for p in extract_dir.iterdir() if p.is_dir() and marker in p.name)


def walk_presets(
    presets_root: Union[str, Path],
    context: ExtractionContext,
    result: ExtractionResult,
    asset_extension: str = ".asset",
    identity_suffix: str = ".meta",
) -> None:
    """
    Resolve every preset under ``presets_root`` into ``result``.

    Files of a folder are handled before its subfolders, both in name
    order. Presets without a server name are resolved but not reported.
    """
    presets_root = Path(presets_root)
    resolver = PresetGraphResolver(context.preset_cache)

    entries = sorted(presets_root.iterdir())
    for file_path in entries:
        if not file_path.is_file() or not file_path.name.endswith(asset_extension):
            continue

        try:
            preset = load_preset_file(file_path, identity_suffix, require_guid=False)
        except DocumentError as e:
            logger.warning(f"Error loading preset {file_path}: {e}")
            result.errors.append((str(file_path), str(e)))
            continue

        result.presets_seen += 1
        scenes = resolver.resolve(preset)

        if not preset.is_named:
            logger.debug(f"Preset {file_path} has no server name, not reported")
            continue

        result.reports.append(PresetReport(
            server_name=preset.server_name,
            source=str(file_path),
            scenes=scenes,
            grouping=group_scenes(scenes, context.scene_table),
        ))

    result.unresolved_refs += resolver.unresolved
    result.cycles += resolver.cycles

    for folder in entries:
        if folder.is_dir():
            walk_presets(folder, context, result, asset_extension, identity_suffix)


def extract_bundle(bundle_dir: Path, scene_table: Dict[str, int], config: MapInfoConfig) -> ExtractionResult:
    """Build the preset cache of one bundle and report all of its presets."""
    logger.info(f"Processing bundle {bundle_dir}")

    cache = build_preset_cache(
        config.preset_cache_dir(bundle_dir),
        config.asset_extension,
        config.identity_suffix,
    )
    context = ExtractionContext(scene_table=scene_table, preset_cache=cache)
    result = ExtractionResult(bundle_dir=Path(bundle_dir))
    result.errors.extend(cache.errors)

    presets_root = config.presets_dir(bundle_dir)
    if not presets_root.is_dir():
        raise ExtractionError(f"Preset folder not found: {presets_root}")

    walk_presets(presets_root, context, result, config.asset_extension, config.identity_suffix)

    logger.info(f"Bundle done: {result.presets_seen} presets, {len(result.reports)} reported, "
                f"{result.unresolved_refs} unresolved references, {result.cycles} cycles, {len(result.errors)} errors")
    return result


def run_extraction(config: MapInfoConfig, all_bundles: bool = False) -> List[ExtractionResult]:
    """
    Run the whole extraction.

    Only the first bundle folder is processed unless ``all_bundles``
    is set. Raises DocumentLoadError if the build settings cannot be
    read and ExtractionError if no bundle folder exists.
    """
    scene_table = load_index_table(config.build_settings_path)

    bundles = find_bundle_dirs(config.extract_dir, config.bundle_marker)
    if not bundles:
        raise ExtractionError(
            f"No folder containing '{config.bundle_marker}' found in {config.extract_dir}"
        )
    if not all_bundles:
        bundles = bundles[:1]

    return [extract_bundle(bundle_dir, scene_table, config) for bundle_dir in bundles]


def resolve_single(
    preset_path: Union[str, Path],
    cache_dir: Union[str, Path],
    scene_table: Optional[Dict[str, int]] = None,
    asset_extension: str = ".asset",
    identity_suffix: str = ".meta",
) -> PresetReport:
    """Resolve one preset file against a cache folder."""
    preset_path = Path(preset_path)
    cache = build_preset_cache(cache_dir, asset_extension, identity_suffix)
    preset = load_preset_file(preset_path, identity_suffix, require_guid=False)
    scenes = PresetGraphResolver(cache).resolve(preset)
    return PresetReport(
        server_name=preset.server_name,
        source=str(preset_path),
        scenes=scenes,
        grouping=group_scenes(scenes, scene_table or {}),
    )
