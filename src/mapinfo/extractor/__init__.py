"""
mapinfo.extractor - Level Reports

Walks a bundle's location presets, resolves each one against the
preset cache, and groups the resulting scenes by build index.
"""

from .state import ExtractionContext, ExtractionResult, PresetReport, SceneGrouping
from .report import group_scenes, format_report, format_results
from .walker import (
    ExtractionError,
    find_bundle_dirs,
    walk_presets,
    extract_bundle,
    run_extraction,
    resolve_single,
)

__all__ = [
    # State
    "ExtractionContext",
    "ExtractionResult",
    "PresetReport",
    "SceneGrouping",
    # Report
    "group_scenes",
    "format_report",
    "format_results",
    # Walker
    "ExtractionError",
    "find_bundle_dirs",
    "walk_presets",
    "extract_bundle",
    "run_extraction",
    "resolve_single",
]
