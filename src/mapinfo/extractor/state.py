"""
Extraction State

Lookup tables shared by a run and the per-preset results it produces.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from mapinfo.resolver.preset_cache import PresetCache


@dataclass
class ExtractionContext:
    """
    Read-only lookup tables for resolving one bundle.

    The scene table lives for the whole run; the preset cache is built
    once per bundle before any preset is resolved.
    """
    scene_table: Dict[str, int]
    preset_cache: PresetCache


@dataclass
class SceneGrouping:
    """Resolved scenes split into build-indexed levels and unmapped paths."""
    unmapped: List[str] = field(default_factory=list)
    indexed: Dict[int, str] = field(default_factory=dict)

    def sorted_indexed(self) -> List[Tuple[int, str]]:
        """(build index, scene path) pairs in ascending index order."""
        return sorted(self.indexed.items())

    @property
    def level_numbers(self) -> List[int]:
        return sorted(self.indexed)


@dataclass
class PresetReport:
    """A named preset and the levels it loads."""
    server_name: str
    source: Optional[str]
    scenes: List[str]
    grouping: SceneGrouping

    def __repr__(self):
        return (f"PresetReport({self.server_name}: {len(self.grouping.indexed)} levels, "
                f"{len(self.grouping.unmapped)} unmapped)")


@dataclass
class ExtractionResult:
    """Everything produced for one bundle folder."""
    bundle_dir: Path
    reports: List[PresetReport] = field(default_factory=list)

    # (file path, error message) for presets that could not be read
    errors: List[Tuple[str, str]] = field(default_factory=list)

    presets_seen: int = 0
    unresolved_refs: int = 0
    cycles: int = 0

    def get_report(self, server_name: str) -> Optional[PresetReport]:
        for report in self.reports:
            if report.server_name == server_name:
                return report
        return None
