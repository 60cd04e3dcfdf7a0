"""
Preset Reports

Groups a preset's resolved scenes by build index and renders the
plain text report, one block per named preset:

    Factory consists of the following assets:
        Assets/Scenes/Unlisted.unity
        level3  (Assets/Scenes/Factory.unity)
"""

from typing import Dict, Iterable, List

from mapinfo.extractor.state import ExtractionResult, PresetReport, SceneGrouping


INDENT = "    "


def group_scenes(scenes: Iterable[str], scene_table: Dict[str, int]) -> SceneGrouping:
    """
    Split resolved scenes into unmapped paths and build-indexed levels.

    Unmapped paths keep resolver order, duplicates included. For indexed
    scenes the first path seen for each build index wins.
    """
    grouping = SceneGrouping()
    for scene in scenes:
        index = scene_table.get(scene)
        if index is None:
            grouping.unmapped.append(scene)
        elif index not in grouping.indexed:
            grouping.indexed[index] = scene
    return grouping


def format_report(report: PresetReport) -> str:
    """Render one preset block: unmapped paths first, then levels ascending."""
    lines: List[str] = [f"{report.server_name} consists of the following assets:"]
    for scene in report.grouping.unmapped:
        lines.append(f"{INDENT}{scene}")
    for level, scene in report.grouping.sorted_indexed():
        lines.append(f"{INDENT}level{level}  ({scene})")
    return "\n".join(lines)


def format_results(results: Iterable[ExtractionResult]) -> str:
    """Render every report of every processed bundle."""
    blocks = []
    for result in results:
        for report in result.reports:
            blocks.append(format_report(report))
    return "\n".join(blocks)
