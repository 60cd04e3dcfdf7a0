"""
Scene Build-Index Table

Maps scene paths to their position in the game's master scene list
(EditorBuildSettings.m_Scenes). The position is the "level number"
the game uses at runtime.
"""

import logging
from pathlib import Path
from typing import Dict, Union

from mapinfo.document import (
    DocNode,
    DocumentAccessError,
    DocumentLoadError,
    load_document,
)

logger = logging.getLogger(__name__)


BUILD_SETTINGS_ROOT = "EditorBuildSettings"
SCENES_FIELD = "m_Scenes"
SCENE_PATH_FIELD = "path"


def build_index_table(manifest: DocNode) -> Dict[str, int]:
    """
    Build the scene path -> build index table from a build settings document.

    The index is the 0-based position in the scene list. If a path is
    listed more than once, the first occurrence wins.
    """
    table: Dict[str, int] = {}
    scenes = manifest.field(BUILD_SETTINGS_ROOT).field(SCENES_FIELD)

    for index, scene in enumerate(scenes.iter_array()):
        path_node = scene.get(SCENE_PATH_FIELD)
        if path_node is None:
            logger.debug(f"Scene entry {index} has no path, skipping")
            continue

        path = path_node.as_str()
        if path not in table:
            table[path] = index

    return table


def load_index_table(path: Union[str, Path]) -> Dict[str, int]:
    """
    Load the build settings manifest and build its index table.

    Any failure is a DocumentLoadError: without build indices no
    report can be produced.
    """
    manifest = load_document(path)
    try:
        table = build_index_table(manifest)
    except DocumentAccessError as e:
        raise DocumentLoadError(f"malformed build settings: {e}", str(path)) from e

    logger.info(f"Loaded {len(table)} scenes from {path}")
    return table
