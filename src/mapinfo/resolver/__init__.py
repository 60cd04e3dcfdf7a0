"""
mapinfo.resolver - Preset Graph Resolution

Turns the preset reference graph of a bundle into flat scene lists:

- build_index: scene path -> build index table from EditorBuildSettings
- presets: typed view over preset MonoBehaviours
- preset_cache: guid -> preset lookup for a bundle
- preset_graph: depth-first, cycle-safe flattening
"""

from mapinfo.resolver.build_index import build_index_table, load_index_table
from mapinfo.resolver.presets import PresetDocument, read_guid
from mapinfo.resolver.preset_cache import PresetCache, build_preset_cache, load_preset_file
from mapinfo.resolver.preset_graph import PresetGraphResolver, resolve_preset

__all__ = [
    # Build index
    "build_index_table",
    "load_index_table",
    # Presets
    "PresetDocument",
    "read_guid",
    # Cache
    "PresetCache",
    "build_preset_cache",
    "load_preset_file",
    # Graph
    "PresetGraphResolver",
    "resolve_preset",
]
