"""
mapinfo - Map Preset Level Extractor

Reports which build-indexed scenes ("levels") each map server preset
of an extracted Unity game loads.
"""

__version__ = "0.1.0"
__author__ = "mapinfo contributors"

from mapinfo.resolver import resolve_preset, build_index_table, build_preset_cache
