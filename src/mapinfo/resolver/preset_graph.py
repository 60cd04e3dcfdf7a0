"""
Preset Graph Resolution

Flattens a preset and everything it references into the ordered list of
scenes the map server loads.

Traversal is depth-first pre-order: a preset's own scenes come first,
then each child preset in document order, fully expanded. A child that
is reached again along a different branch is expanded again, so the
result may contain duplicates; grouping happens downstream.

The reference graph is expected to be acyclic, but a guid that is
already on the current traversal path is never re-entered. The walk is
iterative so deep preset chains cannot exhaust the interpreter stack.
"""

import logging
from typing import Iterator, List, Optional, Set, Tuple

from mapinfo.resolver.preset_cache import PresetCache
from mapinfo.resolver.presets import PresetDocument

logger = logging.getLogger(__name__)


class PresetGraphResolver:
    """
    Resolves presets against a cache and counts the references it
    had to skip.
    """

    def __init__(self, cache: PresetCache):
        self.cache = cache
        self.unresolved = 0
        self.cycles = 0

    def resolve(self, preset: PresetDocument) -> List[str]:
        """Return every scene path reachable from ``preset``, in traversal order."""
        scenes: List[str] = list(preset.scene_paths)

        on_path: Set[str] = set()
        if preset.guid:
            on_path.add(preset.guid)

        # (guid of the preset being expanded, iterator over its child guids)
        stack: List[Tuple[Optional[str], Iterator[str]]] = [
            (preset.guid, iter(preset.child_guids))
        ]

        while stack:
            guid, children = stack[-1]
            child_guid = next(children, None)

            if child_guid is None:
                stack.pop()
                if guid is not None:
                    on_path.discard(guid)
                continue

            child = self.cache.get(child_guid)
            if child is None:
                self.unresolved += 1
                logger.debug(f"{_describe(preset)}: child preset {child_guid} not in cache, skipping")
                continue

            if child_guid in on_path:
                self.cycles += 1
                logger.warning(
                    f"{_describe(preset)}: preset {child_guid} references itself "
                    f"through its children, not following it again"
                )
                continue

            scenes.extend(child.scene_paths)
            on_path.add(child_guid)
            stack.append((child_guid, iter(child.child_guids)))

        return scenes


def resolve_preset(preset: PresetDocument, cache: PresetCache) -> List[str]:
    """
    Resolve a preset into its ordered scene list.

    Convenience wrapper around PresetGraphResolver.
    """
    return PresetGraphResolver(cache).resolve(preset)


def _describe(preset: PresetDocument) -> str:
    return preset.server_name or preset.source or preset.guid or "<preset>"
