"""
Preset Documents

Typed view over a map preset MonoBehaviour. A preset names the map
server it configures, the scenes it loads directly, and the child
presets it composes.

A preset's guid is not stored in the preset itself; it lives in the
sidecar .meta file written next to the asset.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from mapinfo.document import DocNode, MissingFieldError


PRESET_ROOT = "MonoBehaviour"
SERVER_NAME_FIELD = "ServerName"
SCENES_FIELD = "_scenesResourceKeys"
CHILD_PRESETS_FIELD = "ChildPresets"
SCENE_PATH_FIELD = "path"
GUID_FIELD = "guid"


@dataclass(frozen=True)
class PresetDocument:
    """A map preset with the fields the resolver consumes."""
    server_name: str
    scene_paths: Tuple[str, ...] = ()
    child_guids: Tuple[str, ...] = ()
    guid: Optional[str] = None
    source: Optional[str] = None
    document: Optional[DocNode] = field(default=None, repr=False, compare=False)

    @property
    def is_named(self) -> bool:
        """Only presets with a server name are reported."""
        return bool(self.server_name)

    @classmethod
    def from_document(
        cls,
        doc: DocNode,
        guid: Optional[str] = None,
        source: Optional[str] = None,
    ) -> "PresetDocument":
        """
        Read a preset from its generic document.

        Missing scene or child lists mean empty. Child references
        without a guid (Unity null references) are dropped.

        Raises DocumentAccessError if the document is not shaped
        like a preset.
        """
        body = doc.field(PRESET_ROOT)

        name_node = body.get(SERVER_NAME_FIELD)
        server_name = name_node.as_str() if name_node is not None else ""

        scene_paths = []
        scenes = body.get(SCENES_FIELD)
        if scenes is not None:
            for scene in scenes.iter_array():
                scene_paths.append(scene.field(SCENE_PATH_FIELD).as_str())

        child_guids = []
        children = body.get(CHILD_PRESETS_FIELD)
        if children is not None:
            for child in children.iter_array():
                guid_node = child.get(GUID_FIELD)
                if guid_node is None:
                    continue
                child_guid = guid_node.as_str()
                if child_guid:
                    child_guids.append(child_guid)

        return cls(
            server_name=server_name,
            scene_paths=tuple(scene_paths),
            child_guids=tuple(child_guids),
            guid=guid,
            source=source,
            document=doc,
        )


def read_guid(meta: DocNode) -> str:
    """Read the guid from a sidecar identity (.meta) document."""
    guid = meta.field(GUID_FIELD).as_str()
    if not guid:
        raise MissingFieldError(f"empty field '{GUID_FIELD}'", meta.path)
    return guid
