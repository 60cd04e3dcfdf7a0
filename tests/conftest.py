"""
Pytest configuration and shared fixtures.

Fixtures write small Unity-style YAML exports (the same shape the
asset extractor produces) into a temporary folder.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mapinfo.document import DocNode
from mapinfo.resolver import PresetCache, PresetDocument


UNITY_HEADER = "%YAML 1.1\n%TAG !u! tag:unity3d.com,2011:\n"


# =============================================================================
# TEXT BUILDERS
# =============================================================================

def preset_text(server_name="", scenes=(), children=(), name="Preset"):
    """Unity YAML for a map preset MonoBehaviour."""
    lines = [
        "--- !u!114 &11400000",
        "MonoBehaviour:",
        "  m_ObjectHideFlags: 0",
        "  m_Script: {fileID: 11500000, guid: 9f1e3c2b7a6d4e5f8a9b0c1d2e3f4a5b, type: 3}",
        f"  m_Name: {name}",
        f"  ServerName: {server_name}",
    ]
    if scenes:
        lines.append("  _scenesResourceKeys:")
        for path in scenes:
            lines.append(f"  - path: {path}")
            lines.append("    rcid: ")
    else:
        lines.append("  _scenesResourceKeys: []")
    if children:
        lines.append("  ChildPresets:")
        for guid in children:
            if guid is None:
                lines.append("  - {fileID: 0}")
            else:
                lines.append(f"  - {{fileID: 11400000, guid: {guid}, type: 2}}")
    else:
        lines.append("  ChildPresets: []")
    return UNITY_HEADER + "\n".join(lines) + "\n"


def meta_text(guid):
    """Unity YAML for an asset's sidecar .meta file."""
    return (
        "fileFormatVersion: 2\n"
        f"guid: {guid}\n"
        "NativeFormatImporter:\n"
        "  externalObjects: {}\n"
        "  mainObjectFileID: 11400000\n"
    )


def build_settings_text(scene_paths):
    """Unity YAML for EditorBuildSettings.asset."""
    lines = [
        "--- !u!1045 &1",
        "EditorBuildSettings:",
        "  m_ObjectHideFlags: 0",
        "  serializedVersion: 2",
        "  m_Scenes:",
    ]
    for i, path in enumerate(scene_paths):
        lines.append("  - enabled: 1")
        lines.append(f"    path: {path}")
        lines.append(f"    guid: {i:032x}")
    lines.append("  m_configObjects: {}")
    return UNITY_HEADER + "\n".join(lines) + "\n"


# =============================================================================
# FILE FIXTURES
# =============================================================================

@pytest.fixture
def write_preset():
    """Factory: write a preset asset (and its .meta when a guid is given)."""
    def _write(directory, filename, server_name="", scenes=(), children=(), guid=None):
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(preset_text(server_name, scenes, children, name=path.stem), encoding="utf-8")
        if guid is not None:
            (directory / (filename + ".meta")).write_text(meta_text(guid), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_build_settings():
    """Factory: write an EditorBuildSettings.asset listing the given scenes."""
    def _write(path, scene_paths):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(build_settings_text(scene_paths), encoding="utf-8")
        return path
    return _write


BUILD_SETTINGS_REL = "globalgamemanagers/ExportedProject/ProjectSettings/EditorBuildSettings.asset"
CACHE_REL = "ExportedProject/Assets/MonoBehaviour"
PRESETS_REL = "ExportedProject/Assets/Content/Locations/_Presets"


@pytest.fixture
def extract_dir(tmp_path, write_preset, write_build_settings):
    """
    A complete extractor output folder:

    - scenes 0..3 in the build settings (factory_a listed twice)
    - base preset with a shared scene, factory preset composing base
      and an unknown guid, an unnamed helper preset, and a nested
      folder with a second named preset
    """
    root = tmp_path / "Extract"
    write_build_settings(root / BUILD_SETTINGS_REL, [
        "Assets/Scenes/menu.unity",
        "Assets/Scenes/factory_a.unity",
        "Assets/Scenes/factory_b.unity",
        "Assets/Scenes/factory_a.unity",
        "Assets/Scenes/shared.unity",
    ])

    bundle = root / "maps.bundle"
    cache_dir = bundle / CACHE_REL
    write_preset(cache_dir, "Base.asset", scenes=["Assets/Scenes/shared.unity"], guid="aaaa0001")
    write_preset(cache_dir, "FactoryLights.asset",
                 scenes=["Assets/Scenes/factory_lights.unity"], guid="aaaa0002")

    presets = bundle / PRESETS_REL
    write_preset(presets, "Factory.asset", server_name="Factory",
                 scenes=["Assets/Scenes/factory_b.unity", "Assets/Scenes/factory_a.unity"],
                 children=["aaaa0001", "deadbeef", "aaaa0002"])
    write_preset(presets, "Helper.asset", server_name="",
                 scenes=["Assets/Scenes/menu.unity"])
    write_preset(presets / "Night", "FactoryNight.asset", server_name="FactoryNight",
                 scenes=["Assets/Scenes/factory_a.unity"], children=["aaaa0001"])

    (root / "other_folder").mkdir()
    return root


# =============================================================================
# IN-MEMORY FIXTURES
# =============================================================================

def make_preset(guid=None, server_name="", scenes=(), children=()):
    """Build a PresetDocument from plain data, through the document model."""
    doc = DocNode.from_python({
        "MonoBehaviour": {
            "ServerName": server_name,
            "_scenesResourceKeys": [{"path": p} for p in scenes],
            "ChildPresets": [{"fileID": 11400000, "guid": g, "type": 2} for g in children],
        }
    })
    return PresetDocument.from_document(doc, guid=guid)


@pytest.fixture
def preset_factory():
    return make_preset


@pytest.fixture
def cache_factory():
    """Factory: PresetCache from a list of presets (guids required)."""
    def _build(*presets):
        cache = PresetCache()
        for preset in presets:
            cache.add(preset.guid, preset)
        return cache
    return _build
