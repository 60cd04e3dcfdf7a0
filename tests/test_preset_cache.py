"""
Tests for preset documents and the preset cache.
"""

import logging

import pytest

from mapinfo.document import DocNode, DocumentAccessError, DocumentLoadError, MissingFieldError
from mapinfo.resolver import PresetDocument, build_preset_cache, read_guid


class TestPresetDocument:
    """Test reading presets from generic documents."""

    def test_fields(self):
        """Server name, scenes and children are read in order."""
        doc = DocNode.from_python({
            "MonoBehaviour": {
                "ServerName": "Factory",
                "_scenesResourceKeys": [{"path": "s1"}, {"path": "s2"}],
                "ChildPresets": [{"guid": "g1"}, {"guid": "g2"}],
            }
        })
        preset = PresetDocument.from_document(doc, guid="root")
        assert preset.server_name == "Factory"
        assert preset.scene_paths == ("s1", "s2")
        assert preset.child_guids == ("g1", "g2")
        assert preset.guid == "root"
        assert preset.is_named

    def test_missing_lists_are_empty(self):
        """Presets without scene or child lists resolve to nothing."""
        doc = DocNode.from_python({"MonoBehaviour": {"ServerName": ""}})
        preset = PresetDocument.from_document(doc)
        assert preset.scene_paths == ()
        assert preset.child_guids == ()
        assert not preset.is_named

    def test_null_references_dropped(self):
        """Child references without a guid are ignored."""
        doc = DocNode.from_python({
            "MonoBehaviour": {"ChildPresets": [{"fileID": "0"}, {"guid": ""}, {"guid": "g"}]}
        })
        assert PresetDocument.from_document(doc).child_guids == ("g",)

    def test_not_a_preset(self):
        """Documents without a MonoBehaviour are rejected."""
        doc = DocNode.from_python({"GameObject": {}})
        with pytest.raises(MissingFieldError):
            PresetDocument.from_document(doc)

    def test_malformed_scene_list(self):
        """A scene list that is not a list is rejected."""
        doc = DocNode.from_python({"MonoBehaviour": {"_scenesResourceKeys": {"path": "x"}}})
        with pytest.raises(DocumentAccessError):
            PresetDocument.from_document(doc)

    def test_read_guid(self):
        """Sidecar guid is read; empty or absent is an error."""
        assert read_guid(DocNode.from_python({"guid": "abc"})) == "abc"
        with pytest.raises(MissingFieldError):
            read_guid(DocNode.from_python({"guid": ""}))
        with pytest.raises(MissingFieldError):
            read_guid(DocNode.from_python({"fileFormatVersion": "2"}))


class TestPresetCache:
    """Test building the guid -> preset cache from a folder."""

    def test_presets_keyed_by_guid(self, tmp_path, write_preset):
        """Each preset is cached under its sidecar guid."""
        write_preset(tmp_path, "A.asset", scenes=["a.unity"], guid="g-a")
        write_preset(tmp_path, "B.asset", scenes=["b.unity"], children=["g-a"], guid="g-b")

        cache = build_preset_cache(tmp_path)
        assert len(cache) == 2
        assert "g-a" in cache
        assert cache.get("g-b").child_guids == ("g-a",)
        assert cache.get("g-a").source.endswith("A.asset")
        assert cache.errors == []

    def test_missing_meta_skipped(self, tmp_path, write_preset, caplog):
        """A preset without a sidecar is skipped with a warning."""
        write_preset(tmp_path, "A.asset", guid="g-a")
        write_preset(tmp_path, "NoMeta.asset")

        with caplog.at_level(logging.WARNING):
            cache = build_preset_cache(tmp_path)

        assert list(cache) == ["g-a"]
        assert len(cache.errors) == 1
        assert cache.errors[0][0].endswith("NoMeta.asset")
        assert "NoMeta.asset" in caplog.text

    def test_meta_without_guid_skipped(self, tmp_path, write_preset):
        """A sidecar lacking a guid skips the preset."""
        write_preset(tmp_path, "A.asset")
        (tmp_path / "A.asset.meta").write_text("fileFormatVersion: 2\n", encoding="utf-8")
        cache = build_preset_cache(tmp_path)
        assert len(cache) == 0
        assert len(cache.errors) == 1

    def test_malformed_preset_skipped(self, tmp_path, write_preset):
        """A broken preset does not stop the others."""
        write_preset(tmp_path, "Good.asset", guid="g-good")
        (tmp_path / "Bad.asset").write_text("MonoBehaviour: [unclosed\n", encoding="utf-8")
        (tmp_path / "Bad.asset.meta").write_text("guid: g-bad\n", encoding="utf-8")

        cache = build_preset_cache(tmp_path)
        assert list(cache) == ["g-good"]
        assert cache.errors[0][0].endswith("Bad.asset")

    def test_other_files_ignored(self, tmp_path, write_preset):
        """Only files with the preset extension are considered."""
        write_preset(tmp_path, "A.asset", guid="g-a")
        (tmp_path / "notes.txt").write_text("hello", encoding="utf-8")
        cache = build_preset_cache(tmp_path)
        assert list(cache) == ["g-a"]
        assert cache.errors == []

    def test_no_recursion(self, tmp_path, write_preset):
        """Subfolders are not scanned."""
        write_preset(tmp_path, "A.asset", guid="g-a")
        write_preset(tmp_path / "sub", "B.asset", guid="g-b")
        assert list(build_preset_cache(tmp_path)) == ["g-a"]

    def test_duplicate_guid_last_wins(self, tmp_path, write_preset, caplog):
        """The later file in name order replaces the earlier one, with a warning."""
        write_preset(tmp_path, "A.asset", scenes=["first.unity"], guid="same")
        write_preset(tmp_path, "B.asset", scenes=["second.unity"], guid="same")

        with caplog.at_level(logging.WARNING):
            cache = build_preset_cache(tmp_path)

        assert len(cache) == 1
        assert cache.get("same").scene_paths == ("second.unity",)
        assert len(cache.duplicates) == 1
        assert cache.duplicates[0][1].scene_paths == ("first.unity",)
        assert "Duplicate preset guid same" in caplog.text

    def test_missing_directory(self, tmp_path):
        """A missing folder cannot produce a cache."""
        with pytest.raises(DocumentLoadError):
            build_preset_cache(tmp_path / "missing")
