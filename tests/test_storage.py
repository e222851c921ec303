"""Tests for the JSON file store."""

import json
import os
import stat

import pytest

from shortlinks.errors import StorageFailure
from shortlinks.storage.json_file import JsonFileStore


def _leftover_temp_files(directory):
    return [p for p in directory.iterdir() if p.name.endswith(".tmp")]


class TestJsonFileStore:
    """Test loading and atomic saving."""
    
    def test_missing_file_loads_empty_and_is_created(self, store, data_file):
        assert not data_file.exists()
        
        assert store.load() == {}
        assert json.loads(data_file.read_text(encoding="utf-8")) == {}
    
    def test_saved_file_is_indented_json(self, store, data_file):
        store.save({"abc123": "https://example.com"})
        
        text = data_file.read_text(encoding="utf-8")
        assert '\n  "abc123": "https://example.com"\n' in text
        assert store.load() == {"abc123": "https://example.com"}
    
    def test_hand_edited_file_is_read(self, store, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text('{"docs": "https://docs.example.com"}', encoding="utf-8")
        
        assert store.load() == {"docs": "https://docs.example.com"}
    
    @pytest.mark.parametrize("contents", [
        "{not json",
        "",
        '["a", "b"]',
        '{"abc": 42}',
        b"\xff\xfe\x00garbage",
    ])
    def test_corrupt_file_resets_to_empty(self, store, data_file, contents):
        data_file.parent.mkdir(parents=True)
        if isinstance(contents, bytes):
            data_file.write_bytes(contents)
        else:
            data_file.write_text(contents, encoding="utf-8")
        
        assert store.load() == {}
        assert json.loads(data_file.read_text(encoding="utf-8")) == {}
    
    def test_corrupt_file_raises_when_reset_disabled(self, data_file, logger):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("{not json", encoding="utf-8")
        store = JsonFileStore(data_file, reset_on_corrupt=False, logger=logger)
        
        with pytest.raises(StorageFailure, match="corrupt"):
            store.load()
        
        # Left alone for a human to repair
        assert data_file.read_text(encoding="utf-8") == "{not json"
    
    def test_unreadable_file_is_storage_failure(self, tmp_path, logger):
        # A directory where the file should be: read fails with something other than "absent"
        blocked = tmp_path / "links.json"
        blocked.mkdir()
        store = JsonFileStore(blocked, logger=logger)
        
        with pytest.raises(StorageFailure) as exc_info:
            store.load()
        assert isinstance(exc_info.value.__cause__, OSError)
    
    def test_failed_rename_keeps_previous_file(self, store, data_file, monkeypatch):
        store.save({"keep": "https://example.com/keep"})
        before = data_file.read_text(encoding="utf-8")
        
        def failing_replace(src, dst):
            raise OSError(28, "No space left on device")
        
        monkeypatch.setattr(os, "replace", failing_replace)
        
        with pytest.raises(StorageFailure, match="No space left"):
            store.save({"keep": "https://example.com/keep", "new": "https://example.com/new"})
        
        monkeypatch.undo()
        assert data_file.read_text(encoding="utf-8") == before
        assert _leftover_temp_files(data_file.parent) == []
    
    def test_failed_serialization_leaves_no_temp_file(self, store, data_file):
        store.save({})
        
        with pytest.raises(TypeError):
            store.save({"bad": object()})
        
        assert json.loads(data_file.read_text(encoding="utf-8")) == {}
        assert _leftover_temp_files(data_file.parent) == []
    
    def test_existing_permissions_preserved(self, store, data_file):
        store.save({})
        os.chmod(data_file, 0o600)
        
        store.save({"abc": "https://example.com"})
        
        assert stat.S_IMODE(data_file.stat().st_mode) == 0o600
    
    def test_health_check(self, store, data_file):
        assert store.health_check()
        store.save({})
        assert store.health_check()
