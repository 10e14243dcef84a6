"""
Tests for autosave persistence
"""

import asyncio
import json

import pytest

from neomatrix.models.config import EditorConfig
from neomatrix.services.editor_service import EditorService
from neomatrix.services.storage_service import StorageService

from conftest import GREEN, make_animation, make_frame


@pytest.fixture
def autosave_path(tmp_path):
    return tmp_path / "state" / "autosave.json"


class TestLoad:

    def test_absent_file_gives_default(self, autosave_path):
        config = EditorConfig(grid_width=12, grid_height=6)
        animation = StorageService(autosave_path, config).load()
        assert (animation.grid.width, animation.grid.height) == (12, 6)
        assert animation.frame_count == 1

    @pytest.mark.parametrize("content", ["{broken", '{"frames": []}', "[]"])
    def test_unreadable_file_gives_default(self, autosave_path, content):
        autosave_path.parent.mkdir(parents=True)
        autosave_path.write_text(content, encoding="utf-8")
        animation = StorageService(autosave_path).load()
        assert animation.frame_count == 1
        assert animation.pixel_count == 0

    def test_non_utf8_file_gives_default(self, autosave_path):
        autosave_path.parent.mkdir(parents=True)
        autosave_path.write_bytes(b"\xff\xfe\x00garbage")
        assert StorageService(autosave_path).load().pixel_count == 0


class TestSave:

    def test_round_trip_keeps_selection(self, autosave_path):
        animation = make_animation([
            make_frame("A", (0, 0, GREEN)),
            make_frame("B", (3, 4, GREEN)),
        ])
        animation.current_index = 1
        storage = StorageService(autosave_path)

        assert storage.save(animation) is True
        data = json.loads(autosave_path.read_text(encoding="utf-8"))
        assert data["currentFrameIndex"] == 1

        restored = storage.load()
        assert restored.current_index == 1
        assert [f.coords for f in restored.frames] == [f.coords for f in animation.frames]
        assert not autosave_path.with_suffix(".json.tmp").exists()

    def test_write_failure_returns_false(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        storage = StorageService(blocker / "autosave.json")
        assert storage.save(make_animation()) is False

    def test_save_if_changed_follows_revision(self, autosave_path):
        storage = StorageService(autosave_path)
        editor = EditorService()

        assert storage.save_if_changed(editor) is True
        assert storage.save_if_changed(editor) is False

        editor.toggle_pixel(0, 0)
        assert storage.save_if_changed(editor) is True


@pytest.mark.asyncio
async def test_autosave_loop_saves_and_cancels(autosave_path):
    storage = StorageService(autosave_path)
    editor = EditorService()
    editor.toggle_pixel(2, 2)

    task = asyncio.create_task(storage.autosave_loop(editor, 0.01))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert storage.load().frames[0].coords[0].cell == (2, 2)
