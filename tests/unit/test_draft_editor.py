# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the draft editor state machine."""

from unittest.mock import AsyncMock

import pytest

from schoolverse.domains.content import ErrorKind, Result
from schoolverse.domains.editor import DraftEditor, EditorState, InvalidTransitionError

RECORD = {
    "id": "a-1",
    "title": "Sports Day",
    "content": "Friday on the main ground",
    "category": "sports",
    "created_at": None,
    "updated_at": None,
}


def make_editor(loader_results=None, saver_result=None):
    loader = AsyncMock(side_effect=loader_results or [Result.success(dict(RECORD))])
    saver = AsyncMock(return_value=saver_result or Result.success(dict(RECORD)))
    editor = DraftEditor("announcements", loader, saver, required_fields=("title", "content"))
    return editor, loader, saver


@pytest.mark.unit
class TestLoading:
    """Tests for IDLE -> LOADING -> VIEWING | ERROR."""

    @pytest.mark.asyncio
    async def test_load_success_reaches_viewing(self):
        editor, loader, _ = make_editor()

        assert editor.state is EditorState.IDLE
        assert await editor.load() is True

        assert editor.state is EditorState.VIEWING
        assert editor.record["title"] == "Sports Day"
        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_load_failure_reaches_error_then_retry(self):
        editor, loader, _ = make_editor(
            loader_results=[
                Result.failure(ErrorKind.BACKEND_UNAVAILABLE, "database unavailable"),
                Result.success(dict(RECORD)),
            ]
        )

        assert await editor.load() is False
        assert editor.state is EditorState.ERROR
        assert editor.error == "database unavailable"

        assert await editor.load() is True
        assert editor.state is EditorState.VIEWING
        assert editor.error is None
        assert loader.await_count == 2


@pytest.mark.unit
class TestEditing:
    """Tests for the editing cycle."""

    @pytest.mark.asyncio
    async def test_cancel_discards_draft(self):
        editor, _, saver = make_editor()
        await editor.load()
        editor.start_edit()
        editor.update_draft(title="Changed")

        editor.cancel()

        assert editor.state is EditorState.VIEWING
        assert editor.draft is None
        assert editor.record["title"] == "Sports Day"
        saver.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_submit_sends_only_changed_fields(self):
        saved = dict(RECORD, title="Sports Day moved")
        editor, loader, saver = make_editor(
            loader_results=[Result.success(dict(RECORD)), Result.success(saved)],
            saver_result=Result.success(saved),
        )
        await editor.load()
        editor.start_edit()
        editor.update_draft(title="Sports Day moved", id="ignored")

        assert await editor.submit() is True

        saver.assert_awaited_once_with({"title": "Sports Day moved"})
        assert editor.state is EditorState.VIEWING
        assert editor.record["title"] == "Sports Day moved"
        assert editor.draft is None
        assert editor.notice == "announcements saved"
        assert loader.await_count == 2

    @pytest.mark.asyncio
    async def test_missing_required_field_blocks_save(self):
        editor, _, saver = make_editor()
        await editor.load()
        editor.start_edit()
        editor.update_draft(title="   ")

        assert await editor.submit() is False

        assert editor.state is EditorState.EDITING
        assert "title" in editor.error
        assert editor.draft["title"] == "   "
        saver.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_save_failure_keeps_draft(self):
        editor, _, saver = make_editor(
            saver_result=Result.failure(ErrorKind.BACKEND_UNAVAILABLE, "Could not update")
        )
        await editor.load()
        editor.start_edit()
        editor.update_draft(content="Saturday instead")

        assert await editor.submit() is False

        saver.assert_awaited_once()
        assert editor.state is EditorState.EDITING
        assert editor.error == "Could not update"
        assert editor.draft["content"] == "Saturday instead"
        assert editor.record["content"] == RECORD["content"]

    @pytest.mark.asyncio
    async def test_failed_reload_after_save_keeps_saved_value(self):
        saved = dict(RECORD, title="New")
        editor, _, _ = make_editor(
            loader_results=[
                Result.success(dict(RECORD)),
                Result.failure(ErrorKind.BACKEND_UNAVAILABLE, "down"),
            ],
            saver_result=Result.success(saved),
        )
        await editor.load()
        editor.start_edit()
        editor.update_draft(title="New")

        assert await editor.submit() is True
        assert editor.record["title"] == "New"


@pytest.mark.unit
class TestInvalidTransitions:
    """Tests for actions outside their allowed states."""

    def test_start_edit_from_idle(self):
        editor, _, _ = make_editor()

        with pytest.raises(InvalidTransitionError) as exc_info:
            editor.start_edit()

        assert exc_info.value.state is EditorState.IDLE

    @pytest.mark.asyncio
    async def test_submit_while_viewing(self):
        editor, _, _ = make_editor()
        await editor.load()

        with pytest.raises(InvalidTransitionError):
            await editor.submit()

    @pytest.mark.asyncio
    async def test_load_while_editing(self):
        editor, _, _ = make_editor()
        await editor.load()
        editor.start_edit()

        with pytest.raises(InvalidTransitionError):
            await editor.load()

    def test_cancel_from_idle(self):
        editor, _, _ = make_editor()

        with pytest.raises(InvalidTransitionError):
            editor.cancel()

    @pytest.mark.asyncio
    async def test_update_after_draft_dropped(self):
        editor, _, _ = make_editor()
        await editor.load()
        editor.start_edit()
        editor.draft = None

        with pytest.raises(InvalidTransitionError) as exc_info:
            editor.update_draft(title="Changed")

        assert exc_info.value.state is EditorState.EDITING
        assert editor.draft is None
