# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Draft editor state machine for admin content editing.

States and transitions::

    IDLE --load--> LOADING --> VIEWING | ERROR
    ERROR --load--> LOADING                       (retry)
    VIEWING --load--> LOADING                     (refresh)
    VIEWING --start_edit--> EDITING
    EDITING --cancel--> VIEWING                   (draft discarded)
    EDITING --submit--> SAVING --> VIEWING        (canonical state reloaded)
                               \\-> EDITING       (draft kept, error set)

Required fields are checked on submit before the saver is called. Any
other transition raises InvalidTransitionError.

Example:
    >>> editor = DraftEditor.for_singleton(content_service.repository("hero_section"))
    >>> await editor.load()
    >>> editor.start_edit()
    >>> editor.update_draft(title="Welcome back")
    >>> await editor.submit()
    True
"""

import copy
import logging
from enum import Enum
from typing import Any, Awaitable, Callable

from schoolverse.domains.content.entities import SERVER_FIELDS
from schoolverse.domains.content.repository import ContentRepository, Record
from schoolverse.domains.content.result import ErrorKind, Result

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Result[Record]]]
Saver = Callable[[dict[str, Any]], Awaitable[Result[Record]]]


class EditorState(str, Enum):
    """Lifecycle state of a draft editor."""

    IDLE = "idle"
    LOADING = "loading"
    VIEWING = "viewing"
    ERROR = "error"
    EDITING = "editing"
    SAVING = "saving"


class InvalidTransitionError(Exception):
    """Raised when an action is not allowed in the current state.

    Attributes:
        state: State the editor was in.
        action: Attempted action.
    """

    def __init__(self, state: EditorState, action: str) -> None:
        self.state = state
        self.action = action
        self.message = f"Cannot {action} while {state.value}"
        super().__init__(self.message)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class DraftEditor:
    """Edits one record through a local draft.

    Attributes:
        entity: Entity name, used in log lines.
        state: Current state.
        record: Last canonical record loaded from the backend.
        draft: Local unsaved copy while editing.
        error: Message of the last failure, if any.
        notice: Confirmation of the last successful save.
    """

    def __init__(
        self,
        entity: str,
        loader: Loader,
        saver: Saver,
        required_fields: tuple[str, ...] = (),
    ) -> None:
        self.entity = entity
        self._loader = loader
        self._saver = saver
        self._required = required_fields
        self.state = EditorState.IDLE
        self.record: Record | None = None
        self.draft: dict[str, Any] | None = None
        self.error: str | None = None
        self.notice: str | None = None

    @classmethod
    def for_singleton(cls, repository: ContentRepository) -> "DraftEditor":
        """Editor for a singleton section; a missing row loads as defaults."""
        spec = repository.spec

        async def load() -> Result[Record]:
            result = await repository.get_singleton()
            if result.error is ErrorKind.NOT_FOUND:
                return Result.success(copy.deepcopy(spec.defaults))
            return result

        return cls(spec.name, load, repository.upsert_singleton, spec.required)

    @classmethod
    def for_record(cls, repository: ContentRepository, record_id: str) -> "DraftEditor":
        """Editor for one existing collection record."""
        spec = repository.spec

        async def load() -> Result[Record]:
            return await repository.get(record_id)

        async def save(changes: dict[str, Any]) -> Result[Record]:
            return await repository.update(record_id, changes)

        return cls(spec.name, load, save, spec.required)

    def _require(self, action: str, *allowed: EditorState) -> None:
        if self.state not in allowed:
            raise InvalidTransitionError(self.state, action)

    def _set_state(self, state: EditorState) -> None:
        logger.debug("%s editor: %s -> %s", self.entity, self.state.value, state.value)
        self.state = state

    async def load(self) -> bool:
        """Fetch the canonical record.

        Returns:
            True when the editor reached VIEWING, False on ERROR.
        """
        self._require("load", EditorState.IDLE, EditorState.ERROR, EditorState.VIEWING)
        self._set_state(EditorState.LOADING)
        result = await self._loader()
        if not result.ok:
            self.error = result.message
            self._set_state(EditorState.ERROR)
            return False
        self.record = result.value
        self.error = None
        self._set_state(EditorState.VIEWING)
        return True

    def start_edit(self) -> dict[str, Any]:
        """Copy the canonical record into a fresh draft."""
        self._require("start editing", EditorState.VIEWING)
        self.draft = copy.deepcopy(self.record or {})
        self.error = None
        self.notice = None
        self._set_state(EditorState.EDITING)
        return self.draft

    def update_draft(self, **changes: Any) -> dict[str, Any]:
        """Apply field changes to the draft."""
        self._require("edit the draft", EditorState.EDITING)
        if self.draft is None:
            raise InvalidTransitionError(self.state, "edit a discarded draft")
        self.draft.update(changes)
        return self.draft

    def cancel(self) -> None:
        """Discard the draft and return to viewing."""
        self._require("cancel", EditorState.EDITING)
        self.draft = None
        self.error = None
        self._set_state(EditorState.VIEWING)

    def missing_fields(self) -> list[str]:
        """Required fields that are blank in the draft."""
        draft = self.draft or {}
        return [name for name in self._required if _is_blank(draft.get(name))]

    def changes(self) -> dict[str, Any]:
        """Draft fields that differ from the canonical record."""
        record = self.record or {}
        draft = self.draft or {}
        return {
            key: value
            for key, value in draft.items()
            if key not in SERVER_FIELDS and (key not in record or record[key] != value)
        }

    async def submit(self) -> bool:
        """Validate and save the draft.

        Returns:
            True when saved and back in VIEWING; False when the editor
            stays in EDITING with ``error`` set and the draft intact.
        """
        self._require("submit", EditorState.EDITING)

        missing = self.missing_fields()
        if missing:
            self.error = f"Please fill in: {', '.join(missing)}"
            return False

        self._set_state(EditorState.SAVING)
        saved = await self._saver(self.changes())
        if not saved.ok:
            logger.info("%s save failed: %s", self.entity, saved.message)
            self.error = saved.message
            self._set_state(EditorState.EDITING)
            return False

        reloaded = await self._loader()
        if reloaded.ok:
            self.record = reloaded.value
        else:
            logger.warning("%s reload after save failed: %s", self.entity, reloaded.message)
            self.record = saved.value

        self.draft = None
        self.error = None
        self.notice = f"{self.entity} saved"
        self._set_state(EditorState.VIEWING)
        return True
