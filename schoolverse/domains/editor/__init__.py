# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Editor domain package: draft-based admin editing workflow."""

from schoolverse.domains.editor.draft import (
    DraftEditor,
    EditorState,
    InvalidTransitionError,
)

__all__ = ["DraftEditor", "EditorState", "InvalidTransitionError"]
