"""Short status notes shown above the chat list."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from chat_models._coerce import as_bool, opt_str, record_list, require_mapping, require_str, resolve_identifier
from chat_models.user import UserSummary


@dataclass(frozen=True)
class Note:
    id: str
    author: UserSummary
    content: str
    created_at: str

    @classmethod
    def from_dict(cls, data: Any) -> "Note":
        data = require_mapping(data, "Note")
        return cls(
            id=resolve_identifier(data, "Note"),
            author=UserSummary.from_dict(data.get("userId")),
            content=opt_str(data, "content", "") or "",
            created_at=require_str(data, "createdAt", "Note"),
        )


@dataclass(frozen=True)
class NoteResponse:
    success: bool
    note: Note

    @classmethod
    def from_dict(cls, data: Any) -> "NoteResponse":
        data = require_mapping(data, "NoteResponse")
        return cls(success=as_bool(data, "success"), note=Note.from_dict(data.get("note")))


@dataclass(frozen=True)
class NotesListResponse:
    success: bool
    notes: List[Note]

    @classmethod
    def from_dict(cls, data: Any) -> "NotesListResponse":
        data = require_mapping(data, "NotesListResponse")
        return cls(success=as_bool(data, "success"), notes=record_list(data, "notes", Note.from_dict))
