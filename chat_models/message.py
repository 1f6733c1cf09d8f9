"""Message records, reactions and the send/react request shapes."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from chat_models._coerce import (
    as_bool,
    opt_int,
    opt_record,
    opt_str,
    record_list,
    require_mapping,
    require_str,
    resolve_identifier,
)
from chat_models.user import UserSummary

MESSAGE_TYPE_TEXT = "text"
MESSAGE_TYPE_SYSTEM = "system"
REACTION_ADDED = "added"
REACTION_REMOVED = "removed"


@dataclass(frozen=True)
class Reaction:
    user_id: str
    emoji: str
    created_at: str

    @classmethod
    def from_dict(cls, data: Any) -> "Reaction":
        data = require_mapping(data, "Reaction")
        user_ref = data.get("userId")
        if isinstance(user_ref, dict):
            user_id = resolve_identifier(user_ref, "Reaction.userId")
        else:
            user_id = require_str(data, "userId", "Reaction")
        return cls(
            user_id=user_id,
            emoji=require_str(data, "emoji", "Reaction"),
            created_at=opt_str(data, "createdAt", "") or "",
        )


@dataclass(frozen=True)
class MessageMetadata:
    duration: Optional[int] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "MessageMetadata":
        data = require_mapping(data, "MessageMetadata")
        return cls(
            duration=opt_int(data, "duration"),
            file_name=opt_str(data, "fileName"),
            file_size=opt_int(data, "fileSize"),
            mime_type=opt_str(data, "mimeType"),
        )


@dataclass(frozen=True)
class SystemEventData:
    user_id: Optional[str] = None
    username: Optional[str] = None
    event_details: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "SystemEventData":
        data = require_mapping(data, "SystemEventData")
        return cls(
            user_id=opt_str(data, "userId"),
            username=opt_str(data, "username"),
            event_details=opt_str(data, "eventDetails"),
        )


@dataclass(frozen=True)
class ReplyReference:
    id: str
    content: str
    sender: Optional[UserSummary] = None
    sender_name: Optional[str] = None
    message_type: str = MESSAGE_TYPE_TEXT

    @classmethod
    def from_dict(cls, data: Any) -> "ReplyReference":
        data = require_mapping(data, "ReplyReference")
        return cls(
            id=resolve_identifier(data, "ReplyReference"),
            content=opt_str(data, "content", "") or "",
            sender=opt_record(data, "senderId", UserSummary.from_dict),
            sender_name=opt_str(data, "senderName"),
            message_type=opt_str(data, "messageType", MESSAGE_TYPE_TEXT) or MESSAGE_TYPE_TEXT,
        )


@dataclass(frozen=True)
class Message:
    """A chat message.

    ``is_sending`` and ``send_failed`` only exist on the client: they track an
    optimistic local copy and are never decoded from or sent to the backend.
    """

    id: str
    chat_id: str
    sender: UserSummary
    content: str
    created_at: str
    message_type: str = MESSAGE_TYPE_TEXT
    is_edited: bool = False
    reactions: Tuple[Reaction, ...] = field(default_factory=tuple)
    reply_to: Optional[ReplyReference] = None
    metadata: Optional[MessageMetadata] = None
    system_event_type: Optional[str] = None
    system_event_data: Optional[SystemEventData] = None
    is_sending: bool = False
    send_failed: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "Message":
        data = require_mapping(data, "Message")
        return cls(
            id=resolve_identifier(data, "Message"),
            chat_id=require_str(data, "chatId", "Message"),
            sender=UserSummary.from_dict(data.get("senderId")),
            content=opt_str(data, "content", "") or "",
            created_at=require_str(data, "createdAt", "Message"),
            message_type=opt_str(data, "messageType", MESSAGE_TYPE_TEXT) or MESSAGE_TYPE_TEXT,
            is_edited=as_bool(data, "isEdited"),
            reactions=tuple(record_list(data, "reactions", Reaction.from_dict)),
            reply_to=opt_record(data, "replyTo", ReplyReference.from_dict),
            metadata=opt_record(data, "metadata", MessageMetadata.from_dict),
            system_event_type=opt_str(data, "systemEventType"),
            system_event_data=opt_record(data, "systemEventData", SystemEventData.from_dict),
        )

    @classmethod
    def pending(
        cls,
        *,
        local_id: str,
        chat_id: str,
        sender: UserSummary,
        content: str,
        created_at: str,
        message_type: str = MESSAGE_TYPE_TEXT,
    ) -> "Message":
        """Build the optimistic copy shown while a send is in flight."""
        return cls(
            id=local_id,
            chat_id=chat_id,
            sender=sender,
            content=content,
            created_at=created_at,
            message_type=message_type,
            is_sending=True,
        )

    @property
    def is_system(self) -> bool:
        return self.message_type == MESSAGE_TYPE_SYSTEM or self.system_event_type is not None

    def mark_failed(self) -> "Message":
        return dataclasses.replace(self, is_sending=False, send_failed=True)

    def toggle_reaction(self, user_id: str, emoji: str, created_at: str) -> Tuple["Message", str]:
        """Add or remove ``emoji`` for ``user_id``; returns the new message and the action taken."""
        remaining = tuple(r for r in self.reactions if not (r.user_id == user_id and r.emoji == emoji))
        if len(remaining) != len(self.reactions):
            return dataclasses.replace(self, reactions=remaining), REACTION_REMOVED
        added = self.reactions + (Reaction(user_id=user_id, emoji=emoji, created_at=created_at),)
        return dataclasses.replace(self, reactions=added), REACTION_ADDED

    def reaction_counts(self) -> List[Tuple[str, int]]:
        """Emoji counts in first-seen order."""
        counts: dict = {}
        for reaction in self.reactions:
            counts[reaction.emoji] = counts.get(reaction.emoji, 0) + 1
        return list(counts.items())


# Requests ---------------------------------------------------------------


@dataclass(frozen=True)
class SendMessageRequest:
    content: str
    message_type: str = MESSAGE_TYPE_TEXT

    def to_payload(self) -> dict:
        return {"content": self.content, "messageType": self.message_type}


@dataclass(frozen=True)
class ReactToMessageRequest:
    emoji: str

    def to_payload(self) -> dict:
        return {"emoji": self.emoji}


# Responses --------------------------------------------------------------


@dataclass(frozen=True)
class SendMessageResponse:
    success: bool
    message: Message

    @classmethod
    def from_dict(cls, data: Any) -> "SendMessageResponse":
        data = require_mapping(data, "SendMessageResponse")
        return cls(success=as_bool(data, "success"), message=Message.from_dict(data.get("message")))


@dataclass(frozen=True)
class MessagesPage:
    messages: List[Message]
    has_more: bool = False
    next_cursor: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "MessagesPage":
        data = require_mapping(data, "MessagesPage")
        return cls(
            messages=record_list(data, "messages", Message.from_dict, required=True),
            has_more=as_bool(data, "hasMore"),
            next_cursor=opt_str(data, "nextCursor"),
        )


@dataclass(frozen=True)
class ReactToMessageResponse:
    success: bool
    action: str

    @classmethod
    def from_dict(cls, data: Any) -> "ReactToMessageResponse":
        data = require_mapping(data, "ReactToMessageResponse")
        return cls(success=as_bool(data, "success"), action=require_str(data, "action", "ReactToMessageResponse"))
