"""Chat, group and membership records."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from chat_models._coerce import (
    as_bool,
    as_int,
    compact,
    opt_record,
    opt_str,
    record_list,
    require_mapping,
    require_str,
    resolve_identifier,
)
from chat_models.user import User

CHAT_TYPE_DIRECT = "private"
CHAT_TYPE_GROUP = "group"


@dataclass(frozen=True)
class CallParticipantInfo:
    user: User
    joined_at: str

    @classmethod
    def from_dict(cls, data: Any) -> "CallParticipantInfo":
        data = require_mapping(data, "CallParticipantInfo")
        return cls(
            user=User.from_dict(data.get("userId")),
            joined_at=require_str(data, "joinedAt", "CallParticipantInfo"),
        )


@dataclass(frozen=True)
class ActiveCallInfo:
    """Snapshot of a call running in a chat, embedded in chat payloads."""

    channel_name: str
    started_by: User
    started_at: str
    participants: List[CallParticipantInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ActiveCallInfo":
        data = require_mapping(data, "ActiveCallInfo")
        return cls(
            channel_name=require_str(data, "channelName", "ActiveCallInfo"),
            started_by=User.from_dict(data.get("startedBy")),
            started_at=require_str(data, "startedAt", "ActiveCallInfo"),
            participants=record_list(data, "participants", CallParticipantInfo.from_dict),
        )


@dataclass(frozen=True)
class LastMessage:
    content: str
    timestamp: str

    @classmethod
    def from_dict(cls, data: Any) -> "LastMessage":
        data = require_mapping(data, "LastMessage")
        return cls(content=opt_str(data, "content", "") or "", timestamp=opt_str(data, "timestamp", "") or "")


@dataclass(frozen=True)
class Chat:
    id: str
    type: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    other_user: Optional[User] = None
    participants: List[User] = field(default_factory=list)
    last_message: Optional[LastMessage] = None
    unread_count: int = 0
    updated_at: str = ""
    has_active_call: bool = False
    active_call_participants_count: int = 0
    active_call: Optional[ActiveCallInfo] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Chat":
        data = require_mapping(data, "Chat")
        return cls(
            id=resolve_identifier(data, "Chat"),
            type=require_str(data, "type", "Chat"),
            name=opt_str(data, "name"),
            avatar=opt_str(data, "avatar"),
            other_user=opt_record(data, "otherUser", User.from_dict),
            participants=record_list(data, "participants", User.from_dict),
            last_message=opt_record(data, "lastMessage", LastMessage.from_dict),
            unread_count=as_int(data, "unreadCount"),
            updated_at=opt_str(data, "updatedAt", "") or "",
            has_active_call=as_bool(data, "hasActiveCall"),
            active_call_participants_count=as_int(data, "activeCallParticipantsCount"),
            active_call=opt_record(data, "activeCall", ActiveCallInfo.from_dict),
        )

    @property
    def is_group(self) -> bool:
        return self.type == CHAT_TYPE_GROUP

    def title(self) -> str:
        """Name shown in chat lists: group name, else the other user's display name."""
        if self.name:
            return self.name
        if self.other_user is not None:
            return self.other_user.display_name
        return "Chat"


@dataclass(frozen=True)
class GroupPermissions:
    who_can_send_messages: str = "all"
    who_can_add_members: str = "admins"
    who_can_edit_info: str = "admins"

    @classmethod
    def from_dict(cls, data: Any) -> "GroupPermissions":
        data = require_mapping(data, "GroupPermissions")
        return cls(
            who_can_send_messages=opt_str(data, "whoCanSendMessages", "all") or "all",
            who_can_add_members=opt_str(data, "whoCanAddMembers", "admins") or "admins",
            who_can_edit_info=opt_str(data, "whoCanEditInfo", "admins") or "admins",
        )

    def to_payload(self) -> dict:
        return {
            "whoCanSendMessages": self.who_can_send_messages,
            "whoCanAddMembers": self.who_can_add_members,
            "whoCanEditInfo": self.who_can_edit_info,
        }


@dataclass(frozen=True)
class ChatBackground:
    type: str = "color"
    value: str = "#FFFFFF"

    @classmethod
    def from_dict(cls, data: Any) -> "ChatBackground":
        data = require_mapping(data, "ChatBackground")
        return cls(type=opt_str(data, "type", "color") or "color", value=opt_str(data, "value", "#FFFFFF") or "#FFFFFF")


@dataclass(frozen=True)
class ChatInfo:
    id: str
    type: str
    name: Optional[str] = None
    description: Optional[str] = None
    avatar: Optional[str] = None
    is_public: bool = False
    created_by: Optional[str] = None
    permissions: Optional[GroupPermissions] = None
    background: Optional[ChatBackground] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ChatInfo":
        data = require_mapping(data, "ChatInfo")
        customization = data.get("customization") or {}
        return cls(
            id=resolve_identifier(data, "ChatInfo"),
            type=require_str(data, "type", "ChatInfo"),
            name=opt_str(data, "name"),
            description=opt_str(data, "description"),
            avatar=opt_str(data, "avatar"),
            is_public=as_bool(data, "isPublic"),
            created_by=opt_str(data, "createdBy"),
            permissions=opt_record(data, "permissions", GroupPermissions.from_dict),
            background=opt_record(require_mapping(customization, "ChatCustomization"), "background", ChatBackground.from_dict),
        )


@dataclass(frozen=True)
class ChatMember:
    user: User
    role: str

    @classmethod
    def from_dict(cls, data: Any) -> "ChatMember":
        data = require_mapping(data, "ChatMember")
        return cls(user=User.from_dict(data.get("userId")), role=opt_str(data, "role", "member") or "member")


@dataclass(frozen=True)
class ChatDetail:
    id: str
    type: str
    name: Optional[str]
    members: List[ChatMember]
    active_call: Optional[ActiveCallInfo] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ChatDetail":
        data = require_mapping(data, "ChatDetail")
        return cls(
            id=resolve_identifier(data, "ChatDetail"),
            type=require_str(data, "type", "ChatDetail"),
            name=opt_str(data, "name"),
            members=record_list(data, "members", ChatMember.from_dict),
            active_call=opt_record(data, "activeCall", ActiveCallInfo.from_dict),
        )

    def role_of(self, user_id: str) -> Optional[str]:
        for member in self.members:
            if member.user.id == user_id:
                return member.role
        return None


@dataclass(frozen=True)
class PublicChat:
    id: str
    name: str
    description: Optional[str] = None
    avatar: Optional[str] = None
    members_count: int = 0
    is_joined: bool = False
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "PublicChat":
        data = require_mapping(data, "PublicChat")
        return cls(
            id=resolve_identifier(data, "PublicChat"),
            name=require_str(data, "name", "PublicChat"),
            description=opt_str(data, "description"),
            avatar=opt_str(data, "avatar"),
            members_count=as_int(data, "membersCount"),
            is_joined=as_bool(data, "isJoined"),
            created_at=opt_str(data, "createdAt", "") or "",
        )


# Requests ---------------------------------------------------------------


@dataclass(frozen=True)
class CreateChatRequest:
    type: str
    members: Sequence[str]
    participant_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    is_public: bool = False
    member_ids: Optional[Sequence[str]] = None

    def to_payload(self) -> dict:
        return compact(
            {
                "type": self.type,
                "participantId": self.participant_id,
                "name": self.name,
                "description": self.description,
                "isPublic": self.is_public,
                "memberIds": list(self.member_ids) if self.member_ids is not None else None,
                "members": list(self.members),
            }
        )


@dataclass(frozen=True)
class UpdateGroupRequest:
    name: Optional[str] = None
    description: Optional[str] = None
    avatar: Optional[str] = None

    def to_payload(self) -> dict:
        return compact({"name": self.name, "description": self.description, "avatar": self.avatar})


@dataclass(frozen=True)
class AddMemberRequest:
    user_id: str

    def to_payload(self) -> dict:
        return {"userId": self.user_id}


@dataclass(frozen=True)
class UpdateRoleRequest:
    role: str

    def to_payload(self) -> dict:
        return {"role": self.role}


@dataclass(frozen=True)
class UpdatePermissionsRequest:
    permissions: GroupPermissions

    def to_payload(self) -> dict:
        return {"permissions": self.permissions.to_payload()}


@dataclass(frozen=True)
class UpdateBackgroundRequest:
    type: str
    value: str

    def to_payload(self) -> dict:
        return {"type": self.type, "value": self.value}


# Responses --------------------------------------------------------------


@dataclass(frozen=True)
class CreateChatResponse:
    success: bool
    chat: Chat

    @classmethod
    def from_dict(cls, data: Any) -> "CreateChatResponse":
        data = require_mapping(data, "CreateChatResponse")
        return cls(success=as_bool(data, "success"), chat=Chat.from_dict(data.get("chat")))


@dataclass(frozen=True)
class ChatMembersResponse:
    success: bool
    members: List[User]
    chat: ChatInfo

    @classmethod
    def from_dict(cls, data: Any) -> "ChatMembersResponse":
        data = require_mapping(data, "ChatMembersResponse")
        return cls(
            success=as_bool(data, "success"),
            members=record_list(data, "members", User.from_dict),
            chat=ChatInfo.from_dict(data.get("chat")),
        )


@dataclass(frozen=True)
class AddMemberResponse:
    success: bool
    message: str
    member: User

    @classmethod
    def from_dict(cls, data: Any) -> "AddMemberResponse":
        data = require_mapping(data, "AddMemberResponse")
        return cls(
            success=as_bool(data, "success"),
            message=opt_str(data, "message", "") or "",
            member=User.from_dict(data.get("member")),
        )


@dataclass(frozen=True)
class UpdateRoleResponse:
    success: bool
    message: str
    role: str

    @classmethod
    def from_dict(cls, data: Any) -> "UpdateRoleResponse":
        data = require_mapping(data, "UpdateRoleResponse")
        return cls(
            success=as_bool(data, "success"),
            message=opt_str(data, "message", "") or "",
            role=require_str(data, "role", "UpdateRoleResponse"),
        )


@dataclass(frozen=True)
class UpdatePermissionsResponse:
    success: bool
    message: str
    permissions: GroupPermissions

    @classmethod
    def from_dict(cls, data: Any) -> "UpdatePermissionsResponse":
        data = require_mapping(data, "UpdatePermissionsResponse")
        return cls(
            success=as_bool(data, "success"),
            message=opt_str(data, "message", "") or "",
            permissions=GroupPermissions.from_dict(data.get("permissions") or {}),
        )
