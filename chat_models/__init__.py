"""Typed records for the CYCB chat backend."""
from __future__ import annotations

from chat_models._coerce import SchemaError, envelope_list, resolve_identifier
from chat_models.app_update import AppUpdateInfo, AppVersionResponse
from chat_models.chat import (
    ActiveCallInfo,
    AddMemberRequest,
    AddMemberResponse,
    CallParticipantInfo,
    Chat,
    ChatBackground,
    ChatDetail,
    ChatInfo,
    ChatMember,
    ChatMembersResponse,
    CreateChatRequest,
    CreateChatResponse,
    GroupPermissions,
    LastMessage,
    PublicChat,
    UpdateBackgroundRequest,
    UpdateGroupRequest,
    UpdatePermissionsRequest,
    UpdatePermissionsResponse,
    UpdateRoleRequest,
    UpdateRoleResponse,
)
from chat_models.message import (
    Message,
    MessageMetadata,
    MessagesPage,
    Reaction,
    ReactToMessageRequest,
    ReactToMessageResponse,
    ReplyReference,
    SendMessageRequest,
    SendMessageResponse,
    SystemEventData,
)
from chat_models.note import Note, NoteResponse, NotesListResponse
from chat_models.upload import AudioUploadResponse, ImageUploadResponse, ProfilePictureResponse
from chat_models.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    ReportUserRequest,
    SuccessResponse,
    UpdateProfileResponse,
    User,
    UserProfile,
    UserResponse,
    UserSummary,
)
from chat_models.voice_call import (
    CallParticipant,
    CallStatus,
    CallStatusResponse,
    InvalidCallTransition,
    VoiceCall,
    VoiceCallToken,
    VoiceCallTokenRequest,
)

__all__ = [
    "ActiveCallInfo",
    "AddMemberRequest",
    "AddMemberResponse",
    "AppUpdateInfo",
    "AppVersionResponse",
    "AudioUploadResponse",
    "AuthResponse",
    "CallParticipant",
    "CallParticipantInfo",
    "CallStatus",
    "CallStatusResponse",
    "Chat",
    "ChatBackground",
    "ChatDetail",
    "ChatInfo",
    "ChatMember",
    "ChatMembersResponse",
    "CreateChatRequest",
    "CreateChatResponse",
    "GroupPermissions",
    "ImageUploadResponse",
    "InvalidCallTransition",
    "LastMessage",
    "LoginRequest",
    "Message",
    "MessageMetadata",
    "MessagesPage",
    "Note",
    "NoteResponse",
    "NotesListResponse",
    "ProfilePictureResponse",
    "PublicChat",
    "Reaction",
    "ReactToMessageRequest",
    "ReactToMessageResponse",
    "RegisterRequest",
    "ReplyReference",
    "ReportUserRequest",
    "SchemaError",
    "SendMessageRequest",
    "SendMessageResponse",
    "SuccessResponse",
    "SystemEventData",
    "UpdateBackgroundRequest",
    "UpdateGroupRequest",
    "UpdatePermissionsRequest",
    "UpdatePermissionsResponse",
    "UpdateProfileResponse",
    "UpdateRoleRequest",
    "UpdateRoleResponse",
    "User",
    "UserProfile",
    "UserResponse",
    "UserSummary",
    "VoiceCall",
    "VoiceCallToken",
    "VoiceCallTokenRequest",
    "envelope_list",
    "resolve_identifier",
]
