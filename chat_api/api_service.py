"""One method per CYCB backend endpoint."""
from __future__ import annotations

import logging
from typing import Any, BinaryIO, Callable, Dict, List, Optional, TypeVar, Union

import requests

from chat_api.errors import DecodeError
from chat_api.http_client import HttpClient
from chat_api.logging_utils import ROOT_LOGGER_NAME
from chat_api.session import SessionContext
from chat_models import (
    AddMemberRequest,
    AddMemberResponse,
    AppVersionResponse,
    AudioUploadResponse,
    AuthResponse,
    CallStatusResponse,
    Chat,
    ChatDetail,
    ChatMembersResponse,
    CreateChatRequest,
    CreateChatResponse,
    GroupPermissions,
    ImageUploadResponse,
    LoginRequest,
    Message,
    MessagesPage,
    NoteResponse,
    NotesListResponse,
    ProfilePictureResponse,
    PublicChat,
    ReactToMessageRequest,
    ReactToMessageResponse,
    RegisterRequest,
    ReportUserRequest,
    SchemaError,
    SendMessageRequest,
    SendMessageResponse,
    SuccessResponse,
    UpdateBackgroundRequest,
    UpdateGroupRequest,
    UpdatePermissionsRequest,
    UpdatePermissionsResponse,
    UpdateProfileResponse,
    UpdateRoleRequest,
    UpdateRoleResponse,
    User,
    UserResponse,
    VoiceCallToken,
    VoiceCallTokenRequest,
    envelope_list,
)

T = TypeVar("T")
UploadContent = Union[bytes, BinaryIO]
LOGGER = logging.getLogger(f"{ROOT_LOGGER_NAME}.Api.Service")


class ChatApiService:
    """Typed bindings over :class:`HttpClient`.

    Every call returns a record from :mod:`chat_models` or raises a
    :class:`~chat_api.errors.ChatApiError`. Soft failures (``success: false``)
    are returned as-is for the caller to interpret.
    """

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    @property
    def client(self) -> HttpClient:
        return self._client

    @property
    def session(self) -> SessionContext:
        return self._client.session

    # Internal helpers ----------------------------------------------------

    def _call(self, decode: Callable[[Any], T], method: str, path: str, **kwargs: Any) -> T:
        payload = self._client.request_json(method, path, **kwargs)
        try:
            return decode(payload)
        except SchemaError as exc:
            raise DecodeError(f"{method} {path}: {exc}") from exc

    def _list(self, key: str, decode: Callable[[Any], T], method: str, path: str, **kwargs: Any) -> List[T]:
        return self._call(lambda payload: envelope_list(payload, key, decode), method, path, **kwargs)

    @staticmethod
    def _file_part(field: str, file_name: str, content: UploadContent, mime_type: str) -> Dict[str, Any]:
        return {field: (file_name, content, mime_type)}

    # Auth ----------------------------------------------------------------

    def login(self, request: LoginRequest) -> AuthResponse:
        return self._call(AuthResponse.from_dict, "POST", "auth/login", json=request.to_payload(), auth_required=False)

    def register(self, request: RegisterRequest) -> AuthResponse:
        return self._call(AuthResponse.from_dict, "POST", "auth/register", json=request.to_payload(), auth_required=False)

    def sign_in(self, username: str, password: str) -> AuthResponse:
        """Log in and install the returned token and user id on the session."""
        response = self.login(LoginRequest(username=username, password=password))
        self.session.sign_in(response.token, response.user.id)
        LOGGER.info("Signed in as %s", response.user.username)
        return response

    def sign_up(self, request: RegisterRequest) -> AuthResponse:
        response = self.register(request)
        self.session.sign_in(response.token, response.user.id)
        LOGGER.info("Registered and signed in as %s", response.user.username)
        return response

    def restore_session(self, token: str) -> User:
        """Reuse a saved token; the token is dropped again if the backend rejects it."""
        self.session.set_token(token)
        try:
            user = self.get_current_user()
        except Exception:
            self.session.sign_out()
            raise
        self.session.set_current_user_id(user.id)
        return user

    def sign_out(self) -> None:
        self.session.sign_out()

    # Users ---------------------------------------------------------------

    def get_current_user(self) -> User:
        return self._call(User.from_dict, "GET", "users/me")

    def get_user_profile(self, user_id: str) -> UserResponse:
        return self._call(UserResponse.from_dict, "GET", f"users/{user_id}")

    def update_profile(self, fields: Dict[str, str]) -> UpdateProfileResponse:
        return self._call(UpdateProfileResponse.from_dict, "PUT", "users/me", json=dict(fields))

    def update_password(self, new_password: str, current_password: Optional[str] = None) -> SuccessResponse:
        body = {"newPassword": new_password}
        if current_password is not None:
            body["currentPassword"] = current_password
        return self._call(SuccessResponse.from_dict, "POST", "users/me/password", json=body)

    def search_users(self, query: str, limit: int = 20) -> List[User]:
        return self._list("users", User.from_dict, "GET", "users/search", params={"q": query, "limit": limit})

    def block_user(self, user_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "POST", f"users/{user_id}/block")

    def report_user(self, user_id: str, request: ReportUserRequest) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "POST", f"users/{user_id}/report", json=request.to_payload())

    # Friends -------------------------------------------------------------

    def get_friends(self) -> List[User]:
        return self._list("friends", User.from_dict, "GET", "users/friends")

    def get_friend_requests(self) -> List[User]:
        return self._list("requests", User.from_dict, "GET", "users/friend-requests")

    def send_friend_request(self, user_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "POST", f"users/{user_id}/friend-request")

    def accept_friend_request(self, user_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "POST", f"users/friend-request/{user_id}/accept")

    def reject_friend_request(self, user_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "POST", f"users/friend-request/{user_id}/reject")

    def remove_friend(self, user_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "DELETE", f"users/{user_id}/friend")

    # Chats ---------------------------------------------------------------

    def get_chats(self) -> List[Chat]:
        return self._list("chats", Chat.from_dict, "GET", "chats")

    def get_chat_by_id(self, chat_id: str) -> ChatDetail:
        return self._call(ChatDetail.from_dict, "GET", f"chats/{chat_id}")

    def create_chat(self, request: CreateChatRequest) -> CreateChatResponse:
        return self._call(CreateChatResponse.from_dict, "POST", "chats", json=request.to_payload())

    def get_or_create_private_chat(self, user_id: str) -> CreateChatResponse:
        return self._call(CreateChatResponse.from_dict, "POST", "chats/private", json={"type": "private", "participantId": user_id})

    def get_chat_members(self, chat_id: str) -> ChatMembersResponse:
        return self._call(ChatMembersResponse.from_dict, "GET", f"chats/{chat_id}/members")

    def leave_chat(self, chat_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "DELETE", f"chats/{chat_id}")

    def mark_chat_as_read(self, chat_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "POST", f"chats/{chat_id}/read")

    def get_public_chats(self, limit: int = 20, search: Optional[str] = None) -> List[PublicChat]:
        return self._list("chats", PublicChat.from_dict, "GET", "chats/public", params={"limit": limit, "search": search})

    def join_public_chat(self, chat_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "POST", f"chats/{chat_id}/join")

    # Group administration ------------------------------------------------

    def update_group_info(self, chat_id: str, request: UpdateGroupRequest) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "PUT", f"chats/{chat_id}", json=request.to_payload())

    def add_group_member(self, chat_id: str, user_id: str) -> AddMemberResponse:
        body = AddMemberRequest(user_id=user_id).to_payload()
        return self._call(AddMemberResponse.from_dict, "POST", f"chats/{chat_id}/members", json=body)

    def remove_group_member(self, chat_id: str, member_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "DELETE", f"chats/{chat_id}/members/{member_id}")

    def update_member_role(self, chat_id: str, member_id: str, role: str) -> UpdateRoleResponse:
        body = UpdateRoleRequest(role=role).to_payload()
        return self._call(UpdateRoleResponse.from_dict, "PUT", f"chats/{chat_id}/members/{member_id}/role", json=body)

    def update_group_permissions(self, chat_id: str, permissions: GroupPermissions) -> UpdatePermissionsResponse:
        body = UpdatePermissionsRequest(permissions=permissions).to_payload()
        return self._call(UpdatePermissionsResponse.from_dict, "PUT", f"chats/{chat_id}/permissions", json=body)

    def update_chat_background(self, chat_id: str, request: UpdateBackgroundRequest) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "PUT", f"chats/{chat_id}/background", json=request.to_payload())

    # Messages ------------------------------------------------------------

    def get_messages(self, chat_id: str) -> List[Message]:
        return self._list("messages", Message.from_dict, "GET", f"messages/chat/{chat_id}")

    def get_messages_paginated(self, chat_id: str, limit: int = 50, before: Optional[str] = None) -> MessagesPage:
        params = {"limit": limit, "before": before}
        return self._call(MessagesPage.from_dict, "GET", f"messages/chat/{chat_id}", params=params)

    def send_message(self, chat_id: str, request: SendMessageRequest) -> SendMessageResponse:
        return self._call(SendMessageResponse.from_dict, "POST", f"messages/chat/{chat_id}", json=request.to_payload())

    def delete_message(self, message_id: str) -> SuccessResponse:
        return self._call(SuccessResponse.from_dict, "DELETE", f"messages/{message_id}")

    def react_to_message(self, message_id: str, emoji: str) -> ReactToMessageResponse:
        body = ReactToMessageRequest(emoji=emoji).to_payload()
        return self._call(ReactToMessageResponse.from_dict, "POST", f"messages/{message_id}/react", json=body)

    # Uploads -------------------------------------------------------------

    def upload_image(self, file_name: str, content: UploadContent, mime_type: str = "image/jpeg") -> ImageUploadResponse:
        files = self._file_part("image", file_name, content, mime_type)
        return self._call(ImageUploadResponse.from_dict, "POST", "upload/image", files=files)

    def upload_profile_picture(
        self, file_name: str, content: UploadContent, mime_type: str = "image/jpeg"
    ) -> ProfilePictureResponse:
        files = self._file_part("image", file_name, content, mime_type)
        return self._call(ProfilePictureResponse.from_dict, "POST", "upload/profile-picture", files=files)

    def upload_audio(self, file_name: str, content: UploadContent, mime_type: str = "audio/m4a") -> AudioUploadResponse:
        files = self._file_part("audio", file_name, content, mime_type)
        return self._call(AudioUploadResponse.from_dict, "POST", "upload/audio", files=files)

    # Push tokens ---------------------------------------------------------
    # Raw responses: callers inspect the status code themselves.

    def register_push_token(self, push_token: str) -> requests.Response:
        return self._client.request_raw("POST", "notifications/register-token", json={"fcmToken": push_token})

    def unregister_push_token(self, push_token: str) -> requests.Response:
        return self._client.request_raw("DELETE", "notifications/unregister-token", json={"fcmToken": push_token})

    # Voice calls ---------------------------------------------------------

    def generate_voice_call_token(self, request: VoiceCallTokenRequest) -> VoiceCallToken:
        return self._call(VoiceCallToken.from_dict, "POST", "voice-call/token", json=request.to_payload())

    def get_call_status(self, channel_name: str) -> CallStatusResponse:
        return self._call(CallStatusResponse.from_dict, "GET", f"voice-call/status/{channel_name}")

    # App -----------------------------------------------------------------

    def get_latest_app_version(self) -> AppVersionResponse:
        return self._call(AppVersionResponse.from_dict, "GET", "app/version", auth_required=False)

    # Notes ---------------------------------------------------------------

    def get_notes(self) -> NotesListResponse:
        return self._call(NotesListResponse.from_dict, "GET", "notes")

    def create_note(self, content: str) -> NoteResponse:
        return self._call(NoteResponse.from_dict, "POST", "notes", json={"content": content})

    def delete_note(self) -> Dict[str, Any]:
        payload = self._client.request_json("DELETE", "notes")
        if not isinstance(payload, dict):
            raise DecodeError(f"DELETE notes: expected an object, got {type(payload).__name__}")
        return payload
