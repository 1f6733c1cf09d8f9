"""User records and the auth/friend request shapes built around them."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from chat_models._coerce import (
    as_bool,
    as_int,
    compact,
    id_set,
    opt_str,
    require_mapping,
    require_str,
    resolve_identifier,
)


@dataclass(frozen=True)
class User:
    """A user as returned by the backend, normalised to a single ``id``."""

    id: str
    username: str
    display_name: str
    email: Optional[str] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    is_online: bool = False
    friends: frozenset = field(default_factory=frozenset)
    friend_requests_sent: frozenset = field(default_factory=frozenset)
    friend_requests_received: frozenset = field(default_factory=frozenset)
    following: frozenset = field(default_factory=frozenset)
    followers: frozenset = field(default_factory=frozenset)
    role: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        data = require_mapping(data, "User")
        username = require_str(data, "username", "User")
        return cls(
            id=resolve_identifier(data, "User"),
            username=username,
            display_name=opt_str(data, "displayName") or username,
            email=opt_str(data, "email"),
            profile_picture=opt_str(data, "profilePicture"),
            bio=opt_str(data, "bio"),
            is_online=as_bool(data, "isOnline"),
            friends=id_set(data, "friends"),
            friend_requests_sent=id_set(data, "friendRequestsSent"),
            friend_requests_received=id_set(data, "friendRequestsReceived"),
            following=id_set(data, "following"),
            followers=id_set(data, "followers"),
            role=opt_str(data, "role"),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def is_friend_of(self, user_id: str) -> bool:
        return user_id in self.friends

    def has_pending_request_from(self, user_id: str) -> bool:
        return user_id in self.friend_requests_received


@dataclass(frozen=True)
class UserSummary:
    """Compact sender/author view embedded in messages and notes."""

    id: str
    username: str
    display_name: str
    profile_picture: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "UserSummary":
        data = require_mapping(data, "UserSummary")
        username = require_str(data, "username", "UserSummary")
        return cls(
            id=resolve_identifier(data, "UserSummary"),
            username=username,
            display_name=opt_str(data, "displayName") or username,
            profile_picture=opt_str(data, "profilePicture"),
        )


@dataclass(frozen=True)
class UserProfile:
    id: str
    username: str
    display_name: str
    created_at: Optional[str] = None
    email: Optional[str] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    is_online: bool = False
    friends_count: int = 0
    followers_count: int = 0
    following_count: int = 0
    is_friend: bool = False
    is_following: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "UserProfile":
        data = require_mapping(data, "UserProfile")
        username = require_str(data, "username", "UserProfile")
        return cls(
            id=resolve_identifier(data, "UserProfile"),
            username=username,
            display_name=opt_str(data, "displayName") or username,
            created_at=opt_str(data, "createdAt"),
            email=opt_str(data, "email"),
            profile_picture=opt_str(data, "profilePicture"),
            bio=opt_str(data, "bio"),
            is_online=as_bool(data, "isOnline"),
            friends_count=as_int(data, "friendsCount"),
            followers_count=as_int(data, "followersCount"),
            following_count=as_int(data, "followingCount"),
            is_friend=as_bool(data, "isFriend"),
            is_following=as_bool(data, "isFollowing"),
        )


# Requests ---------------------------------------------------------------


@dataclass(frozen=True)
class LoginRequest:
    username: str
    password: str

    def to_payload(self) -> dict:
        return {"username": self.username, "password": self.password}


@dataclass(frozen=True)
class RegisterRequest:
    username: str
    password: str
    display_name: str
    email: Optional[str] = None

    def to_payload(self) -> dict:
        return compact(
            {
                "username": self.username,
                "password": self.password,
                "displayName": self.display_name,
                "email": self.email,
            }
        )


@dataclass(frozen=True)
class ReportUserRequest:
    reason: str
    description: Optional[str] = None

    def to_payload(self) -> dict:
        return compact({"reason": self.reason, "description": self.description})


# Responses --------------------------------------------------------------


@dataclass(frozen=True)
class AuthResponse:
    success: bool
    token: str
    user: User

    @classmethod
    def from_dict(cls, data: Any) -> "AuthResponse":
        data = require_mapping(data, "AuthResponse")
        return cls(
            success=as_bool(data, "success"),
            token=require_str(data, "token", "AuthResponse"),
            user=User.from_dict(data.get("user")),
        )


@dataclass(frozen=True)
class SuccessResponse:
    success: bool
    message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "SuccessResponse":
        data = require_mapping(data, "SuccessResponse")
        return cls(success=as_bool(data, "success"), message=opt_str(data, "message"))


@dataclass(frozen=True)
class UserResponse:
    success: bool
    user: UserProfile

    @classmethod
    def from_dict(cls, data: Any) -> "UserResponse":
        data = require_mapping(data, "UserResponse")
        return cls(success=as_bool(data, "success"), user=UserProfile.from_dict(data.get("user")))


@dataclass(frozen=True)
class UpdateProfileResponse:
    success: bool
    user: User

    @classmethod
    def from_dict(cls, data: Any) -> "UpdateProfileResponse":
        data = require_mapping(data, "UpdateProfileResponse")
        return cls(success=as_bool(data, "success"), user=User.from_dict(data.get("user")))

