"""Voice call state and call-token records."""
from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from chat_models._coerce import as_bool, as_int, compact, opt_str, require_mapping, require_str


class InvalidCallTransition(ValueError):
    """Raised when a call would move back to an earlier status."""


class CallStatus(enum.Enum):
    IDLE = "idle"
    RINGING = "ringing"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ENDED = "ended"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)

    def can_advance_to(self, target: "CallStatus") -> bool:
        return target.rank > self.rank


_STATUS_ORDER = (
    CallStatus.IDLE,
    CallStatus.RINGING,
    CallStatus.CONNECTING,
    CallStatus.CONNECTED,
    CallStatus.ENDED,
)


@dataclass(frozen=True)
class CallParticipant:
    user_id: str
    username: str
    display_name: Optional[str] = None
    profile_picture: Optional[str] = None
    is_muted: bool = False
    is_speaking: bool = False
    # listener mode: joined without publishing audio
    is_listener: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "CallParticipant":
        data = require_mapping(data, "CallParticipant")
        return cls(
            user_id=require_str(data, "userId", "CallParticipant"),
            username=require_str(data, "username", "CallParticipant"),
            display_name=opt_str(data, "displayName"),
            profile_picture=opt_str(data, "profilePicture"),
            is_muted=as_bool(data, "isMuted"),
            is_speaking=as_bool(data, "isSpeaking"),
            is_listener=as_bool(data, "isListener"),
        )


@dataclass(frozen=True)
class VoiceCall:
    chat_id: str
    channel_name: str
    caller_id: str
    caller_name: str
    participants: Tuple[CallParticipant, ...] = field(default_factory=tuple)
    status: CallStatus = CallStatus.IDLE
    start_time: Optional[int] = None

    def advance(self, status: CallStatus, *, start_time: Optional[int] = None) -> "VoiceCall":
        """Return a copy moved forward to ``status``."""
        if not self.status.can_advance_to(status):
            raise InvalidCallTransition(f"Cannot move call {self.channel_name} from {self.status.value} to {status.value}")
        if status is CallStatus.CONNECTED and start_time is not None:
            return dataclasses.replace(self, status=status, start_time=start_time)
        return dataclasses.replace(self, status=status)

    def with_participant(self, participant: CallParticipant) -> "VoiceCall":
        others = tuple(p for p in self.participants if p.user_id != participant.user_id)
        return dataclasses.replace(self, participants=others + (participant,))

    def without_participant(self, user_id: str) -> "VoiceCall":
        return dataclasses.replace(self, participants=tuple(p for p in self.participants if p.user_id != user_id))

    def speakers(self) -> Tuple[CallParticipant, ...]:
        return tuple(p for p in self.participants if not p.is_listener)

    def elapsed_seconds(self, now_ms: int) -> int:
        if self.start_time is None or self.status is not CallStatus.CONNECTED:
            return 0
        return max(0, (now_ms - self.start_time) // 1000)


@dataclass(frozen=True)
class VoiceCallTokenRequest:
    channel_name: str
    uid: Optional[int] = None

    def to_payload(self) -> dict:
        return compact({"channelName": self.channel_name, "uid": self.uid})


@dataclass(frozen=True)
class VoiceCallToken:
    """Credentials issued by the backend for joining a voice channel."""

    token: str
    app_id: str
    channel_name: str
    uid: int
    expires_at: int

    @classmethod
    def from_dict(cls, data: Any) -> "VoiceCallToken":
        data = require_mapping(data, "VoiceCallToken")
        return cls(
            token=require_str(data, "token", "VoiceCallToken"),
            app_id=require_str(data, "appId", "VoiceCallToken"),
            channel_name=require_str(data, "channelName", "VoiceCallToken"),
            uid=as_int(data, "uid"),
            expires_at=as_int(data, "expiresAt"),
        )


@dataclass(frozen=True)
class CallStatusResponse:
    channel_name: str
    active: bool

    @classmethod
    def from_dict(cls, data: Any) -> "CallStatusResponse":
        data = require_mapping(data, "CallStatusResponse")
        return cls(
            channel_name=require_str(data, "channelName", "CallStatusResponse"),
            active=as_bool(data, "active"),
        )
