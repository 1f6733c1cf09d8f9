from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from chat_models._coerce import as_bool, opt_int, opt_str, require_mapping, require_str
from chat_models.user import User


@dataclass(frozen=True)
class ImageUploadResponse:
    success: bool
    url: str
    message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ImageUploadResponse":
        data = require_mapping(data, "ImageUploadResponse")
        return cls(
            success=as_bool(data, "success"),
            url=require_str(data, "url", "ImageUploadResponse"),
            message=opt_str(data, "message"),
        )


@dataclass(frozen=True)
class ProfilePictureResponse:
    success: bool
    url: str
    user: User

    @classmethod
    def from_dict(cls, data: Any) -> "ProfilePictureResponse":
        data = require_mapping(data, "ProfilePictureResponse")
        return cls(
            success=as_bool(data, "success"),
            url=require_str(data, "url", "ProfilePictureResponse"),
            user=User.from_dict(data.get("user")),
        )


@dataclass(frozen=True)
class AudioUploadResponse:
    success: bool
    url: str
    message: Optional[str] = None
    duration: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "AudioUploadResponse":
        data = require_mapping(data, "AudioUploadResponse")
        return cls(
            success=as_bool(data, "success"),
            url=require_str(data, "url", "AudioUploadResponse"),
            message=opt_str(data, "message"),
            duration=opt_int(data, "duration"),
        )
