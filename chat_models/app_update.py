"""App release metadata served by the backend version endpoint."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from chat_models._coerce import as_bool, as_int, opt_str, require_mapping, require_str


@dataclass(frozen=True)
class AppVersionResponse:
    success: bool
    version: str
    version_code: int
    release_notes: str
    download_url: str
    file_size: int
    published_date: str
    release_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "AppVersionResponse":
        data = require_mapping(data, "AppVersionResponse")
        success = as_bool(data, "success")
        if not success:
            # Soft failure envelopes omit the release fields.
            return cls(
                success=False,
                version=opt_str(data, "version", "") or "",
                version_code=as_int(data, "versionCode"),
                release_notes="",
                download_url="",
                file_size=0,
                published_date="",
            )
        return cls(
            success=True,
            version=require_str(data, "version", "AppVersionResponse"),
            version_code=as_int(data, "versionCode"),
            release_notes=opt_str(data, "releaseNotes", "") or "",
            download_url=require_str(data, "downloadUrl", "AppVersionResponse"),
            file_size=as_int(data, "fileSize"),
            published_date=opt_str(data, "publishedDate", "") or "",
            release_name=opt_str(data, "releaseName"),
        )


@dataclass(frozen=True)
class AppUpdateInfo:
    version: str
    version_code: int
    release_notes: str
    download_url: str
    file_size: int
    published_date: str
    release_name: Optional[str] = None
    is_update_available: bool = False

    @classmethod
    def from_response(cls, response: AppVersionResponse, *, is_update_available: bool) -> "AppUpdateInfo":
        return cls(
            version=response.version,
            version_code=response.version_code,
            release_notes=response.release_notes,
            download_url=response.download_url,
            file_size=response.file_size,
            published_date=response.published_date,
            release_name=response.release_name,
            is_update_available=is_update_available,
        )

    @property
    def file_name(self) -> str:
        return f"cycb-{self.version}.apk"
