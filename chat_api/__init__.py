"""HTTP client layer for the CYCB chat backend."""

from chat_api.api_service import ChatApiService
from chat_api.config import DEFAULT_BASE_URL, ApiConfig
from chat_api.errors import AuthenticationError, ChatApiError, DecodeError, HttpStatusError, TransportError
from chat_api.http_client import BearerAuth, HttpClient
from chat_api.session import SessionContext, SessionState, default_session
from chat_api.update_manager import Downloaded, Downloading, DownloadState, Error, UpdateManager

__all__ = [
    "ApiConfig",
    "AuthenticationError",
    "BearerAuth",
    "ChatApiError",
    "ChatApiService",
    "DEFAULT_BASE_URL",
    "DecodeError",
    "DownloadState",
    "Downloaded",
    "Downloading",
    "Error",
    "HttpClient",
    "HttpStatusError",
    "SessionContext",
    "SessionState",
    "TransportError",
    "UpdateManager",
    "default_session",
]
