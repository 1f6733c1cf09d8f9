"""requests-based transport with bearer injection and exchange logging."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests
from requests.auth import AuthBase

from chat_api.config import ApiConfig
from chat_api.errors import AuthenticationError, DecodeError, HttpStatusError, TransportError
from chat_api.logging_utils import ROOT_LOGGER_NAME, redact_headers, redact_json_text
from chat_api.session import SessionContext, default_session

LOGGER = logging.getLogger(f"{ROOT_LOGGER_NAME}.Api")
_BODY_LOG_LIMIT = 4096


class BearerAuth(AuthBase):
    """Adds ``Authorization: Bearer <token>`` from the current session snapshot.

    With ``base_url`` set, only requests under that URL carry the token.
    """

    def __init__(self, session: SessionContext, base_url: Optional[str] = None) -> None:
        self._session = session
        self._prefix = base_url.rstrip("/") + "/" if base_url else None

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        if self._prefix is not None and not (request.url or "").startswith(self._prefix):
            return request
        token = self._session.snapshot().token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        return request


def _clip(text: str) -> str:
    if len(text) <= _BODY_LOG_LIMIT:
        return text
    return f"{text[:_BODY_LOG_LIMIT]}... ({len(text)} chars)"


def _describe_request_body(request: requests.PreparedRequest) -> str:
    body = request.body
    if body is None:
        return ""
    content_type = request.headers.get("Content-Type", "")
    if content_type.startswith("multipart/"):
        return f"<multipart {len(body)} bytes>"
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary {len(body)} bytes>"
    return _clip(redact_json_text(str(body)))


def _error_message(response: requests.Response) -> str:
    """Prefer the backend's ``error``/``message`` field over the reason phrase."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("error", "message"):
            value = data.get(key)
            if value:
                return str(value)
    return response.reason or "request failed"


class HttpClient:
    """Thin wrapper around one ``requests.Session``.

    No retries or backoff: every failure surfaces to the caller as a
    ``ChatApiError`` subclass.
    """

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        session: Optional[SessionContext] = None,
        *,
        http_session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config or ApiConfig.from_env()
        self._session = session or default_session()
        http = http_session or requests.Session()
        http.headers["User-Agent"] = self._config.user_agent
        http.headers.setdefault("Accept", "application/json")
        http.max_redirects = self._config.max_redirects
        http.auth = BearerAuth(self._session, self._config.base_url)
        http.hooks["response"].append(self._log_exchange)
        self._http = http

    @property
    def config(self) -> ApiConfig:
        return self._config

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def http_session(self) -> requests.Session:
        return self._http

    def close(self) -> None:
        self._http.close()

    # Requests ------------------------------------------------------------

    def request_raw(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        files: Optional[Mapping[str, Any]] = None,
        auth_required: bool = True,
        stream: bool = False,
        absolute_url: bool = False,
    ) -> requests.Response:
        """Send a request and return the response without status handling."""
        if auth_required and not self._session.snapshot().is_authenticated:
            raise AuthenticationError(401, f"{method} {path} requires a signed-in session")
        url = path if absolute_url else self._config.url_for(path)
        query = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            return self._http.request(
                method,
                url,
                params=query or None,
                json=json,
                files=files,
                timeout=self._config.timeout,
                stream=stream,
            )
        except requests.exceptions.RequestException as exc:
            LOGGER.warning("%s %s failed before a response arrived: %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    def request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body of a 2xx response."""
        response = self.request_raw(method, path, **kwargs)
        try:
            self.raise_for_status(response)
            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError as exc:
                raise DecodeError(f"{method} {path}: response is not valid JSON: {exc}") from exc
        finally:
            response.close()

    @staticmethod
    def raise_for_status(response: requests.Response) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return
        message = _error_message(response)
        body = response.text if response.content else None
        if status == 401:
            raise AuthenticationError(status, message, body=body)
        raise HttpStatusError(status, message, body=body)

    # Logging -------------------------------------------------------------

    def _log_exchange(self, response: requests.Response, *args: Any, **kwargs: Any) -> requests.Response:
        request = response.request
        status = response.status_code
        elapsed_ms = response.elapsed.total_seconds() * 1000.0 if response.elapsed else 0.0
        level = logging.WARNING if status >= 400 else logging.DEBUG
        LOGGER.log(
            level,
            "%s %s -> %s (%.0f ms) headers=%s",
            request.method,
            request.url,
            status,
            elapsed_ms,
            redact_headers(request.headers),
        )
        if not self._config.log_bodies:
            return response
        request_body = _describe_request_body(request)
        if request_body:
            LOGGER.debug("--> body %s", request_body)
        if kwargs.get("stream"):
            LOGGER.debug("<-- body <streamed>")
        else:
            LOGGER.debug("<-- body %s", _clip(redact_json_text(response.text)))
        return response
