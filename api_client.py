import logging
from dataclasses import dataclass, field
from typing import Callable

import requests

from errors import ApiError, AuthError, NetworkError
from records import normalize_records
from schemas import (
    BirthdayPerson,
    BirthdayResponse,
    LoginResponse,
    ResumeRecord,
    StatsResponse,
    UploadResponse,
    VerifyResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
HEALTH_TIMEOUT = 3
UPLOAD_TIMEOUT = 120
DOWNLOAD_TIMEOUT = 60

LOGIN_FALLBACK = "Login failed. Please check your credentials and try again."
SESSION_EXPIRED = "Session expired. Please log in again."


def _error_message(resp: requests.Response, fallback: str) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        msg = payload.get("error") or payload.get("message")
        if msg:
            return str(msg)
    return fallback


@dataclass
class DashboardAPI:
    """Thin client for the résumé server's REST endpoints."""

    base_url: str
    token_provider: Callable[[], str | None] = lambda: None
    on_unauthorized: Callable[[], None] | None = None
    session: requests.Session = field(default_factory=requests.Session)

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/api{path}"

    def _headers(self, auth: bool) -> dict:
        if not auth:
            return {}
        token = self.token_provider()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _request(self, method: str, path: str, *, auth: bool = True, fallback: str = "Request failed",
                 timeout: float = DEFAULT_TIMEOUT, **kwargs) -> requests.Response:
        headers = {**self._headers(auth), **kwargs.pop("headers", {})}
        try:
            resp = self.session.request(method, self.url(path), headers=headers, timeout=timeout, **kwargs)
        except requests.Timeout as exc:
            logger.warning("[api] %s %s timed out: %s", method, path, exc)
            raise NetworkError("Request timed out. Please try again.") from exc
        except requests.RequestException as exc:
            logger.warning("[api] %s %s failed: %s", method, path, exc)
            raise NetworkError("Network error. Please check your connection and try again.") from exc

        if resp.status_code == 401 and auth:
            logger.info("[api] %s %s returned 401; clearing session", method, path)
            if self.on_unauthorized:
                self.on_unauthorized()
            raise AuthError(_error_message(resp, SESSION_EXPIRED), status=401)
        if not resp.ok:
            raise ApiError(_error_message(resp, fallback), status=resp.status_code)
        return resp

    @staticmethod
    def _json(resp: requests.Response, fallback: str):
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(fallback, status=resp.status_code) from exc

    # --- connectivity / auth ---

    def health(self) -> bool:
        try:
            resp = self.session.get(self.url("/health"), timeout=HEALTH_TIMEOUT)
        except requests.RequestException as exc:
            logger.debug("[api] health check failed: %s", exc)
            return False
        return resp.status_code == 200

    def verify(self, token: str) -> VerifyResponse:
        try:
            resp = self.session.get(
                self.url("/auth/verify"),
                headers={"Authorization": f"Bearer {token}"},
                timeout=DEFAULT_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise NetworkError("Network error. Please check your connection and try again.") from exc
        if resp.status_code == 401:
            raise AuthError(_error_message(resp, SESSION_EXPIRED), status=401)
        if not resp.ok:
            raise ApiError(_error_message(resp, "Token verification failed"), status=resp.status_code)
        return VerifyResponse.model_validate(self._json(resp, "Token verification failed") or {})

    def login(self, username: str, password: str) -> LoginResponse:
        try:
            resp = self.session.post(
                self.url("/auth/login"),
                json={"username": username, "password": password},
                timeout=DEFAULT_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise NetworkError("Network error. Please check your connection and try again.") from exc
        if not resp.ok:
            raise AuthError(_error_message(resp, LOGIN_FALLBACK), status=resp.status_code)
        payload = self._json(resp, LOGIN_FALLBACK)
        if not isinstance(payload, dict) or not payload.get("token"):
            raise AuthError(LOGIN_FALLBACK)
        return LoginResponse.model_validate(payload)

    def mailbox_connect_url(self) -> str:
        return self.url("/outlook-auth/login")

    # --- records ---

    def list_records(self) -> list[ResumeRecord]:
        resp = self._request("GET", "/resumes", fallback="Failed to fetch resumes")
        payload = self._json(resp, "Failed to fetch resumes")
        return normalize_records(payload if isinstance(payload, list) else [])

    def record_stats(self) -> StatsResponse:
        resp = self._request("GET", "/resumes/stats/count", fallback="Failed to fetch stats")
        return StatsResponse.model_validate(self._json(resp, "Failed to fetch stats") or {})

    def delete_record(self, record_id: str) -> None:
        self._request("DELETE", f"/resumes/{record_id}", fallback="Failed to delete resume")

    def add_from_url(self, url: str) -> dict:
        resp = self._request(
            "POST", "/resumes/add-from-url", json={"url": url}, fallback="Failed to add resume from URL"
        )
        try:
            return resp.json()
        except ValueError:
            return {}

    def update_details(self, record_id: str, details: dict) -> None:
        self._request(
            "PUT", f"/resumes/{record_id}/details", json=details, fallback="Failed to update resume details"
        )

    def upload(self, files: list[tuple[str, bytes]]) -> UploadResponse:
        multipart = [("resumes", (name, content, "application/pdf")) for name, content in files]
        resp = self._request(
            "POST", "/resumes/upload", files=multipart, timeout=UPLOAD_TIMEOUT,
            fallback="Failed to upload resumes. Please try again.",
        )
        return UploadResponse.model_validate(self._json(resp, "Failed to upload resumes. Please try again.") or {})

    def download(self, record_id: str) -> bytes:
        try:
            resp = self.session.get(
                self.url(f"/resumes/download/{record_id}"),
                headers=self._headers(True),
                timeout=DOWNLOAD_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise NetworkError("Network error. Please check your connection and try again.") from exc
        if resp.status_code == 401:
            if self.on_unauthorized:
                self.on_unauthorized()
            raise AuthError(SESSION_EXPIRED, status=401)
        if not resp.ok:
            raise ApiError(
                _error_message(resp, f"HTTP {resp.status_code}: {resp.reason}"), status=resp.status_code
            )
        if not resp.content:
            raise ApiError("Downloaded file is empty")
        logger.info("[api] downloaded resume %s (%d bytes)", record_id, len(resp.content))
        return resp.content

    def birthdays_today(self) -> list[BirthdayPerson]:
        resp = self._request("GET", "/notifications/birthdays/today", fallback="Failed to fetch birthdays")
        return BirthdayResponse.model_validate(self._json(resp, "Failed to fetch birthdays") or {}).birthdays
