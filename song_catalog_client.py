"""Song catalog API client.

This module defines a thin client wrapper around the Song Catalog REST
API (``song_catalog_api``).  The client uses the ``requests`` library
internally to make HTTP calls and exposes one method per operation:

* :meth:`register` – create an account and remember its credentials.
* :meth:`login` – authenticate and remember the returned credentials.
* :meth:`list_songs` – return the caller's songs.
* :meth:`get_song` – fetch a single song by its identifier.
* :meth:`create_song` / :meth:`update_song` / :meth:`delete_song`.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list) and
``error`` is a dictionary with keys ``status_code`` and ``message``.
Network failures are reported the same way and never raise.

After a successful register or login the client sends the token as
``Authorization: Bearer <token>`` and the account id in the caller id
header on every request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]
ApiResult = Tuple[Optional[Any], Optional[ApiError]]

DEFAULT_TIMEOUT = 15


class SongCatalogAPI:
    """Client for interacting with the song catalog API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        token: Optional[str] = None,
        user_id: Optional[str] = None,
        caller_id_header: str = "X-User-Id",
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            api_prefix: Path prefix of the versioned API.
            token: Optional token from an earlier login.
            user_id: Optional account id from an earlier login.
            caller_id_header: Header carrying the account id.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.token = token
        self.user_id = user_id
        self.caller_id_header = caller_id_header
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if self.user_id:
            headers[self.caller_id_header] = self.user_id
        return headers

    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> ApiResult:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/songs/``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _remember(self, data: Optional[Dict[str, Any]]) -> None:
        if not data:
            return
        self.token = data.get("token")
        account = data.get("account") or {}
        self.user_id = account.get("id")

    # ------------------------------------------------------------------
    # Account operations
    # ------------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> ApiResult:
        """Register an account.

        Returns:
            A tuple ``(auth, error)`` where ``auth`` holds ``account``
            and ``token``.
        """
        data, error = self._request(
            "POST", "/auth/register", json_body={"name": name, "email": email, "password": password}
        )
        if error:
            return None, error
        self._remember(data)
        return data, None

    def login(self, email: str, password: str) -> ApiResult:
        data, error = self._request("POST", "/auth/login", json_body={"email": email, "password": password})
        if error:
            return None, error
        self._remember(data)
        return data, None

    def logout(self) -> None:
        """Forget the stored credentials.  No request is made."""
        self.token = None
        self.user_id = None

    # ------------------------------------------------------------------
    # Song operations
    # ------------------------------------------------------------------
    def list_songs(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("GET", "/songs/")
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def get_song(self, song_id: str) -> ApiResult:
        return self._request("GET", f"/songs/{song_id}")

    def create_song(self, title: str, singer: str, year: int) -> ApiResult:
        return self._request("POST", "/songs/", json_body={"title": title, "singer": singer, "year": year})

    def update_song(self, song_id: str, title: str, singer: str, year: int) -> ApiResult:
        return self._request(
            "PUT", f"/songs/{song_id}", json_body={"title": title, "singer": singer, "year": year}
        )

    def delete_song(self, song_id: str) -> ApiResult:
        return self._request("DELETE", f"/songs/{song_id}")
