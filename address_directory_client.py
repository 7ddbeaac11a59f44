"""Address Directory API client.

A thin wrapper around the ``/api/addresses`` REST surface built on the
``requests`` library.  It is meant for scripts and other services that
need to read or maintain the directory without speaking HTTP
themselves.

Every method returns a tuple ``(result, error)``.  On success
``error`` is ``None``; on failure ``result`` is empty (``None``,
``[]`` or ``False``) and ``error`` is a dictionary with the keys
``status_code`` and ``message``.  The message is taken from the
``message`` (or ``detail``) field of the server's JSON error body
when there is one, and validation failures also carry ``errors``.

Example::

    client = AddressDirectoryClient(base_url="http://localhost:8000")
    record, error = client.create_address({"name": "Jane Doe", "city": "Chicago"})
    matches, error = client.search("chicago")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Error = Dict[str, Any]


class AddressDirectoryClient:
    """Client for the address directory HTTP API."""

    BASE_PATH = "/api/addresses"

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.
            api_key: Optional token sent as ``Authorization: Bearer <api_key>``
                for deployments behind an authenticating proxy.
            session: Optional requests session.  One is created if omitted.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request against ``BASE_PATH + path``.

        Returns ``(data, None)`` with the decoded JSON body (``None``
        for empty bodies) or ``(None, error)``.
        """
        url = f"{self.base_url}{self.BASE_PATH}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            return None, self._http_error(exc)
        except requests.RequestException as exc:
            logger.error("Address API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _http_error(exc: requests.HTTPError) -> Error:
        response = exc.response
        status = response.status_code if response is not None else None
        error: Error = {"status_code": status, "message": ""}
        if response is not None:
            try:
                body = response.json()
            except ValueError:
                error["message"] = response.text
            else:
                if isinstance(body, dict):
                    error["message"] = body.get("message") or body.get("detail") or str(body)
                    if "errors" in body:
                        error["errors"] = body["errors"]
                else:
                    error["message"] = str(body)
        if not error["message"]:
            error["message"] = str(exc)
        logger.error("Address API request failed (%s): %s", status, error["message"])
        return error

    def _list(self, path: str, params: Dict[str, Any] | None = None) -> Tuple[List[Record], Optional[Error]]:
        data, error = self._request("GET", path, params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def list_addresses(self) -> Tuple[List[Record], Optional[Error]]:
        return self._list("")

    def get_address(self, record_id: int) -> Tuple[Optional[Record], Optional[Error]]:
        return self._request("GET", f"/{record_id}")

    def create_address(self, payload: Record) -> Tuple[Optional[Record], Optional[Error]]:
        """Create a record.  ``payload`` uses the wire field names (``zipCode``)."""
        return self._request("POST", "", json_body=payload)

    def update_address(self, record_id: int, payload: Record) -> Tuple[Optional[Record], Optional[Error]]:
        """Replace every mutable field of ``record_id`` with ``payload``."""
        return self._request("PUT", f"/{record_id}", json_body=payload)

    def delete_address(self, record_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/{record_id}")
        if error:
            return False, error
        return True, None

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def search(self, keyword: Optional[str] = None) -> Tuple[List[Record], Optional[Error]]:
        params = {"q": keyword} if keyword is not None else None
        return self._list("/search", params)

    def search_by_name(self, name: str) -> Tuple[List[Record], Optional[Error]]:
        return self._list("/search/name", {"name": name})

    def search_by_city(self, city: str) -> Tuple[List[Record], Optional[Error]]:
        return self._list("/search/city", {"city": city})

    def search_by_email(self, email: str) -> Tuple[List[Record], Optional[Error]]:
        return self._list("/search/email", {"email": email})
