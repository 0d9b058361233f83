"""Lesson Booking API client.

A thin wrapper around the storefront REST API for scripts, admin
tools and integration checks.  The client uses the ``requests``
library internally.  Every method returns a ``(data, error)`` tuple:
on success ``error`` is ``None``; on failure ``data`` is ``None`` (or
an empty list for listings) and ``error`` is a dictionary with the
keys ``status_code``, ``code`` and ``message``.

Example::

    client = LessonBookingClient(base_url="http://localhost:3000")
    lessons, error = client.list_lessons()
    result, error = client.submit_order("Jane Doe", "5551234", [{"id": "Art-Hen-70", "qty": 2}])
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class LessonBookingClient:
    """Client for interacting with the lesson booking API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3000``.
            prefix: Route prefix the server was started with (``API_PREFIX``).
            timeout: Seconds to wait for each response.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/") + prefix.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``).
            path: Path relative to :attr:`base_url` (e.g. ``/lessons``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            error = self._error_from_response(exc.response)
            logger.error("API request failed (%s): %s", error["status_code"], error["message"])
            return None, error
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "code": None, "message": str(exc)}

    @staticmethod
    def _error_from_response(response: Optional[requests.Response]) -> Error:
        if response is None:
            return {"status_code": None, "code": None, "message": "No response"}
        code = None
        try:
            body = response.json()
        except ValueError:
            return {"status_code": response.status_code, "code": None, "message": response.text}
        detail = body.get("detail", body) if isinstance(body, dict) else body
        if isinstance(detail, dict):
            # Domain errors carry {"error": CODE, "message": text}; /health only {"error": text}.
            if "message" in detail:
                code = detail.get("error")
            message = detail.get("message") or detail.get("error") or str(detail)
        else:
            message = str(detail)
        return {"status_code": response.status_code, "code": code, "message": message}

    # ------------------------------------------------------------------
    # Lessons
    # ------------------------------------------------------------------
    def list_lessons(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/lessons")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def search_lessons(self, query: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/search", params={"query": query})
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_lesson(self, lesson_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/lessons/{quote(lesson_id, safe='')}")

    def update_lesson(self, lesson_id: str, fields: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Change topic, location, price or space of a lesson."""
        return self._request("PUT", f"/lessons/{quote(lesson_id, safe='')}", json_body=fields)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def submit_order(
        self, name: str, phone: str, items: List[Dict[str, Any]]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Place an order.  ``items`` is a list of ``{"id": ..., "qty": ...}``."""
        payload = {"name": name, "phone": phone, "items": items}
        return self._request("POST", "/orders", json_body=payload)

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------
    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/health")
