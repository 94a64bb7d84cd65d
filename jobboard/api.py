"""Shared plumbing for the platform's own REST backend.

Every backend response is a ``{success, message, data, error}`` envelope.
Calls return that envelope as a ``Result``; network failures and non-JSON
error pages become failed results instead of exceptions.
"""
from __future__ import annotations

from typing import Any

import requests

from jobboard.errors import TransportError
from jobboard.log import get_logger
from jobboard.models import Result

log = get_logger(__name__)


class BackendApi:
    def __init__(self, base_url: str, timeout: float = 15, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
    ) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            return self.session.request(
                method,
                url,
                json=json,
                params=params or None,
                headers=self.headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.error("%s %s failed: %s", method, path, exc)
            raise TransportError(str(exc) or f"{method} {path} failed") from exc

    def _to_result(self, method: str, path: str, r: requests.Response) -> Result:
        try:
            body: Any = r.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            if r.ok:
                return Result.ok(body)
            log.error("%s %s returned %d", method, path, r.status_code)
            return Result.fail(f"Server error: {r.status_code} - {r.text[:200]}")

        result = Result.from_envelope(body)
        if not r.ok and result.success:
            # envelope claims success on an error status
            result = Result.fail(result.message or f"Server error: {r.status_code}", error=result.error)
        if not result.success:
            log.warning("%s %s → %d: %s", method, path, r.status_code, result.message)
        return result

    def send(
        self,
        method: str,
        path: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
        network_message: str = "Network error. Please check your connection and try again.",
        not_found_message: str | None = None,
    ) -> Result:
        """Call the backend; ``not_found_message`` replaces whatever a 404 carried."""
        try:
            r = self._request(method, path, json=json, params=params)
        except TransportError as exc:
            return Result.fail(network_message, error=str(exc))
        if not_found_message and r.status_code == 404:
            log.warning("%s %s → 404", method, path)
            return Result.fail(not_found_message)
        return self._to_result(method, path, r)
