"""Client for the third-party job board REST API.

Docs: https://mysite-z2xs.onrender.com/api/docs/

The API uses Basic authentication. After a successful ``login`` the
base64 ``email:password`` pair is cached in local storage under
``external_api_credentials`` and sent with every later request.

Every public method returns a ``Result``; HTTP and network failures are
converted here and never raised to the caller.
"""
from __future__ import annotations

import base64
from typing import Any, Callable

import requests

from jobboard.errors import TransportError
from jobboard.log import get_logger
from jobboard.models import (
    ExternalApplication,
    ExternalCategory,
    ExternalJob,
    Page,
    Result,
    SavedJob,
)
from jobboard.storage import LocalStorage, MemoryStorage

log = get_logger(__name__)

CREDENTIALS_KEY = "external_api_credentials"
DEFAULT_BASE_URL = "https://mysite-z2xs.onrender.com/api"


def _item(data: Any, parse: Callable[[dict], Any], action: str) -> Any:
    if not isinstance(data, dict):
        raise TransportError(f"{action}: invalid response")
    try:
        return parse(data)
    except (AttributeError, KeyError, TypeError) as exc:
        raise TransportError(f"{action}: invalid response") from exc


def _page(data: Any, parse: Callable[[dict], Any], action: str) -> Page:
    """Parse a paginated envelope; anything malformed is a ``TransportError``."""
    results = data.get("results", []) if isinstance(data, dict) else None
    if not isinstance(results, list):
        raise TransportError(f"{action}: invalid response")
    return Page(
        count=data.get("count", 0),
        results=[_item(hit, parse, action) for hit in results],
        next=data.get("next"),
        previous=data.get("previous"),
    )


class ExternalJobsClient:
    def __init__(
        self,
        storage: LocalStorage | MemoryStorage,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15,
        session: requests.Session | None = None,
    ) -> None:
        self.storage = storage
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # -- plumbing ---------------------------------------------------------

    def _headers(self, authenticated: bool = True) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        credentials = self.storage.get_item(CREDENTIALS_KEY) if authenticated else None
        if credentials:
            headers["Authorization"] = f"Basic {credentials}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        action: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
        authenticated: bool = True,
        expect_body: bool = True,
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            r = self.session.request(
                method,
                url,
                params=params or None,
                json=json,
                headers=self._headers(authenticated),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(str(exc) or f"{action} failed") from exc
        if not 200 <= r.status_code < 300:
            raise TransportError(f"{action}: {r.status_code}", status_code=r.status_code)
        if not expect_body or r.status_code == 204 or not r.content:
            return None
        try:
            return r.json()
        except ValueError as exc:
            raise TransportError(f"{action}: invalid JSON response") from exc

    def _call(self, what: str, fn: Callable[[], Result]) -> Result:
        try:
            return fn()
        except TransportError as exc:
            log.error("Error %s: %s", what, exc)
            return Result.fail(str(exc))

    # -- jobs -------------------------------------------------------------

    def get_jobs(
        self,
        search: str | None = None,
        ordering: str | None = None,
        page: int | None = None,
        size: int | None = None,
    ) -> Result:
        params: dict[str, Any] = {}
        if search:
            params["search"] = search
        if ordering:
            params["ordering"] = ordering
        if page:
            params["page"] = page
        if size:
            params["size"] = size

        def go() -> Result:
            data = self._request("GET", "/jobs/", "Failed to fetch jobs", params=params)
            result = _page({} if data is None else data, ExternalJob.from_api, "Failed to fetch jobs")
            log.debug("External jobs page=%s returned %d of %d", page or 1, len(result.results), result.count)
            return Result.ok(result)

        return self._call("fetching external jobs", go)

    def get_job(self, job_id: int) -> Result:
        def go() -> Result:
            data = self._request("GET", f"/jobs/{job_id}/", "Failed to fetch job")
            return Result.ok(_item({} if data is None else data, ExternalJob.from_api, "Failed to fetch job"))

        return self._call("fetching job", go)

    def apply_to_job(self, job_id: int, cover_letter: str) -> Result:
        def go() -> Result:
            data = self._request(
                "POST", f"/jobs/{job_id}/apply/", "Failed to apply to job",
                json={"cover_letter": cover_letter},
            )
            application = _item({} if data is None else data, ExternalApplication.from_api, "Failed to apply to job")
            return Result.ok(application, "Application submitted successfully!")

        return self._call("applying to job", go)

    # -- categories -------------------------------------------------------

    def get_categories(self, page: int | None = None) -> Result:
        def go() -> Result:
            data = self._request(
                "GET", "/categories/", "Failed to fetch categories",
                params={"page": page} if page else None,
            )
            return Result.ok(_page({} if data is None else data, ExternalCategory.from_api, "Failed to fetch categories"))

        return self._call("fetching categories", go)

    # -- saved jobs -------------------------------------------------------

    def get_saved_jobs(self, page: int | None = None) -> Result:
        def go() -> Result:
            data = self._request(
                "GET", "/saved-jobs/", "Failed to fetch saved jobs",
                params={"page": page} if page else None,
            )
            return Result.ok(_page({} if data is None else data, SavedJob.from_api, "Failed to fetch saved jobs"))

        return self._call("fetching saved jobs", go)

    def save_job(self, job_id: int) -> Result:
        def go() -> Result:
            data = self._request("POST", "/saved-jobs/create/", "Failed to save job", json={"job": job_id})
            return Result.ok(_item({} if data is None else data, SavedJob.from_api, "Failed to save job"), "Job saved successfully!")

        return self._call("saving job", go)

    def remove_saved_job(self, saved_job_id: int | str) -> Result:
        def go() -> Result:
            self._request(
                "DELETE", f"/saved-jobs/{saved_job_id}/delete/", "Failed to remove saved job",
                expect_body=False,
            )
            return Result.ok(message="Job removed from saved list!")

        return self._call("removing saved job", go)

    # -- applications (recruiter view) ------------------------------------

    def get_applications(self, page: int | None = None) -> Result:
        def go() -> Result:
            data = self._request(
                "GET", "/applications/recruiter/", "Failed to fetch applications",
                params={"page": page} if page else None,
            )
            return Result.ok(_page({} if data is None else data, ExternalApplication.from_api, "Failed to fetch applications"))

        return self._call("fetching applications", go)

    # -- authentication ---------------------------------------------------

    def login(self, email: str, password: str) -> Result:
        def go() -> Result:
            data = self._request(
                "POST", "/users/login/", "Login failed",
                json={"email": email, "password": password},
                authenticated=False,
            )
            token = base64.b64encode(f"{email}:{password}".encode("utf-8")).decode("ascii")
            self.storage.set_item(CREDENTIALS_KEY, token)
            log.info("Logged in to external job board as %s", email)
            return Result.ok(data, "Logged in to external job board successfully!")

        return self._call("logging in to external API", go)

    def register(self, email: str, first_name: str, last_name: str, password: str, confirm_password: str) -> Result:
        payload = {
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "password": password,
            "confirm_password": confirm_password,
        }

        def go() -> Result:
            data = self._request("POST", "/users/register/", "Registration failed", json=payload, authenticated=False)
            return Result.ok(data, "Registered with external job board successfully!")

        return self._call("registering with external API", go)

    def logout(self) -> Result:
        try:
            self._request("POST", "/users/logout/", "Logout failed", expect_body=False)
            message = "Logged out from external job board successfully!"
        except TransportError as exc:
            log.warning("External API logout error: %s", exc)
            message = "Logged out from external job board"
        self.storage.remove_item(CREDENTIALS_KEY)
        return Result.ok(message=message)

    def is_authenticated(self) -> bool:
        return bool(self.storage.get_item(CREDENTIALS_KEY))
