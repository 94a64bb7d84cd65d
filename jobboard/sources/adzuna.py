"""Adzuna job search, used as the platform's internal job listing.

Free tier: 250 requests/day.  Sign up at https://developer.adzuna.com/
"""
from __future__ import annotations

import requests

from jobboard.log import get_logger
from jobboard.models import Job
from jobboard.sources.base import InternalJobSource

log = get_logger(__name__)

BASE_URL = "https://api.adzuna.com/v1/api/jobs/{country}/search"


class AdzunaSource(InternalJobSource):
    name = "adzuna"

    def __init__(
        self,
        app_id: str,
        app_key: str,
        country: str = "us",
        search: str = "developer",
        location: str = "New York",
        results_per_page: int = 10,
        total_pages: int = 5,
        timeout: float = 15,
        session: requests.Session | None = None,
    ) -> None:
        self.app_id = app_id
        self.app_key = app_key
        self.base_url = BASE_URL.format(country=country)
        self.search = search
        self.location = location
        self.results_per_page = results_per_page
        self.total_pages = total_pages
        self.timeout = timeout
        self.session = session or requests.Session()

    def _fetch_page(self, page: int) -> list[Job]:
        """One results page; any failure is logged and yields no jobs."""
        params: dict = {
            "app_id": self.app_id,
            "app_key": self.app_key,
            "what": self.search,
            "where": self.location,
            "results_per_page": self.results_per_page,
            "content-type": "application/json",
        }
        try:
            r = self.session.get(f"{self.base_url}/{page}", params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            log.error("Adzuna page %d error: %s", page, exc)
            return []
        if not r.ok:
            log.warning("Failed to fetch Adzuna page %d. Status: %d", page, r.status_code)
            return []
        try:
            data = r.json()
        except ValueError:
            log.warning("Invalid job data on Adzuna page %d", page)
            return []
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            log.warning("Invalid job data on Adzuna page %d", page)
            return []

        jobs: list[Job] = []
        for index, hit in enumerate(results):
            sal_min = hit.get("salary_min")
            sal_max = hit.get("salary_max")
            salary = f"${sal_min} - ${sal_max}" if sal_min and sal_max else "Not specified"
            jobs.append(
                Job(
                    id=str(hit.get("id") or f"{page}-{index}"),
                    title=hit.get("title") or "Untitled",
                    company=(hit.get("company") or {}).get("display_name") or "Unknown Company",
                    location=(hit.get("location") or {}).get("display_name") or "Remote",
                    type=hit.get("contract_time") or "Full-time",
                    experience_level=(hit.get("category") or {}).get("label") or "Not specified",
                    description=hit.get("description") or "",
                    apply_link=hit.get("redirect_url") or "",
                    salary=salary,
                    posted_at=hit.get("created") or "",
                    source="internal",
                    raw=hit,
                )
            )
        return jobs

    def fetch(self) -> list[Job]:
        jobs: list[Job] = []
        for page in range(1, self.total_pages + 1):
            batch = self._fetch_page(page)
            jobs.extend(batch)
            log.debug("Adzuna page=%d returned %d jobs", page, len(batch))
        log.info("Adzuna returned %d internal jobs", len(jobs))
        return jobs
