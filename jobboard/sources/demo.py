"""Seed dataset of internal demo jobs, used when no Adzuna key is configured."""
from __future__ import annotations

from jobboard.log import get_logger
from jobboard.models import Job
from jobboard.sources.base import InternalJobSource

log = get_logger(__name__)

DEMO_JOBS: tuple[dict, ...] = (
    {
        "id": "job-1",
        "title": "Frontend Developer",
        "company": "Brightwave Labs",
        "location": "New York, NY",
        "type": "full-time",
        "experience_level": "Mid level",
        "salary": "$95,000 - $120,000",
        "description": "Build accessible React interfaces for our hiring platform.",
        "apply_link": "https://example.com/jobs/1",
        "posted_at": "2024-05-02",
    },
    {
        "id": "job-2",
        "title": "Backend Engineer",
        "company": "Northwind Data",
        "location": "Remote",
        "type": "full-time",
        "experience_level": "Senior",
        "salary": "$130,000 - $155,000",
        "description": "Own REST services and MySQL schemas behind the job feed.",
        "apply_link": "https://example.com/jobs/2",
        "posted_at": "2024-05-04",
    },
    {
        "id": "job-3",
        "title": "UX Designer",
        "company": "Opportuna",
        "location": "Brooklyn, NY",
        "type": "contract",
        "experience_level": "Mid level",
        "salary": "$60 - $75 / hour",
        "description": "Design candidate flows from search to application tracking.",
        "apply_link": "https://example.com/jobs/3",
        "posted_at": "2024-05-06",
    },
    {
        "id": "job-4",
        "title": "QA Intern",
        "company": "Castle Rock Software",
        "location": "Jersey City, NJ",
        "type": "internship",
        "experience_level": "Entry level",
        "salary": "Not specified",
        "description": "Write automated tests for web and mobile releases.",
        "apply_link": "https://example.com/jobs/4",
        "posted_at": "2024-05-07",
    },
    {
        "id": "job-5",
        "title": "Part-time Technical Writer",
        "company": "Lumen Docs",
        "location": "Remote",
        "type": "part-time",
        "experience_level": "Mid level",
        "salary": "$40 / hour",
        "description": "Document public APIs and onboarding guides.",
        "apply_link": "https://example.com/jobs/5",
        "posted_at": "2024-05-09",
    },
)


class DemoSource(InternalJobSource):
    name = "demo"

    def fetch(self) -> list[Job]:
        log.info("DemoSource serving %d seed jobs", len(DEMO_JOBS))
        return [Job(source="internal", **item) for item in DEMO_JOBS]
