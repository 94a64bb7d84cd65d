"""Merge internal and external jobs into one shuffled, filterable list."""
from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Callable

from jobboard.errors import ValidationError
from jobboard.fetcher import RemoteJobFetcher
from jobboard.log import get_logger
from jobboard.models import CombinedJob, ExternalJob, Job
from jobboard.sources.base import InternalJobSource

log = get_logger(__name__)

SOURCE_FILTERS = ("all", "internal", "external")

_JOB_TYPE_LABELS: dict[str, str] = {
    "FT": "Full-time",
    "PT": "Part-time",
    "CT": "Contract",
    "IN": "Internship",
    "FR": "Freelance",
    "full-time": "Full-time",
    "part-time": "Part-time",
    "contract": "Contract",
    "internship": "Internship",
}


def job_type_display(code: str | None) -> str:
    return _JOB_TYPE_LABELS.get(code or "") or code or "Not specified"


def combine_jobs(
    internal: Iterable[Job],
    external: Iterable[ExternalJob],
    rng: random.Random | None = None,
) -> list[CombinedJob]:
    combined = [
        CombinedJob(
            id=f"internal_{job.id}",
            title=job.title,
            company=job.company,
            location=job.location,
            salary=job.salary,
            type=job.type,
            source="internal",
            original=job,
        )
        for job in internal
    ]
    combined.extend(
        CombinedJob(
            id=f"external_{job.id}",
            title=job.title,
            company=job.company_name,
            location=job.location,
            salary=job.salary,
            type=job.job_type,
            source="external",
            original=job,
        )
        for job in external
    )
    (rng or random).shuffle(combined)
    return combined


def filter_by_source(jobs: Iterable[CombinedJob], source: str = "all") -> list[CombinedJob]:
    if source not in SOURCE_FILTERS:
        raise ValidationError(f"Unknown source filter {source!r}")
    if source == "all":
        return list(jobs)
    return [j for j in jobs if j.source == source]


def source_counts(jobs: Iterable[CombinedJob]) -> dict[str, int]:
    jobs = list(jobs)
    return {
        "all": len(jobs),
        "internal": sum(1 for j in jobs if j.source == "internal"),
        "external": sum(1 for j in jobs if j.source == "external"),
    }


class JobsDashboard:
    """Keeps ``combined`` in step with the internal list and the fetcher.

    The combined list is rebuilt (and reshuffled) whenever either input
    changes.
    """

    def __init__(
        self,
        internal_source: InternalJobSource,
        fetcher: RemoteJobFetcher,
        rng: random.Random | None = None,
    ) -> None:
        self.internal_source = internal_source
        self.fetcher = fetcher
        self.rng = rng
        self.internal_jobs: list[Job] = []
        self.combined: list[CombinedJob] = []
        self.loading = False
        self.error: str | None = None
        self._unsubscribe: Callable[[], None] = fetcher.subscribe(lambda _fetcher: self.recompute())

    def load(self) -> list[CombinedJob]:
        self.loading = True
        self.error = None
        try:
            self.internal_jobs = self.internal_source.fetch()
        except Exception as exc:
            self.error = "Failed to load internal jobs"
            log.error("Error loading internal jobs from %s: %s", self.internal_source.name, exc)
        finally:
            self.loading = False
        return self.recompute()

    def recompute(self) -> list[CombinedJob]:
        self.combined = combine_jobs(self.internal_jobs, self.fetcher.jobs, self.rng)
        log.debug("Combined %d internal + %d external jobs",
                  len(self.internal_jobs), len(self.fetcher.jobs))
        return self.combined

    def filtered(self, source: str = "all") -> list[CombinedJob]:
        return filter_by_source(self.combined, source)

    def counts(self) -> dict[str, int]:
        return source_counts(self.combined)

    def close(self) -> None:
        self._unsubscribe()
