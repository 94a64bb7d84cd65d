"""Saved (bookmarked) external jobs for the session."""
from __future__ import annotations

import threading

from jobboard.log import get_logger
from jobboard.models import Result, SavedJob
from jobboard.notifications import NotificationService
from jobboard.sources.external import ExternalJobsClient

log = get_logger(__name__)


class SavedJobTracker:
    """Save / unsave / is-saved over the remote saved-jobs resource.

    Mutations never patch the local list; a successful save or removal is
    followed by a full re-fetch. Nothing here raises: outcomes are returned
    as ``Result``.
    """

    def __init__(
        self,
        client: ExternalJobsClient,
        notifier: NotificationService | None = None,
        autoload: bool = True,
    ) -> None:
        self.client = client
        self.notifier = notifier
        self.saved_jobs: list[SavedJob] = []
        self.loading = False
        self.error: str | None = None
        self._generation = 0
        self._lock = threading.Lock()
        if autoload and client.is_authenticated():
            self.refresh()

    def refresh(self) -> Result:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.loading = True
            self.error = None

        try:
            result = self.client.get_saved_jobs()

            with self._lock:
                if generation != self._generation:
                    log.debug("Dropping stale saved-jobs response")
                    return result
                if result.success and result.data is not None:
                    self.saved_jobs[:] = result.data.results
                    log.debug("Loaded %d saved job(s)", len(self.saved_jobs))
                else:
                    self.error = result.message or "Failed to fetch saved jobs"
        finally:
            with self._lock:
                if generation == self._generation:
                    self.loading = False
        return result

    def _notify(self, result: Result, failure_title: str) -> None:
        if not self.notifier:
            return
        if result.success:
            self.notifier.success(result.message or "Done")
        else:
            self.notifier.error(failure_title, result.message)

    def save(self, job_id: int) -> Result:
        if not self.client.is_authenticated():
            result = Result.fail("Please log in to the external job board to save jobs")
            self._notify(result, "Could not save job")
            return result

        result = self.client.save_job(job_id)
        if result.success:
            self.refresh()
        self._notify(result, "Could not save job")
        return result

    def remove(self, saved_job_id: int | str) -> Result:
        result = self.client.remove_saved_job(saved_job_id)
        if result.success:
            self.refresh()
        self._notify(result, "Could not remove saved job")
        return result

    def is_saved(self, job_id: int) -> bool:
        return any(s.job == job_id for s in self.saved_jobs)

    def saved_entry(self, job_id: int) -> SavedJob | None:
        return next((s for s in self.saved_jobs if s.job == job_id), None)
