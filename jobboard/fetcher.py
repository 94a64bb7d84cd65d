"""Paginated holder for external job board listings (search, load more, refresh)."""
from __future__ import annotations

import threading
from typing import Callable

from jobboard.log import get_logger
from jobboard.models import ExternalJob, Page, Result
from jobboard.sources.external import ExternalJobsClient

log = get_logger(__name__)

Listener = Callable[["RemoteJobFetcher"], None]


class RemoteJobFetcher:
    """Holds the external job list and its pagination state.

    Page 1 (or ``reset=True``) replaces the list, any later page appends to
    it. A failed request only sets ``error``; the jobs already held stay.
    Every fetch takes a generation number and a response that arrives after
    a newer fetch was issued is dropped, so an old search can never
    overwrite the results of a newer one.
    """

    def __init__(self, client: ExternalJobsClient, page_size: int | None = None) -> None:
        self.client = client
        self.page_size = page_size
        self.jobs: list[ExternalJob] = []
        self.loading = False
        self.error: str | None = None
        self.total_count = 0
        self.has_more = False
        self.current_page = 1
        self.search: str | None = None
        self.ordering: str | None = None
        self._generation = 0
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def fetch(
        self,
        search: str | None = None,
        ordering: str | None = None,
        page: int | None = None,
        size: int | None = None,
        reset: bool = False,
    ) -> Result:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.loading = True
            self.error = None

        try:
            result = self.client.get_jobs(
                search=search,
                ordering=ordering,
                page=page,
                size=size or self.page_size,
            )

            with self._lock:
                if generation != self._generation:
                    log.debug("Dropping stale jobs response (generation %d < %d)", generation, self._generation)
                    return result

                if result.success and result.data is not None:
                    data: Page = result.data
                    if reset or page == 1:
                        self.jobs[:] = data.results
                    else:
                        self.jobs.extend(data.results)
                    self.total_count = data.count
                    self.has_more = data.has_next
                    self.current_page = page or 1
                else:
                    self.error = result.message or "Failed to fetch jobs"
                    log.warning("External jobs fetch failed: %s", self.error)
        finally:
            # a newer fetch owns the flag
            with self._lock:
                if generation == self._generation:
                    self.loading = False

        self._emit()
        return result

    def search_jobs(self, term: str) -> Result:
        self.search = term or None
        return self.fetch(search=self.search, ordering=self.ordering, page=1, reset=True)

    def load_more(self) -> Result | None:
        """Fetch the next page of the current query; None if there is nothing to load."""
        if not self.has_more or self.loading:
            return None
        return self.fetch(search=self.search, ordering=self.ordering, page=self.current_page + 1)

    def refresh(self) -> Result:
        return self.fetch(search=self.search, ordering=self.ordering, page=1, reset=True)
