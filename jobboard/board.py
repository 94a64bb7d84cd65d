"""
Wire the job board client together.

settings → storage → clients → trackers → dashboard, with the application
tracker following the identity session.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from jobboard.aggregator import JobsDashboard
from jobboard.auth import AuthBridge, BackendAuthClient, IdentityProvider, LocalIdentityProvider
from jobboard.config import ensure_dirs, get_env, load_settings
from jobboard.contacts import ContactClient
from jobboard.fetcher import RemoteJobFetcher
from jobboard.log import get_logger
from jobboard.notifications import NotificationService
from jobboard.saved_jobs import SavedJobTracker
from jobboard.sources import ExternalJobsClient, InternalJobSource, get_internal_source
from jobboard.storage import LocalAppliedJobStore, LocalStorage, MemoryStorage
from jobboard.tracker import ApplicationTracker

log = get_logger(__name__)


@dataclass
class JobBoard:
    settings: dict[str, Any]
    storage: LocalStorage | MemoryStorage
    notifier: NotificationService
    external: ExternalJobsClient
    fetcher: RemoteJobFetcher
    saved_jobs: SavedJobTracker
    tracker: ApplicationTracker
    dashboard: JobsDashboard
    auth: AuthBridge
    contacts: ContactClient
    _unsubscribe: list[Callable[[], None]] = field(default_factory=list)

    def close(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe.clear()
        self.dashboard.close()


def build_board(
    settings: dict[str, Any] | None = None,
    storage: LocalStorage | MemoryStorage | None = None,
    identity: IdentityProvider | None = None,
    internal_source: InternalJobSource | None = None,
    session=None,
) -> JobBoard:
    settings = settings or load_settings()
    if storage is None:
        ensure_dirs()
        storage = LocalStorage()
    timeout = settings["request_timeout"]
    notifier = NotificationService()

    external = ExternalJobsClient(storage, settings["external_api_url"], timeout=timeout, session=session)
    fetcher = RemoteJobFetcher(external, page_size=settings.get("page_size"))
    saved = SavedJobTracker(external, notifier=notifier)
    tracker = ApplicationTracker(LocalAppliedJobStore(storage), notifier=notifier)
    dashboard = JobsDashboard(internal_source or get_internal_source(settings, get_env), fetcher)
    backend = BackendAuthClient(storage, settings["backend_url"], timeout=timeout, session=session)
    bridge = AuthBridge(identity or LocalIdentityProvider(), backend)
    contacts = ContactClient(settings["contact_url"], timeout=timeout, session=session)

    board = JobBoard(
        settings=settings,
        storage=storage,
        notifier=notifier,
        external=external,
        fetcher=fetcher,
        saved_jobs=saved,
        tracker=tracker,
        dashboard=dashboard,
        auth=bridge,
        contacts=contacts,
    )
    board._unsubscribe.append(bridge.subscribe(tracker.set_user))
    log.debug("Job board wired (external=%s, backend=%s)", settings["external_api_url"], settings["backend_url"])
    return board
