"""Track the jobs a signed-in user has applied to, per user, in local storage."""
from __future__ import annotations

import time
import uuid
from collections import Counter
from dataclasses import replace
from datetime import datetime, timezone

from jobboard.errors import AuthenticationError, DuplicateApplicationError, ValidationError
from jobboard.log import get_logger
from jobboard.models import AppliedJob, ApplicationStatus, IdentityUser, Job
from jobboard.notifications import NotificationService
from jobboard.storage import AppliedJobStore

log = get_logger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _coerce_status(status: ApplicationStatus | str) -> ApplicationStatus:
    try:
        return ApplicationStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationError(f"Unknown application status {status!r} (expected one of: {allowed})") from None


class ApplicationTracker:
    """Client-local applied-job records for whoever is signed in.

    ``applied_jobs`` is the live list: it is the same list object for the
    tracker's lifetime and every mutation is visible to anyone holding it.
    Each mutation is written through to the store immediately.
    """

    def __init__(self, store: AppliedJobStore, notifier: NotificationService | None = None) -> None:
        self.store = store
        self.notifier = notifier
        self.user: IdentityUser | None = None
        self.applied_jobs: list[AppliedJob] = []
        self.loading = False
        self.error = ""

    # -- session ----------------------------------------------------------

    def set_user(self, user: IdentityUser | None) -> None:
        """Switch to ``user``'s records, or clear them when signed out."""
        self.user = user
        self.error = ""
        if user is None:
            self.applied_jobs.clear()
            return
        self.loading = True
        try:
            self.applied_jobs[:] = self.store.get(user.uid)
            log.debug("Loaded %d applied job(s) for %s", len(self.applied_jobs), user.uid)
        except Exception as exc:
            self.error = "Failed to load applied jobs"
            log.error("Error loading applied jobs for %s: %s", user.uid, exc)
            self.applied_jobs.clear()
        finally:
            self.loading = False

    def _require_user(self, action: str) -> IdentityUser:
        if self.user is None:
            raise AuthenticationError(f"User must be logged in to {action}")
        return self.user

    def _save(self, jobs: list[AppliedJob]) -> None:
        user = self._require_user("track job applications")
        try:
            self.store.put(user.uid, jobs)
        except Exception as exc:
            self.error = "Failed to save applied jobs"
            log.error("Error saving applied jobs for %s: %s", user.uid, exc)
            raise
        self.applied_jobs[:] = jobs

    def _unique_id(self, prefix: str) -> str:
        taken = {a.id for a in self.applied_jobs}
        new_id = _new_id(prefix)
        while new_id in taken:
            new_id = _new_id(prefix)
        return new_id

    def _create(self, prefix: str, job: Job, external_url: str | None, notes: str | None) -> AppliedJob:
        user = self._require_user("track job applications")
        application = AppliedJob(
            id=self._unique_id(prefix),
            job_id=str(job.id),
            user_id=user.uid,
            job=job,
            applied_at=_now_iso(),
            application_status=ApplicationStatus.applied,
            external_url=external_url,
            notes=notes,
        )
        self._save([*self.applied_jobs, application])
        log.debug("Tracked: %s @ %s [%s]", job.title, job.company, application.id)
        return application

    # -- mutations --------------------------------------------------------

    def apply_to_job(self, job: Job, external_url: str | None = None, notes: str | None = None) -> AppliedJob:
        self._require_user("track job applications")
        if self.is_applied(job.id):
            self.error = "You have already marked this job as applied"
            raise DuplicateApplicationError(str(job.id))
        application = self._create("app", job, external_url, notes)
        if self.notifier:
            self.notifier.success("Application tracked", f"{job.title} at {job.company}")
        return application

    def add_external_application(self, job: Job, external_url: str, notes: str | None = None) -> AppliedJob:
        """Record an application made elsewhere; unlike ``apply_to_job`` this
        does not check for an existing entry for the same job."""
        self._require_user("add applications")
        application = self._create("ext", job, external_url, notes)
        if self.notifier:
            self.notifier.success("External application added", job.title)
        return application

    def update_application_status(self, application_id: str, status: ApplicationStatus | str) -> None:
        new_status = _coerce_status(status)
        updated: list[AppliedJob] = []
        changed = False
        for application in self.applied_jobs:
            if application.id == application_id:
                application = replace(application, application_status=new_status)
                changed = True
            updated.append(application)
        if not changed:
            log.debug("No application %s to update", application_id)
            return
        self._save(updated)
        log.debug("Updated %s → %s", application_id, new_status.value)
        if self.notifier:
            self.notifier.info("Status updated", new_status.value.capitalize())

    def remove_application(self, application_id: str) -> None:
        updated = [a for a in self.applied_jobs if a.id != application_id]
        if len(updated) == len(self.applied_jobs):
            log.debug("No application %s to remove", application_id)
            return
        self._save(updated)
        log.debug("Removed application %s", application_id)
        if self.notifier:
            self.notifier.success("Application removed")

    # -- queries ----------------------------------------------------------

    def get_application(self, application_id: str) -> AppliedJob | None:
        return next((a for a in self.applied_jobs if a.id == application_id), None)

    def is_applied(self, job_id: str) -> bool:
        job_id = str(job_id)
        return any(a.job_id == job_id for a in self.applied_jobs)

    def applied_job_ids(self) -> set[str]:
        return {a.job_id for a in self.applied_jobs}

    def status_counts(self) -> dict[str, int]:
        counts = Counter(a.application_status.value for a in self.applied_jobs)
        return {s.value: counts.get(s.value, 0) for s in ApplicationStatus}
