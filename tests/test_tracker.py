"""
Unit tests for the local application tracker.
"""

import json
from unittest.mock import MagicMock

import pytest

from jobboard.errors import AuthenticationError, DuplicateApplicationError, ValidationError
from jobboard.models import ApplicationStatus
from jobboard.notifications import NotificationService
from jobboard.tracker import ApplicationTracker


class TestApplyToJob:
    def test_apply_creates_applied_entry(self, tracker, job, user_a):
        application = tracker.apply_to_job(job, external_url="https://x.example/apply", notes="referral")

        assert len(tracker.applied_jobs) == 1
        assert application.application_status == ApplicationStatus.applied
        assert application.job_id == "job-1"
        assert application.user_id == user_a.uid
        assert application.external_url == "https://x.example/apply"
        assert application.notes == "referral"
        assert application.id.startswith("app_")
        assert application.applied_at.endswith("Z")

    def test_second_apply_to_same_job_is_duplicate(self, tracker, job):
        tracker.apply_to_job(job)

        with pytest.raises(DuplicateApplicationError) as exc_info:
            tracker.apply_to_job(job)

        assert "already marked this job as applied" in str(exc_info.value)
        assert len(tracker.applied_jobs) == 1

    def test_apply_without_user_fails(self, store, job):
        tracker = ApplicationTracker(store)

        with pytest.raises(AuthenticationError):
            tracker.apply_to_job(job)

    def test_apply_persists_under_user_key(self, tracker, job, storage):
        tracker.apply_to_job(job)

        stored = json.loads(storage.get_item("appliedJobs_user-a"))
        assert len(stored) == 1
        assert stored[0]["jobId"] == "job-1"
        assert stored[0]["applicationStatus"] == "applied"


class TestAddExternalApplication:
    def test_does_not_check_for_duplicates(self, tracker, job):
        first = tracker.add_external_application(job, "https://careers.example/1")
        second = tracker.add_external_application(job, "https://careers.example/1")

        assert len(tracker.applied_jobs) == 2
        assert first.id != second.id
        assert first.id.startswith("ext_")

    def test_external_entry_blocks_later_apply(self, tracker, job):
        tracker.add_external_application(job, "https://careers.example/1")

        with pytest.raises(DuplicateApplicationError):
            tracker.apply_to_job(job)

    def test_requires_user(self, store, job):
        with pytest.raises(AuthenticationError):
            ApplicationTracker(store).add_external_application(job, "https://careers.example/1")


class TestUpdateStatus:
    def test_only_status_changes(self, tracker, job, other_job):
        target = tracker.apply_to_job(job, notes="first")
        untouched = tracker.apply_to_job(other_job)

        tracker.update_application_status(target.id, "interviewed")

        matches = [a for a in tracker.applied_jobs if a.id == target.id]
        assert len(matches) == 1
        updated = matches[0]
        assert updated.application_status == ApplicationStatus.interviewed
        assert updated.applied_at == target.applied_at
        assert updated.notes == "first"
        assert updated.job == target.job
        assert tracker.get_application(untouched.id) == untouched

    def test_any_transition_is_allowed(self, tracker, job):
        application = tracker.apply_to_job(job)

        tracker.update_application_status(application.id, ApplicationStatus.accepted)
        tracker.update_application_status(application.id, ApplicationStatus.applied)

        assert tracker.get_application(application.id).application_status == ApplicationStatus.applied

    def test_unknown_id_is_noop(self, tracker, job):
        tracker.apply_to_job(job)
        before = list(tracker.applied_jobs)

        tracker.update_application_status("missing", "viewed")

        assert tracker.applied_jobs == before

    def test_unknown_status_rejected(self, tracker, job):
        application = tracker.apply_to_job(job)

        with pytest.raises(ValidationError):
            tracker.update_application_status(application.id, "ghosted")


class TestRemoveApplication:
    def test_remove_is_idempotent(self, tracker, job, other_job):
        application = tracker.apply_to_job(job)
        tracker.apply_to_job(other_job)

        tracker.remove_application(application.id)
        after_once = list(tracker.applied_jobs)
        tracker.remove_application(application.id)

        assert tracker.applied_jobs == after_once
        assert len(tracker.applied_jobs) == 1


class TestUserSwitching:
    def test_switch_shows_only_new_users_entries(self, store, user_a, user_b, job, other_job):
        tracker = ApplicationTracker(store)
        tracker.set_user(user_a)
        tracker.apply_to_job(job)

        tracker.set_user(user_b)
        assert tracker.applied_jobs == []
        tracker.apply_to_job(other_job)

        assert [a.job_id for a in tracker.applied_jobs] == ["job-2"]
        assert all(a.user_id == user_b.uid for a in tracker.applied_jobs)

        tracker.set_user(user_a)
        assert [a.job_id for a in tracker.applied_jobs] == ["job-1"]

    def test_sign_out_clears_list(self, tracker, job):
        tracker.apply_to_job(job)

        tracker.set_user(None)

        assert tracker.applied_jobs == []

    def test_live_list_is_shared(self, tracker, job):
        held = tracker.applied_jobs

        tracker.apply_to_job(job)
        tracker.set_user(None)

        assert held is tracker.applied_jobs
        assert held == []

    def test_store_failure_on_load_sets_error(self, user_a):
        store = MagicMock()
        store.get.side_effect = OSError("disk gone")
        tracker = ApplicationTracker(store)

        tracker.set_user(user_a)

        assert tracker.error == "Failed to load applied jobs"
        assert tracker.applied_jobs == []

    def test_corrupt_stored_slot_sets_error(self, storage, store, user_a):
        storage.set_item("appliedJobs_user-a", "{not json")
        tracker = ApplicationTracker(store)

        tracker.set_user(user_a)

        assert tracker.error == "Failed to load applied jobs"
        assert tracker.applied_jobs == []

    def test_switching_to_a_readable_user_clears_error(self, storage, store, user_a, user_b):
        storage.set_item("appliedJobs_user-a", "[{\"id\": 1}]")
        tracker = ApplicationTracker(store)
        tracker.set_user(user_a)

        tracker.set_user(user_b)

        assert tracker.error == ""

    def test_store_failure_on_save_propagates(self, user_a, job):
        store = MagicMock()
        store.get.return_value = []
        store.put.side_effect = OSError("read-only")
        tracker = ApplicationTracker(store)
        tracker.set_user(user_a)

        with pytest.raises(OSError):
            tracker.apply_to_job(job)

        assert tracker.applied_jobs == []
        assert tracker.error == "Failed to save applied jobs"


class TestScenario:
    def test_apply_update_remove(self, tracker, job):
        application = tracker.apply_to_job(job)
        assert len(tracker.applied_jobs) == 1
        assert tracker.applied_jobs[0].application_status == ApplicationStatus.applied

        tracker.update_application_status(application.id, "interviewed")
        assert len(tracker.applied_jobs) == 1
        assert tracker.applied_jobs[0].application_status == ApplicationStatus.interviewed

        tracker.remove_application(application.id)
        assert len(tracker.applied_jobs) == 0


class TestQueriesAndNotifications:
    def test_status_counts_cover_every_status(self, tracker, job, other_job):
        tracker.apply_to_job(job)
        second = tracker.apply_to_job(other_job)
        tracker.update_application_status(second.id, "rejected")

        assert tracker.status_counts() == {
            "applied": 1, "viewed": 0, "interviewed": 0, "accepted": 0, "rejected": 1,
        }
        assert tracker.applied_job_ids() == {"job-1", "job-2"}
        assert tracker.is_applied("job-1")

    def test_mutations_publish_notifications(self, store, user_a, job):
        notifier = NotificationService()
        received = []
        notifier.subscribe(received.append)
        tracker = ApplicationTracker(store, notifier=notifier)
        tracker.set_user(user_a)

        application = tracker.apply_to_job(job)
        tracker.remove_application(application.id)

        assert [n.type for n in received] == ["success", "success"]
        assert received[0].title == "Application tracked"
