"""
Unit tests for the toast notification service.
"""

import pytest

from jobboard.notifications import DEFAULT_DURATION_MS, NotificationService


class TestNotificationService:
    def test_subscribers_receive_published_notes(self):
        service = NotificationService()
        received = []
        service.subscribe(received.append)

        note = service.success("Saved", "Job saved successfully!")

        assert received == [note]
        assert note.type == "success"
        assert note.duration == DEFAULT_DURATION_MS
        assert note.id.startswith("toast_")

    def test_ids_are_unique(self):
        service = NotificationService()

        ids = {service.info("x").id for _ in range(5)}

        assert len(ids) == 5

    def test_unsubscribe(self):
        service = NotificationService()
        received = []
        unsubscribe = service.subscribe(received.append)

        unsubscribe()
        unsubscribe()
        service.warning("ignored")

        assert received == []

    def test_failing_subscriber_does_not_block_others(self):
        service = NotificationService()
        received = []

        def broken(_note):
            raise RuntimeError("render failed")

        service.subscribe(broken)
        service.subscribe(received.append)

        service.error("Oops", "details")

        assert [n.title for n in received] == ["Oops"]

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            NotificationService().publish("fatal", "nope")
