"""Contact form submissions and the admin view over them."""
from __future__ import annotations

import requests

from jobboard.api import BackendApi
from jobboard.errors import ValidationError
from jobboard.log import get_logger
from jobboard.models import Contact, Result
from jobboard.validation import require_email, require_length

log = get_logger(__name__)

CONTACT_STATUSES = ("unread", "read", "replied")
NOT_FOUND = "Contact not found"


class ContactClient(BackendApi):
    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        timeout: float = 15,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(base_url, timeout=timeout, session=session)

    def submit(self, name: str, email: str, subject: str, message: str) -> Result:
        payload = {
            "name": require_length("Name", name, 2, 255),
            "email": require_email(email),
            "subject": require_length("Subject", subject, 5, 500),
            "message": require_length("Message", message, 10, 5000),
        }
        result = self.send(
            "POST", "/contacts", json=payload,
            network_message="Failed to send message. Please check your connection and try again.",
        )
        if result.success:
            log.info("Contact message from %s submitted", payload["email"])
        return result

    def list(self, page: int = 1, limit: int = 10, status: str | None = None) -> Result:
        params: dict = {"page": page, "limit": limit}
        if status:
            params["status"] = self._check_status(status)
        return self.send("GET", "/contacts", params=params)

    def get(self, contact_id: int) -> Result:
        result = self.send("GET", f"/contacts/{contact_id}", not_found_message=NOT_FOUND)
        if result.success and isinstance(result.data, dict):
            result.data = Contact.from_dict(result.data)
        return result

    def update_status(self, contact_id: int, status: str) -> Result:
        return self.send(
            "PATCH", f"/contacts/{contact_id}/status",
            json={"status": self._check_status(status)},
            not_found_message=NOT_FOUND,
        )

    def delete(self, contact_id: int) -> Result:
        return self.send("DELETE", f"/contacts/{contact_id}", not_found_message=NOT_FOUND)

    def stats(self) -> Result:
        return self.send("GET", "/contacts/stats")

    @staticmethod
    def _check_status(status: str) -> str:
        if status not in CONTACT_STATUSES:
            raise ValidationError(f"Invalid status {status!r} (expected one of: {', '.join(CONTACT_STATUSES)})")
        return status
