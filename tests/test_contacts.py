"""
Unit tests for the contact form client.
"""

import pytest

from conftest import make_response
from jobboard.contacts import ContactClient
from jobboard.errors import ValidationError
from jobboard.models import Contact


@pytest.fixture
def contacts(session):
    return ContactClient("http://contact.test/api", session=session)


class TestSubmit:
    def test_valid_submission(self, contacts, session):
        session.request.return_value = make_response(
            201, {"success": True, "message": "Message sent", "data": {"id": 4}})

        result = contacts.submit("Alice", "A@Example.com", "Hiring question", "Is the role still open?")

        assert result.success
        args, kwargs = session.request.call_args
        assert args == ("POST", "http://contact.test/api/contacts")
        assert kwargs["json"]["email"] == "a@example.com"

    @pytest.mark.parametrize("name,email,subject,message", [
        ("A", "a@example.com", "Hiring question", "Is the role still open?"),
        ("Alice", "nope", "Hiring question", "Is the role still open?"),
        ("Alice", "a@example.com", "Hi", "Is the role still open?"),
        ("Alice", "a@example.com", "Hiring question", "Too short"),
        ("Alice", "a@example.com", "Hiring question", "x" * 5001),
    ])
    def test_invalid_input_rejected_before_request(self, contacts, session, name, email, subject, message):
        with pytest.raises(ValidationError):
            contacts.submit(name, email, subject, message)

        session.request.assert_not_called()


class TestAdmin:
    def test_list_passes_filters(self, contacts, session):
        session.request.return_value = make_response(200, {"success": True, "data": {"contacts": []}})

        contacts.list(page=2, limit=5, status="unread")

        assert session.request.call_args.kwargs["params"] == {"page": 2, "limit": 5, "status": "unread"}

    def test_get_parses_contact(self, contacts, session):
        session.request.return_value = make_response(200, {
            "success": True,
            "data": {"id": 4, "name": "Alice", "email": "a@example.com", "subject": "Hiring question",
                     "status": "read"},
        })

        result = contacts.get(4)

        assert isinstance(result.data, Contact)
        assert result.data.status == "read"

    def test_not_found_envelope(self, contacts, session):
        session.request.return_value = make_response(404, {"success": False, "message": "Contact not found"})

        result = contacts.get(99)

        assert result.success is False
        assert result.message == "Contact not found"

    @pytest.mark.parametrize("call", [
        lambda c: c.get(99),
        lambda c: c.update_status(99, "read"),
        lambda c: c.delete(99),
    ])
    def test_html_404_maps_to_not_found(self, contacts, session, call):
        session.request.return_value = make_response(404, text="<html>Cannot GET</html>")

        result = call(contacts)

        assert result.success is False
        assert result.message == "Contact not found"

    def test_other_error_pages_keep_server_message(self, contacts, session):
        session.request.return_value = make_response(502, text="<html>Bad Gateway</html>")

        result = contacts.get(4)

        assert result.message == "Server error: 502 - <html>Bad Gateway</html>"

    def test_invalid_status_rejected(self, contacts, session):
        with pytest.raises(ValidationError):
            contacts.update_status(4, "archived")

        session.request.assert_not_called()

    def test_update_status_and_delete(self, contacts, session):
        session.request.return_value = make_response(200, {"success": True, "message": "ok"})

        contacts.update_status(4, "replied")
        assert session.request.call_args.args == ("PATCH", "http://contact.test/api/contacts/4/status")
        assert session.request.call_args.kwargs["json"] == {"status": "replied"}

        contacts.delete(4)
        assert session.request.call_args.args == ("DELETE", "http://contact.test/api/contacts/4")
