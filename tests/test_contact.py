"""
Contact inbox tests: visitor submissions, status triage and email replies.
"""

from unittest.mock import patch

from thavma_admin.core.errors import ValidationError
from thavma_admin.modules.contact.models import MessageStatus, is_forward_transition

SEND_PATH = "thavma_admin.modules.contact.routes.email_service.send_contact_response"


def _submit(client, **overrides):
    payload = {
        "name": "Dana Reyes",
        "email": "Dana@Example.COM",
        "phone": "555-0100",
        "message": "We need a quote for a CT room.",
    }
    payload.update(overrides)
    return client.post("/api/contact", json=payload)


def _first_message(client, auth_headers):
    return client.get("/api/contact", headers=auth_headers).get_json()[0]


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

def test_submit_message(client, auth_headers):
    response = _submit(client)
    assert response.status_code == 201
    assert response.get_json() == {"message": "Message sent successfully"}

    message = _first_message(client, auth_headers)
    assert message["status"] == "unread"
    assert message["email"] == "dana@example.com"
    assert message["phone"] == "555-0100"
    assert message["response"] is None
    assert message["responded_at"] is None


def test_submit_form_encoded(client, auth_headers):
    response = client.post("/api/contact", data={
        "name": "Form User", "email": "form@example.com", "message": "Hello"})
    assert response.status_code == 201
    assert _first_message(client, auth_headers)["name"] == "Form User"


def test_phone_is_optional(client, auth_headers):
    assert _submit(client, phone=None).status_code == 201
    assert _first_message(client, auth_headers)["phone"] is None


def test_missing_required_field_fails(client):
    for field in ("name", "email", "message"):
        response = _submit(client, **{field: "   "})
        assert response.status_code == 500
        assert response.get_json() == {"error": "Failed to send message"}


def test_list_newest_first(client, auth_headers):
    _submit(client, name="Older")
    _submit(client, name="Newer")
    names = [m["name"] for m in client.get("/api/contact", headers=auth_headers).get_json()]
    assert names == ["Newer", "Older"]


def test_list_requires_token(client):
    _submit(client)
    assert client.get("/api/contact").status_code == 401


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

def test_mark_read(client, auth_headers):
    _submit(client)
    message_id = _first_message(client, auth_headers)["id"]

    response = client.put(f"/api/contact/{message_id}", json={"status": "read"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()["status"] == "read"


def test_status_update_missing_message_is_404(client, auth_headers):
    response = client.put("/api/contact/999", json={"status": "read"}, headers=auth_headers)
    assert response.status_code == 404
    assert response.get_json() == {"error": "Message not found"}


def test_invalid_status_rejected(client, auth_headers):
    _submit(client)
    message_id = _first_message(client, auth_headers)["id"]

    response = client.put(f"/api/contact/{message_id}", json={"status": "archived"}, headers=auth_headers)
    assert response.status_code == 500
    assert _first_message(client, auth_headers)["status"] == "unread"


def test_status_update_without_status_changes_nothing(client, auth_headers):
    _submit(client)
    message = _first_message(client, auth_headers)

    response = client.put(f"/api/contact/{message['id']}", json={}, headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()["status"] == "unread"
    assert response.get_json()["updated_at"] == message["updated_at"]


def test_status_update_without_status_missing_message_is_404(client, auth_headers):
    response = client.put("/api/contact/999", json={}, headers=auth_headers)
    assert response.status_code == 404


def test_backward_status_allowed_by_default(client, auth_headers):
    _submit(client)
    message_id = _first_message(client, auth_headers)["id"]
    client.put(f"/api/contact/{message_id}", json={"status": "read"}, headers=auth_headers)

    response = client.put(f"/api/contact/{message_id}", json={"status": "unread"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()["status"] == "unread"


def test_backward_status_rejected_in_strict_mode(app, client, auth_headers):
    app.config["CONTACT_STRICT_STATUS"] = True
    _submit(client)
    message_id = _first_message(client, auth_headers)["id"]
    client.put(f"/api/contact/{message_id}", json={"status": "read"}, headers=auth_headers)

    response = client.put(f"/api/contact/{message_id}", json={"status": "unread"}, headers=auth_headers)
    assert response.status_code == 500
    assert _first_message(client, auth_headers)["status"] == "read"


def test_status_order():
    assert is_forward_transition("unread", "read")
    assert is_forward_transition("read", "responded")
    assert is_forward_transition("read", "read")
    assert not is_forward_transition("responded", "unread")


def test_status_parse():
    assert MessageStatus.parse("responded") is MessageStatus.RESPONDED
    try:
        MessageStatus.parse("spam")
    except ValidationError as e:
        assert e.field == "status"
    else:
        raise AssertionError("unknown status was accepted")


# ---------------------------------------------------------------------------
# Respond
# ---------------------------------------------------------------------------

def test_respond_sends_email_and_records_reply(client, auth_headers):
    _submit(client)
    message = _first_message(client, auth_headers)

    with patch(SEND_PATH, return_value=True) as send:
        response = client.post(f"/api/contact/{message['id']}/respond",
                               json={"response": "Thanks, we will call you."}, headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json() == {"message": "Email sent successfully"}
    sent_message, sent_text = send.call_args[0]
    assert sent_message["email"] == "dana@example.com"
    assert sent_text == "Thanks, we will call you."

    updated = _first_message(client, auth_headers)
    assert updated["status"] == "responded"
    assert updated["response"] == "Thanks, we will call you."
    assert updated["responded_at"]


def test_respond_relay_failure_leaves_message_unchanged(client, auth_headers):
    _submit(client)
    message = _first_message(client, auth_headers)

    with patch(SEND_PATH, return_value=False):
        response = client.post(f"/api/contact/{message['id']}/respond",
                               json={"response": "Hello"}, headers=auth_headers)

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to send email"}
    after = _first_message(client, auth_headers)
    assert after["status"] == "unread"
    assert after["response"] is None
    assert after["responded_at"] is None


def test_respond_relay_exception_is_500(client, auth_headers):
    _submit(client)
    message = _first_message(client, auth_headers)

    with patch(SEND_PATH, side_effect=OSError("connection refused")):
        response = client.post(f"/api/contact/{message['id']}/respond",
                               json={"response": "Hello"}, headers=auth_headers)

    assert response.status_code == 500
    assert _first_message(client, auth_headers)["status"] == "unread"


def test_respond_missing_message_is_404(client, auth_headers):
    with patch(SEND_PATH, return_value=True) as send:
        response = client.post("/api/contact/999/respond", json={"response": "Hi"}, headers=auth_headers)
    assert response.status_code == 404
    assert response.get_json() == {"error": "Message not found"}
    send.assert_not_called()


def test_respond_requires_text(client, auth_headers):
    _submit(client)
    message = _first_message(client, auth_headers)
    with patch(SEND_PATH, return_value=True) as send:
        response = client.post(f"/api/contact/{message['id']}/respond", json={}, headers=auth_headers)
    assert response.status_code == 500
    send.assert_not_called()


def test_respond_over_smtp_end_to_end(client, auth_headers):
    _submit(client)
    message = _first_message(client, auth_headers)

    with patch("thavma_admin.modules.email.email_service.smtplib.SMTP") as smtp:
        server = smtp.return_value.__enter__.return_value
        response = client.post(f"/api/contact/{message['id']}/respond",
                               json={"response": "See you Monday"}, headers=auth_headers)

    assert response.status_code == 200
    server.login.assert_called_once_with("no-reply@thavma.test", "app-password")
    sent = server.send_message.call_args[0][0]
    assert sent["To"] == "dana@example.com"
    assert sent["Subject"] == "Response from Thavma Solutions"
