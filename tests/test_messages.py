"""Tests for direct messages and the contact form."""

import pytest


@pytest.fixture
def sent(client, vendor, agency):
    response = client.post(
        "/api/messages",
        json={
            "senderId": agency["id"],
            "receiverId": vendor["id"],
            "subject": "Site visit",
            "body": "Can you attend on Monday?",
        },
    )
    assert response.status_code == 201
    return response.json()


def test_inbox_and_sent(client, vendor, agency, sent):
    inbox = client.get(f"/api/messages/user/{vendor['id']}").json()
    assert len(inbox) == 1
    assert inbox[0]["id"] == sent["id"]
    assert inbox[0]["senderName"] == "District 4 Office"
    assert inbox[0]["receiverName"] == "Acme Paving"
    assert inbox[0]["isRead"] is False

    outbox = client.get(f"/api/messages/user/{agency['id']}", params={"type": "sent"}).json()
    assert [m["id"] for m in outbox] == [sent["id"]]
    assert client.get(f"/api/messages/user/{agency['id']}").json() == []


def test_mark_read(client, vendor, sent):
    assert client.put(f"/api/messages/{sent['id']}/read").status_code == 200
    inbox = client.get(f"/api/messages/user/{vendor['id']}").json()
    assert inbox[0]["isRead"] is True
    assert client.put("/api/messages/999/read").status_code == 404


def test_delete(client, vendor, sent):
    assert client.delete(f"/messages/{sent['id']}").status_code == 200
    assert client.get(f"/api/messages/user/{vendor['id']}").json() == []


def test_missing_body_is_400(client, vendor, agency):
    response = client.post(
        "/api/messages",
        json={"senderId": agency["id"], "receiverId": vendor["id"]},
    )
    assert response.status_code == 400


def test_opportunity_title_is_joined(client, vendor, agency):
    client.post(
        "/api/opportunities",
        json={"id": "CAL-9", "title": "Striping", "scopeSummary": "Lane striping", "postedBy": agency["id"]},
    )
    client.post(
        "/api/messages",
        json={
            "senderId": vendor["id"],
            "receiverId": agency["id"],
            "opportunityId": "CAL-9",
            "body": "Question about striping",
        },
    )
    inbox = client.get(f"/api/messages/user/{agency['id']}").json()
    assert inbox[0]["opportunityTitle"] == "Striping"


def test_contact_form(client):
    response = client.post(
        "/api/messages/contact",
        json={"name": "Sam", "email": "sam@example.com", "message": "Broken link", "issueType": "bug"},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Contact form submitted successfully"
