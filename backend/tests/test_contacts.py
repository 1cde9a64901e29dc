import uuid
from datetime import timedelta

import pytest
from fastapi import BackgroundTasks

from studio_api.errors import DuplicateSubmission
from studio_api.models.contact import ContactLead
from studio_api.services.contact_service import submit_contact
from studio_api.utils.clock import utcnow


def contact_payload(**overrides):
    payload = {
        "name": "Linus",
        "organization": "Penguin Co",
        "email": "linus@example.com",
        "number": "555-0100",
        "website": "https://penguin.example.com",
        "services": ["Branding", "Web Design"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def submitted_contact(client, transport):
    r = client.post("/api/contact", json=contact_payload())
    assert r.status_code == 201
    transport.sent.clear()
    return r.json()["contactId"]


class TestSubmit:
    def test_ping(self, client):
        r = client.get("/api/contact")
        assert r.status_code == 200
        assert r.json()["status"] == "active"

    def test_submit(self, client, db, transport):
        r = client.post("/api/contact", json=contact_payload(email="Linus@Example.com"))
        assert r.status_code == 201
        contact = db.get(ContactLead, r.json()["contactId"])
        assert contact.status == "new"
        assert contact.priority == "medium"
        assert contact.email == "linus@example.com"
        assert contact.services == ["Branding", "Web Design"]

        assert [to for to, _, _ in transport.sent] == ["linus@example.com", "ops@studio.test"]
        assert transport.sent[1][1] == "New Contact Form Submission - Penguin Co"

    def test_duplicate_within_window(self, client, transport):
        assert client.post("/api/contact", json=contact_payload()).status_code == 201
        transport.sent.clear()

        r = client.post("/api/contact", json=contact_payload(email="LINUS@example.com", name="Linus again"))
        assert r.status_code == 400
        assert "last 24 hours" in r.json()["error"]
        assert transport.sent == []

    def test_accepted_after_window(self, db, notifier):
        earlier = utcnow() - timedelta(hours=25)
        submit_contact(db, contact_payload(), notifier, BackgroundTasks(), now=earlier)

        contact = submit_contact(db, contact_payload(), notifier, BackgroundTasks())
        assert contact.id
        assert db.query(ContactLead).count() == 2

    def test_rejected_just_inside_window(self, db, notifier):
        earlier = utcnow() - timedelta(hours=23, minutes=59)
        submit_contact(db, contact_payload(), notifier, BackgroundTasks(), now=earlier)
        with pytest.raises(DuplicateSubmission):
            submit_contact(db, contact_payload(), notifier, BackgroundTasks())

    def test_validation(self, client):
        r = client.post("/api/contact", json=contact_payload(
            organization="", email="nope", website="penguin", services=[],
        ))
        assert r.status_code == 400
        fields = {d["field"] for d in r.json()["details"]}
        assert fields == {"organization", "email", "website", "services"}

    def test_failed_mail_keeps_submission(self, client, db, transport):
        transport.fail = True
        r = client.post("/api/contact", json=contact_payload())
        assert r.status_code == 201
        assert transport.attempts == 2
        assert db.query(ContactLead).count() == 1


class TestTriage:
    def test_update_never_notifies(self, client, admin_headers, transport, submitted_contact):
        r = client.put(f"/api/contact/admin/{submitted_contact}", json={
            "status": "in-progress",
            "priority": "urgent",
            "assignedTo": "editor",
            "notes": "Call back Tuesday",
            "followUpDate": "2030-05-01",
        }, headers=admin_headers)
        assert r.status_code == 200
        contact = r.json()["contact"]
        assert contact["status"] == "in-progress"
        assert contact["priority"] == "urgent"
        assert contact["assignedTo"] == "editor"
        assert contact["followUpDate"] == "2030-05-01T00:00:00Z"
        assert transport.sent == []

    def test_clear_triage_fields(self, client, admin_headers, submitted_contact):
        url = f"/api/contact/admin/{submitted_contact}"
        client.put(url, json={
            "assignedTo": "editor",
            "notes": "Call back Tuesday",
            "followUpDate": "2030-05-01",
        }, headers=admin_headers)

        r = client.put(url, json={"assignedTo": None, "notes": None, "followUpDate": None},
                       headers=admin_headers)
        assert r.status_code == 200
        contact = r.json()["contact"]
        assert contact["assignedTo"] is None
        assert contact["notes"] is None
        assert contact["followUpDate"] is None

    def test_omitted_follow_up_date_is_kept(self, client, admin_headers, submitted_contact):
        url = f"/api/contact/admin/{submitted_contact}"
        client.put(url, json={"followUpDate": "2030-05-01"}, headers=admin_headers)
        r = client.put(url, json={"priority": "high"}, headers=admin_headers)
        assert r.json()["contact"]["followUpDate"] == "2030-05-01T00:00:00Z"

    @pytest.mark.parametrize("body,field", [
        ({"priority": "critical"}, "priority"),
        ({"status": "archived"}, "status"),
        ({"followUpDate": "next week"}, "followUpDate"),
    ])
    def test_invalid_values(self, client, admin_headers, submitted_contact, body, field):
        r = client.put(f"/api/contact/admin/{submitted_contact}", json=body, headers=admin_headers)
        assert r.status_code == 400
        assert r.json()["details"][0]["field"] == field

    def test_requires_auth(self, client, submitted_contact):
        assert client.get("/api/contact/admin").status_code == 401
        r = client.put(f"/api/contact/admin/{submitted_contact}", json={"status": "closed"})
        assert r.status_code == 401

    def test_get_and_delete(self, client, admin_headers, submitted_contact):
        r = client.get(f"/api/contact/admin/{submitted_contact}", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["organization"] == "Penguin Co"

        r = client.delete(f"/api/contact/admin/{submitted_contact}", headers=admin_headers)
        assert r.status_code == 200
        r = client.get(f"/api/contact/admin/{submitted_contact}", headers=admin_headers)
        assert r.status_code == 404

    def test_unknown_and_malformed_ids(self, client, admin_headers):
        assert client.get(f"/api/contact/admin/{uuid.uuid4()}", headers=admin_headers).status_code == 404
        r = client.get("/api/contact/admin/abc", headers=admin_headers)
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid contact ID"


class TestContactQueries:
    def test_list_with_filters(self, client, admin_headers):
        first = client.post("/api/contact", json=contact_payload()).json()["contactId"]
        client.post("/api/contact", json=contact_payload(email="ada@example.com", services=["Branding"]))
        client.put(f"/api/contact/admin/{first}", json={"priority": "high", "assignedTo": "editor"},
                   headers=admin_headers)

        r = client.get("/api/contact/admin", headers=admin_headers)
        assert r.json()["total"] == 2

        r = client.get("/api/contact/admin", params={"priority": "high"}, headers=admin_headers)
        assert [c["id"] for c in r.json()["contacts"]] == [first]

        r = client.get("/api/contact/admin", params={"assignedTo": "editor"}, headers=admin_headers)
        assert r.json()["total"] == 1

    def test_stats(self, client, admin_headers):
        client.post("/api/contact", json=contact_payload())
        client.post("/api/contact", json=contact_payload(email="ada@example.com", services=["Branding"]))

        r = client.get("/api/contact/admin/stats", headers=admin_headers)
        assert r.status_code == 200
        data = r.json()
        assert data["total"] == 2
        assert data["statusStats"] == [{"key": "new", "count": 2}]
        assert data["priorityStats"] == [{"key": "medium", "count": 2}]
        assert data["serviceStats"] == [
            {"key": "Branding", "count": 2},
            {"key": "Web Design", "count": 1},
        ]
        assert sum(b["count"] for b in data["monthlyStats"]) == 2
        assert len(data["recentContacts"]) == 2
