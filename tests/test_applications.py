"""Tests for applications and the per-party views."""

import pytest
from conftest import opportunity_payload


@pytest.fixture
def opportunity(client, agency):
    response = client.post(
        "/api/opportunities",
        json=opportunity_payload(agency["id"], districtName="D04 - Bay Area / Oakland"),
    )
    assert response.status_code == 201
    return response.json()


def _apply(client, vendor, opportunity, **extra):
    return client.post(
        "/api/applications",
        json={"opportunityId": opportunity["id"], "vendorId": vendor["id"], **extra},
    )


class TestSubmit:
    def test_submit_copies_agency(self, client, vendor, agency, opportunity):
        response = _apply(client, vendor, opportunity, notes="Ready to start")
        assert response.status_code == 201
        application_id = response.json()["data"]["id"]

        detail = client.get(f"/api/applications/{application_id}").json()
        assert detail["agencyId"] == agency["id"]
        assert detail["status"] == "pending"
        assert detail["opportunityTitle"] == "Test"
        assert detail["vendorName"] == "Acme Paving"
        assert detail["agencyName"] == "District 4 Office"
        assert detail["notes"] == "Ready to start"

    def test_second_application_conflicts(self, client, vendor, opportunity):
        assert _apply(client, vendor, opportunity).status_code == 201
        response = _apply(client, vendor, opportunity)
        assert response.status_code == 409
        assert response.json()["error"]["message"] == "Already applied"

    def test_unknown_opportunity_is_404(self, client, vendor):
        response = client.post("/api/applications", json={"opportunityId": "NOPE", "vendorId": vendor["id"]})
        assert response.status_code == 404

    def test_missing_fields_are_400(self, client):
        assert client.post("/api/applications", json={"notes": "hi"}).status_code == 400


class TestViews:
    def test_listing_filters(self, client, vendor, agency, opportunity):
        _apply(client, vendor, opportunity)

        by_vendor = client.get("/api/applications", params={"vendorId": vendor["id"]}).json()
        assert len(by_vendor) == 1
        assert by_vendor[0]["districtName"] == "D04 - Bay Area / Oakland"

        by_agency = client.get("/api/applications", params={"agencyId": agency["id"]}).json()
        assert len(by_agency) == 1

        assert client.get("/api/applications", params={"vendorId": agency["id"]}).json() == []

    def test_opportunity_view_includes_vendor_contact(self, client, vendor, opportunity):
        client.put(f"/api/users/{vendor['id']}", json={"districts": ["04"]})
        _apply(client, vendor, opportunity)

        applicants = client.get(f"/api/applications/opportunity/{opportunity['id']}").json()
        assert len(applicants) == 1
        assert applicants[0]["email"] == "vendor@example.com"
        assert applicants[0]["contactName"] == "Pat Lee"
        assert applicants[0]["districts"] == ["04"]
        assert applicants[0]["categories"] == []

    def test_vendor_view(self, client, vendor, opportunity):
        _apply(client, vendor, opportunity)
        items = client.get(f"/applications/vendor/{vendor['id']}").json()
        assert [a["opportunityId"] for a in items] == [opportunity["id"]]


class TestLifecycle:
    def test_status_update(self, client, vendor, opportunity):
        application_id = _apply(client, vendor, opportunity).json()["data"]["id"]

        response = client.put(f"/api/applications/{application_id}/status", json={"status": "awarded"})
        assert response.status_code == 200
        assert client.get(f"/api/applications/{application_id}").json()["status"] == "awarded"

    def test_invalid_status_is_400(self, client, vendor, opportunity):
        application_id = _apply(client, vendor, opportunity).json()["data"]["id"]
        response = client.put(f"/api/applications/{application_id}/status", json={"status": "maybe"})
        assert response.status_code == 400

    def test_withdraw(self, client, vendor, opportunity):
        application_id = _apply(client, vendor, opportunity).json()["data"]["id"]
        assert client.delete(f"/api/applications/{application_id}").status_code == 200
        assert client.get(f"/api/applications/{application_id}").status_code == 404
        assert client.delete(f"/api/applications/{application_id}").status_code == 404

    def test_deleting_opportunity_removes_applications(self, client, vendor, opportunity):
        _apply(client, vendor, opportunity)
        client.delete(f"/api/opportunities/{opportunity['id']}")
        assert client.get("/api/applications", params={"vendorId": vendor["id"]}).json() == []
