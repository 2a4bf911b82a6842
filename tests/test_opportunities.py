"""Tests for opportunity CRUD, the published listing and bookmarks."""

from datetime import date, timedelta

from conftest import opportunity_payload


def _create(client, agency, **overrides):
    response = client.post("/api/opportunities", json=opportunity_payload(agency["id"], **overrides))
    assert response.status_code == 201, response.text
    return response.json()


class TestCreate:
    def test_defaults_to_published(self, client, agency):
        response = client.post("/api/opportunities", json=opportunity_payload(agency["id"]))
        assert response.status_code == 201
        assert response.json() == {"id": "CAL-5001", "title": "Test", "status": "published"}

    def test_unknown_poster_is_rejected(self, client):
        response = client.post("/api/opportunities", json=opportunity_payload(999))
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid postedBy User ID"

    def test_missing_required_fields(self, client, agency):
        response = client.post("/api/opportunities", json={"id": "CAL-1", "postedBy": agency["id"]})
        assert response.status_code == 400

    def test_duplicate_id_conflicts(self, client, agency):
        _create(client, agency)
        response = client.post("/api/opportunities", json=opportunity_payload(agency["id"]))
        assert response.status_code == 409

    def test_attachments_round_trip_as_list(self, client, agency):
        _create(client, agency, attachments=["scope.pdf", "map.pdf"])
        response = client.get("/api/opportunities/CAL-5001")
        assert response.status_code == 200
        body = response.json()
        assert body["attachments"] == ["scope.pdf", "map.pdf"]
        assert body["scopeSummary"] == "x" * 100
        assert body["postedBy"] == agency["id"]


class TestListing:
    def test_all_listing_includes_pending(self, client, agency):
        _create(client, agency, id="CAL-1")
        _create(client, agency, id="CAL-2", status="pending")
        ids = {o["id"] for o in client.get("/api/opportunities").json()}
        assert ids == {"CAL-1", "CAL-2"}

    def test_published_listing_excludes_pending(self, client, agency):
        _create(client, agency, id="CAL-1")
        _create(client, agency, id="CAL-2", status="pending")
        ids = [o["id"] for o in client.get("/api/opportunities/published").json()]
        assert ids == ["CAL-1"]

    def test_published_listing_filters_and_derived_fields(self, client, agency):
        soon = (date.today() + timedelta(days=3)).isoformat()
        later = (date.today() + timedelta(days=60)).isoformat()
        _create(client, agency, id="CAL-1", district="04", dueDate=soon, title="Bridge Repair")
        _create(client, agency, id="CAL-2", district="04", dueDate=later, title="Bridge Paint")
        _create(client, agency, id="CAL-3", district="07", dueDate=soon, title="Bridge Deck")
        _create(client, agency, id="CAL-4", district="04", dueDate="TBD", title="Bridge Study")

        response = client.get(
            "/api/opportunities/published",
            params={"district": "04", "dueWithin": 7, "keyword": "bridge"},
        )
        assert response.status_code == 200
        items = response.json()
        assert [o["id"] for o in items] == ["CAL-1"]
        assert items[0]["isDueSoon"] is True
        assert items[0]["isClosed"] is False
        assert 2 <= items[0]["daysUntilDue"] <= 4

        unknown = client.get("/opportunities/published", params={"keyword": "study"}).json()
        assert unknown[0]["dueDateLabel"] == "Not specified"
        assert unknown[0]["daysUntilDue"] is None

    def test_agency_listing(self, client, agency, vendor):
        _create(client, agency, id="CAL-1")
        assert [o["id"] for o in client.get(f"/api/opportunities/agency/{agency['id']}").json()] == ["CAL-1"]
        assert client.get(f"/api/opportunities/agency/{vendor['id']}").json() == []

    def test_missing_opportunity_is_404(self, client):
        assert client.get("/api/opportunities/NOPE").status_code == 404


class TestUpdateDelete:
    def test_update_keeps_status_when_omitted(self, client, agency):
        _create(client, agency, status="pending")
        response = client.put(
            "/api/opportunities/CAL-5001",
            json={"title": "Renamed", "scopeSummary": "New scope"},
        )
        assert response.status_code == 200
        assert response.json() == {"id": "CAL-5001", "title": "Renamed", "status": "pending"}

    def test_update_missing_is_404(self, client):
        response = client.put("/api/opportunities/NOPE", json={"title": "t", "scopeSummary": "s"})
        assert response.status_code == 404

    def test_delete_removes_bookmarks(self, client, agency, vendor):
        _create(client, agency)
        client.post("/api/opportunities/save", json={"vendorId": vendor["id"], "opportunityId": "CAL-5001"})

        assert client.delete("/api/opportunities/CAL-5001").status_code == 200
        assert client.get(f"/api/opportunities/saved/{vendor['id']}").json() == []
        assert client.delete("/api/opportunities/CAL-5001").status_code == 404


class TestApprove:
    def test_requires_admin_token(self, client, agency):
        _create(client, agency, status="pending")
        assert client.post("/api/opportunities/CAL-5001/approve").status_code == 401

    def test_admin_publishes(self, client, agency, admin_headers):
        _create(client, agency, status="pending")
        response = client.post("/api/opportunities/CAL-5001/approve", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "published"
        ids = [o["id"] for o in client.get("/api/opportunities/published").json()]
        assert ids == ["CAL-5001"]


class TestBookmarks:
    def test_save_is_idempotent(self, client, agency, vendor):
        _create(client, agency)
        body = {"vendorId": vendor["id"], "opportunityId": "CAL-5001"}

        assert client.post("/api/opportunities/save", json=body).status_code == 201
        assert client.post("/api/opportunities/save", json=body).status_code == 201

        saved = client.get(f"/api/opportunities/saved/{vendor['id']}").json()
        assert [o["id"] for o in saved] == ["CAL-5001"]

    def test_unsave(self, client, agency, vendor):
        _create(client, agency)
        body = {"vendorId": vendor["id"], "opportunityId": "CAL-5001"}
        client.post("/api/opportunities/save", json=body)

        assert client.post("/api/opportunities/unsave", json=body).status_code == 200
        assert client.get(f"/api/opportunities/saved/{vendor['id']}").json() == []
        assert client.post("/api/opportunities/unsave", json=body).status_code == 200

    def test_delete_unsave_reports_missing(self, client, agency, vendor):
        _create(client, agency)
        url = f"/api/opportunities/unsave/{vendor['id']}/CAL-5001"
        assert client.delete(url).status_code == 404

        client.post("/api/opportunities/save", json={"vendorId": vendor["id"], "opportunityId": "CAL-5001"})
        assert client.delete(url).status_code == 200

    def test_save_unknown_opportunity_is_404(self, client, vendor):
        response = client.post(
            "/api/opportunities/save",
            json={"vendorId": vendor["id"], "opportunityId": "NOPE"},
        )
        assert response.status_code == 404
