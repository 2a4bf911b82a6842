"""Tests for the user directory and the profile merge."""

from conftest import register


class TestProfileMerge:
    def test_empty_update_changes_nothing(self, client, vendor):
        before = client.get(f"/api/users/{vendor['id']}").json()
        response = client.put(f"/api/users/{vendor['id']}", json={})
        assert response.status_code == 200
        assert response.json() == before

    def test_blank_fields_keep_stored_values(self, client, vendor):
        response = client.put(
            f"/api/users/{vendor['id']}",
            json={"businessName": "", "contactName": None, "phone": "555-0100"},
        )
        user = response.json()
        assert user["businessName"] == "Acme Paving"
        assert user["contactName"] == "Pat Lee"
        assert user["phone"] == "555-0100"

    def test_list_fields_are_serialized_and_parsed(self, client, vendor):
        response = client.put(
            f"/api/users/{vendor['id']}",
            json={"preferredDistricts": ["04", "07"], "workCategories": "construction"},
        )
        user = response.json()
        assert user["districts"] == ["04", "07"]
        assert user["categories"] == ["construction"]

    def test_description_alias(self, client, vendor):
        user = client.put(f"/api/users/{vendor['id']}", json={"description": "We pave."}).json()
        assert user["businessDescription"] == "We pave."

    def test_missing_user_is_404(self, client):
        assert client.put("/api/users/999", json={"phone": "1"}).status_code == 404


class TestDirectory:
    def test_get_profile_hides_hash(self, client, vendor):
        user = client.get(f"/users/{vendor['id']}").json()
        assert user["email"] == "vendor@example.com"
        assert "passwordHash" not in user

    def test_filters(self, client, vendor, agency):
        client.put(f"/api/users/{vendor['id']}", json={"districts": ["04"], "categories": ["paving"]})
        other = register(client, "other@example.com", "vendor", businessName="Other Works")
        client.put(f"/api/users/{other['id']}", json={"districts": ["07"]})

        vendors = client.get("/api/users", params={"type": "vendor"}).json()
        assert {u["id"] for u in vendors} == {vendor["id"], other["id"]}

        by_district = client.get("/api/users", params={"district": "04"}).json()
        assert [u["id"] for u in by_district] == [vendor["id"]]

        by_category = client.get("/api/vendors", params={"category": "paving"}).json()
        assert [u["id"] for u in by_category] == [vendor["id"]]

        by_search = client.get("/api/users", params={"search": "district 4"}).json()
        assert [u["id"] for u in by_search] == [agency["id"]]

    def test_missing_profile_is_404(self, client):
        assert client.get("/api/vendors/999").status_code == 404
