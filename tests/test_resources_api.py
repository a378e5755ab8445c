"""HTTP tests for /api/v1/resources/{kind}."""

import pytest

BASE = "/api/v1/resources"


class TestReads:
    def test_empty_list(self, client):
        response = client.get(f"{BASE}/partner")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_is_public(self, client, auth_headers, partner_payload):
        client.post(f"{BASE}/partner", json=partner_payload, headers=auth_headers)

        response = client.get(f"{BASE}/partner")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["ONEE"]

    def test_plural_alias(self, client):
        assert client.get(f"{BASE}/partners").status_code == 200

    def test_unknown_kind(self, client):
        response = client.get(f"{BASE}/services")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid resource: services"


class TestWritesRequireAdmin:
    @pytest.mark.parametrize(
        "method, kwargs",
        [
            ("post", {"json": {"name": "A", "category": "B"}}),
            ("put", {"json": {"id": 1, "name": "A"}}),
            ("delete", {"params": {"id": "1"}}),
        ],
    )
    def test_missing_token(self, client, method, kwargs):
        response = getattr(client, method)(f"{BASE}/partner", **kwargs)

        assert response.status_code == 401

    def test_garbage_token(self, client):
        response = client.post(
            f"{BASE}/partner",
            json={"name": "A", "category": "B"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401


class TestWrites:
    def test_create(self, client, auth_headers, partner_payload):
        response = client.post(f"{BASE}/partner", json=partner_payload, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "ONEE"
        assert body["active"] is True
        assert body["partnerOrder"] == 0
        assert "logo" not in body

    def test_create_missing_required_field(self, client, auth_headers):
        response = client.post(f"{BASE}/partner", json={"name": "A"}, headers=auth_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to create item"
        assert "details" in body

    def test_update(self, client, auth_headers, project_payload):
        created = client.post(f"{BASE}/project", json=project_payload, headers=auth_headers).json()

        response = client.put(
            f"{BASE}/project",
            json={"id": created["id"], "status": "en cours", "featured": True},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "en cours"
        assert body["featured"] is True
        assert body["achievements"] == ["a", "b"]

    def test_update_without_id(self, client, auth_headers):
        response = client.put(f"{BASE}/partner", json={"name": "A"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "ID is required for update"}

    def test_update_with_zero_id(self, client, auth_headers):
        response = client.put(f"{BASE}/partner", json={"id": 0, "name": "A"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "ID is required for update"}

    def test_update_unknown_id(self, client, auth_headers):
        response = client.put(f"{BASE}/partner", json={"id": 9999, "name": "A"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to update item"

    def test_delete(self, client, auth_headers, partner_payload):
        created = client.post(f"{BASE}/partner", json=partner_payload, headers=auth_headers).json()

        response = client.delete(f"{BASE}/partner", params={"id": str(created["id"])}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(f"{BASE}/partner").json() == []

    def test_delete_without_id(self, client, auth_headers):
        response = client.delete(f"{BASE}/contact", headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "ID is required for delete"}

    def test_delete_non_numeric_id(self, client, auth_headers):
        response = client.delete(f"{BASE}/contact", params={"id": "abc"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "ID must be numeric"}

    def test_delete_unknown_id(self, client, auth_headers, partner_payload):
        client.post(f"{BASE}/partner", json=partner_payload, headers=auth_headers)

        response = client.delete(f"{BASE}/partner", params={"id": "9999"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to delete item"
        assert len(client.get(f"{BASE}/partner").json()) == 1

    def test_unknown_kind_on_write(self, client, auth_headers):
        response = client.post(f"{BASE}/user", json={"name": "A"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid resource: user"}


class TestProductionErrorPayload:
    def test_details_hidden_in_prod(self, client, auth_headers, monkeypatch):
        from waman.core.config import settings

        monkeypatch.setattr(settings, "ENV", "prod")

        response = client.post(f"{BASE}/partner", json={"name": "A"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create item"}
