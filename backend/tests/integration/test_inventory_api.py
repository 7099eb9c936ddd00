"""Integration tests for inventory endpoints."""

from fastapi.testclient import TestClient

SUGAR = {"item_name": "Aren Sugar", "quantity": 1, "uom": "kg", "price_per_qty": 60000}


class TestCreateInventory:
    def test_create_returns_item(self, api_client: TestClient, auth_headers):
        response = api_client.post("/inventory", json=SUGAR, headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == {"success": "Inventory item added successfully"}
        item = body["data"]["inventory"]
        assert item["id"] > 0
        assert item["item_name"] == "Aren Sugar"
        assert item["uom"] == "kg"
        assert item["price_per_qty"] == 60000

    def test_duplicate_name_is_rejected(self, api_client: TestClient, auth_headers):
        api_client.post("/inventory", json=SUGAR, headers=auth_headers)

        response = api_client.post("/inventory", json=SUGAR, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == {"item_name": "Inventory item Aren Sugar already exists"}

    def test_negative_price_is_rejected(self, api_client: TestClient, auth_headers):
        response = api_client.post(
            "/inventory",
            json={**SUGAR, "price_per_qty": -1},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert "price_per_qty" in response.json()["error"]

    def test_blank_name_is_rejected(self, api_client: TestClient, auth_headers):
        response = api_client.post("/inventory", json={**SUGAR, "item_name": "   "}, headers=auth_headers)

        assert response.status_code == 400
        assert "item_name" in response.json()["error"]


class TestListInventory:
    def test_list_paginates(self, seeded_client: TestClient, auth_headers):
        response = seeded_client.get("/inventory", params={"page": 2, "limit": 4}, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["page"] == 2
        assert data["limit"] == 4
        assert data["total_items"] == 6
        assert data["total_pages"] == 2
        assert [i["item_name"] for i in data["inventory"]] == ["Coffee Bean", "Mineral Water"]

    def test_search_is_case_insensitive_substring(self, seeded_client: TestClient, auth_headers):
        response = seeded_client.get("/inventory", params={"search": "WATER"}, headers=auth_headers)

        data = response.json()["data"]
        assert data["total_items"] == 1
        assert data["inventory"][0]["item_name"] == "Mineral Water"

    def test_wildcards_in_search_match_literally(self, seeded_client: TestClient, auth_headers):
        for term in ("%", "_"):
            data = seeded_client.get("/inventory", params={"search": term}, headers=auth_headers).json()["data"]
            assert data["total_items"] == 0

        seeded_client.post(
            "/inventory",
            json={"item_name": "Syrup_50%", "quantity": 1, "uom": "liter", "price_per_qty": 1},
            headers=auth_headers,
        )
        data = seeded_client.get("/inventory", params={"search": "p_50%"}, headers=auth_headers).json()["data"]
        assert [i["item_name"] for i in data["inventory"]] == ["Syrup_50%"]

    def test_bad_paging_values_fall_back_to_defaults(self, seeded_client: TestClient, auth_headers):
        response = seeded_client.get("/inventory", params={"page": "abc", "limit": 0}, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["page"] == 1
        assert data["limit"] == 10
        assert len(data["inventory"]) == 6

    def test_empty_catalog(self, api_client: TestClient, auth_headers):
        data = api_client.get("/inventory", headers=auth_headers).json()["data"]

        assert data["total_items"] == 0
        assert data["total_pages"] == 0
        assert data["inventory"] == []


class TestUpdateInventory:
    def test_update_changes_given_fields(self, api_client: TestClient, auth_headers):
        created = api_client.post("/inventory", json=SUGAR, headers=auth_headers).json()["data"]["inventory"]

        response = api_client.put(
            f"/inventory/{created['id']}",
            json={"price_per_qty": 65000},
            headers=auth_headers,
        )

        assert response.status_code == 200
        item = response.json()["data"]["inventory"]
        assert item["price_per_qty"] == 65000
        assert item["item_name"] == "Aren Sugar"

    def test_update_unknown_id_is_not_found(self, api_client: TestClient, auth_headers):
        response = api_client.put("/inventory/999", json={"quantity": 2}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == {"warning": "Inventory item not found"}

    def test_rename_onto_existing_name_is_rejected(self, seeded_client: TestClient, auth_headers):
        response = seeded_client.put("/inventory/1", json={"item_name": "Milk"}, headers=auth_headers)

        assert response.status_code == 400


class TestDeleteInventory:
    def test_delete_removes_item(self, api_client: TestClient, auth_headers):
        created = api_client.post("/inventory", json=SUGAR, headers=auth_headers).json()["data"]["inventory"]

        response = api_client.delete(f"/inventory/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] is None
        listing = api_client.get("/inventory", headers=auth_headers).json()["data"]
        assert listing["total_items"] == 0

    def test_delete_unknown_id_is_not_found(self, api_client: TestClient, auth_headers):
        response = api_client.delete("/inventory/999", headers=auth_headers)

        assert response.status_code == 404
