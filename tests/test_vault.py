"""
Vault（保管庫）エンドポイントのテスト
"""

from datetime import timedelta

from app.clock import utcnow


def _create_category(client, headers, name="Banking"):
    response = client.post("/api/vault-categories", headers=headers, json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()["category"]


def _create_item(client, headers, name="Bank login", **extra):
    body = {"name": name, "encryptedData": "ciphertext==", "encryptionKeyId": "key-1", **extra}
    response = client.post("/api/vault-items", headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()["item"]


def _actions(client, headers, item_id):
    response = client.get(f"/api/vault-items/{item_id}/access-log", headers=headers)
    assert response.status_code == 200
    return [entry["action"] for entry in response.json()["accessLog"]]


class TestVaultCategories:
    """保管庫カテゴリのテスト"""

    def test_crud(self, client, auth_headers):
        category = _create_category(client, auth_headers)
        assert category["isArchived"] is False

        updated = client.put(
            f"/api/vault-categories/{category['id']}",
            headers=auth_headers,
            json={"icon": "bank"},
        ).json()["category"]
        assert updated["icon"] == "bank"
        assert updated["name"] == "Banking"

        listed = client.get("/api/vault-categories", headers=auth_headers).json()["categories"]
        assert [c["id"] for c in listed] == [category["id"]]

        client.patch(f"/api/vault-categories/{category['id']}/archive", headers=auth_headers)
        assert client.get("/api/vault-categories", headers=auth_headers).json()["categories"] == []

        deleted = client.delete(f"/api/vault-categories/{category['id']}", headers=auth_headers)
        assert deleted.status_code == 200
        assert client.get(
            f"/api/vault-categories/{category['id']}", headers=auth_headers
        ).status_code == 404

    def test_reorder(self, client, auth_headers):
        first = _create_category(client, auth_headers, name="First")
        second = _create_category(client, auth_headers, name="Second")
        client.patch(
            "/api/vault-categories/reorder",
            headers=auth_headers,
            json={"categoryOrders": [
                {"id": first["id"], "sortOrder": 1},
                {"id": second["id"], "sortOrder": 0},
            ]},
        )
        listed = client.get("/api/vault-categories", headers=auth_headers).json()["categories"]
        assert [c["name"] for c in listed] == ["Second", "First"]

    def test_delete_keeps_items(self, client, auth_headers):
        category = _create_category(client, auth_headers)
        item = _create_item(client, auth_headers, categoryId=category["id"])

        client.delete(f"/api/vault-categories/{category['id']}", headers=auth_headers)

        remaining = client.get(f"/api/vault-items/{item['id']}", headers=auth_headers).json()["item"]
        assert remaining["categoryId"] is None


class TestVaultItems:
    """保管庫アイテムのテスト"""

    def test_create_stores_ciphertext_as_is(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        assert item["encryptedData"] == "ciphertext=="
        assert item["encryptionKeyId"] == "key-1"
        assert item["type"] == "password"
        assert item["accessCount"] == 0

    def test_view_records_access(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        viewed = client.get(
            f"/api/vault-items/{item['id']}",
            headers={**auth_headers, "User-Agent": "pytest-agent"},
        ).json()["item"]
        assert viewed["accessCount"] == 1
        assert viewed["lastAccessedAt"] is not None

        log = client.get(
            f"/api/vault-items/{item['id']}/access-log", headers=auth_headers
        ).json()["accessLog"]
        assert [entry["action"] for entry in log] == ["view", "create"]
        assert log[0]["success"] is True
        assert log[0]["userAgent"] == "pytest-agent"

    def test_forwarded_ip_is_logged(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        client.get(
            f"/api/vault-items/{item['id']}",
            headers={**auth_headers, "X-Forwarded-For": "203.0.113.5, 10.0.0.1"},
        )
        log = client.get(
            f"/api/vault-items/{item['id']}/access-log", headers=auth_headers
        ).json()["accessLog"]
        assert log[0]["ipAddress"] == "203.0.113.5"

    def test_edit_archive_delete_are_logged(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        client.put(f"/api/vault-items/{item['id']}", headers=auth_headers, json={"notes": "PIN"})
        client.patch(f"/api/vault-items/{item['id']}/archive", headers=auth_headers)
        client.delete(f"/api/vault-items/{item['id']}", headers=auth_headers)

        # 削除後もログは参照できる
        assert _actions(client, auth_headers, item["id"]) == ["delete", "archive", "edit", "create"]

    def test_filters(self, client, auth_headers):
        category = _create_category(client, auth_headers)
        bank = _create_item(client, auth_headers, categoryId=category["id"], website="bank.example")
        _create_item(client, auth_headers, name="Passport", type="identity")

        by_category = client.get(
            "/api/vault-items", headers=auth_headers, params={"categoryId": category["id"]}
        ).json()["items"]
        assert [i["id"] for i in by_category] == [bank["id"]]

        by_type = client.get(
            "/api/vault-items", headers=auth_headers, params={"type": "identity"}
        ).json()["items"]
        assert [i["name"] for i in by_type] == ["Passport"]

        by_search = client.get(
            "/api/vault-items", headers=auth_headers, params={"search": "bank.example"}
        ).json()["items"]
        assert [i["id"] for i in by_search] == [bank["id"]]

    def test_favorites(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        _create_item(client, auth_headers, name="Other")

        toggled = client.patch(f"/api/vault-items/{item['id']}/favorite", headers=auth_headers)
        assert toggled.json()["item"]["isFavorite"] is True

        favorites = client.get("/api/vault-items/favorites", headers=auth_headers).json()["items"]
        assert [i["id"] for i in favorites] == [item["id"]]

    def test_expiring(self, client, auth_headers):
        soon = _create_item(
            client, auth_headers, name="Card", expiresAt=(utcnow() + timedelta(days=10)).isoformat()
        )
        _create_item(
            client, auth_headers, name="Later", expiresAt=(utcnow() + timedelta(days=90)).isoformat()
        )
        _create_item(
            client, auth_headers, name="Expired", expiresAt=(utcnow() - timedelta(days=1)).isoformat()
        )
        _create_item(client, auth_headers, name="Never")

        expiring = client.get("/api/vault-items/expiring", headers=auth_headers).json()["items"]
        assert [i["id"] for i in expiring] == [soon["id"]]

        wider = client.get(
            "/api/vault-items/expiring", headers=auth_headers, params={"days": 120}
        ).json()["items"]
        assert [i["name"] for i in wider] == ["Card", "Later"]

    def test_category_must_belong_to_user(self, client, auth_headers, other_headers):
        foreign = _create_category(client, other_headers)
        response = client.post(
            "/api/vault-items",
            headers=auth_headers,
            json={"name": "Sneaky", "categoryId": foreign["id"]},
        )
        assert response.status_code == 404

    def test_other_user_cannot_access(self, client, auth_headers, other_headers):
        item = _create_item(client, auth_headers)

        assert client.get(f"/api/vault-items/{item['id']}", headers=other_headers).status_code == 404
        assert client.delete(
            f"/api/vault-items/{item['id']}", headers=other_headers
        ).status_code == 404
        assert client.get(
            f"/api/vault-items/{item['id']}/access-log", headers=other_headers
        ).json()["accessLog"] == []

        # 他ユーザーの失敗したアクセスは閲覧回数に含まれない
        own = client.get(f"/api/vault-items/{item['id']}", headers=auth_headers).json()["item"]
        assert own["accessCount"] == 1
