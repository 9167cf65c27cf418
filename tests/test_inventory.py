"""
Inventory（保管場所・持ち物・貸出）エンドポイントのテスト
"""

from datetime import timedelta

from app.clock import utcnow


def _create_location(client, headers, name="Living room", **extra):
    response = client.post("/api/locations", headers=headers, json={"name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()["location"]


def _create_item(client, headers, name="Camera", **extra):
    response = client.post("/api/items", headers=headers, json={"name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()["item"]


def _lend(client, headers, item_id, **extra):
    body = {"itemId": item_id, "borrowerName": "Sato", **extra}
    response = client.post("/api/lendings", headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()["lending"]


def _get_item(client, headers, item_id):
    return client.get(f"/api/items/{item_id}", headers=headers).json()["item"]


class TestLocations:
    """保管場所（階層構造）のテスト"""

    def test_tree_and_type_filter(self, client, auth_headers):
        room = _create_location(client, auth_headers, locationType="room")
        shelf = _create_location(
            client, auth_headers, name="Bookshelf", locationType="shelf", parentId=room["id"]
        )

        roots = client.get("/api/locations/root", headers=auth_headers).json()["locations"]
        assert [l["id"] for l in roots] == [room["id"]]

        children = client.get(
            f"/api/locations/{room['id']}/children", headers=auth_headers
        ).json()["locations"]
        assert [l["id"] for l in children] == [shelf["id"]]

        shelves = client.get(
            "/api/locations", headers=auth_headers, params={"type": "shelf"}
        ).json()["locations"]
        assert [l["id"] for l in shelves] == [shelf["id"]]

    def test_cannot_be_own_parent(self, client, auth_headers):
        location = _create_location(client, auth_headers)
        response = client.put(
            f"/api/locations/{location['id']}",
            headers=auth_headers,
            json={"parentId": location["id"]},
        )
        assert response.status_code == 400

    def test_reorder(self, client, auth_headers):
        first = _create_location(client, auth_headers, name="First")
        second = _create_location(client, auth_headers, name="Second")
        client.patch(
            "/api/locations/reorder",
            headers=auth_headers,
            json={"locationOrders": [
                {"id": first["id"], "sortOrder": 1},
                {"id": second["id"], "sortOrder": 0},
            ]},
        )
        listed = client.get("/api/locations", headers=auth_headers).json()["locations"]
        assert [l["name"] for l in listed] == ["Second", "First"]

    def test_delete_unassigns_items(self, client, auth_headers):
        location = _create_location(client, auth_headers)
        item = _create_item(client, auth_headers, locationId=location["id"])

        assert client.delete(f"/api/locations/{location['id']}", headers=auth_headers).status_code == 200
        assert _get_item(client, auth_headers, item["id"])["locationId"] is None

    def test_other_user_cannot_access(self, client, auth_headers, other_headers):
        location = _create_location(client, auth_headers)
        assert client.get(
            f"/api/locations/{location['id']}", headers=other_headers
        ).status_code == 404
        assert client.patch(
            f"/api/locations/{location['id']}/archive", headers=other_headers
        ).status_code == 404


class TestItems:
    """持ち物のテスト"""

    def test_create_defaults(self, client, auth_headers):
        item = _create_item(client, auth_headers, purchasePrice=49800)
        assert item["purchasePrice"] == 49800
        for flag in ("isFavorite", "isLost", "isBroken", "isLent", "isArchived"):
            assert item[flag] is False
        assert item["lastUsedAt"] is None

    def test_get_records_last_used(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        assert _get_item(client, auth_headers, item["id"])["lastUsedAt"] is not None

    def test_location_must_belong_to_user(self, client, auth_headers, other_headers):
        foreign = _create_location(client, other_headers)
        response = client.post(
            "/api/items", headers=auth_headers, json={"name": "Sneaky", "locationId": foreign["id"]}
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Location not found"

    def test_move_records_history(self, client, auth_headers):
        room = _create_location(client, auth_headers)
        closet = _create_location(client, auth_headers, name="Closet")
        item = _create_item(client, auth_headers, locationId=room["id"])

        moved = client.patch(
            f"/api/items/{item['id']}/move",
            headers=auth_headers,
            json={"locationId": closet["id"], "reason": "cleanup", "notes": "Top shelf"},
        )
        assert moved.status_code == 200
        assert moved.json()["item"]["locationId"] == closet["id"]

        client.patch(f"/api/items/{item['id']}/move", headers=auth_headers, json={"locationId": None})

        history = client.get(f"/api/items/{item['id']}/history", headers=auth_headers).json()["history"]
        assert len(history) == 2
        latest, first = history
        assert first["fromLocationId"] == room["id"]
        assert first["toLocationId"] == closet["id"]
        assert first["reason"] == "cleanup"
        assert first["notes"] == "Top shelf"
        assert latest["fromLocationId"] == closet["id"]
        assert latest["toLocationId"] is None
        assert latest["reason"] == "manual_move"

    def test_move_to_missing_location(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        response = client.patch(
            f"/api/items/{item['id']}/move", headers=auth_headers, json={"locationId": "missing"}
        )
        assert response.status_code == 404
        history = client.get(f"/api/items/{item['id']}/history", headers=auth_headers).json()["history"]
        assert history == []

    def test_flags(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        _create_item(client, auth_headers, name="Bicycle")

        for flag, path in (("isFavorite", "favorite"), ("isLost", "lost"), ("isBroken", "broken")):
            response = client.patch(f"/api/items/{item['id']}/{path}", headers=auth_headers)
            assert response.json()["item"][flag] is True

        for path in ("favorites", "lost", "broken"):
            listed = client.get(f"/api/items/{path}", headers=auth_headers).json()["items"]
            assert [i["id"] for i in listed] == [item["id"]]

    def test_search_and_filters(self, client, auth_headers):
        location = _create_location(client, auth_headers)
        camera = _create_item(
            client, auth_headers, brand="Fujifilm", category="electronics", locationId=location["id"]
        )
        _create_item(client, auth_headers, name="Tent", category="outdoor")

        assert [i["id"] for i in client.get(
            "/api/items", headers=auth_headers, params={"search": "fuji"}
        ).json()["items"]] == [camera["id"]]
        assert [i["name"] for i in client.get(
            "/api/items", headers=auth_headers, params={"category": "outdoor"}
        ).json()["items"]] == ["Tent"]
        assert [i["id"] for i in client.get(
            "/api/items", headers=auth_headers, params={"locationId": location["id"]}
        ).json()["items"]] == [camera["id"]]

    def test_lookup_by_barcode_and_custom_id(self, client, auth_headers, other_headers):
        item = _create_item(client, auth_headers, barcode="4901234567894", customId="CAM-01")

        by_barcode = client.get("/api/items/barcode/4901234567894", headers=auth_headers)
        assert by_barcode.json()["item"]["id"] == item["id"]
        by_custom = client.get("/api/items/custom/CAM-01", headers=auth_headers)
        assert by_custom.json()["item"]["id"] == item["id"]

        assert client.get("/api/items/barcode/0000", headers=auth_headers).status_code == 404
        assert client.get(
            "/api/items/barcode/4901234567894", headers=other_headers
        ).status_code == 404

    def test_maintenance(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        next_due = (utcnow() + timedelta(days=180)).replace(microsecond=0)

        response = client.post(
            f"/api/items/{item['id']}/maintenance",
            headers=auth_headers,
            json={
                "maintenanceType": "cleaning",
                "cost": 1500,
                "nextDueDate": next_due.isoformat(),
            },
        )
        assert response.status_code == 201
        record = response.json()["maintenance"]
        assert record["maintenanceType"] == "cleaning"
        assert record["itemId"] == item["id"]
        assert record["performedAt"] is not None

        history = client.get(
            f"/api/items/{item['id']}/maintenance", headers=auth_headers
        ).json()["maintenance"]
        assert [r["id"] for r in history] == [record["id"]]

        # 次回予定日は持ち物にも反映される
        assert _get_item(client, auth_headers, item["id"])["nextMaintenanceDate"].startswith(
            next_due.isoformat()
        )

    def test_maintenance_due_and_warranty_expiring(self, client, auth_headers):
        overdue = _create_item(
            client,
            auth_headers,
            name="Air filter",
            nextMaintenanceDate=(utcnow() - timedelta(days=3)).isoformat(),
        )
        _create_item(
            client,
            auth_headers,
            name="Boiler",
            nextMaintenanceDate=(utcnow() + timedelta(days=30)).isoformat(),
        )
        warranty = _create_item(
            client,
            auth_headers,
            name="Laptop",
            warrantyExpiresAt=(utcnow() + timedelta(days=15)).isoformat(),
        )
        _create_item(
            client,
            auth_headers,
            name="Phone",
            warrantyExpiresAt=(utcnow() - timedelta(days=15)).isoformat(),
        )

        due = client.get("/api/items/maintenance-due", headers=auth_headers).json()["items"]
        assert [i["id"] for i in due] == [overdue["id"]]

        expiring = client.get(
            "/api/items/warranty-expiring", headers=auth_headers, params={"days": 30}
        ).json()["items"]
        assert [i["id"] for i in expiring] == [warranty["id"]]

    def test_archive_and_delete(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        client.patch(f"/api/items/{item['id']}/archive", headers=auth_headers)
        assert client.get("/api/items", headers=auth_headers).json()["items"] == []

        assert client.delete(f"/api/items/{item['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/api/items/{item['id']}", headers=auth_headers).status_code == 404

    def test_other_user_cannot_access(self, client, auth_headers, other_headers):
        item = _create_item(client, auth_headers)
        assert client.get(f"/api/items/{item['id']}", headers=other_headers).status_code == 404
        assert client.patch(
            f"/api/items/{item['id']}/move", headers=other_headers, json={"locationId": None}
        ).status_code == 404
        assert client.get(
            f"/api/items/{item['id']}/history", headers=other_headers
        ).status_code == 404


class TestLendings:
    """貸出のテスト"""

    def test_lend_and_return(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        lending = _lend(client, auth_headers, item["id"], borrowerEmail="sato@example.com")
        assert lending["status"] == "active"
        assert lending["lentDate"] is not None
        assert _get_item(client, auth_headers, item["id"])["isLent"] is True

        lent = client.get("/api/items/lent", headers=auth_headers).json()["items"]
        assert [i["id"] for i in lent] == [item["id"]]

        returned = client.patch(
            f"/api/lendings/{lending['id']}/return",
            headers=auth_headers,
            json={"conditionWhenReturned": "good"},
        ).json()["lending"]
        assert returned["status"] == "returned"
        assert returned["actualReturnDate"] is not None
        assert returned["conditionWhenReturned"] == "good"
        assert _get_item(client, auth_headers, item["id"])["isLent"] is False

    def test_return_without_body(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        lending = _lend(client, auth_headers, item["id"])
        response = client.patch(f"/api/lendings/{lending['id']}/return", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["lending"]["status"] == "returned"

    def test_invalid_borrower_email(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        response = client.post(
            "/api/lendings",
            headers=auth_headers,
            json={"itemId": item["id"], "borrowerName": "Sato", "borrowerEmail": "nope"},
        )
        assert response.status_code == 400

    def test_cannot_lend_other_users_item(self, client, auth_headers, other_headers):
        foreign = _create_item(client, other_headers)
        response = client.post(
            "/api/lendings",
            headers=auth_headers,
            json={"itemId": foreign["id"], "borrowerName": "Sato"},
        )
        assert response.status_code == 404
        assert _get_item(client, other_headers, foreign["id"])["isLent"] is False

    def test_mark_lost(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        lending = _lend(client, auth_headers, item["id"])

        lost = client.patch(f"/api/lendings/{lending['id']}/lost", headers=auth_headers)
        assert lost.json()["lending"]["status"] == "lost"

        updated = _get_item(client, auth_headers, item["id"])
        assert updated["isLost"] is True
        assert updated["isLent"] is False

    def test_mark_overdue_and_reminder(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        lending = _lend(client, auth_headers, item["id"])

        overdue = client.patch(
            f"/api/lendings/{lending['id']}/overdue", headers=auth_headers
        ).json()["lending"]
        assert overdue["status"] == "overdue"
        assert overdue["isOverdue"] is True

        reminded = client.patch(
            f"/api/lendings/{lending['id']}/reminder", headers=auth_headers
        ).json()["lending"]
        assert reminded["reminderSent"] is True
        assert reminded["lastReminderDate"] is not None

        listed = client.get("/api/lendings/overdue", headers=auth_headers).json()["lendings"]
        assert [l["id"] for l in listed] == [lending["id"]]

    def test_check_overdue(self, client, auth_headers, other_headers):
        """返却予定日を過ぎた貸出中の記録だけが延滞になる（他ユーザー分は対象外）"""
        past = (utcnow() - timedelta(days=1)).isoformat()
        future = (utcnow() + timedelta(days=7)).isoformat()

        late = _lend(client, auth_headers, _create_item(client, auth_headers)["id"],
                     expectedReturnDate=past)
        _lend(client, auth_headers, _create_item(client, auth_headers, name="Tent")["id"],
              expectedReturnDate=future)
        _lend(client, auth_headers, _create_item(client, auth_headers, name="Drill")["id"])
        foreign = _lend(client, other_headers, _create_item(client, other_headers)["id"],
                        expectedReturnDate=past)

        response = client.post("/api/lendings/check-overdue", headers=auth_headers)
        assert response.status_code == 200
        assert [l["id"] for l in response.json()["lendings"]] == [late["id"]]

        updated = client.get(f"/api/lendings/{late['id']}", headers=auth_headers).json()["lending"]
        assert updated["status"] == "overdue"
        assert updated["isOverdue"] is True

        untouched = client.get(
            f"/api/lendings/{foreign['id']}", headers=other_headers
        ).json()["lending"]
        assert untouched["status"] == "active"

        # 二回目は対象なし
        again = client.post("/api/lendings/check-overdue", headers=auth_headers)
        assert again.json()["lendings"] == []

    def test_stats_and_filters(self, client, auth_headers):
        first = _lend(client, auth_headers, _create_item(client, auth_headers)["id"],
                      purpose="Weekend trip")
        second = _lend(client, auth_headers, _create_item(client, auth_headers, name="Tent")["id"],
                       borrowerName="Suzuki")
        client.patch(f"/api/lendings/{second['id']}/return", headers=auth_headers)

        stats = client.get("/api/lendings/stats", headers=auth_headers).json()["stats"]
        assert stats == {"total": 2, "active": 1, "overdue": 0, "returned": 1, "lost": 0}

        active = client.get("/api/lendings/active", headers=auth_headers).json()["lendings"]
        assert [l["id"] for l in active] == [first["id"]]

        returned = client.get(
            "/api/lendings", headers=auth_headers, params={"status": "returned"}
        ).json()["lendings"]
        assert [l["id"] for l in returned] == [second["id"]]

        found = client.get(
            "/api/lendings", headers=auth_headers, params={"search": "weekend"}
        ).json()["lendings"]
        assert [l["id"] for l in found] == [first["id"]]

    def test_history_for_item(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        first = _lend(client, auth_headers, item["id"])
        client.patch(f"/api/lendings/{first['id']}/return", headers=auth_headers)
        second = _lend(client, auth_headers, item["id"], borrowerName="Suzuki")

        history = client.get(
            f"/api/lendings/item/{item['id']}", headers=auth_headers
        ).json()["lendings"]
        assert {l["id"] for l in history} == {first["id"], second["id"]}

    def test_update_cannot_change_item(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        other_item = _create_item(client, auth_headers, name="Tent")
        lending = _lend(client, auth_headers, item["id"])

        updated = client.put(
            f"/api/lendings/{lending['id']}",
            headers=auth_headers,
            json={"borrowerName": "Tanaka", "itemId": other_item["id"]},
        ).json()["lending"]
        assert updated["borrowerName"] == "Tanaka"
        assert updated["itemId"] == item["id"]

    def test_delete_outstanding_lending_clears_flag(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        lending = _lend(client, auth_headers, item["id"])

        response = client.delete(f"/api/lendings/{lending['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert _get_item(client, auth_headers, item["id"])["isLent"] is False
        assert client.get(f"/api/lendings/{lending['id']}", headers=auth_headers).status_code == 404

    def test_other_user_cannot_access(self, client, auth_headers, other_headers):
        item = _create_item(client, auth_headers)
        lending = _lend(client, auth_headers, item["id"])

        assert client.get(f"/api/lendings/{lending['id']}", headers=other_headers).status_code == 404
        assert client.patch(
            f"/api/lendings/{lending['id']}/return", headers=other_headers
        ).status_code == 404
        assert client.get("/api/lendings", headers=other_headers).json()["lendings"] == []
        assert _get_item(client, auth_headers, item["id"])["isLent"] is True
