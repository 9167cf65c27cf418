"""
Day Tracker（ボード・タスク・日記）エンドポイントのテスト
"""

from datetime import timedelta

from app.clock import utcnow


def _create_board(client, headers, name="Work", **extra):
    response = client.post("/api/boards", headers=headers, json={"name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()["board"]


def _create_task(client, headers, title="Write report", **extra):
    response = client.post("/api/tasks", headers=headers, json={"title": title, **extra})
    assert response.status_code == 201, response.text
    return response.json()["task"]


class TestBoards:
    """ボードのテスト"""

    def test_create_and_list(self, client, auth_headers):
        board = _create_board(client, auth_headers, color="#112233")
        assert board["name"] == "Work"
        assert board["color"] == "#112233"
        assert board["isArchived"] is False

        response = client.get("/api/boards", headers=auth_headers)
        assert response.status_code == 200
        assert [b["id"] for b in response.json()["boards"]] == [board["id"]]

    def test_default_color(self, client, auth_headers):
        board = _create_board(client, auth_headers)
        assert board["color"] == "#0078d4"

    def test_invalid_color(self, client, auth_headers):
        response = client.post(
            "/api/boards", headers=auth_headers, json={"name": "Bad", "color": "red"}
        )
        assert response.status_code == 400

    def test_update(self, client, auth_headers):
        board = _create_board(client, auth_headers)
        response = client.put(
            f"/api/boards/{board['id']}", headers=auth_headers, json={"name": "Home"}
        )
        assert response.status_code == 200
        updated = response.json()["board"]
        assert updated["name"] == "Home"
        assert updated["color"] == board["color"]

    def test_archive_hides_from_list(self, client, auth_headers):
        board = _create_board(client, auth_headers)
        response = client.patch(f"/api/boards/{board['id']}/archive", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Board archived successfully"}

        assert client.get("/api/boards", headers=auth_headers).json()["boards"] == []
        # アーカイブ済みでも個別取得はできる
        detail = client.get(f"/api/boards/{board['id']}", headers=auth_headers)
        assert detail.json()["board"]["isArchived"] is True

    def test_delete_cascades_tasks(self, client, auth_headers):
        board = _create_board(client, auth_headers)
        task = _create_task(client, auth_headers, boardId=board["id"])

        response = client.delete(f"/api/boards/{board['id']}", headers=auth_headers)
        assert response.status_code == 200

        assert client.get(f"/api/boards/{board['id']}", headers=auth_headers).status_code == 404
        assert client.get(f"/api/tasks/{task['id']}", headers=auth_headers).status_code == 404

    def test_reorder(self, client, auth_headers):
        first = _create_board(client, auth_headers, name="First")
        second = _create_board(client, auth_headers, name="Second", sortOrder=1)

        response = client.patch(
            "/api/boards/reorder",
            headers=auth_headers,
            json={"boardOrders": [
                {"id": first["id"], "sortOrder": 2},
                {"id": second["id"], "sortOrder": 0},
            ]},
        )
        assert response.status_code == 200

        boards = client.get("/api/boards", headers=auth_headers).json()["boards"]
        assert [b["name"] for b in boards] == ["Second", "First"]

    def test_not_found(self, client, auth_headers):
        response = client.get("/api/boards/missing", headers=auth_headers)
        assert response.status_code == 404
        data = response.json()
        assert data["message"] == "Board not found"
        assert data["error"] == "NotFoundError"

    def test_requires_auth(self, client):
        assert client.get("/api/boards").status_code == 401

    def test_other_user_cannot_access(self, client, auth_headers, other_headers):
        """他ユーザーのボードは存在しない扱い"""
        board = _create_board(client, auth_headers)

        assert client.get("/api/boards", headers=other_headers).json()["boards"] == []
        assert client.get(f"/api/boards/{board['id']}", headers=other_headers).status_code == 404
        assert client.put(
            f"/api/boards/{board['id']}", headers=other_headers, json={"name": "Hijacked"}
        ).status_code == 404
        assert client.delete(f"/api/boards/{board['id']}", headers=other_headers).status_code == 404

        # 他ユーザーの並び替えは無視される
        client.patch(
            "/api/boards/reorder",
            headers=other_headers,
            json={"boardOrders": [{"id": board["id"], "sortOrder": 9}]},
        )
        detail = client.get(f"/api/boards/{board['id']}", headers=auth_headers).json()["board"]
        assert detail["sortOrder"] == 0
        assert detail["name"] == "Work"


class TestTasks:
    """タスクのテスト"""

    def test_create_defaults(self, client, auth_headers):
        task = _create_task(client, auth_headers)
        assert task["status"] == "todo"
        assert task["priority"] == "medium"
        assert task["boardId"] is None
        assert task["completedAt"] is None

    def test_invalid_status(self, client, auth_headers):
        response = client.post(
            "/api/tasks", headers=auth_headers, json={"title": "x", "status": "waiting"}
        )
        assert response.status_code == 400

    def test_filter_by_board_and_status(self, client, auth_headers):
        board = _create_board(client, auth_headers)
        on_board = _create_task(client, auth_headers, title="On board", boardId=board["id"])
        _create_task(client, auth_headers, title="Inbox")
        _create_task(client, auth_headers, title="Done", boardId=board["id"], status="done")

        by_board = client.get(
            "/api/tasks", headers=auth_headers, params={"boardId": board["id"], "status": "todo"}
        ).json()["tasks"]
        assert [t["id"] for t in by_board] == [on_board["id"]]

        inbox = client.get("/api/tasks/inbox", headers=auth_headers).json()["tasks"]
        assert [t["title"] for t in inbox] == ["Inbox"]

    def test_create_done_sets_completed_at(self, client, auth_headers):
        task = _create_task(client, auth_headers, status="done")
        assert task["completedAt"] is not None

    def test_complete(self, client, auth_headers):
        task = _create_task(client, auth_headers)
        response = client.patch(f"/api/tasks/{task['id']}/complete", headers=auth_headers)
        assert response.status_code == 200
        completed = response.json()["task"]
        assert completed["status"] == "done"
        assert completed["completedAt"] is not None

    def test_overdue(self, client, auth_headers):
        past = (utcnow() - timedelta(days=2)).isoformat()
        older = (utcnow() - timedelta(days=5)).isoformat()
        future = (utcnow() + timedelta(days=2)).isoformat()
        late = _create_task(client, auth_headers, title="Late", dueDate=past)
        later = _create_task(client, auth_headers, title="Very late", dueDate=older, status="in-progress")
        _create_task(client, auth_headers, title="Upcoming", dueDate=future)
        _create_task(client, auth_headers, title="Finished", dueDate=past, status="done")

        overdue = client.get("/api/tasks/overdue", headers=auth_headers).json()["tasks"]
        assert [t["id"] for t in overdue] == [later["id"], late["id"]]

    def test_board_must_belong_to_user(self, client, auth_headers, other_headers):
        """他ユーザーのボードにはタスクを作れない"""
        board = _create_board(client, other_headers)
        response = client.post(
            "/api/tasks", headers=auth_headers, json={"title": "Sneaky", "boardId": board["id"]}
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Board not found"

    def test_update_board_must_belong_to_user(self, client, auth_headers, other_headers):
        board = _create_board(client, other_headers)
        task = _create_task(client, auth_headers)
        response = client.put(
            f"/api/tasks/{task['id']}", headers=auth_headers, json={"boardId": board["id"]}
        )
        assert response.status_code == 404

    def test_reorder_moves_between_boards(self, client, auth_headers):
        board = _create_board(client, auth_headers)
        task = _create_task(client, auth_headers)
        response = client.patch(
            "/api/tasks/reorder",
            headers=auth_headers,
            json={"taskOrders": [{"id": task["id"], "sortOrder": 3, "boardId": board["id"]}]},
        )
        assert response.status_code == 200

        moved = client.get(f"/api/tasks/{task['id']}", headers=auth_headers).json()["task"]
        assert moved["boardId"] == board["id"]
        assert moved["sortOrder"] == 3

    def test_reorder_without_board_keeps_board(self, client, auth_headers):
        board = _create_board(client, auth_headers)
        task = _create_task(client, auth_headers, boardId=board["id"])
        client.patch(
            "/api/tasks/reorder",
            headers=auth_headers,
            json={"taskOrders": [{"id": task["id"], "sortOrder": 1}]},
        )
        moved = client.get(f"/api/tasks/{task['id']}", headers=auth_headers).json()["task"]
        assert moved["boardId"] == board["id"]

    def test_other_user_cannot_access(self, client, auth_headers, other_headers):
        task = _create_task(client, auth_headers)
        assert client.get(f"/api/tasks/{task['id']}", headers=other_headers).status_code == 404
        assert client.patch(
            f"/api/tasks/{task['id']}/complete", headers=other_headers
        ).status_code == 404
        assert client.get("/api/tasks", headers=other_headers).json()["tasks"] == []


class TestJournals:
    """日記のテスト"""

    def _create(self, client, headers, **fields):
        body = {"date": "2026-03-01T08:00:00", **fields}
        response = client.post("/api/journals", headers=headers, json=body)
        assert response.status_code == 201, response.text
        return response.json()["journal"]

    def test_create_and_get_by_date(self, client, auth_headers):
        journal = self._create(client, auth_headers, title="Good day", mood="happy")

        response = client.get("/api/journals/date/2026-03-01", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["journal"]["id"] == journal["id"]

        missing = client.get("/api/journals/date/2026-03-02", headers=auth_headers)
        assert missing.status_code == 404

    def test_energy_level_range(self, client, auth_headers):
        response = client.post(
            "/api/journals",
            headers=auth_headers,
            json={"date": "2026-03-01T08:00:00", "energyLevel": 11},
        )
        assert response.status_code == 400

    def test_list_newest_first_with_paging(self, client, auth_headers):
        self._create(client, auth_headers, date="2026-03-01T08:00:00", title="first")
        self._create(client, auth_headers, date="2026-03-03T08:00:00", title="third")
        self._create(client, auth_headers, date="2026-03-02T08:00:00", title="second")

        journals = client.get("/api/journals", headers=auth_headers).json()["journals"]
        assert [j["title"] for j in journals] == ["third", "second", "first"]

        page = client.get(
            "/api/journals", headers=auth_headers, params={"limit": 1, "offset": 1}
        ).json()["journals"]
        assert [j["title"] for j in page] == ["second"]

    def test_range(self, client, auth_headers):
        self._create(client, auth_headers, date="2026-03-01T08:00:00", title="in")
        self._create(client, auth_headers, date="2026-04-01T08:00:00", title="out")

        response = client.get(
            "/api/journals/range",
            headers=auth_headers,
            params={"startDate": "2026-02-28T00:00:00", "endDate": "2026-03-31T00:00:00"},
        )
        assert [j["title"] for j in response.json()["journals"]] == ["in"]

    def test_range_start_after_end(self, client, auth_headers):
        response = client.get(
            "/api/journals/range",
            headers=auth_headers,
            params={"startDate": "2026-03-31T00:00:00", "endDate": "2026-03-01T00:00:00"},
        )
        assert response.status_code == 400

    def test_mood_and_search(self, client, auth_headers):
        self._create(client, auth_headers, title="Hike", mood="happy", reflections="Mountain air")
        self._create(client, auth_headers, date="2026-03-02T08:00:00", title="Rain", mood="sad")

        happy = client.get("/api/journals/mood/happy", headers=auth_headers).json()["journals"]
        assert [j["title"] for j in happy] == ["Hike"]

        found = client.get(
            "/api/journals/search", headers=auth_headers, params={"q": "mountain"}
        ).json()["journals"]
        assert [j["title"] for j in found] == ["Hike"]

    def test_recent(self, client, auth_headers):
        recent_date = (utcnow() - timedelta(days=1)).isoformat()
        self._create(client, auth_headers, date=recent_date, title="recent")
        self._create(client, auth_headers, date="2020-01-01T00:00:00", title="old")

        journals = client.get(
            "/api/journals/recent", headers=auth_headers, params={"days": 7}
        ).json()["journals"]
        assert [j["title"] for j in journals] == ["recent"]

    def test_stats(self, client, auth_headers):
        self._create(client, auth_headers, mood="happy", energyLevel=8, productivityScore=6)
        self._create(client, auth_headers, date="2026-03-02T08:00:00", mood="happy", energyLevel=6)
        self._create(client, auth_headers, date="2026-03-03T08:00:00", mood="tired")

        stats = client.get("/api/journals/stats", headers=auth_headers).json()["stats"]
        assert stats == {
            "totalEntries": 3,
            "averageEnergyLevel": 7.0,
            "averageProductivityScore": 6.0,
            "mostCommonMood": "happy",
        }

    def test_stats_empty(self, client, auth_headers):
        stats = client.get("/api/journals/stats", headers=auth_headers).json()["stats"]
        assert stats["totalEntries"] == 0
        assert stats["averageEnergyLevel"] is None

    def test_update_and_delete(self, client, auth_headers):
        journal = self._create(client, auth_headers)
        updated = client.put(
            f"/api/journals/{journal['id']}", headers=auth_headers, json={"mood": "calm"}
        ).json()["journal"]
        assert updated["mood"] == "calm"

        assert client.delete(f"/api/journals/{journal['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/api/journals/{journal['id']}", headers=auth_headers).status_code == 404

    def test_other_user_cannot_access(self, client, auth_headers, other_headers):
        journal = self._create(client, auth_headers, title="Private")
        assert client.get(f"/api/journals/{journal['id']}", headers=other_headers).status_code == 404
        assert client.get("/api/journals/date/2026-03-01", headers=other_headers).status_code == 404
        found = client.get(
            "/api/journals/search", headers=other_headers, params={"q": "Private"}
        ).json()["journals"]
        assert found == []
