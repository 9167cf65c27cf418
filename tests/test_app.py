"""
アプリケーション共通部分（ヘルスチェック・エラー形式・クリーンアップバッチ）のテスト
"""

from datetime import timedelta

from sqlalchemy.exc import OperationalError

from app.clock import utcnow
from app.models.inventory import Item, Lending
from app.models.password_reset_token import PasswordResetToken
from app.models.session import UserSession
from app.scripts import run_cleanup
from app.services.cleanup_batch import run_cleanup_batch


class TestHealth:
    """ヘルスチェックのテスト"""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["uptime"] >= 0
        assert "timestamp" in data
        assert "environment" in data

    def test_detailed_health(self, client):
        response = client.get("/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["services"]["database"]["status"] == "connected"
        assert data["services"]["database"]["responseTimeMs"] >= 0

    def test_detailed_health_database_down(self, client, monkeypatch):
        """DBに接続できない場合は 503"""
        def failing_execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr("sqlalchemy.orm.Session.execute", failing_execute)

        response = client.get("/health/detailed")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["services"]["database"]["status"] == "disconnected"


class TestApiShell:
    """API 情報・共通エラー形式のテスト"""

    def test_api_info(self, client):
        response = client.get("/api")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["endpoints"]["auth"] == "/api/auth"

    def test_unknown_route(self, client):
        response = client.get("/api/unknown")
        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "NotFound"
        assert data["message"] == "Route GET:/api/unknown not found"
        assert data["statusCode"] == 404
        assert "timestamp" in data

    def test_validation_error_shape(self, client):
        response = client.post("/api/auth/signin", json={"email": "test@example.com"})
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "ValidationError"
        assert data["message"] == "Invalid request data"
        assert {"field": "password", "message": "Field required"} in data["details"]

    def test_security_headers(self, client):
        response = client.get("/health")
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"


class TestCleanupBatch:
    """クリーンアップバッチのテスト"""

    def test_run_cleanup_batch(self, db_session, db_user):
        now = utcnow()
        db_session.add_all([
            PasswordResetToken(user_id=db_user.id, token="expired", expires_at=now - timedelta(minutes=1)),
            PasswordResetToken(user_id=db_user.id, token="valid", expires_at=now + timedelta(hours=1)),
            UserSession(user_id=db_user.id, expires_at=now - timedelta(days=1)),
            UserSession(user_id=db_user.id, expires_at=now + timedelta(days=1)),
        ])
        item = Item(user_id=db_user.id, name="Camera", is_lent=True)
        db_session.add(item)
        db_session.flush()
        db_session.add_all([
            Lending(
                user_id=db_user.id,
                item_id=item.id,
                borrower_name="Sato",
                expected_return_date=now - timedelta(days=2),
            ),
            Lending(
                user_id=db_user.id,
                item_id=item.id,
                borrower_name="Suzuki",
                expected_return_date=now + timedelta(days=2),
            ),
        ])
        db_session.commit()

        result = run_cleanup_batch(db_session)

        assert result["status"] == "completed"
        assert result["expired_tokens"] == 1
        assert result["expired_sessions"] == 1
        assert result["overdue_lendings"] == 1
        assert result["duration_seconds"] >= 0

        assert [t.token for t in db_session.query(PasswordResetToken).all()] == ["valid"]
        assert db_session.query(UserSession).count() == 1
        statuses = {l.borrower_name: l.status for l in db_session.query(Lending).all()}
        assert statuses == {"Sato": "overdue", "Suzuki": "active"}

    def test_run_cleanup_batch_with_nothing_to_do(self, db_session):
        result = run_cleanup_batch(db_session)
        assert result["expired_tokens"] == 0
        assert result["expired_sessions"] == 0
        assert result["overdue_lendings"] == 0

    def test_script_main(self, monkeypatch, capsys):
        monkeypatch.setattr(
            run_cleanup,
            "run_cleanup_batch",
            lambda: {
                "status": "completed",
                "expired_tokens": 2,
                "expired_sessions": 0,
                "overdue_lendings": 1,
                "duration_seconds": 0.01,
            },
        )
        assert run_cleanup.main() == 0
        assert "期限切れリセットトークン削除: 2件" in capsys.readouterr().out

    def test_script_main_failure(self, monkeypatch, capsys):
        def failing():
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(run_cleanup, "run_cleanup_batch", failing)
        assert run_cleanup.main() == 1
        assert "database unavailable" in capsys.readouterr().out
