"""
ユーザー設定エンドポイントのテスト
"""

import pytest
from sqlalchemy.exc import OperationalError

from app.models.session import UserSession
from app.security import verify_password
from app.services.session_service import SessionService
from app.services.user_service import UserService

from conftest import TEST_PASSWORD


class TestProfile:
    """プロフィールのテスト"""

    def test_get_profile(self, client, auth_headers):
        response = client.get("/api/users/profile", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "test@example.com"

    def test_update_profile(self, client, auth_headers):
        """指定した項目のみ更新される"""
        response = client.put(
            "/api/users/profile",
            headers=auth_headers,
            json={"firstName": "Taro"},
        )
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["firstName"] == "Taro"
        assert user["lastName"] == "User"

    def test_profile_requires_auth(self, client):
        assert client.get("/api/users/profile").status_code == 401


class TestChangePassword:
    """パスワード変更のテスト"""

    def test_change_password(self, client, auth_headers):
        response = client.put(
            "/api/users/password",
            headers=auth_headers,
            json={"currentPassword": TEST_PASSWORD, "newPassword": "ChangedPass789"},
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        signin = client.post(
            "/api/auth/signin",
            json={"email": "test@example.com", "password": "ChangedPass789"},
        )
        assert signin.status_code == 200

    def test_change_password_wrong_current(self, client, auth_headers):
        response = client.put(
            "/api/users/password",
            headers=auth_headers,
            json={"currentPassword": "WrongPass123", "newPassword": "ChangedPass789"},
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Current password is incorrect"}

    def test_change_password_revokes_other_sessions(self, client, auth_headers):
        """現在のセッションは残り、他のセッションは失効する"""
        other = client.post(
            "/api/auth/signin",
            json={"email": "test@example.com", "password": TEST_PASSWORD},
        ).json()
        other_headers = {"Authorization": f"Bearer {other['token']}"}

        client.put(
            "/api/users/password",
            headers=auth_headers,
            json={"currentPassword": TEST_PASSWORD, "newPassword": "ChangedPass789"},
        )

        assert client.get("/api/auth/me", headers=auth_headers).status_code == 200
        assert client.get("/api/auth/me", headers=other_headers).status_code == 401

    def test_change_password_weak(self, client, auth_headers):
        response = client.put(
            "/api/users/password",
            headers=auth_headers,
            json={"currentPassword": TEST_PASSWORD, "newPassword": "weak"},
        )
        assert response.status_code == 400

    def test_change_password_over_72_bytes(self, client, auth_headers):
        response = client.put(
            "/api/users/password",
            headers=auth_headers,
            json={"currentPassword": TEST_PASSWORD, "newPassword": "Aa1" + "x" * 90},
        )
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "newPassword"

        # 元のパスワードのまま
        signin = client.post(
            "/api/auth/signin",
            json={"email": "test@example.com", "password": TEST_PASSWORD},
        )
        assert signin.status_code == 200


class TestUpdatePassword:
    """パスワード更新（サービス層）のテスト"""

    def test_keeps_only_given_session(self, db_session, db_user):
        sessions = SessionService(db_session)
        current, _ = sessions.create_session(db_user)
        sessions.create_session(db_user)

        UserService(db_session).update_password(
            db_user, "ChangedPass789", keep_session_id=current.id
        )

        remaining = db_session.query(UserSession).filter(UserSession.user_id == db_user.id).all()
        assert [s.id for s in remaining] == [current.id]
        assert verify_password("ChangedPass789", db_user.password_hash)

    def test_failure_keeps_password_and_sessions(self, db_session, db_user, monkeypatch):
        """セッション失効に失敗した場合はパスワードも変わらない"""
        sessions = SessionService(db_session)
        current, _ = sessions.create_session(db_user)
        sessions.create_session(db_user)

        def failing_revoke(self, *args, **kwargs):
            raise OperationalError("DELETE", {}, Exception("connection lost"))

        monkeypatch.setattr(SessionService, "revoke_all_for_user", failing_revoke)

        with pytest.raises(OperationalError):
            UserService(db_session).update_password(
                db_user, "ChangedPass789", keep_session_id=current.id
            )

        db_session.expire_all()
        assert verify_password(TEST_PASSWORD, db_user.password_hash)
        assert db_session.query(UserSession).filter(UserSession.user_id == db_user.id).count() == 2

class TestDeleteAccount:
    """アカウント削除のテスト"""

    def test_delete_account_removes_owned_data(self, client, auth_headers):
        """アカウント削除で所有データも消え、再ログインできない"""
        client.post("/api/boards", headers=auth_headers, json={"name": "Work"})

        response = client.delete("/api/users/account", headers=auth_headers)
        assert response.status_code == 200

        assert client.get("/api/auth/me", headers=auth_headers).status_code == 401
        signin = client.post(
            "/api/auth/signin",
            json={"email": "test@example.com", "password": TEST_PASSWORD},
        )
        assert signin.status_code == 401
