"""
テスト用の共通設定・フィクスチャ
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# テスト用の環境変数を設定（app.mainをインポートする前に設定）
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RESEND_API_KEY"] = ""
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")

from app.main import app
from app.database import get_db, Base
from app.services.user_service import UserService


TEST_PASSWORD = "TestPassword123"

# テスト用のインメモリSQLiteデータベース
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """テスト用のDBセッションを提供"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db_session():
    """各テスト用のDBセッション"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """テスト用のAPIクライアント"""
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def signup(client, email: str, password: str = TEST_PASSWORD) -> dict:
    """APIからユーザー登録し、レスポンスを返す"""
    response = client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "firstName": "Test", "lastName": "User"},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def test_user(client):
    """テスト用ユーザーを作成（登録レスポンスを返す）"""
    return signup(client, "test@example.com")


@pytest.fixture
def auth_headers(test_user):
    """認証ヘッダーを取得"""
    return {"Authorization": f"Bearer {test_user['token']}"}


@pytest.fixture
def other_headers(client):
    """別ユーザーの認証ヘッダー（データ分離の確認用）"""
    data = signup(client, "other@example.com")
    return {"Authorization": f"Bearer {data['token']}"}


@pytest.fixture
def db_user(db_session):
    """サービス層テスト用のユーザー"""
    return UserService(db_session).create_user(
        email="reset@example.com", password=TEST_PASSWORD
    )


@pytest.fixture
def signup_user(client):
    """任意のメールアドレスでユーザーを登録する関数"""
    def _signup(email: str, password: str = TEST_PASSWORD) -> dict:
        return signup(client, email, password)
    return _signup
