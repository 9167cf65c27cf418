"""
認証 API エンドポイント
登録・ログイン・ログアウト・パスワードリセット
"""
import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import (
    get_client_ip,
    get_current_auth,
    get_current_session,
    get_user_agent,
)
from app.errors import AuthenticationError
from app.models.session import UserSession
from app.rate_limiter import limiter
from app.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    MeResponse,
    ResetPasswordRequest,
    SessionResponse,
    SigninRequest,
    SignupRequest,
    UserResponse,
)
from app.schemas.common import SuccessResponse
from app.security import verify_password
from app.services.password_reset_service import PasswordResetService
from app.services.session_service import SessionService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(message: str, user, session, token: str) -> AuthResponse:
    return AuthResponse(
        success=True,
        message=message,
        token=token,
        user=UserResponse.model_validate(user),
        session=SessionResponse.model_validate(session),
    )


def _failure(message: str) -> JSONResponse:
    """業務上の失敗（無効なトークンなど）を 400 で返す"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=SuccessResponse(success=False, message=message).model_dump(by_alias=True),
    )


# ============================================
# 登録・ログイン
# ============================================
@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="ユーザー登録",
    responses={409: {"description": "メールアドレスが登録済み"}},
)
def signup(payload: SignupRequest, request: Request, db: Session = Depends(get_db)):
    """ユーザー登録（登録後はそのままログイン状態になる）"""
    user = UserService(db).create_user(
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    session, token = SessionService(db).create_session(
        user, user_agent=get_user_agent(request), ip_address=get_client_ip(request)
    )
    return _auth_response("Account created successfully", user, session, token)


@router.post(
    "/signin",
    response_model=AuthResponse,
    summary="ログイン",
    responses={401: {"description": "メールアドレスまたはパスワードが不正"}},
)
def signin(payload: SigninRequest, request: Request, db: Session = Depends(get_db)):
    """ユーザーログイン"""
    user = UserService(db).get_user_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("ログイン失敗: 認証情報が不正")
        raise AuthenticationError("Invalid email or password")

    session, token = SessionService(db).create_session(
        user, user_agent=get_user_agent(request), ip_address=get_client_ip(request)
    )
    logger.info(f"ログイン成功: user_id={user.id}")
    return _auth_response("Signed in successfully", user, session, token)


@router.post("/signout", response_model=SuccessResponse, summary="ログアウト")
def signout(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """現在のセッションを失効させる"""
    # revoke() のコミット後は削除済みの行を参照できない
    user_id, session_id = session.user_id, session.id
    SessionService(db).revoke(session_id)
    logger.info(f"ログアウト: user_id={user_id}")
    return SuccessResponse(success=True, message="Signed out successfully")


@router.get("/me", response_model=MeResponse, summary="ログインユーザー情報")
def get_me(auth=Depends(get_current_auth)):
    """現在のログインユーザーとセッションを取得"""
    user, session = auth
    return MeResponse(
        user=UserResponse.model_validate(user),
        session=SessionResponse.model_validate(session),
    )


# ============================================
# パスワードリセット
# ============================================
@router.post(
    "/forgot-password",
    response_model=SuccessResponse,
    summary="パスワードリセット要求",
    responses={429: {"description": "リクエストが多すぎる"}},
)
@limiter.limit(settings.FORGOT_PASSWORD_RATE_LIMIT)
def forgot_password(
    payload: ForgotPasswordRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    パスワードリセットリクエスト

    メールアドレスに対してパスワードリセット用のメールを送信します。
    セキュリティ上、メールアドレスが存在しない場合も同じレスポンスを返します。
    """
    result = PasswordResetService(db).request_reset(payload.email)
    return SuccessResponse(success=result.success, message=result.message)


@router.post(
    "/reset-password",
    response_model=SuccessResponse,
    summary="パスワードリセット実行",
    responses={400: {"description": "トークンが無効または期限切れ"}},
)
def reset_password(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    """
    パスワードリセット実行

    トークンを検証し、新しいパスワードを設定します。
    成功すると既存のログインセッションはすべて失効します。
    """
    result = PasswordResetService(db).reset_password(payload.token, payload.new_password)
    if not result.success:
        return _failure(result.message)
    return SuccessResponse(success=True, message=result.message)


@router.get(
    "/verify-reset-token",
    response_model=SuccessResponse,
    summary="リセットトークン確認",
    responses={400: {"description": "トークンが無効または期限切れ"}},
)
def verify_reset_token(
    token: str = Query(..., min_length=1, description="リセットトークン"),
    db: Session = Depends(get_db),
):
    """トークンが使用可能かを確認（トークンは消費しない）"""
    result = PasswordResetService(db).verify_token(token)
    if not result.valid:
        return _failure(result.message)
    return SuccessResponse(success=True, message=result.message)
