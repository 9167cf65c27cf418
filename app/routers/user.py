"""
User Settings API - ユーザー設定管理
プロフィール・パスワード・アカウントの管理
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_session, get_current_user
from app.models.session import UserSession
from app.models.user import User
from app.schemas.auth import (
    PasswordChangeRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    UserResponse,
)
from app.schemas.common import SuccessResponse
from app.security import verify_password
from app.services.user_service import UserService


# ============================================
# ルーター設定
# ============================================
router = APIRouter(prefix="/api/users", tags=["users"])


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="プロフィール取得",
    description="""
ログインユーザーのプロフィール情報を取得します。

## 認証
`Authorization: Bearer {token}` ヘッダーが必要です。
""",
    responses={
        200: {
            "description": "取得成功",
            "content": {
                "application/json": {
                    "example": {
                        "user": {
                            "id": "550e8400-e29b-41d4-a716-446655440000",
                            "email": "user@example.com",
                            "firstName": "Taro",
                            "lastName": "Yamada",
                            "createdAt": "2026-01-01T00:00:00",
                            "updatedAt": "2026-01-01T00:00:00",
                        }
                    }
                }
            },
        },
        401: {"description": "認証エラー"},
    },
)
def get_profile(current_user: User = Depends(get_current_user)):
    """プロフィール取得エンドポイント"""
    return ProfileResponse(user=UserResponse.model_validate(current_user))


@router.put(
    "/profile",
    response_model=ProfileResponse,
    summary="プロフィール更新",
    responses={401: {"description": "認証エラー"}},
)
def update_profile(
    request: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """プロフィール更新エンドポイント（指定した項目のみ更新）"""
    user = UserService(db).update_profile(
        current_user, first_name=request.first_name, last_name=request.last_name
    )
    return ProfileResponse(user=UserResponse.model_validate(user))


@router.put(
    "/password",
    response_model=SuccessResponse,
    summary="パスワード変更",
    description="""
ログインユーザーのパスワードを変更します。

## パスワード要件
- 8文字以上（UTF-8で72バイト以内）
- 英大文字・英小文字・数字をそれぞれ1文字以上
- 現在のパスワードの検証が必要

変更後、現在のセッション以外はすべて失効します。
""",
    responses={
        400: {"description": "現在のパスワードが不正"},
        401: {"description": "認証エラー"},
    },
)
def change_password(
    request: PasswordChangeRequest,
    current_user: User = Depends(get_current_user),
    current_session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """パスワード変更エンドポイント"""
    if not verify_password(request.current_password, current_user.password_hash):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=SuccessResponse(
                success=False, message="Current password is incorrect"
            ).model_dump(by_alias=True),
        )

    # 他の端末のセッションはパスワード更新と同時に失効
    UserService(db).update_password(
        current_user, request.new_password, keep_session_id=current_session.id
    )

    return SuccessResponse(success=True, message="Password changed successfully")


@router.delete(
    "/account",
    response_model=SuccessResponse,
    summary="アカウント削除",
    description="アカウントと、そのユーザーが所有するすべてのデータを削除します。",
    responses={401: {"description": "認証エラー"}},
)
def delete_account(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """アカウント削除エンドポイント"""
    UserService(db).delete_user(current_user)
    return SuccessResponse(success=True, message="Account deleted successfully")
