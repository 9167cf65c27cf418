"""
Document API エンドポイント

ファイル本体は外部ストレージに置き、ここではメタデータのみを扱う
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_client_ip, get_current_user, get_user_agent
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.document import (
    DocumentCreate,
    DocumentEnvelope,
    DocumentListResponse,
    DocumentUpdate,
    DownloadResponse,
)
from app.schemas.vault import AccessLogResponse
from app.services.document_service import DocumentService

router = APIRouter(prefix="/api/documents", tags=["Documents"])


def get_document_service(request: Request, db: Session = Depends(get_db)) -> DocumentService:
    return DocumentService(
        db, ip_address=get_client_ip(request), user_agent=get_user_agent(request)
    )


@router.get("", response_model=DocumentListResponse)
def list_documents(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    document_type: Optional[str] = Query(None, alias="type"),
    search: Optional[str] = Query(None, description="タイトル・説明・ファイル名・本文の部分一致"),
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    documents = service.list_documents(
        current_user.id, category_id=category_id, document_type=document_type, search=search
    )
    return {"documents": documents}


@router.get("/favorites", response_model=DocumentListResponse)
def list_favorite_documents(
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    return {"documents": service.list_favorites(current_user.id)}


@router.get("/important", response_model=DocumentListResponse)
def list_important_documents(
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    return {"documents": service.list_important(current_user.id)}


@router.get("/expiring", response_model=DocumentListResponse)
def list_expiring_documents(
    days: int = Query(30, ge=1, le=365),
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    return {"documents": service.list_expiring(current_user.id, days)}


@router.get("/{document_id}", response_model=DocumentEnvelope)
def get_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    """ドキュメントを取得（閲覧回数とログを記録）"""
    return {"document": service.view(document_id, current_user.id)}


@router.get("/{document_id}/access-log", response_model=AccessLogResponse)
def get_document_access_log(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    return {"access_log": service.access_log(document_id, current_user.id)}


@router.get("/{document_id}/download", response_model=DownloadResponse)
def download_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    """ダウンロード情報を返し、ダウンロード回数を記録"""
    return service.record_download(document_id, current_user.id)


@router.post("", response_model=DocumentEnvelope, status_code=status.HTTP_201_CREATED)
def create_document(
    request: DocumentCreate,
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    document = service.create(current_user.id, request.model_dump(exclude_none=True))
    return {"document": document}


@router.put("/{document_id}", response_model=DocumentEnvelope)
def update_document(
    document_id: str,
    request: DocumentUpdate,
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    """ドキュメントを更新（ファイルが差し替えられた場合はバージョンを上げる）"""
    document = service.update(document_id, current_user.id, request.model_dump(exclude_unset=True))
    return {"document": document}


@router.patch("/{document_id}/favorite", response_model=DocumentEnvelope)
def toggle_document_favorite(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    return {"document": service.toggle_favorite(document_id, current_user.id)}


@router.patch("/{document_id}/important", response_model=DocumentEnvelope)
def toggle_document_important(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    return {"document": service.toggle_important(document_id, current_user.id)}


@router.patch("/{document_id}/archive", response_model=MessageResponse)
def archive_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    service.archive(document_id, current_user.id)
    return MessageResponse(message="Document archived successfully")


@router.delete("/{document_id}", response_model=MessageResponse)
def delete_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
    current_user: User = Depends(get_current_user),
):
    service.delete(document_id, current_user.id)
    return MessageResponse(message="Document deleted successfully")
