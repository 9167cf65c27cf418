"""
Pydantic Schemas for LifeLog Application
Based on app/models
"""

from .base import BaseSchema
from .common import MessageResponse, SuccessResponse, OrderEntry, ParentOrderEntry
from .auth import (
    SignupRequest,
    SigninRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UserResponse,
    SessionResponse,
    AuthResponse,
)
from .day_tracker import BoardResponse, TaskResponse, JournalResponse
from .knowledge_base import NotebookResponse, NoteResponse, TagResponse
from .vault import VaultCategoryResponse, VaultItemResponse
from .document import DocumentCategoryResponse, DocumentResponse
from .inventory import LocationResponse, ItemResponse, LendingResponse

__all__ = [
    "BaseSchema",
    "MessageResponse",
    "SuccessResponse",
    "OrderEntry",
    "ParentOrderEntry",
    "SignupRequest",
    "SigninRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "UserResponse",
    "SessionResponse",
    "AuthResponse",
    "BoardResponse",
    "TaskResponse",
    "JournalResponse",
    "NotebookResponse",
    "NoteResponse",
    "TagResponse",
    "VaultCategoryResponse",
    "VaultItemResponse",
    "DocumentCategoryResponse",
    "DocumentResponse",
    "LocationResponse",
    "ItemResponse",
    "LendingResponse",
]
