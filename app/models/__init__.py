"""
SQLAlchemy Models for LifeLog Application

Usage:
    from app.models import User, Board, Note, etc.
    # または
    from app.models import Base
"""

from .base import Base
from .user import User
from .session import UserSession
from .password_reset_token import PasswordResetToken
from .day_tracker import Board, Task, Journal
from .knowledge_base import Notebook, Note, Tag, NoteTag
from .vault import VaultCategory, VaultItem, VaultAccessLog
from .document import DocumentCategory, Document, DocumentAccessLog
from .inventory import (
    Location,
    Item,
    ItemLocationHistory,
    ItemMaintenanceHistory,
    Lending,
)

__all__ = [
    "Base",
    "User",
    "UserSession",
    "PasswordResetToken",
    "Board",
    "Task",
    "Journal",
    "Notebook",
    "Note",
    "Tag",
    "NoteTag",
    "VaultCategory",
    "VaultItem",
    "VaultAccessLog",
    "DocumentCategory",
    "Document",
    "DocumentAccessLog",
    "Location",
    "Item",
    "ItemLocationHistory",
    "ItemMaintenanceHistory",
    "Lending",
]
