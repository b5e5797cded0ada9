from .base import StoreResult
from .document_repository import DocumentRepository
from .profile_repository import ProfileRepository
from .user_repository import UserRepository

__all__ = [
    "StoreResult",
    "DocumentRepository",
    "ProfileRepository",
    "UserRepository",
]
