from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class StoreResult(Generic[T]):
    """
    Outcome of a store operation. Repositories never let a database error
    escape: they report it here and leave the caller's state untouched.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    missing: bool = False

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "StoreResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "StoreResult[T]":
        return cls(success=False, error=error)

    @classmethod
    def not_found(cls, what: str = "Document") -> "StoreResult[T]":
        return cls(success=False, error=f"{what} not found", missing=True)
