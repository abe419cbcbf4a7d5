"""Result types returned by state-layer operations."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class RemoteError(Exception):
    """Failure reported by the remote storage or identity service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Data/error pair returned instead of raising."""

    data: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Return True when the operation succeeded."""
        return self.error is None
