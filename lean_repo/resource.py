"""Resource: one snapshot of synchronization progress.

A synchronize() call emits a short sequence of these. Consumers inspect
is_loading / is_error / has_data on each one rather than expecting the
sequence itself to fail.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from lean_repo.config import SourceType

T = TypeVar("T")


@dataclass(frozen=True)
class Resource(Generic[T]):
    """Immutable snapshot of {data, error, source}.

    None means absent for both data and error. When an error is present
    the source is always SourceType.NONE, even if stale data is attached.

    Attributes:
        data: Most recent successfully obtained value
        error: Most recent failure
        source: Provenance of data at emission time
    """
    data: Optional[T] = None
    error: Optional[BaseException] = None
    source: SourceType = SourceType.NONE

    def __post_init__(self):
        """Force source to NONE for error-bearing snapshots."""
        if self.error is not None and self.source is not SourceType.NONE:
            object.__setattr__(self, "source", SourceType.NONE)

    @property
    def is_loading(self) -> bool:
        """True when neither data nor error is present."""
        return self.data is None and self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def has_data(self) -> bool:
        return self.data is not None

    @classmethod
    def loading(cls) -> "Resource[T]":
        """Snapshot for "no cache, about to fetch"."""
        return cls()

    @classmethod
    def success(cls, data: T, source: SourceType) -> "Resource[T]":
        return cls(data=data, source=source)

    @classmethod
    def failed(cls, error: BaseException, data: Optional[T] = None) -> "Resource[T]":
        """Snapshot for a failure, optionally keeping stale data visible."""
        return cls(data=data, error=error, source=SourceType.NONE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "data": self.data,
            "error": str(self.error) if self.error is not None else None,
            "source": self.source.value,
            "is_loading": self.is_loading,
            "is_error": self.is_error,
            "has_data": self.has_data,
        }
