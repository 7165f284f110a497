"""Pagination result model."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PaginationResult(Generic[T]):
    """Items accumulated by a pagination run plus the error that stopped it.

    ``items`` is returned regardless of why the run stopped and always holds
    everything processed successfully so far.
    """

    items: list[T] = field(default_factory=list)
    error: Exception | None = None
    pages_fetched: int = 0

    @property
    def ok(self) -> bool:
        """True when the run ended without an error."""
        return self.error is None

    def raise_for_error(self) -> list[T]:
        """Re-raise the stored error unchanged, otherwise return the items."""
        if self.error is not None:
            raise self.error
        return self.items

    def __len__(self) -> int:
        return len(self.items)
