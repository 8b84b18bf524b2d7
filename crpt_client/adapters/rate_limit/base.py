"""Rate limiter interfaces.

The document client depends on this abstraction (not the concrete
implementation) so the admission policy can be swapped without touching the
submission flow.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractRateLimiter(ABC):
    """Interface for non-blocking admission control."""

    @abstractmethod
    def try_acquire(self) -> bool:
        """Take one permit if one is available.

        Returns:
            True if a permit was consumed, False if the budget is exhausted.
            A denial has no side effect on the remaining budget.
        """
        raise NotImplementedError

    @abstractmethod
    def shutdown(self) -> None:
        """Stop any background replenishment. Must be idempotent."""
        raise NotImplementedError

    def seconds_until_reset(self) -> float | None:
        """Seconds until the budget is replenished, or None if unknown."""
        return None

    def __enter__(self) -> AbstractRateLimiter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
