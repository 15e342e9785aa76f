"""
OrderHandler — abstract base class for all order pipeline steps.

Handlers form a chain of responsibility: each one inspects the order,
performs its side effect when its predicate holds, and then hands the
order to its successor no matter what happened.  Steps only need to
implement the predicate and the side effect.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from fulfillment.core.constants import StepStatus
from fulfillment.models.order import Order, StepResult


class OrderHandler(ABC):
    """
    Base class for every order pipeline step.

    Subclasses MUST implement:
        - name (str)            — unique identifier, e.g. "shipment_slip"
        - description (str)     — human-readable label for logs
        - applies_to(order)     — the applicability predicate
        - apply(order)          — the side effect, run only when applicable

    Callers build a chain with link() and start it with handle() on the
    head, or hand the head to OrderEngine.
    """

    name: str = "unnamed_step"
    description: str = "No description"

    def __init__(self) -> None:
        self._next: OrderHandler | None = None

    @property
    def next_handler(self) -> OrderHandler | None:
        return self._next

    def link(self, next_handler: OrderHandler) -> OrderHandler:
        """
        Set the successor and return it, so chains read left to right::

            royalty.link(shipment).link(membership)

        Linking again replaces the previous successor.
        """
        self._next = next_handler
        return next_handler

    def unlink(self) -> OrderHandler | None:
        """Drop the successor, making this the last step.  Returns the old successor."""
        previous, self._next = self._next, None
        return previous

    @abstractmethod
    def applies_to(self, order: Order) -> bool:
        """Return True if this step's side effect should run for the order."""
        ...

    @abstractmethod
    async def apply(self, order: Order) -> dict[str, Any] | None:
        """
        Perform the side effect.  Returns optional metadata for the
        step result.  Errors from external capabilities are not caught.
        """
        ...

    async def run(self, order: Order) -> StepResult:
        """Evaluate the predicate, apply if it holds, record the outcome."""
        started_at = self._now()

        if not self.applies_to(order):
            result = self._skipped(started_at)
        else:
            metadata = await self.apply(order)
            result = self._success(started_at, metadata)

        order.add_step_result(result)
        return result

    async def handle(self, order: Order) -> Order:
        """Run this step, then always forward to the successor if one is linked."""
        await self.run(order)
        if self._next is None:
            return order
        return await self._next.handle(order)

    # ─── Helpers available to all steps ────────────────

    def _success(
        self,
        started_at: datetime,
        metadata: dict[str, Any] | None = None,
    ) -> StepResult:
        """Build a completed StepResult with timing."""
        now = self._now()
        return StepResult(
            step_name=self.name,
            status=StepStatus.COMPLETED,
            started_at=started_at,
            completed_at=now,
            duration_ms=int((now - started_at).total_seconds() * 1000),
            metadata=metadata or {},
        )

    def _skipped(self, started_at: datetime) -> StepResult:
        return StepResult(
            step_name=self.name,
            status=StepStatus.SKIPPED,
            started_at=started_at,
            completed_at=self._now(),
        )

    def _now(self) -> datetime:
        """UTC-aware now."""
        return datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
