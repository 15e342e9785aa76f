"""Slip repository port — where packing and royalty slips are recorded."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.core.logging import get_logger
from fulfillment.models.order import Order

logger = get_logger(__name__)


class SlipRepository(ABC):
    """
    Abstract interface for slip storage.

    The same interface serves both the shipping department (packing
    slips) and the royalty department; each gets its own bound instance.
    """

    @abstractmethod
    async def create_slip(self, order: Order) -> None:
        """Record a slip for the whole order.  May raise."""
        ...


class InMemorySlipRepository(SlipRepository):
    """Slip repository that keeps slips in memory for demos and tests."""

    def __init__(self, department: str = "shipping"):
        self.department = department
        self.slips: list[dict] = []
        self.error: Exception | None = None

    def configure(self, error: Exception | None = None):
        """Make create_slip raise `error` (None restores normal behaviour)."""
        self.error = error

    async def create_slip(self, order: Order) -> None:
        if self.error is not None:
            raise self.error

        self.slips.append({
            "department": self.department,
            "order_id": order.order_id,
            "products": [p.name for p in order.products],
        })
        logger.debug("Slip recorded", department=self.department, order_id=order.order_id)

    def reset(self):
        self.slips.clear()
        self.error = None
