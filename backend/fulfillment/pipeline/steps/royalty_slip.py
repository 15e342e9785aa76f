"""
RoyaltySlipHandler — royalty department paperwork for physical books.

One slip per order, however many books the order contains.
"""

from __future__ import annotations

from typing import Any

from fulfillment.core.constants import ProductSubType, ProductType
from fulfillment.core.logging import get_logger
from fulfillment.models.order import Order
from fulfillment.pipeline.handler import OrderHandler
from fulfillment.ports.slips import SlipRepository

logger = get_logger(__name__)


class RoyaltySlipHandler(OrderHandler):
    """Create a royalty slip when the order contains a physical book."""

    name = "royalty_slip"
    description = "Create royalty slip for physical book orders"

    def __init__(self, slip_repository: SlipRepository) -> None:
        super().__init__()
        self._slips = slip_repository

    def applies_to(self, order: Order) -> bool:
        return order.has_product(ProductType.PHYSICAL_PRODUCT, ProductSubType.BOOK)

    async def apply(self, order: Order) -> dict[str, Any]:
        await self._slips.create_slip(order)

        books = sum(
            1 for p in order.products
            if p.matches(ProductType.PHYSICAL_PRODUCT, ProductSubType.BOOK)
        )
        logger.info("Royalty slip created", order_id=order.order_id, books=books)
        return {"books": books}
