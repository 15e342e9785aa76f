"""ShipmentSlipHandler — packing slip for anything that has to be shipped."""

from __future__ import annotations

from typing import Any

from fulfillment.core.constants import ProductType
from fulfillment.core.logging import get_logger
from fulfillment.models.order import Order
from fulfillment.pipeline.handler import OrderHandler
from fulfillment.ports.slips import SlipRepository

logger = get_logger(__name__)


class ShipmentSlipHandler(OrderHandler):
    """Create a packing slip when the order contains a physical product."""

    name = "shipment_slip"
    description = "Create packing slip for shipping"

    def __init__(self, slip_repository: SlipRepository) -> None:
        super().__init__()
        self._slips = slip_repository

    def applies_to(self, order: Order) -> bool:
        return order.has_product(ProductType.PHYSICAL_PRODUCT)

    async def apply(self, order: Order) -> dict[str, Any]:
        await self._slips.create_slip(order)

        physical = [
            p.name for p in order.products
            if p.product_type == ProductType.PHYSICAL_PRODUCT
        ]
        logger.info("Packing slip created", order_id=order.order_id, items=len(physical))
        return {"items": physical}
