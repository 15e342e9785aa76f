"""
MembershipHandler — activate or upgrade a membership and notify the customer.

The first membership product on the order picks the sub-case:

    UPGRADE subtype  → upgrade_membership  → send_upgrade_mail on success
    anything else    → activate_membership → send_activation_mail on success

The repository reports success as a boolean.  False is a normal
outcome: no email is sent and the pipeline carries on.
"""

from __future__ import annotations

from typing import Any

from fulfillment.core.constants import MembershipOutcome, ProductSubType, ProductType
from fulfillment.core.logging import get_logger
from fulfillment.models.order import Order
from fulfillment.pipeline.handler import OrderHandler
from fulfillment.ports.email import EmailSender
from fulfillment.ports.membership import MembershipRepository

logger = get_logger(__name__)


class MembershipHandler(OrderHandler):
    """Handle membership activation and upgrade orders."""

    name = "membership"
    description = "Activate or upgrade membership and email the customer"

    def __init__(
        self,
        membership_repository: MembershipRepository,
        email_sender: EmailSender,
    ) -> None:
        super().__init__()
        self._memberships = membership_repository
        self._email = email_sender

    def applies_to(self, order: Order) -> bool:
        return order.has_product(ProductType.MEMBERSHIP)

    async def apply(self, order: Order) -> dict[str, Any]:
        product = order.first_product(ProductType.MEMBERSHIP)

        if product.product_sub_type == ProductSubType.UPGRADE:
            outcome = await self._upgrade(order)
        else:
            outcome = await self._activate(order)

        logger.info(
            "Membership processed",
            order_id=order.order_id,
            product=product.name,
            outcome=outcome,
        )
        return {
            "outcome": outcome,
            "notified": outcome.succeeded,
        }

    async def _activate(self, order: Order) -> MembershipOutcome:
        activated = await self._memberships.activate_membership(order)
        if activated is not True:
            logger.warning("Membership activation declined", order_id=order.order_id)
            return MembershipOutcome.ACTIVATION_DECLINED

        await self._email.send_activation_mail(order)
        return MembershipOutcome.ACTIVATED

    async def _upgrade(self, order: Order) -> MembershipOutcome:
        upgraded = await self._memberships.upgrade_membership(order)
        if upgraded is not True:
            logger.warning("Membership upgrade declined", order_id=order.order_id)
            return MembershipOutcome.UPGRADE_DECLINED

        await self._email.send_upgrade_mail(order)
        return MembershipOutcome.UPGRADED
