"""
Flow wiring — builds the handler chain from injected capabilities.

The standard fulfillment flow is:

    RoyaltySlip → ShipmentSlip → Membership

No step reads another step's output, so the order is a convention.
It is kept stable because callers and tests observe call ordering.

To add a new step:
    1. Implement an OrderHandler in pipeline/steps/
    2. Register a factory in STEP_REGISTRY below
    3. Add its name to Settings.ORDER_FLOW (or pass step_names)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from fulfillment.core.config import settings
from fulfillment.core.errors import FlowResolutionError
from fulfillment.core.logging import get_logger
from fulfillment.pipeline.engine import OrderEngine
from fulfillment.pipeline.handler import OrderHandler
from fulfillment.pipeline.steps.membership import MembershipHandler
from fulfillment.pipeline.steps.royalty_slip import RoyaltySlipHandler
from fulfillment.pipeline.steps.shipment_slip import ShipmentSlipHandler
from fulfillment.ports.email import EmailSender
from fulfillment.ports.membership import MembershipRepository
from fulfillment.ports.slips import SlipRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class Capabilities:
    """The external collaborators the steps are bound to."""

    shipment_slips: SlipRepository
    royalty_slips: SlipRepository
    memberships: MembershipRepository
    email: EmailSender


# ═══════════════════════════════════════════════════════════
#  Step Registry
# ═══════════════════════════════════════════════════════════
#
#  Maps step name → factory building a fresh handler.
#

STEP_REGISTRY: dict[str, Callable[[Capabilities], OrderHandler]] = {
    RoyaltySlipHandler.name: lambda caps: RoyaltySlipHandler(caps.royalty_slips),
    ShipmentSlipHandler.name: lambda caps: ShipmentSlipHandler(caps.shipment_slips),
    MembershipHandler.name: lambda caps: MembershipHandler(caps.memberships, caps.email),
}


def build_order_chain(
    *,
    shipment_slips: SlipRepository,
    royalty_slips: SlipRepository,
    memberships: MembershipRepository,
    email: EmailSender,
) -> OrderHandler:
    """Build the standard royalty → shipment → membership chain and return its head."""
    head = RoyaltySlipHandler(royalty_slips)
    head.link(ShipmentSlipHandler(shipment_slips)).link(
        MembershipHandler(memberships, email)
    )
    return head


def build_order_engine(
    *,
    shipment_slips: SlipRepository,
    royalty_slips: SlipRepository,
    memberships: MembershipRepository,
    email: EmailSender,
) -> OrderEngine:
    """Standard chain wrapped in an engine."""
    return OrderEngine(build_order_chain(
        shipment_slips=shipment_slips,
        royalty_slips=royalty_slips,
        memberships=memberships,
        email=email,
    ))


def build_flow(
    capabilities: Capabilities,
    step_names: Sequence[str] | None = None,
    registry: dict[str, Callable[[Capabilities], OrderHandler]] | None = None,
) -> OrderEngine:
    """
    Build an engine from a list of step names.

    Args:
        capabilities: Collaborators injected into each step.
        step_names: Traversal order.  Defaults to settings.ORDER_FLOW.
        registry: Step factories.  Defaults to STEP_REGISTRY.

    Raises:
        FlowResolutionError: A name is not registered or the list is empty.
    """
    registry = registry or STEP_REGISTRY
    names = list(step_names if step_names is not None else settings.ORDER_FLOW)

    if not names:
        raise FlowResolutionError("Flow has no steps")

    unknown = [name for name in names if name not in registry]
    if unknown:
        raise FlowResolutionError(
            f"Unknown step(s) in flow: {', '.join(unknown)}",
            details={"available": list(registry.keys())},
        )

    logger.info("Flow resolved", steps=names)
    return OrderEngine.from_steps([registry[name](capabilities) for name in names])
