"""Concrete fulfillment steps."""

from fulfillment.pipeline.steps.membership import MembershipHandler
from fulfillment.pipeline.steps.royalty_slip import RoyaltySlipHandler
from fulfillment.pipeline.steps.shipment_slip import ShipmentSlipHandler

__all__ = ["MembershipHandler", "RoyaltySlipHandler", "ShipmentSlipHandler"]
