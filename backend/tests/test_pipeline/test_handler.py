"""Tests for the OrderHandler chain-of-responsibility contract."""

from unittest.mock import AsyncMock

import pytest

from fulfillment.core.constants import ProductSubType, ProductType, StepStatus
from fulfillment.pipeline.flow import build_order_chain
from fulfillment.pipeline.steps.membership import MembershipHandler
from fulfillment.pipeline.steps.royalty_slip import RoyaltySlipHandler
from fulfillment.pipeline.steps.shipment_slip import ShipmentSlipHandler


class TestLink:

    def test_link_returns_successor_for_chaining(self, shipment_slips, royalty_slips):
        royalty = RoyaltySlipHandler(royalty_slips)
        shipment = ShipmentSlipHandler(shipment_slips)

        assert royalty.link(shipment) is shipment
        assert royalty.next_handler is shipment

    def test_link_again_replaces_successor(self, shipment_slips, royalty_slips, memberships, email):
        royalty = RoyaltySlipHandler(royalty_slips)
        shipment = ShipmentSlipHandler(shipment_slips)
        membership = MembershipHandler(memberships, email)

        royalty.link(shipment)
        royalty.link(membership)

        assert royalty.next_handler is membership

    def test_unlink_returns_previous_successor(self, shipment_slips, royalty_slips):
        royalty = RoyaltySlipHandler(royalty_slips)
        shipment = ShipmentSlipHandler(shipment_slips)
        royalty.link(shipment)

        assert royalty.unlink() is shipment
        assert royalty.next_handler is None

    def test_standard_chain_order(self, shipment_slips, royalty_slips, memberships, email):
        head = build_order_chain(
            shipment_slips=shipment_slips,
            royalty_slips=royalty_slips,
            memberships=memberships,
            email=email,
        )

        names = []
        node = head
        while node is not None:
            names.append(node.name)
            node = node.next_handler

        assert names == ["royalty_slip", "shipment_slip", "membership"]


class TestHandle:

    @pytest.mark.asyncio
    async def test_terminal_handler_returns_order(self, shipment_slips, book_order):
        handler = ShipmentSlipHandler(shipment_slips)

        result = await handler.handle(book_order)

        assert result is book_order
        shipment_slips.create_slip.assert_awaited_once_with(book_order)

    @pytest.mark.asyncio
    async def test_forwards_when_predicate_false(self, shipment_slips, royalty_slips, make_order):
        royalty = RoyaltySlipHandler(royalty_slips)
        royalty.link(ShipmentSlipHandler(shipment_slips))
        order = make_order((ProductType.PHYSICAL_PRODUCT, ProductSubType.NONE))

        await royalty.handle(order)

        royalty_slips.create_slip.assert_not_called()
        shipment_slips.create_slip.assert_awaited_once_with(order)

    @pytest.mark.asyncio
    async def test_forwards_after_side_effect(self, shipment_slips, royalty_slips, book_order):
        royalty = RoyaltySlipHandler(royalty_slips)
        royalty.link(ShipmentSlipHandler(shipment_slips))

        await royalty.handle(book_order)

        royalty_slips.create_slip.assert_awaited_once_with(book_order)
        shipment_slips.create_slip.assert_awaited_once_with(book_order)

    @pytest.mark.asyncio
    async def test_forwards_after_declined_membership(self, memberships, email, shipment_slips, make_order):
        membership = MembershipHandler(memberships, email)
        membership.link(ShipmentSlipHandler(shipment_slips))
        memberships.activate_membership.return_value = False
        order = make_order(
            (ProductType.MEMBERSHIP, ProductSubType.NONE),
            (ProductType.PHYSICAL_PRODUCT, ProductSubType.NONE),
        )

        await membership.handle(order)

        shipment_slips.create_slip.assert_awaited_once_with(order)

    @pytest.mark.asyncio
    async def test_returns_successor_result(self, shipment_slips, royalty_slips, book_order):
        royalty = RoyaltySlipHandler(royalty_slips)
        successor = ShipmentSlipHandler(shipment_slips)
        sentinel = object()
        successor.handle = AsyncMock(return_value=sentinel)
        royalty.link(successor)

        result = await royalty.handle(book_order)

        assert result is sentinel
        successor.handle.assert_awaited_once_with(book_order)

    @pytest.mark.asyncio
    async def test_fault_propagates_unwrapped(self, shipment_slips, royalty_slips, book_order):
        royalty = RoyaltySlipHandler(royalty_slips)
        royalty.link(ShipmentSlipHandler(shipment_slips))
        royalty_slips.create_slip.side_effect = ConnectionError("royalty service down")

        with pytest.raises(ConnectionError, match="royalty service down"):
            await royalty.handle(book_order)

        shipment_slips.create_slip.assert_not_called()

    @pytest.mark.asyncio
    async def test_run_records_step_result(self, shipment_slips, make_order, book_order):
        handler = ShipmentSlipHandler(shipment_slips)
        skipped_order = make_order((ProductType.MEMBERSHIP, ProductSubType.NONE))

        completed = await handler.run(book_order)
        skipped = await handler.run(skipped_order)

        assert completed.status == StepStatus.COMPLETED
        assert completed.metadata == {"items": ["testProduct0"]}
        assert book_order.step_results == [completed]
        assert skipped.status == StepStatus.SKIPPED
        assert skipped_order.step_results == [skipped]

    @pytest.mark.asyncio
    async def test_run_does_not_forward(self, shipment_slips, royalty_slips, book_order):
        royalty = RoyaltySlipHandler(royalty_slips)
        royalty.link(ShipmentSlipHandler(shipment_slips))

        await royalty.run(book_order)

        shipment_slips.create_slip.assert_not_called()
