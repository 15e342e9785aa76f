"""Shared fixtures for the fulfillment test suite."""

from unittest.mock import AsyncMock

import pytest

from fulfillment.core.constants import ProductSubType, ProductType
from fulfillment.core.logging import setup_logging
from fulfillment.models.order import Customer, Order, Product
from fulfillment.pipeline.flow import Capabilities, build_order_engine
from fulfillment.ports.email import EmailSender
from fulfillment.ports.membership import MembershipRepository
from fulfillment.ports.slips import SlipRepository


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    setup_logging("WARNING")


# ─── Capability mocks ──────────────────────────────────
# The shipment and royalty departments use the same repository
# interface but are separate instances.

@pytest.fixture
def shipment_slips():
    return AsyncMock(spec=SlipRepository)


@pytest.fixture
def royalty_slips():
    return AsyncMock(spec=SlipRepository)


@pytest.fixture
def memberships():
    mock = AsyncMock(spec=MembershipRepository)
    mock.activate_membership.return_value = False
    mock.upgrade_membership.return_value = False
    return mock


@pytest.fixture
def email():
    return AsyncMock(spec=EmailSender)


@pytest.fixture
def capabilities(shipment_slips, royalty_slips, memberships, email):
    return Capabilities(
        shipment_slips=shipment_slips,
        royalty_slips=royalty_slips,
        memberships=memberships,
        email=email,
    )


@pytest.fixture
def engine(shipment_slips, royalty_slips, memberships, email):
    return build_order_engine(
        shipment_slips=shipment_slips,
        royalty_slips=royalty_slips,
        memberships=memberships,
        email=email,
    )


# ─── Orders ────────────────────────────────────────────

@pytest.fixture
def make_order():
    """Factory: make_order((ProductType, ProductSubType), ...) → Order."""

    def _make(*lines, order_id="testId"):
        return Order(
            order_id=order_id,
            products=[
                Product(
                    name=f"testProduct{i}",
                    product_type=product_type,
                    product_sub_type=product_sub_type,
                )
                for i, (product_type, product_sub_type) in enumerate(lines)
            ],
            customer=Customer(email="k@rlo.dk"),
        )

    return _make


@pytest.fixture
def book_order(make_order):
    return make_order((ProductType.PHYSICAL_PRODUCT, ProductSubType.BOOK))


@pytest.fixture
def membership_order(make_order):
    return make_order((ProductType.MEMBERSHIP, ProductSubType.NONE))


@pytest.fixture
def upgrade_order(make_order):
    return make_order((ProductType.MEMBERSHIP, ProductSubType.UPGRADE))
