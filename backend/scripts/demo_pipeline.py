#!/usr/bin/env python3
"""
Demo script — run the order pipeline locally with in-memory adapters.

Shows a physical book, a new membership, a declined upgrade, and a
mixed order going through the standard royalty → shipment → membership
flow, with the step results recorded on each order.

Usage:
    cd backend
    python -m scripts.demo_pipeline
"""

import asyncio
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


SAMPLE_ORDERS = [
    {
        "order_id": "demo-book-001",
        "customer": {"email": "reader@example.com", "name": "Reader"},
        "products": [
            {"name": "The Pragmatic Programmer", "product_type": "PHYSICAL_PRODUCT", "product_sub_type": "BOOK"},
        ],
    },
    {
        "order_id": "demo-membership-001",
        "customer": {"email": "new.member@example.com"},
        "products": [
            {"name": "Book Club Membership", "product_type": "MEMBERSHIP"},
        ],
    },
    {
        "order_id": "demo-upgrade-001",
        "customer": {"email": "member@example.com"},
        "products": [
            {"name": "Gold Upgrade", "product_type": "MEMBERSHIP", "product_sub_type": "UPGRADE"},
        ],
    },
    {
        "order_id": "demo-mixed-001",
        "customer": {"email": "mixed@example.com"},
        "products": [
            {"name": "Desk Lamp", "product_type": "PHYSICAL_PRODUCT"},
            {"name": "E-book Bundle", "product_type": "DIGITAL_PRODUCT"},
            {"name": "Dune", "product_type": "PHYSICAL_PRODUCT", "product_sub_type": "BOOK"},
        ],
    },
]


def _print_order(order):
    """Pretty-print an order and its step results."""
    print(f"\n{'─' * 50}")
    print(f"  Order    : {order.order_id}")
    print(f"  Customer : {order.customer.email if order.customer else '-'}")
    print(f"  Products : {', '.join(p.name for p in order.products)}")
    print(f"\n  Step Results:")
    for sr in order.step_results:
        icon = "✓" if sr.status == "COMPLETED" else "✗" if sr.status == "FAILED" else "⊘"
        print(f"    {icon} {sr.step_name} ({sr.duration_ms}ms)")
        for k, v in sr.metadata.items():
            print(f"        {k}: {v}")
    print(f"{'─' * 50}")


async def main():
    from fulfillment.core.logging import setup_logging
    from fulfillment.models.order import Order
    from fulfillment.pipeline.flow import build_order_engine
    from fulfillment.ports import (
        InMemoryEmailSender,
        InMemoryMembershipRepository,
        InMemorySlipRepository,
    )

    setup_logging("WARNING")     # quiet logs, show formatted output only

    shipment_slips = InMemorySlipRepository("shipping")
    royalty_slips = InMemorySlipRepository("royalty")
    memberships = InMemoryMembershipRepository()
    email = InMemoryEmailSender()

    # The upgrade demo order is declined by the membership store
    memberships.configure(activation_result=True, upgrade_result=False)

    engine = build_order_engine(
        shipment_slips=shipment_slips,
        royalty_slips=royalty_slips,
        memberships=memberships,
        email=email,
    )

    print("\n╔" + "═" * 48 + "╗")
    print("║        ORDER FULFILLMENT — PIPELINE DEMO       ║")
    print("╚" + "═" * 48 + "╝")
    print("\n  Flow: " + " → ".join(step["name"] for step in engine.describe()))

    for payload in SAMPLE_ORDERS:
        order = await engine.process(Order.from_dict(payload))
        _print_order(order)

    print(f"\n  Shipping slips : {len(shipment_slips.slips)}")
    print(f"  Royalty slips  : {len(royalty_slips.slips)}")
    print(f"  Activations    : {memberships.activations}")
    print(f"  Upgrades       : {memberships.upgrades}")
    print(f"  Emails sent    : {[(e['kind'], e['to']) for e in email.sent_emails]}")
    print("\n✅ Demo completed.\n")


if __name__ == "__main__":
    asyncio.run(main())
