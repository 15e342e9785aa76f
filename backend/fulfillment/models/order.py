"""
Order model — the unit of work carried through every pipeline step.

Handlers read the products and customer.  The only mutation they make
is appending a StepResult to order.step_results so the caller can see
what each step did.  The order ID is fixed once the order is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from fulfillment.core.constants import ProductSubType, ProductType
from fulfillment.core.errors import OrderValidationError


@dataclass
class Customer:
    """The buyer.  Email is the notification target."""

    email: str
    name: str | None = None


@dataclass
class Product:
    """A single order line."""

    name: str
    product_type: ProductType
    product_sub_type: ProductSubType = ProductSubType.NONE

    def matches(
        self,
        product_type: ProductType,
        product_sub_type: ProductSubType | None = None,
    ) -> bool:
        """True if this product has the given type (and subtype, when given)."""
        if self.product_type != product_type:
            return False
        return product_sub_type is None or self.product_sub_type == product_sub_type


@dataclass
class StepResult:
    """Outcome of a single pipeline step on one order."""

    step_name: str
    status: str                     # StepStatus value
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_ms: int = 0
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "step_name": self.step_name,
            "status": self.status,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_ms": self.duration_ms,
            "error": self.error,
            "metadata": self.metadata,
        }


@dataclass
class Order:
    """
    A customer order.

    Args:
        order_id: Opaque identifier.  Cannot be reassigned.
        products: Order lines.  May be empty, in which case no step applies.
        customer: The buyer.
        step_results: Appended to by the pipeline, one entry per step run.
    """

    order_id: str
    products: list[Product] = field(default_factory=list)
    customer: Customer | None = None
    step_results: list[StepResult] = field(default_factory=list)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "order_id" and "order_id" in self.__dict__:
            raise AttributeError("order_id cannot be changed once the order is created")
        super().__setattr__(name, value)

    # ─── Product queries ───────────────────────────────

    def has_product(
        self,
        product_type: ProductType,
        product_sub_type: ProductSubType | None = None,
    ) -> bool:
        """True if any product matches the type (and subtype, when given)."""
        return any(p.matches(product_type, product_sub_type) for p in self.products)

    def first_product(self, product_type: ProductType) -> Product | None:
        """Return the first product of the given type, or None."""
        for p in self.products:
            if p.product_type == product_type:
                return p
        return None

    # ─── Step results ──────────────────────────────────

    def add_step_result(self, result: StepResult) -> None:
        self.step_results.append(result)

    def get_step_result(self, step_name: str) -> StepResult | None:
        """Most recent result recorded by the named step."""
        for result in reversed(self.step_results):
            if result.step_name == step_name:
                return result
        return None

    # ─── Serialisation ─────────────────────────────────

    def to_summary_dict(self) -> dict[str, Any]:
        """Compact summary for logging."""
        return {
            "order_id": self.order_id,
            "customer_email": self.customer.email if self.customer else None,
            "products": [
                {
                    "name": p.name,
                    "product_type": str(p.product_type),
                    "product_sub_type": str(p.product_sub_type),
                }
                for p in self.products
            ],
            "steps": [
                {"step_name": r.step_name, "status": r.status} for r in self.step_results
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Order:
        """
        Build an Order from an intake payload.

        Expected shape::

            {
                "order_id": "A-1001",
                "customer": {"email": "jane@example.com", "name": "Jane"},
                "products": [
                    {"name": "Dune", "product_type": "PHYSICAL_PRODUCT",
                     "product_sub_type": "BOOK"},
                ],
            }

        Raises:
            OrderValidationError: missing order_id, a malformed or
                unknown product, or a customer without an email.
        """
        order_id = data.get("order_id")
        if not order_id:
            raise OrderValidationError("Order payload has no order_id")

        products = []
        for index, raw in enumerate(data.get("products") or []):
            try:
                products.append(Product(
                    name=raw.get("name", ""),
                    product_type=ProductType(str(raw["product_type"]).upper()),
                    product_sub_type=ProductSubType(
                        str(raw.get("product_sub_type") or ProductSubType.NONE).upper()
                    ),
                ))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise OrderValidationError(
                    f"Invalid product at index {index}: {exc}",
                    order_id=str(order_id),
                    details={"product": raw},
                ) from exc

        customer = None
        raw_customer = data.get("customer")
        if raw_customer:
            if not isinstance(raw_customer, dict) or not raw_customer.get("email"):
                raise OrderValidationError(
                    "Customer payload has no email",
                    order_id=str(order_id),
                    details={"customer": raw_customer},
                )
            customer = Customer(
                email=raw_customer["email"],
                name=raw_customer.get("name"),
            )

        return cls(order_id=str(order_id), products=products, customer=customer)
