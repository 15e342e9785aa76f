"""Order data model carried through the fulfillment pipeline."""

from fulfillment.models.order import Customer, Order, Product, StepResult

__all__ = ["Customer", "Order", "Product", "StepResult"]
