"""Membership repository port — activation and upgrade of memberships."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.models.order import Order


class MembershipRepository(ABC):
    """
    Abstract interface for the membership record store.

    Both operations report their outcome as a boolean rather than
    raising: False means the store declined the change.  Infrastructure
    failures may still raise.
    """

    @abstractmethod
    async def activate_membership(self, order: Order) -> bool:
        """Activate a new membership.  True if activated."""
        ...

    @abstractmethod
    async def upgrade_membership(self, order: Order) -> bool:
        """Upgrade an existing membership.  True if upgraded."""
        ...


class InMemoryMembershipRepository(MembershipRepository):
    """Membership store that records calls in memory for demos and tests."""

    def __init__(self):
        self.activations: list[str] = []
        self.upgrades: list[str] = []
        self.activation_result = True
        self.upgrade_result = True
        self.error: Exception | None = None

    def configure(
        self,
        activation_result: bool = True,
        upgrade_result: bool = True,
        error: Exception | None = None,
    ):
        """Set the booleans returned by each call, or an error to raise."""
        self.activation_result = activation_result
        self.upgrade_result = upgrade_result
        self.error = error

    async def activate_membership(self, order: Order) -> bool:
        if self.error is not None:
            raise self.error
        self.activations.append(order.order_id)
        return self.activation_result

    async def upgrade_membership(self, order: Order) -> bool:
        if self.error is not None:
            raise self.error
        self.upgrades.append(order.order_id)
        return self.upgrade_result

    def reset(self):
        self.activations.clear()
        self.upgrades.clear()
        self.activation_result = True
        self.upgrade_result = True
        self.error = None
