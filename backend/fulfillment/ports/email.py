"""Email port — customer notifications about membership changes."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.models.order import Order


class EmailSender(ABC):
    """Abstract interface for membership notification emails."""

    @abstractmethod
    async def send_activation_mail(self, order: Order) -> None:
        """Tell the customer their membership is active.  May raise."""
        ...

    @abstractmethod
    async def send_upgrade_mail(self, order: Order) -> None:
        """Tell the customer their membership was upgraded.  May raise."""
        ...


class InMemoryEmailSender(EmailSender):
    """Email sender that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.error: Exception | None = None

    def configure(self, error: Exception | None = None):
        self.error = error

    async def send_activation_mail(self, order: Order) -> None:
        self._record(order, "activation")

    async def send_upgrade_mail(self, order: Order) -> None:
        self._record(order, "upgrade")

    def _record(self, order: Order, kind: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent_emails.append({
            "kind": kind,
            "order_id": order.order_id,
            "to": order.customer.email if order.customer else None,
        })

    def reset(self):
        """Clear sent emails (useful between tests)."""
        self.sent_emails.clear()
        self.error = None
