"""
Ports — the external capabilities the pipeline steps call into.

Each port is an async ABC injected into a step at construction time.
The in-memory adapters record calls and are used by the demo script
and the test suite.
"""

from fulfillment.ports.email import EmailSender, InMemoryEmailSender
from fulfillment.ports.membership import InMemoryMembershipRepository, MembershipRepository
from fulfillment.ports.slips import InMemorySlipRepository, SlipRepository

__all__ = [
    "EmailSender",
    "InMemoryEmailSender",
    "InMemoryMembershipRepository",
    "InMemorySlipRepository",
    "MembershipRepository",
    "SlipRepository",
]
