"""Shared constants and enums used across the application."""

from enum import StrEnum


class ProductType(StrEnum):
    """Kind of product on an order line."""

    PHYSICAL_PRODUCT = "PHYSICAL_PRODUCT"
    MEMBERSHIP = "MEMBERSHIP"
    DIGITAL_PRODUCT = "DIGITAL_PRODUCT"


class ProductSubType(StrEnum):
    """
    Refinement of a ProductType.

    Only meaningful together with its product type: BOOK qualifies a
    PHYSICAL_PRODUCT, UPGRADE qualifies a MEMBERSHIP.
    """

    NONE = "NONE"
    BOOK = "BOOK"
    UPGRADE = "UPGRADE"


class StepStatus(StrEnum):
    """Status of an individual pipeline step."""

    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


class MembershipOutcome(StrEnum):
    """Result of a membership repository call, as recorded on the order."""

    ACTIVATED = "ACTIVATED"
    ACTIVATION_DECLINED = "ACTIVATION_DECLINED"
    UPGRADED = "UPGRADED"
    UPGRADE_DECLINED = "UPGRADE_DECLINED"

    @property
    def succeeded(self) -> bool:
        return self in (MembershipOutcome.ACTIVATED, MembershipOutcome.UPGRADED)
