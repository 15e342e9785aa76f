"""
Domain-specific exception hierarchy for order fulfillment.

All exceptions inherit from PipelineError so callers can catch broadly
or narrowly as needed.  Each exception carries structured context
(order ID, step name, etc.) for logging/debugging.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(
        self,
        message: str,
        *,
        order_id: str | None = None,
        step_name: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.order_id = order_id
        self.step_name = step_name
        self.details = details or {}
        super().__init__(message)


class StepExecutionError(PipelineError):
    """An external capability raised while a step was running."""
    pass


class ChainConfigurationError(PipelineError):
    """The linked handler chain is cyclic or reuses a handler."""
    pass


class FlowResolutionError(PipelineError):
    """A flow definition names a step that is not registered."""
    pass


class OrderValidationError(PipelineError):
    """An intake payload could not be turned into an Order."""
    pass
