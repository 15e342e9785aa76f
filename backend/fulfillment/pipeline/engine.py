"""
OrderEngine — runs an order through the fulfillment steps in sequence.

Responsibilities:
    - Resolve the linked handler chain into a fixed, ordered step tuple
    - Reject cyclic chains and repeated handlers when the engine is built
    - Run every step for each order, awaiting one before the next
    - Log each step with timing and outcome, order_id bound for the run
    - Surface external faults as StepExecutionError
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any

import structlog

from fulfillment.core.constants import StepStatus
from fulfillment.core.errors import ChainConfigurationError, StepExecutionError
from fulfillment.core.logging import add_context, clear_context
from fulfillment.models.order import Order, StepResult
from fulfillment.pipeline.handler import OrderHandler


class OrderEngine:
    """
    Entry point for processing orders.

    Usage::

        head = RoyaltySlipHandler(royalty_slips)
        head.link(ShipmentSlipHandler(shipment_slips)).link(
            MembershipHandler(memberships, email)
        )
        engine = OrderEngine(head)
        order = await engine.process(order)

    The chain is read once, here.  Linking handlers differently after
    the engine is built does not change what the engine runs.
    """

    def __init__(self, head: OrderHandler) -> None:
        self.head = head
        self.steps: tuple[OrderHandler, ...] = self._resolve_chain(head)
        self.logger = structlog.get_logger("pipeline.engine")

    @classmethod
    def from_steps(cls, steps: Sequence[OrderHandler]) -> OrderEngine:
        """Link the handlers in the given order and build an engine on the head."""
        if not steps:
            raise ChainConfigurationError("Cannot build an engine from an empty step list")

        if len({id(step) for step in steps}) != len(steps):
            raise ChainConfigurationError(
                "Step list contains the same handler more than once",
                details={"steps": [step.name for step in steps]},
            )

        for current, following in zip(steps, steps[1:]):
            current.link(following)
        steps[-1].unlink()
        return cls(steps[0])

    @staticmethod
    def _resolve_chain(head: OrderHandler) -> tuple[OrderHandler, ...]:
        """Walk successor links from the head into an ordered tuple."""
        if head is None:
            raise ChainConfigurationError("Engine needs a head handler")

        chain: list[OrderHandler] = []
        seen: set[int] = set()
        node: OrderHandler | None = head

        while node is not None:
            if id(node) in seen:
                raise ChainConfigurationError(
                    f"Handler chain loops back to '{node.name}'",
                    step_name=node.name,
                    details={"chain": [h.name for h in chain]},
                )
            seen.add(id(node))
            chain.append(node)
            node = node.next_handler

        return tuple(chain)

    async def process(self, order: Order) -> Order:
        """
        Run every step against the order and return it.

        Raises:
            StepExecutionError: an external capability raised.  The
                original exception is chained as __cause__.  Steps that
                already ran keep their side effects.
        """
        started = time.perf_counter()
        add_context(order_id=order.order_id)
        try:
            return await self._run_steps(order, started)
        finally:
            clear_context("order_id")

    async def _run_steps(self, order: Order, started: float) -> Order:
        log = self.logger.bind(total_steps=len(self.steps))
        log.info("Order processing started", order=order.to_summary_dict())

        for index, step in enumerate(self.steps):
            step_log = log.bind(
                step_name=step.name,
                step_index=index + 1,
            )

            try:
                result = await step.run(order)
            except Exception as exc:
                order.add_step_result(StepResult(
                    step_name=step.name,
                    status=StepStatus.FAILED,
                    error=str(exc),
                ))
                step_log.exception(
                    "Step failed, order processing stopping",
                    error=str(exc),
                    order=order.to_summary_dict(),
                )
                raise StepExecutionError(
                    f"Step '{step.name}' failed: {exc}",
                    order_id=order.order_id,
                    step_name=step.name,
                ) from exc

            if result.status == StepStatus.SKIPPED:
                step_log.debug("Step not applicable")
            else:
                step_log.info(
                    "Step completed",
                    duration_ms=result.duration_ms,
                    metadata=result.metadata,
                )

        log.info(
            "Order processing finished",
            duration_ms=int((time.perf_counter() - started) * 1000),
        )
        return order

    def describe(self) -> list[dict[str, Any]]:
        """Name and description of every step, in traversal order."""
        return [
            {"index": index + 1, "name": step.name, "description": step.description}
            for index, step in enumerate(self.steps)
        ]
