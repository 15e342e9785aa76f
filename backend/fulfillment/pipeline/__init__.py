"""
Order pipeline — fulfillment steps run in sequence for every order.

Each step is an OrderHandler bound to one external capability.  It
checks whether it applies to the order, performs its side effect if so,
and always lets the next step run.  OrderEngine is the single entry
point callers use.
"""

from fulfillment.pipeline.engine import OrderEngine
from fulfillment.pipeline.flow import Capabilities, build_flow, build_order_chain, build_order_engine
from fulfillment.pipeline.handler import OrderHandler

__all__ = [
    "Capabilities",
    "OrderEngine",
    "OrderHandler",
    "build_flow",
    "build_order_chain",
    "build_order_engine",
]
