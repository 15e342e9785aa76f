"""
Pydantic Settings — centralized configuration loaded from environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # ── Application ───────────────────────────
    APP_ENV: str = "development"

    # ── Logging ───────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ── Order flow ────────────────────────────
    # Step names resolved through fulfillment.pipeline.flow.STEP_REGISTRY,
    # in traversal order.
    ORDER_FLOW: list[str] = Field(
        default_factory=lambda: ["royalty_slip", "shipment_slip", "membership"],
    )

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}


settings = Settings()
