"""
Pydantic models for API request/response validation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any


# === Worlds ===

class CreateWorldRequest(BaseModel):
    preset: str | None = None
    config: dict[str, Any] | None = None
    name: str | None = None
    seed: int | None = None


class StepRequest(BaseModel):
    n: int = Field(default=1, ge=1, le=1000)


class WorldSummary(BaseModel):
    id: str
    name: str
    cycle: int
    settlement_count: int
    trade_count: int


class WorldResponse(WorldSummary):
    config: dict[str, Any]
    metrics: dict[str, Any]


# === Trade ===

class TradeRequest(BaseModel):
    actor_id: str
    counterpart: str | int
    resource: str
    amount: int | None = None


class BlackMarketRequest(BaseModel):
    actor_id: str
    resource: str
    amount: int


class TradeResponse(BaseModel):
    success: bool
    failure: str | None
    message: str
    receipt: dict[str, Any] | None
    notifications: list[dict[str, Any]] = Field(default_factory=list)
