"""
Master configuration for the Caravan Sandbox trade economy.

ALL tunable parameters live here. Nothing in the trade core is hardcoded.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

IMPORTANCE_LEVELS = ("low", "medium", "high", "vital")


@dataclass
class TradeConfig:
    """
    Master configuration for pricing, reputation and ledger regeneration.

    Rates are percentages of a resource's base price. Use ``to_dict()`` /
    ``from_dict()`` for serialization and comparison.
    """

    # === World identity ===
    world_name: str = "default"
    random_seed: int | None = None

    # === Pricing (percent of base price, applied per unit) ===
    trades_addition: int = 10  # markup paid when buying from a settlement
    trades_discount: int = 20  # markdown taken when selling to a settlement
    black_market_discount: int = 80

    # === Reputation ===
    import_influence: int = 1
    import_prestige: int = 1
    export_influence: int = 2
    export_prestige: int = 2
    trade_fame: int = 50
    affiliation_multiplier: int = 2  # same religion on both sides

    # === Capabilities ===
    trade_building: str = "tradingpost"
    default_storage_capacity: int = 1000

    # === Ledger regeneration ===
    # Importance level -> inclusive [low, high] range for the random draw.
    importance_ranges: dict[str, list[int]] = field(default_factory=lambda: {
        "low": [10, 20],
        "medium": [20, 50],
        "high": [50, 100],
        "vital": [100, 200],
    })

    def __post_init__(self) -> None:
        for rate_name in ("trades_addition", "trades_discount", "black_market_discount"):
            rate = getattr(self, rate_name)
            if not 0 <= rate <= 100:
                raise ValueError(f"{rate_name} must be within [0, 100], got {rate}")
        for level in IMPORTANCE_LEVELS:
            if level not in self.importance_ranges:
                raise ValueError(f"importance_ranges is missing level '{level}'")
            low, high = self.importance_ranges[level]
            if low < 0 or high < low:
                raise ValueError(
                    f"Invalid range for importance '{level}': [{low}, {high}]"
                )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        d: dict[str, Any] = {}
        for k, v in self.__dict__.items():
            if k.startswith("_"):
                continue
            d[k] = v
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TradeConfig:
        """Deserialize from a dict."""
        return cls(**{k: v for k, v in d.items() if not k.startswith("_")})

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    @classmethod
    def from_json(cls, s: str) -> TradeConfig:
        return cls.from_dict(json.loads(s))

    def diff(self, other: TradeConfig) -> dict[str, tuple[Any, Any]]:
        """Return parameters that differ between two configs."""
        diffs: dict[str, tuple[Any, Any]] = {}
        for k in self.to_dict():
            v1 = getattr(self, k)
            v2 = getattr(other, k)
            if v1 != v2:
                diffs[k] = (v1, v2)
        return diffs
