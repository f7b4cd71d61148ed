"""
Trade ledger — per-settlement imports/exports available this cycle.

Exports are the supply a settlement offers for sale; imports are the demand
it is willing to buy. Ledgers are regenerated wholesale every cycle from the
settlement's trade profile (an importance level per resource) and are
decremented as trades consume them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from caravan.core.config import IMPORTANCE_LEVELS

if TYPE_CHECKING:
    from caravan.core.config import TradeConfig
    from caravan.core.settlement import Settlement

logger = logging.getLogger(__name__)

GOODS_TYPES = ("imports", "exports")


@dataclass
class TradeLedger:
    """Resource amounts a settlement exports and imports this cycle.

    A side set to ``None`` means the settlement does not trade in that
    direction at all (distinct from an empty mapping).
    """
    imports: dict[str, int] | None = field(default_factory=dict)
    exports: dict[str, int] | None = field(default_factory=dict)

    @classmethod
    def empty(cls) -> TradeLedger:
        return cls(imports={}, exports={})

    def remove_from_exports(self, resource: str, amount: int) -> int:
        """Decrement an export listing, never below zero."""
        if self.exports is None:
            raise ValueError("Ledger has no exports listing")
        self.exports[resource] = max(0, self.exports.get(resource, 0) - amount)
        return self.exports[resource]

    def remove_from_imports(self, resource: str, amount: int) -> int:
        """Decrement an import listing, never below zero."""
        if self.imports is None:
            raise ValueError("Ledger has no imports listing")
        self.imports[resource] = max(0, self.imports.get(resource, 0) - amount)
        return self.imports[resource]

    def total_exports(self) -> int:
        return sum((self.exports or {}).values())

    def total_imports(self) -> int:
        return sum((self.imports or {}).values())

    def is_empty(self) -> bool:
        return not self.imports and not self.exports

    def to_dict(self) -> dict[str, Any]:
        return {
            "imports": dict(self.imports) if self.imports is not None else None,
            "exports": dict(self.exports) if self.exports is not None else None,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TradeLedger:
        imports = d.get("imports")
        exports = d.get("exports")
        return cls(
            imports=dict(imports) if imports is not None else None,
            exports=dict(exports) if exports is not None else None,
        )


@dataclass
class TradeProfile:
    """Reference trade propensity: importance level per imported/exported good."""
    imports: dict[str, str] = field(default_factory=dict)
    exports: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for goods_type in GOODS_TYPES:
            for resource, importance in getattr(self, goods_type).items():
                if importance not in IMPORTANCE_LEVELS:
                    raise ValueError(
                        f"Unknown importance '{importance}' for {goods_type} "
                        f"'{resource}'; expected one of {IMPORTANCE_LEVELS}"
                    )

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TradeProfile:
        return cls(
            imports=dict(d.get("imports", {})),
            exports=dict(d.get("exports", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"imports": dict(self.imports), "exports": dict(self.exports)}


def draw_by_importance(
    rng: np.random.Generator, importance: str, config: TradeConfig,
) -> int:
    """Draw a uniform integer from the inclusive range for ``importance``."""
    low, high = config.importance_ranges[importance]
    return int(rng.integers(low, high + 1))


def reset_trades(
    settlement: Settlement,
    profile: TradeProfile | None,
    rng: np.random.Generator,
    config: TradeConfig,
) -> bool:
    """Regenerate a settlement's trade ledger for a new cycle.

    Exports restock the settlement up to the drawn amount when its stock is
    lower; imports only record demand. Without a profile the ledger is set
    to empty and False is returned.
    """
    trades = TradeLedger.empty()
    if profile is None:
        settlement.set_trades(trades)
        logger.debug("No trade profile for %s; ledger cleared", settlement.id)
        return False

    for goods_type in GOODS_TYPES:
        listing = getattr(trades, goods_type)
        for resource, importance in getattr(profile, goods_type).items():
            amount = draw_by_importance(rng, importance, config)
            if goods_type == "exports":
                current = settlement.resources.get(resource, 0)
                if current < amount:
                    settlement.resources[resource] = amount
            listing[resource] = amount

    settlement.set_trades(trades)
    logger.debug(
        "Reset trades for %s: %d exported, %d imported",
        settlement.id, trades.total_exports(), trades.total_imports(),
    )
    return True
