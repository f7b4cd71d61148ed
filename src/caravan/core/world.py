"""
World container — owns every settlement and the shared trade state.

The World holds the settlements (in insertion order), their reference trade
profiles, the black market ledger, the seeded RNG used for ledger resets,
the notification sink, and the post-trade refresh hook. Trade operations
borrow the two settlements involved in a transaction from here.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from caravan.core.config import TradeConfig
from caravan.core.notify import NotificationSink
from caravan.core.resources import ResourceCatalog
from caravan.core.settlement import Settlement, SettlementRef
from caravan.trade.black_market import BlackMarketLedger
from caravan.trade.ledger import TradeProfile, reset_trades

logger = logging.getLogger(__name__)


class World:
    """Game-state container for settlements and shared trade state."""

    def __init__(
        self,
        config: TradeConfig | None = None,
        catalog: ResourceCatalog | None = None,
        sink: NotificationSink | None = None,
        refresh: Callable[[], None] | None = None,
    ) -> None:
        self.config = config or TradeConfig()
        self.catalog = catalog or ResourceCatalog.default()
        self.sink = sink or NotificationSink()
        self._refresh_hook = refresh
        self.rng = np.random.default_rng(self.config.random_seed)

        self.settlements: dict[str, Settlement] = {}
        self.trade_profiles: dict[str, TradeProfile] = {}
        self.black_market = BlackMarketLedger()
        self.trade_log: list[dict[str, Any]] = []
        self.cycle: int = 0
        self.refresh_count: int = 0

    # ------------------------------------------------------------------
    # Settlement registry
    # ------------------------------------------------------------------
    def add_settlement(
        self, settlement: Settlement, profile: TradeProfile | None = None,
    ) -> Settlement:
        if settlement.id in self.settlements:
            raise ValueError(f"Settlement '{settlement.id}' already exists")
        self.settlements[settlement.id] = settlement
        if profile is not None:
            self.trade_profiles[settlement.id] = profile
        return settlement

    def remove_settlement(self, settlement_id: str) -> Settlement:
        """Remove a settlement together with its ledger and profile."""
        settlement = self.get_settlement(settlement_id)
        del self.settlements[settlement_id]
        self.trade_profiles.pop(settlement_id, None)
        settlement.set_trades(None)
        return settlement

    def get_settlement(self, settlement_id: str) -> Settlement:
        """Return a settlement by id. Raises KeyError if absent."""
        try:
            return self.settlements[settlement_id]
        except KeyError:
            raise KeyError(f"Settlement '{settlement_id}' not found") from None

    def resolve(self, ref: SettlementRef | Settlement | str | int) -> Settlement | None:
        """Resolve a reference to a live settlement, or None."""
        ref = SettlementRef.coerce(ref)
        if ref.kind == "id":
            return self.settlements.get(ref.value)
        if ref.kind == "index":
            ordered = list(self.settlements.values())
            if 0 <= ref.value < len(ordered):
                return ordered[ref.value]
            return None
        settlement = ref.value
        if self.settlements.get(settlement.id) is not settlement:
            return None
        return settlement

    def player(self) -> Settlement | None:
        for settlement in self.settlements.values():
            if settlement.is_player():
                return settlement
        return None

    # ------------------------------------------------------------------
    # Trade ledgers
    # ------------------------------------------------------------------
    def set_trade_profile(self, settlement_id: str, profile: TradeProfile) -> None:
        self.get_settlement(settlement_id)
        self.trade_profiles[settlement_id] = profile

    def reset_trades(self, settlement: Settlement) -> bool:
        return reset_trades(
            settlement,
            self.trade_profiles.get(settlement.id),
            self.rng,
            self.config,
        )

    def reset_all_trades(self) -> dict[str, bool]:
        """Regenerate every settlement's ledger; returns success per id."""
        return {
            sid: self.reset_trades(settlement)
            for sid, settlement in self.settlements.items()
        }

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Signal observers that trade state changed."""
        self.refresh_count += 1
        if self._refresh_hook is not None:
            self._refresh_hook()

    def record_trade(self, kind: str, receipt: dict[str, Any]) -> None:
        entry = {"kind": kind, "cycle": self.cycle}
        entry.update(receipt)
        self.trade_log.append(entry)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------
    def get_metrics(self) -> dict[str, Any]:
        return {
            "cycle": self.cycle,
            "settlement_count": len(self.settlements),
            "trade_count": len(self.trade_log),
            "total_coins": sum(s.coins for s in self.settlements.values()),
            "black_market_amount": self.black_market.total_amount(),
            "black_market_price": self.black_market.total_price(),
        }
