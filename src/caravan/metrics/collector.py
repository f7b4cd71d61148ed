"""
Metrics Collector — per-cycle trade statistics.

Summarises each trade cycle from the world's trade log: transaction counts,
traded volume, coins moved, black-market accumulation, listed supply and
demand, and how evenly coins are spread across settlements.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from caravan.core.world import World


@dataclass
class CycleMetrics:
    """Trade metrics for a single cycle."""

    cycle: int

    # Transactions
    trade_count: int
    import_count: int
    export_count: int
    black_market_count: int
    volume: int  # units moved between settlements
    coins_moved: int

    # Black market (cumulative until drained)
    black_market_amount: int
    black_market_price: int

    # Wealth
    total_coins: int
    coin_gini: float

    # Listed supply / demand after trading
    listed_exports: dict[str, int] = field(default_factory=dict)
    listed_imports: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.__dict__)


class MetricsCollector:
    """Collects and aggregates trade metrics across cycles."""

    def __init__(self) -> None:
        self.metrics_history: list[CycleMetrics] = []

    def collect(self, world: World) -> CycleMetrics:
        """Collect metrics for the world's current cycle."""
        entries = [e for e in world.trade_log if e["cycle"] == world.cycle]
        imports = [e for e in entries if e["kind"] == "import"]
        exports = [e for e in entries if e["kind"] == "export"]
        listings = [e for e in entries if e["kind"] == "black_market"]

        settlement_trades = imports + exports
        volume = sum(e["amount"] for e in settlement_trades)
        coins_moved = sum(e["total_price"] for e in settlement_trades)

        listed_exports: dict[str, int] = {}
        listed_imports: dict[str, int] = {}
        for settlement in world.settlements.values():
            trades = settlement.get_trades()
            if trades is None:
                continue
            for resource, amount in (trades.exports or {}).items():
                listed_exports[resource] = listed_exports.get(resource, 0) + amount
            for resource, amount in (trades.imports or {}).items():
                listed_imports[resource] = listed_imports.get(resource, 0) + amount

        coins = [s.coins for s in world.settlements.values()]
        metrics = CycleMetrics(
            cycle=world.cycle,
            trade_count=len(entries),
            import_count=len(imports),
            export_count=len(exports),
            black_market_count=len(listings),
            volume=volume,
            coins_moved=coins_moved,
            black_market_amount=world.black_market.total_amount(),
            black_market_price=world.black_market.total_price(),
            total_coins=int(sum(coins)),
            coin_gini=round(self._compute_gini(coins), 4),
            listed_exports=listed_exports,
            listed_imports=listed_imports,
        )
        self.metrics_history.append(metrics)
        return metrics

    def get_time_series(self, field_name: str) -> list[Any]:
        """Extract one metric across all collected cycles."""
        return [getattr(m, field_name) for m in self.metrics_history]

    @staticmethod
    def _compute_gini(values: list[int]) -> float:
        """Gini coefficient of a list of non-negative values."""
        if len(values) < 2:
            return 0.0
        sorted_vals = np.sort(np.asarray(values, dtype=float))
        total = sorted_vals.sum()
        if total == 0:
            return 0.0
        n = len(sorted_vals)
        ranks = np.arange(1, n + 1)
        gini = float(np.sum((2 * ranks - n - 1) * sorted_vals) / (n * total))
        return float(np.clip(gini, 0.0, 1.0))
