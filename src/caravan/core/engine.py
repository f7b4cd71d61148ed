"""
Trade cycle engine.

Drives the periodic side of the economy: every cycle the activity of the
closing period is summarised, the cycle counter advances, and every
settlement's trade ledger is regenerated from its trade profile.
"""

from __future__ import annotations

import logging

from caravan.core.world import World
from caravan.metrics.collector import CycleMetrics, MetricsCollector
from caravan.trade.black_market import BlackMarketEntry

logger = logging.getLogger(__name__)


class TradeEngine:
    """
    Cycle scheduler for a World.

    Phases per cycle:
    1. Collect metrics for the closing cycle
    2. Advance the cycle counter
    3. Reset every settlement's trade ledger
    """

    def __init__(
        self,
        world: World,
        collector: MetricsCollector | None = None,
        started: bool = False,
    ):
        """Pass ``started=True`` when the world already has opening ledgers."""
        self.world = world
        self.collector = collector or MetricsCollector()
        self.started = started

    def start(self) -> dict[str, bool]:
        """Generate the opening ledgers. Safe to call more than once."""
        self.started = True
        return self.world.reset_all_trades()

    def step(self) -> CycleMetrics:
        """Close the current cycle and open the next one."""
        if not self.started:
            self.start()
        metrics = self.collector.collect(self.world)
        self.world.cycle += 1
        results = self.world.reset_all_trades()
        missing = [sid for sid, ok in results.items() if not ok]
        if missing:
            logger.debug(
                "Cycle %d: no trade profile for %s", self.world.cycle, ", ".join(missing),
            )
        return metrics

    def run(self, cycles: int) -> list[CycleMetrics]:
        return [self.step() for _ in range(cycles)]

    def drain_black_market(self) -> list[BlackMarketEntry]:
        """Hand accumulated black-market entries to the caller and clear them."""
        entries = self.world.black_market.drain()
        if entries:
            logger.info(
                "Drained %d black market entries worth %d coins",
                len(entries), sum(e.price for e in entries),
            )
        return entries
