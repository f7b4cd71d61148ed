#!/usr/bin/env python3
"""Run a few trade cycles in the sample world and print results."""

import logging

from caravan.core.engine import TradeEngine
from caravan.experiment.presets import build_world
from caravan.trade.operations import (
    buy_from_settlement,
    list_black_market,
    sell_to_settlement,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    world = build_world("baseline", seed=42)
    engine = TradeEngine(world, started=True)
    player = world.player()

    print(f"=== Caravan Sandbox: {world.config.world_name} ===")
    print(f"Settlements: {', '.join(s.name for s in world.settlements.values())}")
    print(f"Player: {player.name} ({player.coins} coins)")
    print()

    for cycle in range(3):
        karsa = world.get_settlement("karsa")
        listed_iron = (karsa.trades.exports or {}).get("iron", 0)
        bought = buy_from_settlement(world, player, "karsa", "iron", min(10, listed_iron))
        sold = sell_to_settlement(world, player, "karsa", "wood", 10)
        listed = list_black_market(world, player, "stones", 5)

        for label, result in (("buy", bought), ("sell", sold), ("black", listed)):
            if result:
                print(f"  cycle {cycle} {label:5s}: {result.receipt.to_dict()}")
            else:
                print(f"  cycle {cycle} {label:5s}: failed ({result.failure.value})")

        engine.step()
        engine.drain_black_market()

    print()
    print(f"{'Cyc':>4} {'Trades':>6} {'Volume':>6} {'Coins':>7} {'BM':>4} {'Gini':>6}")
    print("-" * 40)
    for m in engine.collector.metrics_history:
        print(
            f"{m.cycle:4d} {m.trade_count:6d} {m.volume:6d} "
            f"{m.coins_moved:7d} {m.black_market_amount:4d} {m.coin_gini:6.3f}"
        )

    print()
    print(f"=== Final State (Cycle {world.cycle}) ===")
    print(f"{player.name}: {player.coins} coins, prestige {player.prestige}, fame {player.fame}")
    print(f"Influence: {player.influence}")


if __name__ == "__main__":
    main()
