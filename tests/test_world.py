"""Tests for the World container."""

import pytest

from caravan.core.config import TradeConfig
from caravan.core.settlement import Settlement, SettlementRef
from caravan.core.world import World
from caravan.trade.ledger import TradeLedger, TradeProfile


def _make_world() -> World:
    world = World(TradeConfig(random_seed=3))
    world.add_settlement(
        Settlement(id="alpha", name="Alpha", coins=100),
        TradeProfile(exports={"wood": "low"}),
    )
    world.add_settlement(Settlement(id="beta", name="Beta", coins=300))
    return world


class TestRegistry:
    def test_duplicate_id_rejected(self):
        world = _make_world()
        with pytest.raises(ValueError):
            world.add_settlement(Settlement(id="alpha", name="Other"))

    def test_get_unknown(self):
        with pytest.raises(KeyError):
            _make_world().get_settlement("gamma")

    def test_remove_drops_ledger_and_profile(self):
        world = _make_world()
        world.reset_all_trades()
        alpha = world.remove_settlement("alpha")
        assert alpha.get_trades() is None
        assert "alpha" not in world.trade_profiles
        assert "alpha" not in world.settlements

    def test_player(self):
        world = _make_world()
        assert world.player() is None
        world.add_settlement(Settlement(id="me", name="Me", player=True))
        assert world.player().id == "me"


class TestResolve:
    def test_by_id_and_index(self):
        world = _make_world()
        assert world.resolve("beta").id == "beta"
        assert world.resolve(0).id == "alpha"
        assert world.resolve(SettlementRef.by_index(1)).id == "beta"

    def test_dead_references(self):
        world = _make_world()
        assert world.resolve("gamma") is None
        assert world.resolve(5) is None
        assert world.resolve(-1) is None

    def test_direct_must_be_registered(self):
        world = _make_world()
        alpha = world.get_settlement("alpha")
        assert world.resolve(alpha) is alpha
        impostor = Settlement(id="alpha", name="Alpha")
        assert world.resolve(impostor) is None


class TestTradeLedgers:
    def test_reset_all_reports_missing_profiles(self):
        world = _make_world()
        assert world.reset_all_trades() == {"alpha": True, "beta": False}
        assert world.get_settlement("beta").get_trades() == TradeLedger.empty()

    def test_set_trade_profile_requires_settlement(self):
        world = _make_world()
        with pytest.raises(KeyError):
            world.set_trade_profile("gamma", TradeProfile())
        world.set_trade_profile("beta", TradeProfile(imports={"wood": "high"}))
        assert world.reset_trades(world.get_settlement("beta"))

    def test_refresh_hook(self):
        calls = []
        world = World(refresh=lambda: calls.append("x"))
        world.refresh()
        world.refresh()
        assert calls == ["x", "x"]
        assert world.refresh_count == 2

    def test_metrics(self):
        world = _make_world()
        world.black_market.add("iron", 5, 10)
        world.record_trade("import", {"amount": 1, "total_price": 6})
        metrics = world.get_metrics()
        assert metrics["settlement_count"] == 2
        assert metrics["trade_count"] == 1
        assert metrics["total_coins"] == 400
        assert metrics["black_market_amount"] == 5
        assert world.trade_log[0]["cycle"] == 0
