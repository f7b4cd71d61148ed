"""Tests for trade ledgers, profiles and per-cycle regeneration."""

import numpy as np
import pytest

from caravan.core.config import TradeConfig
from caravan.core.settlement import Settlement
from caravan.trade.ledger import (
    TradeLedger,
    TradeProfile,
    draw_by_importance,
    reset_trades,
)


def _make_profile() -> TradeProfile:
    return TradeProfile(
        imports={"salt": "low", "iron": "high"},
        exports={"wood": "medium", "fish": "vital"},
    )


def _make_settlement(**resources) -> Settlement:
    return Settlement(id="alpha", name="Alpha", coins=100, resources=dict(resources))


class TestTradeLedger:
    def test_remove_clamps_at_zero(self):
        ledger = TradeLedger(imports={"salt": 5}, exports={"wood": 3})
        assert ledger.remove_from_exports("wood", 10) == 0
        assert ledger.remove_from_imports("salt", 2) == 3

    def test_missing_side_raises(self):
        ledger = TradeLedger(imports=None, exports=None)
        with pytest.raises(ValueError):
            ledger.remove_from_exports("wood", 1)
        with pytest.raises(ValueError):
            ledger.remove_from_imports("wood", 1)

    def test_totals_and_empty(self):
        ledger = TradeLedger(imports={"salt": 5}, exports={"wood": 3, "fish": 4})
        assert ledger.total_imports() == 5
        assert ledger.total_exports() == 7
        assert not ledger.is_empty()
        assert TradeLedger.empty().is_empty()

    def test_dict_round_trip_keeps_none(self):
        ledger = TradeLedger(imports=None, exports={"wood": 3})
        restored = TradeLedger.from_dict(ledger.to_dict())
        assert restored.imports is None
        assert restored.exports == {"wood": 3}


class TestTradeProfile:
    def test_unknown_importance_rejected(self):
        with pytest.raises(ValueError, match="urgent"):
            TradeProfile(exports={"wood": "urgent"})

    def test_dict_round_trip(self):
        profile = _make_profile()
        assert TradeProfile.from_dict(profile.to_dict()) == profile


class TestDrawByImportance:
    @pytest.mark.parametrize("importance", ["low", "medium", "high", "vital"])
    def test_draw_within_range(self, importance):
        config = TradeConfig()
        low, high = config.importance_ranges[importance]
        rng = np.random.default_rng(0)
        draws = [draw_by_importance(rng, importance, config) for _ in range(200)]
        assert all(low <= d <= high for d in draws)
        assert all(isinstance(d, int) for d in draws)

    def test_degenerate_range(self):
        ranges = TradeConfig().importance_ranges
        ranges["low"] = [7, 7]
        config = TradeConfig(importance_ranges=ranges)
        assert draw_by_importance(np.random.default_rng(1), "low", config) == 7


class TestResetTrades:
    def test_ledger_built_from_profile(self):
        config = TradeConfig()
        s = _make_settlement()
        assert reset_trades(s, _make_profile(), np.random.default_rng(42), config)

        ledger = s.get_trades()
        assert set(ledger.exports) == {"wood", "fish"}
        assert set(ledger.imports) == {"salt", "iron"}
        assert 20 <= ledger.exports["wood"] <= 50
        assert 100 <= ledger.exports["fish"] <= 200
        assert 10 <= ledger.imports["salt"] <= 20
        assert 50 <= ledger.imports["iron"] <= 100

    def test_exports_restock_up_to_drawn_amount(self):
        s = _make_settlement()
        reset_trades(s, _make_profile(), np.random.default_rng(42), TradeConfig())
        assert s.resources["wood"] == s.trades.exports["wood"]
        assert s.resources["fish"] == s.trades.exports["fish"]

    def test_larger_stock_untouched(self):
        s = _make_settlement(wood=10000)
        reset_trades(s, _make_profile(), np.random.default_rng(42), TradeConfig())
        assert s.resources["wood"] == 10000

    def test_imports_do_not_touch_stock(self):
        s = _make_settlement()
        reset_trades(s, _make_profile(), np.random.default_rng(42), TradeConfig())
        assert "salt" not in s.resources
        assert "iron" not in s.resources

    def test_restock_ignores_storage_capacity(self):
        s = Settlement(id="alpha", name="Alpha", storage_capacity=5)
        reset_trades(s, _make_profile(), np.random.default_rng(42), TradeConfig())
        assert s.storage_used() > s.storage_capacity

    def test_no_profile_clears_ledger(self):
        s = _make_settlement()
        s.set_trades(TradeLedger(exports={"wood": 5}))
        assert not reset_trades(s, None, np.random.default_rng(42), TradeConfig())
        assert s.get_trades() is not None
        assert s.get_trades().is_empty()

    def test_previous_ledger_replaced(self):
        s = _make_settlement()
        s.set_trades(TradeLedger(exports={"copper": 5}))
        reset_trades(s, _make_profile(), np.random.default_rng(42), TradeConfig())
        assert "copper" not in s.trades.exports

    def test_seeded_regeneration_is_deterministic(self):
        a = _make_settlement()
        b = _make_settlement()
        reset_trades(a, _make_profile(), np.random.default_rng(7), TradeConfig())
        reset_trades(b, _make_profile(), np.random.default_rng(7), TradeConfig())
        assert a.trades == b.trades
        assert a.resources == b.resources
