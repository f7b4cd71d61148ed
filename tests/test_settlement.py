"""Tests for Settlement state helpers and settlement references."""

import pytest

from caravan.core.settlement import Settlement, SettlementRef
from caravan.trade.ledger import TradeLedger


def _make_settlement(**overrides) -> Settlement:
    defaults = dict(id="alpha", name="Alpha", coins=100, resources={"wood": 10})
    defaults.update(overrides)
    return Settlement(**defaults)


class TestSettlementState:
    def test_negative_coins_rejected(self):
        with pytest.raises(ValueError):
            _make_settlement(coins=-1)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValueError):
            _make_settlement(resources={"wood": -5})

    def test_dec_coins(self):
        s = _make_settlement()
        assert s.dec_coins(40)
        assert s.coins == 60
        assert not s.dec_coins(61)
        assert s.coins == 60

    def test_remove_resource(self):
        s = _make_settlement()
        assert not s.remove_resource("wood", 11)
        assert s.resources["wood"] == 10
        assert s.remove_resource("wood", 10)
        assert s.resources["wood"] == 0
        assert not s.remove_resource("iron", 1)

    def test_storage(self):
        s = _make_settlement(storage_capacity=25, resources={"wood": 10, "iron": 5})
        assert s.storage_used() == 15
        assert s.storage_free() == 10
        assert s.has_storage_space_for(10)
        assert not s.has_storage_space_for(11)

    def test_can_trade_requires_building(self):
        s = _make_settlement()
        assert not s.can_trade()
        s.buildings.add("tradingpost")
        assert s.can_trade()
        assert not s.can_trade("harbour")

    def test_shared_religion(self):
        a = _make_settlement(religion="sun")
        b = _make_settlement(id="beta", name="Beta", religion="sun")
        c = _make_settlement(id="gamma", name="Gamma", religion=None)
        d = _make_settlement(id="delta", name="Delta", religion=None)
        assert a.shares_religion_with(b)
        assert not a.shares_religion_with(c)
        assert not c.shares_religion_with(d)

    def test_reputation(self):
        s = _make_settlement()
        s.raise_influence("beta", 2)
        s.raise_influence("beta", 1)
        s.raise_prestige(3)
        s.raise_fame(50)
        assert s.get_influence("beta") == 3
        assert s.get_influence("gamma") == 0
        assert (s.prestige, s.fame) == (3, 50)

    def test_set_trades_chains(self):
        s = _make_settlement()
        ledger = TradeLedger(exports={"wood": 5})
        assert s.set_trades(ledger) is s
        assert s.get_trades() is ledger
        assert s.to_dict()["trades"] == {"imports": {}, "exports": {"wood": 5}}


class TestSettlementRef:
    def test_coerce(self):
        s = _make_settlement()
        assert SettlementRef.coerce("alpha") == SettlementRef.by_id("alpha")
        assert SettlementRef.coerce(2) == SettlementRef.by_index(2)
        assert SettlementRef.coerce(s).kind == "direct"
        ref = SettlementRef.by_id("x")
        assert SettlementRef.coerce(ref) is ref

    @pytest.mark.parametrize("value", [True, 1.5, None])
    def test_coerce_rejects_other_types(self, value):
        with pytest.raises(TypeError):
            SettlementRef.coerce(value)

    def test_describe(self):
        assert SettlementRef.by_index(3).describe() == "3"
        assert SettlementRef.direct(_make_settlement()).describe() == "Alpha"
