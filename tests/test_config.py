"""Tests for TradeConfig validation and serialization."""

import pytest

from caravan.core.config import IMPORTANCE_LEVELS, TradeConfig


def _make_config(**overrides) -> TradeConfig:
    return TradeConfig(random_seed=42, **overrides)


class TestDefaults:
    def test_pricing_rates(self):
        config = TradeConfig()
        assert config.trades_addition == 10
        assert config.trades_discount == 20
        assert config.black_market_discount == 80

    def test_reputation_rewards(self):
        config = TradeConfig()
        assert (config.import_influence, config.import_prestige) == (1, 1)
        assert (config.export_influence, config.export_prestige) == (2, 2)
        assert config.trade_fame == 50
        assert config.affiliation_multiplier == 2

    def test_importance_ranges_cover_every_level(self):
        config = TradeConfig()
        assert set(config.importance_ranges) == set(IMPORTANCE_LEVELS)
        assert config.importance_ranges["low"] == [10, 20]
        assert config.importance_ranges["vital"] == [100, 200]

    def test_ranges_not_shared_between_instances(self):
        a = TradeConfig()
        b = TradeConfig()
        a.importance_ranges["low"][1] = 99
        assert b.importance_ranges["low"] == [10, 20]


class TestValidation:
    @pytest.mark.parametrize("name", ["trades_addition", "trades_discount", "black_market_discount"])
    def test_rate_above_100_rejected(self, name):
        with pytest.raises(ValueError, match=name):
            _make_config(**{name: 101})

    def test_negative_rate_rejected(self):
        with pytest.raises(ValueError):
            _make_config(trades_discount=-1)

    def test_boundary_rates_accepted(self):
        config = _make_config(trades_addition=0, black_market_discount=100)
        assert config.black_market_discount == 100

    def test_missing_importance_level(self):
        with pytest.raises(ValueError, match="vital"):
            _make_config(importance_ranges={"low": [1, 2], "medium": [2, 3], "high": [3, 4]})

    def test_inverted_range(self):
        ranges = TradeConfig().importance_ranges
        ranges["high"] = [100, 50]
        with pytest.raises(ValueError, match="high"):
            _make_config(importance_ranges=ranges)


class TestSerialization:
    def test_json_round_trip(self):
        config = _make_config(world_name="river", trades_addition=15)
        restored = TradeConfig.from_json(config.to_json())
        assert restored == config

    def test_from_dict_unknown_key(self):
        with pytest.raises(TypeError):
            TradeConfig.from_dict({"trades_markup": 5})

    def test_diff(self):
        a = _make_config()
        b = _make_config(trades_discount=30, trade_fame=10)
        assert a.diff(b) == {"trades_discount": (20, 30), "trade_fame": (50, 10)}
        assert a.diff(a) == {}
