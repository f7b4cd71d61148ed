"""
Trade presets — pre-configured economies and a small sample world.

Each config preset returns a TradeConfig tuned to a different market
climate. ``build_world`` assembles a ready-to-trade World around one.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from caravan.core.config import TradeConfig
from caravan.core.settlement import Settlement
from caravan.core.world import World
from caravan.trade.ledger import TradeProfile


def baseline() -> TradeConfig:
    """Standard rates and reputation rewards."""
    return TradeConfig(world_name="baseline")


def open_borders() -> TradeConfig:
    """Cheap imports, generous exports, and doubled reputation rewards."""
    return TradeConfig(
        world_name="open_borders",
        trades_addition=2,
        trades_discount=5,
        import_influence=2,
        import_prestige=2,
        export_influence=4,
        export_prestige=4,
    )


def smugglers_paradise() -> TradeConfig:
    """Heavy official markups push goods onto a lenient black market."""
    return TradeConfig(
        world_name="smugglers_paradise",
        trades_addition=40,
        trades_discount=40,
        black_market_discount=30,
    )


PRESETS: dict[str, Callable[[], TradeConfig]] = {
    "baseline": baseline,
    "open_borders": open_borders,
    "smugglers_paradise": smugglers_paradise,
}


def get_preset(name: str) -> TradeConfig:
    """Return a preset config by name. Raises KeyError if unknown."""
    if name not in PRESETS:
        raise KeyError(f"Unknown preset '{name}'. Available: {list(PRESETS.keys())}")
    return PRESETS[name]()


def list_presets() -> list[str]:
    return list(PRESETS.keys())


# ---------------------------------------------------------------------------
# Sample world
# ---------------------------------------------------------------------------
_SAMPLE_SETTLEMENTS = [
    {
        "id": "ashford", "name": "Ashford", "player": True, "religion": "sun",
        "coins": 10000,
        "resources": {"wood": 100, "stones": 100, "wheat": 80, "fish": 40},
        "profile": {
            "imports": {"iron": "medium", "salt": "low", "wine": "low"},
            "exports": {"wood": "medium", "fish": "low"},
        },
    },
    {
        "id": "karsa", "name": "Karsa", "religion": "sun",
        "coins": 25000,
        "resources": {"iron": 60, "coal": 80, "copper": 40},
        "profile": {
            "imports": {"wood": "high", "wheat": "medium", "fish": "low"},
            "exports": {"iron": "high", "coal": "medium", "weapons": "low"},
        },
    },
    {
        "id": "mirelle", "name": "Mirelle", "religion": "tide",
        "coins": 18000,
        "resources": {"fish": 120, "salt": 90, "wine": 30},
        "profile": {
            "imports": {"iron": "medium", "stones": "high", "furs": "low"},
            "exports": {"salt": "high", "wine": "medium", "fish": "vital"},
        },
    },
    {
        "id": "tolvar", "name": "Tolvar", "religion": None,
        "coins": 6000,
        "resources": {"furs": 50, "meat": 70, "leather": 20},
        "profile": {
            "imports": {"salt": "medium", "bread": "low", "wine": "medium"},
            "exports": {"furs": "medium", "meat": "high", "leather": "low"},
        },
    },
]


def build_world(
    preset: str = "baseline",
    seed: int | None = None,
    config: TradeConfig | None = None,
) -> World:
    """Create the sample world with opening ledgers already generated.

    An explicit ``config`` takes precedence over the named preset.
    """
    config = config or get_preset(preset)
    if seed is not None:
        config = replace(config, random_seed=seed)
    world = World(config)
    for entry in _SAMPLE_SETTLEMENTS:
        settlement = Settlement(
            id=entry["id"],
            name=entry["name"],
            player=entry.get("player", False),
            religion=entry["religion"],
            coins=entry["coins"],
            resources=dict(entry["resources"]),
            storage_capacity=config.default_storage_capacity,
            buildings={config.trade_building},
        )
        world.add_settlement(settlement, TradeProfile.from_dict(entry["profile"]))
    world.reset_all_trades()
    return world
