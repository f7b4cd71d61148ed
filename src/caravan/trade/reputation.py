"""Reputation side effects of successful trades."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from caravan.core.config import TradeConfig
    from caravan.core.settlement import Settlement


def _multiplier(actor: Settlement, counterpart: Settlement, config: TradeConfig) -> int:
    return config.affiliation_multiplier if actor.shares_religion_with(counterpart) else 1


def apply_import_reputation(
    actor: Settlement, counterpart: Settlement, config: TradeConfig,
) -> None:
    """Raise the buyer's influence, prestige and fame after an import."""
    mult = _multiplier(actor, counterpart, config)
    actor.raise_influence(counterpart.id, config.import_influence * mult)
    actor.raise_prestige(config.import_prestige * mult)
    actor.raise_fame(config.trade_fame)


def apply_export_reputation(
    actor: Settlement, counterpart: Settlement, config: TradeConfig,
) -> None:
    """Raise the seller's influence, prestige and fame after an export."""
    mult = _multiplier(actor, counterpart, config)
    actor.raise_influence(counterpart.id, config.export_influence * mult)
    actor.raise_prestige(config.export_prestige * mult)
    actor.raise_fame(config.trade_fame)
