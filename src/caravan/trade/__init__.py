"""Inter-settlement trade, trade ledgers, and the black market."""

from caravan.trade.black_market import BlackMarketEntry, BlackMarketLedger
from caravan.trade.ledger import TradeLedger, TradeProfile, draw_by_importance, reset_trades
from caravan.trade.operations import (
    BlackMarketReceipt,
    TradeFailure,
    TradeReceipt,
    TradeResult,
    buy_from_settlement,
    list_black_market,
    sell_to_settlement,
)
from caravan.trade.reputation import apply_export_reputation, apply_import_reputation

__all__ = [
    "BlackMarketEntry",
    "BlackMarketLedger",
    "TradeLedger",
    "TradeProfile",
    "draw_by_importance",
    "reset_trades",
    "BlackMarketReceipt",
    "TradeFailure",
    "TradeReceipt",
    "TradeResult",
    "buy_from_settlement",
    "list_black_market",
    "sell_to_settlement",
    "apply_export_reputation",
    "apply_import_reputation",
]
