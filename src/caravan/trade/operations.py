"""
Settlement trade operations — buying, selling, and black-market listing.

Each operation is a single transaction: preconditions are checked in a
fixed order, and only once every check has passed are the two settlements,
the trade ledger and the reputation scores mutated. A failed precondition
returns a falsy ``TradeResult`` naming the failure; nothing is raised across
this boundary and nothing is partially applied.

Player-facing messages go to the world's notification sink only when the
acting settlement is the player.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from caravan.core.pricing import (
    discount_for,
    gross_price,
    price_with_markdown,
    price_with_markup,
    unit_price_with_markdown,
    unit_price_with_markup,
)
from caravan.core.settlement import Settlement, SettlementRef
from caravan.trade.reputation import apply_export_reputation, apply_import_reputation

if TYPE_CHECKING:
    from caravan.core.world import World
    from caravan.trade.black_market import BlackMarketLedger

logger = logging.getLogger(__name__)

WORLD_MARKET = "World Market"
BLACK_MARKET = "Black Market"


class TradeFailure(str, Enum):
    """Closed set of reasons a trade can fail."""
    UNKNOWN_RESOURCE = "unknown_resource"
    TRADING_DISABLED = "trading_disabled"
    UNKNOWN_SETTLEMENT = "unknown_settlement"
    SAME_SETTLEMENT = "same_settlement"
    NO_TRADE_DATA = "no_trade_data"
    NO_EXPORTS_AVAILABLE = "no_exports_available"
    NO_IMPORTS_AVAILABLE = "no_imports_available"
    RESOURCE_NOT_EXPORTED = "resource_not_exported"
    RESOURCE_NOT_IMPORTED = "resource_not_imported"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_STORAGE = "insufficient_storage"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_STOCK = "insufficient_stock"


@dataclass
class TradeReceipt:
    """Settlement-to-settlement transaction record."""
    buyer: str
    seller: str
    amount: int
    goods: str
    unit_price: int
    total_price: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "buyer": self.buyer,
            "seller": self.seller,
            "amount": self.amount,
            "goods": self.goods,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
        }


@dataclass
class BlackMarketReceipt:
    """Settlement-to-black-market listing record."""
    seller: str
    amount: int
    goods: str
    price: int
    discount: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "seller": self.seller,
            "amount": self.amount,
            "goods": self.goods,
            "price": self.price,
            "discount": self.discount,
        }


@dataclass
class TradeResult:
    """Outcome of a trade call. Falsy when the trade failed."""
    success: bool
    failure: TradeFailure | None = None
    message: str = ""
    receipt: TradeReceipt | BlackMarketReceipt | None = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, receipt: TradeReceipt | BlackMarketReceipt, message: str = "") -> TradeResult:
        return cls(success=True, receipt=receipt, message=message)

    @classmethod
    def failed(cls, failure: TradeFailure, message: str) -> TradeResult:
        return cls(success=False, failure=failure, message=message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "failure": self.failure.value if self.failure is not None else None,
            "message": self.message,
            "receipt": self.receipt.to_dict() if self.receipt is not None else None,
        }


def _is_whole_positive(amount: Any) -> bool:
    # bool is an int subclass
    return isinstance(amount, int) and not isinstance(amount, bool) and amount > 0


def _resolve_counterpart(
    world: World, counterpart: Any,
) -> tuple[Settlement | None, str]:
    """Resolve a loose counterpart reference; unusable values resolve to None."""
    try:
        ref = SettlementRef.coerce(counterpart)
    except TypeError:
        return None, repr(counterpart)
    return world.resolve(ref), ref.describe()


def _fail(
    world: World, actor: Settlement, failure: TradeFailure, message: str,
) -> TradeResult:
    logger.debug("Trade by %s failed (%s): %s", actor.id, failure.value, message)
    if actor.is_player():
        world.sink.error(message)
    return TradeResult.failed(failure, message)


def _succeed(
    world: World,
    actor: Settlement,
    receipt: TradeReceipt | BlackMarketReceipt,
    message: str,
    category: str,
) -> TradeResult:
    world.refresh()
    if actor.is_player():
        world.sink.notify(message, category)
    return TradeResult.ok(receipt, message)


# ---------------------------------------------------------------------------
# Buy
# ---------------------------------------------------------------------------

def buy_from_settlement(
    world: World,
    actor: Settlement,
    counterpart: SettlementRef | Settlement | str | int,
    resource: str,
    amount: int | None = None,
) -> TradeResult:
    """Buy ``amount`` of ``resource`` from the counterpart's exports.

    ``amount`` defaults to the full listed export amount. The buyer pays the
    marked-up price; the seller is credited the plain gross price.
    """
    config = world.config
    catalog = world.catalog

    if not catalog.exists(resource):
        return _fail(world, actor, TradeFailure.UNKNOWN_RESOURCE,
                     "The resource you specified does not exist.")
    if not actor.can_trade(config.trade_building):
        return _fail(world, actor, TradeFailure.TRADING_DISABLED,
                     f"{actor.name} needs a {config.trade_building} to trade.")

    seller, label = _resolve_counterpart(world, counterpart)
    if seller is None:
        return _fail(world, actor, TradeFailure.UNKNOWN_SETTLEMENT,
                     f"{label} does not exist.")
    if seller is actor:
        return _fail(world, actor, TradeFailure.SAME_SETTLEMENT,
                     f"{actor.name} cannot trade with itself.")

    trades = seller.get_trades()
    if trades is None:
        return _fail(world, actor, TradeFailure.NO_TRADE_DATA,
                     f"{seller.name} does not trade any goods.")
    if trades.exports is None:
        return _fail(world, actor, TradeFailure.NO_EXPORTS_AVAILABLE,
                     f"{seller.name} does not export any goods.")
    if resource not in trades.exports:
        return _fail(world, actor, TradeFailure.RESOURCE_NOT_EXPORTED,
                     f"{seller.name} does not export the requested goods.")

    listed = trades.exports[resource]
    if amount is None:
        amount = listed
    goods = catalog.get(resource)
    if not _is_whole_positive(amount):
        return _fail(world, actor, TradeFailure.INVALID_AMOUNT,
                     f"Cannot buy {amount!r} {goods.name} from {seller.name}; "
                     "the amount must be a positive whole number.")

    discount = discount_for(goods, config.trades_addition)
    price = price_with_markup(amount, goods, discount)
    settlement_price = gross_price(amount, goods)
    unit_price = unit_price_with_markup(goods, discount)

    if not actor.has_storage_space_for(amount):
        return _fail(world, actor, TradeFailure.INSUFFICIENT_STORAGE,
                     f"{actor.name} does not have enough storage space for "
                     f"{amount} {goods.name}.")
    if not actor.has_coins(price):
        return _fail(world, actor, TradeFailure.INSUFFICIENT_FUNDS,
                     f"{actor.name} does not have enough coins.")
    # The listing gates the sale, not the seller's raw stock.
    if amount > listed or not seller.has_resource(resource, amount):
        return _fail(world, actor, TradeFailure.INSUFFICIENT_STOCK,
                     f"{seller.name} does not have {amount} {goods.name} for sale.")

    actor.dec_coins(price)
    seller.remove_resource(resource, amount)
    seller.inc_coins(settlement_price)
    actor.add_to_storage(resource, amount)
    trades.remove_from_exports(resource, amount)
    apply_import_reputation(actor, seller, config)

    receipt = TradeReceipt(
        buyer=actor.name,
        seller=seller.name,
        amount=amount,
        goods=goods.name,
        unit_price=unit_price,
        total_price=price,
    )
    world.record_trade("import", {
        **receipt.to_dict(),
        "resource": resource,
        "buyer_id": actor.id,
        "seller_id": seller.id,
    })
    logger.info(
        "%s bought %d %s from %s for %d coins",
        actor.id, amount, resource, seller.id, price,
    )
    message = (
        f"{actor.name} bought {amount} {goods.name} from {seller.name} for "
        f"{unit_price} coins each, for a total of {price} coins."
    )
    return _succeed(world, actor, receipt, message, WORLD_MARKET)


# ---------------------------------------------------------------------------
# Sell
# ---------------------------------------------------------------------------

def sell_to_settlement(
    world: World,
    actor: Settlement,
    counterpart: SettlementRef | Settlement | str | int,
    resource: str,
    amount: int | None = None,
) -> TradeResult:
    """Sell ``amount`` of ``resource`` into the counterpart's imports.

    ``amount`` defaults to the full listed import demand. The seller receives
    the marked-down price; the buyer pays the plain gross price.
    """
    config = world.config
    catalog = world.catalog

    if not catalog.exists(resource):
        return _fail(world, actor, TradeFailure.UNKNOWN_RESOURCE,
                     "The resource you specified does not exist.")
    if not actor.can_trade(config.trade_building):
        return _fail(world, actor, TradeFailure.TRADING_DISABLED,
                     f"{actor.name} needs a {config.trade_building} to trade.")

    buyer, label = _resolve_counterpart(world, counterpart)
    if buyer is None:
        return _fail(world, actor, TradeFailure.UNKNOWN_SETTLEMENT,
                     f"{label} does not exist.")
    if buyer is actor:
        return _fail(world, actor, TradeFailure.SAME_SETTLEMENT,
                     f"{actor.name} cannot trade with itself.")

    trades = buyer.get_trades()
    if trades is None:
        return _fail(world, actor, TradeFailure.NO_TRADE_DATA,
                     f"{buyer.name} does not trade any goods.")
    if trades.imports is None:
        return _fail(world, actor, TradeFailure.NO_IMPORTS_AVAILABLE,
                     f"{buyer.name} does not import any goods.")
    if resource not in trades.imports:
        return _fail(world, actor, TradeFailure.RESOURCE_NOT_IMPORTED,
                     f"{buyer.name} does not import the specified goods.")

    listed = trades.imports[resource]
    if amount is None:
        amount = listed
    goods = catalog.get(resource)
    if not _is_whole_positive(amount):
        return _fail(world, actor, TradeFailure.INVALID_AMOUNT,
                     f"Cannot sell {amount!r} {goods.name} to {buyer.name}; "
                     "the amount must be a positive whole number.")
    if amount > listed:
        return _fail(world, actor, TradeFailure.RESOURCE_NOT_IMPORTED,
                     f"{buyer.name} only imports {listed} {goods.name}.")

    discount = discount_for(goods, config.trades_discount)
    price = price_with_markdown(amount, goods, discount)
    settlement_price = gross_price(amount, goods)
    unit_price = unit_price_with_markdown(goods, discount)

    if not actor.has_resource(resource, amount):
        return _fail(world, actor, TradeFailure.INSUFFICIENT_STOCK,
                     f"{actor.name} does not have enough {goods.name} to sell.")
    if not buyer.has_coins(settlement_price):
        return _fail(world, actor, TradeFailure.INSUFFICIENT_FUNDS,
                     f"{buyer.name} does not have enough coins.")
    if not buyer.has_storage_space_for(amount):
        return _fail(world, actor, TradeFailure.INSUFFICIENT_STORAGE,
                     f"{buyer.name} does not have enough storage space for "
                     f"{amount} {goods.name}.")

    actor.remove_resource(resource, amount)
    actor.inc_coins(price)
    buyer.dec_coins(settlement_price)
    buyer.add_to_storage(resource, amount)
    trades.remove_from_imports(resource, amount)
    apply_export_reputation(actor, buyer, config)

    receipt = TradeReceipt(
        buyer=buyer.name,
        seller=actor.name,
        amount=amount,
        goods=goods.name,
        unit_price=unit_price,
        total_price=price,
    )
    world.record_trade("export", {
        **receipt.to_dict(),
        "resource": resource,
        "buyer_id": buyer.id,
        "seller_id": actor.id,
    })
    logger.info(
        "%s sold %d %s to %s for %d coins",
        actor.id, amount, resource, buyer.id, price,
    )
    message = (
        f"{actor.name} sold {amount} {goods.name} to {buyer.name} for "
        f"{unit_price} coins each, for a total of {price} coins."
    )
    return _succeed(world, actor, receipt, message, WORLD_MARKET)


# ---------------------------------------------------------------------------
# Black market
# ---------------------------------------------------------------------------

def list_black_market(
    world: World,
    actor: Settlement,
    resource: str,
    amount: int,
    ledger: BlackMarketLedger | None = None,
) -> TradeResult:
    """Move goods from the actor's stock onto the black market.

    The payout (marked down by the black-market rate) accumulates in
    ``ledger``, which defaults to the world's own black market.
    """
    config = world.config
    catalog = world.catalog
    if ledger is None:
        ledger = world.black_market

    if not catalog.exists(resource):
        return _fail(world, actor, TradeFailure.UNKNOWN_RESOURCE,
                     "The resource you specified does not exist.")
    if not _is_whole_positive(amount):
        return _fail(world, actor, TradeFailure.INVALID_AMOUNT,
                     "You must list a whole number of units, at least one, on the Black Market.")
    if not actor.has_resource(resource, amount):
        return _fail(world, actor, TradeFailure.INSUFFICIENT_STOCK,
                     f"{actor.name} doesn't have enough resources of this type.")

    goods = catalog.get(resource)
    discount = discount_for(goods, config.black_market_discount)
    price = price_with_markdown(amount, goods, discount)

    actor.remove_resource(resource, amount)
    ledger.add(resource, amount, price)

    receipt = BlackMarketReceipt(
        seller=actor.name,
        amount=amount,
        goods=goods.name,
        price=price,
        discount=discount,
    )
    world.record_trade("black_market", {
        **receipt.to_dict(),
        "resource": resource,
        "seller_id": actor.id,
    })
    logger.info(
        "%s listed %d %s on the black market for %d coins",
        actor.id, amount, resource, price,
    )
    message = (
        f"{actor.name} placed {amount} {goods.name} on the Black Market and "
        f"will receive {price} coins next month."
    )
    return _succeed(world, actor, receipt, message, BLACK_MARKET)
