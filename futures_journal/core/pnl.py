"""
Profit and loss calculation for futures trades.

Every surface that needs a trade's P&L (trade entry, edits, CSV import,
account reconciliation) calls into this module so the numbers always agree.
"""
from enum import Enum
from typing import Union

import structlog

from ..contracts.specs import lookup_contract

logger = structlog.get_logger(__name__)


class PositionSide(Enum):
    """Position direction."""
    LONG = "LONG"
    SHORT = "SHORT"

    @classmethod
    def parse(cls, value: Union["PositionSide", str]) -> "PositionSide":
        """Accept a PositionSide or its name in any case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown position side: {value!r}. Expected LONG or SHORT")


def price_multiplier(symbol: str) -> float:
    """Dollar value of a one point move, 1.0 for uncatalogued symbols."""
    contract = lookup_contract(symbol)
    if contract is None:
        return 1.0
    return contract.point_value


def calculate_pnl(symbol: str, entry_price: float, exit_price: float,
                  quantity: int, side: Union[PositionSide, str]) -> float:
    """
    Calculate gross P&L for a trade.

    Unknown symbols are priced with a multiplier of 1 (one currency unit
    per point per unit held) instead of raising.

    Args:
        symbol: Contract symbol, case-insensitive
        entry_price: Entry price
        exit_price: Exit price
        quantity: Number of contracts
        side: LONG or SHORT

    Returns:
        Profit/loss in dollars, before commission
    """
    if PositionSide.parse(side) is PositionSide.LONG:
        price_diff = exit_price - entry_price
    else:
        price_diff = entry_price - exit_price

    contract = lookup_contract(symbol)
    if contract is None:
        logger.debug("contract_fallback_multiplier", symbol=symbol)
        return price_diff * quantity

    return price_diff * contract.point_value * quantity


def calculate_net_pnl(symbol: str, entry_price: float, exit_price: float,
                      quantity: int, side: Union[PositionSide, str],
                      commission: float = 0.0) -> float:
    """Calculate P&L after commission."""
    gross = calculate_pnl(symbol, entry_price, exit_price, quantity, side)
    return gross - (commission or 0.0)


def calculate_percentage_gain(entry_price: float, exit_price: float,
                              side: Union[PositionSide, str]) -> float:
    """Percentage move in the position's favour, 0.0 without an entry price."""
    if not entry_price:
        return 0.0
    if PositionSide.parse(side) is PositionSide.LONG:
        return (exit_price - entry_price) / entry_price * 100
    return (entry_price - exit_price) / entry_price * 100
