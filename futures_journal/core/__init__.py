"""P&L calculation, account reconciliation and journal metrics."""

from .pnl import (
    PositionSide,
    price_multiplier,
    calculate_pnl,
    calculate_net_pnl,
    calculate_percentage_gain,
)

__all__ = [
    'PositionSide',
    'price_multiplier',
    'calculate_pnl',
    'calculate_net_pnl',
    'calculate_percentage_gain',
]
