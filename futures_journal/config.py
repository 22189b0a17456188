"""
Journal settings and broker CSV import profiles.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ImportProfile:
    """Column layout and filters for a broker order-history CSV export."""
    name: str

    # Column names
    symbol_column: str
    side_column: str
    type_column: str
    status_column: str
    quantity_column: str  # Ordered quantity
    fill_quantity_column: str  # Preferred over quantity_column when present
    fill_price_column: str
    time_column: str  # Used for ordering fills and as entry/exit time

    # Row filters
    filled_status: str = "Filled"
    order_types: Tuple[str, ...] = ("Market", "Stop")
    buy_label: str = "Buy"
    sell_label: str = "Sell"

    # Stored on every synthesized trade
    notes: str = ""

    @property
    def required_columns(self) -> Tuple[str, ...]:
        return (
            self.symbol_column,
            self.side_column,
            self.type_column,
            self.status_column,
            self.quantity_column,
            self.fill_price_column,
            self.time_column,
        )

    def __repr__(self):
        return f"{self.name} Import Profile"


@dataclass(frozen=True)
class JournalSettings:
    """Journal-wide settings."""
    name: str = "My Trading Journal"
    balance_sync_tolerance: float = 0.01  # Stored vs computed balance drift allowed
    profit_factor_cap: float = 999.99  # Reported when there are wins but no losses


# TradingView order history export
TRADINGVIEW = ImportProfile(
    name="TradingView",
    symbol_column="Symbol",
    side_column="Side",
    type_column="Type",
    status_column="Status",
    quantity_column="Qty",
    fill_quantity_column="Fill Qty",
    fill_price_column="Avg Fill Price",
    time_column="Status Time",
    notes="Imported from TradingView"
)

DEFAULT_SETTINGS = JournalSettings()


# Registry of import profiles
IMPORT_PROFILES = {
    "tradingview": TRADINGVIEW,
}


def get_import_profile(name: str) -> ImportProfile:
    """Get import profile by name."""
    name = name.lower().replace(" ", "_")
    if name not in IMPORT_PROFILES:
        raise ValueError(f"Unknown import profile: {name}. Available: {list(IMPORT_PROFILES.keys())}")
    return IMPORT_PROFILES[name]
