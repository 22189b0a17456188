"""
Broker order-history CSV import.

Filled orders are paired Buy -> Sell into closed LONG trades. Sells with no
open Buy of the same symbol and quantity are reported, not guessed at.
"""
import pandas as pd
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, IO, List, Optional, Tuple, Union

import structlog

from ..config import ImportProfile, TRADINGVIEW, get_import_profile
from ..contracts.specs import normalize_symbol
from ..core.pnl import PositionSide
from ..errors import CSVImportError
from .journal import TradeJournalEntry, TradeStatus

logger = structlog.get_logger(__name__)


@dataclass
class ImportResult:
    """Outcome of parsing one export."""
    trades: List[TradeJournalEntry] = field(default_factory=list)
    unmatched_sells: List[Dict[str, Any]] = field(default_factory=list)
    open_buys: List[Dict[str, Any]] = field(default_factory=list)
    dropped_rows: int = 0

    @property
    def total_pnl(self) -> float:
        return sum(t.net_pnl or 0.0 for t in self.trades)

    @property
    def winning_trades(self) -> int:
        return sum(1 for t in self.trades if (t.net_pnl or 0.0) > 0)

    @property
    def losing_trades(self) -> int:
        return sum(1 for t in self.trades if (t.net_pnl or 0.0) < 0)


class TradeImporter:
    """Turn a broker order-history export into journal entries."""

    def __init__(self, profile: Union[ImportProfile, str] = TRADINGVIEW):
        if isinstance(profile, str):
            profile = get_import_profile(profile)
        self.profile = profile

    def read(self, source: Union[str, Path, IO]) -> pd.DataFrame:
        """
        Read the export and keep filled orders, oldest first.

        Adds normalized columns: symbol, side, quantity, price, time.
        """
        return self._load(source)[0]

    def _load(self, source: Union[str, Path, IO]) -> Tuple[pd.DataFrame, int]:
        if isinstance(source, (str, Path)):
            source = Path(source)
            if not source.exists():
                raise FileNotFoundError(f"File not found: {source}")

        try:
            df = pd.read_csv(source, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            raise CSVImportError("CSV file is empty") from None
        df.columns = [c.strip() for c in df.columns]

        p = self.profile
        missing = [c for c in p.required_columns if c not in df.columns]
        if missing:
            raise CSVImportError(f"Missing required columns: {missing}")

        # Filled market/stop orders with a fill price
        df = df[
            (df[p.status_column].str.strip() == p.filled_status)
            & (df[p.type_column].str.strip().isin(p.order_types))
            & (df[p.fill_price_column].str.strip() != "")
        ].copy()

        quantity = df[p.quantity_column]
        if p.fill_quantity_column in df.columns:
            fill_qty = df[p.fill_quantity_column].str.strip()
            quantity = fill_qty.where(fill_qty != "", quantity)

        df['symbol'] = df[p.symbol_column].str.strip().map(normalize_symbol)
        df['side'] = df[p.side_column].str.strip()
        df['quantity'] = pd.to_numeric(quantity.str.replace(",", ""), errors='coerce')
        df['price'] = pd.to_numeric(df[p.fill_price_column].str.replace(",", ""), errors='coerce')
        df['time'] = pd.to_datetime(df[p.time_column], errors='coerce')

        bad = df['quantity'].isna() | df['price'].isna()
        dropped = int(bad.sum())
        if dropped:
            logger.warning("csv_rows_dropped", count=dropped, reason="unparseable price or quantity")
            df = df[~bad].copy()

        df['quantity'] = df['quantity'].astype(int)
        return df.sort_values('time', kind='mergesort', na_position='last').reset_index(drop=True), dropped

    def parse(self, source: Union[str, Path, IO]) -> ImportResult:
        """
        Parse an export into closed LONG trades.

        Args:
            source: Path or file-like object with the CSV export

        Returns:
            ImportResult with synthesized trades and leftovers
        """
        orders, dropped = self._load(source)
        result = ImportResult(dropped_rows=dropped)
        open_buys: List[Dict[str, Any]] = []

        for order in orders.to_dict('records'):
            if order['side'] == self.profile.buy_label:
                open_buys.append(order)
            elif order['side'] == self.profile.sell_label:
                index = self._match(open_buys, order)
                if index is None:
                    logger.warning("unmatched_sell_order",
                                   symbol=order['symbol'],
                                   quantity=order['quantity'],
                                   price=order['price'])
                    result.unmatched_sells.append(order)
                    continue
                result.trades.append(self._build_trade(open_buys.pop(index), order))

        result.open_buys = open_buys
        logger.info("csv_import_parsed",
                    profile=self.profile.name,
                    trades=len(result.trades),
                    unmatched_sells=len(result.unmatched_sells),
                    open_buys=len(open_buys))
        return result

    @staticmethod
    def _match(open_buys: List[Dict[str, Any]], sell: Dict[str, Any]) -> Optional[int]:
        """Index of the earliest open Buy with the same symbol and quantity."""
        for index, buy in enumerate(open_buys):
            if buy['symbol'] == sell['symbol'] and buy['quantity'] == sell['quantity']:
                return index
        return None

    def _build_trade(self, buy: Dict[str, Any], sell: Dict[str, Any]) -> TradeJournalEntry:
        # Exports carry no commission data
        return TradeJournalEntry(
            symbol=sell['symbol'],
            side=PositionSide.LONG,
            quantity=int(sell['quantity']),
            entry_price=float(buy['price']),
            exit_price=float(sell['price']),
            entry_time=_to_datetime(buy['time']),
            exit_time=_to_datetime(sell['time']),
            commission=0.0,
            status=TradeStatus.CLOSED,
            notes=self.profile.notes,
        )


def _to_datetime(value):
    if pd.isna(value):
        return None
    return value.to_pydatetime()


def import_trades(source: Union[str, Path, IO], profile: Union[ImportProfile, str] = TRADINGVIEW) -> ImportResult:
    """Convenience function to parse a broker export."""
    return TradeImporter(profile).parse(source)
