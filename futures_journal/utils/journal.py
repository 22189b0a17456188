"""
Trade journal and export functionality.
"""
import pandas as pd
import json
from typing import Dict, List, Optional, Any, Union, TYPE_CHECKING
from datetime import datetime
from pathlib import Path
from dataclasses import dataclass, field, fields, asdict, replace
from enum import Enum
import uuid

import structlog

from ..config import JournalSettings, DEFAULT_SETTINGS
from ..core.metrics import calculate_journal_metrics, format_metrics, pnl_metrics
from ..core.pnl import (
    PositionSide,
    calculate_pnl,
    calculate_percentage_gain,
)

if TYPE_CHECKING:
    from .importer import ImportResult

logger = structlog.get_logger(__name__)


class TradeStatus(Enum):
    """Trade status."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"


@dataclass
class TradeJournalEntry:
    """
    A single journaled trade.

    P&L figures are derived from the prices on every access, so editing a
    price, quantity or commission can never leave a stale P&L behind.
    """
    # Basic trade info
    trade_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    symbol: str = ""
    side: PositionSide = PositionSide.LONG
    quantity: int = 0

    # Prices
    entry_price: float = 0.0
    exit_price: Optional[float] = None

    # Times
    entry_time: Optional[datetime] = None
    exit_time: Optional[datetime] = None

    commission: float = 0.0
    status: TradeStatus = TradeStatus.OPEN

    # Notes
    notes: str = ""
    tags: List[str] = field(default_factory=list)

    # Metadata
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        self._normalize()

    def _normalize(self):
        """Canonicalize symbol, side and status."""
        self.symbol = self.symbol.strip().upper()
        self.side = PositionSide.parse(self.side)
        if not isinstance(self.status, TradeStatus):
            self.status = TradeStatus(str(self.status).upper())

    @property
    def is_closed(self) -> bool:
        return self.status == TradeStatus.CLOSED and self.exit_price is not None

    @property
    def gross_pnl(self) -> Optional[float]:
        """P&L before commission, None while the trade is open."""
        if not self.is_closed:
            return None
        return calculate_pnl(self.symbol, self.entry_price, self.exit_price,
                             self.quantity, self.side)

    @property
    def net_pnl(self) -> Optional[float]:
        """P&L after commission, None while the trade is open."""
        gross = self.gross_pnl
        if gross is None:
            return None
        return gross - (self.commission or 0.0)

    @property
    def pnl(self) -> Optional[float]:
        """Stored P&L figure (net of commission)."""
        return self.net_pnl

    @property
    def percentage_gain(self) -> Optional[float]:
        if not self.is_closed:
            return None
        return calculate_percentage_gain(self.entry_price, self.exit_price, self.side)

    @property
    def duration_minutes(self) -> Optional[float]:
        """Trade duration in minutes."""
        if self.entry_time and self.exit_time:
            return (self.exit_time - self.entry_time).total_seconds() / 60
        return None

    @property
    def is_winner(self) -> bool:
        """True if trade was profitable."""
        return (self.net_pnl or 0.0) > 0

    def close(self, exit_price: float, exit_time: Optional[datetime] = None):
        """Record the exit and mark the trade closed."""
        self.exit_price = exit_price
        self.exit_time = exit_time or datetime.now()
        self.status = TradeStatus.CLOSED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data['side'] = self.side.value
        data['status'] = self.status.value
        # Convert datetime objects to strings
        for key in ['entry_time', 'exit_time', 'created_at']:
            if data[key]:
                data[key] = data[key].isoformat()
        data['pnl'] = self.net_pnl
        data['percentage_gain'] = self.percentage_gain
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TradeJournalEntry':
        """Create from dictionary."""
        data = dict(data)
        # Derived on access, never stored
        data.pop('pnl', None)
        data.pop('percentage_gain', None)
        # Convert string timestamps back to datetime
        for key in ['entry_time', 'exit_time', 'created_at']:
            if data.get(key):
                data[key] = datetime.fromisoformat(data[key])
        return cls(**data)


class TradeJournal:
    """
    Trade journal for tracking and analyzing trades.
    """

    def __init__(self, name: Optional[str] = None,
                 settings: JournalSettings = DEFAULT_SETTINGS):
        self.settings = settings
        self.name = name or settings.name
        self.entries: Dict[str, TradeJournalEntry] = {}

    def add_entry(self, entry: TradeJournalEntry) -> str:
        """Add a trade entry to the journal."""
        self.entries[entry.trade_id] = entry
        return entry.trade_id

    def add_trade(self,
                  symbol: str,
                  side: Union[PositionSide, str],
                  quantity: int,
                  entry_price: float,
                  entry_time: Optional[datetime] = None,
                  exit_price: Optional[float] = None,
                  exit_time: Optional[datetime] = None,
                  commission: float = 0.0,
                  notes: str = "",
                  tags: Optional[List[str]] = None) -> TradeJournalEntry:
        """
        Record a trade from the entry form.

        A trade given an exit price is stored CLOSED, otherwise OPEN.
        """
        entry = TradeJournalEntry(
            symbol=symbol,
            side=side,
            quantity=quantity,
            entry_price=entry_price,
            exit_price=exit_price,
            entry_time=entry_time or datetime.now(),
            exit_time=exit_time if exit_price is not None else None,
            commission=commission or 0.0,
            status=TradeStatus.CLOSED if exit_price is not None else TradeStatus.OPEN,
            notes=notes,
            tags=list(tags or []),
        )
        self.add_entry(entry)
        return entry

    def close_trade(self, trade_id: str, exit_price: float,
                    exit_time: Optional[datetime] = None) -> TradeJournalEntry:
        """Close an open trade."""
        entry = self.entries.get(trade_id)
        if entry is None:
            raise ValueError(f"Unknown trade: {trade_id}")
        entry.close(exit_price, exit_time)
        return entry

    def import_trades(self, result: 'ImportResult') -> List[str]:
        """Add trades synthesized by the CSV importer."""
        trade_ids = [self.add_entry(entry) for entry in result.trades]
        logger.info("journal_trades_imported", journal=self.name, count=len(trade_ids))
        return trade_ids

    def get_entry(self, trade_id: str) -> Optional[TradeJournalEntry]:
        """Get a specific trade entry."""
        return self.entries.get(trade_id)

    def update_entry(self, trade_id: str, **kwargs):
        """
        Update an existing entry.

        The edit is validated on a copy first; an invalid side or status
        raises ValueError and leaves the entry untouched.
        """
        if trade_id in self.entries:
            entry = self.entries[trade_id]
            # Derived values (pnl, percentage_gain) are not settable
            editable = {f.name for f in fields(entry)}
            changes = {key: value for key, value in kwargs.items() if key in editable}
            updated = replace(entry, **changes)
            for key in changes:
                setattr(entry, key, getattr(updated, key))

    def delete_entry(self, trade_id: str) -> bool:
        """Delete a trade entry."""
        if trade_id in self.entries:
            del self.entries[trade_id]
            return True
        return False

    def closed_entries(self) -> List[TradeJournalEntry]:
        """Closed trades ordered by exit time."""
        closed = [e for e in self.entries.values() if e.is_closed]
        return sorted(closed, key=lambda x: x.exit_time or x.entry_time or datetime.min)

    def get_entries(self,
                    symbol: Optional[str] = None,
                    side: Optional[Union[PositionSide, str]] = None,
                    status: Optional[TradeStatus] = None,
                    start_date: Optional[datetime] = None,
                    end_date: Optional[datetime] = None,
                    min_pnl: Optional[float] = None,
                    max_pnl: Optional[float] = None,
                    tags: Optional[List[str]] = None) -> List[TradeJournalEntry]:
        """
        Filter entries based on criteria.
        """
        results = list(self.entries.values())

        if symbol:
            results = [e for e in results if e.symbol == symbol.upper()]

        if side:
            wanted = PositionSide.parse(side)
            results = [e for e in results if e.side == wanted]

        if status:
            results = [e for e in results if e.status == status]

        if start_date:
            results = [e for e in results if e.entry_time and e.entry_time >= start_date]

        if end_date:
            results = [e for e in results if e.entry_time and e.entry_time <= end_date]

        if min_pnl is not None:
            results = [e for e in results if e.net_pnl is not None and e.net_pnl >= min_pnl]

        if max_pnl is not None:
            results = [e for e in results if e.net_pnl is not None and e.net_pnl <= max_pnl]

        if tags:
            results = [e for e in results if any(t in e.tags for t in tags)]

        return sorted(results, key=lambda x: x.entry_time or datetime.min)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert all entries to a DataFrame."""
        if not self.entries:
            return pd.DataFrame()

        data = [e.to_dict() for e in self.entries.values()]
        df = pd.DataFrame(data)

        # Sort by entry time
        if 'entry_time' in df.columns:
            df['entry_time'] = pd.to_datetime(df['entry_time'])
            df['exit_time'] = pd.to_datetime(df['exit_time'])
            df.sort_values('entry_time', inplace=True)

        return df

    def export_csv(self, filepath: Union[str, Path]):
        """Export journal to CSV."""
        df = self.to_dataframe()
        df.to_csv(filepath, index=False)

    def export_json(self, filepath: Union[str, Path]):
        """Export journal to JSON."""
        data = {
            'name': self.name,
            'created_at': datetime.now().isoformat(),
            'entries': [e.to_dict() for e in self.entries.values()]
        }

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2, default=str)

    @classmethod
    def load_json(cls, filepath: Union[str, Path]) -> 'TradeJournal':
        """Load journal from JSON."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        journal = cls(name=data.get('name', 'Imported Journal'))

        for entry_data in data.get('entries', []):
            entry = TradeJournalEntry.from_dict(entry_data)
            journal.add_entry(entry)

        return journal

    def get_statistics(self) -> Dict[str, Any]:
        """Calculate journal statistics."""
        return calculate_journal_metrics(list(self.entries.values()), self.settings)

    def print_summary(self):
        """Print journal summary."""
        print(f"\n{'='*60}")
        print(f"Trade Journal: {self.name}")
        print(f"{'='*60}")

        if not self.entries:
            print("No trades in journal.")
            return

        print(format_metrics(self.get_statistics()))


class TradeJournalExporter:
    """Export trade data in various formats."""

    @staticmethod
    def to_csv(trades: List[Dict], filepath: Union[str, Path]):
        """Export trades to CSV."""
        df = pd.DataFrame(trades)
        df.to_csv(filepath, index=False)
        logger.info("trades_exported", format="csv", count=len(trades), path=str(filepath))

    @staticmethod
    def to_excel(trades: List[Dict], filepath: Union[str, Path]):
        """Export trades to Excel with formatting."""
        df = pd.DataFrame(trades)
        # Cells hold scalars only
        if 'tags' in df.columns:
            df['tags'] = df['tags'].map(lambda t: ", ".join(t) if isinstance(t, list) else t)

        with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name='Trades', index=False)

            # Add summary sheet
            summary = TradeJournalExporter._create_summary(df)
            summary.to_excel(writer, sheet_name='Summary', index=False)

        logger.info("trades_exported", format="xlsx", count=len(trades), path=str(filepath))

    @staticmethod
    def to_json(trades: List[Dict], filepath: Union[str, Path]):
        """Export trades to JSON."""
        with open(filepath, 'w') as f:
            json.dump(trades, f, indent=2, default=str)
        logger.info("trades_exported", format="json", count=len(trades), path=str(filepath))

    @staticmethod
    def _create_summary(df: pd.DataFrame) -> pd.DataFrame:
        """Create summary statistics."""
        pnl = df['pnl'].dropna() if 'pnl' in df.columns else pd.Series(dtype=float)
        metrics = pnl_metrics(pnl)

        def money(key) -> str:
            return f"${metrics[key]:,.2f}" if len(pnl) > 0 else 'N/A'

        summary = {
            'Metric': ['Total Trades', 'Winning Trades', 'Losing Trades',
                       'Win Rate', 'Total P&L', 'Avg Trade', 'Avg Win', 'Avg Loss',
                       'Max Win', 'Max Loss', 'Profit Factor'],
            'Value': [
                metrics['total_trades'],
                metrics['winning_trades'],
                metrics['losing_trades'],
                f"{metrics['win_rate']:.1%}" if len(pnl) > 0 else 'N/A',
                money('total_pnl'),
                money('avg_trade'),
                money('avg_win'),
                money('avg_loss'),
                money('best_trade'),
                money('worst_trade'),
                f"{metrics['profit_factor']:.2f}" if len(pnl) > 0 else 'N/A'
            ]
        }
        return pd.DataFrame(summary)


# Convenience functions
def create_trade_journal(name: str = "My Journal") -> TradeJournal:
    """Create a new trade journal."""
    return TradeJournal(name)


def load_journal(filepath: Union[str, Path]) -> TradeJournal:
    """Load a trade journal from file."""
    suffix = Path(filepath).suffix.lower()

    if suffix == '.json':
        return TradeJournal.load_json(filepath)
    else:
        raise ValueError(f"Unsupported format: {suffix}")
