"""Utility functions."""

from .journal import (
    TradeStatus,
    TradeJournal,
    TradeJournalEntry,
    TradeJournalExporter,
    create_trade_journal,
    load_journal
)

from .importer import (
    ImportResult,
    TradeImporter,
    import_trades
)

__all__ = [
    # Journal
    'TradeStatus',
    'TradeJournal',
    'TradeJournalEntry',
    'TradeJournalExporter',
    'create_trade_journal',
    'load_journal',
    # CSV import
    'ImportResult',
    'TradeImporter',
    'import_trades',
]
