"""
Futures Trading Journal

A Python library for journaling futures trades: contract specifications,
P&L calculation, broker CSV import and account reconciliation.
"""

__version__ = "0.1.0"

# Contracts
from .contracts.specs import (
    ContractSpec,
    CONTRACTS,
    lookup_contract,
    get_contract_specs,
    get_contract,
    available_symbols,
    normalize_symbol
)

# Core
from .core.pnl import (
    PositionSide,
    price_multiplier,
    calculate_pnl,
    calculate_net_pnl,
    calculate_percentage_gain
)
from .core.account import (
    AccountLedger,
    AccountTransaction,
    BalanceBreakdown,
    TransactionType
)
from .core.metrics import (
    calculate_journal_metrics,
    pnl_metrics,
    symbol_performance,
    day_of_week_performance,
    format_metrics
)

# Journal & import
from .utils.journal import (
    TradeStatus,
    TradeJournal,
    TradeJournalEntry,
    TradeJournalExporter,
    create_trade_journal,
    load_journal
)
from .utils.importer import ImportResult, TradeImporter, import_trades

# Config
from .config import (
    ImportProfile,
    JournalSettings,
    DEFAULT_SETTINGS,
    TRADINGVIEW,
    get_import_profile
)
from .errors import CSVImportError

__all__ = [
    # Contracts
    'ContractSpec',
    'CONTRACTS',
    'lookup_contract',
    'get_contract_specs',
    'get_contract',
    'available_symbols',
    'normalize_symbol',

    # P&L
    'PositionSide',
    'price_multiplier',
    'calculate_pnl',
    'calculate_net_pnl',
    'calculate_percentage_gain',

    # Account
    'AccountLedger',
    'AccountTransaction',
    'BalanceBreakdown',
    'TransactionType',

    # Metrics
    'calculate_journal_metrics',
    'pnl_metrics',
    'symbol_performance',
    'day_of_week_performance',
    'format_metrics',

    # Journal & import
    'TradeStatus',
    'TradeJournal',
    'TradeJournalEntry',
    'TradeJournalExporter',
    'create_trade_journal',
    'load_journal',
    'ImportResult',
    'TradeImporter',
    'import_trades',

    # Config
    'ImportProfile',
    'JournalSettings',
    'DEFAULT_SETTINGS',
    'TRADINGVIEW',
    'get_import_profile',
    'CSVImportError',
]
