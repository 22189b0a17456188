"""
Account balance tracking and reconciliation against closed trades.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

import structlog

from ..config import JournalSettings, DEFAULT_SETTINGS
from .pnl import calculate_net_pnl

logger = structlog.get_logger(__name__)


class TransactionType(Enum):
    """Cash movement types."""
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    STARTING_BALANCE = "STARTING_BALANCE"


@dataclass
class AccountTransaction:
    """A deposit, withdrawal or starting balance."""
    transaction_type: TransactionType
    amount: float  # Always positive, direction comes from the type
    balance_after: float = 0.0
    description: str = ""
    transaction_date: datetime = field(default_factory=datetime.now)

    @property
    def signed_amount(self) -> float:
        if self.transaction_type == TransactionType.WITHDRAWAL:
            return -self.amount
        return self.amount


@dataclass(frozen=True)
class BalanceBreakdown:
    """Where the account balance comes from."""
    starting_balance: float
    transaction_net: float  # Starting balance + deposits - withdrawals
    trade_pnl: float  # Net of commission
    calculated_balance: float
    trade_count: int


def transaction_net(transactions: Iterable[AccountTransaction]) -> float:
    """Deposits and starting balances add, withdrawals subtract."""
    return sum(t.signed_amount for t in transactions)


def trade_pnl(trades: Iterable) -> tuple:
    """
    Sum net P&L over closed trades.

    Trades missing a symbol, entry price, exit price or quantity are
    skipped. Each trade is priced through the shared calculator and its
    stored commission subtracted.

    Returns:
        (total net P&L, number of trades counted)
    """
    total = 0.0
    count = 0
    for trade in trades:
        if not (trade.symbol and trade.entry_price and trade.exit_price and trade.quantity):
            continue
        total += calculate_net_pnl(
            trade.symbol,
            trade.entry_price,
            trade.exit_price,
            trade.quantity,
            trade.side,
            trade.commission,
        )
        count += 1
    return total, count


class AccountLedger:
    """Tracks cash movements for one trading account."""

    def __init__(self, settings: JournalSettings = DEFAULT_SETTINGS):
        self.settings = settings
        self.starting_balance: float = 0.0
        self.current_balance: float = 0.0
        self.transactions: List[AccountTransaction] = []

    def set_starting_balance(self, amount: float,
                             transaction_date: Optional[datetime] = None) -> AccountTransaction:
        """
        Set the initial balance and record it as a transaction.

        The starting balance is counted in the cash total, so it can only
        be set once and must be positive.
        """
        if amount <= 0:
            raise ValueError(f"Starting balance must be positive, got {amount}")
        if any(t.transaction_type == TransactionType.STARTING_BALANCE for t in self.transactions):
            raise ValueError("Starting balance is already set")
        self.starting_balance = amount
        self.current_balance = amount
        return self._record(TransactionType.STARTING_BALANCE, amount, amount,
                            "Initial account balance", transaction_date)

    def add_transaction(self,
                        transaction_type: Union[TransactionType, str],
                        amount: float,
                        description: str = "",
                        transaction_date: Optional[datetime] = None) -> AccountTransaction:
        """Record a deposit or withdrawal."""
        if not isinstance(transaction_type, TransactionType):
            try:
                transaction_type = TransactionType(str(transaction_type).upper())
            except ValueError:
                raise ValueError(f"Unknown transaction type: {transaction_type!r}. "
                                 f"Available: {[t.value for t in TransactionType]}") from None
        if transaction_type == TransactionType.STARTING_BALANCE:
            return self.set_starting_balance(amount, transaction_date)
        if amount <= 0:
            raise ValueError(f"Transaction amount must be positive, got {amount}")

        signed = -amount if transaction_type == TransactionType.WITHDRAWAL else amount
        self.current_balance += signed
        return self._record(transaction_type, amount, self.current_balance,
                            description, transaction_date)

    def deposit(self, amount: float, description: str = "",
                transaction_date: Optional[datetime] = None) -> AccountTransaction:
        return self.add_transaction(TransactionType.DEPOSIT, amount, description, transaction_date)

    def withdraw(self, amount: float, description: str = "",
                 transaction_date: Optional[datetime] = None) -> AccountTransaction:
        return self.add_transaction(TransactionType.WITHDRAWAL, amount, description, transaction_date)

    def _record(self, transaction_type: TransactionType, amount: float, balance_after: float,
                description: str, transaction_date: Optional[datetime]) -> AccountTransaction:
        transaction = AccountTransaction(
            transaction_type=transaction_type,
            amount=abs(amount),
            balance_after=balance_after,
            description=description,
            transaction_date=transaction_date or datetime.now(),
        )
        self.transactions.append(transaction)
        return transaction

    def transaction_stats(self) -> Dict[str, float]:
        """Deposit and withdrawal totals."""
        deposits = [t for t in self.transactions if t.transaction_type == TransactionType.DEPOSIT]
        withdrawals = [t for t in self.transactions if t.transaction_type == TransactionType.WITHDRAWAL]
        total_deposits = sum(t.amount for t in deposits)
        total_withdrawals = sum(t.amount for t in withdrawals)
        return {
            'total_deposits': total_deposits,
            'total_withdrawals': total_withdrawals,
            'net_deposits': total_deposits - total_withdrawals,
            'deposit_count': len(deposits),
            'withdrawal_count': len(withdrawals),
        }

    def reconcile(self, trades: Iterable) -> BalanceBreakdown:
        """
        Compute the balance from cash movements plus closed trade P&L.

        Args:
            trades: Journal entries; open ones are ignored
        """
        closed = [t for t in trades if getattr(t, 'is_closed', True)]
        cash = transaction_net(self.transactions)
        pnl, count = trade_pnl(closed)
        breakdown = BalanceBreakdown(
            starting_balance=self.starting_balance,
            transaction_net=cash,
            trade_pnl=pnl,
            calculated_balance=cash + pnl,
            trade_count=count,
        )
        logger.info("account_reconciled",
                    transaction_net=cash,
                    trade_pnl=pnl,
                    calculated_balance=breakdown.calculated_balance,
                    trade_count=count)
        return breakdown

    def needs_sync(self, breakdown: BalanceBreakdown) -> bool:
        """True when the tracked balance has drifted from the computed one."""
        return abs(self.current_balance - breakdown.calculated_balance) > self.settings.balance_sync_tolerance

    def sync(self, breakdown: BalanceBreakdown) -> bool:
        """Adopt the computed balance. Returns True if it changed."""
        if not self.needs_sync(breakdown):
            return False
        self.current_balance = breakdown.calculated_balance
        return True
