"""
Tests for account balance tracking and reconciliation.
"""
import unittest
from datetime import datetime

from futures_journal import (
    AccountLedger,
    JournalSettings,
    TradeJournal,
    TransactionType,
)


class TestAccountLedger(unittest.TestCase):
    def setUp(self):
        self.ledger = AccountLedger()
        self.ledger.set_starting_balance(10000)

    def test_starting_balance_transaction(self):
        transaction = self.ledger.transactions[0]
        self.assertEqual(transaction.transaction_type, TransactionType.STARTING_BALANCE)
        self.assertEqual(transaction.balance_after, 10000)
        self.assertEqual(transaction.description, "Initial account balance")
        self.assertEqual(self.ledger.current_balance, 10000)

    def test_deposits_and_withdrawals(self):
        deposit = self.ledger.deposit(2500, "Top up")
        withdrawal = self.ledger.add_transaction('withdrawal', 1000, "Payout")
        self.assertEqual(deposit.balance_after, 12500)
        self.assertEqual(withdrawal.amount, 1000)
        self.assertEqual(withdrawal.balance_after, 11500)
        self.assertEqual(self.ledger.current_balance, 11500)

        stats = self.ledger.transaction_stats()
        self.assertEqual(stats['total_deposits'], 2500)
        self.assertEqual(stats['total_withdrawals'], 1000)
        self.assertEqual(stats['net_deposits'], 1500)
        self.assertEqual(stats['deposit_count'], 1)
        self.assertEqual(stats['withdrawal_count'], 1)

    def test_invalid_transactions(self):
        with self.assertRaises(ValueError):
            self.ledger.add_transaction('TRANSFER', 100)
        with self.assertRaises(ValueError):
            self.ledger.withdraw(0)

    def test_starting_balance_must_be_positive(self):
        ledger = AccountLedger()
        with self.assertRaises(ValueError):
            ledger.set_starting_balance(-5000)
        with self.assertRaises(ValueError):
            ledger.add_transaction('STARTING_BALANCE', 0)
        self.assertEqual(ledger.transactions, [])
        self.assertEqual(ledger.starting_balance, 0)

    def test_starting_balance_set_once(self):
        with self.assertRaises(ValueError):
            self.ledger.set_starting_balance(5000)
        self.assertEqual(len(self.ledger.transactions), 1)
        self.assertEqual(self.ledger.starting_balance, 10000)
        self.assertEqual(self.ledger.reconcile([]).transaction_net, 10000)


class TestReconciliation(unittest.TestCase):
    def setUp(self):
        self.ledger = AccountLedger()
        self.ledger.set_starting_balance(10000)
        self.ledger.withdraw(500)

        self.journal = TradeJournal()
        self.journal.add_trade('ES', 'LONG', 2, 4500, exit_price=4515,
                               exit_time=datetime(2025, 1, 2, 10, 0), commission=10)
        self.journal.add_trade('MGC', 'SHORT', 2, 2000, exit_price=1990,
                               exit_time=datetime(2025, 1, 2, 11, 0), commission=3)
        self.journal.add_trade('AAPL', 'LONG', 3, 100, exit_price=110,
                               exit_time=datetime(2025, 1, 2, 12, 0))
        self.journal.add_trade('NQ', 'LONG', 1, 21000)  # still open

    def test_breakdown(self):
        breakdown = self.ledger.reconcile(self.journal.entries.values())
        self.assertEqual(breakdown.starting_balance, 10000)
        self.assertEqual(breakdown.transaction_net, 9500)
        # 1500 - 10 + 200 - 3 + 30
        self.assertEqual(breakdown.trade_pnl, 1717)
        self.assertEqual(breakdown.trade_count, 3)
        self.assertEqual(breakdown.calculated_balance, 11217)

    def test_matches_journal_pnl(self):
        breakdown = self.ledger.reconcile(self.journal.closed_entries())
        journal_total = sum(e.pnl for e in self.journal.closed_entries())
        self.assertEqual(breakdown.trade_pnl, journal_total)

    def test_sync(self):
        breakdown = self.ledger.reconcile(self.journal.entries.values())
        self.assertTrue(self.ledger.needs_sync(breakdown))
        self.assertTrue(self.ledger.sync(breakdown))
        self.assertEqual(self.ledger.current_balance, 11217)
        self.assertFalse(self.ledger.needs_sync(breakdown))
        self.assertFalse(self.ledger.sync(breakdown))

    def test_sync_tolerance(self):
        ledger = AccountLedger(JournalSettings(balance_sync_tolerance=5.0))
        ledger.set_starting_balance(100)
        breakdown = ledger.reconcile([])
        self.assertEqual(breakdown.calculated_balance, 100)
        self.assertFalse(ledger.needs_sync(breakdown))


if __name__ == '__main__':
    unittest.main()
