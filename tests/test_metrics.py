"""
Tests for journal metrics.
"""
import unittest
from datetime import datetime

import pandas as pd

from futures_journal import (
    TradeJournal,
    calculate_journal_metrics,
    pnl_metrics,
    symbol_performance,
    day_of_week_performance,
    format_metrics,
)


def journal_with(trades):
    journal = TradeJournal()
    for symbol, side, qty, entry, exit_, day, hours in trades:
        journal.add_trade(
            symbol, side, qty, entry,
            entry_time=datetime(2025, 1, day, 9, 0),
            exit_price=exit_,
            exit_time=datetime(2025, 1, day, 9 + hours, 0)
        )
    return journal


class TestJournalMetrics(unittest.TestCase):
    def setUp(self):
        # 2025-01-06 is a Monday
        self.journal = journal_with([
            ('ES', 'LONG', 1, 4500, 4510, 6, 1),     # +500
            ('ES', 'LONG', 1, 4500, 4504, 7, 1),     # +200
            ('MGC', 'SHORT', 1, 2000, 2010, 8, 2),   # -100
            ('MGC', 'LONG', 1, 2000, 2000, 9, 2),    # 0
            ('MGC', 'LONG', 1, 2000, 1990, 10, 3),   # -100
            ('NQ', 'LONG', 1, 21000, 21010, 13, 3),  # +200
        ])

    def test_summary(self):
        metrics = calculate_journal_metrics(list(self.journal.entries.values()))
        self.assertEqual(metrics['total_trades'], 6)
        self.assertEqual(metrics['winning_trades'], 3)
        self.assertEqual(metrics['losing_trades'], 2)
        self.assertEqual(metrics['breakeven_trades'], 1)
        self.assertAlmostEqual(metrics['win_rate'], 0.5)
        self.assertEqual(metrics['total_pnl'], 700)
        self.assertEqual(metrics['gross_profit'], 900)
        self.assertEqual(metrics['gross_loss'], -200)
        self.assertAlmostEqual(metrics['profit_factor'], 4.5)
        self.assertEqual(metrics['best_trade'], 500)
        self.assertEqual(metrics['worst_trade'], -100)
        self.assertAlmostEqual(metrics['avg_holding_hours'], 2.0)
        self.assertEqual(metrics['max_consecutive_wins'], 2)
        self.assertEqual(metrics['max_consecutive_losses'], 2)

    def test_open_trades_ignored(self):
        self.journal.add_trade('CL', 'LONG', 1, 70.0)
        metrics = calculate_journal_metrics(list(self.journal.entries.values()))
        self.assertEqual(metrics['total_trades'], 6)

    def test_profit_factor_without_losses(self):
        journal = journal_with([('ES', 'LONG', 1, 4500, 4510, 6, 1)])
        metrics = calculate_journal_metrics(list(journal.entries.values()))
        self.assertEqual(metrics['profit_factor'], 999.99)

    def test_empty(self):
        metrics = calculate_journal_metrics([])
        self.assertEqual(metrics['total_trades'], 0)
        self.assertEqual(metrics['profit_factor'], 0)
        self.assertIn('Total Trades: 0', format_metrics(metrics))

    def test_pnl_metrics_from_series(self):
        metrics = pnl_metrics(pd.Series([500.0, 200.0, -100.0, 0.0, -100.0, 200.0]))
        self.assertEqual(metrics['total_trades'], 6)
        self.assertAlmostEqual(metrics['profit_factor'], 4.5)
        self.assertEqual(metrics['max_consecutive_losses'], 2)
        self.assertNotIn('avg_holding_hours', metrics)
        self.assertEqual(pnl_metrics(pd.Series([], dtype=float))['total_trades'], 0)

    def test_symbol_performance(self):
        perf = symbol_performance(list(self.journal.entries.values()))
        self.assertEqual(perf.loc['ES', 'pnl'], 700)
        self.assertEqual(perf.loc['ES', 'trades'], 2)
        self.assertEqual(perf.loc['ES', 'win_rate'], 100)
        self.assertEqual(perf.loc['MGC', 'pnl'], -200)
        self.assertEqual(perf.loc['MGC', 'win_rate'], 0)

    def test_day_of_week_performance(self):
        perf = day_of_week_performance(list(self.journal.entries.values()))
        self.assertEqual(list(perf.index), ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun'])
        self.assertEqual(perf.loc['Mon', 'trades'], 2)
        self.assertEqual(perf.loc['Mon', 'pnl'], 700)
        self.assertEqual(perf.loc['Mon', 'avg_pnl'], 350)
        self.assertEqual(perf.loc['Sun', 'trades'], 0)
        self.assertEqual(perf.loc['Sun', 'avg_pnl'], 0)


if __name__ == '__main__':
    unittest.main()
