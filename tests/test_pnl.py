"""
Tests for the P&L calculator.
"""
import math
import unittest

from futures_journal import (
    CONTRACTS,
    PositionSide,
    calculate_pnl,
    calculate_net_pnl,
    calculate_percentage_gain,
    price_multiplier,
)

PRICES = [(4500.0, 4510.0), (100.0, 99.5), (1.0825, 1.0831), (2000.0, 2000.0)]
SYMBOLS = list(CONTRACTS) + ['ZZZZ', 'aapl']


class TestCalculatePnL(unittest.TestCase):
    def test_es_long(self):
        self.assertEqual(calculate_pnl('ES', 4500, 4510, 1, PositionSide.LONG), 500)

    def test_mgc_short(self):
        self.assertEqual(calculate_pnl('MGC', 2000, 1990, 2, PositionSide.SHORT), 200)

    def test_unknown_symbol_fallback(self):
        self.assertEqual(calculate_pnl('ZZZZ', 100, 110, 3, PositionSide.LONG), 30)

    def test_string_sides(self):
        self.assertEqual(calculate_pnl('es', 4500, 4510, 1, 'LONG'), 500)
        self.assertEqual(calculate_pnl('ES', 4500, 4510, 1, 'short'), -500)

    def test_invalid_side(self):
        with self.assertRaises(ValueError):
            calculate_pnl('ES', 4500, 4510, 1, 'FLAT')

    def test_flat_trade_is_zero(self):
        for symbol in SYMBOLS:
            with self.subTest(symbol=symbol):
                self.assertEqual(calculate_pnl(symbol, 4321.25, 4321.25, 3, PositionSide.LONG), 0)

    def test_zero_quantity_is_zero(self):
        self.assertEqual(calculate_pnl('NQ', 15000, 15100, 0, PositionSide.LONG), 0)

    def test_sign_symmetry(self):
        for symbol in SYMBOLS:
            for entry, exit_ in PRICES:
                with self.subTest(symbol=symbol, entry=entry, exit=exit_):
                    long_pnl = calculate_pnl(symbol, entry, exit_, 2, PositionSide.LONG)
                    short_pnl = calculate_pnl(symbol, entry, exit_, 2, PositionSide.SHORT)
                    self.assertEqual(long_pnl, -short_pnl)

    def test_quantity_scaling(self):
        for symbol in SYMBOLS:
            for side in PositionSide:
                with self.subTest(symbol=symbol, side=side):
                    single = calculate_pnl(symbol, 4500, 4512.75, 3, side)
                    double = calculate_pnl(symbol, 4500, 4512.75, 6, side)
                    self.assertTrue(math.isclose(double, 2 * single))

    def test_no_range_checks(self):
        self.assertEqual(calculate_pnl('MES', -10, -5, 1, PositionSide.LONG), 25)
        self.assertTrue(math.isnan(calculate_pnl('MES', float('nan'), 5, 1, PositionSide.LONG)))

    def test_multiplier(self):
        self.assertEqual(price_multiplier('cl'), 1000)
        self.assertEqual(price_multiplier('SPY'), 1.0)

    def test_net_pnl_subtracts_commission_once(self):
        self.assertEqual(calculate_net_pnl('ES', 4500, 4510, 1, 'LONG', commission=4.5), 495.5)
        self.assertEqual(calculate_net_pnl('ES', 4500, 4510, 1, 'LONG'), 500)


class TestPercentageGain(unittest.TestCase):
    def test_long(self):
        self.assertAlmostEqual(calculate_percentage_gain(4500, 4515, 'LONG'), 0.3333333, places=6)

    def test_short_inverts_sign(self):
        self.assertAlmostEqual(calculate_percentage_gain(100, 90, PositionSide.SHORT), 10.0)
        self.assertAlmostEqual(calculate_percentage_gain(100, 110, PositionSide.SHORT), -10.0)

    def test_zero_entry_price(self):
        self.assertEqual(calculate_percentage_gain(0, 10, 'LONG'), 0.0)


if __name__ == '__main__':
    unittest.main()
