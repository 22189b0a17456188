"""
Example demonstrating CSV import, the trade journal and account reconciliation.

This shows how to:
1. Import a TradingView order history export
2. Log a trade by hand and close it later
3. Reconcile the account balance against closed trades
4. Export the journal for analysis
"""
import structlog

from futures_journal import (
    AccountLedger,
    TradeJournal,
    TradeJournalExporter,
    get_contract_specs,
    import_trades,
    symbol_performance,
)


def create_sample_export(filepath: str):
    """Create a sample TradingView order history CSV."""
    rows = [
        ("F.US.ESH25", "Buy", "Market", "2", "4500.00", "2025-01-06 09:31:02"),
        ("F.US.ESH25", "Sell", "Market", "2", "4515.00", "2025-01-06 10:02:45"),
        ("F.US.MGCJ25", "Buy", "Market", "1", "2651.30", "2025-01-06 11:15:10"),
        ("F.US.MGCJ25", "Sell", "Stop", "1", "2646.80", "2025-01-06 11:40:33"),
        ("F.US.MNQH25", "Sell", "Market", "1", "21210.25", "2025-01-07 09:45:00"),
    ]
    with open(filepath, "w") as f:
        f.write("Symbol,Side,Type,Qty,Limit Price,Stop Price,Fill Qty,Avg Fill Price,"
                "Commission,Placing Time,Status,Status Time,Order ID\n")
        for i, (symbol, side, order_type, qty, price, time) in enumerate(rows):
            f.write(f"{symbol},{side},{order_type},{qty},,,{qty},{price},,{time},Filled,{time},{i}\n")
    print(f"Created sample export: {filepath}")
    return filepath


if __name__ == "__main__":
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(20))

    print("="*70)
    print("Trade Import & Account Reconciliation Example")
    print("="*70)

    export_file = "/tmp/tradingview_orders.csv"
    create_sample_export(export_file)

    # Import
    print("\n1. Importing TradingView orders...")
    result = import_trades(export_file)
    print(f"   Trades: {len(result.trades)}")
    print(f"   Unmatched sells: {len(result.unmatched_sells)}")
    print(f"   Total P&L: ${result.total_pnl:,.2f}")

    journal = TradeJournal("Example Journal")
    journal.import_trades(result)

    # Manual entry
    print("\n2. Logging a manual CL trade...")
    specs = get_contract_specs("cl")
    print(f"   {specs}: tick {specs.tick_size} = ${specs.tick_value}, "
          f"margin ${specs.initial_margin:,.0f}")
    trade = journal.add_trade("CL", "SHORT", 1, 74.20, commission=4.50)
    journal.close_trade(trade.trade_id, 73.95)
    print(f"   Net P&L: ${trade.pnl:,.2f} ({trade.percentage_gain:.2f}%)")

    # Reconcile
    print("\n3. Reconciling account...")
    ledger = AccountLedger()
    ledger.set_starting_balance(25000)
    ledger.withdraw(1000, "Payout")
    breakdown = ledger.reconcile(journal.closed_entries())
    print(f"   Cash movements: ${breakdown.transaction_net:,.2f}")
    print(f"   Trade P&L:      ${breakdown.trade_pnl:,.2f}")
    print(f"   Balance:        ${breakdown.calculated_balance:,.2f}")
    if ledger.sync(breakdown):
        print("   Stored balance updated")

    # Analysis
    journal.print_summary()
    print(symbol_performance(journal.closed_entries()))

    TradeJournalExporter.to_csv([e.to_dict() for e in journal.entries.values()],
                                "/tmp/journal_export.csv")
