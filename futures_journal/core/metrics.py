"""
Journal performance metrics.
"""
import pandas as pd
import numpy as np
from typing import List, Dict, Iterable

from ..config import JournalSettings, DEFAULT_SETTINGS

DAY_NAMES = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']


def trades_frame(entries: Iterable) -> pd.DataFrame:
    """
    Build a DataFrame of closed trades.

    Columns: symbol, side, quantity, pnl (net), entry_time, exit_time.
    Open trades are left out.
    """
    rows = [
        {
            'symbol': e.symbol,
            'side': e.side.value,
            'quantity': e.quantity,
            'pnl': e.net_pnl,
            'entry_time': e.entry_time,
            'exit_time': e.exit_time,
        }
        for e in entries
        if e.is_closed
    ]
    df = pd.DataFrame(rows, columns=['symbol', 'side', 'quantity', 'pnl', 'entry_time', 'exit_time'])
    df['pnl'] = df['pnl'].astype(float)
    df['entry_time'] = pd.to_datetime(df['entry_time'])
    df['exit_time'] = pd.to_datetime(df['exit_time'])
    return df.sort_values('exit_time', kind='stable').reset_index(drop=True)


def calculate_journal_metrics(entries: List, settings: JournalSettings = DEFAULT_SETTINGS) -> Dict:
    """
    Calculate journal performance metrics over closed trades.

    Args:
        entries: Journal entries (open trades are ignored)
        settings: Journal settings (profit factor cap)

    Returns:
        Dictionary of metrics
    """
    df = trades_frame(entries)
    if df.empty:
        return _empty_metrics()

    metrics = pnl_metrics(df['pnl'], settings)

    # Holding time
    held = (df['exit_time'] - df['entry_time']).dropna()
    metrics['avg_holding_hours'] = float(held.dt.total_seconds().mean() / 3600) if len(held) > 0 else 0.0

    return metrics


def pnl_metrics(pnl: pd.Series, settings: JournalSettings = DEFAULT_SETTINGS) -> Dict:
    """
    Trade count, win rate, profit factor, averages and streaks from a
    series of net P&L figures in exit order.
    """
    if len(pnl) == 0:
        metrics = _empty_metrics()
        del metrics['avg_holding_hours']
        return metrics

    pnl = pnl.astype(float)
    wins = pnl[pnl > 0]
    losses = pnl[pnl < 0]

    metrics = {}

    # Trade metrics
    metrics['total_trades'] = len(pnl)
    metrics['winning_trades'] = len(wins)
    metrics['losing_trades'] = len(losses)
    metrics['breakeven_trades'] = int((pnl == 0).sum())
    metrics['win_rate'] = len(wins) / len(pnl)

    # P&L metrics
    metrics['total_pnl'] = float(pnl.sum())
    metrics['gross_profit'] = float(wins.sum())
    metrics['gross_loss'] = float(losses.sum())

    # Profit factor, capped when there is nothing to divide by
    total_losses = abs(metrics['gross_loss'])
    if total_losses > 0:
        metrics['profit_factor'] = metrics['gross_profit'] / total_losses
    elif metrics['gross_profit'] > 0:
        metrics['profit_factor'] = settings.profit_factor_cap
    else:
        metrics['profit_factor'] = 0.0

    # Average metrics
    metrics['avg_trade'] = float(pnl.mean())
    metrics['avg_win'] = float(wins.mean()) if len(wins) > 0 else 0.0
    metrics['avg_loss'] = float(losses.mean()) if len(losses) > 0 else 0.0
    metrics['best_trade'] = float(pnl.max())
    metrics['worst_trade'] = float(pnl.min())

    metrics['max_consecutive_wins'], metrics['max_consecutive_losses'] = _streaks(pnl.to_numpy())

    return metrics


def _streaks(pnl: np.ndarray) -> tuple:
    """Longest winning and losing runs. Breakeven trades do not break a run."""
    current = 0
    max_wins = 0
    max_losses = 0
    for value in pnl[pnl != 0]:
        if value > 0:
            current = current + 1 if current >= 0 else 1
            max_wins = max(max_wins, current)
        else:
            current = current - 1 if current <= 0 else -1
            max_losses = max(max_losses, -current)
    return max_wins, max_losses


def symbol_performance(entries: List) -> pd.DataFrame:
    """P&L, trade count and win rate (%) per symbol."""
    df = trades_frame(entries)
    if df.empty:
        return pd.DataFrame(columns=['pnl', 'trades', 'win_rate'])

    grouped = df.groupby('symbol')['pnl']
    return pd.DataFrame({
        'pnl': grouped.sum(),
        'trades': grouped.count(),
        'win_rate': grouped.apply(lambda s: (s > 0).mean() * 100),
    })


def day_of_week_performance(entries: List) -> pd.DataFrame:
    """P&L, trade count and average P&L per entry weekday (Mon-Sun)."""
    df = trades_frame(entries).dropna(subset=['entry_time']).copy()
    df['day'] = df['entry_time'].dt.dayofweek

    grouped = df.groupby('day')['pnl']
    result = pd.DataFrame({
        'pnl': grouped.sum(),
        'trades': grouped.count(),
    }).reindex(range(7), fill_value=0)
    result['avg_pnl'] = np.where(result['trades'] > 0,
                                 result['pnl'] / result['trades'].replace(0, 1), 0.0)
    result.index = DAY_NAMES
    return result


def _empty_metrics() -> Dict:
    """Return empty metrics structure."""
    return {
        'total_trades': 0,
        'winning_trades': 0,
        'losing_trades': 0,
        'breakeven_trades': 0,
        'win_rate': 0,
        'total_pnl': 0,
        'gross_profit': 0,
        'gross_loss': 0,
        'profit_factor': 0,
        'avg_trade': 0,
        'avg_win': 0,
        'avg_loss': 0,
        'best_trade': 0,
        'worst_trade': 0,
        'avg_holding_hours': 0,
        'max_consecutive_wins': 0,
        'max_consecutive_losses': 0,
    }


def format_metrics(metrics: Dict) -> str:
    """Format metrics as a readable string."""
    return f"""
Journal Metrics
{'='*50}
Trade Statistics:
  Total Trades: {metrics['total_trades']}
  Win Rate: {metrics['win_rate']:.1%}
  Winning Trades: {metrics['winning_trades']}
  Losing Trades: {metrics['losing_trades']}
  Breakeven Trades: {metrics['breakeven_trades']}
  Max Consecutive Wins: {metrics['max_consecutive_wins']}
  Max Consecutive Losses: {metrics['max_consecutive_losses']}

Profit & Loss:
  Gross Profit: ${metrics['gross_profit']:,.2f}
  Gross Loss: ${metrics['gross_loss']:,.2f}
  Net P&L: ${metrics['total_pnl']:,.2f}

Trade Metrics:
  Average Trade: ${metrics['avg_trade']:,.2f}
  Average Win: ${metrics['avg_win']:,.2f}
  Average Loss: ${metrics['avg_loss']:,.2f}
  Best Trade: ${metrics['best_trade']:,.2f}
  Worst Trade: ${metrics['worst_trade']:,.2f}
  Profit Factor: {metrics['profit_factor']:.2f}
  Avg Holding Time: {metrics['avg_holding_hours']:.1f}h
"""
