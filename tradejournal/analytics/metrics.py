"""Dashboard metrics over a trade collection.

Every function here is pure: it takes the complete, already fetched
sequence of trades and recomputes its result from scratch.
"""

import math
from typing import Sequence

from tradejournal.models import Trade, TradeMetrics

# Supported variant outputs
VARIANTS = ["score", "emotion"]

# Returned by most_frequent_emotion when no trade carries an emotion
NO_EMOTION = "none"


def total_pnl(trades: Sequence[Trade]) -> float:
    """Sum of net P&L across all trades.

    Args:
        trades: Trades to sum.

    Returns:
        Total net P&L, 0.0 for no trades.
    """
    return sum((float(t.pnl_net) for t in trades), 0.0)


def win_rate(trades: Sequence[Trade]) -> float:
    """Percentage of trades with positive net P&L.

    Args:
        trades: Trades to evaluate.

    Returns:
        Win rate between 0 and 100, 0.0 for no trades.
    """
    if not trades:
        return 0.0
    winning = sum(1 for t in trades if float(t.pnl_net) > 0)
    return winning / len(trades) * 100


def rule_compliance_rate(trades: Sequence[Trade]) -> float:
    """Percentage of trades that followed the trading rules.

    Args:
        trades: Trades to evaluate.

    Returns:
        Compliance rate between 0 and 100, 0.0 for no trades.
    """
    if not trades:
        return 0.0
    complied = sum(1 for t in trades if t.rules_followed)
    return complied / len(trades) * 100


def trade_score(win_rate_pct: float, pnl_total: float, compliance_pct: float) -> int:
    """Heuristic composite of win rate, profitability and discipline.

    score = 100 * win_fraction * profit_factor * compliance_fraction, rounded
    half up, where profit_factor is 1 for a net profitable journal and 0.5
    otherwise.
    This is a rough motivational number, not a statistical measure.

    Args:
        win_rate_pct: Win rate percentage (0-100).
        pnl_total: Total net P&L.
        compliance_pct: Rule compliance percentage (0-100).

    Returns:
        Score between 0 and 100.
    """
    profit_factor = 1.0 if pnl_total > 0 else 0.5
    raw = (win_rate_pct / 100) * profit_factor * (compliance_pct / 100) * 100
    # Halves round up
    return math.floor(raw + 0.5)


def most_frequent_emotion(trades: Sequence[Trade]) -> str:
    """Most frequent emotion tag among trades that carry one.

    Ties go to the tag that reached the winning count first while
    walking the trades in order.

    Args:
        trades: Trades to evaluate.

    Returns:
        The emotion tag, or NO_EMOTION when no trade has one.
    """
    counts: dict[str, int] = {}
    best = NO_EMOTION
    best_count = 0

    for trade in trades:
        if not trade.emotion:
            continue
        counts[trade.emotion] = counts.get(trade.emotion, 0) + 1
        # Strictly greater: an equal count later on does not take over
        if counts[trade.emotion] > best_count:
            best = trade.emotion
            best_count = counts[trade.emotion]

    return best


def calculate_metrics(trades: Sequence[Trade], variant: str = "score") -> TradeMetrics:
    """Calculate dashboard metrics from a list of trades.

    Args:
        trades: Complete trade collection, ordered by date.
        variant: Which extra metric to compute: "score" or "emotion".

    Returns:
        TradeMetrics for the collection.

    Raises:
        ValueError: If variant is not one of VARIANTS.
    """
    if variant not in VARIANTS:
        raise ValueError(f"Invalid variant: {variant}. Must be one of {VARIANTS}")

    count = len(trades)
    pnl = total_pnl(trades)
    wins = win_rate(trades)
    compliance = rule_compliance_rate(trades)

    if variant == "score":
        score = trade_score(wins, pnl, compliance) if count > 0 else 0
        return TradeMetrics(
            total_trades=count,
            pnl_total=pnl,
            win_rate=wins,
            rule_compliance_rate=compliance,
            variant="score",
            trade_score=score,
        )

    return TradeMetrics(
        total_trades=count,
        pnl_total=pnl,
        win_rate=wins,
        rule_compliance_rate=compliance,
        variant="emotion",
        most_frequent_emotion=most_frequent_emotion(trades),
    )
