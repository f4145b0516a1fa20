from __future__ import annotations

from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Sequence

from expense_model import AggregateSnapshot, BudgetStatus, Category, DailySpend, ExpenseRecord
from money import CENT

ZERO = Decimal("0")


def aggregate_expenses(records: Iterable[ExpenseRecord]) -> AggregateSnapshot:
    """
    Compute total spend, per-category sums and the dominant category.

    Args:
        records: Expense records in caller order; the order decides category
            iteration order and therefore top-category tie-breaking.
    Returns:
        AggregateSnapshot whose total is the exact Decimal sum (no rounding) and
        whose top_category is the first category holding the largest sum, or
        None when there are no records.
    Assumptions:
        Function is pure; the records are only read.
    """
    total_spent = ZERO
    category_totals: Dict[Category, Decimal] = {}
    for record in records:
        total_spent += record.amount
        category_totals[record.category] = category_totals.get(record.category, ZERO) + record.amount

    top_category: Category | None = None
    if category_totals:
        # max() keeps the first maximal key in insertion order.
        top_category = max(category_totals, key=category_totals.__getitem__)

    return AggregateSnapshot(
        total_spent=total_spent,
        category_totals=category_totals,
        top_category=top_category,
    )


def compute_category_shares(snapshot: AggregateSnapshot) -> Dict[Category, float]:
    """
    Derive each category's share of the total spend.

    Returns:
        Dict mapping category to a ratio; ratios sum to 1 when total_spent > 0,
        empty dict otherwise.
    """
    if snapshot.total_spent <= 0:
        return {}
    return {
        category: float(amount / snapshot.total_spent)
        for category, amount in snapshot.category_totals.items()
    }


def compute_budget_status(snapshot: AggregateSnapshot, monthly_budget: Decimal) -> BudgetStatus:
    """
    Compare spend against a monthly budget.

    budget_used_pct is rounded to one decimal and reported as 0.0 for a zero
    budget; remaining_budget goes negative once the budget is exceeded.
    """
    if monthly_budget > 0:
        used = (snapshot.total_spent / monthly_budget * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        budget_used_pct = float(used)
    else:
        budget_used_pct = 0.0

    return BudgetStatus(
        monthly_budget=monthly_budget,
        total_spent=snapshot.total_spent,
        remaining_budget=monthly_budget - snapshot.total_spent,
        budget_used_pct=budget_used_pct,
    )


def compute_daily_totals(
    records: Sequence[ExpenseRecord],
    end_date: date,
    days: int = 7,
) -> List[DailySpend]:
    """
    Sum spend per calendar day for the `days` days ending at `end_date`, oldest first.

    Days with no expenses are reported with a zero amount; records outside the
    window are ignored.
    """
    if days <= 0:
        return []

    window = [end_date - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    totals: Dict[date, Decimal] = {day: ZERO for day in window}
    for record in records:
        if record.date in totals:
            totals[record.date] += record.amount

    return [DailySpend(day=day, weekday=day.strftime("%a"), amount=totals[day]) for day in window]


def compute_average_expense(records: Sequence[ExpenseRecord]) -> Decimal:
    """Average spend per record; zero for an empty collection."""
    total = sum((record.amount for record in records), ZERO)
    return (total / max(1, len(records))).quantize(CENT, rounding=ROUND_HALF_UP)
