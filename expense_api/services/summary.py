"""Per-category totals and averages over a snapshot of expenses."""
from __future__ import annotations

from collections import Counter
from decimal import Decimal, localcontext
from typing import Iterable

from expense_api.models import CategorySummary, Expense


def exact_add(left: Decimal, right: Decimal) -> Decimal:
    """Add two finite decimals without rounding, however wide the result."""
    lowest = min(left.as_tuple().exponent, right.as_tuple().exponent)
    digits = max(left.adjusted(), right.adjusted()) - lowest + 2
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, digits)
        return left + right


def average(total: Decimal, count: int) -> Decimal:
    """``total / count`` rounded half-up to cents, exact for any magnitude."""
    if count <= 0:
        return Decimal("0")
    numerator, denominator = total.as_integer_ratio()
    denominator *= count
    cents, remainder = divmod(abs(numerator) * 100, denominator)
    if remainder * 2 >= denominator:
        cents += 1
    sign = "-" if numerator < 0 and cents else ""
    return Decimal(f"{sign}{cents}E-2")


def summarize(expenses: Iterable[Expense]) -> list[CategorySummary]:
    totals: dict[str, Decimal] = {}
    counts: Counter[str] = Counter()
    for expense in expenses:
        totals[expense.category] = exact_add(
            totals.get(expense.category, Decimal("0")), expense.amount
        )
        counts[expense.category] += 1

    return [
        CategorySummary(
            category=category,
            total_amount=total,
            count=counts[category],
            average_amount=average(total, counts[category]),
        )
        for category, total in totals.items()
    ]
