from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Expense:
    description: str
    amount: Decimal
    category: str
    user_id: str
    date: datetime = field(default_factory=_utcnow)
    id: int | None = None


@dataclass(frozen=True)
class CategorySummary:
    category: str
    total_amount: Decimal
    count: int
    average_amount: Decimal
