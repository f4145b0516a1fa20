from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Literal

Category = Literal[
    "Food",
    "Transport",
    "Groceries",
    "Entertainment",
    "Healthcare",
    "Utilities",
    "Other",
]

# Classification priority order; "Other" is the total default and always last.
CATEGORIES: tuple[Category, ...] = (
    "Food",
    "Transport",
    "Groceries",
    "Entertainment",
    "Healthcare",
    "Utilities",
    "Other",
)

AdvisoryIntent = Literal[
    "spending_analysis",
    "savings_budget",
    "goal_planning",
    "investment",
    "expense_reduction",
    "unknown",
]

ADVISORY_INTENTS: tuple[AdvisoryIntent, ...] = (
    "spending_analysis",
    "savings_budget",
    "goal_planning",
    "investment",
    "expense_reduction",
    "unknown",
)

MessageTag = Literal["insight", "warning", "recommendation", "goal"]

MessageRole = Literal["user", "assistant"]

FailureKind = Literal["amount_not_found", "empty_input"]


@dataclass(frozen=True)
class ExpenseRecord:
    """
    A single spend, either extracted from a transcript or supplied by the caller.

    `amount` is a positive Decimal quantized to two places; extraction never
    produces a record for a zero or missing amount.
    """

    amount: Decimal
    category: Category
    description: str
    date: date


@dataclass(frozen=True)
class AmountMatch:
    """The winning amount pattern for a transcript."""

    value: Decimal
    span: tuple[int, int]
    pattern: str
    # Whether the matched span is removed when building the description.
    strip_from_description: bool = True


@dataclass(frozen=True)
class ExtractionFailure:
    kind: FailureKind
    message: str


@dataclass(frozen=True)
class ExtractionResult:
    """Either a record or a failure, never both."""

    record: ExpenseRecord | None = None
    failure: ExtractionFailure | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class AggregateSnapshot:
    """
    Totals derived from a collection of expense records.

    Recomputed for every call and never persisted. `category_totals` keeps the
    order in which categories were first seen.
    """

    total_spent: Decimal
    category_totals: dict[Category, Decimal] = field(default_factory=dict)
    top_category: Category | None = None

    @property
    def top_category_amount(self) -> Decimal | None:
        if self.top_category is None:
            return None
        return self.category_totals[self.top_category]


@dataclass(frozen=True)
class BudgetStatus:
    monthly_budget: Decimal
    total_spent: Decimal
    remaining_budget: Decimal
    budget_used_pct: float


@dataclass(frozen=True)
class DailySpend:
    day: date
    weekday: str
    amount: Decimal


@dataclass(frozen=True)
class AdvisorMessage:
    id: str
    role: MessageRole
    content: str
    timestamp: datetime
    # Only assistant messages carry a tag.
    tag: MessageTag | None = None
