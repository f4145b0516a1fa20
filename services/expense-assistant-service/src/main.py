"""
Expense Assistant Service turns spoken purchase descriptions into expense
records and answers free-text money questions against the caller's expenses.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from shared.observability.telemetry import install_request_context, setup_telemetry
from shared.provider_settings import AdvisorSettings, ProviderSettingsError, load_advisor_settings

from advisor_provider import build_advisor_provider
from aggregate_expenses import (
    aggregate_expenses,
    compute_average_expense,
    compute_budget_status,
    compute_category_shares,
    compute_daily_totals,
)
from conversation import ConversationLog, respond_to_query
from expense_model import AdvisorMessage, Category, ExpenseRecord
from money import MAX_AMOUNT, to_amount
from speech_capture import StaticTranscriptSource, capture_expense

SERVICE_NAME = "expense-assistant-service"

app = FastAPI(title="Expense Assistant Service")
setup_telemetry(app, service_name=SERVICE_NAME)
install_request_context(app)
logger = logging.getLogger(__name__)


try:
    ADVISOR_SETTINGS = load_advisor_settings()
except ProviderSettingsError as exc:
    logger.error("Failed to load advisor provider settings: %s", exc)
    raise


def _initialize_advisor_provider(settings: AdvisorSettings):
    try:
        return build_advisor_provider(settings.provider_name, settings=settings)
    except ValueError as exc:
        logger.error("Unsupported advisor provider '%s'", settings.provider_name)
        raise RuntimeError(f"Unsupported advisor provider '{settings.provider_name}'") from exc


ADVISOR_PROVIDER = _initialize_advisor_provider(ADVISOR_SETTINGS)


def reload_advisor_provider_for_tests() -> None:
    """
    Refresh advisor wiring after tests mutate environment variables.
    """

    global ADVISOR_SETTINGS
    global ADVISOR_PROVIDER

    ADVISOR_SETTINGS = load_advisor_settings()
    ADVISOR_PROVIDER = _initialize_advisor_provider(ADVISOR_SETTINGS)


class ExpenseModel(BaseModel):
    amount: float = Field(..., gt=0, le=float(MAX_AMOUNT))
    category: Category
    description: str = Field(..., min_length=1)
    date: date

    def to_dataclass(self) -> ExpenseRecord:
        return ExpenseRecord(
            amount=to_amount(self.amount),
            category=self.category,
            description=self.description,
            date=self.date,
        )

    @classmethod
    def from_dataclass(cls, record: ExpenseRecord) -> "ExpenseModel":
        return cls(
            amount=float(record.amount),
            category=record.category,
            description=record.description,
            date=record.date,
        )


class ExtractExpenseRequestModel(BaseModel):
    transcript: str
    # Defaults to the server's current date.
    today: Optional[date] = None


class ExtractExpenseResponseModel(BaseModel):
    expense: ExpenseModel


class SnapshotModel(BaseModel):
    total_spent: float
    category_totals: dict[str, float]
    top_category: Optional[Category] = None
    top_category_amount: Optional[float] = None


class BudgetStatusModel(BaseModel):
    monthly_budget: float
    total_spent: float
    remaining_budget: float
    budget_used_pct: float


class DailySpendModel(BaseModel):
    day: date
    weekday: str
    amount: float


class SummarizeRequestModel(BaseModel):
    expenses: List[ExpenseModel] = Field(default_factory=list)
    monthly_budget: Optional[float] = Field(None, ge=0, le=float(MAX_AMOUNT))
    today: Optional[date] = None
    days: int = Field(7, ge=1, le=31)


class SummarizeResponseModel(BaseModel):
    snapshot: SnapshotModel
    category_shares: dict[str, float]
    budget_status: BudgetStatusModel
    daily_totals: List[DailySpendModel]
    average_expense: float


class AdvisorMessageModel(BaseModel):
    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime
    tag: Optional[Literal["insight", "warning", "recommendation", "goal"]] = None

    def to_dataclass(self) -> AdvisorMessage:
        return AdvisorMessage(**self.model_dump())

    @classmethod
    def from_dataclass(cls, message: AdvisorMessage) -> "AdvisorMessageModel":
        return cls(
            id=message.id,
            role=message.role,
            content=message.content,
            timestamp=message.timestamp,
            tag=message.tag,
        )


class AdviseRequestModel(BaseModel):
    query: str
    expenses: List[ExpenseModel] = Field(default_factory=list)
    conversation: List[AdvisorMessageModel] = Field(default_factory=list)
    monthly_budget: Optional[float] = Field(None, ge=0, le=float(MAX_AMOUNT))
    context: dict[str, Any] = Field(default_factory=dict)


class AdviseResponseModel(BaseModel):
    message: Optional[AdvisorMessageModel] = None
    conversation: List[AdvisorMessageModel]


def _monthly_budget(raw: float | None):
    return to_amount(raw) if raw is not None else ADVISOR_SETTINGS.monthly_budget


@app.get("/health")
def health_check() -> dict:
    """
    Report service readiness; expects no payload.
    Returns a static status document for load balancers and uptime checks.
    """
    return {"status": "ok", "service": SERVICE_NAME, "advisor_provider": ADVISOR_SETTINGS.provider_name}


@app.post("/extract-expense", response_model=ExtractExpenseResponseModel)
async def extract_expense(payload: ExtractExpenseRequestModel):
    """
    Extract an expense record from a final speech transcript.
    Returns the record, or 422 with `{"error": kind, "detail": message}` when the
    transcript is blank (`empty_input`) or carries no positive amount (`amount_not_found`).
    """
    today = payload.today or date.today()
    result = await capture_expense(StaticTranscriptSource(payload.transcript), today)
    if result is None or result.failure is not None:
        failure = result.failure if result is not None else None
        return JSONResponse(
            status_code=422,
            content={
                "error": failure.kind if failure else "empty_input",
                "detail": failure.message if failure else "Nothing was captured.",
            },
        )

    return ExtractExpenseResponseModel(expense=ExpenseModel.from_dataclass(result.record))


@app.post("/summarize", response_model=SummarizeResponseModel)
def summarize_expenses(payload: SummarizeRequestModel) -> SummarizeResponseModel:
    """
    Compute totals, category shares, budget status and daily totals for the posted expenses.
    """
    records = [expense.to_dataclass() for expense in payload.expenses]
    snapshot = aggregate_expenses(records)
    status = compute_budget_status(snapshot, _monthly_budget(payload.monthly_budget))
    daily_totals = compute_daily_totals(records, payload.today or date.today(), days=payload.days)
    top_amount = snapshot.top_category_amount

    return SummarizeResponseModel(
        snapshot=SnapshotModel(
            total_spent=float(snapshot.total_spent),
            category_totals={category: float(amount) for category, amount in snapshot.category_totals.items()},
            top_category=snapshot.top_category,
            top_category_amount=float(top_amount) if top_amount is not None else None,
        ),
        category_shares=compute_category_shares(snapshot),
        budget_status=BudgetStatusModel(
            monthly_budget=float(status.monthly_budget),
            total_spent=float(status.total_spent),
            remaining_budget=float(status.remaining_budget),
            budget_used_pct=status.budget_used_pct,
        ),
        daily_totals=[
            DailySpendModel(day=item.day, weekday=item.weekday, amount=float(item.amount)) for item in daily_totals
        ],
        average_expense=float(compute_average_expense(records)),
    )


@app.post("/advise", response_model=AdviseResponseModel)
def advise(payload: AdviseRequestModel) -> AdviseResponseModel:
    """
    Answer a free-text question against the posted expenses.
    Appends the user message and the tagged assistant answer to the posted
    conversation; a blank query returns `message: null` and leaves it unchanged.
    Provider failures return 503 and also leave the conversation unchanged.
    """
    log = ConversationLog([message.to_dataclass() for message in payload.conversation])
    records = [expense.to_dataclass() for expense in payload.expenses]
    try:
        message = respond_to_query(
            payload.query,
            records,
            log,
            ADVISOR_PROVIDER,
            monthly_budget=_monthly_budget(payload.monthly_budget),
            context=payload.context,
        )
    except (RuntimeError, ValueError) as exc:
        # Unconfigured OpenAI client or a broken mock fixture.
        logger.error(
            {
                "event": "advisor_provider_failed",
                "provider": ADVISOR_SETTINGS.provider_name,
                "error_type": type(exc).__name__,
                "error_message": str(exc),
            }
        )
        raise HTTPException(status_code=503, detail="Advisor provider is unavailable.") from exc

    return AdviseResponseModel(
        message=AdvisorMessageModel.from_dataclass(message) if message is not None else None,
        conversation=[AdvisorMessageModel.from_dataclass(item) for item in log],
    )
