from dataclasses import replace
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status

from expense_api.api import deps
from expense_api.api.responses import BAD_REQUEST, NOT_FOUND, RATE_LIMITED
from expense_api.core.config import settings
from expense_api.core.limiter import limiter
from expense_api.models import Expense
from expense_api.schemas.common import CountResponse, MessageResponse
from expense_api.schemas.expense import (
    CategorySummaryOut,
    ExpenseCreate,
    ExpenseOut,
    ExpenseUpdate,
)
from expense_api.services.audit import audit_log
from expense_api.services.expense_store import ExpenseStore
from expense_api.services.security import sanitize_text
from expense_api.services.summary import summarize

router = APIRouter(prefix="/expense", tags=["expenses"])

INVALID_EXPENSE_DATA = "Invalid expense data provided"


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def _clean_description(description: str) -> str:
    cleaned = sanitize_text(description)
    if not cleaned:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_EXPENSE_DATA)
    return cleaned


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST | RATE_LIMITED,
)
@limiter.limit(settings.rate_limit_write)
def create_expense(
    payload: ExpenseCreate,
    request: Request,
    store: ExpenseStore = Depends(deps.get_store),
):
    expense = store.create(
        Expense(
            description=_clean_description(payload.description),
            amount=payload.amount,
            category=payload.category,
            user_id=payload.user_id or settings.default_user_id,
            date=datetime.now(timezone.utc),
        )
    )
    audit_log(
        "expense_create",
        expense.user_id,
        _client_ip(request),
        expense_id=expense.id,
        category=expense.category,
        amount=expense.amount,
    )
    return MessageResponse(
        message=f"Expense created successfully with ID: {expense.id}", id=expense.id
    )


@router.get("", response_model=list[ExpenseOut])
def list_expenses(store: ExpenseStore = Depends(deps.get_store)):
    return store.find_all()


@router.get("/count", response_model=CountResponse)
def count_expenses(store: ExpenseStore = Depends(deps.get_store)):
    return CountResponse(count=store.count())


@router.get("/summary/categories", response_model=list[CategorySummaryOut])
def category_summary(store: ExpenseStore = Depends(deps.get_store)):
    summaries = summarize(store.find_all())
    return sorted(summaries, key=lambda s: s.category)


@router.get("/user/{user_id}", response_model=list[ExpenseOut])
def list_user_expenses(user_id: str, store: ExpenseStore = Depends(deps.get_store)):
    return store.find_by_user_id(user_id)


@router.get("/category/{category}", response_model=list[ExpenseOut])
def list_category_expenses(category: str, store: ExpenseStore = Depends(deps.get_store)):
    return store.find_by_category(category)


@router.get("/{expense_id}", response_model=ExpenseOut, responses=NOT_FOUND)
def get_expense_detail(expense: Expense = Depends(deps.get_expense)):
    return expense


@router.put(
    "/{expense_id}",
    response_model=MessageResponse,
    responses=BAD_REQUEST | NOT_FOUND | RATE_LIMITED,
)
@limiter.limit(settings.rate_limit_write)
def update_expense(
    payload: ExpenseUpdate,
    request: Request,
    expense: Expense = Depends(deps.get_expense),
    store: ExpenseStore = Depends(deps.get_store),
):
    data = payload.model_dump(exclude_unset=True)
    if "description" in data:
        data["description"] = _clean_description(data["description"])
    updated = store.update(replace(expense, **data))
    if updated is None:
        # removed between lookup and write
        raise deps.not_found(expense.id)
    audit_log(
        "expense_update",
        updated.user_id,
        _client_ip(request),
        expense_id=updated.id,
        fields=sorted(data.keys()),
    )
    return MessageResponse(
        message=f"Expense updated successfully with ID: {updated.id}", id=updated.id
    )


@router.delete(
    "/{expense_id}",
    response_model=MessageResponse,
    responses=NOT_FOUND | RATE_LIMITED,
)
@limiter.limit(settings.rate_limit_write)
def delete_expense(
    expense_id: int,
    request: Request,
    store: ExpenseStore = Depends(deps.get_store),
):
    if not store.exists_by_id(expense_id) or not store.delete_by_id(expense_id):
        raise deps.not_found(expense_id)
    audit_log("expense_delete", None, _client_ip(request), expense_id=expense_id)
    return MessageResponse(
        message=f"Expense deleted successfully with ID: {expense_id}", id=expense_id
    )
