from fastapi import Depends, HTTPException, Request, status

from expense_api.models import Expense
from expense_api.services.expense_store import ExpenseStore


def get_store(request: Request) -> ExpenseStore:
    store = getattr(request.app.state, "expense_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Expense store not initialized",
        )
    return store


def not_found(expense_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Expense not found with id: {expense_id}",
    )


def get_expense(expense_id: int, store: ExpenseStore = Depends(get_store)) -> Expense:
    expense = store.find_by_id(expense_id)
    if expense is None:
        raise not_found(expense_id)
    return expense
