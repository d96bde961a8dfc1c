from expense_api.models.expense import CategorySummary, Expense

__all__ = [
    "Expense",
    "CategorySummary",
]
