"""Seed a running expense API with sample expenses.

Needs the ``scripts`` extra: ``pip install -e .[scripts]``.
"""

import os

import httpx

SAMPLE_EXPENSES = [
    {"description": "Groceries", "amount": "54.20", "category": "food"},
    {"description": "Lunch with team", "amount": "18.75", "category": "food"},
    {"description": "Monthly metro pass", "amount": "49.00", "category": "transport"},
    {"description": "Taxi to airport", "amount": "32.40", "category": "transport", "userId": "alice"},
    {"description": "Electricity bill", "amount": "71.15", "category": "utilities", "userId": "alice"},
]


def run(base_url: str | None = None):
    base_url = base_url or os.getenv("EXPENSE_API_URL", "http://localhost:8000")
    with httpx.Client(base_url=base_url, timeout=10.0) as client:
        for payload in SAMPLE_EXPENSES:
            resp = client.post("/api/expense", json=payload)
            resp.raise_for_status()
            print(resp.json()["message"])


if __name__ == "__main__":
    run()
