from decimal import Decimal


def test_create_and_fetch_expense(client):
    resp = client.post(
        "/api/expense",
        json={"description": "Groceries", "amount": "42.10", "category": "food"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Expense created successfully with ID: 1"
    assert body["id"] == 1

    fetched = client.get("/api/expense/1")
    assert fetched.status_code == 200
    expense = fetched.json()
    assert expense["id"] == 1
    assert expense["description"] == "Groceries"
    assert Decimal(expense["amount"]) == Decimal("42.10")
    assert expense["category"] == "food"
    assert expense["userId"] == "default-user"
    assert expense["date"]


def test_create_keeps_supplied_user_id(client, create_expense):
    expense_id = create_expense(userId="alice")
    assert client.get(f"/api/expense/{expense_id}").json()["userId"] == "alice"


def test_list_and_count(client, create_expense):
    assert client.get("/api/expense").json() == []
    assert client.get("/api/expense/count").json() == {"count": 0}

    create_expense()
    create_expense(category="rent", amount="800")

    listed = client.get("/api/expense").json()
    assert {e["id"] for e in listed} == {1, 2}
    assert client.get("/api/expense/count").json() == {"count": 2}


def test_filter_by_user_and_category(client, create_expense):
    create_expense(userId="alice", category="food")
    create_expense(userId="bob", category="food")
    create_expense(userId="alice", category="travel")

    alice = client.get("/api/expense/user/alice").json()
    assert {e["id"] for e in alice} == {1, 3}
    assert all(e["userId"] == "alice" for e in alice)

    food = client.get("/api/expense/category/food").json()
    assert {e["id"] for e in food} == {1, 2}

    assert client.get("/api/expense/user/nobody").json() == []
    assert client.get("/api/expense/category/Food").json() == []


def test_update_changes_supplied_fields_only(client, create_expense):
    expense_id = create_expense(userId="alice")
    before = client.get(f"/api/expense/{expense_id}").json()

    resp = client.put(f"/api/expense/{expense_id}", json={"amount": "20.00"})
    assert resp.status_code == 200
    assert resp.json()["message"] == f"Expense updated successfully with ID: {expense_id}"

    after = client.get(f"/api/expense/{expense_id}").json()
    assert Decimal(after["amount"]) == Decimal("20.00")
    assert after["description"] == before["description"]
    assert after["category"] == before["category"]
    assert after["userId"] == "alice"
    assert after["date"] == before["date"]
    assert after["id"] == before["id"]


def test_update_replaces_all_mutable_fields(client, create_expense):
    expense_id = create_expense()
    resp = client.put(
        f"/api/expense/{expense_id}",
        json={"description": "Dinner", "amount": "30.25", "category": "dining"},
    )
    assert resp.status_code == 200
    after = client.get(f"/api/expense/{expense_id}").json()
    assert after["description"] == "Dinner"
    assert after["category"] == "dining"
    assert Decimal(after["amount"]) == Decimal("30.25")


def test_update_missing_expense_returns_404(client, create_expense):
    create_expense()
    resp = client.put("/api/expense/99", json={"amount": "5.00"})
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Expense not found with id: 99"
    assert client.get("/api/expense/count").json() == {"count": 1}


def test_get_missing_expense_returns_404(client):
    resp = client.get("/api/expense/7")
    assert resp.status_code == 404
    error = resp.json()["error"]
    assert error["code"] == "http_404"
    assert error["message"] == "Expense not found with id: 7"
    assert error["request_id"]


def test_delete_expense(client, create_expense):
    expense_id = create_expense()
    create_expense()

    resp = client.delete(f"/api/expense/{expense_id}")
    assert resp.status_code == 200
    assert resp.json()["message"] == f"Expense deleted successfully with ID: {expense_id}"
    assert client.get("/api/expense/count").json() == {"count": 1}
    assert client.get(f"/api/expense/{expense_id}").status_code == 404


def test_delete_missing_expense_returns_404_and_keeps_count(client, create_expense):
    create_expense()
    resp = client.delete("/api/expense/55")
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Expense not found with id: 55"
    assert client.get("/api/expense/count").json() == {"count": 1}


def test_ids_not_reused_after_delete(client, create_expense):
    first = create_expense()
    client.delete(f"/api/expense/{first}")
    assert create_expense() == first + 1


def test_category_summary(client, create_expense):
    create_expense(category="food", amount="10.00")
    create_expense(category="food", amount="15.00")
    create_expense(category="transport", amount="7.50")

    resp = client.get("/api/expense/summary/categories")
    assert resp.status_code == 200
    summaries = resp.json()
    assert [s["category"] for s in summaries] == ["food", "transport"]

    food, transport = summaries
    assert Decimal(food["totalAmount"]) == Decimal("25.00")
    assert food["count"] == 2
    assert Decimal(food["averageAmount"]) == Decimal("12.50")
    assert Decimal(transport["totalAmount"]) == Decimal("7.50")
    assert transport["count"] == 1
    assert Decimal(transport["averageAmount"]) == Decimal("7.50")


def test_category_summary_empty_store(client):
    resp = client.get("/api/expense/summary/categories")
    assert resp.status_code == 200
    assert resp.json() == []


def test_stores_are_independent_between_tests(client):
    assert client.get("/api/expense/count").json() == {"count": 0}
