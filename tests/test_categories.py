"""
Tests for category endpoints.
"""

import pytest
from fastapi import status

from conftest import ALICE_AUTH, BOB_AUTH, add_transaction, utc


@pytest.mark.asyncio
async def test_create_category(async_client, budgets):
    response = await async_client.post(
        "/categories/new",
        json={"budgetId": 1, "title": "Utilities", "amount": 12000},
        auth=ALICE_AUTH,
    )
    assert response.status_code == status.HTTP_200_OK

    data = response.json()
    assert data["title"] == "Utilities"
    assert data["budgetId"] == 1
    assert data["amount"] == 12000
    assert data["expense"] is True


@pytest.mark.asyncio
async def test_create_category_in_foreign_budget(async_client, budgets):
    response = await async_client.post(
        "/categories/new", json={"budgetId": 2, "title": "Mine"}, auth=ALICE_AUTH
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Invalid budget ID"}


@pytest.mark.asyncio
async def test_list_categories(async_client, budgets):
    response = await async_client.get("/categories", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK
    assert [c["id"] for c in response.json()] == [10]

    response = await async_client.get("/categories", params={"budgetId": 2}, auth=ALICE_AUTH)
    assert response.json() == []

    response = await async_client.get("/categories", auth=BOB_AUTH)
    assert [c["title"] for c in response.json()] == ["Flights"]


@pytest.mark.asyncio
async def test_get_category(async_client, budgets):
    response = await async_client.get("/categories/10", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == "Groceries"

    response = await async_client.get("/categories/20", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Category not found"}


@pytest.mark.asyncio
async def test_update_category(async_client, budgets):
    response = await async_client.put(
        "/categories/10", json={"title": "Food", "expense": False}, auth=ALICE_AUTH
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Food"
    assert data["expense"] is False
    assert data["amount"] == 40000

    response = await async_client.put("/categories/20", json={"title": "Mine"}, auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_delete_category_keeps_transactions(async_client, db_session, budgets, alice):
    transaction = await add_transaction(db_session, alice, 1, 100, utc(2024, 1, 1, 12), category_id=10)

    response = await async_client.delete("/categories/10", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK

    response = await async_client.get(f"/transactions/{transaction.id}", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["category"] is None

    response = await async_client.delete("/categories/20", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_404_NOT_FOUND
