"""
Tests for budget endpoints.
"""

import pytest
from fastapi import status

from budget_server.models import PermissionLevel
from budget_server.services.permission import PermissionService
from conftest import ALICE_AUTH, BOB_AUTH, add_transaction, utc


def permissions_by_username(budget: dict) -> dict:
    return {entry["user"]["username"]: entry["permission"] for entry in budget["users"]}


@pytest.mark.asyncio
async def test_create_budget(async_client, budgets, bob):
    """Test creating a budget shared with another user."""
    response = await async_client.post(
        "/budgets/new",
        json={
            "name": "Holiday",
            "description": "Summer trip",
            "users": [{"userId": bob.id, "permission": "WRITE"}],
        },
        auth=ALICE_AUTH,
    )
    assert response.status_code == status.HTTP_200_OK

    data = response.json()
    assert data["name"] == "Holiday"
    assert data["description"] == "Summer trip"
    assert permissions_by_username(data) == {"alice": "OWNER", "bob": "WRITE"}

    response = await async_client.get("/budgets", auth=BOB_AUTH)
    assert sorted(b["name"] for b in response.json()) == ["Holiday", "Travel"]


@pytest.mark.asyncio
async def test_create_budget_ignores_unknown_users(async_client, budgets):
    response = await async_client.post(
        "/budgets/new",
        json={"name": "Solo", "users": [{"userId": 9999}]},
        auth=ALICE_AUTH,
    )
    assert response.status_code == status.HTTP_200_OK
    assert permissions_by_username(response.json()) == {"alice": "OWNER"}


@pytest.mark.asyncio
async def test_list_budgets(async_client, budgets):
    response = await async_client.get("/budgets", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK
    assert [b["id"] for b in response.json()] == [1]


@pytest.mark.asyncio
async def test_get_budget(async_client, budgets):
    response = await async_client.get("/budgets/1", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Household"

    response = await async_client.get("/budgets/2", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Budget not found"}


@pytest.mark.asyncio
async def test_update_budget_requires_manage(async_client, db_session, budgets, alice):
    await PermissionService.grant(db_session, alice, budgets["travel"], PermissionLevel.READ)
    await db_session.commit()

    response = await async_client.put("/budgets/2", json={"name": "Mine"}, auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"message": "Not enough permissions"}

    response = await async_client.delete("/budgets/2", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_update_budget_without_access(async_client, budgets):
    response = await async_client.put("/budgets/2", json={"name": "Mine"}, auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_update_budget_replaces_shares(async_client, budgets, bob):
    response = await async_client.put(
        "/budgets/1",
        json={"name": "Home", "users": [{"userId": bob.id, "permission": "READ"}]},
        auth=ALICE_AUTH,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Home"
    assert permissions_by_username(response.json()) == {"alice": "OWNER", "bob": "READ"}

    response = await async_client.get("/budgets/1", auth=BOB_AUTH)
    assert response.status_code == status.HTTP_200_OK

    # Bob cannot demote the owner
    response = await async_client.put("/budgets/1", json={"users": []}, auth=BOB_AUTH)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = await async_client.put("/budgets/1", json={"users": []}, auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Home"
    assert permissions_by_username(response.json()) == {"alice": "OWNER"}

    response = await async_client.get("/budgets/1", auth=BOB_AUTH)
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_delete_budget_removes_contents(async_client, db_session, budgets, alice):
    transaction = await add_transaction(db_session, alice, 1, 100, utc(2024, 1, 1, 12), category_id=10)

    response = await async_client.delete("/budgets/1", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_200_OK

    response = await async_client.get("/budgets/1", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    response = await async_client.get(f"/transactions/{transaction.id}", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    response = await async_client.get("/categories/10", auth=ALICE_AUTH)
    assert response.status_code == status.HTTP_404_NOT_FOUND

    # Other budgets are untouched
    response = await async_client.get("/budgets/2", auth=BOB_AUTH)
    assert response.status_code == status.HTTP_200_OK
