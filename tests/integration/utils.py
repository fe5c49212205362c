"""Shared helpers for integration tests."""

from __future__ import annotations

from shoplist.config import get_settings


def auth_headers() -> dict[str, str]:
    token = get_settings().api_token
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def create_list(client, name: str = "Weekly shop", week_starting: str = "2024-03-18") -> dict:
    response = client.post(
        "/lists",
        json={"name": name, "week_starting": week_starting},
        headers=auth_headers(),
    )
    assert response.status_code == 201, response.text
    return response.json()


def create_item(client, list_id: int, name: str, **fields) -> dict:
    response = client.post(
        "/items",
        json={"list_id": list_id, "name": name, **fields},
        headers=auth_headers(),
    )
    assert response.status_code == 201, response.text
    return response.json()
