import pytest
from httpx import AsyncClient

from tests.utils.auth import auth_headers


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_find_latest_by_national_id(client: AsyncClient, test_data, submitted):
    actors = test_data.get("actors")
    second = await client.post(
        "/applications",
        json=test_data.get_copy("submission"),
        headers=auth_headers(actors["dealer"]),
    )
    assert second.status_code == 201

    response = await client.get(
        "/applications/by-national-id/63-123456-A-42", headers=auth_headers(actors["dealer"])
    )

    assert response.status_code == 200
    assert response.json()["application_uid"] in {
        submitted["application_uid"],
        second.json()["application_uid"],
    }
    assert response.json()["status"] == "assigned_to_officer"


@pytest.mark.asyncio
async def test_find_by_unknown_national_id(client: AsyncClient, test_data):
    response = await client.get(
        "/applications/by-national-id/00-000000-X-00",
        headers=auth_headers(test_data.get("actors")["dealer"]),
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "APPLICATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_officer_queue(client: AsyncClient, test_data, submitted):
    actors = test_data.get("actors")

    mine = await client.get("/applications", headers=auth_headers(actors["officer"]))
    theirs = await client.get("/applications", headers=auth_headers(actors["other_officer"]))

    assert mine.status_code == 200
    assert [a["application_uid"] for a in mine.json()["applications"]] == [
        submitted["application_uid"]
    ]
    assert theirs.json()["applications"] == []


@pytest.mark.asyncio
async def test_list_by_status(client: AsyncClient, test_data, submitted):
    headers = auth_headers(test_data.get("actors")["cfr"])

    assigned = await client.get("/applications?status=assigned_to_officer", headers=headers)
    approved = await client.get("/applications?status=approved", headers=headers)
    invalid = await client.get("/applications?status=pending", headers=headers)
    too_many = await client.get("/applications?limit=500", headers=headers)

    assert len(assigned.json()["applications"]) == 1
    assert approved.json()["applications"] == []
    assert invalid.status_code == 400
    assert too_many.status_code == 400


@pytest.mark.asyncio
async def test_available_actions(client: AsyncClient, test_data, submitted):
    uid = submitted["application_uid"]
    actors = test_data.get("actors")

    officer = await client.get(f"/applications/{uid}/actions", headers=auth_headers(actors["officer"]))
    dealer = await client.get(f"/applications/{uid}/actions", headers=auth_headers(actors["dealer"]))

    assert officer.status_code == 200
    assert officer.json() == {
        "application_uid": uid,
        "status": "assigned_to_officer",
        "actions": ["START_REVIEW"],
    }
    assert dealer.json()["actions"] == []


@pytest.mark.asyncio
async def test_list_with_non_integer_limit(client: AsyncClient, test_data):
    response = await client.get(
        "/applications?limit=ten", headers=auth_headers(test_data.get("actors")["cfr"])
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"].startswith("limit:")
