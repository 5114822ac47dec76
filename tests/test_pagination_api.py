import json
import xml.etree.ElementTree as ET

import pytest


def _pagination(response) -> dict:
    return json.loads(response.headers["x-pagination"])


@pytest.mark.asyncio
async def test_empty_store_first_page(client):
    response = await client.get("/users", params={"pageNumber": 1, "pageSize": 10})

    assert response.status_code == 200
    assert response.json() == []
    assert _pagination(response) == {
        "previousPageLink": None,
        "nextPageLink": None,
        "totalCount": 0,
        "pageSize": 10,
        "currentPage": 1,
        "totalPages": 0,
    }


@pytest.mark.asyncio
async def test_defaults_without_query(client, seed_users):
    seed_users(3)

    response = await client.get("/users")

    meta = _pagination(response)
    assert response.status_code == 200
    assert len(response.json()) == 3
    assert meta["currentPage"] == 1
    assert meta["pageSize"] == 10


@pytest.mark.asyncio
async def test_page_size_is_clamped_to_twenty(client, seed_users):
    seed_users(25)

    response = await client.get("/users", params={"pageNumber": 1, "pageSize": 100})

    meta = _pagination(response)
    assert len(response.json()) == 20
    assert meta["pageSize"] == 20
    assert meta["totalPages"] == 2
    assert meta["previousPageLink"] is None
    assert meta["nextPageLink"] == "http://testserver/users?pageNumber=2&pageSize=20"


@pytest.mark.asyncio
async def test_last_page(client, seed_users):
    ids = seed_users(25)

    response = await client.get("/users", params={"pageNumber": 2, "pageSize": 100})

    meta = _pagination(response)
    body = response.json()
    assert response.status_code == 200
    assert [u["id"] for u in body] == [str(i) for i in ids[20:]]
    assert meta["previousPageLink"] == "http://testserver/users?pageNumber=1&pageSize=20"
    assert meta["nextPageLink"] is None
    assert meta["totalCount"] == 25


@pytest.mark.asyncio
async def test_middle_page_has_both_links(client, seed_users):
    seed_users(7)

    response = await client.get("/users", params={"pageNumber": 2, "pageSize": 3})

    meta = _pagination(response)
    assert len(response.json()) == 3
    assert meta["previousPageLink"].endswith("pageNumber=1&pageSize=3")
    assert meta["nextPageLink"].endswith("pageNumber=3&pageSize=3")


@pytest.mark.asyncio
async def test_small_values_are_clamped_up(client, seed_users):
    seed_users(2)

    response = await client.get("/users", params={"pageNumber": 0, "pageSize": 0})

    meta = _pagination(response)
    assert response.status_code == 200
    assert meta["currentPage"] == 1
    assert meta["pageSize"] == 1
    assert meta["totalPages"] == 2


@pytest.mark.asyncio
async def test_page_past_the_end_is_not_found(client, seed_users):
    seed_users(25)

    response = await client.get("/users", params={"pageNumber": 3, "pageSize": 20})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_second_page_of_empty_store_is_not_found(client):
    response = await client.get("/users", params={"pageNumber": 2, "pageSize": 10})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_non_integer_page_number_is_bad_request(client):
    response = await client.get("/users", params={"pageNumber": "first"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_as_xml(client, seed_users):
    seed_users(2)

    response = await client.get("/users", headers={"Accept": "application/xml"})

    root = ET.fromstring(response.content)
    assert root.tag == "ArrayOfUserDto"
    assert [u.find("login").text for u in root.findall("UserDto")] == ["user0", "user1"]
    assert "x-pagination" in response.headers
