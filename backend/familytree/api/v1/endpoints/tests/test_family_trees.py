"""API tests for family tree endpoints and the shared access rules."""

import pytest

from familytree.core.messages import message


@pytest.mark.asyncio
async def test_list_returns_only_own_trees(client, owner_headers, tree, fake_family_tree_repo):
    fake_family_tree_repo.seed(user_id=999, family_name="Someone Else")

    response = await client.get("/family-trees", headers=owner_headers)

    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [tree.id]


@pytest.mark.asyncio
async def test_trailing_slash_is_accepted(client, owner_headers, tree):
    response = await client.get("/family-trees/", headers=owner_headers)

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_create_returns_201(client, owner_headers, owner, fake_change_logger):
    response = await client.post(
        "/family-trees",
        json={"family_name": "Lê", "origin": "Thanh Hóa", "establish_year": 1802},
        headers=owner_headers,
    )

    assert response.status_code == 201
    assert response.json()["family_name"] == "Lê"
    assert [e["action"].value for e in fake_change_logger.entries] == ["CREATE"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raw_id", ["abc", "1.5", "-1", "2147483648", "99999999999999999999", "9" * 5000]
)
async def test_non_integer_id_is_bad_request(client, owner_headers, raw_id, fake_family_tree_repo):
    response = await client.get(f"/family-trees/{raw_id}", headers=owner_headers)

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid family_tree_id: must be an integer"}
    assert fake_family_tree_repo._calls == []


@pytest.mark.asyncio
async def test_foreign_tree_is_not_found(client, owner_headers, fake_family_tree_repo):
    foreign = fake_family_tree_repo.seed(user_id=999, family_name="Someone Else")

    read = await client.get(f"/family-trees/{foreign.id}", headers=owner_headers)
    delete = await client.delete(f"/family-trees/{foreign.id}", headers=owner_headers)

    assert read.status_code == 404
    assert delete.status_code == 404
    assert foreign.id in fake_family_tree_repo._store


@pytest.mark.asyncio
async def test_validation_error_is_bad_request(client, owner_headers, tree):
    response = await client.put(
        f"/family-trees/{tree.id}", json={"establish_year": -5}, headers=owner_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request"


class TestGuest:
    @pytest.mark.asyncio
    async def test_guest_sees_only_their_tree(self, guest_client, tree, fake_family_tree_repo):
        other = fake_family_tree_repo.seed(user_id=1, family_name="Other")

        listing = await guest_client.get("/family-trees")
        own = await guest_client.get(f"/family-trees/{tree.id}")
        foreign = await guest_client.get(f"/family-trees/{other.id}")

        assert [t["id"] for t in listing.json()] == [tree.id]
        assert own.status_code == 200
        assert foreign.status_code == 404

    @pytest.mark.asyncio
    async def test_guest_cannot_create_tree(self, guest_client):
        response = await guest_client.post("/family-trees", json={"family_name": "Nope"})

        assert response.status_code == 403
        assert response.json() == {"detail": message("forbidden")}

    @pytest.mark.asyncio
    async def test_guest_cannot_edit_tree_settings(self, guest_client, tree):
        response = await guest_client.put(f"/family-trees/{tree.id}", json={"origin": "Huế"})

        assert response.status_code == 403
        assert response.json() == {"detail": message("forbidden")}
