"""API tests for guest invite endpoints."""

import pytest


@pytest.mark.asyncio
async def test_issue_is_201_then_200_with_same_code(client, owner_headers, tree, guest_member):
    url = f"/family-trees/{tree.id}/guest-invites"
    payload = {"family_member_id": guest_member.id}

    first = await client.post(url, json=payload, headers=owner_headers)
    second = await client.post(url, json=payload, headers=owner_headers)

    assert first.status_code == 201
    assert second.status_code == 200
    assert len(first.json()["access_code"]) == 45
    assert second.json()["access_code"] == first.json()["access_code"]
    assert second.json()["is_new"] is False


@pytest.mark.asyncio
async def test_list_shows_expiry(client, owner_headers, tree, guest_editor):
    response = await client.get(f"/family-trees/{tree.id}/guest-invites", headers=owner_headers)

    assert response.status_code == 200
    [invite] = response.json()
    assert invite["access_code"] == guest_editor.access_code
    assert invite["is_expired"] is False


@pytest.mark.asyncio
async def test_member_outside_tree_is_not_found(
    client, owner_headers, tree, fake_family_tree_repo, fake_member_repo
):
    other_tree = fake_family_tree_repo.seed(user_id=999, family_name="Other")
    stranger = fake_member_repo.seed(family_tree_id=other_tree.id, full_name="Stranger")

    response = await client.post(
        f"/family-trees/{tree.id}/guest-invites",
        json={"family_member_id": stranger.id},
        headers=owner_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_guests_cannot_manage_invites(guest_client, tree, guest_member):
    listing = await guest_client.get(f"/family-trees/{tree.id}/guest-invites")
    issue = await guest_client.post(
        f"/family-trees/{tree.id}/guest-invites", json={"family_member_id": guest_member.id}
    )

    assert listing.status_code == 403
    assert issue.status_code == 403
