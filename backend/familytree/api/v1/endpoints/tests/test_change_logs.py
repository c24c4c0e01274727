"""API tests for the change log endpoint."""

import pytest


@pytest.mark.asyncio
async def test_edits_appear_newest_first(client, owner_headers, tree):
    await client.put(f"/family-trees/{tree.id}", json={"origin": "Nam Định"}, headers=owner_headers)
    await client.put(f"/family-trees/{tree.id}", json={"origin": "Hà Nam"}, headers=owner_headers)

    response = await client.get(f"/family-trees/{tree.id}/change-logs", headers=owner_headers)

    assert response.status_code == 200
    rows = response.json()
    assert [r["new_values"]["origin"] for r in rows] == ["Hà Nam", "Nam Định"]
    assert all(r["entity_type"] == "FamilyTree" and r["action"] == "UPDATE" for r in rows)


@pytest.mark.asyncio
async def test_guest_edit_is_attributed_to_guest(guest_client, tree, guest_member, guest_editor):
    await guest_client.put(f"/family-members/{guest_member.id}", json={"address": "Huế"})

    response = await guest_client.get(f"/family-trees/{tree.id}/change-logs")

    [row] = response.json()
    assert row["guest_editor_id"] == guest_editor.id
    assert row["user_id"] is None
