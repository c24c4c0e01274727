"""API tests for single-member endpoints, focused on guest editing rules."""

import pytest

from familytree.core.messages import message


@pytest.mark.asyncio
async def test_non_integer_member_id_is_bad_request(client, owner_headers, fake_member_repo):
    response = await client.get("/family-members/x1", headers=owner_headers)

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid member_id: must be an integer"}
    assert fake_member_repo._calls == []


@pytest.mark.asyncio
async def test_member_of_foreign_tree_is_not_found(
    client, owner_headers, fake_family_tree_repo, fake_member_repo
):
    foreign_tree = fake_family_tree_repo.seed(user_id=999, family_name="Someone Else")
    stranger = fake_member_repo.seed(family_tree_id=foreign_tree.id, full_name="Stranger")

    response = await client.get(f"/family-members/{stranger.id}", headers=owner_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_root_member_cannot_be_deleted(client, owner_headers, root_member):
    response = await client.delete(f"/family-members/{root_member.id}", headers=owner_headers)

    assert response.status_code == 400
    assert response.json() == {"detail": "The root person of a family tree cannot be deleted"}


class TestGuestEditing:
    @pytest.mark.asyncio
    async def test_guest_edits_own_profile(self, guest_client, guest_member, fake_change_logger):
        response = await guest_client.put(
            f"/family-members/{guest_member.id}", json={"address": "12 Hàng Bạc, Hà Nội"}
        )

        assert response.status_code == 200
        assert response.json()["address"] == "12 Hàng Bạc, Hà Nội"
        [entry] = fake_change_logger.entries
        assert entry["user_id"] is None
        assert entry["guest_editor_id"] is not None

    @pytest.mark.asyncio
    async def test_guest_cannot_edit_other_member(self, guest_client, root_member):
        response = await guest_client.put(
            f"/family-members/{root_member.id}", json={"address": "Somewhere"}
        )

        assert response.status_code == 403
        assert response.json() == {"detail": message("own_profile_only")}

    @pytest.mark.asyncio
    async def test_guest_cannot_move_themselves_in_tree(self, guest_client, guest_member):
        response = await guest_client.put(
            f"/family-members/{guest_member.id}", json={"generation": "5"}
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_guest_cannot_delete(self, guest_client, guest_member):
        response = await guest_client.delete(f"/family-members/{guest_member.id}")

        assert response.status_code == 403
        assert response.json() == {"detail": message("forbidden")}

    @pytest.mark.asyncio
    async def test_guest_uploads_own_picture(self, guest_client, guest_member):
        upload = await guest_client.put(
            f"/family-members/{guest_member.id}/profile-picture",
            content=b"\x89PNG\r\n\x1a\nfake",
            headers={"Content-Type": "image/png"},
        )
        download = await guest_client.get(f"/family-members/{guest_member.id}/profile-picture")

        assert upload.status_code == 200
        assert upload.json()["has_profile_picture"] is True
        assert download.status_code == 200
        assert download.headers["content-type"] == "image/png"
        assert download.content == b"\x89PNG\r\n\x1a\nfake"

    @pytest.mark.asyncio
    async def test_non_image_upload_is_bad_request(self, guest_client, guest_member):
        response = await guest_client.put(
            f"/family-members/{guest_member.id}/profile-picture",
            content=b"plain text",
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 400
