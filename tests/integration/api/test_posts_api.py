"""Integration tests for Posts API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from infrastructure.auth.provider import TokenUser


async def _create_post(client: AsyncClient, text: str = "Hello developers") -> dict:
    response = await client.post("/api/v1/posts", json={"text": text})
    assert response.status_code == 201
    return response.json()["data"]


class TestPostsAPI:
    """Post create, read and delete."""

    @pytest.mark.asyncio
    async def test_create_post(self, authenticated_client: AsyncClient, test_user: TokenUser):
        data = await _create_post(authenticated_client)

        assert data["text"] == "Hello developers"
        assert data["user_id"] == str(test_user.id)
        assert data["name"] == "Test User"
        assert data["likes"] == []
        assert data["comments"] == []
        assert data["version"] == 0

    @pytest.mark.asyncio
    async def test_create_post_requires_text(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/posts", json={"text": ""})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_list_posts_newest_first(self, authenticated_client: AsyncClient):
        await _create_post(authenticated_client, "older")
        await _create_post(authenticated_client, "newer")

        response = await authenticated_client.get("/api/v1/posts")

        assert response.status_code == 200
        assert [p["text"] for p in response.json()["data"]] == ["newer", "older"]

    @pytest.mark.asyncio
    async def test_list_posts_of_one_user(
        self,
        authenticated_client: AsyncClient,
        other_client: AsyncClient,
        other_user: TokenUser,
    ):
        await _create_post(authenticated_client, "mine")
        await _create_post(other_client, "theirs, older")
        await _create_post(other_client, "theirs, newer")

        response = await authenticated_client.get(f"/api/v1/posts/user/{other_user.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [p["text"] for p in data] == ["theirs, newer", "theirs, older"]
        assert {p["user_id"] for p in data} == {str(other_user.id)}

    @pytest.mark.asyncio
    async def test_get_unknown_post(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get(f"/api/v1/posts/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "POST_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_only_author_can_delete(
        self, authenticated_client: AsyncClient, other_client: AsyncClient
    ):
        post = await _create_post(authenticated_client)

        forbidden = await other_client.delete(f"/api/v1/posts/{post['id']}")
        assert forbidden.status_code == 403
        assert forbidden.json()["error_code"] == "FORBIDDEN"

        deleted = await authenticated_client.delete(f"/api/v1/posts/{post['id']}")
        assert deleted.status_code == 204

        missing = await authenticated_client.get(f"/api/v1/posts/{post['id']}")
        assert missing.status_code == 404


class TestLikesAPI:
    """Like toggling."""

    @pytest.mark.asyncio
    async def test_like_twice_is_rejected(
        self,
        authenticated_client: AsyncClient,
        other_client: AsyncClient,
        other_user: TokenUser,
    ):
        post = await _create_post(authenticated_client)
        url = f"/api/v1/posts/{post['id']}/like"

        first = await other_client.put(url)
        assert first.status_code == 200
        assert first.json()["data"] == [{"user_id": str(other_user.id)}]

        second = await other_client.put(url)
        assert second.status_code == 400
        assert second.json()["error_code"] == "ALREADY_LIKED"
        assert second.json()["message"] == "Post already liked"

        stored = await authenticated_client.get(f"/api/v1/posts/{post['id']}")
        assert len(stored.json()["data"]["likes"]) == 1
        assert stored.json()["data"]["version"] == 1

    @pytest.mark.asyncio
    async def test_unlike_without_like_is_rejected(self, authenticated_client: AsyncClient):
        post = await _create_post(authenticated_client)

        response = await authenticated_client.put(f"/api/v1/posts/{post['id']}/unlike")

        assert response.status_code == 400
        assert response.json()["error_code"] == "NOT_LIKED"

    @pytest.mark.asyncio
    async def test_newest_like_first_and_unlike(
        self,
        authenticated_client: AsyncClient,
        other_client: AsyncClient,
        test_user: TokenUser,
        other_user: TokenUser,
    ):
        post = await _create_post(authenticated_client)

        await other_client.put(f"/api/v1/posts/{post['id']}/like")
        liked = await authenticated_client.put(f"/api/v1/posts/{post['id']}/like")
        assert [like["user_id"] for like in liked.json()["data"]] == [
            str(test_user.id),
            str(other_user.id),
        ]

        unliked = await other_client.put(f"/api/v1/posts/{post['id']}/unlike")
        assert unliked.status_code == 200
        assert unliked.json()["data"] == [{"user_id": str(test_user.id)}]

    @pytest.mark.asyncio
    async def test_like_unknown_post(self, authenticated_client: AsyncClient):
        response = await authenticated_client.put(f"/api/v1/posts/{uuid4()}/like")

        assert response.status_code == 404
        assert response.json()["error_code"] == "POST_NOT_FOUND"


class TestCommentsAPI:
    """Comment add and remove."""

    @pytest.mark.asyncio
    async def test_comments_newest_first_with_commenter_identity(
        self,
        authenticated_client: AsyncClient,
        other_client: AsyncClient,
        other_user: TokenUser,
    ):
        post = await _create_post(authenticated_client)
        url = f"/api/v1/posts/{post['id']}/comments"

        await authenticated_client.post(url, json={"text": "first"})
        response = await other_client.post(url, json={"text": "second"})

        assert response.status_code == 201
        comments = response.json()["data"]
        assert [c["text"] for c in comments] == ["second", "first"]
        assert comments[0]["user_id"] == str(other_user.id)
        assert comments[0]["name"] == "Other User"
        assert comments[0]["avatar"] == "https://example.com/other.png"

    @pytest.mark.asyncio
    async def test_post_author_cannot_delete_others_comment(
        self, authenticated_client: AsyncClient, other_client: AsyncClient
    ):
        post = await _create_post(authenticated_client)
        added = await other_client.post(
            f"/api/v1/posts/{post['id']}/comments", json={"text": "mine"}
        )
        comment_id = added.json()["data"][0]["id"]
        url = f"/api/v1/posts/{post['id']}/comments/{comment_id}"

        forbidden = await authenticated_client.delete(url)
        assert forbidden.status_code == 403

        removed = await other_client.delete(url)
        assert removed.status_code == 200
        assert removed.json()["data"] == []

    @pytest.mark.asyncio
    async def test_delete_unknown_comment(self, authenticated_client: AsyncClient):
        post = await _create_post(authenticated_client)
        await authenticated_client.post(
            f"/api/v1/posts/{post['id']}/comments", json={"text": "keep me"}
        )
        before = await authenticated_client.get(f"/api/v1/posts/{post['id']}")

        response = await authenticated_client.delete(
            f"/api/v1/posts/{post['id']}/comments/{uuid4()}"
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "COMMENT_NOT_FOUND"

        stored = await authenticated_client.get(f"/api/v1/posts/{post['id']}")
        assert stored.json()["data"]["comments"] == before.json()["data"]["comments"]
