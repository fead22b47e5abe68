"""Unit tests for GitHub client module."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from travis_notify.github_client import get_pull_request, list_issue_comments


class TestListIssueComments:
    """Tests for list_issue_comments function."""

    @pytest.mark.asyncio
    async def test_list_issue_comments_success(self) -> None:
        """Test successful comments page fetch."""
        mock_response = MagicMock()
        mock_response.json.return_value = [{"id": 1, "body": "first"}, {"id": 2, "body": "second"}]
        mock_response.raise_for_status = MagicMock()

        mock_client = AsyncMock()
        mock_client.__aenter__.return_value.get = AsyncMock(return_value=mock_response)

        with patch("travis_notify.github_client.httpx.AsyncClient", return_value=mock_client):
            result = await list_issue_comments(
                owner="acme", repo="widget", issue_number=7, github_token="test_token", page=3
            )

        assert [c["id"] for c in result] == [1, 2]
        call_args = mock_client.__aenter__.return_value.get.call_args
        assert call_args[0][0] == "https://api.github.com/repos/acme/widget/issues/7/comments"
        assert call_args[1]["params"] == {"page": 3, "per_page": 100}
        assert call_args[1]["headers"]["Authorization"] == "token test_token"

    @pytest.mark.asyncio
    async def test_list_issue_comments_uses_api_url_and_timeout(self) -> None:
        """Test the base URL and timeout are configurable."""
        mock_response = MagicMock()
        mock_response.json.return_value = []
        mock_response.raise_for_status = MagicMock()

        mock_client = AsyncMock()
        mock_client.__aenter__.return_value.get = AsyncMock(return_value=mock_response)

        with patch(
            "travis_notify.github_client.httpx.AsyncClient", return_value=mock_client
        ) as mock_client_cls:
            await list_issue_comments(
                "acme",
                "widget",
                7,
                "test_token",
                api_url="https://github.example.com/api/v3",
                timeout=2.5,
            )

        mock_client_cls.assert_called_once_with(timeout=2.5)
        call_args = mock_client.__aenter__.return_value.get.call_args
        assert call_args[0][0] == "https://github.example.com/api/v3/repos/acme/widget/issues/7/comments"

    @pytest.mark.asyncio
    async def test_list_issue_comments_http_error(self) -> None:
        """Test HTTP errors propagate to the caller."""
        request = httpx.Request("GET", "https://api.github.com/repos/acme/widget/issues/7/comments")
        response = httpx.Response(401, request=request)

        mock_client = AsyncMock()
        mock_client.__aenter__.return_value.get = AsyncMock(return_value=response)

        with patch("travis_notify.github_client.httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(httpx.HTTPStatusError):
                await list_issue_comments("acme", "widget", 7, "bad_token")

    @pytest.mark.asyncio
    async def test_list_issue_comments_missing_token(self) -> None:
        """Test list_issue_comments raises error when token is missing."""
        with pytest.raises(RuntimeError, match="GITHUB_TOKEN is not set"):
            await list_issue_comments(owner="acme", repo="widget", issue_number=7, github_token="")


class TestGetPullRequest:
    """Tests for get_pull_request function."""

    @pytest.mark.asyncio
    async def test_get_pull_request_success(self) -> None:
        """Test successful pull request fetch."""
        mock_response = MagicMock()
        mock_response.json.return_value = {"number": 7, "user": {"login": "pr-opener"}}
        mock_response.raise_for_status = MagicMock()

        mock_client = AsyncMock()
        mock_client.__aenter__.return_value.get = AsyncMock(return_value=mock_response)

        with patch("travis_notify.github_client.httpx.AsyncClient", return_value=mock_client):
            result = await get_pull_request("acme", "widget", 7, "test_token")

        assert result["user"]["login"] == "pr-opener"
        call_args = mock_client.__aenter__.return_value.get.call_args
        assert call_args[0][0] == "https://api.github.com/repos/acme/widget/pulls/7"

    @pytest.mark.asyncio
    async def test_get_pull_request_missing_token(self) -> None:
        """Test get_pull_request raises error when token is missing."""
        with pytest.raises(RuntimeError, match="GITHUB_TOKEN is not set"):
            await get_pull_request("acme", "widget", 7, "")
