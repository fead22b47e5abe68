"""Protocols (interfaces) for dependency inversion."""

from typing import Protocol


class GitHubApi(Protocol):
    """The GitHub calls the enrichers need.

    Satisfied by the ``travis_notify.github_client`` module itself, or by a
    mock in tests.
    """

    async def list_issue_comments(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        github_token: str,
        page: int = 1,
        per_page: int = ...,
        api_url: str = ...,
        timeout: float = ...,
    ) -> list[dict]:
        ...

    async def get_pull_request(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        github_token: str,
        api_url: str = ...,
        timeout: float = ...,
    ) -> dict:
        ...
