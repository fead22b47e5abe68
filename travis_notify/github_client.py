import httpx

GITHUB_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_PER_PAGE = 100
# upper bound on comment pages fetched for one pull request
DEFAULT_MAX_PAGES = 50


def _headers(github_token: str) -> dict[str, str]:
    return {
        "Authorization": f"token {github_token}",
        "Accept": "application/vnd.github+json",
        "User-Agent": "travis-notify",
    }


async def list_issue_comments(
    owner: str,
    repo: str,
    issue_number: int,
    github_token: str,
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
    api_url: str = GITHUB_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[dict]:
    """Fetch one page of comments on an issue or pull request.

    Args:
        owner: Repository owner (org or user)
        repo: Repository name
        issue_number: Issue or pull request number
        github_token: GitHub authentication token
        page: 1-based page number
        per_page: Comments per page (GitHub caps this at 100)
        api_url: Base URL of the GitHub REST API
        timeout: Request timeout in seconds

    Returns:
        List of comment dicts for that page; empty once past the last page

    Raises:
        RuntimeError: If github_token is not provided
        httpx.HTTPStatusError: If GitHub API returns an error
    """
    if not github_token:
        raise RuntimeError("GITHUB_TOKEN is not set")

    url = f"{api_url}/repos/{owner}/{repo}/issues/{issue_number}/comments"
    params = {"page": page, "per_page": per_page}

    async with httpx.AsyncClient(timeout=timeout) as client:
        resp = await client.get(url, headers=_headers(github_token), params=params)
        resp.raise_for_status()
        return resp.json()  # type: ignore[no-any-return]


async def get_pull_request(
    owner: str,
    repo: str,
    pull_number: int,
    github_token: str,
    api_url: str = GITHUB_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict:
    """Fetch pull request details from GitHub API.

    Args:
        owner: Repository owner (org or user)
        repo: Repository name
        pull_number: Pull request number
        github_token: GitHub authentication token
        api_url: Base URL of the GitHub REST API
        timeout: Request timeout in seconds

    Returns:
        Dict with pull request data, including ``user.login``

    Raises:
        RuntimeError: If github_token is not provided
        httpx.HTTPStatusError: If GitHub API returns an error
    """
    if not github_token:
        raise RuntimeError("GITHUB_TOKEN is not set")

    url = f"{api_url}/repos/{owner}/{repo}/pulls/{pull_number}"

    async with httpx.AsyncClient(timeout=timeout) as client:
        resp = await client.get(url, headers=_headers(github_token))
        resp.raise_for_status()
        return resp.json()  # type: ignore[no-any-return]
