"""Best-effort GitHub enrichers for a build notification."""
import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..github_client import DEFAULT_MAX_PAGES, DEFAULT_PER_PAGE, DEFAULT_TIMEOUT, GITHUB_API_URL
from .protocols import GitHubApi

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Enrichment(Generic[T]):
    """Outcome of a best-effort fetch.

    ``degraded`` is set whenever the value is not the full answer: missing
    token, request failure, or page limit hit. ``value`` is always usable.
    """
    value: T
    degraded: bool = False
    reason: str | None = None


@dataclass(frozen=True)
class GitHubOptions:
    """Request options shared by both enrichers."""
    api_url: str = GITHUB_API_URL
    timeout: float = DEFAULT_TIMEOUT
    per_page: int = DEFAULT_PER_PAGE
    max_pages: int = DEFAULT_MAX_PAGES

    def request_kwargs(self) -> dict[str, Any]:
        return {"api_url": self.api_url, "timeout": self.timeout}


class CommentFetcher:
    """Collects every comment on a pull request, page by page.

    Follows Single Responsibility Principle:
    - Only responsible for paginating the comments endpoint
    - A failing page ends pagination; earlier pages are kept
    """

    def __init__(
        self,
        github_client: GitHubApi,
        options: GitHubOptions | None = None,
        log: logging.Logger | None = None,
    ):
        """Initialize with GitHub client.

        Args:
            github_client: Client for GitHub API calls
            options: Request options (page size, page limit, timeout)
            log: Logger for degraded-mode warnings
        """
        self.github_client = github_client
        self.options = options or GitHubOptions()
        self.log = log or logger

    async def fetch(
        self, github_token: str | None, owner: str, repo: str, issue_number: int
    ) -> Enrichment[list[dict[str, Any]]]:
        """Fetch all comments on an issue or pull request.

        Args:
            github_token: GitHub token; without it nothing is fetched
            owner: Repository owner
            repo: Repository name
            issue_number: Issue or pull request number

        Returns:
            Enrichment holding the comments in request order
        """
        if not github_token:
            self.log.warning("No GitHub token, cannot fetch comments")
            return Enrichment(value=[], degraded=True, reason="missing token")

        comments: list[dict[str, Any]] = []
        for page in range(1, self.options.max_pages + 1):
            try:
                bulk = await self.github_client.list_issue_comments(
                    owner,
                    repo,
                    issue_number,
                    github_token,
                    page=page,
                    per_page=self.options.per_page,
                    **self.options.request_kwargs(),
                )
            except Exception as e:
                self.log.warning(
                    f"Failed to fetch comments page {page} for {owner}/{repo} #{issue_number}: {e}"
                )
                return Enrichment(value=comments, degraded=True, reason=str(e))

            if not bulk:
                self.log.debug(f"Fetched {len(comments)} comments for {owner}/{repo} #{issue_number}")
                return Enrichment(value=comments)

            comments.extend(bulk)

        self.log.warning(
            f"Stopped fetching comments for {owner}/{repo} #{issue_number} "
            f"after {self.options.max_pages} pages"
        )
        return Enrichment(value=comments, degraded=True, reason="page limit reached")


class PullRequestAuthorResolver:
    """Looks up the login of the user who opened a pull request.

    Never raises: every failure resolves to a degraded Enrichment with no
    login, and the caller substitutes its own fallback.
    """

    def __init__(
        self,
        github_client: GitHubApi,
        options: GitHubOptions | None = None,
        log: logging.Logger | None = None,
    ):
        self.github_client = github_client
        self.options = options or GitHubOptions()
        self.log = log or logger

    async def resolve(
        self, github_token: str | None, owner: str, repo: str, pull_number: int
    ) -> Enrichment[str | None]:
        if not github_token:
            self.log.warning("No GitHub token, unable to fetch PR owner")
            return Enrichment(value=None, degraded=True, reason="missing token")

        try:
            pull_request = await self.github_client.get_pull_request(
                owner, repo, pull_number, github_token, **self.options.request_kwargs()
            )
            login = pull_request["user"]["login"]
        except Exception as e:
            self.log.warning(f"Could not find author in: {owner}/{repo} #{pull_number}: {e}")
            return Enrichment(value=None, degraded=True, reason=str(e))

        if not login:
            self.log.warning(f"Could not find author in: {owner}/{repo} #{pull_number}: empty login")
            return Enrichment(value=None, degraded=True, reason="empty login")

        return Enrichment(value=login)
