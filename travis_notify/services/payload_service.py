"""Travis payload processing service."""
import asyncio
import logging
from typing import Any

from ..models import EnrichedContext, PipeContext
from .enrichers import CommentFetcher, Enrichment, PullRequestAuthorResolver
from .jobs import label_failed_jobs
from .projector import project_fields

logger = logging.getLogger(__name__)


class PayloadEnricher:
    """Turns a Travis webhook payload into a notification context.

    Follows Single Responsibility Principle:
    - Only responsible for orchestrating projection, job labeling and enrichers
    - Doesn't know about HTTP or how GitHub is reached
    """

    def __init__(
        self,
        comment_fetcher: CommentFetcher,
        author_resolver: PullRequestAuthorResolver,
        log: logging.Logger | None = None,
    ):
        """Initialize with the two GitHub enrichers.

        Args:
            comment_fetcher: Collects pull request comments
            author_resolver: Looks up the pull request author
            log: Logger for skipped enrichment
        """
        self.comment_fetcher = comment_fetcher
        self.author_resolver = author_resolver
        self.log = log or logger

    async def enrich(self, context: PipeContext) -> EnrichedContext:
        """Build the enriched context for one webhook delivery.

        Args:
            context: Payload, invocation metadata and passthrough fields

        Returns:
            EnrichedContext with failed jobs, comments and PR author

        Raises:
            InvalidBuildURL: If the payload's build_url has no host

        Note:
            Comments and author are fetched concurrently. Neither can fail
            the call: comments fall back to [] and the author to the
            payload's author_name.
        """
        payload = context.payload
        fields = project_fields(payload)
        jobs = label_failed_jobs(payload.matrix, fields["owner"], fields["repo"], fields["host"])

        comments, author = await self._fetch_remote(context, fields["owner"], fields["repo"])

        return EnrichedContext(
            **fields,
            payload=payload,
            meta=context.meta,
            extra=dict(context.extra),
            jobs=jobs,
            comments=comments.value or [],
            pull_request_author=author.value or payload.author_name,
        )

    async def _fetch_remote(
        self, context: PipeContext, owner: str, repo: str
    ) -> tuple[Enrichment[list[dict[str, Any]]], Enrichment[str | None]]:
        number = context.payload.pull_request_number
        if number is None:
            self.log.debug(f"Build {context.payload.id} is not a pull request, skipping GitHub enrichment")
            return (
                Enrichment(value=[], degraded=True, reason="not a pull request"),
                Enrichment(value=None, degraded=True, reason="not a pull request"),
            )

        token = context.meta.token()
        comments, author = await asyncio.gather(
            self.comment_fetcher.fetch(token, owner, repo, number),
            self.author_resolver.resolve(token, owner, repo, number),
        )
        return comments, author
