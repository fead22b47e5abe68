import json
import logging
from urllib.parse import parse_qs

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import ValidationError

from . import github_client
from .config import Settings, get_settings
from .models import PipeContext, PipeMeta
from .services.enrichers import CommentFetcher, GitHubOptions, PullRequestAuthorResolver
from .services.payload_service import PayloadEnricher
from .services.projector import InvalidBuildURL

# Setup logging - will be configured on startup
logger = logging.getLogger(__name__)

app = FastAPI(title="Travis CI → notification context", version="0.1.0")


@app.on_event("startup")
async def configure_logging() -> None:
    """Configure logging level from settings on startup."""
    try:
        settings = get_settings()
        log_level = getattr(logging, settings.LOG_LEVEL, logging.INFO)
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,  # Override any existing config
        )
        logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")
    except ValidationError as e:
        # Fallback to INFO if settings fail
        logging.basicConfig(level=logging.INFO)
        logger.warning(f"Failed to load LOG_LEVEL from settings, using INFO: {e}")


# Dependency injection for PayloadEnricher
def get_payload_enricher(settings: Settings = Depends(get_settings)) -> PayloadEnricher:
    """Create PayloadEnricher backed by the GitHub client module.

    Follows Dependency Inversion Principle:
    - enrichers depend on the GitHubApi protocol
    - the concrete client module is injected here
    """
    options = GitHubOptions(
        api_url=settings.GITHUB_API_URL,
        timeout=settings.GITHUB_TIMEOUT,
        per_page=settings.COMMENTS_PER_PAGE,
        max_pages=settings.COMMENTS_MAX_PAGES,
    )
    return PayloadEnricher(
        comment_fetcher=CommentFetcher(github_client=github_client, options=options),
        author_resolver=PullRequestAuthorResolver(github_client=github_client, options=options),
    )


def parse_travis_body(body: bytes, content_type: str) -> dict:
    """Decode a Travis webhook body.

    Travis posts form-encoded data with the build JSON in a ``payload``
    field; a plain JSON body is accepted too.

    Raises:
        ValueError: If the body cannot be decoded into a JSON object
    """
    text = body.decode("utf-8")
    if "application/json" in content_type:
        data = json.loads(text)
    else:
        form_data = parse_qs(text)
        if "payload" not in form_data:
            raise ValueError("missing 'payload' field")
        data = json.loads(form_data["payload"][0])

    if not isinstance(data, dict):
        raise ValueError("payload is not a JSON object")
    return data


@app.get("/health")
async def health(settings: Settings = Depends(get_settings)) -> dict[str, object]:
    return {
        "status": "ok",
        "github_token_configured": bool(settings.GITHUB_TOKEN),
    }


@app.post("/webhook/travis")
async def travis_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    payload_enricher: PayloadEnricher = Depends(get_payload_enricher),
) -> dict[str, object]:
    """
    Receives Travis CI build webhooks and returns the notification context.

    Query parameters are passed through untouched as ``extra``.
    """
    body = await request.body()
    if not body:
        logger.info("Received webhook ping (empty body)")
        return {"ok": True, "message": "pong"}

    try:
        raw_payload = parse_travis_body(body, request.headers.get("content-type", ""))
    except ValueError as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        logger.error(f"Failed to parse Travis webhook: {e}")
        raise HTTPException(status_code=400, detail="invalid payload")

    try:
        context = PipeContext(
            payload=raw_payload,
            meta=PipeMeta(github_token=settings.GITHUB_TOKEN),
            extra=dict(request.query_params),
        )
        logger.info(
            f"Received Travis webhook: build {context.payload.id} "
            f"({context.payload.state}) for {context.payload.repository.owner_name}/"
            f"{context.payload.repository.name}"
        )
        enriched = await payload_enricher.enrich(context)
    except ValidationError as e:
        logger.error(f"Invalid Travis payload: {e}")
        raise HTTPException(status_code=422, detail="invalid payload fields")
    except InvalidBuildURL as e:
        logger.error(str(e))
        raise HTTPException(status_code=422, detail="invalid build_url")

    logger.debug(f"Enriched context with {len(enriched.jobs)} failed jobs, {len(enriched.comments)} comments")
    return {"ok": True, "context": enriched.model_dump(mode="json", by_alias=True)}


def run() -> None:
    """Serve the app with uvicorn on the configured PORT."""
    settings = get_settings()
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
