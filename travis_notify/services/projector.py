"""Flat projection of a Travis build payload."""
from typing import Any
from urllib.parse import urlsplit

from ..models import BuildPayload


class InvalidBuildURL(ValueError):
    """The payload's build_url has no host to link against."""


DEFAULT_PORTS = {"http": 80, "https": 443}


def parse_host(build_url: str) -> str:
    """Return the host of a build URL, as a browser would show it.

    Credentials are dropped, the name is lowercased and the scheme's
    default port is left out.

    Raises:
        InvalidBuildURL: If the URL cannot be parsed or has no host
    """
    try:
        parts = urlsplit(build_url)
        hostname = parts.hostname
        port = parts.port
    except ValueError as e:
        raise InvalidBuildURL(f"Invalid build URL {build_url!r}: {e}") from e
    if not hostname:
        raise InvalidBuildURL(f"Invalid build URL {build_url!r}: no host")

    if ":" in hostname:
        # IPv6 literal
        hostname = f"[{hostname}]"
    if port is None or port == DEFAULT_PORTS.get(parts.scheme.lower()):
        return hostname
    return f"{hostname}:{port}"


def build_link(host: str, owner: str, repo: str, build_id: int) -> str:
    return f"https://{host}/{owner}/{repo}/builds/{build_id}"


def project_fields(payload: BuildPayload) -> dict[str, Any]:
    """Extract and rename the fields the notification context exposes.

    Args:
        payload: Validated Travis build payload

    Returns:
        Dict keyed by EnrichedContext field names

    Raises:
        InvalidBuildURL: If build_url has no host
    """
    host = parse_host(payload.build_url)
    owner = payload.repository.owner_name
    repo = payload.repository.name

    return {
        "owner": owner,
        "repo": repo,
        "pull_request": payload.pull_request_number,
        "pull_request_title": payload.pull_request_title,
        "build_number": payload.id,
        "author": payload.author_name,
        "state": payload.state,
        "branch": payload.branch,
        "travis_type": payload.type,
        "language": payload.config.language,
        "scripts": payload.config.script,
        "host": host,
        "link": build_link(host, owner, repo, payload.id),
    }
