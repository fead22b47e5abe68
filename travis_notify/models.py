"""Data models for Travis CI webhook payloads and the enriched context."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.alias_generators import to_camel

# Travis sends "script" either as a single command or a list of commands
Script = str | list[str] | None


class Repository(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    owner_name: str


class JobConfig(BaseModel):
    """Per-job build configuration from the matrix.

    Only the runtime version keys used for display names are declared;
    everything else Travis sends is kept as extra fields.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    language: str | None = None
    node_js: Any = None
    rvm: Any = None
    script: Script = None


class MatrixJob(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    state: str
    config: JobConfig = Field(default_factory=JobConfig)


class BuildConfig(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    language: str | None = None
    script: Script = None


class BuildPayload(BaseModel):
    """Travis CI build webhook body.

    Validation errors on the required fields are fatal: there is no
    sensible fallback for a payload without a repository or build URL.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    number: str | None = None
    state: str
    branch: str | None = None
    type: str | None = None
    build_url: str
    author_name: str = Field(min_length=1)
    pull_request_number: int | None = None
    pull_request_title: str | None = None
    repository: Repository
    config: BuildConfig = Field(default_factory=BuildConfig)
    matrix: list[MatrixJob] = Field(default_factory=list)


class PipeMeta(BaseModel):
    """Invocation metadata. The token is never serialized in clear text."""
    model_config = ConfigDict(frozen=True)

    github_token: SecretStr | None = None

    def token(self) -> str | None:
        """Returns the raw token, or None when missing or empty."""
        if self.github_token is None:
            return None
        return self.github_token.get_secret_value() or None


class PipeContext(BaseModel):
    """Input of one enrichment run.

    ``extra`` holds caller fields that are carried into the output untouched.
    """
    model_config = ConfigDict(frozen=True)

    payload: BuildPayload
    meta: PipeMeta = Field(default_factory=PipeMeta)
    extra: dict[str, Any] = Field(default_factory=dict)


class JobDescriptor(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    display_name: str
    script: Script = None
    link: str


class EnrichedContext(BaseModel):
    """Notification context handed to the downstream formatter.

    Serialize with ``model_dump(by_alias=True)`` to get the camelCase keys
    the formatter expects (``pullRequest``, ``buildNumber``, ...).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    owner: str
    repo: str
    pull_request: int | None = None
    pull_request_title: str | None = None
    build_number: int
    author: str
    state: str
    branch: str | None = None
    travis_type: str | None = None
    language: str | None = None
    scripts: Script = None
    host: str
    link: str

    payload: BuildPayload
    meta: PipeMeta
    extra: dict[str, Any] = Field(default_factory=dict)

    jobs: list[JobDescriptor] = Field(default_factory=list)
    comments: list[dict[str, Any]] = Field(default_factory=list)
    pull_request_author: str
