"""Labels for failed matrix jobs."""
from collections.abc import Iterable

from ..models import JobDescriptor, MatrixJob

FAILED = "failed"

# language -> (label, config key holding the runtime version)
RUNTIME_LABELS = {
    "node_js": ("Node.js", "node_js"),
    "ruby": ("Ruby", "rvm"),
}


def ordinal(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def job_display_name(job: MatrixJob, index: int) -> str:
    """Human-readable name for a job, falling back to its position.

    Args:
        job: Matrix entry
        index: 0-based position among the failed jobs
    """
    runtime = RUNTIME_LABELS.get(job.config.language or "")
    if runtime:
        label, version_key = runtime
        return f"{label}: {getattr(job.config, version_key)}"

    return f"{ordinal(index + 1)} Build"


def job_link(host: str, owner: str, repo: str, job_id: int) -> str:
    return f"https://{host}/{owner}/{repo}/jobs/{job_id}"


def label_failed_jobs(
    matrix: Iterable[MatrixJob], owner: str, repo: str, host: str
) -> list[JobDescriptor]:
    """Describe every failed job, in matrix order."""
    failed = [job for job in matrix if job.state == FAILED]

    return [
        JobDescriptor(
            id=job.id,
            display_name=job_display_name(job, index),
            script=job.config.script,
            link=job_link(host, owner, repo, job.id),
        )
        for index, job in enumerate(failed)
    ]
