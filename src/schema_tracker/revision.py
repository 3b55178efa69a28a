"""Best-effort lookup of the current source-control revision."""

from __future__ import annotations

import subprocess

import structlog

logger = structlog.get_logger(__name__)


def get_git_commit(git_executable: str = "git") -> str | None:
    """Return the commit checked out in the working directory.

    The revision is optional metadata. Any failure (missing executable,
    not a repository, non-UTF-8 output) yields None instead of an error.

    Args:
        git_executable: Revision-control executable to invoke.

    Returns:
        Full commit hash, or None if it cannot be determined.
    """
    try:
        result = subprocess.run(
            [git_executable, "rev-parse", "HEAD"],
            capture_output=True,
            check=False,
        )
    except OSError as e:
        logger.info("git_commit_unavailable", reason="executable_failed", error=str(e))
        return None

    if result.returncode != 0:
        logger.info(
            "git_commit_unavailable",
            reason="non_zero_exit",
            returncode=result.returncode,
        )
        return None

    try:
        commit = result.stdout.decode("utf-8").strip()
    except UnicodeDecodeError:
        logger.info("git_commit_unavailable", reason="non_utf8_output")
        return None

    return commit or None
