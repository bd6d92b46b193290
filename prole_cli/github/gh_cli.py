"""Wrappers around the GitHub CLI (gh)."""

import json
import subprocess
from pathlib import Path

import structlog

from prole_cli.configuration.exceptions import MissingCredentialError
from prole_cli.configuration.models import CredentialProvider
from prole_cli.github.abc import IssueTrackerBase
from prole_cli.github.models import IssueSummary
from prole_cli.utils.constants import ISSUE_LIST_LIMIT, READY_TO_DEVELOP_LABEL

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def run_gh(args: list[str], cwd: Path | None = None) -> str:
    """Run a gh command and return its standard output.

    Raises subprocess.CalledProcessError on a non-zero exit and
    FileNotFoundError when gh is not installed.
    """
    cmd = ["gh", *args]
    logger.debug("Running gh command", cmd=" ".join(cmd), cwd=str(cwd) if cwd else None)
    result = subprocess.run(cmd, capture_output=True, text=True, check=True, cwd=cwd)
    return result.stdout


def get_gh_auth_token() -> str:
    """Get the token of the account gh is logged in with."""
    try:
        token = run_gh(["auth", "token"]).strip()
    except (subprocess.CalledProcessError, FileNotFoundError) as exc:
        raise MissingCredentialError("GitHub CLI is not authenticated. Run `gh auth login`.") from exc
    if not token:
        raise MissingCredentialError("GitHub CLI returned an empty token. Run `gh auth login`.")
    return token


def build_credential_provider(explicit_token: str | None) -> CredentialProvider:
    """Return a provider preferring an explicit token over the gh CLI's credentials."""
    if explicit_token:
        return lambda: explicit_token
    return get_gh_auth_token


class GhCliIssueTracker(IssueTrackerBase):
    """Issue tracker backed by the gh CLI, run inside the working directory."""

    def __init__(self, working_directory: Path) -> None:
        """Initialize the tracker for the repository checked out at working_directory."""
        self.working_directory = working_directory

    def list_ready_issues(self) -> list[IssueSummary]:
        """List open issues carrying the ready-to-develop label."""
        stdout = run_gh(
            [
                "issue",
                "list",
                "-l",
                READY_TO_DEVELOP_LABEL,
                "--json",
                "number,title,labels,assignees",
                "--limit",
                str(ISSUE_LIST_LIMIT),
            ],
            cwd=self.working_directory,
        )
        return [IssueSummary.model_validate(item) for item in json.loads(stdout)]

    def view_issue(self, number: str) -> str:
        """Get the text rendering of an issue."""
        return run_gh(["issue", "view", number], cwd=self.working_directory)

    def get_repository_url(self) -> str:
        """Get the web URL of the repository."""
        return run_gh(["repo", "view", "--json", "url", "-q", ".url"], cwd=self.working_directory).strip()
