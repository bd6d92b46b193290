"""Models for command configuration and the repository context."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from prole_cli.configuration.exceptions import NotAGitRepositoryError
from prole_cli.utils.helpers import is_git_repository

CredentialProvider = Callable[[], str]
"""Returns a GitHub token or raises MissingCredentialError."""


class ProjectTemplate(str, Enum):
    """Enum for the project types that `init` can scaffold."""

    NEXTJS = "nextjs"
    STORYBLOK = "storyblok"
    LIBRARY = "library"


@dataclass
class RepoContext:
    """Explicit context threaded through every command.

    Holds everything that would otherwise be read from process-global state:
    the repository being operated on, the user's home directory (for global
    assistant configuration), and where organization templates come from.
    """

    working_directory: Path
    home_directory: Path
    org_repo: str
    credential_provider: CredentialProvider
    github_api_url: str = "https://api.github.com"
    v0_api_key: str | None = field(default=None, repr=False)
    v0_api_url: str = "https://api.v0.dev/v1"

    def require_git_repository(self) -> None:
        """Raise NotAGitRepositoryError unless the working directory is a git repository."""
        if not is_git_repository(self.working_directory):
            raise NotAGitRepositoryError(self.working_directory)
