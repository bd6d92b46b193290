"""Contains exceptions raised by the prole CLI."""

from pathlib import Path


class NotAGitRepositoryError(Exception):
    """Raised when a command requires a git repository and none is found."""

    def __init__(self, path: Path) -> None:
        """Initializes the exception with the directory that was checked."""
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class MissingCredentialError(Exception):
    """Raised when no GitHub credential can be obtained."""

    pass


class TemplateFetchError(Exception):
    """Raised when a single artifact cannot be fetched from the template repository."""

    def __init__(self, repo: str, path: str, reason: str) -> None:
        """Initializes the exception with the repository and artifact path."""
        super().__init__(f"Failed to fetch {path} from {repo}: {reason}")
        self.repo = repo
        self.path = path
        self.reason = reason


class V0ApiError(Exception):
    """Raised when the v0 API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initializes the exception with the API message and HTTP status."""
        super().__init__(message)
        self.status_code = status_code
