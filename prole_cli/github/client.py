"""Sets up the authenticated githubkit client."""

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from prole_cli.configuration.models import CredentialProvider


def get_github_client(credential_provider: CredentialProvider, github_api_url: str) -> GitHub[TokenAuthStrategy]:
    """Returns a GitHub client authenticated with the provider's token.

    Raises MissingCredentialError if the provider cannot supply a token.
    Supports custom base URL for GitHub Enterprise Server (GHES).
    """
    token = credential_provider()
    # Disable HTTP caching to always get fresh data
    return GitHub(auth=TokenAuthStrategy(token), base_url=github_api_url, http_cache=False)


def split_repository(repo: str) -> tuple[str, str]:
    """Splits an 'owner/repo' identifier into owner and repository."""
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository
