"""Template source adapter for the githubkit library."""

import base64
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

import structlog
from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy
from githubkit.exception import GitHubException

from prole_cli.configuration.exceptions import MissingCredentialError, TemplateFetchError
from prole_cli.configuration.models import CredentialProvider

from .abc import TemplateSourceBase
from .client import get_github_client, split_repository

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def raise_as_template_fetch_error(func: F) -> F:
    """Decorator translating credential, HTTP and decoding failures into TemplateFetchError."""

    @wraps(func)
    async def wrapper(self: "GitHubKitTemplateSource", path: str) -> Any:
        try:
            return await func(self, path)
        except TemplateFetchError:
            raise
        except MissingCredentialError as exc:
            raise TemplateFetchError(self.repo, path, str(exc)) from exc
        except GitHubException as exc:
            logger.debug("GitHub request failed", function=func.__name__, repo=self.repo, path=path, error=str(exc))
            raise TemplateFetchError(self.repo, path, str(exc)) from exc
        except (ValueError, UnicodeDecodeError) as exc:
            raise TemplateFetchError(self.repo, path, f"undecodable content: {exc}") from exc

    return wrapper  # type: ignore


class GitHubKitTemplateSource(TemplateSourceBase):
    """Reads organization templates through the GitHub repository contents API."""

    def __init__(self, repo: str, credential_provider: CredentialProvider, github_api_url: str = "https://api.github.com") -> None:
        """Initialize the source; the client is created on first use."""
        self.repo = repo
        self.owner, self.repo_name = split_repository(repo)
        self.credential_provider = credential_provider
        self.github_api_url = github_api_url
        self._client: GitHub[TokenAuthStrategy] | None = None

    @property
    def client(self) -> GitHub[TokenAuthStrategy]:
        """The authenticated client, created lazily so a missing credential only fails requests."""
        if self._client is None:
            logger.debug("Creating client for GitHub instance", github_api_url=self.github_api_url, owner=self.owner, repo_name=self.repo_name)
            self._client = get_github_client(self.credential_provider, self.github_api_url)
        return self._client

    @raise_as_template_fetch_error
    async def get_file_content(self, path: str) -> str:
        """Get the decoded content of a file in the template repository."""
        response = await self.client.rest.repos.async_get_content(owner=self.owner, repo=self.repo_name, path=path)
        data = response.parsed_data
        if isinstance(data, list) or getattr(data, "type", None) != "file":
            raise TemplateFetchError(self.repo, path, "not a file")
        return base64.b64decode(data.content).decode("utf-8")

    @raise_as_template_fetch_error
    async def list_directory(self, path: str) -> list[str]:
        """List the entry names of a directory in the template repository."""
        response = await self.client.rest.repos.async_get_content(owner=self.owner, repo=self.repo_name, path=path)
        data = response.parsed_data
        if not isinstance(data, list):
            raise TemplateFetchError(self.repo, path, "not a directory")
        return [item.name for item in data]
