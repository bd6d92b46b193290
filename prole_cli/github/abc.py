"""Base ABCs for the organization template source and the issue tracker."""

from abc import ABC, abstractmethod

import structlog

from prole_cli.configuration.exceptions import TemplateFetchError
from prole_cli.github.models import IssueSummary
from prole_cli.synchronize.models import TemplateBundle
from prole_cli.utils.constants import (
    ISSUE_TEMPLATE_EXTENSIONS,
    REMOTE_ISSUE_TEMPLATE_DIR,
    REMOTE_PULL_REQUEST_TEMPLATE_PATH,
    REMOTE_RULES_DOCUMENT_PATH,
    REMOTE_WORKFLOW_TEMPLATE_DIR,
    WORKFLOW_EXTENSIONS,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class TemplateSourceBase(ABC):
    """Base ABC for a source of organization templates.

    Implementations provide the two raw operations, which raise
    TemplateFetchError on any failure. The fail-soft wrappers and the bundle
    assembly are shared.
    """

    repo: str

    @abstractmethod
    async def get_file_content(self, path: str) -> str:
        """Get the text content of a file in the template repository."""
        pass

    @abstractmethod
    async def list_directory(self, path: str) -> list[str]:
        """List the entry names of a directory in the template repository."""
        pass

    async def fetch_file(self, path: str) -> str | None:
        """Get a file, returning None if it cannot be retrieved."""
        try:
            return await self.get_file_content(path)
        except TemplateFetchError as exc:
            logger.debug("Template file unavailable", repo=exc.repo, path=exc.path, reason=exc.reason)
            return None

    async def fetch_directory_listing(self, path: str) -> list[str]:
        """List a directory, returning an empty list if it cannot be retrieved."""
        try:
            return await self.list_directory(path)
        except TemplateFetchError as exc:
            logger.debug("Template directory unavailable", repo=exc.repo, path=exc.path, reason=exc.reason)
            return []

    async def _fetch_directory_files(self, directory: str, extensions: tuple[str, ...]) -> dict[str, str]:
        files: dict[str, str] = {}
        for filename in await self.fetch_directory_listing(directory):
            if not filename.endswith(extensions):
                continue
            content = await self.fetch_file(f"{directory}/{filename}")
            if content:
                files[filename] = content
        return files

    async def fetch(self) -> TemplateBundle:
        """Fetch every organization artifact, one request at a time.

        Never raises: unavailable artifacts are absent from the bundle, and an
        unreachable repository yields an empty bundle.
        """
        logger.info("Fetching organization templates", repo=self.repo)
        rules_document = await self.fetch_file(REMOTE_RULES_DOCUMENT_PATH)
        issue_templates = await self._fetch_directory_files(REMOTE_ISSUE_TEMPLATE_DIR, ISSUE_TEMPLATE_EXTENSIONS)
        pull_request_template = await self.fetch_file(REMOTE_PULL_REQUEST_TEMPLATE_PATH)
        workflows = await self._fetch_directory_files(REMOTE_WORKFLOW_TEMPLATE_DIR, WORKFLOW_EXTENSIONS)
        bundle = TemplateBundle(
            rules_document=rules_document or None,
            issue_templates=issue_templates,
            pull_request_template=pull_request_template or None,
            workflows=workflows,
        )
        logger.info(
            "Fetched organization templates",
            repo=self.repo,
            has_rules_document=bundle.rules_document is not None,
            issue_template_count=len(bundle.issue_templates),
            has_pull_request_template=bundle.pull_request_template is not None,
            workflow_count=len(bundle.workflows),
        )
        return bundle


class IssueTrackerBase(ABC):
    """Base ABC for the issue tracker."""

    @abstractmethod
    def list_ready_issues(self) -> list[IssueSummary]:
        """List issues that are ready to be developed."""
        pass

    @abstractmethod
    def view_issue(self, number: str) -> str:
        """Get the rendered details of an issue."""
        pass

    @abstractmethod
    def get_repository_url(self) -> str:
        """Get the web URL of the current repository."""
        pass
