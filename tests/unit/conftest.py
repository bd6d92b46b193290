"""Fixtures for unit tests."""

from pathlib import Path
from typing import Callable, Generator

import pytest
import structlog

from prole_cli.configuration.exceptions import TemplateFetchError
from prole_cli.configuration.models import RepoContext
from prole_cli.github.abc import TemplateSourceBase
from prole_cli.utils.constants import ORG_SECTION_MARKER

ORG_RULES = """## Organization rules

All work starts from an issue labelled ready-to-develop. Branches follow feature/issue-{number}-{description}
and pull requests must reference the issue they close.

## Quality levels
- Bronze: 80% coverage
- Silver: 85% coverage
- Gold: 95% coverage
"""


class StaticTemplateSource(TemplateSourceBase):
    """In-memory template source keyed by repository path."""

    def __init__(self, files: dict[str, str] | None = None, repo: str = "PROLE-ISLAND/.github", offline: bool = False) -> None:
        """Initialize the source with the files it serves."""
        self.repo = repo
        self.files = dict(files or {})
        self.offline = offline
        self.requested: list[str] = []

    async def get_file_content(self, path: str) -> str:
        """Return a file, raising TemplateFetchError if it is not served."""
        self.requested.append(path)
        if self.offline:
            raise TemplateFetchError(self.repo, path, "offline")
        if path not in self.files:
            raise TemplateFetchError(self.repo, path, "not found")
        return self.files[path]

    async def list_directory(self, path: str) -> list[str]:
        """Return the names directly under a directory."""
        if self.offline:
            raise TemplateFetchError(self.repo, path, "offline")
        prefix = f"{path}/"
        names = sorted({key[len(prefix) :].split("/", 1)[0] for key in self.files if key.startswith(prefix)})
        if not names:
            raise TemplateFetchError(self.repo, path, "not found")
        return names


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def org_rules() -> str:
    """Organization rules as served by the template repository."""
    return ORG_RULES


@pytest.fixture
def org_files(org_rules: str) -> dict[str, str]:
    """A complete organization template repository."""
    return {
        "CLAUDE.md": org_rules,
        "ISSUE_TEMPLATE/bug_report.yml": "name: Bug report\ndescription: Report a bug\n",
        "ISSUE_TEMPLATE/feature_request.yml": "name: Feature request\ndescription: Suggest a feature\n",
        "ISSUE_TEMPLATE/README.md": "Issue templates\n",
        "PULL_REQUEST_TEMPLATE.md": "## Summary\n\ncloses #\n",
        "workflow-templates/ci.yml": "name: CI\non: [push]\n",
        "workflow-templates/pr-check.yml": "name: PR check\non: [pull_request]\n",
        "workflow-templates/v0-generate.yml": "name: v0 generate\non: [issues]\n",
        "workflow-templates/ci.properties.json": '{"name": "CI"}\n',
    }


@pytest.fixture
def make_template_source() -> Callable[..., StaticTemplateSource]:
    """Factory for in-memory template sources."""

    def _make(files: dict[str, str] | None = None, offline: bool = False) -> StaticTemplateSource:
        return StaticTemplateSource(files, offline=offline)

    return _make


@pytest.fixture
def template_source(org_files: dict[str, str]) -> StaticTemplateSource:
    """Template source serving the complete organization repository."""
    return StaticTemplateSource(org_files)


@pytest.fixture
def offline_source() -> StaticTemplateSource:
    """Template source that fails every request."""
    return StaticTemplateSource(offline=True)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """An empty git working directory."""
    repo = tmp_path / "repo"
    (repo / ".git").mkdir(parents=True)
    return repo


@pytest.fixture
def repo_context(git_repo: Path, tmp_path: Path) -> RepoContext:
    """Context for commands operating on git_repo."""
    home = tmp_path / "home"
    home.mkdir()
    return RepoContext(
        working_directory=git_repo,
        home_directory=home,
        org_repo="PROLE-ISLAND/.github",
        credential_provider=lambda: "test-token",
    )


@pytest.fixture
def rules_document_with_marker() -> Callable[[str, str], str]:
    """Builds a rulebook with a project section and an organization section."""

    def _build(project_section: str, org_section: str) -> str:
        return f"{project_section}{ORG_SECTION_MARKER}\n\n{org_section}"

    return _build
