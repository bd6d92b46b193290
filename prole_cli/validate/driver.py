"""Runs the repository compliance checks."""

import structlog

from prole_cli.configuration.models import RepoContext
from prole_cli.github.abc import TemplateSourceBase
from prole_cli.validate.checks import (
    check_claude_settings,
    check_github_structure,
    check_org_sync,
    check_rules_document,
    check_workflows,
)
from prole_cli.validate.models import ValidationReport, ValidationResult, ValidationStatus

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_validation(context: RepoContext, template_source: TemplateSourceBase) -> ValidationReport:
    """Run every check against the working directory, in a fixed order.

    Raises NotAGitRepositoryError if the working directory is not a git repository.
    """
    context.require_git_repository()
    working_directory = context.working_directory

    results: list[ValidationResult] = [
        check_rules_document(working_directory),
        check_claude_settings(working_directory),
        *check_github_structure(working_directory),
        *check_workflows(working_directory),
        await check_org_sync(working_directory, template_source),
    ]
    report = ValidationReport(results=results)
    logger.info(
        "Validated repository",
        working_directory=str(working_directory),
        passed=report.count(ValidationStatus.PASS),
        warned=report.count(ValidationStatus.WARN),
        failed=report.count(ValidationStatus.FAIL),
        score=report.score,
    )
    return report
