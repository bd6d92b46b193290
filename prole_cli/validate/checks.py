"""Individual repository compliance checks.

Each check inspects the working directory on its own and never raises for
problems it finds; they are reported as warn or fail results instead.
"""

import json
from pathlib import Path

import structlog

from prole_cli.configuration.exceptions import TemplateFetchError
from prole_cli.github.abc import TemplateSourceBase
from prole_cli.synchronize.rules_document import has_org_section
from prole_cli.utils.constants import (
    CLAUDE_SETTINGS_PATH,
    DEPENDABOT_PATH,
    GITHUB_DIR,
    ISSUE_TEMPLATE_DIR,
    ISSUE_TEMPLATE_EXTENSIONS,
    ORG_SYNC_PREFIX_LENGTH,
    PULL_REQUEST_TEMPLATE_PATH,
    REMOTE_RULES_DOCUMENT_PATH,
    RULES_DOCUMENT_FILENAME,
    WORKFLOW_EXTENSIONS,
    WORKFLOWS_DIR,
)
from prole_cli.utils.helpers import read_text_file
from prole_cli.validate.models import ValidationResult, ValidationStatus

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

ORG_SYNC_CHECK_NAME = "Organization template sync"
CI_WORKFLOW_CHECK_NAME = "CI workflow"


def _list_files_with_extensions(directory: Path, extensions: tuple[str, ...]) -> list[str]:
    return sorted(entry.name for entry in directory.iterdir() if entry.name.endswith(extensions))


def check_rules_document(working_directory: Path) -> ValidationResult:
    """Check that the rulebook exists and carries the organization section."""
    path = working_directory / RULES_DOCUMENT_FILENAME
    if not path.exists():
        return ValidationResult(name=RULES_DOCUMENT_FILENAME, status=ValidationStatus.FAIL, message="File does not exist", fixable=True)

    if not has_org_section(read_text_file(path)):
        return ValidationResult(
            name=RULES_DOCUMENT_FILENAME,
            status=ValidationStatus.WARN,
            message="Organization rules section is missing",
            fixable=True,
        )

    return ValidationResult(name=RULES_DOCUMENT_FILENAME, status=ValidationStatus.PASS, message="Organization rules section present")


def check_claude_settings(working_directory: Path) -> ValidationResult:
    """Check that the assistant settings file parses and grants permissions."""
    path = working_directory / CLAUDE_SETTINGS_PATH
    if not path.exists():
        return ValidationResult(name=CLAUDE_SETTINGS_PATH, status=ValidationStatus.FAIL, message="File does not exist", fixable=True)

    try:
        settings = json.loads(read_text_file(path))
    except (json.JSONDecodeError, OSError) as exc:
        logger.debug("Failed to parse assistant settings", path=str(path), error=str(exc))
        message = "Cannot be read" if isinstance(exc, OSError) else "JSON parse error"
        return ValidationResult(name=CLAUDE_SETTINGS_PATH, status=ValidationStatus.FAIL, message=message, fixable=True)

    permissions = settings.get("permissions") if isinstance(settings, dict) else None
    if not isinstance(permissions, dict) or permissions.get("allow") is None:
        return ValidationResult(
            name=CLAUDE_SETTINGS_PATH,
            status=ValidationStatus.WARN,
            message="permissions.allow is not set",
            fixable=True,
        )

    return ValidationResult(name=CLAUDE_SETTINGS_PATH, status=ValidationStatus.PASS, message="Settings OK")


def check_github_structure(working_directory: Path) -> list[ValidationResult]:
    """Check the .github directory, issue templates, PR template and dependabot config."""
    github_dir = working_directory / GITHUB_DIR
    if not github_dir.is_dir():
        return [ValidationResult(name=f"{GITHUB_DIR}/", status=ValidationStatus.FAIL, message="Directory does not exist", fixable=True)]

    results: list[ValidationResult] = []

    issue_template_dir = working_directory / ISSUE_TEMPLATE_DIR
    issue_template_name = f"{ISSUE_TEMPLATE_DIR}/"
    if not issue_template_dir.is_dir():
        results.append(
            ValidationResult(name=issue_template_name, status=ValidationStatus.WARN, message="No issue templates", fixable=True)
        )
    else:
        templates = _list_files_with_extensions(issue_template_dir, ISSUE_TEMPLATE_EXTENSIONS)
        if not templates:
            results.append(
                ValidationResult(name=issue_template_name, status=ValidationStatus.WARN, message="No template files", fixable=True)
            )
        else:
            results.append(
                ValidationResult(name=issue_template_name, status=ValidationStatus.PASS, message=f"{len(templates)} template(s)")
            )

    if not (working_directory / PULL_REQUEST_TEMPLATE_PATH).exists():
        results.append(
            ValidationResult(
                name=PULL_REQUEST_TEMPLATE_PATH, status=ValidationStatus.WARN, message="No pull request template", fixable=True
            )
        )
    else:
        results.append(ValidationResult(name=PULL_REQUEST_TEMPLATE_PATH, status=ValidationStatus.PASS, message="OK"))

    if not (working_directory / DEPENDABOT_PATH).exists():
        results.append(
            ValidationResult(name=DEPENDABOT_PATH, status=ValidationStatus.WARN, message="Dependabot is not configured", fixable=True)
        )
    else:
        results.append(ValidationResult(name=DEPENDABOT_PATH, status=ValidationStatus.PASS, message="OK"))

    return results


def check_workflows(working_directory: Path) -> list[ValidationResult]:
    """Check that at least one workflow exists and one of them is named for CI."""
    workflows_dir = working_directory / WORKFLOWS_DIR
    if not workflows_dir.is_dir():
        return [ValidationResult(name=f"{WORKFLOWS_DIR}/", status=ValidationStatus.FAIL, message="No workflows directory", fixable=True)]

    workflows = _list_files_with_extensions(workflows_dir, WORKFLOW_EXTENSIONS)
    if not workflows:
        return [ValidationResult(name=f"{WORKFLOWS_DIR}/", status=ValidationStatus.WARN, message="No workflows", fixable=True)]

    if any("ci" in workflow for workflow in workflows):
        return [ValidationResult(name=CI_WORKFLOW_CHECK_NAME, status=ValidationStatus.PASS, message="CI configured")]
    return [ValidationResult(name=CI_WORKFLOW_CHECK_NAME, status=ValidationStatus.WARN, message="No CI workflow", fixable=True)]


async def check_org_sync(working_directory: Path, template_source: TemplateSourceBase) -> ValidationResult:
    """Check that the local rulebook contains the start of the current organization rules.

    An unreachable template repository is reported as a warning, not a failure.
    """
    try:
        org_rules = await template_source.get_file_content(REMOTE_RULES_DOCUMENT_PATH)
    except TemplateFetchError as exc:
        logger.info("Organization rules unavailable; skipping comparison", reason=exc.reason)
        return ValidationResult(
            name=ORG_SYNC_CHECK_NAME,
            status=ValidationStatus.WARN,
            message="Could not fetch organization rules (offline or not authenticated)",
        )

    path = working_directory / RULES_DOCUMENT_FILENAME
    if not path.exists():
        return ValidationResult(
            name=ORG_SYNC_CHECK_NAME,
            status=ValidationStatus.FAIL,
            message=f"Cannot compare without {RULES_DOCUMENT_FILENAME}",
            fixable=True,
        )

    local_content = read_text_file(path)
    if org_rules.strip()[:ORG_SYNC_PREFIX_LENGTH] in local_content:
        return ValidationResult(name=ORG_SYNC_CHECK_NAME, status=ValidationStatus.PASS, message="In sync with the latest organization rules")
    return ValidationResult(
        name=ORG_SYNC_CHECK_NAME,
        status=ValidationStatus.WARN,
        message="Differs from the organization rules",
        fixable=True,
    )
