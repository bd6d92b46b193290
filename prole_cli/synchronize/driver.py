"""Orchestrates the synchronization of repository metadata."""

import time
from pathlib import Path

import structlog

from prole_cli.configuration.models import ProjectTemplate, RepoContext
from prole_cli.github.abc import TemplateSourceBase
from prole_cli.synchronize.files import sync_file
from prole_cli.synchronize.models import SyncChange, SyncOptions, TemplateBundle
from prole_cli.synchronize.results import SyncResult
from prole_cli.synchronize.rules_document import sync_rules_document
from prole_cli.utils.constants import ISSUE_TEMPLATE_DIR, PULL_REQUEST_TEMPLATE_PATH, RULES_DOCUMENT_FILENAME, WORKFLOWS_DIR

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def plan_and_apply(
    working_directory: Path,
    bundle: TemplateBundle,
    options: SyncOptions,
    project_template: ProjectTemplate = ProjectTemplate.NEXTJS,
) -> list[SyncChange]:
    """Decide, per bundled artifact, whether to create, update or skip the local copy.

    Files are written unless options.dry_run is set, in which case the
    filesystem is not touched at all. Decisions are reported in a fixed order:
    issue templates, the pull request template, workflows, then the rulebook.
    """
    changes: list[SyncChange] = []

    for filename, content in bundle.issue_templates.items():
        relative_path = f"{ISSUE_TEMPLATE_DIR}/{filename}"
        decision = sync_file(working_directory / relative_path, content, options)
        changes.append(SyncChange(relative_path, decision))

    if bundle.pull_request_template is not None:
        decision = sync_file(working_directory / PULL_REQUEST_TEMPLATE_PATH, bundle.pull_request_template, options)
        changes.append(SyncChange(PULL_REQUEST_TEMPLATE_PATH, decision))

    for filename, content in bundle.workflows.items():
        relative_path = f"{WORKFLOWS_DIR}/{filename}"
        decision = sync_file(working_directory / relative_path, content, options)
        changes.append(SyncChange(relative_path, decision))

    if bundle.rules_document is not None:
        decision = sync_rules_document(working_directory / RULES_DOCUMENT_FILENAME, bundle.rules_document, options, project_template)
        changes.append(SyncChange(RULES_DOCUMENT_FILENAME, decision))

    for change in changes:
        logger.debug("Sync decision", file=change.file, decision=change.decision.value, dry_run=options.dry_run)
    return changes


async def run_sync_workflow(context: RepoContext, template_source: TemplateSourceBase, options: SyncOptions) -> SyncResult:
    """Run the sync workflow: fetch organization templates and apply them to the working directory."""
    start_time = time.time()
    bundle = await template_source.fetch()
    changes = plan_and_apply(context.working_directory, bundle, options)
    logger.info(
        "Synchronized organization templates",
        working_directory=str(context.working_directory),
        dry_run=options.dry_run,
        change_count=len(changes),
        duration=round(time.time() - start_time, 2),
    )
    return SyncResult(changes, dry_run=options.dry_run, templates_available=not bundle.is_empty)
