"""Initializes repository metadata from organization templates."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import structlog

from prole_cli.claude.config import build_project_settings
from prole_cli.configuration.models import ProjectTemplate, RepoContext
from prole_cli.github.abc import TemplateSourceBase
from prole_cli.synchronize.models import TemplateBundle
from prole_cli.synchronize.rules_document import build_local_rules_document, build_rules_document
from prole_cli.utils.constants import (
    CLAUDE_SETTINGS_PATH,
    DEPENDABOT_PATH,
    ISSUE_TEMPLATE_DIR,
    PULL_REQUEST_TEMPLATE_PATH,
    RULES_DOCUMENT_FILENAME,
    WORKFLOWS_DIR,
)
from prole_cli.utils.helpers import dump_json, write_file_if_not_exists
from prole_cli.utils.templates import render_builtin_template
from prole_cli.utils.yaml import dump_yaml_to_string

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TEMPLATE_WORKFLOWS: dict[ProjectTemplate, list[str]] = {
    ProjectTemplate.NEXTJS: ["ci.yml", "pr-check.yml"],
    ProjectTemplate.STORYBLOK: ["ci.yml", "pr-check.yml"],
    ProjectTemplate.LIBRARY: ["ci.yml", "pr-check.yml"],
}

WORKFLOW_DESCRIPTIONS: dict[str, str] = {
    "ci.yml": "CI (lint, type check, test, build)",
    "pr-check.yml": "Pull request convention check",
    "v0-generate.yml": "v0 UI generation (label triggered)",
}

NODE_VERSION = "20"


@dataclass(frozen=True)
class InitOptions:
    """Options for the init command."""

    template: ProjectTemplate = ProjectTemplate.NEXTJS
    workflows: str | None = None
    all_workflows: bool = False
    force: bool = False


@dataclass
class ScaffoldResult:
    """Files written and skipped by init."""

    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    selected_workflows: list[str] = field(default_factory=list)
    unknown_workflows: list[str] = field(default_factory=list)
    used_local_templates: bool = False


def normalize_workflow_name(name: str) -> str:
    """Append the .yml extension when it is missing."""
    return name if name.endswith(".yml") else f"{name}.yml"


def determine_workflows(
    available_workflows: Mapping[str, str],
    template: ProjectTemplate,
    workflows: str | None = None,
    all_workflows: bool = False,
) -> tuple[list[str], list[str]]:
    """Select the workflow files to install.

    Returns the selected filenames and the requested names that are not
    available in the organization templates.
    """
    if all_workflows:
        return list(available_workflows), []

    if workflows:
        selected: list[str] = []
        unknown: list[str] = []
        for requested in (name.strip() for name in workflows.split(",")):
            if not requested:
                continue
            filename = normalize_workflow_name(requested)
            if filename in available_workflows:
                selected.append(filename)
            else:
                unknown.append(requested)
        return selected, unknown

    return [name for name in TEMPLATE_WORKFLOWS[template] if name in available_workflows], []


def build_dependabot_config() -> str:
    """Dependabot configuration grouping all npm updates weekly."""
    return dump_yaml_to_string(
        {
            "version": 2,
            "updates": [
                {
                    "package-ecosystem": "npm",
                    "directory": "/",
                    "schedule": {"interval": "weekly"},
                    "groups": {"dependencies": {"patterns": ["*"]}},
                }
            ],
        }
    )


def _write(working_directory: Path, relative_path: str, content: str, force: bool, result: ScaffoldResult) -> None:
    if write_file_if_not_exists(working_directory / relative_path, content, force):
        logger.debug("Created file", path=relative_path)
        result.written.append(relative_path)
    else:
        logger.debug("Skipped existing file", path=relative_path)
        result.skipped.append(relative_path)


def scaffold_repository(working_directory: Path, bundle: TemplateBundle, options: InitOptions) -> ScaffoldResult:
    """Write the organization templates into a repository.

    Existing files are kept unless options.force is set.
    """
    result = ScaffoldResult()
    result.selected_workflows, result.unknown_workflows = determine_workflows(
        bundle.workflows, options.template, options.workflows, options.all_workflows
    )

    for filename, content in bundle.issue_templates.items():
        _write(working_directory, f"{ISSUE_TEMPLATE_DIR}/{filename}", content, options.force, result)

    if bundle.pull_request_template is not None:
        _write(working_directory, PULL_REQUEST_TEMPLATE_PATH, bundle.pull_request_template, options.force, result)

    for filename in result.selected_workflows:
        _write(working_directory, f"{WORKFLOWS_DIR}/{filename}", bundle.workflows[filename], options.force, result)

    # Dependabot is repository specific and always generated locally.
    _write(working_directory, DEPENDABOT_PATH, build_dependabot_config(), options.force, result)

    if bundle.rules_document is not None:
        rules_document = build_rules_document(bundle.rules_document, options.template)
    else:
        rules_document = build_local_rules_document(options.template)
    _write(working_directory, RULES_DOCUMENT_FILENAME, rules_document, options.force, result)

    _write(working_directory, CLAUDE_SETTINGS_PATH, dump_json(build_project_settings()), options.force, result)
    return result


def scaffold_local_defaults(working_directory: Path, options: InitOptions) -> ScaffoldResult:
    """Write the built-in minimal templates used when the organization templates are unreachable."""
    result = ScaffoldResult(used_local_templates=True)
    _write(working_directory, f"{WORKFLOWS_DIR}/ci.yml", render_builtin_template("ci.yml.j2", node_version=NODE_VERSION), options.force, result)
    _write(working_directory, RULES_DOCUMENT_FILENAME, build_local_rules_document(options.template), options.force, result)
    _write(working_directory, CLAUDE_SETTINGS_PATH, dump_json(build_project_settings()), options.force, result)
    return result


async def run_init_workflow(context: RepoContext, template_source: TemplateSourceBase, options: InitOptions) -> ScaffoldResult:
    """Run the init workflow, falling back to built-in templates when nothing could be fetched."""
    bundle = await template_source.fetch()
    if bundle.is_empty:
        logger.warning("No organization templates available; using built-in templates", repo=template_source.repo)
        return scaffold_local_defaults(context.working_directory, options)

    result = scaffold_repository(context.working_directory, bundle, options)
    logger.info(
        "Initialized repository",
        template=options.template.value,
        written=len(result.written),
        skipped=len(result.skipped),
        workflows=result.selected_workflows,
    )
    return result
