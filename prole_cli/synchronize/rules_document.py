"""Contains synchronization logic for the project rulebook.

The rulebook mixes ownership. Text before ORG_SECTION_MARKER belongs to the
project and is never rewritten once the file exists; text after it belongs to
the organization and is replaced wholesale on every sync. A rulebook without
the marker is treated as fully project-owned and left alone.
"""

from pathlib import Path

import structlog

from prole_cli.configuration.models import ProjectTemplate
from prole_cli.synchronize.models import SyncDecision, SyncOptions
from prole_cli.utils.constants import ORG_SECTION_MARKER
from prole_cli.utils.helpers import read_text_file, write_text_file
from prole_cli.utils.templates import render_builtin_template

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TECH_STACKS: dict[ProjectTemplate, list[str]] = {
    ProjectTemplate.NEXTJS: ["Next.js 15+ (App Router)", "TypeScript", "Tailwind CSS v4", "shadcn/ui"],
    ProjectTemplate.STORYBLOK: ["Next.js 15+ (App Router)", "TypeScript", "Tailwind CSS v4", "shadcn/ui", "Storyblok CMS"],
    ProjectTemplate.LIBRARY: ["TypeScript", "tsup (build)", "Vitest (testing)"],
}


def build_rules_document(org_rules: str, project_template: ProjectTemplate = ProjectTemplate.NEXTJS) -> str:
    """Build a new rulebook: the project boilerplate, the marker, then the organization rules."""
    return render_builtin_template(
        "rules_document.md.j2",
        tech_stack=TECH_STACKS[project_template],
        marker=ORG_SECTION_MARKER,
        org_rules=org_rules,
    )


def build_local_rules_document(project_template: ProjectTemplate = ProjectTemplate.NEXTJS) -> str:
    """Build the offline rulebook used when organization templates are unavailable."""
    return render_builtin_template("local_rules_document.md.j2", tech_stack=TECH_STACKS[project_template])


def has_org_section(content: str) -> bool:
    """Return True if the rulebook contains the organization section marker."""
    return ORG_SECTION_MARKER in content


def replace_org_section(current_content: str, org_rules: str) -> str:
    """Replace everything after the first marker with the organization rules."""
    project_section = current_content.split(ORG_SECTION_MARKER, 1)[0]
    return f"{project_section}{ORG_SECTION_MARKER}\n\n{org_rules}"


def plan_rules_document_sync(
    target: Path,
    org_rules: str,
    project_template: ProjectTemplate = ProjectTemplate.NEXTJS,
) -> tuple[SyncDecision, str | None]:
    """Decide what to do with the rulebook and compute its new content.

    Returns the decision and the content to write, which is None for SKIP.
    """
    if not target.exists():
        return SyncDecision.CREATE, build_rules_document(org_rules, project_template)

    current_content = read_text_file(target)
    if not has_org_section(current_content):
        logger.info("Rules document has no organization section; preserving it", path=str(target))
        return SyncDecision.SKIP, None

    new_content = replace_org_section(current_content, org_rules)
    if current_content.strip() == new_content.strip():
        return SyncDecision.SKIP, None
    return SyncDecision.UPDATE, new_content


def sync_rules_document(
    target: Path,
    org_rules: str,
    options: SyncOptions,
    project_template: ProjectTemplate = ProjectTemplate.NEXTJS,
) -> SyncDecision:
    """Bring the organization section of the rulebook up to date."""
    decision, new_content = plan_rules_document_sync(target, org_rules, project_template)
    if new_content is not None and not options.dry_run:
        write_text_file(target, new_content)
        logger.debug("Wrote rules document", path=str(target), decision=decision.value)
    return decision
