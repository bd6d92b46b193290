"""Unit tests for the rulebook merge logic."""

from pathlib import Path
from typing import Callable

import pytest

from prole_cli.configuration.models import ProjectTemplate
from prole_cli.synchronize.models import SyncDecision, SyncOptions
from prole_cli.synchronize.rules_document import (
    build_local_rules_document,
    build_rules_document,
    has_org_section,
    plan_rules_document_sync,
    replace_org_section,
    sync_rules_document,
)
from prole_cli.utils.constants import ORG_SECTION_MARKER


def test_build_rules_document_layout(org_rules: str) -> None:
    """The project boilerplate comes first, then the marker, then the organization rules."""
    content = build_rules_document(org_rules)
    project_section, org_section = content.split(ORG_SECTION_MARKER, 1)
    assert "<!-- Edit this section to fit the project -->" in project_section
    assert "- Next.js 15+ (App Router)\n- TypeScript\n" in project_section
    assert org_section == f"\n\n{org_rules}"


@pytest.mark.parametrize(
    "template,expected,unexpected",
    [
        (ProjectTemplate.NEXTJS, "- shadcn/ui", "Storyblok"),
        (ProjectTemplate.STORYBLOK, "- Storyblok CMS", "Vitest"),
        (ProjectTemplate.LIBRARY, "- Vitest (testing)", "Next.js"),
    ],
)
def test_build_rules_document_tech_stack(org_rules: str, template: ProjectTemplate, expected: str, unexpected: str) -> None:
    """The tech stack list depends on the project template."""
    content = build_rules_document(org_rules, template)
    assert expected in content
    assert unexpected not in content.split(ORG_SECTION_MARKER, 1)[0]


def test_build_local_rules_document_has_no_marker() -> None:
    """The offline rulebook has no organization section to sync."""
    content = build_local_rules_document(ProjectTemplate.LIBRARY)
    assert not has_org_section(content)
    assert "- tsup (build)" in content
    assert "| Gold | 95%+ |" in content


def test_replace_org_section_keeps_project_prefix_byte_for_byte() -> None:
    """Everything before the marker is preserved exactly."""
    project_section = "# My project\n\nCustom rules  \n\n---\n\n"
    current = f"{project_section}{ORG_SECTION_MARKER}\n\nold rules\n"
    assert replace_org_section(current, "new rules\n") == f"{project_section}{ORG_SECTION_MARKER}\n\nnew rules\n"


def test_replace_org_section_splits_at_first_marker() -> None:
    """Only the first marker separates the sections; later copies belong to the organization section."""
    current = f"prefix\n{ORG_SECTION_MARKER}\n\nold\n{ORG_SECTION_MARKER}\nolder\n"
    assert replace_org_section(current, "new") == f"prefix\n{ORG_SECTION_MARKER}\n\nnew"


def test_plan_creates_missing_rules_document(tmp_path: Path, org_rules: str) -> None:
    """A missing rulebook is created from the project boilerplate."""
    decision, content = plan_rules_document_sync(tmp_path / "CLAUDE.md", org_rules)
    assert decision is SyncDecision.CREATE
    assert content == build_rules_document(org_rules)


def test_plan_skips_rules_document_without_marker(tmp_path: Path, org_rules: str) -> None:
    """A rulebook without the marker is fully project-owned."""
    target = tmp_path / "CLAUDE.md"
    target.write_text("# Hand-written rules\n")
    assert plan_rules_document_sync(target, org_rules) == (SyncDecision.SKIP, None)


def test_plan_updates_stale_org_section(
    tmp_path: Path, org_rules: str, rules_document_with_marker: Callable[[str, str], str]
) -> None:
    """A stale organization section is replaced and the project section kept."""
    target = tmp_path / "CLAUDE.md"
    target.write_text(rules_document_with_marker("# Mine\n\n", "outdated rules\n"))
    decision, content = plan_rules_document_sync(target, org_rules)
    assert decision is SyncDecision.UPDATE
    assert content == rules_document_with_marker("# Mine\n\n", org_rules)


def test_plan_skips_current_org_section_ignoring_trailing_whitespace(
    tmp_path: Path, org_rules: str, rules_document_with_marker: Callable[[str, str], str]
) -> None:
    """Trailing whitespace differences do not trigger an update."""
    target = tmp_path / "CLAUDE.md"
    target.write_text(rules_document_with_marker("# Mine\n\n", org_rules) + "\n\n")
    assert plan_rules_document_sync(target, org_rules) == (SyncDecision.SKIP, None)


@pytest.mark.parametrize("force", [False, True])
def test_sync_rules_document_never_touches_marker_less_file(tmp_path: Path, org_rules: str, force: bool) -> None:
    """Force does not make a marker-less rulebook writable."""
    target = tmp_path / "CLAUDE.md"
    target.write_text("# Hand-written rules\n")
    assert sync_rules_document(target, org_rules, SyncOptions(force=force)) is SyncDecision.SKIP
    assert target.read_text() == "# Hand-written rules\n"


def test_sync_rules_document_dry_run(tmp_path: Path, org_rules: str, rules_document_with_marker: Callable[[str, str], str]) -> None:
    """Dry-run reports an update without writing it."""
    target = tmp_path / "CLAUDE.md"
    original = rules_document_with_marker("# Mine\n\n", "outdated\n")
    target.write_text(original)
    assert sync_rules_document(target, org_rules, SyncOptions(dry_run=True)) is SyncDecision.UPDATE
    assert target.read_text() == original


def test_sync_rules_document_is_idempotent(tmp_path: Path, org_rules: str) -> None:
    """A created rulebook is skipped on the next sync."""
    target = tmp_path / "CLAUDE.md"
    assert sync_rules_document(target, org_rules, SyncOptions()) is SyncDecision.CREATE
    assert sync_rules_document(target, org_rules, SyncOptions()) is SyncDecision.SKIP
