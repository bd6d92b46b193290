"""Unit tests for synchronizing organization-owned files."""

from pathlib import Path

import pytest

from prole_cli.synchronize.files import decide_file_sync_action, sync_file
from prole_cli.synchronize.models import SyncDecision, SyncOptions


def test_decide_create_when_missing(tmp_path: Path) -> None:
    """A missing file is created."""
    assert decide_file_sync_action(tmp_path / "bug.yml", "name: Bug\n") is SyncDecision.CREATE


@pytest.mark.parametrize(
    "current,desired",
    [
        ("name: Bug\n", "name: Bug\n"),
        ("name: Bug", "name: Bug\n\n"),
        ("\n  name: Bug  \n", "name: Bug"),
    ],
)
def test_decide_skip_ignores_surrounding_whitespace(tmp_path: Path, current: str, desired: str) -> None:
    """Files equal after trimming are skipped."""
    target = tmp_path / "bug.yml"
    target.write_text(current)
    assert decide_file_sync_action(target, desired) is SyncDecision.SKIP


def test_decide_update_on_inner_difference(tmp_path: Path) -> None:
    """Any difference other than surrounding whitespace is an update."""
    target = tmp_path / "bug.yml"
    target.write_text("name: Bug\n")
    assert decide_file_sync_action(target, "name:  Bug\n") is SyncDecision.UPDATE


def test_sync_file_creates_parent_directories(tmp_path: Path) -> None:
    """Creating a file creates its parent directories."""
    target = tmp_path / ".github" / "ISSUE_TEMPLATE" / "bug.yml"
    assert sync_file(target, "name: Bug\n", SyncOptions()) is SyncDecision.CREATE
    assert target.read_text() == "name: Bug\n"


@pytest.mark.parametrize("force", [False, True])
def test_sync_file_overwrites_local_edits_regardless_of_force(tmp_path: Path, force: bool) -> None:
    """Organization-owned files are overwritten whenever they differ."""
    target = tmp_path / "ci.yml"
    target.write_text("name: local edit\n")
    assert sync_file(target, "name: CI\n", SyncOptions(force=force)) is SyncDecision.UPDATE
    assert target.read_text() == "name: CI\n"


def test_sync_file_dry_run_touches_nothing(tmp_path: Path) -> None:
    """Dry-run reports the decision without creating files or directories."""
    target = tmp_path / ".github" / "workflows" / "ci.yml"
    assert sync_file(target, "name: CI\n", SyncOptions(dry_run=True)) is SyncDecision.CREATE
    assert not (tmp_path / ".github").exists()


def test_sync_file_skip_leaves_file_untouched(tmp_path: Path) -> None:
    """A skipped file keeps its exact bytes, including trailing whitespace."""
    target = tmp_path / "ci.yml"
    target.write_text("name: CI\n\n\n")
    assert sync_file(target, "name: CI", SyncOptions()) is SyncDecision.SKIP
    assert target.read_text() == "name: CI\n\n\n"
