"""Pydantic models for data returned by the gh CLI."""

from pydantic import BaseModel

from prole_cli.utils.constants import DOD_LEVELS


class IssueLabel(BaseModel):
    """Pydantic model for a GitHub issue label."""

    name: str


class IssueAssignee(BaseModel):
    """Pydantic model for a GitHub issue assignee."""

    login: str


class IssueSummary(BaseModel):
    """Pydantic model for an entry of `gh issue list --json`."""

    number: int
    title: str
    labels: list[IssueLabel] = []
    assignees: list[IssueAssignee] = []

    @property
    def priority_label(self) -> str | None:
        """First label naming a priority (P0-P3)."""
        return next((label.name for label in self.labels if label.name.startswith("P")), None)

    @property
    def dod_label(self) -> str | None:
        """First label naming a Definition of Done level."""
        return next((label.name for label in self.labels if any(level in label.name for level in DOD_LEVELS)), None)

    @property
    def first_assignee(self) -> str | None:
        """Login of the first assignee."""
        return self.assignees[0].login if self.assignees else None
