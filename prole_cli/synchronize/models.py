"""Internal data models for template synchronization."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict


class SyncDecision(str, Enum):
    """Enum for sync decisions."""

    CREATE = "create"
    UPDATE = "update"
    SKIP = "skip"


class TemplateBundle(BaseModel):
    """Snapshot of the organization artifacts fetched in one pass.

    Absent artifacts are None (single files) or missing keys (directories).
    """

    model_config = ConfigDict(frozen=True)

    rules_document: str | None = None
    issue_templates: dict[str, str] = {}
    pull_request_template: str | None = None
    workflows: dict[str, str] = {}

    @property
    def is_empty(self) -> bool:
        """True when nothing could be fetched, e.g. offline or unauthenticated."""
        return (
            self.rules_document is None
            and not self.issue_templates
            and self.pull_request_template is None
            and not self.workflows
        )


@dataclass(frozen=True)
class SyncOptions:
    """Options for a synchronization pass."""

    dry_run: bool = False
    # Accepted for compatibility. Differing files are overwritten either way
    # and marker-less rules documents are never touched.
    force: bool = False


@dataclass(frozen=True)
class SyncChange:
    """The decision made for one target file."""

    file: str
    decision: SyncDecision
