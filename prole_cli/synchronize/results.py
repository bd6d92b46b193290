"""Contains results of the sync workflow."""

from prole_cli.synchronize.models import SyncChange, SyncDecision


class SyncResult:
    """Contains the ordered decisions of one synchronization pass."""

    def __init__(self, changes: list[SyncChange], dry_run: bool = False, templates_available: bool = True) -> None:
        """Initialize the result with the decisions made for each file."""
        self.changes = changes
        self.dry_run = dry_run
        self.templates_available = templates_available

    def _with_decision(self, decision: SyncDecision) -> list[SyncChange]:
        return [change for change in self.changes if change.decision is decision]

    @property
    def created(self) -> list[SyncChange]:
        return self._with_decision(SyncDecision.CREATE)

    @property
    def updated(self) -> list[SyncChange]:
        return self._with_decision(SyncDecision.UPDATE)

    @property
    def skipped(self) -> list[SyncChange]:
        return self._with_decision(SyncDecision.SKIP)
