"""Contains synchronization logic for files wholly owned by the organization."""

from pathlib import Path

import structlog

from prole_cli.synchronize.models import SyncDecision, SyncOptions
from prole_cli.utils.helpers import read_text_file, write_text_file

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def decide_file_sync_action(target: Path, desired_content: str) -> SyncDecision:
    """Compare a local file with the organization's version of it.

    Content is compared with leading and trailing whitespace removed.
    """
    if not target.exists():
        return SyncDecision.CREATE
    current_content = read_text_file(target)
    if current_content.strip() == desired_content.strip():
        return SyncDecision.SKIP
    return SyncDecision.UPDATE


def sync_file(target: Path, desired_content: str, options: SyncOptions) -> SyncDecision:
    """Create or overwrite a file so that it matches the organization's version."""
    decision = decide_file_sync_action(target, desired_content)
    if decision is not SyncDecision.SKIP and not options.dry_run:
        write_text_file(target, desired_content)
        logger.debug("Wrote file", path=str(target), decision=decision.value)
    return decision
