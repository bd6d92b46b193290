"""Writes AI assistant configuration for the project and the user."""

import json
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from prole_cli.claude.config import add_gate_hook, build_hooks_config, build_setup_settings
from prole_cli.configuration.exceptions import TemplateFetchError
from prole_cli.configuration.models import RepoContext
from prole_cli.github.abc import TemplateSourceBase
from prole_cli.utils.constants import (
    CLAUDE_DIR,
    CLAUDE_HOOKS_PATH,
    CLAUDE_LOCAL_SETTINGS_FILENAME,
    CLAUDE_SETTINGS_PATH,
    REMOTE_HOOKS_DIR,
    RULES_DOCUMENT_FILENAME,
)
from prole_cli.utils.helpers import read_text_file, write_json_file, write_text_file

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class McpServer:
    """An MCP server that can be registered with the assistant."""

    description: str
    command: str


KNOWN_MCP_SERVERS: dict[str, McpServer] = {
    "filesystem": McpServer("File system access", "claude mcp add filesystem -- npx -y @anthropic/mcp-server-filesystem ."),
    "github": McpServer("GitHub API integration", "claude mcp add github -- npx -y @anthropic/mcp-server-github"),
    "postgres": McpServer("PostgreSQL connection", "claude mcp add postgres -- npx -y @anthropic/mcp-server-postgres $DATABASE_URL"),
}

# (path in the template repository, path under ~/.claude)
HOOK_FILES: list[tuple[str, str]] = [
    (f"{REMOTE_HOOKS_DIR}/hooks/gate.py", "hooks/gate.py"),
    (f"{REMOTE_HOOKS_DIR}/hooks/sync-guardrails.sh", "hooks/sync-guardrails.sh"),
    (f"{REMOTE_HOOKS_DIR}/cache/claude-guardrails.yaml", "cache/claude-guardrails.yaml"),
    (f"{REMOTE_HOOKS_DIR}/commands/req.md", "commands/req.md"),
    (f"{REMOTE_HOOKS_DIR}/commands/dev.md", "commands/dev.md"),
    (f"{REMOTE_HOOKS_DIR}/commands/issue.md", "commands/issue.md"),
]
EXECUTABLE_HOOK_FILES = {"hooks/sync-guardrails.sh"}


@dataclass
class ClaudeStatus:
    """Presence of the assistant configuration in a repository."""

    claude_dir: bool
    settings: bool
    hooks: bool
    rules_document: bool
    v0_api_key: bool


@dataclass
class HookInstallResult:
    """Outcome of installing the organization hooks."""

    installed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    settings_path: Path | None = None
    backup_path: Path | None = None


def get_claude_status(context: RepoContext) -> ClaudeStatus:
    """Report which assistant configuration files exist."""
    working_directory = context.working_directory
    return ClaudeStatus(
        claude_dir=(working_directory / CLAUDE_DIR).is_dir(),
        settings=(working_directory / CLAUDE_SETTINGS_PATH).exists(),
        hooks=(working_directory / CLAUDE_HOOKS_PATH).exists(),
        rules_document=(working_directory / RULES_DOCUMENT_FILENAME).exists(),
        v0_api_key=bool(context.v0_api_key),
    )


def setup_claude(context: RepoContext) -> list[str]:
    """Write the project settings and hooks, overwriting existing files."""
    written: list[str] = []
    for relative_path, data in ((CLAUDE_SETTINGS_PATH, build_setup_settings()), (CLAUDE_HOOKS_PATH, build_hooks_config())):
        write_json_file(context.working_directory / relative_path, data)
        written.append(relative_path)
    logger.info("Wrote assistant configuration", files=written)
    return written


def add_mcp_server(name: str) -> bool:
    """Register a known MCP server through the assistant's CLI.

    Returns False if the command could not be run, in which case the caller
    should ask the user to run it manually.
    """
    server = KNOWN_MCP_SERVERS[name]
    cmd = shlex.split(os.path.expandvars(server.command))
    logger.info("Registering MCP server", server=name, cmd=" ".join(cmd))
    try:
        subprocess.run(cmd, capture_output=True, text=True, check=True)
    except (subprocess.CalledProcessError, FileNotFoundError) as exc:
        logger.warning("Failed to register MCP server", server=name, error=str(exc))
        return False
    return True


def _load_local_settings(path: Path) -> tuple[dict, Path | None]:
    if not path.exists():
        return {}, None
    try:
        settings = json.loads(read_text_file(path))
    except json.JSONDecodeError as exc:
        logger.warning("Existing local settings are not valid JSON; starting over", path=str(path), error=str(exc))
        return {}, None
    if not isinstance(settings, dict):
        return {}, None
    backup_path = path.with_name(f"{path.name}.backup")
    shutil.copy(path, backup_path)
    return settings, backup_path


async def install_hooks(context: RepoContext, template_source: TemplateSourceBase) -> HookInstallResult:
    """Install the organization's assistant hooks and commands into ~/.claude.

    The caller must have verified that a GitHub credential is available.
    Files that cannot be fetched are skipped.
    """
    claude_home = context.home_directory / CLAUDE_DIR
    result = HookInstallResult()

    for remote_path, local_path in HOOK_FILES:
        destination = claude_home / local_path
        try:
            content = await template_source.get_file_content(remote_path)
        except TemplateFetchError as exc:
            logger.warning("Skipping hook file", path=remote_path, reason=exc.reason)
            result.skipped.append(destination.name)
            continue
        write_text_file(destination, content)
        if local_path in EXECUTABLE_HOOK_FILES:
            try:
                destination.chmod(destination.stat().st_mode | 0o111)
            except OSError as exc:
                logger.debug("Could not mark hook executable", path=str(destination), error=str(exc))
        result.installed.append(destination.name)

    settings_path = claude_home / CLAUDE_LOCAL_SETTINGS_FILENAME
    settings, backup_path = _load_local_settings(settings_path)
    write_json_file(settings_path, add_gate_hook(settings))
    result.settings_path = settings_path
    result.backup_path = backup_path
    logger.info("Installed assistant hooks", installed=result.installed, skipped=result.skipped, settings_path=str(settings_path))
    return result
