"""Shared constants used across the application."""

# Rules Document Constants
# ------------------------

RULES_DOCUMENT_FILENAME = "CLAUDE.md"
"""Name of the project rulebook at the repository root."""

ORG_SECTION_MARKER = "# 組織共通ルール（PROLE-ISLAND/.github より）"
"""Heading that separates project-owned from organization-owned rules.

Everything after the first occurrence is replaced on every sync. The literal
must stay byte-identical with documents written by earlier releases.
"""

ORG_SYNC_PREFIX_LENGTH = 100
"""Number of leading characters of the remote rules used to detect drift."""

# Local Repository Layout
# -----------------------

GITHUB_DIR = ".github"
ISSUE_TEMPLATE_DIR = f"{GITHUB_DIR}/ISSUE_TEMPLATE"
PULL_REQUEST_TEMPLATE_PATH = f"{GITHUB_DIR}/PULL_REQUEST_TEMPLATE.md"
WORKFLOWS_DIR = f"{GITHUB_DIR}/workflows"
DEPENDABOT_PATH = f"{GITHUB_DIR}/dependabot.yml"

CLAUDE_DIR = ".claude"
CLAUDE_SETTINGS_PATH = f"{CLAUDE_DIR}/settings.json"
CLAUDE_HOOKS_PATH = f"{CLAUDE_DIR}/hooks.json"
CLAUDE_LOCAL_SETTINGS_FILENAME = "settings.local.json"

# Organization Template Repository Layout
# ---------------------------------------

REMOTE_RULES_DOCUMENT_PATH = "CLAUDE.md"
REMOTE_ISSUE_TEMPLATE_DIR = "ISSUE_TEMPLATE"
REMOTE_PULL_REQUEST_TEMPLATE_PATH = "PULL_REQUEST_TEMPLATE.md"
REMOTE_WORKFLOW_TEMPLATE_DIR = "workflow-templates"
REMOTE_V0_TEMPLATE_DIR = "v0-templates"
REMOTE_HOOKS_DIR = "claude-code"

ISSUE_TEMPLATE_EXTENSIONS = (".yml", ".yaml")
WORKFLOW_EXTENSIONS = (".yml",)

# Issue Tracker Constants
# -----------------------

READY_TO_DEVELOP_LABEL = "ready-to-develop"
ISSUE_LIST_LIMIT = 20
DOD_LEVELS = ("Bronze", "Silver", "Gold")
