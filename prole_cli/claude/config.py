"""Fixed-shape AI assistant configuration documents."""

from typing import Any

BASE_ALLOWED_TOOLS = [
    "Bash(git:*)",
    "Bash(npm:*)",
    "Bash(npx:*)",
    "Bash(gh:*)",
    "Bash(prole:*)",
    "Read",
    "Write",
    "Edit",
    "Glob",
    "Grep",
]

GATE_HOOK_COMMAND = "python3 ~/.claude/hooks/gate.py"
GATE_HOOK_TIMEOUT_MS = 10000


def build_project_settings() -> dict[str, Any]:
    """Settings written by `init`, including the default MCP server."""
    return {
        "permissions": {"allow": list(BASE_ALLOWED_TOOLS)},
        "env": {"V0_API_KEY": "${V0_API_KEY}"},
        "mcpServers": {
            "filesystem": {
                "command": "npx",
                "args": ["-y", "@anthropic/mcp-filesystem"],
            }
        },
    }


def build_setup_settings() -> dict[str, Any]:
    """Settings written by `claude --setup`."""
    return {
        "permissions": {"allow": [*BASE_ALLOWED_TOOLS, "WebFetch", "WebSearch"]},
        "env": {"V0_API_KEY": "${V0_API_KEY}"},
        "model": "sonnet",
    }


def build_hooks_config() -> dict[str, Any]:
    """Project hooks written by `claude --setup`."""
    return {
        "preToolCall": [],
        "postToolCall": [],
        "sessionStart": [
            {
                "type": "command",
                "command": "echo '📋 CLAUDE.md loaded' && head -20 CLAUDE.md 2>/dev/null || true",
            }
        ],
    }


def add_gate_hook(settings: dict[str, Any]) -> dict[str, Any]:
    """Register the Bash gate as a PreToolUse hook unless PreToolUse hooks are already configured."""
    hooks = settings.setdefault("hooks", {})
    if not hooks.get("PreToolUse"):
        hooks["PreToolUse"] = [
            {
                "matcher": "Bash",
                "hooks": [
                    {
                        "type": "command",
                        "command": GATE_HOOK_COMMAND,
                        "timeout": GATE_HOOK_TIMEOUT_MS,
                    }
                ],
            }
        ]
    return settings
