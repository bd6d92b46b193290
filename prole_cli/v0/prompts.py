"""Prompt templates for UI generation."""

import re
from dataclasses import dataclass

import structlog

from prole_cli.configuration.exceptions import TemplateFetchError
from prole_cli.github.abc import TemplateSourceBase
from prole_cli.utils.constants import REMOTE_V0_TEMPLATE_DIR

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PromptTemplateInfo:
    """Description of a prompt template for listings."""

    name: str
    description: str
    example: str


BUILTIN_TEMPLATES: dict[str, PromptTemplateInfo] = {
    info.name: info
    for info in (
        PromptTemplateInfo("base", "General-purpose component", "Profile card"),
        PromptTemplateInfo("form", "Input form", "User registration form"),
        PromptTemplateInfo("table", "Data table", "User list table"),
        PromptTemplateInfo("card", "Card component", "Dashboard card"),
        PromptTemplateInfo("dashboard", "Dashboard", "Admin dashboard"),
        PromptTemplateInfo("empty-state", "Empty state", "No search results"),
    )
}

TECHNICAL_REQUIREMENTS = """Technical requirements:
- Use shadcn/ui components
- Tailwind CSS
- Dark mode support (dark: classes)
- Japanese UI text
- TypeScript"""

TEMPLATE_BLOCK_PATTERN = re.compile(r"```\n([\s\S]*?)```")
# Placeholders used by the organization's prompt templates.
FEATURE_LIST_PATTERN = re.compile(r"- \{機能1\}\n- \{機能2\}\n- \{機能3\}")
LAYOUT_LIST_PATTERN = re.compile(r"- \{レイアウト\}\n- \{配色（CSS変数使用）\}")
PLACEHOLDER_PATTERN = re.compile(r"\{[^}]+\}")
QUOTE_PATTERN = re.compile(r"「|」")


def merge_prompt_with_template(prompt: str, template_content: str) -> str:
    """Fill the first code block of a prompt template with the user's prompt.

    Templates without a code block fall back to appending the standard
    technical requirements.
    """
    match = TEMPLATE_BLOCK_PATTERN.search(template_content)
    if match is None:
        return f"{prompt}\n\n{TECHNICAL_REQUIREMENTS}"

    merged = FEATURE_LIST_PATTERN.sub(lambda _: f"- Main features of {prompt}", match.group(1))
    merged = LAYOUT_LIST_PATTERN.sub(lambda _: "- Modern layout\n- Colors from CSS variables", merged)
    merged = PLACEHOLDER_PATTERN.sub(lambda _: prompt, merged)
    return QUOTE_PATTERN.sub("", merged)


async def fetch_prompt_template(template_source: TemplateSourceBase, name: str) -> str | None:
    """Fetch a named prompt template from the organization repository."""
    return await template_source.fetch_file(f"{REMOTE_V0_TEMPLATE_DIR}/{name}.md")


async def list_prompt_templates(template_source: TemplateSourceBase) -> tuple[list[PromptTemplateInfo], bool]:
    """List available prompt templates.

    Returns the templates and whether they came from the organization
    repository (True) or the built-in list (False).
    """
    try:
        filenames = await template_source.list_directory(REMOTE_V0_TEMPLATE_DIR)
    except TemplateFetchError as exc:
        logger.info("Prompt templates unavailable; using built-in list", reason=exc.reason)
        return list(BUILTIN_TEMPLATES.values()), False

    names = [filename.removesuffix(".md") for filename in filenames if filename.endswith(".md") and filename != "README.md"]
    if not names:
        return list(BUILTIN_TEMPLATES.values()), False
    return [BUILTIN_TEMPLATES.get(name, PromptTemplateInfo(name, "Custom template", "-")) for name in names], True
