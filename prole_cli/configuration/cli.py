"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import subprocess
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from prole_cli import __version__
from prole_cli.claude.setup import KNOWN_MCP_SERVERS, add_mcp_server, get_claude_status, install_hooks, setup_claude
from prole_cli.configuration.env import get_settings
from prole_cli.configuration.exceptions import MissingCredentialError, NotAGitRepositoryError, V0ApiError
from prole_cli.configuration.logging_setup import configure_logging
from prole_cli.configuration.models import ProjectTemplate, RepoContext
from prole_cli.github.abc import IssueTrackerBase, TemplateSourceBase
from prole_cli.github.adapter import GitHubKitTemplateSource
from prole_cli.github.gh_cli import GhCliIssueTracker, build_credential_provider
from prole_cli.scaffold.init import WORKFLOW_DESCRIPTIONS, InitOptions, run_init_workflow
from prole_cli.synchronize.driver import run_sync_workflow
from prole_cli.synchronize.models import SyncOptions
from prole_cli.synchronize.results import SyncResult
from prole_cli.utils.helpers import write_text_file
from prole_cli.v0.client import V0Client
from prole_cli.v0.prompts import fetch_prompt_template, list_prompt_templates, merge_prompt_with_template
from prole_cli.validate.driver import run_validation
from prole_cli.validate.models import ValidationReport, ValidationStatus

load_dotenv()

typer_app = typer.Typer(
    help="PROLE-ISLAND development tools.",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)

PREVIEW_LINES = 20
RULE = "─" * 60

STATUS_STYLES: dict[ValidationStatus, tuple[str, str]] = {
    ValidationStatus.PASS: ("✅", typer.colors.GREEN),
    ValidationStatus.WARN: ("⚠️", typer.colors.YELLOW),
    ValidationStatus.FAIL: ("❌", typer.colors.RED),
}


def build_repo_context() -> RepoContext:
    """Build the command context from the environment and the current directory."""
    settings = get_settings()
    return RepoContext(
        working_directory=Path.cwd(),
        home_directory=Path.home(),
        org_repo=settings.ORG_TEMPLATE_REPO,
        credential_provider=build_credential_provider(settings.GITHUB_TOKEN),
        github_api_url=settings.GITHUB_API_URL,
        v0_api_key=settings.V0_API_KEY,
        v0_api_url=settings.V0_API_URL,
    )


def build_template_source(context: RepoContext) -> TemplateSourceBase:
    """Create the template source for the organization repository."""
    return GitHubKitTemplateSource(context.org_repo, context.credential_provider, context.github_api_url)


def build_issue_tracker(context: RepoContext) -> IssueTrackerBase:
    """Create the issue tracker for the working directory's repository."""
    return GhCliIssueTracker(context.working_directory)


def fail(message: str) -> typer.Exit:
    """Print an error to stderr and return the exit to raise."""
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(1)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"prole {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
    version: Annotated[bool, Option("--version", callback=version_callback, is_eager=True, help="Show the version and exit.")] = False,
) -> None:
    """PROLE-ISLAND development tools."""
    configure_logging(debug)


@typer_app.command(name="init")
def init_cli(
    template: Annotated[ProjectTemplate, Option("--template", "-t", help="Project template.")] = ProjectTemplate.NEXTJS,
    workflows: Annotated[str | None, Option("--workflows", "-w", help="Comma-separated workflows to install (e.g. ci,pr-check,v0-generate).")] = None,
    all_workflows: Annotated[bool, Option("--all-workflows", "-a", help="Install every available workflow.")] = False,
    force: Annotated[bool, Option("--force", "-f", help="Overwrite existing files.")] = False,
) -> None:
    """Initialize the repository (CLAUDE.md, .github/, .claude/)."""
    context = build_repo_context()
    options = InitOptions(template=template, workflows=workflows, all_workflows=all_workflows, force=force)
    typer.echo(f"Fetching templates from {context.org_repo}...")
    try:
        result = asyncio.run(run_init_workflow(context, build_template_source(context), options))
    except OSError as exc:
        raise fail(f"Initialization failed: {exc}") from exc

    for name in result.unknown_workflows:
        typer.secho(f"  Warning: workflow '{name}' not found", fg=typer.colors.YELLOW)
    for path in result.written:
        typer.secho(f"  Created: {path}", fg=typer.colors.GREEN)
    for path in result.skipped:
        typer.secho(f"  Skipped: {path} (already exists)", fg=typer.colors.YELLOW)

    if result.used_local_templates:
        typer.secho("\nFallback: initialized with built-in local templates", fg=typer.colors.YELLOW)
        typer.secho("  To fetch the latest templates run: gh auth login", fg=typer.colors.YELLOW)
        return

    typer.secho("\nRepository initialized!", fg=typer.colors.GREEN)
    typer.echo(f"Source:    https://github.com/{context.org_repo}")
    typer.echo(f"Template:  {template.value}")
    typer.echo(f"Workflows: {', '.join(result.selected_workflows) or '-'}")
    for filename in result.selected_workflows:
        typer.echo(f"  {filename} ({WORKFLOW_DESCRIPTIONS.get(filename, filename)})")
    typer.echo("\nNext steps:")
    typer.echo("  1. Edit CLAUDE.md for this project")
    typer.echo("  2. Set the V0_API_KEY environment variable")
    typer.echo('  3. Generate UI with: prole v0 "create a component"')
    typer.echo("\nTo add the v0 UI generation workflow: prole init --workflows v0-generate (or --all-workflows)")


def echo_sync_result(result: SyncResult) -> None:
    """Print a summary of a sync pass."""
    if not result.templates_available:
        typer.secho("No organization templates could be fetched (offline or not authenticated).", fg=typer.colors.YELLOW)
    if result.created:
        typer.secho(f"✓ Created: {len(result.created)} file(s)", fg=typer.colors.GREEN)
        for change in result.created:
            typer.secho(f"  + {change.file}", fg=typer.colors.GREEN)
    if result.updated:
        typer.secho(f"✓ Updated: {len(result.updated)} file(s)", fg=typer.colors.CYAN)
        for change in result.updated:
            typer.secho(f"  ~ {change.file}", fg=typer.colors.CYAN)
    if result.skipped:
        typer.secho(f"- Skipped: {len(result.skipped)} file(s) (unchanged)", fg=typer.colors.BRIGHT_BLACK)
    if result.dry_run:
        typer.secho("\n--dry-run: no changes were made", fg=typer.colors.YELLOW)
        typer.secho("To apply them run: prole sync", fg=typer.colors.YELLOW)


@typer_app.command(name="sync")
def sync_cli(
    dry_run: Annotated[bool, Option("--dry-run", "-d", help="Preview changes without writing anything.")] = False,
    force: Annotated[bool, Option("--force", "-f", help="Force overwriting existing files.")] = False,
) -> None:
    """Synchronize templates with the latest organization versions."""
    context = build_repo_context()
    try:
        result = asyncio.run(run_sync_workflow(context, build_template_source(context), SyncOptions(dry_run=dry_run, force=force)))
    except OSError as exc:
        raise fail(f"Sync failed: {exc}") from exc
    typer.secho("Sync complete!", fg=typer.colors.GREEN)
    echo_sync_result(result)


def echo_validation_report(report: ValidationReport, verbose: bool) -> None:
    """Print each result, the status counts and the score."""
    typer.secho("\n📋 Validation results:\n", fg=typer.colors.CYAN)
    for result in report.results:
        icon, color = STATUS_STYLES[result.status]
        typer.echo(f"{icon} " + typer.style(result.name, fg=color))
        if verbose or result.status is not ValidationStatus.PASS:
            typer.secho(f"   {result.message}", fg=typer.colors.BRIGHT_BLACK)
        if result.fixable and result.status is not ValidationStatus.PASS:
            typer.secho("   → fixable with prole sync", fg=typer.colors.BLUE)

    typer.secho("\n📊 Summary:", fg=typer.colors.CYAN)
    typer.echo(
        "   "
        + typer.style(f"✅ Pass: {report.count(ValidationStatus.PASS)}", fg=typer.colors.GREEN)
        + "  "
        + typer.style(f"⚠️ Warn: {report.count(ValidationStatus.WARN)}", fg=typer.colors.YELLOW)
        + "  "
        + typer.style(f"❌ Fail: {report.count(ValidationStatus.FAIL)}", fg=typer.colors.RED)
    )
    score = report.score
    score_color = typer.colors.GREEN if score >= 90 else typer.colors.YELLOW if score >= 70 else typer.colors.RED
    typer.echo("\n" + typer.style("Compliance score:", fg=typer.colors.CYAN) + " " + typer.style(f"{score}%", fg=score_color))
    if report.has_problems:
        typer.echo("\n" + typer.style("To fix:", fg=typer.colors.YELLOW) + " " + typer.style("prole sync", fg=typer.colors.CYAN))


@typer_app.command(name="validate")
def validate_cli(
    fix: Annotated[bool, Option("--fix", "-f", help="Fix problems automatically (runs prole sync).")] = False,
    verbose: Annotated[bool, Option("--verbose", "-v", help="Show details for passing checks too.")] = False,
) -> None:
    """Validate the repository configuration."""
    context = build_repo_context()
    template_source = build_template_source(context)
    try:
        report = asyncio.run(run_validation(context, template_source))
    except NotAGitRepositoryError as exc:
        raise fail(str(exc)) from exc
    except OSError as exc:
        raise fail(f"Validation failed: {exc}") from exc

    echo_validation_report(report, verbose)

    # One-shot remediation; the repository is not re-validated afterwards.
    if fix and report.has_problems:
        typer.secho("\n--fix given; running prole sync...\n", fg=typer.colors.YELLOW)
        try:
            result = asyncio.run(run_sync_workflow(context, template_source, SyncOptions(dry_run=False, force=False)))
        except OSError as exc:
            raise fail(f"Sync failed: {exc}") from exc
        echo_sync_result(result)


@typer_app.command(name="issue")
def issue_cli(
    list_issues: Annotated[bool, Option("--list", "-l", help="List issues ready to develop.")] = False,
    create: Annotated[bool, Option("--create", "-c", help="Create a new issue.")] = False,
    view: Annotated[str | None, Option("--view", "-v", help="Show an issue.")] = None,
) -> None:
    """Manage GitHub issues."""
    context = build_repo_context()
    tracker = build_issue_tracker(context)
    if create:
        create_issue(tracker)
    elif view:
        view_issue(tracker, view)
    else:
        list_ready_issues(tracker)


def list_ready_issues(tracker: IssueTrackerBase) -> None:
    typer.secho("\n📋 Issues ready to develop\n", fg=typer.colors.CYAN)
    try:
        issues = tracker.list_ready_issues()
    except (subprocess.CalledProcessError, FileNotFoundError):
        typer.secho("  The gh CLI is required", fg=typer.colors.YELLOW)
        typer.secho("  Install: brew install gh && gh auth login", fg=typer.colors.BRIGHT_BLACK)
        return

    if not issues:
        typer.secho("  No issues are ready to develop", fg=typer.colors.YELLOW)
        typer.secho('  (issues labelled "ready-to-develop" are listed)', fg=typer.colors.BRIGHT_BLACK)
        return

    for issue in issues:
        typer.echo("  " + typer.style(f"#{issue.number}", fg=typer.colors.CYAN) + f" {issue.title}")
        details = [
            typer.style(issue.priority_label or "", fg=typer.colors.YELLOW),
            typer.style(issue.dod_label or "", fg=typer.colors.MAGENTA),
            typer.style(f"@{issue.first_assignee}", fg=typer.colors.BRIGHT_BLACK) if issue.first_assignee else "",
        ]
        typer.echo("     " + " ".join(details))
        typer.echo()

    typer.secho(RULE, fg=typer.colors.BRIGHT_BLACK)
    typer.secho("\nNext steps:", fg=typer.colors.YELLOW)
    typer.echo("  1. prole issue --view {number}    # show details")
    typer.echo("  2. git checkout -b feature/issue-{number}-{description}")
    typer.echo("  3. Start developing!")


def view_issue(tracker: IssueTrackerBase, number: str) -> None:
    try:
        typer.echo(tracker.view_issue(number))
    except (subprocess.CalledProcessError, FileNotFoundError):
        typer.secho(f"Issue #{number} not found", fg=typer.colors.RED, err=True)
        return
    typer.secho(RULE, fg=typer.colors.BRIGHT_BLACK)
    typer.secho("\nStart developing:", fg=typer.colors.YELLOW)
    typer.echo(f"  git checkout -b feature/issue-{number}-{{description}}")


def create_issue(tracker: IssueTrackerBase) -> None:
    typer.secho("\n📝 Create an issue\n", fg=typer.colors.CYAN)
    typer.secho("Create it on GitHub:", fg=typer.colors.YELLOW)
    try:
        url = f"{tracker.get_repository_url()}/issues/new/choose"
    except (subprocess.CalledProcessError, FileNotFoundError):
        typer.echo("  Open the repository with: gh repo view --web")
    else:
        typer.echo(f"  {url}")
        typer.launch(url)
    typer.secho("\nWhen writing the issue:", fg=typer.colors.BRIGHT_BLACK)
    typer.echo("  1. Pick the matching template (Bug/Feature)")
    typer.echo("  2. Set a priority (P0-P3)")
    typer.echo("  3. Choose a DoD level")
    typer.echo("  4. Attach Figma/v0 links for UI work")


V0_HELP = """
v0 UI Generation

Usage:
  prole v0 "empty state component"
  prole v0 "user table" --save components/user-table.tsx
  prole v0 "login form" --template form
  prole v0 "login form" --open

Prompt tips:
  - Be specific: component name, behavior and layout
  - With --template, describe requirements only (the tech stack is added)

Environment:
  V0_API_KEY: v0.dev API key (https://v0.dev/chat/settings/keys)

List templates: prole v0 --list-templates
"""


@typer_app.command(name="v0")
def v0_cli(
    prompt: Annotated[str | None, Argument(help="Description of the UI to generate.")] = None,
    template: Annotated[str | None, Option("--template", "-t", help="Prompt template (form, table, card, empty-state, ...).")] = None,
    list_templates: Annotated[bool, Option("--list-templates", "-l", help="List available prompt templates.")] = False,
    save: Annotated[Path | None, Option("--save", "-s", help="Save the generated component to a file.")] = None,
    open_demo: Annotated[bool, Option("--open", "-o", help="Open the demo in a browser.")] = False,
) -> None:
    """Generate UI with v0.dev."""
    context = build_repo_context()
    template_source = build_template_source(context)

    if list_templates:
        templates, from_org = asyncio.run(list_prompt_templates(template_source))
        typer.secho("\n📋 Available templates:\n", fg=typer.colors.CYAN)
        source = f"  From {context.org_repo}/v0-templates:\n" if from_org else "  Built-in templates:\n"
        typer.secho(source, fg=typer.colors.BRIGHT_BLACK)
        for info in templates:
            typer.echo("  " + typer.style(info.name.ljust(15), fg=typer.colors.GREEN) + f" {info.description}")
            example = f'e.g. prole v0 "{info.example}" --template {info.name}'
            typer.echo("  " + " " * 15 + " " + typer.style(example, fg=typer.colors.BRIGHT_BLACK) + "\n")
        return

    if not prompt:
        typer.echo(V0_HELP)
        return

    if not context.v0_api_key:
        typer.secho("Error: V0_API_KEY is not set", fg=typer.colors.RED, err=True)
        typer.echo("  1. Create an API key at https://v0.dev/chat/settings/keys")
        typer.echo("  2. export V0_API_KEY=your_key_here")
        raise typer.Exit(1)

    final_prompt = prompt
    if template:
        template_content = asyncio.run(fetch_prompt_template(template_source, template))
        if template_content:
            final_prompt = merge_prompt_with_template(prompt, template_content)
            typer.secho(f"Applied template '{template}'", fg=typer.colors.GREEN)
        else:
            typer.secho(f"Template '{template}' not found; using the prompt as-is.", fg=typer.colors.YELLOW)

    typer.echo("Generating UI with v0.dev...")
    client = V0Client(api_key=context.v0_api_key, base_url=context.v0_api_url)
    try:
        chat = client.create_chat(final_prompt)
    except V0ApiError as exc:
        raise fail(f"Generation failed: {exc}") from exc

    typer.secho("Generated!", fg=typer.colors.GREEN)
    typer.echo("\n" + typer.style("📱 Demo:", fg=typer.colors.CYAN) + f"  {chat.demo_url or 'N/A'}")
    typer.echo(typer.style("💬 Chat:", fg=typer.colors.CYAN) + f"  {chat.web_url or 'N/A'}\n")

    components = chat.component_files
    if components:
        typer.secho("📁 Generated components:", fg=typer.colors.CYAN)
        for component in components:
            typer.echo(f"   - {component.name}")

    if save is not None and components:
        write_text_file(save, components[0].content)
        typer.secho(f"\n💾 Saved: {save}", fg=typer.colors.GREEN)

    if open_demo and chat.demo_url:
        typer.launch(chat.demo_url)

    if components and save is None:
        lines = components[0].content.split("\n")
        typer.secho("\n📝 Code preview:", fg=typer.colors.CYAN)
        typer.secho(RULE, fg=typer.colors.BRIGHT_BLACK)
        typer.echo("\n".join(lines[:PREVIEW_LINES]))
        if len(lines) > PREVIEW_LINES:
            typer.secho("... (truncated)", fg=typer.colors.BRIGHT_BLACK)
        typer.secho(RULE, fg=typer.colors.BRIGHT_BLACK)
        typer.echo("\n" + typer.style("To save it:", fg=typer.colors.YELLOW) + f' prole v0 "{prompt[:30]}..." --save component.tsx')


@typer_app.command(name="claude")
def claude_cli(
    setup: Annotated[bool, Option("--setup", "-s", help="Write .claude/ configuration files.")] = False,
    setup_hooks: Annotated[bool, Option("--setup-hooks", help="Install the organization hooks and commands.")] = False,
    mcp: Annotated[str | None, Option("--mcp", "-m", help="Add an MCP server.")] = None,
) -> None:
    """Configure the AI coding assistant."""
    context = build_repo_context()
    if setup:
        try:
            written = setup_claude(context)
        except OSError as exc:
            raise fail(f"Failed to write configuration: {exc}") from exc
        typer.secho("Assistant configuration written!", fg=typer.colors.GREEN)
        typer.secho("\nCreated files:", fg=typer.colors.CYAN)
        for path in written:
            typer.echo(f"  - {path}")
        typer.secho("\nNext steps:", fg=typer.colors.YELLOW)
        typer.echo("  1. Set the V0_API_KEY environment variable")
        typer.echo("  2. Start developing with the claude command")
    elif setup_hooks:
        claude_setup_hooks(context)
    elif mcp:
        claude_add_mcp(mcp)
    else:
        claude_status(context)


def claude_status(context: RepoContext) -> None:
    status = get_claude_status(context)

    def line(ok: bool, present: str, missing: str, optional: bool = False) -> None:
        if ok:
            typer.secho(f"✓ {present}", fg=typer.colors.GREEN)
        elif optional:
            typer.secho(f"  {missing}", fg=typer.colors.BRIGHT_BLACK)
        else:
            typer.secho(f"✗ {missing}", fg=typer.colors.YELLOW)

    typer.secho("\n⚡ Assistant configuration\n", fg=typer.colors.CYAN)
    line(status.claude_dir, ".claude/ directory present", "no .claude/ directory")
    if status.claude_dir:
        line(status.settings, "settings.json present", "no settings.json")
        line(status.hooks, "hooks.json present", "no hooks.json (optional)", optional=True)
    line(status.rules_document, "CLAUDE.md present", "no CLAUDE.md")
    typer.secho("\nEnvironment:", fg=typer.colors.CYAN)
    line(status.v0_api_key, "V0_API_KEY set", "V0_API_KEY not set")
    typer.secho("\nTo set up:", fg=typer.colors.YELLOW)
    typer.echo("  prole claude --setup")


def claude_setup_hooks(context: RepoContext) -> None:
    typer.secho("\n🔧 Installing organization assistant hooks\n", fg=typer.colors.CYAN)
    try:
        context.credential_provider()
    except MissingCredentialError as exc:
        typer.secho("GitHub CLI is not authenticated", fg=typer.colors.RED, err=True)
        typer.secho("\n  Run gh auth login", fg=typer.colors.YELLOW)
        raise typer.Exit(1) from exc

    try:
        result = asyncio.run(install_hooks(context, build_template_source(context)))
    except OSError as exc:
        raise fail(f"Setup failed: {exc}") from exc

    typer.secho("Hooks installed!", fg=typer.colors.GREEN)
    typer.secho("\nInstalled:", fg=typer.colors.CYAN)
    for name in result.installed:
        typer.secho(f"  ✓ {name}", fg=typer.colors.GREEN)
    for name in result.skipped:
        typer.secho(f"  ⚠ {name} (skipped)", fg=typer.colors.YELLOW)
    typer.secho("\nSettings updated:", fg=typer.colors.CYAN)
    typer.secho(f"  ✓ {result.settings_path} (PreToolUse hook)", fg=typer.colors.GREEN)
    if result.backup_path is not None:
        typer.secho(f"  Backup: {result.backup_path}", fg=typer.colors.BRIGHT_BLACK)
    typer.secho("\nInstalled commands:", fg=typer.colors.YELLOW)
    typer.echo("  /req   - requirements PR (phase 1-5 validation)")
    typer.echo("  /dev   - implementation PR (requirement traceability)")
    typer.echo("  /issue - create an issue")
    typer.echo(f"\nDocs: https://github.com/{context.org_repo}/wiki")


def claude_add_mcp(name: str) -> None:
    typer.secho(f"\n🔌 Adding MCP server: {name}\n", fg=typer.colors.CYAN)
    server = KNOWN_MCP_SERVERS.get(name)
    if server is None:
        typer.secho("Available MCP servers:", fg=typer.colors.YELLOW)
        for known_name, known in KNOWN_MCP_SERVERS.items():
            typer.echo("  " + typer.style(known_name, fg=typer.colors.CYAN) + f": {known.description}")
        typer.echo("\n" + typer.style("Custom server:", fg=typer.colors.BRIGHT_BLACK) + " claude mcp add {name} -- {command}")
        return

    typer.secho(f"Description: {server.description}", fg=typer.colors.BRIGHT_BLACK)
    typer.secho("\nCommand:", fg=typer.colors.YELLOW)
    typer.echo(f"  {server.command}")
    if add_mcp_server(name):
        typer.secho("\n✓ MCP server added", fg=typer.colors.GREEN)
    else:
        typer.secho("\nRun it manually:", fg=typer.colors.YELLOW)
        typer.echo(f"  {server.command}")


if __name__ == "__main__":
    typer_app()
