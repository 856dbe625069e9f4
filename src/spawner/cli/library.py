"""
Skill library management commands.

Installing and updating the local checkout, MCP client setup, listing,
and the repository maintenance tools (dist build, count sync, YAML lint).
"""

import pathlib as _pathlib
import typing as _typing

import click as _click

import spawner.build as build
import spawner.config as config
import spawner.install as install

_RULE = "─" * 50


def _settings(ctx: _click.Context) -> config.Settings:
    return ctx.obj["settings"]


def _installer(ctx: _click.Context) -> install.SkillInstaller:
    settings = _settings(ctx)
    return install.SkillInstaller(settings.skills_root, settings.install.repo_url)


def _server_entry(ctx: _click.Context, local: bool) -> dict[str, _typing.Any]:
    if local:
        return install.local_server_entry()
    return install.remote_server_entry(_settings(ctx).install.mcp_endpoint)


def _run_setup_mcp(ctx: _click.Context, local: bool) -> None:
    environments = install.detect_environments()

    _click.echo("Detected Claude environments:")
    for i, env in enumerate(environments, 1):
        if install.is_configured(env.path):
            status = "(MCP configured)"
        elif not env.exists:
            status = "(will create)"
        else:
            status = "(MCP not configured)"
        _click.echo(f"  {i}. {env.name} {status}")
        _click.echo(f"     {env.path}")

    outcomes = install.setup_mcp(environments, _server_entry(ctx, local))
    for outcome in outcomes:
        name = outcome.environment.name
        if outcome.status == "skipped":
            _click.echo(f"  {name}: Already configured, skipping")
        elif outcome.status == "configured":
            _click.echo(f"✓ {name}: MCP configured")
        else:
            _click.echo(f"✗ {name}: Failed to configure - {outcome.error}", err=True)

    configured = sum(1 for o in outcomes if o.status == "configured")
    if configured:
        target = "local stdio server" if local else _settings(ctx).install.mcp_endpoint
        _click.echo(f"\n✓ MCP server configured for {configured} environment(s)")
        _click.echo(f"  MCP Endpoint: {target}")
        _click.echo("  Restart Claude Desktop (if configured) to pick up the tools.")
    else:
        _click.echo("No new configurations needed - MCP already set up")


@_click.command(name="install")
@_click.option("--mcp", "with_mcp", is_flag=True, help="Also configure MCP clients")
@_click.option("--local", is_flag=True, help="Point MCP clients at a local stdio server")
@_click.pass_context
def install_cmd(ctx: _click.Context, with_mcp: bool, local: bool) -> None:
    """Clone the skill library into the skills root."""
    installer = _installer(ctx)
    try:
        outcome = installer.install()
    except install.InstallError as e:
        raise _click.ClickException(str(e)) from e

    if outcome.already_installed:
        _click.echo(f"Skills already installed at {installer.skills_dir}")
        _click.echo('Run "spawner update" to get the latest version')
        _click.echo(f"✓ {outcome.skill_count} skills available")
    else:
        _click.echo(f"✓ Installation complete! {outcome.skill_count} skills installed.")

    if with_mcp:
        _run_setup_mcp(ctx, local)

    _click.echo(f"\nSkills Location: {installer.skills_dir}")
    if not with_mcp:
        _click.echo("Want MCP features? Run: spawner setup-mcp")


@_click.command(name="update")
@_click.pass_context
def update_cmd(ctx: _click.Context) -> None:
    """Pull the latest skill library."""
    try:
        count = _installer(ctx).update()
    except install.InstallError as e:
        raise _click.ClickException(str(e)) from e
    _click.echo(f"✓ Update complete! {count} skills available.")


@_click.command(name="setup-mcp")
@_click.option("--local", is_flag=True, help="Point MCP clients at a local stdio server")
@_click.pass_context
def setup_mcp_cmd(ctx: _click.Context, local: bool) -> None:
    """Add the spawner server to detected MCP client configs."""
    _run_setup_mcp(ctx, local)


@_click.command(name="status")
@_click.pass_context
def status_cmd(ctx: _click.Context) -> None:
    """Show installation and MCP client status."""
    installer = _installer(ctx)

    _click.echo("Spawner Skills Status")
    _click.echo(_RULE)
    if installer.is_installed():
        _click.echo(f"✓ Installed at: {installer.skills_dir}")
        _click.echo(f"✓ Skills count: {installer.count_skills()}")
        info = installer.git_info()
        if info is not None:
            _click.echo(f"  Branch: {info.branch}")
            _click.echo(f"  Last update: {info.last_commit}")
    else:
        _click.echo("✗ Skills not installed")
        _click.echo("  Run: spawner install")

    _click.echo("")
    _click.echo("MCP Server Status")
    _click.echo(_RULE)
    any_configured = False
    for env in install.detect_environments():
        configured = install.is_configured(env.path)
        any_configured = any_configured or configured
        _click.echo(f"{env.name}: {'✓ Configured' if configured else '○ Not configured'}")
        _click.echo(f"  {env.path}")
    _click.echo(_RULE)
    if not any_configured:
        _click.echo("Run: spawner setup-mcp")


@_click.command(name="list")
@_click.argument("category", required=False)
@_click.option("-a", "--all", "show_all", is_flag=True, help="List every skill")
@_click.pass_context
def list_cmd(ctx: _click.Context, category: str | None, show_all: bool) -> None:
    """List installed categories, or the skills in CATEGORY."""
    installer = _installer(ctx)
    if not installer.is_installed():
        raise _click.ClickException("Skills not installed. Run install command first.")

    categories = installer.categories()
    _click.echo(f"Location: {installer.skills_dir}\n")

    if category:
        if category not in categories:
            _click.echo("Available categories:", err=True)
            for name in categories:
                _click.echo(f"  {name}", err=True)
            raise _click.ClickException(f'Category "{category}" not found.')
        names = installer.category_skills(category)
        _click.echo(f"{category} ({len(names)} skills)")
        _click.echo(_RULE)
        for name in names:
            description = installer.skill_description(category, name)
            _click.echo(f"  {name} - {description}" if description else f"  {name}")
        _click.echo(f"\nLoad with: Read {installer.skills_dir}/{category}/<skill>/skill.yaml")
        return

    total = 0
    if show_all:
        _click.echo("All Skills")
        _click.echo(_RULE)
        for name in categories:
            names = installer.category_skills(name)
            total += len(names)
            _click.echo(f"\n{name} ({len(names)})")
            for skill_name in names:
                _click.echo(f"  {skill_name}")
        _click.echo("")
    else:
        _click.echo("Installed Skill Categories")
        _click.echo(_RULE)
        for name in categories:
            count = len(installer.category_skills(name))
            total += count
            _click.echo(f"{name} ({count} skills)")
    _click.echo(_RULE)
    _click.echo(f"✓ Total: {total} skills across {len(categories)} categories")


# =============================================================================
# Repository maintenance
# =============================================================================

_root_option = _click.option(
    "--root",
    type=_click.Path(exists=True, file_okay=False, path_type=_pathlib.Path),
    default=".",
    show_default=True,
    help="Skill repository root",
)


@_click.command(name="build-dist")
@_click.argument("skill", required=False)
@_root_option
def build_dist_cmd(skill: str | None, root: _pathlib.Path) -> None:
    """Generate single-file Markdown skills under dist/.

    SKILL limits the build to one skill directory name.
    """
    result = build.build_dist(root, skill)
    for path in result.generated:
        _click.echo(f"  ✓ {path.relative_to(result.output_dir)}")
    for name in result.skipped:
        _click.echo(f"  - skipped {name}")
    _click.echo(
        f"\nGenerated {len(result.generated)} skills "
        f"({len(result.skipped)} skipped) in {result.output_dir}"
    )


@_click.command(name="sync-count")
@_root_option
def sync_count_cmd(root: _pathlib.Path) -> None:
    """Count skills and update the advertised count in docs."""
    counted = build.count_skills(root)
    _click.echo(f"Total skills: {counted.total}\n")
    for category, count in counted.by_size():
        _click.echo(f"  {category}: {count}")
    _click.echo("")
    for outcome in build.sync_counts(root, counted.total):
        if outcome.status == "updated":
            _click.echo(f"✓ Updated {outcome.path} with count: {counted.total}+")
        elif outcome.status == "missing":
            _click.echo(f"✗ File not found: {outcome.path}", err=True)
        else:
            _click.echo(f"  {outcome.path} already up to date")


@_click.command(name="lint-yaml")
@_root_option
def lint_yaml_cmd(root: _pathlib.Path) -> None:
    """Check every YAML file in the repository parses."""
    report = build.lint_yaml(root)
    _click.echo(f"Checked {report.checked} YAML files")
    if report.ok:
        _click.echo("✓ No YAML errors found")
        return

    for problem in report.problems:
        _click.echo(f"\n✗ {problem.file}", err=True)
        _click.echo(f"  Error: {problem.reason}", err=True)
        _click.echo(f"  Line: {problem.location}", err=True)
        if problem.snippet:
            _click.echo(problem.snippet, err=True)
    raise _click.ClickException(f"Found {len(report.problems)} YAML files with errors")


COMMANDS: tuple[_click.Command, ...] = (
    install_cmd,
    update_cmd,
    setup_mcp_cmd,
    status_cmd,
    list_cmd,
    build_dist_cmd,
    sync_count_cmd,
    lint_yaml_cmd,
)
