"""
Main CLI entry point for Spawner.

Provides the command-line interface using Click: the MCP server, skill
browsing, project memory and configuration. Library management commands
live in :mod:`spawner.cli.library`.
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click

import spawner
import spawner.cli.library as cli_library
import spawner.config as config
import spawner.logging as logging
import spawner.memory as memory
import spawner.skills as skills
import spawner.tools as tools

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(spawner.__version__, "-v", "--version", prog_name="spawner")
@_click.option(
    "--skills-root",
    type=_click.Path(file_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Skill library root (default: skills.root from config)",
)
@_click.option(
    "--log-level",
    type=_click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: logging.level from config)",
)
@_click.pass_context
def cli(ctx: _click.Context, skills_root: _pathlib.Path | None, log_level: str | None) -> None:
    """
    Spawner - specialist skills for AI-powered product building.

    \b
    Examples:
        spawner serve                         # MCP server over HTTP on :3000
        spawner serve --transport stdio       # MCP server over stdio
        spawner skill search stripe payments  # Search the skill library
        spawner install --mcp                 # Install skills, configure clients
        spawner build-dist                    # Generate dist/ Markdown
    """
    try:
        settings = config.Settings()
    except config.ConfigFileError as e:
        raise _click.ClickException(str(e)) from e

    if skills_root is not None:
        settings.skills.root = str(skills_root)
    if log_level:
        settings.logging.level = log_level.upper()

    logging.configure_logging(settings.logging.level, rich=settings.logging.rich)
    for key in settings.get_unknown_fields():
        _logger.warning("Unknown config key %s (typo?)", key)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


def _settings(ctx: _click.Context) -> config.Settings:
    return ctx.obj["settings"]


def _catalog(ctx: _click.Context) -> skills.SkillCatalog:
    settings = _settings(ctx)
    return skills.SkillCatalog(settings.skills_root, settings.skills.ignored_dirs)


# =============================================================================
# MCP Server
# =============================================================================


@cli.command()
@_click.option(
    "--transport",
    type=_click.Choice(["http", "stdio"]),
    default=None,
    help="Transport (default: server.transport from config)",
)
@_click.option("--host", type=str, default=None, help="HTTP bind address")
@_click.option("--port", type=int, default=None, envvar="PORT", help="HTTP port (env: PORT)")
@_click.option("--log-tool-calls", is_flag=True, help="Write every tool call to a JSONL log")
@_click.pass_context
def serve(
    ctx: _click.Context,
    transport: str | None,
    host: str | None,
    port: int | None,
    log_tool_calls: bool,
) -> None:
    """Run the MCP server.

    HTTP serves the stateless streamable transport at /mcp; stdio reads
    newline-delimited JSON on stdin.
    """
    import spawner.mcp.server as mcp_server

    settings = _settings(ctx)
    transport = transport or settings.server.transport
    if log_tool_calls:
        settings.logging.tool_calls = True

    server = mcp_server.McpServer.from_settings(settings, transport=transport)

    if transport == "stdio":
        import spawner.mcp.stdio as mcp_stdio

        mcp_stdio.run_stdio(server)
        return

    import uvicorn as _uvicorn

    import spawner.mcp.http as mcp_http

    app = mcp_http.create_app(server, cors_origins=settings.server.cors_origins)
    _uvicorn.run(
        app,
        host=host or settings.server.host,
        port=port or settings.server.port,
        log_level=settings.logging.level.lower(),
    )


# =============================================================================
# Skill Commands
# =============================================================================


@cli.group(name="skill")
def skill_cmd() -> None:
    """Browse the skill library."""
    pass


@skill_cmd.command(name="list")
@_click.option("--category", type=str, default=None, help="Only this category")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def skill_list(ctx: _click.Context, category: str | None, json_output: bool) -> None:
    """List skills with short descriptions."""
    summaries = _catalog(ctx).list_skills(category)
    if json_output:
        _click.echo(tools.json_output(summaries))
        return
    if not summaries:
        _click.echo("No skills found.")
        return
    for summary in summaries:
        _click.echo(f"{summary['category']}/{summary['id']}: {summary['description']}")


@skill_cmd.command(name="search")
@_click.argument("query", nargs=-1, required=True)
@_click.option("--category", type=str, default=None, help="Only this category")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def skill_search(
    ctx: _click.Context,
    query: tuple[str, ...],
    category: str | None,
    json_output: bool,
) -> None:
    """Search skills; every term must match name, id or description."""
    results = _catalog(ctx).search_skills(" ".join(query), category)
    if json_output:
        _click.echo(tools.json_output(results))
        return
    if not results:
        _click.echo("No matching skills.")
        return
    for summary in results:
        _click.echo(f"{summary['category']}/{summary['id']}: {summary['description']}")


@skill_cmd.command(name="show")
@_click.argument("skill_id")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def skill_show(ctx: _click.Context, skill_id: str, json_output: bool) -> None:
    """Show a skill's full definition."""
    import yaml as _yaml

    try:
        definition = _catalog(ctx).require_skill(skill_id)
    except skills.SkillNotFoundError as e:
        raise _click.ClickException(str(e)) from e

    data = definition.to_dict()
    if json_output:
        _click.echo(tools.json_output(data))
    else:
        _print_yaml(_yaml.safe_dump(data, sort_keys=False, allow_unicode=True))


def _print_yaml(yaml_text: str) -> None:
    """Print YAML, highlighted when stdout is a terminal."""
    import rich.console as _rich_console
    import rich.syntax as _rich_syntax

    console = _rich_console.Console()
    if not console.is_terminal:
        _click.echo(yaml_text)
        return
    console.print(
        _rich_syntax.Syntax(yaml_text, "yaml", theme="monokai", background_color="default")
    )


# =============================================================================
# Memory Commands
# =============================================================================


@cli.group(name="memory")
def memory_cmd() -> None:
    """Read and write project memory."""
    pass


def _memory(ctx: _click.Context) -> memory.ProjectMemory:
    return memory.ProjectMemory(_settings(ctx).memory_path)


@memory_cmd.command(name="get")
@_click.argument("key")
@_click.pass_context
def memory_get(ctx: _click.Context, key: str) -> None:
    """Print the value stored under KEY."""
    entry = _memory(ctx).get(key)
    if entry is None:
        raise _click.ClickException(f"No memory entry for: {key}")
    _click.echo(entry.value)


@memory_cmd.command(name="set")
@_click.argument("key")
@_click.argument("value")
@_click.pass_context
def memory_set(ctx: _click.Context, key: str, value: str) -> None:
    """Store VALUE under KEY."""
    entry = _memory(ctx).set(key, value)
    _click.echo(f"✓ Stored {entry.key}")


@memory_cmd.command(name="list")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def memory_list(ctx: _click.Context, json_output: bool) -> None:
    """List entries, newest first."""
    entries = _memory(ctx).list()
    if json_output:
        _click.echo(tools.json_output([e.to_dict() for e in entries]))
        return
    if not entries:
        _click.echo("No memory entries.")
        return
    for entry in entries:
        _click.echo(f"{entry.key}: {entry.value}")


# =============================================================================
# Config Commands
# =============================================================================


@cli.group(name="config", invoke_without_command=True)
@_click.pass_context
def config_cmd(ctx: _click.Context) -> None:
    """Configuration management commands.

    Without a subcommand, shows configuration overview.
    """
    if ctx.invoked_subcommand is None:
        settings = _settings(ctx)
        _click.echo("Spawner Configuration:")
        _click.echo(f"  Skills Root: {settings.skills_root}")
        _click.echo(f"  Memory File: {settings.memory_path}")
        _click.echo(f"  Transport: {settings.server.transport}")
        _click.echo(f"  HTTP: {settings.server.host}:{settings.server.port}")
        _click.echo(f"  Log Level: {settings.logging.level}")
        _click.echo(f"  Config Dir: {settings.config_dir}")
        unknown = settings.get_unknown_fields()
        if unknown:
            _click.echo(f"  Unknown Keys: {', '.join(sorted(unknown))}")
        _click.echo("\nRun 'spawner config show' for full configuration details.")


@config_cmd.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option("--section", type=str, default=None, help="Show specific section only")
@_click.pass_context
def config_show(ctx: _click.Context, as_json: bool, section: str | None) -> None:
    """Show effective configuration from all sources.

    \b
    Examples:
        spawner config show                  # All config as YAML
        spawner config show --json           # As JSON
        spawner config show --section server # One section
    """
    import yaml as _yaml

    full_config = _settings(ctx).model_dump(mode="json")

    if section:
        if section not in full_config:
            raise _click.ClickException(f"Unknown section: {section}")
        full_config = {section: full_config[section]}

    if as_json:
        _click.echo(_json.dumps(full_config, indent=2))
    else:
        _print_yaml(_yaml.dump(full_config, default_flow_style=False, sort_keys=False))


@config_cmd.command(name="path")
@_click.option("--all", "show_all", is_flag=True, help="Show all paths even if not found")
def config_path(show_all: bool) -> None:
    """Show configuration file paths and their status."""
    import spawner.config.sources as config_sources

    for layer in config_sources.default_layers(config.find_project_root()):
        exists = layer.path.exists()
        if exists or show_all:
            status = "✓" if exists else "✗"
            _click.echo(f"{status} {layer.label}: {layer.path}")


# =============================================================================
# Library Commands
# =============================================================================


for command in cli_library.COMMANDS:
    cli.add_command(command)


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="spawner")


if __name__ == "__main__":
    main()
