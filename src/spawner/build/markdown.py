"""
Single-file Markdown distribution of the skill library.

Each ``<category>/<skill>/`` directory (skill.yaml plus optional
sharp-edges.yaml, collaboration.yaml and prose .md files) is flattened to
``dist/<category>/<skill>.md`` for marketplaces that only take one file
per skill.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib
import re as _re
import typing as _typing

import yaml as _yaml

import spawner.build.extract as extract
import spawner.constants as constants

_logger = _logging.getLogger(__name__)

SKIP_DIRS = frozenset({"cli", "scripts", "dist", ".git", "node_modules"})
"""Top-level directories that never hold skill categories."""

MAX_SHARP_EDGES = 10
MAX_DELEGATION_TRIGGERS = 8
MAX_RECEIVES_FROM = 5

INSTALL_COMMAND = "npx vibeship-spawner-skills install"
REPO_LINK = "https://github.com/vibeforge1111/vibeship-spawner-skills"


@_dataclasses.dataclass
class BuildResult:
    """Outcome of a distribution build."""

    output_dir: _pathlib.Path
    generated: list[_pathlib.Path] = _dataclasses.field(default_factory=list)
    skipped: list[str] = _dataclasses.field(default_factory=list)


def read_yaml(path: _pathlib.Path) -> _typing.Any:
    """
    Read a YAML file, falling back to regex extraction if it won't parse.

    Returns:
        Parsed data, or None if the file is missing or unreadable.
    """
    if not path.exists():
        return None
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        _logger.warning("Failed to read %s: %s", path, e)
        return None
    try:
        return _yaml.safe_load(content)
    except _yaml.YAMLError:
        _logger.debug("Fallback parsing %s", path.name)
        return extract.extract_yaml_fields(content)


def read_markdown(path: _pathlib.Path) -> str | None:
    if not path.exists():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        _logger.warning("Failed to read %s: %s", path, e)
        return None


def _strip_title(content: str, title: str) -> str:
    """Drop a leading ``# <title>: ...`` heading from a prose file."""
    return _re.sub(rf"^#\s+{title}:.*\n+", "", content, count=1, flags=_re.MULTILINE).strip()


def _as_list(value: _typing.Any) -> list[_typing.Any]:
    return value if isinstance(value, list) else []


def format_sharp_edges(data: _typing.Any) -> str:
    """Render the first sharp edges of a sharp-edges.yaml document."""
    if not isinstance(data, dict):
        return ""
    md = ""
    for edge in _as_list(data.get("sharp_edges"))[:MAX_SHARP_EDGES]:
        if not isinstance(edge, dict):
            continue
        severity = f"[{str(edge['severity']).upper()}]" if edge.get("severity") else ""
        md += f"### {severity} {edge.get('summary', '')}\n\n"
        if edge.get("situation"):
            md += f"**Situation:** {edge['situation']}\n\n"
        if edge.get("why"):
            md += f"**Why it happens:**\n{edge['why']}\n\n"
        if edge.get("solution"):
            md += f"**Solution:**\n```\n{edge['solution']}\n```\n\n"
        symptoms = _as_list(edge.get("symptoms"))
        if symptoms:
            md += "**Symptoms:**\n" + "\n".join(f"- {s}" for s in symptoms) + "\n\n"
        md += "---\n\n"
    return md


def format_collaboration(data: _typing.Any) -> str:
    """Render hand-off triggers and upstream skills from collaboration.yaml."""
    if not isinstance(data, dict):
        return ""
    md = ""

    triggers = _as_list(data.get("delegation_triggers"))
    if triggers:
        md += "### When to Hand Off\n\n"
        md += "| Trigger | Delegate To | Context |\n"
        md += "|---------|-------------|--------|\n"
        for trigger in triggers[:MAX_DELEGATION_TRIGGERS]:
            if not isinstance(trigger, dict):
                continue
            md += (
                f"| `{trigger.get('trigger') or ''}` | {trigger.get('delegate_to') or ''} "
                f"| {trigger.get('context') or ''} |\n"
            )
        md += "\n"

    sources = _as_list(data.get("receives_from"))
    if sources:
        md += "### Receives Work From\n\n"
        for source in sources[:MAX_RECEIVES_FROM]:
            if not isinstance(source, dict):
                continue
            md += f"- **{source.get('skill', '')}**: {source.get('context') or ''}\n"
        md += "\n"

    return md


def format_patterns(patterns: _typing.Any) -> str:
    md = ""
    for pattern in _as_list(patterns):
        if isinstance(pattern, str):
            md += f"- {pattern}\n"
        elif isinstance(pattern, dict) and pattern.get("name"):
            md += f"### {pattern['name']}\n"
            if pattern.get("description"):
                md += f"{pattern['description']}\n"
            if pattern.get("when"):
                md += f"**When:** {pattern['when']}\n"
            if pattern.get("implementation"):
                md += f"```\n{pattern['implementation']}\n```\n"
            md += "\n"
    return md


def format_anti_patterns(anti_patterns: _typing.Any) -> str:
    md = ""
    for anti in _as_list(anti_patterns):
        if isinstance(anti, str):
            md += f"- {anti}\n"
        elif isinstance(anti, dict) and anti.get("name"):
            md += f"### {anti['name']}\n"
            if anti.get("description"):
                md += f"{anti['description']}\n"
            if anti.get("why_bad"):
                md += f"**Why it's bad:** {anti['why_bad']}\n"
            if anti.get("instead"):
                md += f"**Instead:** {anti['instead']}\n"
            md += "\n"
    return md


def _format_identity(identity: _typing.Any) -> str:
    if isinstance(identity, (dict, list)):
        return _yaml.safe_dump(identity, sort_keys=False, allow_unicode=True).strip()
    return str(identity)


def generate_skill_markdown(skill_dir: _pathlib.Path, category: str, skill_name: str) -> str | None:
    """
    Render one skill directory as a single Markdown document.

    Returns:
        The document, or None when skill.yaml is missing or empty.
    """
    skill = read_yaml(skill_dir / constants.SKILL_FILE)
    if not isinstance(skill, dict):
        _logger.warning("Skipping %s: no skill.yaml found", skill_name)
        return None

    sharp_edges_yaml = read_yaml(skill_dir / constants.SHARP_EDGES_FILE)
    collaboration_yaml = read_yaml(skill_dir / constants.COLLABORATION_FILE)
    patterns_md = read_markdown(skill_dir / "patterns.md")
    anti_patterns_md = read_markdown(skill_dir / "anti-patterns.md")
    sharp_edges_md = read_markdown(skill_dir / "sharp-edges.md")
    decisions_md = read_markdown(skill_dir / "decisions.md")

    name = skill.get("name") or skill_name
    description = skill.get("description") or ""
    version = skill.get("version") or "1.0.0"

    md = f"# {name}\n\n"
    md += f"> {description}\n\n"
    md += f"**Category:** {category} | **Version:** {version}\n\n"

    tags = _as_list(skill.get("tags"))
    if tags:
        md += f"**Tags:** {', '.join(str(t) for t in tags)}\n\n"
    md += "---\n\n"

    if skill.get("identity"):
        md += f"## Identity\n\n{_format_identity(skill['identity'])}\n\n"

    owns = _as_list(skill.get("owns"))
    if owns:
        md += "## Expertise Areas\n\n" + "\n".join(f"- {o}" for o in owns) + "\n\n"

    md += "## Patterns\n\n"
    if patterns_md:
        md += f"{_strip_title(patterns_md, 'Patterns')}\n\n"
    elif skill.get("patterns"):
        md += format_patterns(skill["patterns"]) + "\n"
    else:
        md += "*Patterns documented in full version.*\n\n"

    if anti_patterns_md or _as_list(skill.get("anti_patterns")):
        md += "## Anti-Patterns\n\n"
        if anti_patterns_md:
            md += f"{_strip_title(anti_patterns_md, 'Anti-Patterns')}\n\n"
        else:
            md += format_anti_patterns(skill["anti_patterns"]) + "\n"

    md += "## Sharp Edges (Gotchas)\n\n"
    md += "*Real production issues that cause outages and bugs.*\n\n"
    if sharp_edges_md:
        md += f"{_strip_title(sharp_edges_md, 'Sharp Edges')}\n\n"
    elif sharp_edges_yaml:
        md += format_sharp_edges(sharp_edges_yaml)
    else:
        md += "*Sharp edges documented in full version.*\n\n"

    if decisions_md:
        md += f"## Decision Framework\n\n{_strip_title(decisions_md, 'Decisions')}\n\n"

    if collaboration_yaml:
        md += "## Collaboration\n\n" + format_collaboration(collaboration_yaml)

    pairs_with = _as_list(skill.get("pairs_with"))
    if pairs_with:
        md += "### Works Well With\n\n" + "\n".join(f"- {p}" for p in pairs_with) + "\n\n"

    md += _footer(
        category,
        skill_name,
        patterns_md=bool(patterns_md),
        anti_patterns_md=bool(anti_patterns_md),
        sharp_edges_md=bool(sharp_edges_md),
        decisions_md=bool(decisions_md),
    )
    return md


def _footer(
    category: str,
    skill_name: str,
    *,
    patterns_md: bool,
    anti_patterns_md: bool,
    sharp_edges_md: bool,
    decisions_md: bool,
) -> str:
    md = "---\n\n"
    md += "## Get the Full Version\n\n"
    md += (
        "This skill has **automated validations**, **detection patterns**, and "
        "**structured handoff triggers** that work with the Spawner orchestrator.\n\n"
    )
    md += f"```bash\n{INSTALL_COMMAND}\n```\n\n"
    md += f"Full skill path: `~/.spawner/skills/{category}/{skill_name}/`\n\n"
    md += "**Includes:**\n"
    md += "- `skill.yaml` - Structured skill definition\n"
    md += "- `sharp-edges.yaml` - Machine-parseable gotchas with detection patterns\n"
    md += "- `validations.yaml` - Automated code checks\n"
    md += "- `collaboration.yaml` - Handoff triggers for skill orchestration\n"

    # decisions.md alone doesn't earn a "Deep content" block
    if patterns_md or anti_patterns_md or sharp_edges_md:
        md += "\n**Deep content:**\n"
        if patterns_md:
            md += "- `patterns.md` - Comprehensive pattern library\n"
        if anti_patterns_md:
            md += "- `anti-patterns.md` - What to avoid and why\n"
        if sharp_edges_md:
            md += "- `sharp-edges.md` - Detailed gotcha documentation\n"
        if decisions_md:
            md += "- `decisions.md` - Decision frameworks\n"

    md += "\n---\n\n"
    md += f"*Generated by [VibeShip Spawner]({REPO_LINK})*\n"
    return md


def list_categories(root: _pathlib.Path) -> list[str]:
    """Top-level directories that can hold skills, sorted."""
    return sorted(
        p.name
        for p in root.iterdir()
        if p.is_dir() and p.name not in SKIP_DIRS and not p.name.startswith(".")
    )


def list_category_skills(category_dir: _pathlib.Path) -> list[str]:
    """Skill directories (those with a skill.yaml) in a category, sorted."""
    return sorted(
        p.name
        for p in category_dir.iterdir()
        if p.is_dir() and (p / constants.SKILL_FILE).exists()
    )


def build_dist(
    root: _pathlib.Path,
    only: str | None = None,
    *,
    output_dir: _pathlib.Path | None = None,
) -> BuildResult:
    """
    Generate the Markdown distribution.

    Args:
        root: Skill library root.
        only: Build just the skill directory with this name.
        output_dir: Destination (default: ``<root>/dist``).

    Returns:
        Paths written and skills skipped.
    """
    result = BuildResult(output_dir=output_dir or root / "dist")
    result.output_dir.mkdir(parents=True, exist_ok=True)

    for category in list_categories(root):
        skills = list_category_skills(root / category)
        if not skills:
            continue
        category_out = result.output_dir / category
        category_out.mkdir(parents=True, exist_ok=True)

        for skill_name in skills:
            if only and skill_name != only:
                continue
            content = generate_skill_markdown(root / category / skill_name, category, skill_name)
            if content is None:
                result.skipped.append(f"{category}/{skill_name}")
                continue
            out_path = category_out / f"{skill_name}.md"
            out_path.write_text(content, encoding="utf-8")
            _logger.debug("Wrote %s", out_path)
            result.generated.append(out_path)

    _logger.info(
        "Generated %d skills (%d skipped) in %s",
        len(result.generated),
        len(result.skipped),
        result.output_dir,
    )
    return result
