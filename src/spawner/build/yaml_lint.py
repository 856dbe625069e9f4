"""
Syntax check for every YAML file in the skill library.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import os as _os
import pathlib as _pathlib

import yaml as _yaml

_logger = _logging.getLogger(__name__)

LINT_IGNORED_DIRS = frozenset({"node_modules", ".git", "mcp-server", "dist", "build"})


@_dataclasses.dataclass
class YamlProblem:
    """One file that failed to parse. Line and column are 1-based."""

    file: str
    reason: str
    line: int | None = None
    column: int | None = None
    snippet: str | None = None

    @property
    def location(self) -> str:
        if self.line is None:
            return "unknown"
        return f"{self.line}:{self.column}"


@_dataclasses.dataclass
class LintReport:
    checked: int
    problems: list[YamlProblem]

    @property
    def ok(self) -> bool:
        return not self.problems


def find_yaml_files(root: _pathlib.Path) -> list[_pathlib.Path]:
    """All ``*.yaml`` files below ``root``, outside ignored directories."""
    found: list[_pathlib.Path] = []
    for dirpath, dirnames, filenames in _os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in LINT_IGNORED_DIRS)
        found.extend(_pathlib.Path(dirpath) / f for f in filenames if f.endswith(".yaml"))
    return sorted(found)


def check_yaml(content: str, file: str) -> YamlProblem | None:
    """Parse ``content``; describe the failure if it doesn't parse."""
    try:
        _yaml.safe_load(content)
    except _yaml.MarkedYAMLError as e:
        mark = e.problem_mark or e.context_mark
        return YamlProblem(
            file=file,
            reason=e.problem or e.context or str(e),
            line=mark.line + 1 if mark else None,
            column=mark.column + 1 if mark else None,
            snippet=mark.get_snippet() if mark else None,
        )
    except _yaml.YAMLError as e:
        return YamlProblem(file=file, reason=str(e))
    return None


def lint_yaml(root: _pathlib.Path) -> LintReport:
    """
    Parse every YAML file below ``root``.

    Empty files are skipped. Unreadable files are reported as problems.
    """
    files = find_yaml_files(root)
    problems: list[YamlProblem] = []
    for path in files:
        relative = str(path.relative_to(root))
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            problems.append(YamlProblem(file=relative, reason=str(e)))
            continue
        if not content.strip():
            continue
        problem = check_yaml(content, relative)
        if problem is not None:
            problems.append(problem)

    _logger.info("Checked %d YAML files, %d invalid", len(files), len(problems))
    return LintReport(checked=len(files), problems=problems)
