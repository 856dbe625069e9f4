"""
Tests that enforce coding standards.

Checks the import convention, the module logger convention and that
nothing outside the CLI writes to stdout (the stdio transport owns it).
"""

import pathlib as _pathlib
import re as _re

import pytest as _pytest

SRC_DIR = _pathlib.Path(__file__).parent.parent / "src" / "spawner"
TESTS_DIR = _pathlib.Path(__file__).parent.parent / "tests"

# Only the CLI and the stdio transport may touch stdout
STDOUT_ALLOWED = {"cli", "stdio.py"}

_PRINT_CALL = _re.compile(r"^\s*print\(")
_LOGGER_ASSIGNMENT = "_logger = _logging.getLogger(__name__)"


def _python_files(directory: _pathlib.Path) -> list[_pathlib.Path]:
    return sorted(directory.rglob("*.py"))


def _extract_from_imports(content: str) -> list[tuple[int, str]]:
    """
    Find 'from X import Y' statements.

    ``from __future__`` and imports inside TYPE_CHECKING blocks are allowed.

    Returns:
        (line_number, stripped_line) for each violation.
    """
    found: list[tuple[int, str]] = []
    in_type_checking = False

    for i, line in enumerate(content.split("\n"), start=1):
        stripped = line.strip()

        if "if TYPE_CHECKING:" in line or "if _typing.TYPE_CHECKING:" in line:
            in_type_checking = True
            continue

        # Block ends at the next non-indented statement
        if in_type_checking and stripped and not stripped.startswith("#") and line[0] not in " \t":
            in_type_checking = False

        if in_type_checking:
            continue

        if stripped.startswith("from ") and " import " in stripped:
            if stripped.startswith("from __future__ import"):
                continue
            found.append((i, stripped))

    return found


def _import_violations(paths: list[_pathlib.Path]) -> list[str]:
    violations: list[str] = []
    for path in paths:
        # Package __init__ files re-export their public names
        if path.name == "__init__.py":
            continue
        for line_num, line in _extract_from_imports(path.read_text(encoding="utf-8")):
            violations.append(f"{path}:{line_num}: {line}")
    return violations


class TestImportStyle:
    """Tests for import style compliance."""

    def test_src_no_from_imports(self) -> None:
        """Source files should not use 'from X import Y' pattern."""
        violations = _import_violations(_python_files(SRC_DIR))
        if violations:
            _pytest.fail(
                "Found forbidden 'from X import Y' imports:\n"
                + "\n".join(f"  {v}" for v in violations)
                + "\n\nUse 'import X as _x' (external) or 'import X as x' (internal) instead."
            )

    def test_tests_no_from_imports(self) -> None:
        """Test files should not use 'from X import Y' pattern."""
        paths = [p for p in _python_files(TESTS_DIR) if p.name != "test_coding_standards.py"]
        violations = _import_violations(paths)
        if violations:
            _pytest.fail(
                "Found forbidden 'from X import Y' imports:\n"
                + "\n".join(f"  {v}" for v in violations)
            )


class TestLoggingStyle:
    """Module loggers and stdout hygiene."""

    def test_module_loggers_use_module_name(self) -> None:
        """Modules that log get their logger from __name__."""
        offenders = []
        for path in _python_files(SRC_DIR):
            content = path.read_text(encoding="utf-8")
            if "_logger." in content and _LOGGER_ASSIGNMENT not in content:
                offenders.append(str(path))
        assert offenders == []

    def test_no_print_outside_cli(self) -> None:
        """print() would corrupt the stdio protocol stream."""
        offenders = []
        for path in _python_files(SRC_DIR):
            relative = path.relative_to(SRC_DIR)
            if relative.parts[0] in STDOUT_ALLOWED or path.name in STDOUT_ALLOWED:
                continue
            for i, line in enumerate(path.read_text(encoding="utf-8").split("\n"), start=1):
                if _PRINT_CALL.match(line):
                    offenders.append(f"{relative}:{i}")
        assert offenders == []


class TestImportExtraction:
    """Tests for the import extraction logic itself."""

    def test_detects_from_import(self) -> None:
        imports = _extract_from_imports("from pathlib import Path")
        assert imports == [(1, "from pathlib import Path")]

    def test_allows_future_imports(self) -> None:
        assert _extract_from_imports("from __future__ import annotations") == []

    def test_ignores_type_checking_block(self) -> None:
        content = """
import typing as _typing

if _typing.TYPE_CHECKING:
    from spawner.tools.context import ToolContext

def foo():
    pass
"""
        assert _extract_from_imports(content) == []

    def test_detects_import_after_type_checking(self) -> None:
        content = """
import typing as _typing

if _typing.TYPE_CHECKING:
    from allowed import Type

from forbidden import Other
"""
        imports = _extract_from_imports(content)
        assert len(imports) == 1
        assert "from forbidden import Other" in imports[0][1]
