"""Tests for field extraction, skill counting and the YAML lint."""

import pathlib as _pathlib

import spawner.build as build
import spawner.build.counting as counting
import spawner.build.yaml_lint as yaml_lint

MESSY_SKILL = """\
id: template-literals
name: "Template Literals"
version: '1.0.0'
description: |
  Handles template strings.
  Second line.
tags:
  - javascript
  - "strings"
patterns:
  - code: `${broken}: {`
anti_patterns:
  - name: x
handoffs:
  - to: qa
"""


class TestExtractYamlFields:
    """Tests for extract_yaml_fields."""

    def test_simple_fields_strip_quotes(self) -> None:
        fields = build.extract_yaml_fields(MESSY_SKILL)
        assert fields["id"] == "template-literals"
        assert fields["name"] == "Template Literals"
        assert fields["version"] == "1.0.0"

    def test_block_description(self) -> None:
        fields = build.extract_yaml_fields(MESSY_SKILL)
        assert fields["description"] == "Handles template strings.\nSecond line."

    def test_list_fields(self) -> None:
        fields = build.extract_yaml_fields(MESSY_SKILL)
        assert fields["tags"] == ["javascript", "strings"]

    def test_placeholders_for_rich_sections(self) -> None:
        fields = build.extract_yaml_fields(MESSY_SKILL)
        assert fields["patterns"][0]["name"] == "See full skill for patterns"
        assert fields["anti_patterns"][0]["name"] == "See full skill for anti-patterns"
        assert fields["handoffs"] == [{"to": "various", "when": "See full skill"}]

    def test_nothing_recognised(self) -> None:
        assert build.extract_yaml_fields("just: [garbage\n") is None


class TestCountSkills:
    """Tests for count_skills and sync_counts."""

    def test_counts_per_category(self, skills_root: _pathlib.Path) -> None:
        result = build.count_skills(skills_root)
        assert result.categories == {"ai": 1, "development": 3, "integrations": 2}
        assert result.total == 6

    def test_by_size(self, skills_root: _pathlib.Path) -> None:
        result = build.count_skills(skills_root)
        assert result.by_size()[0] == ("development", 3)

    def test_excluded_directories(self, tmp_path: _pathlib.Path) -> None:
        for name in ("scripts/tool", "cli/bin", ".github/workflows", "dist/ai", "real/skill"):
            (tmp_path / name).mkdir(parents=True)
        assert build.count_skills(tmp_path).categories == {"real": 1}

    def test_sync_rewrites_counts(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / "cat" / "a").mkdir(parents=True)
        (tmp_path / "cat" / "b").mkdir(parents=True)
        (tmp_path / "README.md").write_text("We ship **100+ skills** today.\n")
        (tmp_path / "cli").mkdir()
        (tmp_path / "cli" / "README.md").write_text("Over 100+ specialist skills.\n")

        outcomes = {o.path: o.status for o in build.sync_counts(tmp_path)}

        assert outcomes == {
            "README.md": "updated",
            "cli/README.md": "updated",
            "cli/package.json": "missing",
        }
        assert (tmp_path / "README.md").read_text() == "We ship **2+ skills** today.\n"
        assert (tmp_path / "cli" / "README.md").read_text() == "Over 2+ specialist skills.\n"

    def test_sync_unchanged(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / "README.md").write_text("We ship **7+ skills**.\n")
        target = (counting.COUNT_TARGETS[0],)
        outcomes = build.sync_counts(tmp_path, total=7, targets=target)
        assert [o.status for o in outcomes] == ["unchanged"]


class TestLintYaml:
    """Tests for lint_yaml."""

    def test_reports_broken_file(self, skills_root: _pathlib.Path) -> None:
        report = build.lint_yaml(skills_root)

        assert not report.ok
        assert len(report.problems) == 1
        problem = report.problems[0]
        assert problem.file == "development/broken/skill.yaml"
        assert problem.line is not None
        assert problem.location == f"{problem.line}:{problem.column}"

    def test_skips_ignored_directories(self, skills_root: _pathlib.Path) -> None:
        (skills_root / "node_modules" / "pkg" / "bad.yaml").write_text("a: [\n")
        report = build.lint_yaml(skills_root)
        assert all("node_modules" not in p.file for p in report.problems)

    def test_counts_checked_files(self, skills_root: _pathlib.Path) -> None:
        # 6 skill.yaml + 2 validations.yaml + 1 sharp-edges.yaml
        assert build.lint_yaml(skills_root).checked == 9

    def test_empty_files_ignored(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / "empty.yaml").write_text("   \n")
        report = build.lint_yaml(tmp_path)
        assert report.ok
        assert report.checked == 1

    def test_check_yaml_location_is_one_based(self) -> None:
        problem = yaml_lint.check_yaml("ok: 1\nbad: [unclosed\n", "f.yaml")
        assert problem is not None
        assert problem.line is not None and problem.line >= 2
        assert problem.snippet

    def test_check_yaml_valid(self) -> None:
        assert yaml_lint.check_yaml("a: 1\n", "f.yaml") is None
