"""
Build tooling for the skill library.

- markdown: flatten skills to single-file Markdown (dist/)
- counting: count skills and sync the advertised count in docs
- yaml_lint: syntax-check every YAML file
"""

from spawner.build.counting import SkillCount, count_skills, sync_counts
from spawner.build.extract import extract_yaml_fields
from spawner.build.markdown import BuildResult, build_dist, generate_skill_markdown
from spawner.build.yaml_lint import LintReport, YamlProblem, lint_yaml

__all__ = [
    "BuildResult",
    "LintReport",
    "SkillCount",
    "YamlProblem",
    "build_dist",
    "count_skills",
    "extract_yaml_fields",
    "generate_skill_markdown",
    "lint_yaml",
    "sync_counts",
]
