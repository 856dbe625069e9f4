"""
Regex code validations.

Skills ship validations.yaml files listing checks for common mistakes.
Only ``type: regex`` rules are machine-checkable; conceptual rules are
kept for display but never fire.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import fnmatch as _fnmatch
import logging as _logging
import re as _re
import typing as _typing

import yaml as _yaml

import spawner.constants as constants
import spawner.skills.discovery as discovery
import spawner.skills.skill as skill_module

_logger = _logging.getLogger(__name__)

# File extensions per language name accepted by validate()
LANGUAGE_EXTENSIONS: dict[str, tuple[str, ...]] = {
    "typescript": ("ts", "tsx", "mts", "cts"),
    "javascript": ("js", "jsx", "mjs", "cjs"),
    "python": ("py",),
    "go": ("go",),
    "rust": ("rs",),
    "java": ("java",),
    "ruby": ("rb",),
    "php": ("php",),
    "solidity": ("sol",),
    "sql": ("sql",),
    "css": ("css", "scss"),
    "html": ("html", "htm"),
    "vue": ("vue",),
    "svelte": ("svelte",),
}

_BRACES = _re.compile(r"\{([^}]*)\}")


@_dataclasses.dataclass
class ValidationRule:
    """One rule from a validations.yaml file."""

    id: str
    name: str
    severity: str
    type: str
    message: str
    skill_id: str
    pattern: str | None = None
    fix_action: str | None = None
    file_patterns: list[str] = _dataclasses.field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, _typing.Any], skill_id: str) -> ValidationRule:
        """Build a rule from its YAML mapping."""
        rule_id = str(data.get("id") or "unnamed")
        file_patterns = data.get("file_patterns") or []
        if not isinstance(file_patterns, list):
            file_patterns = [file_patterns]
        pattern = data.get("pattern")
        if pattern is not None and not isinstance(pattern, str):
            _logger.warning("Ignoring non-string pattern in rule %s of %s", rule_id, skill_id)
            pattern = None
        return cls(
            id=rule_id,
            name=str(data.get("name") or rule_id),
            severity=str(data.get("severity") or "medium"),
            type=str(data.get("type") or "regex"),
            message=str(data.get("message") or ""),
            skill_id=skill_id,
            pattern=pattern,
            fix_action=data.get("fix_action"),
            file_patterns=[str(p) for p in file_patterns],
        )

    def applies_to_language(self, language: str | None) -> bool:
        """
        Whether this rule should run for code in ``language``.

        Rules without file_patterns always apply; so does every rule when no
        language is given.
        """
        if not language or not self.file_patterns:
            return True
        lang = language.lower().lstrip(".")
        extensions = LANGUAGE_EXTENSIONS.get(lang, (lang,))
        for pattern in self.file_patterns:
            for expanded in _expand_braces(pattern.rsplit("/", 1)[-1]):
                if any(_fnmatch.fnmatch(f"file.{ext}", expanded) for ext in extensions):
                    return True
                # Patterns like "route.ts" name a file, not an extension glob
                if any(expanded.endswith(f".{ext}") for ext in extensions):
                    return True
        return False

    def finding(self) -> dict[str, _typing.Any]:
        """Result entry reported when the rule fires."""
        return {
            "rule_id": self.id,
            "name": self.name,
            "severity": self.severity,
            "message": self.message,
            "fix_action": self.fix_action,
        }


def _expand_braces(pattern: str) -> list[str]:
    """Expand one ``{a,b}`` group, which fnmatch doesn't understand."""
    match = _BRACES.search(pattern)
    if not match:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(_expand_braces(head + option.strip() + tail))
    return expanded


def load_validation_rules(
    skill_discovery: discovery.SkillDiscovery,
) -> list[ValidationRule]:
    """
    Load every rule from every validations.yaml below the library root.

    Unreadable files are logged and skipped. Rules belong to the skill
    whose skill.yaml sits beside the file.
    """
    rules: list[ValidationRule] = []
    for path in skill_discovery.find_files(constants.VALIDATIONS_FILE):
        try:
            data = _yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, _yaml.YAMLError) as e:
            _logger.error("Error loading validations from %s: %s", path, e)
            continue
        if not isinstance(data, dict):
            continue
        entries = data.get("validations")
        if not isinstance(entries, list):
            continue
        skill_id = skill_module.skill_id_for_directory(path.parent)
        rules.extend(
            ValidationRule.from_dict(entry, skill_id)
            for entry in entries
            if isinstance(entry, dict)
        )

    _logger.info("Loaded %d validation rules", len(rules))
    return rules


class ValidationEngine:
    """
    Runs regex validation rules against code.

    Rules are loaded lazily on first use and compiled once.
    """

    def __init__(self, skill_discovery: discovery.SkillDiscovery) -> None:
        self._discovery = skill_discovery
        self._rules: list[ValidationRule] | None = None
        self._compiled: dict[int, _re.Pattern[str] | None] = {}

    @property
    def rules(self) -> list[ValidationRule]:
        """All loaded rules."""
        if self._rules is None:
            self._rules = load_validation_rules(self._discovery)
            self._compiled = {}
        return self._rules

    def reload(self) -> None:
        """Drop cached rules so the next call reloads them."""
        self._rules = None
        self._compiled = {}

    def _compile(self, index: int, rule: ValidationRule) -> _re.Pattern[str] | None:
        if index not in self._compiled:
            try:
                self._compiled[index] = _re.compile(rule.pattern or "")
            except _re.error as e:
                _logger.warning("Invalid regex in rule %s: %s", rule.id, e)
                self._compiled[index] = None
        return self._compiled[index]

    def validate(
        self,
        code: str,
        language: str | None = None,
        context: str | None = None,
    ) -> list[dict[str, _typing.Any]]:
        """
        Check code against the loaded rules.

        Args:
            code: Source code to check.
            language: Language of the code; narrows rules with file_patterns.
            context: Skill id; only that skill's rules run.

        Returns:
            One finding per rule whose pattern occurs in the code.
        """
        findings: list[dict[str, _typing.Any]] = []
        for index, rule in enumerate(self.rules):
            if rule.type != "regex" or not rule.pattern:
                continue
            if context and rule.skill_id != context:
                continue
            if not rule.applies_to_language(language):
                continue
            compiled = self._compile(index, rule)
            if compiled is not None and compiled.search(code):
                findings.append(rule.finding())
        return findings
