"""
Best-effort field extraction for YAML that won't parse.

Some skill files embed code samples with template literals that trip up
strict YAML parsers. The distribution build still wants their headline
fields, so this pulls them out with line-oriented regexes.
"""

from __future__ import annotations

import re as _re
import typing as _typing

SIMPLE_FIELDS = ("id", "name", "category", "version", "skill_id", "difficulty")
LIST_FIELDS = ("tags", "triggers", "provides", "references")

_QUOTES = _re.compile(r"^[\"']|[\"']$")
_LIST_ITEM = _re.compile(r"-\s+[\"']?([^\"'\n]+)[\"']?")
_DESCRIPTION = _re.compile(r"^description:\s*\|?\s*\n((?:[ ]{2,}.+\n?)+)", _re.MULTILINE)
_INDENT = _re.compile(r"^[ ]{2,}", _re.MULTILINE)
_HANDOFFS = _re.compile(r"^handoffs:\s*\n\s+-", _re.MULTILINE)


def _list_block(content: str, field: str) -> list[str] | None:
    match = _re.search(rf"^{field}:\s*\n((?:\s+-\s+.+\n?)+)", content, _re.MULTILINE)
    if not match:
        return None
    return [item.strip() for item in _LIST_ITEM.findall(match.group(1))]


def extract_yaml_fields(content: str) -> dict[str, _typing.Any] | None:
    """
    Extract headline fields from YAML text.

    Returns:
        The fields found, or None if nothing was recognised. Patterns,
        anti-patterns and handoffs are only flagged as present with a
        placeholder entry; their structure is too rich to recover.
    """
    extracted: dict[str, _typing.Any] = {}

    for field in SIMPLE_FIELDS:
        match = _re.search(rf"^{field}:\s*(.+)$", content, _re.MULTILINE)
        if match:
            extracted[field] = _QUOTES.sub("", match.group(1).strip())

    description = _DESCRIPTION.search(content)
    if description:
        extracted["description"] = _INDENT.sub("", description.group(1)).strip()

    for field in LIST_FIELDS:
        items = _list_block(content, field)
        if items is not None:
            extracted[field] = items

    if "patterns:" in content:
        extracted["patterns"] = [
            {
                "name": "See full skill for patterns",
                "description": "Contains implementation patterns with code examples",
            }
        ]
    if "anti_patterns:" in content:
        extracted["anti_patterns"] = [
            {
                "name": "See full skill for anti-patterns",
                "description": "Contains anti-patterns with examples",
            }
        ]
    if _HANDOFFS.search(content):
        extracted["handoffs"] = [{"to": "various", "when": "See full skill"}]

    return extracted or None
