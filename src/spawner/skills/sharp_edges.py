"""
Sharp edges: known production gotchas per skill.

Each skill may ship a sharp-edges.yaml. An edge with a
``detection_pattern`` can be matched against code to flag risk.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import re as _re
import typing as _typing

import yaml as _yaml

import spawner.constants as constants
import spawner.skills.discovery as discovery

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass
class SharpEdge:
    """One gotcha from a sharp-edges.yaml file."""

    id: str
    summary: str
    severity: str
    skill_id: str
    situation: str | None = None
    why: str | None = None
    solution: str | None = None
    symptoms: list[str] = _dataclasses.field(default_factory=list)
    detection_pattern: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, _typing.Any], skill_id: str) -> SharpEdge:
        """Build an edge from its YAML mapping."""
        symptoms = data.get("symptoms") or []
        if not isinstance(symptoms, list):
            symptoms = [symptoms]
        edge_id = str(data.get("id") or "unnamed")
        detection_pattern = data.get("detection_pattern")
        if detection_pattern is not None and not isinstance(detection_pattern, str):
            _logger.warning(
                "Ignoring non-string detection pattern in edge %s of %s", edge_id, skill_id
            )
            detection_pattern = None
        return cls(
            id=edge_id,
            summary=str(data.get("summary") or edge_id),
            severity=str(data.get("severity") or "medium"),
            skill_id=skill_id,
            situation=data.get("situation"),
            why=data.get("why"),
            solution=data.get("solution"),
            symptoms=[str(s) for s in symptoms],
            detection_pattern=detection_pattern,
        )

    def matches(self, code: str) -> bool:
        """
        Whether the detection pattern occurs in ``code`` (case-insensitive).

        Edges without a pattern never match. Invalid patterns are logged.
        """
        if not self.detection_pattern:
            return False
        try:
            return _re.search(self.detection_pattern, code, _re.IGNORECASE) is not None
        except _re.error as e:
            _logger.warning("Invalid detection pattern in edge %s: %s", self.id, e)
            return False

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, _typing.Any] = {
            "id": self.id,
            "summary": self.summary,
            "severity": self.severity,
            "skill_id": self.skill_id,
        }
        if self.situation is not None:
            data["situation"] = self.situation
        if self.why is not None:
            data["why"] = self.why
        if self.solution is not None:
            data["solution"] = self.solution
        if self.symptoms:
            data["symptoms"] = self.symptoms
        if self.detection_pattern is not None:
            data["detection_pattern"] = self.detection_pattern
        return data


def load_sharp_edges(skill_discovery: discovery.SkillDiscovery) -> list[SharpEdge]:
    """
    Load every edge from every sharp-edges.yaml below the library root.

    The owning skill is the directory that holds the file.
    """
    edges: list[SharpEdge] = []
    for path in skill_discovery.find_files(constants.SHARP_EDGES_FILE):
        try:
            data = _yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, _yaml.YAMLError) as e:
            _logger.error("Error loading sharp edges from %s: %s", path, e)
            continue
        if not isinstance(data, dict):
            continue
        entries = data.get("sharp_edges")
        if not isinstance(entries, list):
            continue
        skill_id = path.parent.name
        edges.extend(
            SharpEdge.from_dict(entry, skill_id)
            for entry in entries
            if isinstance(entry, dict)
        )

    _logger.info("Loaded %d sharp edges", len(edges))
    return edges


class SharpEdgeScanner:
    """Filters loaded sharp edges by skill and by code."""

    def __init__(self, skill_discovery: discovery.SkillDiscovery) -> None:
        self._discovery = skill_discovery
        self._edges: list[SharpEdge] | None = None

    @property
    def edges(self) -> list[SharpEdge]:
        """All loaded edges (loaded on first access)."""
        if self._edges is None:
            self._edges = load_sharp_edges(self._discovery)
        return self._edges

    def reload(self) -> None:
        """Drop cached edges so the next call reloads them."""
        self._edges = None

    def check(
        self,
        code: str | None = None,
        skill_id: str | None = None,
    ) -> list[SharpEdge]:
        """
        Find relevant sharp edges.

        Args:
            code: If given, keep only edges whose pattern matches it.
            skill_id: If given, only consider that skill's edges.

        Returns:
            Matching edges in load order.
        """
        edges = self.edges
        if skill_id:
            edges = [e for e in edges if e.skill_id == skill_id]
        if code:
            edges = [e for e in edges if e.matches(code)]
        return list(edges)
