"""
Shared pytest fixtures for Spawner tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import random as _random
import typing as _typing
import unittest.mock as _mock

import pytest as _pytest
import yaml as _yaml

import spawner.config as config
import spawner.mcp.server as mcp_server
import spawner.skills as skills
import spawner.tools as tools

# =============================================================================
# Sample skill library
# =============================================================================

BACKEND_SKILL: dict[str, _typing.Any] = {
    "id": "backend",
    "name": "Backend Engineering",
    "description": "Designs APIs and services that survive production traffic.",
    "version": "1.2.0",
    "tags": ["api", "services"],
    "identity": {"role": "Senior backend engineer", "personality": "Calm"},
    "owns": ["api-design", "service-boundaries"],
    "patterns": [
        {
            "name": "Idempotent Handlers",
            "description": "Make retries safe.",
            "when": "Any handler that writes",
            "implementation": "check request id before writing",
        }
    ],
    "anti_patterns": [
        {
            "name": "God Service",
            "description": "One service owns everything.",
            "why_bad": "Nobody can deploy it safely.",
            "instead": "Split by bounded context.",
        }
    ],
    "pairs_with": ["frontend"],
}

BACKEND_VALIDATIONS: dict[str, _typing.Any] = {
    "validations": [
        {
            "id": "no-console-log",
            "name": "Console log left in code",
            "severity": "warning",
            "type": "regex",
            "pattern": r"console\.log\(",
            "message": "Remove console.log before shipping.",
            "fix_action": "Use the structured logger",
            "file_patterns": ["*.{ts,js}"],
        },
        {
            "id": "hardcoded-secret",
            "name": "Hardcoded live key",
            "severity": "critical",
            "type": "regex",
            "pattern": r"sk_live_[A-Za-z0-9]+",
            "message": "Live keys belong in the environment.",
        },
        {
            "id": "think-about-scale",
            "name": "Consider scale",
            "severity": "info",
            "type": "conceptual",
            "message": "Will this hold at 10x traffic?",
        },
        {
            "id": "broken-pattern",
            "name": "Broken pattern",
            "severity": "low",
            "type": "regex",
            "pattern": "(unclosed",
            "message": "Never fires.",
        },
    ]
}

STRIPE_SKILL: dict[str, _typing.Any] = {
    "id": "stripe-payments",
    "name": "Stripe Payments",
    "description": "Accept payments with Stripe checkout and webhooks.",
    "tags": ["billing"],
}

STRIPE_SHARP_EDGES: dict[str, _typing.Any] = {
    "sharp_edges": [
        {
            "id": "unverified-webhook",
            "summary": "Webhook signature not verified",
            "severity": "critical",
            "situation": "Handling Stripe webhooks",
            "why": "Anyone can post fake events.",
            "solution": "stripe.webhooks.constructEvent(body, sig, secret)",
            "symptoms": ["Orders marked paid without payment"],
            "detection_pattern": r"JSON\.parse\(req\.body\)",
        },
        {
            "id": "missing-idempotency",
            "summary": "No idempotency key on charges",
            "severity": "high",
        },
    ]
}

STRIPE_VALIDATIONS: dict[str, _typing.Any] = {
    "validations": [
        {
            "id": "stripe-test-key",
            "name": "Test key in code",
            "severity": "medium",
            "type": "regex",
            "pattern": r"sk_test_",
            "message": "Load keys from configuration.",
        }
    ]
}

CONNECT_SKILL: dict[str, _typing.Any] = {
    "id": "stripe-connect",
    "name": "Stripe Connect",
    "description": "Marketplace onboarding and payouts with Stripe Connect.",
}

RAG_SKILL: dict[str, _typing.Any] = {
    "name": "LlamaIndex RAG",
    "description": "Retrieval augmented generation pipelines built on LlamaIndex.",
}

DEBUGGING_SKILL: dict[str, _typing.Any] = {
    "id": "debugging-master",
    "name": "Debugging Master",
    "description": "Systematic debugging for hard problems.",
    "patterns": [
        {"name": "Rubber Ducking", "description": "Talk it through."},
        {
            "name": "Scientific Method Debugging",
            "description": "Hypothesis driven debugging.",
            "guidance": "Form a hypothesis, design an experiment, observe, repeat.",
        },
    ],
}

BROKEN_SKILL_YAML = 'id: broken\nname: Broken Skill\ndescription: "unterminated\n'


def _write_yaml(path: _pathlib.Path, data: _typing.Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


def build_skill_library(root: _pathlib.Path) -> _pathlib.Path:
    """
    Write a small skill library below ``root``.

    Layout::

        ai/llamaindex-rag/skill.yaml              (id from directory)
        development/backend/{skill,validations}.yaml
        development/broken/skill.yaml             (invalid YAML)
        development/debugging-master/skill.yaml
        integrations/stripe-connect/skill.yaml
        integrations/stripe-payments/{skill,sharp-edges,validations}.yaml
        node_modules/pkg/skill.yaml               (ignored)
    """
    _write_yaml(root / "ai" / "llamaindex-rag" / "skill.yaml", RAG_SKILL)
    _write_yaml(root / "development" / "backend" / "skill.yaml", BACKEND_SKILL)
    _write_yaml(root / "development" / "backend" / "validations.yaml", BACKEND_VALIDATIONS)
    broken = root / "development" / "broken" / "skill.yaml"
    broken.parent.mkdir(parents=True)
    broken.write_text(BROKEN_SKILL_YAML, encoding="utf-8")
    _write_yaml(root / "development" / "debugging-master" / "skill.yaml", DEBUGGING_SKILL)
    _write_yaml(root / "integrations" / "stripe-connect" / "skill.yaml", CONNECT_SKILL)
    _write_yaml(root / "integrations" / "stripe-payments" / "skill.yaml", STRIPE_SKILL)
    _write_yaml(root / "integrations" / "stripe-payments" / "sharp-edges.yaml", STRIPE_SHARP_EDGES)
    _write_yaml(root / "integrations" / "stripe-payments" / "validations.yaml", STRIPE_VALIDATIONS)
    vendored = {"id": "vendored", "name": "Vendored"}
    _write_yaml(root / "node_modules" / "pkg" / "skill.yaml", vendored)
    return root


@_pytest.fixture
def skills_root(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """A populated skill library in a temporary directory."""
    return build_skill_library(tmp_path / "skills")


@_pytest.fixture
def catalog(skills_root: _pathlib.Path) -> skills.SkillCatalog:
    return skills.SkillCatalog(skills_root)


@_pytest.fixture
def tool_context(skills_root: _pathlib.Path, tmp_path: _pathlib.Path) -> tools.ToolContext:
    """Tool services over the sample library with a seeded random source."""
    return tools.ToolContext.create(
        skills_root,
        tmp_path / "memory.json",
        rng=_random.Random(0),
    )


@_pytest.fixture
def server(tool_context: tools.ToolContext) -> mcp_server.McpServer:
    return mcp_server.McpServer(tool_context, version="0.1.0")


# =============================================================================
# Environment isolation
# =============================================================================


@_pytest.fixture
def clean_env(tmp_path: _pathlib.Path) -> dict[str, str]:
    """
    Environment with SPAWNER_* removed and the user config dir pointed at tmp.
    """
    env = {k: v for k, v in _os.environ.items() if not k.startswith("SPAWNER_")}
    env["SPAWNER_CONFIG_DIR"] = str(tmp_path / "user-config")
    return env


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]):
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


@_pytest.fixture
def clean_settings(isolated_env, tmp_path: _pathlib.Path, monkeypatch) -> config.Settings:
    """
    Settings isolated from the environment, .env and any project config.
    """
    monkeypatch.chdir(tmp_path)
    with isolated_env:
        return config.Settings.construct_without_dotenv()
