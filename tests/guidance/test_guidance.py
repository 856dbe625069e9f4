"""Tests for unstick advice and orchestration plans."""

import pathlib as _pathlib
import random as _random

import spawner.guidance as guidance
import spawner.guidance.unstick as unstick
import spawner.skills as skills


class TestUnstickAdvisor:
    """Tests for UnstickAdvisor."""

    def test_uses_debugging_master_method(self, catalog: skills.SkillCatalog) -> None:
        advice = guidance.UnstickAdvisor(catalog).advise("tests fail randomly")
        assert advice == (
            "## From Debugging Master\n\n"
            "Form a hypothesis, design an experiment, observe, repeat."
        )

    def test_falls_back_to_description(self, tmp_path: _pathlib.Path) -> None:
        skill_file = tmp_path / "dev" / "debugging-master" / "skill.yaml"
        skill_file.parent.mkdir(parents=True)
        skill_file.write_text(
            "id: debugging-master\n"
            "patterns:\n"
            "  - name: The Debugging Process\n"
            "    description: Reproduce, isolate, fix, verify.\n"
        )
        advisor = guidance.UnstickAdvisor(skills.SkillCatalog(tmp_path))
        assert advisor.advise("x") == "## From Debugging Master\n\nReproduce, isolate, fix, verify."

    def test_strategy_when_no_debugging_skill(self, tmp_path: _pathlib.Path) -> None:
        advisor = guidance.UnstickAdvisor(
            skills.SkillCatalog(tmp_path), rng=_random.Random(7)
        )
        advice = advisor.advise("nothing works")

        assert advice.startswith("## Unstick Strategy\n\n")
        assert advice.endswith(unstick.DEBUGGING_CHECKLIST)
        strategy = advice.split("\n\n")[1]
        assert strategy in guidance.STRATEGIES

    def test_strategy_when_no_method_pattern(self, tmp_path: _pathlib.Path) -> None:
        skill_file = tmp_path / "dev" / "debugging-master" / "skill.yaml"
        skill_file.parent.mkdir(parents=True)
        skill_file.write_text("id: debugging-master\npatterns:\n  - name: Logging\n")

        advice = guidance.UnstickAdvisor(skills.SkillCatalog(tmp_path)).advise("x")
        assert advice.startswith("## Unstick Strategy")

    def test_seeded_rng_is_deterministic(self, tmp_path: _pathlib.Path) -> None:
        catalog = skills.SkillCatalog(tmp_path)
        first = guidance.UnstickAdvisor(catalog, rng=_random.Random(3)).advise("x")
        second = guidance.UnstickAdvisor(catalog, rng=_random.Random(3)).advise("x")
        assert first == second

    def test_checklist_has_four_steps(self) -> None:
        steps = [line for line in unstick.DEBUGGING_CHECKLIST.splitlines() if line[:1].isdigit()]
        assert len(steps) == 4


class TestPlanner:
    """Tests for Planner."""

    def test_saas_task(self) -> None:
        plan = guidance.Planner().plan("Build a SaaS for dentists")
        assert plan.startswith('## Orchestration Plan for: "Build a SaaS for dentists"')
        assert "1. **Find Expert Skills**" in plan
        assert "`find_expert_skill`" in plan
        assert plan.endswith("Use these tools to proceed.")

    def test_multiple_sections_numbered_in_order(self) -> None:
        plan = guidance.Planner().plan("create an app, then review for risk")
        assert "1. **Find Expert Skills**" in plan
        assert "2. **Validate Code**" in plan
        assert "3. **Check Sharp Edges**" in plan

    def test_debug_task(self) -> None:
        titles = [r.title for r in guidance.Planner().matching_rules("I'm stuck on an error")]
        assert titles == ["Troubleshoot"]

    def test_unmatched_task_explores(self) -> None:
        plan = guidance.Planner().plan("hello")
        assert "1. **Explore**" in plan
        assert "`list_available_skills`" in plan

    def test_keywords_case_insensitive(self) -> None:
        titles = [r.title for r in guidance.Planner().matching_rules("VALIDATE this")]
        assert titles == ["Validate Code"]

    def test_body_lines_indented(self) -> None:
        plan = guidance.Planner().plan("watch out")
        assert "\n   Use `analyze_risk_sharp_edges` to find potential gotchas." in plan
