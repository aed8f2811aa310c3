"""
Unit tests for the onboarding template.
"""

from launchpath.models.enums import Phase
from launchpath.models.task import PRIMARY_KEYWORD_PLACEHOLDER
from launchpath.services.project_templates import (
    ONBOARDING_TEMPLATE,
    milestones_for_phase,
    task_count,
)


def test_milestone_counts_per_phase():
    assert len(milestones_for_phase(Phase.PHASE_1)) == 4
    assert len(milestones_for_phase(Phase.PHASE_2)) == 5
    assert len(milestones_for_phase(Phase.PHASE_3)) == 4
    assert len(ONBOARDING_TEMPLATE) == 13


def test_only_phase_one_has_tasks():
    assert task_count(Phase.PHASE_1) == 17
    assert task_count(Phase.PHASE_2) == 0
    assert task_count(Phase.PHASE_3) == 0


def test_milestone_order_is_contiguous_within_each_phase():
    for phase in Phase:
        orders = [m.order_index for m in milestones_for_phase(phase)]
        assert orders == list(range(1, len(orders) + 1))


def test_research_links_use_keyword_placeholder():
    research = next(m for m in ONBOARDING_TEMPLATE if m.name == "Competitor & Market Research")
    links = [t.external_link for t in research.tasks if t.external_link]
    assert links
    assert all(PRIMARY_KEYWORD_PLACEHOLDER in link for link in links)
