"""
Fixed onboarding template.

Every new project is seeded with the same milestones. Phase 1 ships with its
full task list; Phase 2 and Phase 3 milestones are skeletons that start with
no tasks.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from launchpath.models.enums import Phase
from launchpath.models.task import PRIMARY_KEYWORD_PLACEHOLDER


@dataclass(frozen=True)
class TaskTemplate:
    name: str
    description: str | None = None
    external_link: str | None = None


@dataclass(frozen=True)
class MilestoneTemplate:
    phase: Phase
    name: str
    order_index: int
    tasks: tuple[TaskTemplate, ...] = field(default_factory=tuple)


_KW = PRIMARY_KEYWORD_PLACEHOLDER

PHASE_1_MILESTONES: tuple[MilestoneTemplate, ...] = (
    MilestoneTemplate(
        Phase.PHASE_1,
        "Idea Validation",
        1,
        (
            TaskTemplate("Describe Your SaaS Idea"),
            TaskTemplate("Validate via Lightweight Survey", "Paste the survey URL once it is live."),
            TaskTemplate("Conduct 5 User Interviews"),
            TaskTemplate("Summarize Key Insights"),
        ),
    ),
    MilestoneTemplate(
        Phase.PHASE_1,
        "Competitor & Market Research",
        2,
        (
            TaskTemplate(
                "Research Top 5 Competitors on G2",
                "Competitor intelligence & reviews",
                f"https://www.g2.com/search?query={_KW}",
            ),
            TaskTemplate(
                "Research Top 5 Competitors on Capterra",
                "Software reviews and comparisons",
                f"https://www.capterra.com/search/?query={_KW}",
            ),
            TaskTemplate(
                "Scan Reddit with Gummy Search",
                "Reddit search for market research",
                f"https://gummysearch.com/?q={_KW}",
            ),
            TaskTemplate(
                "Analyze Trends on Google Trends",
                "Search trend analysis",
                f"https://trends.google.com/trends/explore?q={_KW}",
            ),
            TaskTemplate("Summarize Market Gaps & Opportunities"),
        ),
    ),
    MilestoneTemplate(
        Phase.PHASE_1,
        "Define Your SaaS Solution",
        3,
        (
            TaskTemplate("Write Problem Statement"),
            TaskTemplate("Write Unique Value Proposition (UVP)"),
            TaskTemplate("List Must-Have Features for MVP"),
            TaskTemplate("Create User Persona(s)"),
        ),
    ),
    MilestoneTemplate(
        Phase.PHASE_1,
        "Select Your Tool Stack",
        4,
        (
            TaskTemplate("Confirm Frontend Builder"),
            TaskTemplate("Confirm Backend / Database"),
            TaskTemplate("Confirm Automation Tool"),
            TaskTemplate("Confirm Payment Processor & Deployment"),
        ),
    ),
)

PHASE_2_MILESTONES: tuple[MilestoneTemplate, ...] = (
    MilestoneTemplate(Phase.PHASE_2, "Backend Setup", 1),
    MilestoneTemplate(Phase.PHASE_2, "Frontend MVP", 2),
    MilestoneTemplate(Phase.PHASE_2, "Authentication & User Roles", 3),
    MilestoneTemplate(Phase.PHASE_2, "Automations & Workflows", 4),
    MilestoneTemplate(Phase.PHASE_2, "Deployment & Testing", 5),
)

PHASE_3_MILESTONES: tuple[MilestoneTemplate, ...] = (
    MilestoneTemplate(Phase.PHASE_3, "Pre-Launch Preparedness", 1),
    MilestoneTemplate(Phase.PHASE_3, "Organic Marketing", 2),
    MilestoneTemplate(Phase.PHASE_3, "Paid & Affiliate Marketing", 3),
    MilestoneTemplate(Phase.PHASE_3, "Launch Day & Post-Launch", 4),
)

ONBOARDING_TEMPLATE: tuple[MilestoneTemplate, ...] = (
    PHASE_1_MILESTONES + PHASE_2_MILESTONES + PHASE_3_MILESTONES
)


def milestones_for_phase(phase: Phase) -> tuple[MilestoneTemplate, ...]:
    return tuple(m for m in ONBOARDING_TEMPLATE if m.phase == phase)


def task_count(phase: Phase) -> int:
    return sum(len(m.tasks) for m in milestones_for_phase(phase))
