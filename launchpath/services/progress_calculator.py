"""
Progress calculation utilities.

Pure functions for milestone, phase and project completion, and the phase
unlock predicate. Everything here is evaluated from stored values and has no
I/O, so the repository and the API share one definition of each figure.
"""

from __future__ import annotations

from launchpath.core.exceptions import PhaseLockedError
from launchpath.models.enums import Phase
from launchpath.models.progress import DashboardMetrics, PhaseProgress, ProjectProgress
from launchpath.models.project import Project


def _round_half_up(numerator: int, denominator: int) -> int:
    # Integer form of floor(n / d + 0.5) for non-negative inputs
    return (2 * numerator + denominator) // (2 * denominator)


def completion_pct(completed: int, total: int) -> int:
    """round(100 * completed / total), or 0 when there is nothing to complete."""
    if total <= 0:
        return 0
    completed = max(0, min(completed, total))
    return _round_half_up(100 * completed, total)


def overall_completion(phase1: int, phase2: int, phase3: int) -> int:
    """Equal-weighted mean of the three phase percentages."""
    return _round_half_up(phase1 + phase2 + phase3, 3)


def is_phase_unlocked(phase: Phase, project: Project) -> bool:
    """Phase 1 is always open; any later phase needs its predecessor at exactly 100."""
    previous = phase.previous
    if previous is None:
        return True
    return project.phase_completion(previous) == 100


def ensure_phase_unlocked(phase: Phase, project: Project) -> None:
    if not is_phase_unlocked(phase, project):
        raise PhaseLockedError(phase.number, project.phase_completion(phase.previous))


def current_phase(project: Project) -> Phase:
    """The furthest phase the project has unlocked."""
    latest = Phase.PHASE_1
    for phase in Phase:
        if not is_phase_unlocked(phase, project):
            break
        latest = phase
    return latest


def newly_unlocked_phase(phase: Phase, before: int, after: int) -> Phase | None:
    """The phase opened by moving `phase` from `before` to `after` percent, if any."""
    if before < 100 and after == 100:
        return phase.next
    return None


def build_project_progress(project: Project) -> ProjectProgress:
    phases = [
        PhaseProgress(
            phase=phase,
            label=phase.label,
            completion=project.phase_completion(phase),
            unlocked=is_phase_unlocked(phase, project),
        )
        for phase in Phase
    ]
    return ProjectProgress(
        project_id=project.id,
        phases=phases,
        overall_complete=project.overall_complete,
        current_phase=current_phase(project),
    )


def dashboard_metrics(
    total_active: int,
    overall_sum: int,
    phase1_count: int,
    phase2_count: int,
    phase3_count: int,
) -> DashboardMetrics:
    """Dashboard figures from per-owner totals over active projects."""
    if total_active <= 0:
        return DashboardMetrics()
    return DashboardMetrics(
        total_active=total_active,
        avg_completion=_round_half_up(overall_sum, total_active),
        phase1_count=phase1_count,
        phase2_count=phase2_count,
        phase3_count=phase3_count,
    )
