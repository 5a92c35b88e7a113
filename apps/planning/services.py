# apps/planning/services.py
from apps.history.services import PhaseHistoryRecorder
from apps.planning.adapters.orm_repositories import DjangoPhaseRepository
from apps.planning.application.use_cases import PlanningService
from apps.planning.conf import get_calendar, planning_setting


def get_planning_service() -> PlanningService:
    """PlanningService wired to the ORM, the history log and the configured calendar."""
    return PlanningService(
        repository=DjangoPhaseRepository(),
        recorder=PhaseHistoryRecorder(),
        calendar=get_calendar(),
        separator_width=planning_setting('WEEKEND_SEPARATOR_WIDTH'),
    )
