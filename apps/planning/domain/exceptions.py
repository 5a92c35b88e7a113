# apps/planning/domain/exceptions.py


class PlanningError(ValueError):
    """Base error of the planning core."""


class InvalidDurationError(PlanningError):
    pass


class PhaseNotFoundError(PlanningError):
    def __init__(self, phase_id):
        super().__init__(f"Phase {phase_id} not found")
        self.phase_id = phase_id


class PhaseCommitError(PlanningError):
    """Batch of phase updates could not be applied (nothing was written)."""
