# apps/planning/ports/repositories.py
from abc import ABC, abstractmethod
from typing import Any, ContextManager, Dict, Iterable, List, Optional
from apps.planning.domain.entities import WorkPhase, PhaseUpdate


class IPhaseRepository(ABC):
    @abstractmethod
    def get_by_id(self, phase_id) -> Optional[WorkPhase]:
        pass

    @abstractmethod
    def list_group(self, chantier_id, group_id) -> List[WorkPhase]:
        """All phases of one chain (same chantier, same group)."""
        pass

    @abstractmethod
    def apply_phase_updates(self, updates: List[PhaseUpdate], extra_fields: Optional[Dict[Any, Dict[str, Any]]] = None) -> None:
        """
        Applies the whole batch or nothing (raises PhaseCommitError).
        ``extra_fields`` carries non-timing fields per phase id (e.g. a new duration).
        """
        pass

    @abstractmethod
    def atomic(self) -> ContextManager:
        """
        Unit of work: everything done inside (batch commit, history) is kept
        together or rolled back together.
        """
        pass

    @abstractmethod
    def assignee_names(self, assignee_ids: Iterable[Any]) -> Dict[Any, str]:
        """Display names of poseurs, for history descriptions."""
        pass
