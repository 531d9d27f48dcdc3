from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity


class ProcedureRepository(ABC):
    @abstractmethod
    def find_by_id(self, procedure_id: uuid.UUID, clinic_id: uuid.UUID) -> ProcedureEntity | None:
        ...

    @abstractmethod
    def find_active_by_ids(self, procedure_ids: list[uuid.UUID], clinic_id: uuid.UUID) -> list[ProcedureEntity]:
        """Somente procedimentos ativos da clínica."""
        ...

    @abstractmethod
    def create(self, procedure: ProcedureEntity) -> ProcedureEntity:
        ...

    @abstractmethod
    def update(self, procedure_id: uuid.UUID, clinic_id: uuid.UUID, changes: dict[str, Any]) -> ProcedureEntity:
        ...

    @abstractmethod
    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[ProcedureEntity]:
        ...

    @abstractmethod
    def has_pending_appointments(self, procedure_id: uuid.UUID) -> bool:
        """Há agendamentos SCHEDULED/CONFIRMED usando o procedimento?"""
        ...
