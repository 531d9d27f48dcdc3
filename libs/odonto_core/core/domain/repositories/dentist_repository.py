from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

from odonto_core.core.domain.entities.dentist_entity import DentistEntity
from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity


class DentistRepository(ABC):
    @abstractmethod
    def find_by_id(self, dentist_id: uuid.UUID, clinic_id: uuid.UUID) -> DentistEntity | None:
        """Retorna o dentista da clínica com `user`, especialidades e procedimentos."""
        ...

    @abstractmethod
    def find_by_user_id(self, user_id: uuid.UUID, clinic_id: uuid.UUID) -> DentistEntity | None:
        """Retorna o perfil de dentista vinculado ao usuário."""
        ...

    @abstractmethod
    def find_by_cro(
        self, cro: str, clinic_id: uuid.UUID, exclude_id: uuid.UUID | None = None
    ) -> DentistEntity | None:
        ...

    @abstractmethod
    def create(self, dentist: DentistEntity) -> DentistEntity:
        ...

    @abstractmethod
    def update(self, dentist_id: uuid.UUID, clinic_id: uuid.UUID, changes: dict[str, Any]) -> DentistEntity:
        ...

    @abstractmethod
    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[DentistEntity]:
        """Lista dentistas ativos filtrando por `specialty` e `search` (nome, e-mail, CRO)."""
        ...

    @abstractmethod
    def has_procedure(self, dentist_id: uuid.UUID, procedure_id: uuid.UUID) -> bool:
        """Indica se existe vínculo DentistProcedure."""
        ...

    @abstractmethod
    def linked_procedures(self, dentist_id: uuid.UUID, clinic_id: uuid.UUID) -> dict[uuid.UUID, ProcedureEntity]:
        """Procedimentos ativos vinculados ao dentista, indexados por ID."""
        ...

    @abstractmethod
    def replace_procedures(self, dentist_id: uuid.UUID, procedure_ids: list[uuid.UUID]) -> None:
        """Substitui, atomicamente, todo o conjunto de vínculos de procedimentos."""
        ...

    @abstractmethod
    def replace_specialties(self, dentist_id: uuid.UUID, specialty_ids: list[uuid.UUID]) -> None:
        """Substitui, atomicamente, todas as especialidades associadas."""
        ...

    @abstractmethod
    def remove_specialty(self, dentist_id: uuid.UUID, specialty_id: uuid.UUID) -> bool:
        """Remove o vínculo; retorna False se ele não existia."""
        ...
