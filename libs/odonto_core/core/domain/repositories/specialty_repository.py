from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

from odonto_core.core.domain.entities.specialty_entity import SpecialtyEntity


class SpecialtyRepository(ABC):
    @abstractmethod
    def find_by_id(self, specialty_id: uuid.UUID, clinic_id: uuid.UUID) -> SpecialtyEntity | None:
        ...

    @abstractmethod
    def find_by_name(
        self, name: str, clinic_id: uuid.UUID, exclude_id: uuid.UUID | None = None
    ) -> SpecialtyEntity | None:
        """Busca por nome sem diferenciar maiúsculas."""
        ...

    @abstractmethod
    def find_many(self, specialty_ids: list[uuid.UUID], clinic_id: uuid.UUID) -> list[SpecialtyEntity]:
        ...

    @abstractmethod
    def create(self, specialty: SpecialtyEntity) -> SpecialtyEntity:
        ...

    @abstractmethod
    def update(self, specialty_id: uuid.UUID, clinic_id: uuid.UUID, changes: dict[str, Any]) -> SpecialtyEntity:
        ...

    @abstractmethod
    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[SpecialtyEntity]:
        ...
