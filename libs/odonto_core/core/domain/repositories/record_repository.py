from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from odonto_core.core.domain.entities.record_entity import RecordEntity


class RecordRepository(ABC):
    @abstractmethod
    def create(self, record: RecordEntity) -> RecordEntity:
        ...

    @abstractmethod
    def find_by_id(self, record_id: uuid.UUID, clinic_id: uuid.UUID) -> RecordEntity | None:
        ...

    @abstractmethod
    def find_by_attendance_id(self, attendance_id: uuid.UUID) -> RecordEntity | None:
        ...

    @abstractmethod
    def list(self, clinic_id: uuid.UUID, patient_id: uuid.UUID | None = None) -> list[RecordEntity]:
        """Prontuários mais recentes primeiro."""
        ...
