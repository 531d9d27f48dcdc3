import uuid
from abc import ABC, abstractmethod

from clinical_attendance.core.domain.entities.clinical_document_entity import ClinicalDocumentEntity


class ClinicalDocumentRepository(ABC):
    @abstractmethod
    def create(self, document: ClinicalDocumentEntity) -> ClinicalDocumentEntity:
        ...

    @abstractmethod
    def find_by_attendance_id(self, attendance_id: uuid.UUID) -> list[ClinicalDocumentEntity]:
        """Mais recentes primeiro."""
        ...
