import uuid
from abc import ABC, abstractmethod

from clinical_attendance.core.domain.entities.attendance_procedure_entity import AttendanceProcedureEntity


class AttendanceProcedureRepository(ABC):
    @abstractmethod
    def create(self, procedure: AttendanceProcedureEntity) -> AttendanceProcedureEntity:
        ...

    @abstractmethod
    def find_by_id(self, procedure_id: uuid.UUID, attendance_id: uuid.UUID) -> AttendanceProcedureEntity | None:
        """Registro de procedimento pelo ID, restrito ao atendimento."""
        ...

    @abstractmethod
    def find_by_attendance_id(self, attendance_id: uuid.UUID) -> list[AttendanceProcedureEntity]:
        """Mais recentes primeiro."""
        ...

    @abstractmethod
    def delete(self, procedure_id: uuid.UUID, attendance_id: uuid.UUID) -> None:
        """Exclusão física."""
        ...
