import uuid
from abc import ABC, abstractmethod

from clinical_attendance.core.domain.entities.attendance_odontogram_entity import AttendanceOdontogramEntity


class AttendanceOdontogramRepository(ABC):
    @abstractmethod
    def upsert(self, attendance_id: uuid.UUID, data: dict[str, str]) -> AttendanceOdontogramEntity:
        """Substitui o documento inteiro (sem merge por dente)."""
        ...

    @abstractmethod
    def find_by_attendance_id(self, attendance_id: uuid.UUID) -> AttendanceOdontogramEntity | None:
        ...
