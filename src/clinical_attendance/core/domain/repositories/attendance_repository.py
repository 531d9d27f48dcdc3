import uuid
from abc import ABC, abstractmethod
from typing import Any

from clinical_attendance.core.domain.entities.attendance_entity import AttendanceEntity


class AttendanceRepository(ABC):
    @abstractmethod
    def create(self, attendance: AttendanceEntity) -> AttendanceEntity:
        ...

    @abstractmethod
    def find_by_id(self, attendance_id: uuid.UUID, clinic_id: uuid.UUID) -> AttendanceEntity | None:
        """Atendimento completo (paciente, dentista, CIDs, procedimentos...) ou None."""
        ...

    @abstractmethod
    def find_many(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[AttendanceEntity]:
        """Mais recentes primeiro (por chegada)."""
        ...

    @abstractmethod
    def find_waiting_room(
        self, clinic_id: uuid.UUID, dentist_id: uuid.UUID | None = None
    ) -> list[AttendanceEntity]:
        """Fila de espera: apenas CHECKED_IN, ordem de chegada."""
        ...

    @abstractmethod
    def update(self, attendance_id: uuid.UUID, clinic_id: uuid.UUID, changes: dict[str, Any]) -> AttendanceEntity:
        ...

    @abstractmethod
    def find_active_by_appointment(
        self, appointment_id: uuid.UUID, clinic_id: uuid.UUID
    ) -> AttendanceEntity | None:
        ...

    @abstractmethod
    def detach_appointment(self, appointment_id: uuid.UUID, clinic_id: uuid.UUID) -> int:
        """Desvincula o agendamento de atendimentos DONE/CANCELED; retorna quantos."""
        ...
