import uuid
from abc import ABC, abstractmethod

from odonto_core.core.domain.entities.appointment_entity import AppointmentEntity


class AppointmentRepository(ABC):
    @abstractmethod
    def find_by_id(self, appointment_id: uuid.UUID, clinic_id: uuid.UUID) -> AppointmentEntity | None:
        """Retorna o agendamento da clínica pelo ID."""
        ...
