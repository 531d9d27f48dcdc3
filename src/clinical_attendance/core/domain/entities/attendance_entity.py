from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from odonto_core.core.domain.entities._base import EntityMixin, nested


class AttendanceStatus(StrEnum):
    CHECKED_IN = "CHECKED_IN"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELED = "CANCELED"
    NO_SHOW = "NO_SHOW"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    AttendanceStatus.CHECKED_IN: "Check-in",
    AttendanceStatus.IN_PROGRESS: "Em Atendimento",
    AttendanceStatus.DONE: "Finalizado",
    AttendanceStatus.CANCELED: "Cancelado",
    AttendanceStatus.NO_SHOW: "Não Compareceu",
}

ACTIVE_STATUSES = frozenset({AttendanceStatus.CHECKED_IN, AttendanceStatus.IN_PROGRESS})
COMPLETED_STATUSES = frozenset({AttendanceStatus.DONE, AttendanceStatus.CANCELED, AttendanceStatus.NO_SHOW})


@dataclass(slots=True)
class AttendanceEntity(EntityMixin):
    """
    Uma visita clínica, do check-in à finalização ou cancelamento.

    Os campos `nested` chegam preenchidos pelo repositório: resumo do
    paciente, dentista e agendamento, CIDs, procedimentos, odontograma
    e documentos gerados.
    """
    id: uuid.UUID
    clinic_id: uuid.UUID
    patient_id: uuid.UUID
    status: str
    arrival_at: datetime
    dentist_id: uuid.UUID | None = None
    appointment_id: uuid.UUID | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    created_by_id: uuid.UUID | None = None
    created_by_role: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    patient: dict | None = nested()
    dentist: dict | None = nested()
    appointment: dict | None = nested()
    cids: list = nested(list)
    procedures: list = nested(list)
    odontogram: dict | None = nested()
    documents: list = nested(list)

    @property
    def status_label(self) -> str:
        return AttendanceStatus(self.status).label

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES
