from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from odonto_core.core.domain.entities._base import EntityMixin, nested


@dataclass(slots=True)
class RecordEntity(EntityMixin):
    """Prontuário gerado ao finalizar um atendimento."""
    id: uuid.UUID
    clinic_id: uuid.UUID
    patient_id: uuid.UUID
    dentist_id: uuid.UUID
    date: datetime
    description: str
    procedures: list[dict] = field(default_factory=list)
    odontogram: dict | None = None
    appointment_id: uuid.UUID | None = None
    attendance_id: uuid.UUID | None = None
    created_at: datetime | None = None
    patient: dict | None = nested()
    dentist: dict | None = nested()
