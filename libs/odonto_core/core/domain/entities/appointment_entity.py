from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from odonto_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class AppointmentEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    patient_id: uuid.UUID
    dentist_id: uuid.UUID
    date: datetime
    status: str
    procedure_id: uuid.UUID | None = None
    notes: str | None = None
