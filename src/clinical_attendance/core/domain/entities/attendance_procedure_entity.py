from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from odonto_core.core.domain.entities._base import EntityMixin, nested

TOOTH_FACES = ("O", "M", "D", "V", "L")
CLINICAL_STATUSES = ("SAUDAVEL", "CARIE", "RESTAURADO", "AUSENTE", "EM_TRATAMENTO", "EXTRACAO")


@dataclass(slots=True)
class AttendanceProcedureEntity(EntityMixin):
    """Procedimento executado na visita; `price` é o valor do catálogo no momento do registro."""
    id: uuid.UUID
    attendance_id: uuid.UUID
    dentist_id: uuid.UUID
    clinical_status: str
    procedure_id: uuid.UUID | None = None
    procedure_code: str | None = None
    description: str | None = None
    tooth: str | None = None
    faces: list[str] = field(default_factory=list)
    surface: str | None = None
    quantity: int = 1
    price: Decimal | None = None
    observations: str | None = None
    created_at: datetime | None = None
    procedure: dict | None = nested()
    dentist: dict | None = nested()

    @property
    def record_code(self) -> str:
        if self.procedure_code:
            return self.procedure_code
        if self.procedure_id:
            return str(self.procedure_id)
        return "PROC"
