from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from odonto_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class PatientEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    name: str
    email: str | None = None
    phone: str | None = None
    cpf: str | None = None
    birth_date: datetime | None = None
    address: str | None = None
    notes: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def masked_cpf(self) -> str | None:
        if not self.cpf or len(self.cpf) < 3:  # noqa: PLR2004
            return None
        return f"***.***.***-{self.cpf[-2:]}"
