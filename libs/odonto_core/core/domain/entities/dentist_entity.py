from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from odonto_core.core.domain.entities._base import EntityMixin, nested


@dataclass(slots=True)
class DentistEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    user_id: uuid.UUID
    cro: str
    specialty: str | None = None
    working_hours: dict | None = None
    bank_info: dict | None = None
    commission: Decimal | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: dict | None = nested()
    specialties: list[dict] = nested(list)
    procedures: list[dict] = nested(list)

    def belongs_to(self, user_id: uuid.UUID | None) -> bool:
        return user_id is not None and self.user_id == user_id
