from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from odonto_core.core.domain.entities._base import EntityMixin, nested


@dataclass(slots=True)
class ProcedureEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    specialty_id: uuid.UUID
    name: str
    base_value: Decimal
    commission_percentage: Decimal = Decimal("0")
    description: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    specialty: dict | None = nested()
