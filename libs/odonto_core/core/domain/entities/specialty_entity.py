from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from odonto_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class SpecialtyEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    name: str
    description: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
