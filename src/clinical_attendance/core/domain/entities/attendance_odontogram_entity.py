from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from odonto_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class AttendanceOdontogramEntity(EntityMixin):
    id: uuid.UUID
    attendance_id: uuid.UUID
    data: dict[str, str] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None
