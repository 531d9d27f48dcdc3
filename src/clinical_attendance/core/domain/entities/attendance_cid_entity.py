from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from odonto_core.core.domain.entities._base import EntityMixin, nested


@dataclass(slots=True)
class AttendanceCidEntity(EntityMixin):
    id: uuid.UUID
    attendance_id: uuid.UUID
    cid_code: str
    description: str
    created_by_dentist_id: uuid.UUID
    observation: str | None = None
    created_at: datetime | None = None
    # categoria vem do catálogo CID, sem chave estrangeira
    category: str | None = nested()
