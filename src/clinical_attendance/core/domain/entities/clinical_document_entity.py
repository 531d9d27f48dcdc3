from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from odonto_core.core.domain.entities._base import EntityMixin


class DocumentType(StrEnum):
    ATESTADO = "ATESTADO"
    PRESCRICAO = "PRESCRICAO"
    EXAME = "EXAME"
    ENCAMINHAMENTO = "ENCAMINHAMENTO"


@dataclass(slots=True)
class ClinicalDocumentEntity(EntityMixin):
    id: uuid.UUID
    attendance_id: uuid.UUID
    type: str
    generated_by: uuid.UUID
    payload: dict = field(default_factory=dict)
    generated_at: datetime | None = None
