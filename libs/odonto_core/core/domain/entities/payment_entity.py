from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from odonto_core.core.domain.entities._base import EntityMixin, nested


class PaymentMethod(StrEnum):
    CASH = "CASH"
    PIX = "PIX"
    CARD = "CARD"


@dataclass(slots=True)
class PaymentEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    amount: Decimal
    method: str
    patient_id: uuid.UUID | None = None
    description: str | None = None
    created_at: datetime | None = None
    patient: dict | None = nested()
    treatment_plans: list[dict] = nested(list)
