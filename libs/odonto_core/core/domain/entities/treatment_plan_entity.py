from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from odonto_core.core.domain.entities._base import EntityMixin, nested


class TreatmentPlanStatus(StrEnum):
    OPEN = "OPEN"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(slots=True)
class TreatmentItemEntity(EntityMixin):
    id: uuid.UUID
    plan_id: uuid.UUID
    description: str
    value: Decimal
    quantity: int = 1
    tooth: str | None = None
    procedure_id: uuid.UUID | None = None

    @property
    def subtotal(self) -> Decimal:
        return self.value * self.quantity


@dataclass(slots=True)
class TreatmentPlanEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    patient_id: uuid.UUID
    dentist_id: uuid.UUID
    status: str
    total_amount: Decimal
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    items: list[TreatmentItemEntity] = field(default_factory=list)
    patient: dict | None = nested()
    dentist: dict | None = nested()

    @property
    def is_open(self) -> bool:
        return self.status == TreatmentPlanStatus.OPEN


def calculate_total_amount(items) -> Decimal:
    """Soma de `value × quantity` dos itens do orçamento."""
    return sum((Decimal(str(i.value)) * i.quantity for i in items), Decimal("0"))
