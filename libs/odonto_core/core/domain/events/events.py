from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal


# ───────────────────────────────────────────────
# Event Base e Domain Events
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

# ╭──────────────────────────────────────────────╮
# │ 1. Cadastros                                 │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True, kw_only=True)
class PatientDeactivatedEvent(DomainEvent):
    patient_id: uuid.UUID
    clinic_id: uuid.UUID

@dataclass(frozen=True, kw_only=True)
class DentistCreatedEvent(DomainEvent):
    dentist_id: uuid.UUID
    clinic_id: uuid.UUID
    user_id: uuid.UUID

# ╭──────────────────────────────────────────────╮
# │ 2. Financeiro                                │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True, kw_only=True)
class PaymentRegisteredEvent(DomainEvent):
    payment_id: uuid.UUID
    clinic_id: uuid.UUID
    amount: Decimal
    method: str
    approved_plan_ids: tuple[uuid.UUID, ...] = ()

@dataclass(frozen=True, kw_only=True)
class TreatmentPlanStatusChangedEvent(DomainEvent):
    plan_id: uuid.UUID
    clinic_id: uuid.UUID
    old_status: str
    new_status: str
