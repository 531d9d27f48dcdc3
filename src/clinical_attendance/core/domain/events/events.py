from __future__ import annotations

import uuid
from dataclasses import dataclass

from odonto_core.core.domain.events.events import DomainEvent


# ───────────────────────────────────────────────
# Ciclo de vida do atendimento
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class AttendanceTransitionEvent(DomainEvent):
    """Base das transições de status; `transition` rotula a métrica."""
    attendance_id: uuid.UUID
    clinic_id: uuid.UUID
    transition: str = ""

@dataclass(frozen=True, kw_only=True)
class AttendanceCheckedInEvent(AttendanceTransitionEvent):
    patient_id: uuid.UUID
    appointment_id: uuid.UUID | None = None
    transition: str = "check_in"

@dataclass(frozen=True, kw_only=True)
class AttendanceStartedEvent(AttendanceTransitionEvent):
    dentist_id: uuid.UUID
    transition: str = "start"

@dataclass(frozen=True, kw_only=True)
class AttendanceFinishedEvent(AttendanceTransitionEvent):
    record_id: uuid.UUID
    transition: str = "finish"

@dataclass(frozen=True, kw_only=True)
class AttendanceCanceledEvent(AttendanceTransitionEvent):
    previous_status: str
    reason: str | None = None
    transition: str = "cancel"

# ───────────────────────────────────────────────
# Documentos
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class ClinicalDocumentGeneratedEvent(DomainEvent):
    document_id: uuid.UUID
    attendance_id: uuid.UUID
    clinic_id: uuid.UUID
    type: str
