from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BaseModel

from clinical_attendance.core.domain.entities.attendance_entity import AttendanceStatus
from clinical_attendance.core.domain.entities.attendance_procedure_entity import (
    CLINICAL_STATUSES,
    TOOTH_FACES,
)
from clinical_attendance.core.domain.entities.clinical_document_entity import DocumentType
from odonto_core.core.application.validation import (
    aware,
    blank_to_none,
    items_count,
    local_day,
    number,
    one_of,
    text,
)

CID_PATTERN = r"^[A-Z]\d{2}(\.\d)?$"
# Notação FDI: quadrantes 1 a 4, dentes 1 a 8
TOOTH_PATTERN = r"^(1[1-8]|2[1-8]|3[1-8]|4[1-8])$"

OptionalText = Annotated[
    str | None,
    blank_to_none(),
    text(max_length=2000, max_message="Texto deve ter no máximo 2000 caracteres"),
]
Face = Annotated[str, one_of(set(TOOTH_FACES), "Face deve ser O, M, D, V ou L")]
Day = Annotated[date | None, local_day()]
Moment = Annotated[datetime | None, aware()]


# ╭──────────────────────────────────────────────╮
# │ Transições                                   │
# ╰──────────────────────────────────────────────╯
class CheckInAttendanceDTO(BaseModel):
    patient_id: uuid.UUID
    appointment_id: uuid.UUID | None = None
    dentist_id: uuid.UUID | None = None


class StartAttendanceDTO(BaseModel):
    dentist_id: uuid.UUID


class CancelAttendanceDTO(BaseModel):
    reason: OptionalText = None


# ╭──────────────────────────────────────────────╮
# │ Dados clínicos                               │
# ╰──────────────────────────────────────────────╯
class AddAttendanceCidDTO(BaseModel):
    cid_code: Annotated[
        str,
        text(
            min_length=1,
            min_message="Código CID é obrigatório",
            pattern=CID_PATTERN,
            pattern_message="Código CID deve ter formato válido (ex: K02.0, Z01.2)",
        ),
    ]
    description: Annotated[
        str,
        text(
            min_length=1,
            max_length=255,
            min_message="Descrição é obrigatória",
            max_message="Descrição deve ter no máximo 255 caracteres",
        ),
    ]
    observation: OptionalText = None
    # autor do diagnóstico; sem ele vale o dentista de quem chama
    dentist_id: uuid.UUID | None = None


class AddAttendanceProcedureDTO(BaseModel):
    procedure_id: uuid.UUID
    tooth: Annotated[
        str,
        text(pattern=TOOTH_PATTERN, pattern_message="Dente deve estar entre 11-18, 21-28, 31-38, 41-48"),
    ]
    faces: Annotated[
        list[Face],
        items_count(
            min_items=1,
            max_items=len(TOOTH_FACES),
            min_message="Selecione pelo menos uma face",
            max_message="Selecione no máximo 5 faces",
        ),
    ]
    clinical_status: Annotated[str, one_of(set(CLINICAL_STATUSES), "Status clínico inválido")]
    observations: OptionalText = None
    procedure_code: Annotated[str | None, blank_to_none(), text(max_length=50)] = None
    quantity: Annotated[
        int, number(ge=1, ge_message="Quantidade deve ser no mínimo 1")
    ] = 1
    surface: Annotated[str | None, blank_to_none(), text(max_length=50)] = None


class UpdateAttendanceOdontogramDTO(BaseModel):
    data: dict[str, str]


class CreateClinicalDocumentDTO(BaseModel):
    type: Annotated[str, one_of({t.value for t in DocumentType}, "Tipo de documento inválido")]
    payload: dict[str, Any]


# ╭──────────────────────────────────────────────╮
# │ Consultas                                    │
# ╰──────────────────────────────────────────────╯
class ListAttendancesDTO(BaseModel):
    status: Annotated[
        str | None,
        one_of({s.value for s in AttendanceStatus}, "Status de atendimento inválido"),
    ] = None
    patient_id: uuid.UUID | None = None
    dentist_id: uuid.UUID | None = None
    date: Day = None
    date_from: Moment = None
    date_to: Moment = None
