from __future__ import annotations

import uuid
from typing import Annotated

from pydantic import BaseModel

from odonto_core.core.application.dtos.payment_dto import Amount
from odonto_core.core.application.validation import PatchModel, blank_to_none, items_count, number, one_of, text
from odonto_core.core.domain.entities.treatment_plan_entity import TreatmentPlanStatus

PlanNotes = Annotated[
    str | None,
    blank_to_none(),
    text(max_length=2000, max_message="Observações devem ter no máximo 2000 caracteres"),
]
PlanStatus = Annotated[
    str,
    one_of({s.value for s in TreatmentPlanStatus}, "Status deve ser OPEN, APPROVED ou REJECTED"),
]


class TreatmentItemDTO(BaseModel):
    description: Annotated[
        str,
        text(
            min_length=3,
            max_length=200,
            min_message="Descrição deve ter pelo menos 3 caracteres",
            max_message="Descrição deve ter no máximo 200 caracteres",
        ),
    ]
    tooth: Annotated[
        str | None,
        blank_to_none(),
        text(max_length=10, max_message="Dente deve ter no máximo 10 caracteres"),
    ] = None
    value: Amount
    quantity: Annotated[
        int,
        number(
            ge=1,
            le=999,
            ge_message="Quantidade deve ser positiva",
            le_message="Quantidade deve ser no máximo 999",
        ),
    ] = 1
    procedure_id: uuid.UUID | None = None


Items = Annotated[
    list[TreatmentItemDTO],
    items_count(
        min_items=1,
        max_items=50,
        min_message="Deve haver pelo menos um item no orçamento",
        max_message="Máximo de 50 itens por orçamento",
    ),
]


class CreateTreatmentPlanDTO(BaseModel):
    patient_id: uuid.UUID
    dentist_id: uuid.UUID
    notes: PlanNotes = None
    items: Items


class UpdateTreatmentPlanDTO(PatchModel):
    not_null = frozenset({"status", "items"})

    status: PlanStatus | None = None
    notes: PlanNotes = None
    items: Items | None = None


class ListTreatmentPlansDTO(BaseModel):
    patient_id: uuid.UUID | None = None
    dentist_id: uuid.UUID | None = None
    status: PlanStatus | None = None
