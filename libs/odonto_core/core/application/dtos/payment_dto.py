from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, model_validator
from pydantic_core import PydanticCustomError

from odonto_core.core.application.dtos.catalog_dto import Description
from odonto_core.core.application.validation import aware, number, one_of
from odonto_core.core.domain.entities.payment_entity import PaymentMethod

MAX_AMOUNT = Decimal("999999.99")

Amount = Annotated[
    Decimal,
    number(
        gt=0,
        le=MAX_AMOUNT,
        gt_message="Valor deve ser positivo",
        le_message="Valor deve ser no máximo R$ 999.999,99",
    ),
]
Method = Annotated[str, one_of({m.value for m in PaymentMethod}, "Forma de pagamento deve ser CASH, PIX ou CARD")]


class CreatePaymentDTO(BaseModel):
    amount: Amount
    method: Method
    patient_id: uuid.UUID | None = None
    description: Description = None
    treatment_plan_ids: list[uuid.UUID] = []


class ListPaymentsDTO(BaseModel):
    patient_id: uuid.UUID | None = None
    method: Method | None = None
    start_date: Annotated[datetime | None, aware()] = None
    end_date: Annotated[datetime | None, aware()] = None

    @model_validator(mode="after")
    def _check_range(self) -> ListPaymentsDTO:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise PydanticCustomError(
                "date_range", "Data inicial deve ser anterior ou igual à data final"
            )
        return self
