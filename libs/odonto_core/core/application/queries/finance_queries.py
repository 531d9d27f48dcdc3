import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import QueryDTO
from odonto_core.core.application.dtos.payment_dto import ListPaymentsDTO
from odonto_core.core.application.dtos.treatment_plan_dto import ListTreatmentPlansDTO


@dataclass(frozen=True)
class GetPaymentQuery(QueryDTO[None]):
    id: uuid.UUID
    clinic_id: uuid.UUID

@dataclass(frozen=True)
class ListPaymentsQuery(QueryDTO[ListPaymentsDTO]):
    clinic_id: uuid.UUID
    filtros: ListPaymentsDTO

@dataclass(frozen=True)
class GetTreatmentPlanQuery(QueryDTO[None]):
    id: uuid.UUID
    clinic_id: uuid.UUID

@dataclass(frozen=True)
class ListTreatmentPlansQuery(QueryDTO[ListTreatmentPlansDTO]):
    clinic_id: uuid.UUID
    filtros: ListTreatmentPlansDTO
