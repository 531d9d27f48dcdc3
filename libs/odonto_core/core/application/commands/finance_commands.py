import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import CommandDTO
from odonto_core.core.application.dtos.payment_dto import CreatePaymentDTO
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.dtos.treatment_plan_dto import CreateTreatmentPlanDTO, UpdateTreatmentPlanDTO


@dataclass(frozen=True)
class CreatePaymentCommand(CommandDTO):
    session: SessionContext
    payload: CreatePaymentDTO

@dataclass(frozen=True)
class CreateTreatmentPlanCommand(CommandDTO):
    session: SessionContext
    payload: CreateTreatmentPlanDTO

@dataclass(frozen=True)
class UpdateTreatmentPlanCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: UpdateTreatmentPlanDTO
