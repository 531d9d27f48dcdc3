from typing import Any

from odonto_core.adapters.observability.decorators import as_operation_result
from odonto_core.core.application.commands.finance_commands import (
    CreatePaymentCommand,
    CreateTreatmentPlanCommand,
    UpdateTreatmentPlanCommand,
)
from odonto_core.core.application.cqrs import BaseService
from odonto_core.core.application.dtos.payment_dto import CreatePaymentDTO, ListPaymentsDTO
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.dtos.treatment_plan_dto import (
    CreateTreatmentPlanDTO,
    ListTreatmentPlansDTO,
    UpdateTreatmentPlanDTO,
)
from odonto_core.core.application.queries.finance_queries import (
    GetPaymentQuery,
    GetTreatmentPlanQuery,
    ListPaymentsQuery,
    ListTreatmentPlansQuery,
)
from odonto_core.core.application.validation import as_uuid

PAYMENT_NOT_FOUND = "Pagamento não encontrado"
PLAN_NOT_FOUND = "Orçamento não encontrado"


class FinanceService(BaseService):
    """Pagamentos e orçamentos (planos de tratamento)."""

    # ────────────────────────── pagamentos ──────────────────────────
    @as_operation_result("create_payment")
    def create_payment(self, session: SessionContext, data: dict[str, Any]):
        payload = CreatePaymentDTO.model_validate(data)
        return self.execute(CreatePaymentCommand(session=session, payload=payload))

    @as_operation_result("get_payment")
    def get_payment(self, session: SessionContext, payment_id):
        return self.query(GetPaymentQuery(id=as_uuid(payment_id, PAYMENT_NOT_FOUND), clinic_id=session.clinic_id))

    @as_operation_result("list_payments")
    def list_payments(self, session: SessionContext, filters: dict[str, Any] | None = None):
        filtros = ListPaymentsDTO.model_validate(filters or {})
        return self.query(ListPaymentsQuery(clinic_id=session.clinic_id, filtros=filtros))

    # ────────────────────────── orçamentos ──────────────────────────
    @as_operation_result("create_treatment_plan")
    def create_treatment_plan(self, session: SessionContext, data: dict[str, Any]):
        payload = CreateTreatmentPlanDTO.model_validate(data)
        return self.execute(CreateTreatmentPlanCommand(session=session, payload=payload))

    @as_operation_result("update_treatment_plan")
    def update_treatment_plan(self, session: SessionContext, plan_id, data: dict[str, Any]):
        payload = UpdateTreatmentPlanDTO.model_validate(data)
        return self.execute(
            UpdateTreatmentPlanCommand(session=session, id=as_uuid(plan_id, PLAN_NOT_FOUND), payload=payload)
        )

    @as_operation_result("get_treatment_plan")
    def get_treatment_plan(self, session: SessionContext, plan_id):
        return self.query(GetTreatmentPlanQuery(id=as_uuid(plan_id, PLAN_NOT_FOUND), clinic_id=session.clinic_id))

    @as_operation_result("list_treatment_plans")
    def list_treatment_plans(self, session: SessionContext, filters: dict[str, Any] | None = None):
        filtros = ListTreatmentPlansDTO.model_validate(filters or {})
        return self.query(ListTreatmentPlansQuery(clinic_id=session.clinic_id, filtros=filtros))
