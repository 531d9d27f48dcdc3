"""
Pagamentos e orçamentos.

Orçamentos só aceitam edição de itens e de status enquanto estão em
aberto (OPEN); o total é sempre recalculado a partir dos itens.
"""
import uuid
from decimal import Decimal

import structlog

from odonto_core.core.application.commands.finance_commands import (
    CreatePaymentCommand,
    CreateTreatmentPlanCommand,
    UpdateTreatmentPlanCommand,
)
from odonto_core.core.application.cqrs import CommandHandler
from odonto_core.core.application.dtos.treatment_plan_dto import TreatmentItemDTO
from odonto_core.core.application.handlers.guards import require_roles
from odonto_core.core.domain.entities.payment_entity import PaymentEntity
from odonto_core.core.domain.entities.treatment_plan_entity import (
    TreatmentItemEntity,
    TreatmentPlanEntity,
    TreatmentPlanStatus,
    calculate_total_amount,
)
from odonto_core.core.domain.entities.user_entity import UserRole
from odonto_core.core.domain.events.events import PaymentRegisteredEvent, TreatmentPlanStatusChangedEvent
from odonto_core.core.domain.exceptions import (
    BusinessRuleError,
    InvalidTransitionError,
    NotFoundError,
)
from odonto_core.core.domain.repositories.dentist_repository import DentistRepository
from odonto_core.core.domain.repositories.patient_repository import PatientRepository
from odonto_core.core.domain.repositories.payment_repository import PaymentRepository
from odonto_core.core.domain.repositories.procedure_repository import ProcedureRepository
from odonto_core.core.domain.repositories.treatment_plan_repository import TreatmentPlanRepository
from odonto_core.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)

VALUE_TOLERANCE = Decimal("0.01")
PLAN_REVIEWER_ROLES = (UserRole.OWNER, UserRole.ADMIN, UserRole.DENTIST)
_STATUS_LABELS = {TreatmentPlanStatus.APPROVED: "aprovado", TreatmentPlanStatus.REJECTED: "rejeitado"}


def _ensure_active_patient(repo: PatientRepository, patient_id, clinic_id) -> None:
    patient = repo.find_by_id(patient_id, clinic_id)
    if patient is None:
        raise NotFoundError("Paciente não encontrado na clínica")
    if not patient.is_active:
        raise BusinessRuleError("Paciente está inativo")


class ItemProcedurePolicy:
    """
    Itens que referenciam um procedimento precisam estar vinculados ao
    dentista do orçamento e repetir o valor do catálogo (tolerância 0,01).
    """

    def __init__(self, dentist_repo: DentistRepository, procedure_repo: ProcedureRepository):
        self.dentist_repo = dentist_repo
        self.procedure_repo = procedure_repo

    def validate(self, items: list[TreatmentItemDTO], dentist_id, clinic_id) -> None:
        linked_items = [i for i in items if i.procedure_id]
        if not linked_items:
            return
        allowed = self.dentist_repo.linked_procedures(dentist_id, clinic_id)
        for item in linked_items:
            procedure = allowed.get(item.procedure_id)
            if procedure is None:
                other = self.procedure_repo.find_by_id(item.procedure_id, clinic_id)
                name = other.name if other else item.procedure_id
                raise BusinessRuleError(f'Procedimento "{name}" não está vinculado ao dentista selecionado')
            if abs(item.value - procedure.base_value) > VALUE_TOLERANCE:
                raise BusinessRuleError(
                    f'Valor do procedimento "{procedure.name}" (R$ {item.value:.2f}) '
                    f"não corresponde ao valor cadastrado (R$ {procedure.base_value:.2f})"
                )


def _to_items(plan_id: uuid.UUID, items: list[TreatmentItemDTO]) -> list[TreatmentItemEntity]:
    return [TreatmentItemEntity(id=uuid.uuid4(), plan_id=plan_id, **i.model_dump()) for i in items]


# ——— PAGAMENTOS ————————————————————————————————————————————

class CreatePaymentHandler(CommandHandler[CreatePaymentCommand]):
    def __init__(
        self,
        repo: PaymentRepository,
        patient_repo: PatientRepository,
        plan_repo: TreatmentPlanRepository,
        dispatcher: EventDispatcher,
    ):
        self.repo = repo
        self.patient_repo = patient_repo
        self.plan_repo = plan_repo
        self.dispatcher = dispatcher

    def handle(self, command: CreatePaymentCommand) -> PaymentEntity:
        session, payload = command.session, command.payload
        if payload.patient_id:
            _ensure_active_patient(self.patient_repo, payload.patient_id, session.clinic_id)

        plan_ids = list(dict.fromkeys(payload.treatment_plan_ids))
        if plan_ids and len(self.plan_repo.find_many(plan_ids, session.clinic_id)) != len(plan_ids):
            raise NotFoundError("Um ou mais orçamentos não foram encontrados")

        entity = PaymentEntity(
            id=uuid.uuid4(),
            clinic_id=session.clinic_id,
            amount=payload.amount,
            method=payload.method,
            patient_id=payload.patient_id,
            description=payload.description,
        )
        payment, approved = self.repo.create(entity, plan_ids)
        logger.info("payment.registered", payment_id=str(payment.id), approved_plans=len(approved))
        self.dispatcher.dispatch(
            PaymentRegisteredEvent(
                payment_id=payment.id,
                clinic_id=payment.clinic_id,
                amount=payment.amount,
                method=payment.method,
                approved_plan_ids=tuple(approved),
            )
        )
        return payment


# ——— ORÇAMENTOS ————————————————————————————————————————————

class CreateTreatmentPlanHandler(CommandHandler[CreateTreatmentPlanCommand]):
    def __init__(
        self,
        repo: TreatmentPlanRepository,
        patient_repo: PatientRepository,
        dentist_repo: DentistRepository,
        item_policy: ItemProcedurePolicy,
    ):
        self.repo = repo
        self.patient_repo = patient_repo
        self.dentist_repo = dentist_repo
        self.item_policy = item_policy

    def handle(self, command: CreateTreatmentPlanCommand) -> TreatmentPlanEntity:
        session, payload = command.session, command.payload
        _ensure_active_patient(self.patient_repo, payload.patient_id, session.clinic_id)

        dentist = self.dentist_repo.find_by_id(payload.dentist_id, session.clinic_id)
        if dentist is None:
            raise NotFoundError("Dentista não encontrado na clínica")
        if not dentist.is_active:
            raise BusinessRuleError("Dentista está inativo")

        self.item_policy.validate(payload.items, dentist.id, session.clinic_id)

        plan_id = uuid.uuid4()
        items = _to_items(plan_id, payload.items)
        return self.repo.create(
            TreatmentPlanEntity(
                id=plan_id,
                clinic_id=session.clinic_id,
                patient_id=payload.patient_id,
                dentist_id=dentist.id,
                status=TreatmentPlanStatus.OPEN,
                total_amount=calculate_total_amount(items),
                notes=payload.notes,
                items=items,
            )
        )


class UpdateTreatmentPlanHandler(CommandHandler[UpdateTreatmentPlanCommand]):
    def __init__(
        self,
        repo: TreatmentPlanRepository,
        item_policy: ItemProcedurePolicy,
        dispatcher: EventDispatcher,
    ):
        self.repo = repo
        self.item_policy = item_policy
        self.dispatcher = dispatcher

    def handle(self, command: UpdateTreatmentPlanCommand) -> TreatmentPlanEntity:
        session, payload = command.session, command.payload
        plan = self.repo.find_by_id(command.id, session.clinic_id)
        if plan is None:
            raise NotFoundError("Orçamento não encontrado")

        changes = payload.changes(exclude={"items"})
        new_status = changes.get("status")
        if new_status and new_status != TreatmentPlanStatus.OPEN:
            require_roles(
                session, PLAN_REVIEWER_ROLES, "Você não tem permissão para aprovar ou rejeitar orçamentos"
            )
        if new_status and not plan.is_open:
            raise InvalidTransitionError(
                f"Não é possível alterar o status de um orçamento {_STATUS_LABELS[plan.status]}"
            )

        items = None
        if payload.items is not None:
            if not plan.is_open:
                raise BusinessRuleError(
                    f"Não é possível editar os itens de um orçamento {_STATUS_LABELS[plan.status]}. "
                    "Apenas orçamentos em aberto podem ser editados."
                )
            self.item_policy.validate(payload.items, plan.dentist_id, session.clinic_id)
            items = _to_items(plan.id, payload.items)

        if not changes and items is None:
            return plan
        updated = self.repo.update(plan.id, session.clinic_id, changes, items=items)

        if new_status and new_status != plan.status:
            self.dispatcher.dispatch(
                TreatmentPlanStatusChangedEvent(
                    plan_id=plan.id, clinic_id=plan.clinic_id, old_status=plan.status, new_status=new_status
                )
            )
        return updated
