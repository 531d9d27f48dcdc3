from __future__ import annotations

from datetime import datetime, time
from typing import Any

from django.db import transaction
from django.utils import timezone

from odonto_core.adapters.repositories.projections import patient_summary
from odonto_core.core.domain.entities.payment_entity import PaymentEntity
from odonto_core.core.domain.entities.treatment_plan_entity import TreatmentPlanStatus
from odonto_core.core.domain.repositories.payment_repository import PaymentRepository
from plugins.django_interface.models import Payment as PaymentModel
from plugins.django_interface.models import PaymentTreatmentPlan as PaymentTreatmentPlanModel
from plugins.django_interface.models import TreatmentPlan as TreatmentPlanModel


def _as_aware(value, end_of_day: bool = False) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.max if end_of_day else time.min)
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return value


class PaymentRepoImpl(PaymentRepository):
    def _base_qs(self):
        return PaymentModel.objects.select_related("patient").prefetch_related("plan_links__plan")

    @staticmethod
    def _to_entity(m: PaymentModel) -> PaymentEntity:
        return PaymentEntity.from_model(
            m,
            patient=patient_summary(m.patient),
            treatment_plans=[
                {
                    "id": link.plan.id,
                    "status": link.plan.status,
                    "total_amount": link.plan.total_amount,
                    "notes": link.plan.notes,
                }
                for link in m.plan_links.all()
            ],
        )

    @transaction.atomic
    def create(self, payment: PaymentEntity, treatment_plan_ids):
        m = PaymentModel.objects.create(
            id=payment.id,
            clinic_id=payment.clinic_id,
            patient_id=payment.patient_id,
            amount=payment.amount,
            method=payment.method,
            description=payment.description,
        )
        approved: list = []
        if treatment_plan_ids:
            PaymentTreatmentPlanModel.objects.bulk_create(
                [PaymentTreatmentPlanModel(payment_id=m.id, plan_id=pid) for pid in treatment_plan_ids]
            )
            open_plans = TreatmentPlanModel.objects.filter(
                id__in=treatment_plan_ids,
                clinic_id=payment.clinic_id,
                status=TreatmentPlanStatus.OPEN,
            )
            approved = list(open_plans.values_list("id", flat=True))
            open_plans.update(status=TreatmentPlanStatus.APPROVED, updated_at=timezone.now())
        return self.find_by_id(m.id, m.clinic_id), approved

    def find_by_id(self, payment_id, clinic_id) -> PaymentEntity | None:
        m = self._base_qs().filter(id=payment_id, clinic_id=clinic_id).first()
        return self._to_entity(m) if m else None

    def list(self, clinic_id, filtros: dict[str, Any]) -> list[PaymentEntity]:
        qs = self._base_qs().filter(clinic_id=clinic_id)
        if filtros.get("patient_id"):
            qs = qs.filter(patient_id=filtros["patient_id"])
        if filtros.get("method"):
            qs = qs.filter(method=filtros["method"])
        if filtros.get("start_date"):
            qs = qs.filter(created_at__gte=_as_aware(filtros["start_date"]))
        if filtros.get("end_date"):
            qs = qs.filter(created_at__lte=_as_aware(filtros["end_date"], end_of_day=True))
        return [self._to_entity(m) for m in qs.order_by("-created_at")]
