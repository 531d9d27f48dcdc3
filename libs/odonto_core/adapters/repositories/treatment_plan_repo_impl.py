from __future__ import annotations

from typing import Any

from django.db import transaction

from odonto_core.adapters.repositories.projections import dentist_summary, patient_summary
from odonto_core.core.domain.entities.treatment_plan_entity import (
    TreatmentItemEntity,
    TreatmentPlanEntity,
    calculate_total_amount,
)
from odonto_core.core.domain.repositories.treatment_plan_repository import TreatmentPlanRepository
from plugins.django_interface.models import TreatmentItem as TreatmentItemModel
from plugins.django_interface.models import TreatmentPlan as TreatmentPlanModel


class TreatmentPlanRepoImpl(TreatmentPlanRepository):
    """Orçamentos: plano + itens sempre gravados na mesma transação."""

    def _base_qs(self):
        return TreatmentPlanModel.objects.select_related("patient", "dentist__user").prefetch_related("items")

    @staticmethod
    def _to_entity(m: TreatmentPlanModel) -> TreatmentPlanEntity:
        return TreatmentPlanEntity.from_model(
            m,
            items=[TreatmentItemEntity.from_model(i) for i in m.items.all()],
            patient=patient_summary(m.patient),
            dentist=dentist_summary(m.dentist),
        )

    @staticmethod
    def _write_items(plan_id, items: list[TreatmentItemEntity]) -> None:
        TreatmentItemModel.objects.bulk_create(
            [
                TreatmentItemModel(
                    id=i.id,
                    plan_id=plan_id,
                    procedure_id=i.procedure_id,
                    description=i.description,
                    tooth=i.tooth,
                    value=i.value,
                    quantity=i.quantity,
                )
                for i in items
            ]
        )

    # ────────────────────────── consultas ──────────────────────────
    def find_by_id(self, plan_id, clinic_id) -> TreatmentPlanEntity | None:
        m = self._base_qs().filter(id=plan_id, clinic_id=clinic_id).first()
        return self._to_entity(m) if m else None

    def find_many(self, plan_ids, clinic_id) -> list[TreatmentPlanEntity]:
        qs = self._base_qs().filter(id__in=plan_ids, clinic_id=clinic_id)
        return [self._to_entity(m) for m in qs]

    def list(self, clinic_id, filtros: dict[str, Any]) -> list[TreatmentPlanEntity]:
        qs = self._base_qs().filter(clinic_id=clinic_id)
        for key in ("patient_id", "dentist_id", "status"):
            if filtros.get(key):
                qs = qs.filter(**{key: filtros[key]})
        return [self._to_entity(m) for m in qs.order_by("-created_at")]

    # ────────────────────────── escrita ──────────────────────────
    @transaction.atomic
    def create(self, plan: TreatmentPlanEntity) -> TreatmentPlanEntity:
        m = TreatmentPlanModel.objects.create(
            id=plan.id,
            clinic_id=plan.clinic_id,
            patient_id=plan.patient_id,
            dentist_id=plan.dentist_id,
            status=plan.status,
            total_amount=calculate_total_amount(plan.items),
            notes=plan.notes,
        )
        self._write_items(m.id, plan.items)
        return self.find_by_id(m.id, m.clinic_id)

    @transaction.atomic
    def update(self, plan_id, clinic_id, changes: dict[str, Any], items=None) -> TreatmentPlanEntity:
        m = TreatmentPlanModel.objects.select_for_update().get(id=plan_id, clinic_id=clinic_id)
        fields = dict(changes)
        if items is not None:
            TreatmentItemModel.objects.filter(plan_id=plan_id).delete()
            self._write_items(plan_id, items)
            fields["total_amount"] = calculate_total_amount(items)
        for k, v in fields.items():
            setattr(m, k, v)
        m.save(update_fields=[*fields.keys(), "updated_at"])
        return self.find_by_id(plan_id, clinic_id)
