from __future__ import annotations

from typing import Any

from django.db.models import Q

from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity
from odonto_core.core.domain.repositories.procedure_repository import ProcedureRepository
from plugins.django_interface.models import Appointment as AppointmentModel
from plugins.django_interface.models import Procedure as ProcedureModel

PENDING_APPOINTMENT_STATUSES = (
    AppointmentModel.Status.SCHEDULED,
    AppointmentModel.Status.CONFIRMED,
)


class ProcedureRepoImpl(ProcedureRepository):
    @staticmethod
    def _to_entity(m: ProcedureModel) -> ProcedureEntity:
        return ProcedureEntity.from_model(
            m, specialty={"id": m.specialty.id, "name": m.specialty.name}
        )

    def find_by_id(self, procedure_id, clinic_id) -> ProcedureEntity | None:
        m = (
            ProcedureModel.objects.select_related("specialty")
            .filter(id=procedure_id, clinic_id=clinic_id)
            .first()
        )
        return self._to_entity(m) if m else None

    def find_active_by_ids(self, procedure_ids, clinic_id) -> list[ProcedureEntity]:
        qs = ProcedureModel.objects.select_related("specialty").filter(
            id__in=procedure_ids, clinic_id=clinic_id, is_active=True
        )
        return [self._to_entity(m) for m in qs]

    def create(self, procedure: ProcedureEntity) -> ProcedureEntity:
        m = ProcedureModel.objects.create(
            id=procedure.id,
            clinic_id=procedure.clinic_id,
            specialty_id=procedure.specialty_id,
            name=procedure.name,
            description=procedure.description,
            base_value=procedure.base_value,
            commission_percentage=procedure.commission_percentage,
            is_active=procedure.is_active,
        )
        return self.find_by_id(m.id, m.clinic_id)

    def update(self, procedure_id, clinic_id, changes: dict[str, Any]) -> ProcedureEntity:
        m = ProcedureModel.objects.get(id=procedure_id, clinic_id=clinic_id)
        for k, v in changes.items():
            setattr(m, k, v)
        m.save(update_fields=[*changes.keys(), "updated_at"])
        return self.find_by_id(procedure_id, clinic_id)

    def list(self, clinic_id, filtros: dict[str, Any]) -> list[ProcedureEntity]:
        qs = ProcedureModel.objects.select_related("specialty").filter(clinic_id=clinic_id)
        if filtros.get("specialty_id"):
            qs = qs.filter(specialty_id=filtros["specialty_id"])
        if search := filtros.get("search"):
            qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))
        if filtros.get("is_active") is not None:
            qs = qs.filter(is_active=filtros["is_active"])
        return [self._to_entity(m) for m in qs.order_by("name")]

    def has_pending_appointments(self, procedure_id) -> bool:
        return AppointmentModel.objects.filter(
            procedure_id=procedure_id, status__in=PENDING_APPOINTMENT_STATUSES
        ).exists()
