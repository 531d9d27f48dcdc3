from __future__ import annotations

import uuid
from typing import Any

from django.db import transaction
from django.db.models import Q

from odonto_core.core.domain.entities.dentist_entity import DentistEntity
from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity
from odonto_core.core.domain.repositories.dentist_repository import DentistRepository
from plugins.django_interface.models import Dentist as DentistModel
from plugins.django_interface.models import DentistProcedure as DentistProcedureModel
from plugins.django_interface.models import DentistSpecialty as DentistSpecialtyModel


class DentistRepoImpl(DentistRepository):
    """Dentistas com usuário, especialidades e procedimentos já aninhados."""

    def _base_qs(self):
        return DentistModel.objects.select_related("user").prefetch_related(
            "specialty_links__specialty", "procedure_links__procedure"
        )

    @staticmethod
    def _to_entity(m: DentistModel) -> DentistEntity:
        return DentistEntity.from_model(
            m,
            user={
                "id": m.user.id,
                "name": m.user.name,
                "email": m.user.email,
                "is_active": m.user.is_active,
            },
            specialties=[
                {"id": link.specialty.id, "name": link.specialty.name}
                for link in m.specialty_links.all()
            ],
            procedures=[
                {
                    "id": link.procedure.id,
                    "name": link.procedure.name,
                    "specialty_id": link.procedure.specialty_id,
                    "base_value": link.procedure.base_value,
                }
                for link in m.procedure_links.all()
            ],
        )

    # ────────────────────────── consultas ──────────────────────────
    def find_by_id(self, dentist_id, clinic_id) -> DentistEntity | None:
        m = self._base_qs().filter(id=dentist_id, clinic_id=clinic_id).first()
        return self._to_entity(m) if m else None

    def find_by_user_id(self, user_id, clinic_id) -> DentistEntity | None:
        m = self._base_qs().filter(user_id=user_id, clinic_id=clinic_id).first()
        return self._to_entity(m) if m else None

    def find_by_cro(self, cro, clinic_id, exclude_id=None) -> DentistEntity | None:
        qs = self._base_qs().filter(clinic_id=clinic_id, cro=cro)
        if exclude_id:
            qs = qs.exclude(id=exclude_id)
        m = qs.first()
        return self._to_entity(m) if m else None

    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[DentistEntity]:
        qs = self._base_qs().filter(clinic_id=clinic_id, is_active=True)
        if specialty := filtros.get("specialty"):
            qs = qs.filter(
                Q(specialty__icontains=specialty)
                | Q(specialty_links__specialty__name__icontains=specialty)
            )
        if search := filtros.get("search"):
            qs = qs.filter(
                Q(user__name__icontains=search)
                | Q(user__email__icontains=search)
                | Q(cro__icontains=search)
            )
        return [self._to_entity(m) for m in qs.distinct().order_by("user__name")]

    def has_procedure(self, dentist_id, procedure_id) -> bool:
        return DentistProcedureModel.objects.filter(
            dentist_id=dentist_id, procedure_id=procedure_id
        ).exists()

    def linked_procedures(self, dentist_id, clinic_id) -> dict[uuid.UUID, ProcedureEntity]:
        links = DentistProcedureModel.objects.select_related("procedure").filter(
            dentist_id=dentist_id,
            dentist__clinic_id=clinic_id,
            procedure__clinic_id=clinic_id,
            procedure__is_active=True,
        )
        return {link.procedure.id: ProcedureEntity.from_model(link.procedure) for link in links}

    # ────────────────────────── escrita ──────────────────────────
    def create(self, dentist: DentistEntity) -> DentistEntity:
        m = DentistModel.objects.create(
            id=dentist.id,
            clinic_id=dentist.clinic_id,
            user_id=dentist.user_id,
            cro=dentist.cro,
            specialty=dentist.specialty,
            working_hours=dentist.working_hours,
            bank_info=dentist.bank_info,
            commission=dentist.commission,
            is_active=dentist.is_active,
        )
        return self.find_by_id(m.id, m.clinic_id)

    def update(self, dentist_id, clinic_id, changes: dict[str, Any]) -> DentistEntity:
        model = DentistModel.objects.get(id=dentist_id, clinic_id=clinic_id)
        for k, v in changes.items():
            setattr(model, k, v)
        model.save(update_fields=[*changes.keys(), "updated_at"])
        return self.find_by_id(dentist_id, clinic_id)

    @transaction.atomic
    def replace_procedures(self, dentist_id, procedure_ids) -> None:
        DentistProcedureModel.objects.filter(dentist_id=dentist_id).delete()
        DentistProcedureModel.objects.bulk_create(
            [DentistProcedureModel(dentist_id=dentist_id, procedure_id=pid) for pid in set(procedure_ids)]
        )

    @transaction.atomic
    def replace_specialties(self, dentist_id, specialty_ids) -> None:
        DentistSpecialtyModel.objects.filter(dentist_id=dentist_id).delete()
        DentistSpecialtyModel.objects.bulk_create(
            [DentistSpecialtyModel(dentist_id=dentist_id, specialty_id=sid) for sid in set(specialty_ids)]
        )

    def remove_specialty(self, dentist_id, specialty_id) -> bool:
        deleted, _ = DentistSpecialtyModel.objects.filter(
            dentist_id=dentist_id, specialty_id=specialty_id
        ).delete()
        return deleted > 0
