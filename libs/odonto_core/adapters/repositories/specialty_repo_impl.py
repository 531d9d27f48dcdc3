from __future__ import annotations

from typing import Any

from odonto_core.core.domain.entities.specialty_entity import SpecialtyEntity
from odonto_core.core.domain.repositories.specialty_repository import SpecialtyRepository
from plugins.django_interface.models import Specialty as SpecialtyModel


class SpecialtyRepoImpl(SpecialtyRepository):
    def find_by_id(self, specialty_id, clinic_id) -> SpecialtyEntity | None:
        m = SpecialtyModel.objects.filter(id=specialty_id, clinic_id=clinic_id).first()
        return SpecialtyEntity.from_model(m) if m else None

    def find_by_name(self, name, clinic_id, exclude_id=None) -> SpecialtyEntity | None:
        qs = SpecialtyModel.objects.filter(clinic_id=clinic_id, name__iexact=name)
        if exclude_id:
            qs = qs.exclude(id=exclude_id)
        m = qs.first()
        return SpecialtyEntity.from_model(m) if m else None

    def find_many(self, specialty_ids, clinic_id) -> list[SpecialtyEntity]:
        qs = SpecialtyModel.objects.filter(id__in=specialty_ids, clinic_id=clinic_id)
        return [SpecialtyEntity.from_model(m) for m in qs]

    def create(self, specialty: SpecialtyEntity) -> SpecialtyEntity:
        m = SpecialtyModel.objects.create(
            id=specialty.id,
            clinic_id=specialty.clinic_id,
            name=specialty.name,
            description=specialty.description,
            is_active=specialty.is_active,
        )
        return SpecialtyEntity.from_model(m)

    def update(self, specialty_id, clinic_id, changes: dict[str, Any]) -> SpecialtyEntity:
        m = SpecialtyModel.objects.get(id=specialty_id, clinic_id=clinic_id)
        for k, v in changes.items():
            setattr(m, k, v)
        m.save(update_fields=[*changes.keys(), "updated_at"])
        return SpecialtyEntity.from_model(m)

    def list(self, clinic_id, filtros: dict[str, Any]) -> list[SpecialtyEntity]:
        qs = SpecialtyModel.objects.filter(clinic_id=clinic_id)
        if search := filtros.get("search"):
            qs = qs.filter(name__icontains=search)
        if filtros.get("is_active") is not None:
            qs = qs.filter(is_active=filtros["is_active"])
        return [SpecialtyEntity.from_model(m) for m in qs.order_by("name")]
