from __future__ import annotations

import uuid
from typing import Any

from django.db.models import Q

from odonto_core.core.domain.entities.patient_entity import PatientEntity
from odonto_core.core.domain.repositories.patient_repository import PatientRepository
from plugins.django_interface.models import Patient as PatientModel


class PatientRepoImpl(PatientRepository):
    """Implementação Django do repositório de pacientes (sempre por clínica)."""

    # ────────────────────────── consultas ──────────────────────────
    def find_by_id(self, patient_id: uuid.UUID, clinic_id: uuid.UUID) -> PatientEntity | None:
        model = PatientModel.objects.filter(id=patient_id, clinic_id=clinic_id).first()
        return PatientEntity.from_model(model) if model else None

    def find_by_cpf(self, cpf, clinic_id, exclude_id=None) -> PatientEntity | None:
        qs = PatientModel.objects.filter(clinic_id=clinic_id, cpf=cpf)
        if exclude_id:
            qs = qs.exclude(id=exclude_id)
        model = qs.first()
        return PatientEntity.from_model(model) if model else None

    def find_by_email(self, email, clinic_id, exclude_id=None) -> PatientEntity | None:
        qs = PatientModel.objects.filter(clinic_id=clinic_id, email__iexact=email)
        if exclude_id:
            qs = qs.exclude(id=exclude_id)
        model = qs.first()
        return PatientEntity.from_model(model) if model else None

    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[PatientEntity]:
        qs = PatientModel.objects.filter(clinic_id=clinic_id)
        if search := filtros.get("search"):
            qs = qs.filter(
                Q(name__icontains=search)
                | Q(email__icontains=search)
                | Q(phone__icontains=search)
                | Q(cpf__icontains=search)
            )
        if filtros.get("is_active") is not None:
            qs = qs.filter(is_active=filtros["is_active"])
        return [PatientEntity.from_model(m) for m in qs.order_by("name")]

    # ────────────────────────── escrita ──────────────────────────
    def create(self, patient: PatientEntity) -> PatientEntity:
        data = patient.to_dict()
        for key in ("created_at", "updated_at"):
            data.pop(key, None)
        model = PatientModel.objects.create(**data)
        return PatientEntity.from_model(model)

    def update(self, patient_id, clinic_id, changes: dict[str, Any]) -> PatientEntity:
        model = PatientModel.objects.get(id=patient_id, clinic_id=clinic_id)
        for k, v in changes.items():
            setattr(model, k, v)
        model.save(update_fields=[*changes.keys(), "updated_at"])
        return PatientEntity.from_model(model)
