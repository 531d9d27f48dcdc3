from __future__ import annotations

import uuid
from datetime import date, datetime, time, timedelta
from typing import Any

from django.db.models import Prefetch, Q
from django.utils import timezone

from clinical_attendance.core.domain.entities.attendance_cid_entity import AttendanceCidEntity
from clinical_attendance.core.domain.entities.attendance_entity import (
    ACTIVE_STATUSES,
    AttendanceEntity,
    AttendanceStatus,
)
from clinical_attendance.core.domain.entities.attendance_procedure_entity import AttendanceProcedureEntity
from clinical_attendance.core.domain.entities.clinical_document_entity import ClinicalDocumentEntity
from clinical_attendance.core.domain.repositories.attendance_repository import AttendanceRepository
from odonto_core.adapters.repositories.projections import (
    dentist_summary,
    patient_summary,
    procedure_summary,
)
from odonto_core.core.domain.entities.cid_entity import normalize_cid_code
from odonto_core.core.domain.repositories.cid_repository import CidRepository
from plugins.django_interface.models import Attendance as AttendanceModel
from plugins.django_interface.models import AttendanceCID as AttendanceCIDModel
from plugins.django_interface.models import AttendanceOdontogram as AttendanceOdontogramModel
from plugins.django_interface.models import AttendanceProcedure as AttendanceProcedureModel
from plugins.django_interface.models import ClinicalDocument as ClinicalDocumentModel

UPDATABLE_FIELDS = frozenset({"status", "dentist_id", "appointment_id", "started_at", "finished_at"})


def _day_bounds(day: date) -> tuple[datetime, datetime]:
    start = timezone.make_aware(datetime.combine(day, time.min))
    return start, start + timedelta(days=1)


def _appointment_summary(m) -> dict[str, Any] | None:
    if m is None:
        return None
    return {"id": m.id, "date": m.date, "status": m.status}


class AttendanceRepoImpl(AttendanceRepository):
    """
    Atendimentos com todas as projeções aninhadas.

    A categoria de cada CID vem do catálogo (`CidRepository`), em uma
    única consulta por leitura, pois não há chave estrangeira entre eles.
    """

    def __init__(self, cid_catalog: CidRepository):
        self.cid_catalog = cid_catalog

    def _base_qs(self):
        return AttendanceModel.objects.select_related(
            "patient", "dentist__user", "appointment", "odontogram"
        ).prefetch_related(
            Prefetch("cids", queryset=AttendanceCIDModel.objects.order_by("created_at")),
            Prefetch(
                "procedures",
                queryset=AttendanceProcedureModel.objects.select_related(
                    "procedure", "dentist__user"
                ).order_by("-created_at"),
            ),
            Prefetch("documents", queryset=ClinicalDocumentModel.objects.order_by("-generated_at")),
        )

    # ────────────────────────── mapeamento ──────────────────────────
    @staticmethod
    def _odontogram(m: AttendanceModel) -> dict[str, Any] | None:
        try:
            return {"data": m.odontogram.data}
        except AttendanceOdontogramModel.DoesNotExist:
            return None

    def _to_entities(self, models: list[AttendanceModel]) -> list[AttendanceEntity]:
        codes = {c.cid_code for m in models for c in m.cids.all()}
        categories = self.cid_catalog.find_categories_by_codes(codes)
        return [self._to_entity(m, categories) for m in models]

    def _to_entity(self, m: AttendanceModel, categories: dict[str, str]) -> AttendanceEntity:
        return AttendanceEntity.from_model(
            m,
            patient=patient_summary(m.patient),
            dentist=dentist_summary(m.dentist),
            appointment=_appointment_summary(m.appointment),
            cids=[
                AttendanceCidEntity.from_model(
                    c, category=categories.get(normalize_cid_code(c.cid_code))
                )
                for c in m.cids.all()
            ],
            procedures=[
                AttendanceProcedureEntity.from_model(
                    p,
                    procedure=procedure_summary(p.procedure),
                    dentist=dentist_summary(p.dentist, with_email=False),
                )
                for p in m.procedures.all()
            ],
            odontogram=self._odontogram(m),
            documents=[ClinicalDocumentEntity.from_model(d) for d in m.documents.all()],
        )

    # ────────────────────────── escrita ──────────────────────────
    def create(self, attendance: AttendanceEntity) -> AttendanceEntity:
        AttendanceModel.objects.create(
            id=attendance.id,
            clinic_id=attendance.clinic_id,
            patient_id=attendance.patient_id,
            dentist_id=attendance.dentist_id,
            appointment_id=attendance.appointment_id,
            status=attendance.status,
            arrival_at=attendance.arrival_at,
            created_by_id=attendance.created_by_id,
            created_by_role=attendance.created_by_role,
        )
        return self.find_by_id(attendance.id, attendance.clinic_id)

    def update(self, attendance_id, clinic_id, changes: dict[str, Any]) -> AttendanceEntity:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Campos não atualizáveis: {sorted(unknown)}")
        AttendanceModel.objects.filter(id=attendance_id, clinic_id=clinic_id).update(
            **changes, updated_at=timezone.now()
        )
        return self.find_by_id(attendance_id, clinic_id)

    def detach_appointment(self, appointment_id, clinic_id) -> int:
        return AttendanceModel.objects.filter(
            appointment_id=appointment_id,
            clinic_id=clinic_id,
            status__in=[AttendanceStatus.CANCELED, AttendanceStatus.DONE],
        ).update(appointment_id=None, updated_at=timezone.now())

    # ────────────────────────── leitura ──────────────────────────
    def find_by_id(self, attendance_id, clinic_id) -> AttendanceEntity | None:
        m = self._base_qs().filter(id=attendance_id, clinic_id=clinic_id).first()
        return self._to_entities([m])[0] if m else None

    def find_active_by_appointment(self, appointment_id, clinic_id) -> AttendanceEntity | None:
        m = (
            self._base_qs()
            .filter(appointment_id=appointment_id, clinic_id=clinic_id, status__in=ACTIVE_STATUSES)
            .first()
        )
        return self._to_entities([m])[0] if m else None

    def find_waiting_room(self, clinic_id, dentist_id: uuid.UUID | None = None) -> list[AttendanceEntity]:
        qs = self._base_qs().filter(clinic_id=clinic_id, status=AttendanceStatus.CHECKED_IN)
        if dentist_id:
            qs = qs.filter(dentist_id=dentist_id)
        return self._to_entities(list(qs.order_by("arrival_at")))

    def find_many(self, clinic_id, filtros: dict[str, Any]) -> list[AttendanceEntity]:
        qs = self._base_qs().filter(clinic_id=clinic_id)
        if status := filtros.get("status"):
            qs = qs.filter(status=status)
        if patient_id := filtros.get("patient_id"):
            qs = qs.filter(patient_id=patient_id)
        if dentist_id := filtros.get("dentist_id"):
            qs = qs.filter(dentist_id=dentist_id)

        # Em andamento entra em qualquer recorte de data: não some da agenda do dia
        in_progress = Q(status=AttendanceStatus.IN_PROGRESS)
        if day := filtros.get("date"):
            start, end = _day_bounds(day)
            qs = qs.filter(
                Q(arrival_at__gte=start, arrival_at__lt=end)
                | Q(started_at__gte=start, started_at__lt=end)
                | in_progress
            )
        else:
            bounds: dict[str, datetime] = {}
            if date_from := filtros.get("date_from"):
                bounds["gte"] = date_from
            if date_to := filtros.get("date_to"):
                bounds["lte"] = date_to
            if bounds:
                qs = qs.filter(
                    Q(**{f"arrival_at__{op}": v for op, v in bounds.items()})
                    | Q(**{f"started_at__{op}": v for op, v in bounds.items()})
                    | in_progress
                )
        return self._to_entities(list(qs.order_by("-arrival_at")))
