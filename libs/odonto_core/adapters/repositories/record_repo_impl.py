from __future__ import annotations

from odonto_core.adapters.repositories.projections import dentist_summary, patient_summary
from odonto_core.core.domain.entities.record_entity import RecordEntity
from odonto_core.core.domain.repositories.record_repository import RecordRepository
from plugins.django_interface.models import Record as RecordModel


class RecordRepoImpl(RecordRepository):
    def _base_qs(self):
        return RecordModel.objects.select_related("patient", "dentist__user")

    @staticmethod
    def _to_entity(m: RecordModel) -> RecordEntity:
        return RecordEntity.from_model(
            m,
            patient=patient_summary(m.patient),
            dentist=dentist_summary(m.dentist, with_email=False),
        )

    def create(self, record: RecordEntity) -> RecordEntity:
        m = RecordModel.objects.create(
            id=record.id,
            clinic_id=record.clinic_id,
            patient_id=record.patient_id,
            dentist_id=record.dentist_id,
            appointment_id=record.appointment_id,
            attendance_id=record.attendance_id,
            date=record.date,
            description=record.description,
            procedures=record.procedures,
            odontogram=record.odontogram,
        )
        return RecordEntity.from_model(m)

    def find_by_id(self, record_id, clinic_id) -> RecordEntity | None:
        m = self._base_qs().filter(id=record_id, clinic_id=clinic_id).first()
        return self._to_entity(m) if m else None

    def find_by_attendance_id(self, attendance_id) -> RecordEntity | None:
        m = self._base_qs().filter(attendance_id=attendance_id).first()
        return self._to_entity(m) if m else None

    def list(self, clinic_id, patient_id=None) -> list[RecordEntity]:
        qs = self._base_qs().filter(clinic_id=clinic_id)
        if patient_id:
            qs = qs.filter(patient_id=patient_id)
        return [self._to_entity(m) for m in qs.order_by("-date")]
