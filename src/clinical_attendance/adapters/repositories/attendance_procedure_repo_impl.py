from clinical_attendance.core.domain.entities.attendance_procedure_entity import AttendanceProcedureEntity
from clinical_attendance.core.domain.repositories.attendance_procedure_repository import (
    AttendanceProcedureRepository,
)
from odonto_core.adapters.repositories.projections import dentist_summary, procedure_summary
from plugins.django_interface.models import AttendanceProcedure as AttendanceProcedureModel


class AttendanceProcedureRepoImpl(AttendanceProcedureRepository):
    def _base_qs(self):
        return AttendanceProcedureModel.objects.select_related("procedure", "dentist__user")

    @staticmethod
    def _to_entity(m: AttendanceProcedureModel) -> AttendanceProcedureEntity:
        return AttendanceProcedureEntity.from_model(
            m,
            procedure=procedure_summary(m.procedure),
            dentist=dentist_summary(m.dentist, with_email=False),
        )

    def create(self, procedure: AttendanceProcedureEntity) -> AttendanceProcedureEntity:
        m = AttendanceProcedureModel.objects.create(
            id=procedure.id,
            attendance_id=procedure.attendance_id,
            procedure_id=procedure.procedure_id,
            procedure_code=procedure.procedure_code,
            description=procedure.description,
            tooth=procedure.tooth,
            faces=list(procedure.faces),
            surface=procedure.surface,
            quantity=procedure.quantity,
            clinical_status=procedure.clinical_status,
            price=procedure.price,
            dentist_id=procedure.dentist_id,
            observations=procedure.observations,
        )
        return AttendanceProcedureEntity.from_model(m)

    def find_by_id(self, procedure_id, attendance_id) -> AttendanceProcedureEntity | None:
        m = self._base_qs().filter(id=procedure_id, attendance_id=attendance_id).first()
        return self._to_entity(m) if m else None

    def find_by_attendance_id(self, attendance_id) -> list[AttendanceProcedureEntity]:
        qs = self._base_qs().filter(attendance_id=attendance_id).order_by("-created_at")
        return [self._to_entity(m) for m in qs]

    def delete(self, procedure_id, attendance_id) -> None:
        AttendanceProcedureModel.objects.filter(id=procedure_id, attendance_id=attendance_id).delete()
