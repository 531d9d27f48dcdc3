from odonto_core.core.domain.entities.appointment_entity import AppointmentEntity
from odonto_core.core.domain.repositories.appointment_repository import AppointmentRepository
from plugins.django_interface.models import Appointment as AppointmentModel


class AppointmentRepoImpl(AppointmentRepository):
    def find_by_id(self, appointment_id, clinic_id) -> AppointmentEntity | None:
        m = AppointmentModel.objects.filter(id=appointment_id, clinic_id=clinic_id).first()
        return AppointmentEntity.from_model(m) if m else None
