from typing import Any

from odonto_core.adapters.observability.decorators import as_operation_result
from odonto_core.core.application.commands.patient_commands import (
    CreatePatientCommand,
    DeactivatePatientCommand,
    UpdatePatientCommand,
)
from odonto_core.core.application.cqrs import BaseService
from odonto_core.core.application.dtos.patient_dto import CreatePatientDTO, ListPatientsDTO, UpdatePatientDTO
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.queries.patient_queries import GetPatientQuery, ListPatientsQuery
from odonto_core.core.application.validation import as_uuid

NOT_FOUND = "Paciente não encontrado"


class PatientService(BaseService):
    """Fachada de pacientes: valida a entrada e despacha para os buses."""

    @as_operation_result("create_patient")
    def create_patient(self, session: SessionContext, data: dict[str, Any]):
        payload = CreatePatientDTO.model_validate(data)
        return self.execute(CreatePatientCommand(session=session, payload=payload))

    @as_operation_result("update_patient")
    def update_patient(self, session: SessionContext, patient_id, data: dict[str, Any]):
        payload = UpdatePatientDTO.model_validate(data)
        return self.execute(
            UpdatePatientCommand(session=session, id=as_uuid(patient_id, NOT_FOUND), payload=payload)
        )

    @as_operation_result("deactivate_patient")
    def deactivate_patient(self, session: SessionContext, patient_id):
        return self.execute(DeactivatePatientCommand(session=session, id=as_uuid(patient_id, NOT_FOUND)))

    @as_operation_result("get_patient")
    def get_patient(self, session: SessionContext, patient_id):
        return self.query(GetPatientQuery(id=as_uuid(patient_id, NOT_FOUND), clinic_id=session.clinic_id))

    @as_operation_result("list_patients")
    def list_patients(self, session: SessionContext, filters: dict[str, Any] | None = None):
        filtros = ListPatientsDTO.model_validate(filters or {})
        return self.query(ListPatientsQuery(clinic_id=session.clinic_id, filtros=filtros))
