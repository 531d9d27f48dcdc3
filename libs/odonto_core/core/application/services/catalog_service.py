from typing import Any

from odonto_core.adapters.observability.decorators import as_operation_result
from odonto_core.core.application.commands.catalog_commands import (
    CreateProcedureCommand,
    CreateSpecialtyCommand,
    SetProcedureActiveCommand,
    UpdateProcedureCommand,
    UpdateSpecialtyCommand,
)
from odonto_core.core.application.cqrs import BaseService
from odonto_core.core.application.dtos.catalog_dto import (
    CreateProcedureDTO,
    CreateSpecialtyDTO,
    ListProceduresDTO,
    ListSpecialtiesDTO,
    SearchCidsDTO,
    UpdateProcedureDTO,
    UpdateSpecialtyDTO,
)
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.queries.catalog_queries import (
    GetProcedureQuery,
    ListProceduresQuery,
    ListSpecialtiesQuery,
    SearchCidsQuery,
)
from odonto_core.core.application.validation import as_uuid

PROCEDURE_NOT_FOUND = "Procedimento não encontrado"
SPECIALTY_NOT_FOUND = "Especialidade não encontrada"


class CatalogService(BaseService):
    """Especialidades, procedimentos e consulta ao catálogo CID-10."""

    @as_operation_result("create_specialty")
    def create_specialty(self, session: SessionContext, data: dict[str, Any]):
        payload = CreateSpecialtyDTO.model_validate(data)
        return self.execute(CreateSpecialtyCommand(session=session, payload=payload))

    @as_operation_result("update_specialty")
    def update_specialty(self, session: SessionContext, specialty_id, data: dict[str, Any]):
        payload = UpdateSpecialtyDTO.model_validate(data)
        return self.execute(
            UpdateSpecialtyCommand(session=session, id=as_uuid(specialty_id, SPECIALTY_NOT_FOUND), payload=payload)
        )

    @as_operation_result("list_specialties")
    def list_specialties(self, session: SessionContext, filters: dict[str, Any] | None = None):
        filtros = ListSpecialtiesDTO.model_validate(filters or {})
        return self.query(ListSpecialtiesQuery(clinic_id=session.clinic_id, filtros=filtros))

    @as_operation_result("create_procedure")
    def create_procedure(self, session: SessionContext, data: dict[str, Any]):
        payload = CreateProcedureDTO.model_validate(data)
        return self.execute(CreateProcedureCommand(session=session, payload=payload))

    @as_operation_result("update_procedure")
    def update_procedure(self, session: SessionContext, procedure_id, data: dict[str, Any]):
        payload = UpdateProcedureDTO.model_validate(data)
        return self.execute(
            UpdateProcedureCommand(session=session, id=as_uuid(procedure_id, PROCEDURE_NOT_FOUND), payload=payload)
        )

    @as_operation_result("deactivate_procedure")
    def deactivate_procedure(self, session: SessionContext, procedure_id):
        return self.execute(
            SetProcedureActiveCommand(session=session, id=as_uuid(procedure_id, PROCEDURE_NOT_FOUND), active=False)
        )

    @as_operation_result("activate_procedure")
    def activate_procedure(self, session: SessionContext, procedure_id):
        return self.execute(
            SetProcedureActiveCommand(session=session, id=as_uuid(procedure_id, PROCEDURE_NOT_FOUND), active=True)
        )

    @as_operation_result("get_procedure")
    def get_procedure(self, session: SessionContext, procedure_id):
        return self.query(
            GetProcedureQuery(id=as_uuid(procedure_id, PROCEDURE_NOT_FOUND), clinic_id=session.clinic_id)
        )

    @as_operation_result("list_procedures")
    def list_procedures(self, session: SessionContext, filters: dict[str, Any] | None = None):
        filtros = ListProceduresDTO.model_validate(filters or {})
        return self.query(ListProceduresQuery(clinic_id=session.clinic_id, filtros=filtros))

    @as_operation_result("search_cids")
    def search_cids(self, session: SessionContext, query: str = "", limit: int = 20):
        filtros = SearchCidsDTO.model_validate({"query": query, "limit": limit})
        return self.query(SearchCidsQuery(filtros=filtros))
