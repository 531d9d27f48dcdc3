"""Fachada da equipe: usuários da clínica e perfis de dentista."""
from typing import Any

from odonto_core.adapters.observability.decorators import as_operation_result
from odonto_core.core.application.commands.dentist_commands import (
    AssociateDentistSpecialtiesCommand,
    CreateDentistCommand,
    DeactivateDentistCommand,
    RemoveDentistSpecialtyCommand,
    UpdateDentistCommand,
    UpdateDentistProceduresCommand,
    UpdateDentistProfileCommand,
)
from odonto_core.core.application.commands.user_commands import CreateUserCommand, UpdateUserCommand
from odonto_core.core.application.cqrs import BaseService
from odonto_core.core.application.dtos.dentist_dto import (
    AssociateDentistSpecialtiesDTO,
    CreateDentistDTO,
    ListDentistsDTO,
    UpdateDentistDTO,
    UpdateDentistProceduresDTO,
    UpdateDentistProfileDTO,
)
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.dtos.user_dto import CreateUserDTO, ListUsersDTO, UpdateUserDTO
from odonto_core.core.application.queries.dentist_queries import GetDentistQuery, ListDentistsQuery
from odonto_core.core.application.queries.user_queries import ListEligibleUsersQuery, ListUsersQuery
from odonto_core.core.application.validation import as_uuid

DENTIST_NOT_FOUND = "Dentista não encontrado"
USER_NOT_FOUND = "Usuário não encontrado"


class StaffService(BaseService):
    # ────────────────────────── dentistas ──────────────────────────
    @as_operation_result("create_dentist")
    def create_dentist(self, session: SessionContext, data: dict[str, Any]):
        payload = CreateDentistDTO.model_validate(data)
        return self.execute(CreateDentistCommand(session=session, payload=payload))

    @as_operation_result("update_dentist")
    def update_dentist(self, session: SessionContext, dentist_id, data: dict[str, Any]):
        payload = UpdateDentistDTO.model_validate(data)
        return self.execute(
            UpdateDentistCommand(session=session, id=as_uuid(dentist_id, DENTIST_NOT_FOUND), payload=payload)
        )

    @as_operation_result("update_dentist_profile")
    def update_dentist_profile(self, session: SessionContext, user_id, data: dict[str, Any]):
        payload = UpdateDentistProfileDTO.model_validate(data)
        return self.execute(
            UpdateDentistProfileCommand(
                session=session, user_id=as_uuid(user_id, DENTIST_NOT_FOUND), payload=payload
            )
        )

    @as_operation_result("update_dentist_procedures")
    def update_dentist_procedures(self, session: SessionContext, dentist_id, data: dict[str, Any]):
        payload = UpdateDentistProceduresDTO.model_validate(data)
        return self.execute(
            UpdateDentistProceduresCommand(
                session=session, id=as_uuid(dentist_id, DENTIST_NOT_FOUND), payload=payload
            )
        )

    @as_operation_result("associate_dentist_specialties")
    def associate_dentist_specialties(self, session: SessionContext, dentist_id, data: dict[str, Any]):
        payload = AssociateDentistSpecialtiesDTO.model_validate(data)
        return self.execute(
            AssociateDentistSpecialtiesCommand(
                session=session, id=as_uuid(dentist_id, DENTIST_NOT_FOUND), payload=payload
            )
        )

    @as_operation_result("remove_dentist_specialty")
    def remove_dentist_specialty(self, session: SessionContext, dentist_id, specialty_id):
        return self.execute(
            RemoveDentistSpecialtyCommand(
                session=session,
                id=as_uuid(dentist_id, DENTIST_NOT_FOUND),
                specialty_id=as_uuid(specialty_id, "Associação entre dentista e especialidade não encontrada"),
            )
        )

    @as_operation_result("deactivate_dentist")
    def deactivate_dentist(self, session: SessionContext, dentist_id):
        return self.execute(DeactivateDentistCommand(session=session, id=as_uuid(dentist_id, DENTIST_NOT_FOUND)))

    @as_operation_result("get_dentist")
    def get_dentist(self, session: SessionContext, dentist_id):
        return self.query(GetDentistQuery(id=as_uuid(dentist_id, DENTIST_NOT_FOUND), clinic_id=session.clinic_id))

    @as_operation_result("list_dentists")
    def list_dentists(self, session: SessionContext, filters: dict[str, Any] | None = None):
        filtros = ListDentistsDTO.model_validate(filters or {})
        return self.query(ListDentistsQuery(clinic_id=session.clinic_id, filtros=filtros))

    # ────────────────────────── usuários ──────────────────────────
    @as_operation_result("create_user")
    def create_user(self, session: SessionContext, data: dict[str, Any]):
        payload = CreateUserDTO.model_validate(data)
        return self.execute(CreateUserCommand(session=session, payload=payload))

    @as_operation_result("update_user")
    def update_user(self, session: SessionContext, user_id, data: dict[str, Any]):
        payload = UpdateUserDTO.model_validate(data)
        return self.execute(UpdateUserCommand(session=session, id=as_uuid(user_id, USER_NOT_FOUND), payload=payload))

    @as_operation_result("list_users")
    def list_users(self, session: SessionContext, filters: dict[str, Any] | None = None):
        filtros = ListUsersDTO.model_validate(filters or {})
        return self.query(ListUsersQuery(clinic_id=session.clinic_id, filtros=filtros))

    @as_operation_result("list_eligible_users")
    def list_eligible_users(self, session: SessionContext):
        return self.query(ListEligibleUsersQuery(clinic_id=session.clinic_id))
