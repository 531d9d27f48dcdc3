import uuid

import structlog
from django.db import transaction

from odonto_core.core.application.commands.dentist_commands import (
    AssociateDentistSpecialtiesCommand,
    CreateDentistCommand,
    DeactivateDentistCommand,
    RemoveDentistSpecialtyCommand,
    UpdateDentistCommand,
    UpdateDentistProceduresCommand,
    UpdateDentistProfileCommand,
)
from odonto_core.core.application.cqrs import CommandHandler
from odonto_core.core.application.dtos.dentist_dto import PROFILE_USER_FIELDS
from odonto_core.core.application.handlers.guards import require_manager
from odonto_core.core.domain.entities.dentist_entity import DentistEntity
from odonto_core.core.domain.entities.user_entity import UserRole
from odonto_core.core.domain.events.events import DentistCreatedEvent
from odonto_core.core.domain.exceptions import (
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from odonto_core.core.domain.repositories.dentist_repository import DentistRepository
from odonto_core.core.domain.repositories.procedure_repository import ProcedureRepository
from odonto_core.core.domain.repositories.specialty_repository import SpecialtyRepository
from odonto_core.core.domain.repositories.user_repository import UserRepository
from odonto_core.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)

DENTIST_NOT_FOUND = "Dentista não encontrado"
DENTIST_NOT_IN_CLINIC = "Dentista não encontrado ou não pertence a esta clínica"
CRO_TAKEN = "Este CRO já está cadastrado na clínica"


def _get_dentist(repo: DentistRepository, dentist_id, clinic_id, message: str = DENTIST_NOT_FOUND) -> DentistEntity:
    dentist = repo.find_by_id(dentist_id, clinic_id)
    if dentist is None:
        raise NotFoundError(message)
    return dentist


# ——— CADASTRO ——————————————————————————————————————————————

class CreateDentistHandler(CommandHandler[CreateDentistCommand]):
    def __init__(self, repo: DentistRepository, user_repo: UserRepository, dispatcher: EventDispatcher):
        self.repo = repo
        self.user_repo = user_repo
        self.dispatcher = dispatcher

    def handle(self, command: CreateDentistCommand) -> DentistEntity:
        session, payload = command.session, command.payload
        require_manager(session, "Apenas proprietários e administradores podem criar dentistas")

        user = self.user_repo.find_by_id(payload.user_id, session.clinic_id)
        if user is None:
            raise NotFoundError("Usuário não encontrado ou não pertence a esta clínica")
        if not user.is_active:
            raise BusinessRuleError("Não é possível criar dentista para um usuário inativo")
        if self.repo.find_by_user_id(user.id, session.clinic_id):
            raise ConflictError(
                f'O usuário "{user.name}" já está cadastrado como dentista na clínica. '
                "Cada usuário pode estar vinculado a apenas um dentista."
            )
        if self.repo.find_by_cro(payload.cro, session.clinic_id):
            raise ConflictError(CRO_TAKEN)
        if user.role != UserRole.DENTIST:
            raise BusinessRuleError("Apenas usuários com cargo DENTIST podem ser cadastrados como dentistas")

        dentist = self.repo.create(
            DentistEntity(id=uuid.uuid4(), clinic_id=session.clinic_id, **payload.model_dump())
        )
        self.dispatcher.dispatch(
            DentistCreatedEvent(dentist_id=dentist.id, clinic_id=dentist.clinic_id, user_id=dentist.user_id)
        )
        return dentist


class UpdateDentistHandler(CommandHandler[UpdateDentistCommand]):
    def __init__(self, repo: DentistRepository):
        self.repo = repo

    def handle(self, command: UpdateDentistCommand) -> DentistEntity:
        session = command.session
        require_manager(session, "Apenas proprietários e administradores podem editar dentistas")
        dentist = _get_dentist(self.repo, command.id, session.clinic_id)

        changes = command.payload.changes()
        cro = changes.get("cro")
        if cro and cro != dentist.cro and self.repo.find_by_cro(cro, session.clinic_id, exclude_id=dentist.id):
            raise ConflictError(CRO_TAKEN)
        if not changes:
            return dentist
        return self.repo.update(dentist.id, session.clinic_id, changes)


class UpdateDentistProfileHandler(CommandHandler[UpdateDentistProfileCommand]):
    """
    Edição do próprio perfil (ou por OWNER/ADMIN).

    Nome e e-mail pertencem ao usuário; os demais campos ao dentista.
    """

    def __init__(self, repo: DentistRepository, user_repo: UserRepository):
        self.repo = repo
        self.user_repo = user_repo

    @transaction.atomic
    def handle(self, command: UpdateDentistProfileCommand) -> DentistEntity:
        session = command.session
        if session.user_id != command.user_id and not session.is_manager:
            raise PermissionDeniedError("Você não tem permissão para editar este perfil")

        dentist = self.repo.find_by_user_id(command.user_id, session.clinic_id)
        if dentist is None:
            raise NotFoundError(DENTIST_NOT_FOUND)

        changes = command.payload.changes()
        user_changes = {k: changes.pop(k) for k in PROFILE_USER_FIELDS if k in changes}

        email = user_changes.get("email")
        if email and email != dentist.user["email"] and self.user_repo.find_by_email(
            email, session.clinic_id, exclude_id=dentist.user_id
        ):
            raise ConflictError("Este email já está em uso na clínica")
        cro = changes.get("cro")
        if cro and cro != dentist.cro and self.repo.find_by_cro(cro, session.clinic_id, exclude_id=dentist.id):
            raise ConflictError("Este CRO já está cadastrado nesta clínica")

        if user_changes:
            self.user_repo.update(dentist.user_id, session.clinic_id, user_changes)
        if changes:
            return self.repo.update(dentist.id, session.clinic_id, changes)
        return self.repo.find_by_id(dentist.id, session.clinic_id)


class DeactivateDentistHandler(CommandHandler[DeactivateDentistCommand]):
    def __init__(self, repo: DentistRepository):
        self.repo = repo

    def handle(self, command: DeactivateDentistCommand) -> DentistEntity:
        session = command.session
        require_manager(session, "Apenas proprietários e administradores podem desativar dentistas")
        dentist = _get_dentist(self.repo, command.id, session.clinic_id)
        logger.info("dentist.deactivated", dentist_id=str(dentist.id))
        return self.repo.update(dentist.id, session.clinic_id, {"is_active": False})


# ——— VÍNCULOS ——————————————————————————————————————————————

class UpdateDentistProceduresHandler(CommandHandler[UpdateDentistProceduresCommand]):
    """Substitui o conjunto de procedimentos que o dentista pode executar."""

    def __init__(self, repo: DentistRepository, procedure_repo: ProcedureRepository):
        self.repo = repo
        self.procedure_repo = procedure_repo

    def handle(self, command: UpdateDentistProceduresCommand) -> DentistEntity:
        session = command.session
        require_manager(
            session, "Apenas proprietários e administradores podem gerenciar procedimentos de dentistas"
        )
        dentist = _get_dentist(self.repo, command.id, session.clinic_id)

        requested = set(command.payload.procedure_ids)
        if requested:
            found = self.procedure_repo.find_active_by_ids(list(requested), session.clinic_id)
            if len(found) != len(requested):
                raise NotFoundError("Um ou mais procedimentos não foram encontrados ou estão inativos")

        self.repo.replace_procedures(dentist.id, list(requested))
        return self.repo.find_by_id(dentist.id, session.clinic_id)


class AssociateDentistSpecialtiesHandler(CommandHandler[AssociateDentistSpecialtiesCommand]):
    def __init__(self, repo: DentistRepository, specialty_repo: SpecialtyRepository):
        self.repo = repo
        self.specialty_repo = specialty_repo

    def handle(self, command: AssociateDentistSpecialtiesCommand) -> DentistEntity:
        session = command.session
        require_manager(session, "Apenas proprietários e administradores podem associar especialidades")
        dentist = _get_dentist(self.repo, command.id, session.clinic_id, DENTIST_NOT_IN_CLINIC)

        requested = set(command.payload.specialty_ids)
        found = self.specialty_repo.find_many(list(requested), session.clinic_id)
        if len(found) != len(requested):
            raise NotFoundError("Uma ou mais especialidades não foram encontradas")

        self.repo.replace_specialties(dentist.id, list(requested))
        return self.repo.find_by_id(dentist.id, session.clinic_id)


class RemoveDentistSpecialtyHandler(CommandHandler[RemoveDentistSpecialtyCommand]):
    def __init__(self, repo: DentistRepository):
        self.repo = repo

    def handle(self, command: RemoveDentistSpecialtyCommand) -> DentistEntity:
        session = command.session
        require_manager(session, "Apenas proprietários e administradores podem remover especialidades")
        dentist = _get_dentist(self.repo, command.id, session.clinic_id, DENTIST_NOT_IN_CLINIC)

        if not self.repo.remove_specialty(dentist.id, command.specialty_id):
            raise NotFoundError("Associação entre dentista e especialidade não encontrada")
        return self.repo.find_by_id(dentist.id, session.clinic_id)
