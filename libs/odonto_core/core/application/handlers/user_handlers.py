import uuid

import structlog

from odonto_core.adapters.security.hash_service import HashService
from odonto_core.core.application.commands.user_commands import CreateUserCommand, UpdateUserCommand
from odonto_core.core.application.cqrs import CommandHandler
from odonto_core.core.application.handlers.guards import require_manager
from odonto_core.core.domain.entities.user_entity import UserEntity, UserRole
from odonto_core.core.domain.exceptions import (
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from odonto_core.core.domain.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)

EMAIL_TAKEN = "Este email já está em uso na clínica"


class CreateUserHandler(CommandHandler[CreateUserCommand]):
    def __init__(self, repo: UserRepository, hash_service: HashService):
        self.repo = repo
        self.hash_service = hash_service

    def handle(self, command: CreateUserCommand) -> UserEntity:
        session, payload = command.session, command.payload
        require_manager(session, "Apenas proprietários e administradores podem criar usuários")
        if session.role == UserRole.ADMIN and payload.role == UserRole.OWNER:
            raise PermissionDeniedError("Administradores não podem criar proprietários")
        if self.repo.find_by_email(payload.email, session.clinic_id):
            raise ConflictError(EMAIL_TAKEN)

        user = UserEntity(
            id=uuid.uuid4(),
            clinic_id=session.clinic_id,
            name=payload.name,
            email=payload.email,
            role=payload.role,
        )
        created = self.repo.create(user, self.hash_service.hash_password(payload.password))
        logger.info("user.created", user_id=str(created.id), role=created.role)
        return created


class UpdateUserHandler(CommandHandler[UpdateUserCommand]):
    """
    Regras de edição:
    - ADMIN não edita nem promove proprietários
    - ninguém desativa a própria conta ou altera o próprio cargo
    - o último proprietário ativo não pode ser desativado nem rebaixado
    """

    def __init__(self, repo: UserRepository, hash_service: HashService):
        self.repo = repo
        self.hash_service = hash_service

    def handle(self, command: UpdateUserCommand) -> UserEntity:  # noqa: PLR0912
        session = command.session
        require_manager(session, "Apenas proprietários e administradores podem editar usuários")

        target = self.repo.find_by_id(command.id, session.clinic_id)
        if target is None:
            raise NotFoundError("Usuário não encontrado")

        changes = command.payload.changes()
        password = changes.pop("password", None)
        new_role = changes.get("role")
        deactivating = changes.get("is_active") is False
        is_self = session.user_id == target.id

        if session.role == UserRole.ADMIN and target.role == UserRole.OWNER:
            raise PermissionDeniedError("Administradores não podem editar proprietários")
        if session.role == UserRole.ADMIN and new_role == UserRole.OWNER:
            raise PermissionDeniedError("Administradores não podem promover usuários a proprietários")
        if is_self and deactivating:
            raise BusinessRuleError("Você não pode desativar sua própria conta")
        if is_self and new_role and new_role != target.role:
            raise BusinessRuleError("Você não pode alterar seu próprio cargo")

        if target.role == UserRole.OWNER and self.repo.count_active_owners(session.clinic_id) <= 1:
            if deactivating:
                raise BusinessRuleError("Não é possível desativar o único proprietário da clínica")
            if new_role and new_role != UserRole.OWNER:
                raise BusinessRuleError("Não é possível alterar o cargo do único proprietário da clínica")

        email = changes.get("email")
        if email and email != target.email and self.repo.find_by_email(
            email, session.clinic_id, exclude_id=target.id
        ):
            raise ConflictError(EMAIL_TAKEN)

        if not changes and not password:
            return target
        password_hash = self.hash_service.hash_password(password) if password else None
        return self.repo.update(target.id, session.clinic_id, changes, password_hash=password_hash)
