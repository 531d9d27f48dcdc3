import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import CommandDTO
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.dtos.user_dto import CreateUserDTO, UpdateUserDTO


@dataclass(frozen=True)
class CreateUserCommand(CommandDTO):
    session: SessionContext
    payload: CreateUserDTO

@dataclass(frozen=True)
class UpdateUserCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: UpdateUserDTO
