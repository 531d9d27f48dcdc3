from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

from odonto_core.core.domain.entities.user_entity import UserEntity


class UserRepository(ABC):
    @abstractmethod
    def find_by_id(self, user_id: uuid.UUID, clinic_id: uuid.UUID) -> UserEntity | None:
        """Retorna um usuário da clínica pelo ID."""
        ...

    @abstractmethod
    def find_by_email(
        self, email: str, clinic_id: uuid.UUID, exclude_id: uuid.UUID | None = None
    ) -> UserEntity | None:
        """Busca usuário da clínica pelo e-mail."""
        ...

    @abstractmethod
    def create(self, user: UserEntity, password_hash: str) -> UserEntity:
        """Insere um usuário com a senha já em hash."""
        ...

    @abstractmethod
    def update(
        self,
        user_id: uuid.UUID,
        clinic_id: uuid.UUID,
        changes: dict[str, Any],
        password_hash: str | None = None,
    ) -> UserEntity:
        """Atualiza campos do usuário; troca a senha se `password_hash` vier."""
        ...

    @abstractmethod
    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[UserEntity]:
        """Lista usuários filtrando por `role`, `is_active` e `search`."""
        ...

    @abstractmethod
    def list_eligible_dentists(self, clinic_id: uuid.UUID) -> list[UserEntity]:
        """Usuários ativos com cargo DENTIST e ainda sem perfil de dentista."""
        ...

    @abstractmethod
    def count_active_owners(self, clinic_id: uuid.UUID) -> int:
        """Quantidade de proprietários ativos da clínica."""
        ...
