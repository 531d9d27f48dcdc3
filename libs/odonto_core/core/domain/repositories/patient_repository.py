from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

from odonto_core.core.domain.entities.patient_entity import PatientEntity


class PatientRepository(ABC):
    @abstractmethod
    def find_by_id(self, patient_id: uuid.UUID, clinic_id: uuid.UUID) -> PatientEntity | None:
        """Retorna um paciente da clínica pelo ID."""
        ...

    @abstractmethod
    def find_by_cpf(
        self, cpf: str, clinic_id: uuid.UUID, exclude_id: uuid.UUID | None = None
    ) -> PatientEntity | None:
        """Busca paciente pelo CPF, ignorando `exclude_id` (edição)."""
        ...

    @abstractmethod
    def find_by_email(
        self, email: str, clinic_id: uuid.UUID, exclude_id: uuid.UUID | None = None
    ) -> PatientEntity | None:
        """Busca paciente pelo e-mail, ignorando `exclude_id` (edição)."""
        ...

    @abstractmethod
    def create(self, patient: PatientEntity) -> PatientEntity:
        """Insere um novo paciente."""
        ...

    @abstractmethod
    def update(self, patient_id: uuid.UUID, clinic_id: uuid.UUID, changes: dict[str, Any]) -> PatientEntity:
        """Aplica `changes` parcialmente e retorna o paciente atualizado."""
        ...

    @abstractmethod
    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[PatientEntity]:
        """
        Lista pacientes da clínica ordenados por nome.

        - filtros["search"]: trecho de nome, e-mail, telefone ou CPF
        - filtros["is_active"]: situação cadastral
        """
        ...
