from __future__ import annotations

import uuid
from typing import Any

from django.db.models import Q

from odonto_core.core.domain.entities.user_entity import UserEntity, UserRole
from odonto_core.core.domain.repositories.user_repository import UserRepository
from plugins.django_interface.models import User as UserModel


class UserRepoImpl(UserRepository):
    def find_by_id(self, user_id: uuid.UUID, clinic_id: uuid.UUID) -> UserEntity | None:
        try:
            m = UserModel.objects.get(id=user_id, clinic_id=clinic_id)
            return UserEntity.from_model(m)
        except UserModel.DoesNotExist:
            return None

    def find_by_email(self, email, clinic_id, exclude_id=None) -> UserEntity | None:
        qs = UserModel.objects.filter(clinic_id=clinic_id, email__iexact=email)
        if exclude_id:
            qs = qs.exclude(id=exclude_id)
        m = qs.first()
        return UserEntity.from_model(m) if m else None

    def create(self, user: UserEntity, password_hash: str) -> UserEntity:
        m = UserModel.objects.create(
            id=user.id,
            clinic_id=user.clinic_id,
            name=user.name,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
            password_hash=password_hash,
        )
        return UserEntity.from_model(m)

    def update(self, user_id, clinic_id, changes: dict[str, Any], password_hash: str | None = None) -> UserEntity:
        model = UserModel.objects.get(id=user_id, clinic_id=clinic_id)
        fields = dict(changes)
        if password_hash:
            fields["password_hash"] = password_hash
        for k, v in fields.items():
            setattr(model, k, v)
        model.save(update_fields=[*fields.keys(), "updated_at"])
        return UserEntity.from_model(model)

    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[UserEntity]:
        qs = UserModel.objects.filter(clinic_id=clinic_id)
        if filtros.get("role"):
            qs = qs.filter(role=filtros["role"])
        if filtros.get("is_active") is not None:
            qs = qs.filter(is_active=filtros["is_active"])
        if search := filtros.get("search"):
            qs = qs.filter(Q(name__icontains=search) | Q(email__icontains=search))
        return [UserEntity.from_model(m) for m in qs.order_by("name")]

    def list_eligible_dentists(self, clinic_id: uuid.UUID) -> list[UserEntity]:
        qs = UserModel.objects.filter(
            clinic_id=clinic_id,
            role=UserRole.DENTIST,
            is_active=True,
            dentist__isnull=True,
        ).order_by("name")
        return [UserEntity.from_model(m) for m in qs]

    def count_active_owners(self, clinic_id: uuid.UUID) -> int:
        return UserModel.objects.filter(clinic_id=clinic_id, role=UserRole.OWNER, is_active=True).count()
