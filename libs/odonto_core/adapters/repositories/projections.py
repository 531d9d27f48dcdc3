"""
Projeções mínimas de entidades relacionadas.

Os repositórios devolvem estas formas já aninhadas para que os casos de
uso não façam consultas extras por item (N+1).
"""
from typing import Any

from plugins.django_interface.models import Dentist as DentistModel
from plugins.django_interface.models import Patient as PatientModel
from plugins.django_interface.models import Procedure as ProcedureModel


def patient_summary(m: PatientModel | None) -> dict[str, Any] | None:
    if m is None:
        return None
    return {"id": m.id, "name": m.name, "email": m.email, "phone": m.phone}


def dentist_summary(m: DentistModel | None, *, with_email: bool = True) -> dict[str, Any] | None:
    if m is None:
        return None
    user: dict[str, Any] = {"id": m.user.id, "name": m.user.name}
    if with_email:
        user["email"] = m.user.email
    return {"id": m.id, "cro": m.cro, "specialty": m.specialty, "user": user}


def procedure_summary(m: ProcedureModel | None) -> dict[str, Any] | None:
    if m is None:
        return None
    return {
        "id": m.id,
        "name": m.name,
        "base_value": m.base_value,
        "description": m.description,
    }
