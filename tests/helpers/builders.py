"""
Fábricas mínimas de registros para os testes.

Gravam direto no ORM; as regras de negócio ficam para as fachadas.
"""
from __future__ import annotations

import itertools
from decimal import Decimal

from django.conf import settings
from django.utils import timezone

from clinical_attendance.adapters.config.composition_root import (
    setup_di_container_from_settings as build_attendance_container,
)
from odonto_core.adapters.config.composition_root import (
    setup_di_container_from_settings as build_core_container,
)
from odonto_core.core.application.dtos.session_dto import SessionContext
from plugins.django_interface.models import (
    Appointment,
    Clinic,
    Dentist,
    DentistProcedure,
    Patient,
    Procedure,
    Specialty,
    User,
)

_seq = itertools.count(1)


def core_container():
    return build_core_container(settings)


def attendance_container():
    return build_attendance_container(settings)


def session_for(user: User) -> SessionContext:
    return SessionContext(clinic_id=user.clinic_id, role=str(user.role), user_id=user.id)


# ───────────────────────────────────────────────
# Registros
# ───────────────────────────────────────────────
def make_clinic(name: str = "Clínica Sorriso") -> Clinic:
    return Clinic.objects.create(name=name)


def make_user(clinic: Clinic, role: str = User.Role.DENTIST, **extra) -> User:
    n = next(_seq)
    data = {
        "name": f"Usuário {n}",
        "email": f"usuario{n}@clinica.com",
        "password_hash": "hash-de-teste",
        "role": role,
    }
    data.update(extra)
    return User.objects.create(clinic=clinic, **data)


def make_dentist(clinic: Clinic, user: User | None = None, **extra) -> Dentist:
    user = user or make_user(clinic, role=User.Role.DENTIST)
    data = {"cro": f"CRO-SP {10000 + next(_seq)}"}
    data.update(extra)
    return Dentist.objects.create(clinic=clinic, user=user, **data)


def make_patient(clinic: Clinic, **extra) -> Patient:
    n = next(_seq)
    data = {"name": f"Paciente {n}", "email": f"paciente{n}@email.com", "phone": "11999990000"}
    data.update(extra)
    return Patient.objects.create(clinic=clinic, **data)


def make_specialty(clinic: Clinic, **extra) -> Specialty:
    data = {"name": f"Especialidade {next(_seq)}"}
    data.update(extra)
    return Specialty.objects.create(clinic=clinic, **data)


def make_procedure(clinic: Clinic, specialty: Specialty | None = None, **extra) -> Procedure:
    specialty = specialty or make_specialty(clinic)
    data = {"name": f"Procedimento {next(_seq)}", "base_value": Decimal("150.00")}
    data.update(extra)
    return Procedure.objects.create(clinic=clinic, specialty=specialty, **data)


def link_procedure(dentist: Dentist, procedure: Procedure) -> DentistProcedure:
    return DentistProcedure.objects.create(dentist=dentist, procedure=procedure)


def make_appointment(clinic: Clinic, patient: Patient, dentist: Dentist, **extra) -> Appointment:
    data = {"date": timezone.now(), "status": Appointment.Status.SCHEDULED}
    data.update(extra)
    return Appointment.objects.create(clinic=clinic, patient=patient, dentist=dentist, **data)
