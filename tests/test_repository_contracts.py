"""Interfaces de repositório com método `list` ainda anotam com o `list` embutido."""
import inspect
import typing
import uuid

from django.test import SimpleTestCase

from odonto_core.core.domain.entities.dentist_entity import DentistEntity
from odonto_core.core.domain.entities.user_entity import UserEntity
from odonto_core.core.domain.repositories.dentist_repository import DentistRepository
from odonto_core.core.domain.repositories.patient_repository import PatientRepository
from odonto_core.core.domain.repositories.payment_repository import PaymentRepository
from odonto_core.core.domain.repositories.procedure_repository import ProcedureRepository
from odonto_core.core.domain.repositories.record_repository import RecordRepository
from odonto_core.core.domain.repositories.specialty_repository import SpecialtyRepository
from odonto_core.core.domain.repositories.treatment_plan_repository import TreatmentPlanRepository
from odonto_core.core.domain.repositories.user_repository import UserRepository

REPOSITORIES = (
    DentistRepository,
    PatientRepository,
    PaymentRepository,
    ProcedureRepository,
    RecordRepository,
    SpecialtyRepository,
    TreatmentPlanRepository,
    UserRepository,
)


class RepositoryAnnotationTests(SimpleTestCase):
    def test_builtin_list_is_not_shadowed_by_list_method(self):
        self.assertEqual(
            typing.get_type_hints(DentistRepository.replace_procedures)["procedure_ids"],
            list[uuid.UUID],
        )
        self.assertEqual(typing.get_type_hints(DentistRepository.list)["return"], list[DentistEntity])
        self.assertEqual(typing.get_type_hints(UserRepository.list)["return"], list[UserEntity])

    def test_every_method_annotation_resolves(self):
        for repo in REPOSITORIES:
            for name, method in inspect.getmembers(repo, inspect.isfunction):
                with self.subTest(repository=repo.__name__, method=name):
                    typing.get_type_hints(method)
