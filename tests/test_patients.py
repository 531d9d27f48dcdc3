"""Cadastro de pacientes: unicidade por clínica e exclusão lógica."""
from django.test import TestCase

from plugins.django_interface.models import Patient, User
from tests.helpers.builders import core_container, make_clinic, make_patient, make_user, session_for


class PatientServiceTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clinic = make_clinic()
        cls.owner = make_user(cls.clinic, role=User.Role.OWNER)
        cls.receptionist = make_user(cls.clinic, role=User.Role.RECEPTIONIST)
        cls.other_clinic = make_clinic("Clínica Norte")

    def setUp(self):
        self.service = core_container().patient_service()
        self.session = session_for(self.owner)

    def test_create_normalizes_email_and_blank_fields(self):
        result = self.service.create_patient(
            self.session,
            {"name": "  João Lima ", "email": "JOAO@Email.com", "phone": "", "cpf": "123.456.789-00"},
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.name, "João Lima")
        self.assertEqual(result.data.email, "joao@email.com")
        self.assertIsNone(result.data.phone)
        self.assertTrue(result.data.is_active)

    def test_name_is_validated(self):
        result = self.service.create_patient(self.session, {"name": "J"})
        self.assertEqual(result.error, "Dados inválidos: Nome deve ter pelo menos 2 caracteres")

    def test_invalid_email_is_rejected(self):
        result = self.service.create_patient(self.session, {"name": "Ana", "email": "sem-arroba"})
        self.assertEqual(result.error, "Dados inválidos: Email deve ter um formato válido")

    def test_cpf_is_unique_per_clinic(self):
        make_patient(self.clinic, cpf="111.222.333-44")
        make_patient(self.other_clinic, cpf="555.666.777-88")

        duplicate = self.service.create_patient(self.session, {"name": "Ana", "cpf": "111.222.333-44"})
        other_clinic_cpf = self.service.create_patient(self.session, {"name": "Bia", "cpf": "555.666.777-88"})

        self.assertEqual(duplicate.error, "Este CPF já está cadastrado na clínica")
        self.assertTrue(other_clinic_cpf.success, other_clinic_cpf.error)

    def test_update_checks_email_against_other_patients(self):
        make_patient(self.clinic, email="ocupado@email.com")
        patient = make_patient(self.clinic, email="livre@email.com")

        taken = self.service.update_patient(self.session, patient.id, {"email": "ocupado@email.com"})
        same = self.service.update_patient(self.session, patient.id, {"email": "livre@email.com", "notes": "Alergia"})

        self.assertEqual(taken.error, "Este email já está cadastrado na clínica")
        self.assertTrue(same.success, same.error)
        self.assertEqual(same.data.notes, "Alergia")

    def test_deactivate_is_a_soft_delete_for_managers(self):
        patient = make_patient(self.clinic)

        denied = self.service.deactivate_patient(session_for(self.receptionist), patient.id)
        result = self.service.deactivate_patient(self.session, patient.id)

        self.assertEqual(denied.error, "Apenas proprietários e administradores podem desativar pacientes")
        self.assertTrue(result.success, result.error)
        self.assertFalse(Patient.objects.get(id=patient.id).is_active)

    def test_list_searches_and_filters_by_status(self):
        make_patient(self.clinic, name="Carla Dias", phone="11988887777")
        make_patient(self.clinic, name="Carlos Reis", is_active=False)
        make_patient(self.other_clinic, name="Carla Externa")

        result = self.service.list_patients(self.session, {"search": "carl", "is_active": True})

        self.assertEqual([p.name for p in result.data], ["Carla Dias"])

    def test_other_clinic_patient_is_not_found(self):
        foreign = make_patient(self.other_clinic)

        result = self.service.get_patient(self.session, foreign.id)

        self.assertEqual(result.error, "Paciente não encontrado")
