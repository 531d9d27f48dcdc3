"""Dentistas: cadastro, perfil, vínculos com procedimentos e especialidades."""
from django.test import TestCase

from plugins.django_interface.models import User
from tests.helpers.builders import (
    core_container,
    link_procedure,
    make_clinic,
    make_dentist,
    make_procedure,
    make_specialty,
    make_user,
    session_for,
)


class DentistServiceTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clinic = make_clinic()
        cls.owner = make_user(cls.clinic, role=User.Role.OWNER)
        cls.receptionist = make_user(cls.clinic, role=User.Role.RECEPTIONIST)
        cls.candidate = make_user(cls.clinic, role=User.Role.DENTIST, name="Dra. Paula")

    def setUp(self):
        self.service = core_container().staff_service()
        self.session = session_for(self.owner)

    # ───────────────────────────────────────────────
    # cadastro
    # ───────────────────────────────────────────────
    def test_create_dentist_for_dentist_user(self):
        result = self.service.create_dentist(
            self.session, {"user_id": str(self.candidate.id), "cro": "CRO-SP 12345", "commission": "30"}
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.cro, "CRO-SP 12345")
        self.assertEqual(result.data.user["name"], "Dra. Paula")

    def test_only_managers_create_dentists(self):
        result = self.service.create_dentist(
            session_for(self.receptionist), {"user_id": str(self.candidate.id), "cro": "CRO-SP 12345"}
        )
        self.assertEqual(result.error, "Apenas proprietários e administradores podem criar dentistas")

    def test_cro_format_is_validated(self):
        result = self.service.create_dentist(self.session, {"user_id": str(self.candidate.id), "cro": "12345"})
        self.assertEqual(result.error, "Dados inválidos: CRO deve seguir o formato: CRO-SP 12345")

    def test_user_must_have_dentist_role(self):
        result = self.service.create_dentist(
            self.session, {"user_id": str(self.receptionist.id), "cro": "CRO-SP 12345"}
        )
        self.assertEqual(result.error, "Apenas usuários com cargo DENTIST podem ser cadastrados como dentistas")

    def test_inactive_user_cannot_become_dentist(self):
        inactive = make_user(self.clinic, role=User.Role.DENTIST, is_active=False)

        result = self.service.create_dentist(self.session, {"user_id": str(inactive.id), "cro": "CRO-SP 12345"})

        self.assertEqual(result.error, "Não é possível criar dentista para um usuário inativo")

    def test_user_from_other_clinic_is_not_found(self):
        foreign = make_user(make_clinic("Outra"), role=User.Role.DENTIST)

        result = self.service.create_dentist(self.session, {"user_id": str(foreign.id), "cro": "CRO-SP 12345"})

        self.assertEqual(result.error, "Usuário não encontrado ou não pertence a esta clínica")

    def test_cro_is_unique_per_clinic(self):
        make_dentist(self.clinic, cro="CRO-SP 12345")

        result = self.service.create_dentist(
            self.session, {"user_id": str(self.candidate.id), "cro": "CRO-SP 12345"}
        )

        self.assertEqual(result.error, "Este CRO já está cadastrado na clínica")

    def test_user_can_have_a_single_dentist_profile(self):
        dentist = make_dentist(self.clinic)

        result = self.service.create_dentist(self.session, {"user_id": str(dentist.user_id), "cro": "CRO-RJ 999"})

        self.assertFalse(result.success)
        self.assertIn("já está cadastrado como dentista na clínica", result.error)

    # ───────────────────────────────────────────────
    # perfil
    # ───────────────────────────────────────────────
    def test_dentist_edits_own_profile(self):
        dentist = make_dentist(self.clinic)

        result = self.service.update_dentist_profile(
            session_for(dentist.user), dentist.user_id, {"name": "Dr. Renato", "specialty": "Endodontia"}
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.user["name"], "Dr. Renato")
        self.assertEqual(result.data.specialty, "Endodontia")

    def test_dentist_cannot_edit_someone_elses_profile(self):
        dentist = make_dentist(self.clinic)
        intruder = make_dentist(self.clinic)

        result = self.service.update_dentist_profile(session_for(intruder.user), dentist.user_id, {"name": "X Y"})

        self.assertEqual(result.error, "Você não tem permissão para editar este perfil")

    def test_profile_email_must_be_free_in_clinic(self):
        dentist = make_dentist(self.clinic)

        result = self.service.update_dentist_profile(
            self.session, dentist.user_id, {"email": self.receptionist.email}
        )

        self.assertEqual(result.error, "Este email já está em uso na clínica")

    def test_deactivate_removes_dentist_from_listing(self):
        dentist = make_dentist(self.clinic)

        self.assertTrue(self.service.deactivate_dentist(self.session, dentist.id).success)
        listed = self.service.list_dentists(self.session).data

        self.assertNotIn(dentist.id, [d.id for d in listed])
        self.assertFalse(self.service.get_dentist(self.session, dentist.id).data.is_active)

    # ───────────────────────────────────────────────
    # vínculos
    # ───────────────────────────────────────────────
    def test_procedures_are_replaced_as_a_set(self):
        dentist = make_dentist(self.clinic)
        old, new = make_procedure(self.clinic), make_procedure(self.clinic)
        link_procedure(dentist, old)

        result = self.service.update_dentist_procedures(
            self.session, dentist.id, {"procedure_ids": [str(new.id)]}
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual([p["id"] for p in result.data.procedures], [new.id])

    def test_inactive_procedures_cannot_be_linked(self):
        dentist = make_dentist(self.clinic)
        inactive = make_procedure(self.clinic, is_active=False)

        result = self.service.update_dentist_procedures(
            self.session, dentist.id, {"procedure_ids": [str(inactive.id)]}
        )

        self.assertEqual(result.error, "Um ou mais procedimentos não foram encontrados ou estão inativos")

    def test_specialties_association_and_removal(self):
        dentist = make_dentist(self.clinic)
        orto, implante = make_specialty(self.clinic, name="Ortodontia"), make_specialty(self.clinic, name="Implante")

        associated = self.service.associate_dentist_specialties(
            self.session, dentist.id, {"specialty_ids": [str(orto.id), str(implante.id)]}
        )
        removed = self.service.remove_dentist_specialty(self.session, dentist.id, orto.id)
        missing = self.service.remove_dentist_specialty(self.session, dentist.id, orto.id)

        self.assertEqual(len(associated.data.specialties), 2)
        self.assertEqual([s["name"] for s in removed.data.specialties], ["Implante"])
        self.assertEqual(missing.error, "Associação entre dentista e especialidade não encontrada")

    def test_eligible_users_are_dentists_without_profile(self):
        make_dentist(self.clinic)

        result = self.service.list_eligible_users(self.session)

        self.assertEqual([u.id for u in result.data], [self.candidate.id])
