from django.test import TestCase

from odonto_core.adapters.security.hash_service import HashService
from plugins.django_interface.models import User
from tests.helpers.builders import core_container, make_clinic, make_user, session_for


class UserManagementTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clinic = make_clinic()
        cls.owner = make_user(cls.clinic, role=User.Role.OWNER, name="Ana Proprietária")
        cls.admin = make_user(cls.clinic, role=User.Role.ADMIN, name="Bruno Admin")
        cls.receptionist = make_user(cls.clinic, role=User.Role.RECEPTIONIST, name="Carla Recepção")

    def setUp(self):
        self.service = core_container().staff_service()

    def _create(self, session, **data):
        payload = {"name": "Novo Usuário", "email": "novo@clinica.com", "password": "segredo1", "role": "DENTIST"}
        payload.update(data)
        return self.service.create_user(session, payload)

    # ─── criação ────────────────────────────────────────────────────
    def test_owner_creates_user_with_hashed_password(self):
        result = self._create(session_for(self.owner), email="  Novo@Clinica.com ")

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.email, "novo@clinica.com")
        stored = User.objects.get(id=result.data.id)
        self.assertNotEqual(stored.password_hash, "segredo1")
        self.assertTrue(HashService.verify("segredo1", stored.password_hash))
        self.assertNotIn("password_hash", result.to_dict()["data"])

    def test_receptionist_cannot_create_users(self):
        result = self._create(session_for(self.receptionist))
        self.assertEqual(result.error, "Apenas proprietários e administradores podem criar usuários")

    def test_admin_cannot_create_owner(self):
        result = self._create(session_for(self.admin), role="OWNER")
        self.assertEqual(result.error, "Administradores não podem criar proprietários")

    def test_email_unique_within_clinic(self):
        result = self._create(session_for(self.owner), email=self.admin.email.upper())
        self.assertEqual(result.error, "Este email já está em uso na clínica")

    def test_same_email_allowed_in_other_clinic(self):
        other = make_clinic()
        other_owner = make_user(other, role=User.Role.OWNER)

        result = self._create(session_for(other_owner), email=self.admin.email)

        self.assertTrue(result.success, result.error)

    def test_password_and_role_validation(self):
        short = self._create(session_for(self.owner), password="123")
        role = self._create(session_for(self.owner), role="INTERN")

        self.assertEqual(short.error, "Dados inválidos: Senha deve ter pelo menos 6 caracteres")
        self.assertEqual(role.error, "Dados inválidos: Cargo deve ser OWNER, ADMIN, DENTIST ou RECEPTIONIST")

    # ─── edição ─────────────────────────────────────────────────────
    def test_admin_cannot_edit_owner(self):
        result = self.service.update_user(session_for(self.admin), self.owner.id, {"name": "Outro Nome"})
        self.assertEqual(result.error, "Administradores não podem editar proprietários")

    def test_cannot_deactivate_self(self):
        result = self.service.update_user(session_for(self.admin), self.admin.id, {"is_active": False})
        self.assertEqual(result.error, "Você não pode desativar sua própria conta")

    def test_cannot_change_own_role(self):
        result = self.service.update_user(session_for(self.admin), self.admin.id, {"role": "RECEPTIONIST"})
        self.assertEqual(result.error, "Você não pode alterar seu próprio cargo")

    def test_owner_can_be_demoted_while_another_owner_remains(self):
        second = make_user(self.clinic, role=User.Role.OWNER)

        result = self.service.update_user(session_for(second), self.owner.id, {"role": "ADMIN"})

        self.assertTrue(result.success, result.error)
        self.owner.refresh_from_db()
        self.assertEqual(self.owner.role, User.Role.ADMIN)

    def test_only_owner_cannot_be_deactivated(self):
        second = make_user(self.clinic, role=User.Role.OWNER)
        self.service.update_user(session_for(self.owner), second.id, {"is_active": False})

        result = self.service.update_user(session_for(second), self.owner.id, {"is_active": False})

        self.assertEqual(result.error, "Não é possível desativar o único proprietário da clínica")

    def test_password_change_rehashes(self):
        result = self.service.update_user(session_for(self.owner), self.receptionist.id, {"password": "nova-senha"})

        self.assertTrue(result.success, result.error)
        stored = User.objects.get(id=self.receptionist.id)
        self.assertTrue(HashService.verify("nova-senha", stored.password_hash))

    def test_update_email_conflict(self):
        result = self.service.update_user(
            session_for(self.owner), self.receptionist.id, {"email": self.admin.email}
        )
        self.assertEqual(result.error, "Este email já está em uso na clínica")

    def test_unknown_user(self):
        result = self.service.update_user(session_for(self.owner), "nao-e-uuid", {"name": "Fulano"})
        self.assertEqual(result.error, "Usuário não encontrado")

    # ─── listagem ───────────────────────────────────────────────────
    def test_list_filters(self):
        session = session_for(self.owner)

        by_role = self.service.list_users(session, {"role": "ADMIN"})
        by_search = self.service.list_users(session, {"search": "recep"})

        self.assertEqual([u.id for u in by_role.data], [self.admin.id])
        self.assertEqual([u.id for u in by_search.data], [self.receptionist.id])
