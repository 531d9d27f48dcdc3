"""Especialidades, procedimentos, catálogo CID-10 e prontuários."""
from datetime import timedelta
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone

from plugins.django_interface.models import Appointment, Cid, Record, User
from tests.helpers.builders import (
    core_container,
    make_appointment,
    make_clinic,
    make_dentist,
    make_patient,
    make_procedure,
    make_specialty,
    make_user,
    session_for,
)


class SpecialtyTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clinic = make_clinic()
        cls.owner = make_user(cls.clinic, role=User.Role.OWNER)
        cls.dentist_user = make_user(cls.clinic, role=User.Role.DENTIST)
        cls.ortho = make_specialty(cls.clinic, name="Ortodontia")

    def setUp(self):
        self.service = core_container().catalog_service()
        self.session = session_for(self.owner)

    def test_create_specialty(self):
        result = self.service.create_specialty(self.session, {"name": "  Endodontia ", "description": ""})

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.name, "Endodontia")
        self.assertIsNone(result.data.description)

    def test_name_is_unique_ignoring_case(self):
        result = self.service.create_specialty(self.session, {"name": "ORTODONTIA"})
        self.assertEqual(result.error, "Já existe uma especialidade com este nome")

    def test_same_name_in_other_clinic(self):
        other_owner = make_user(make_clinic(), role=User.Role.OWNER)

        result = self.service.create_specialty(session_for(other_owner), {"name": "Ortodontia"})

        self.assertTrue(result.success, result.error)

    def test_name_too_short(self):
        result = self.service.create_specialty(self.session, {"name": "O"})
        self.assertEqual(result.error, "Dados inválidos: Nome deve ter no mínimo 2 caracteres")

    def test_only_managers_create(self):
        result = self.service.create_specialty(session_for(self.dentist_user), {"name": "Implantodontia"})
        self.assertEqual(result.error, "Apenas proprietários e administradores podem criar especialidades")

    def test_rename_conflict_excludes_itself(self):
        perio = make_specialty(self.clinic, name="Periodontia")

        same = self.service.update_specialty(self.session, perio.id, {"name": "periodontia"})
        clash = self.service.update_specialty(self.session, perio.id, {"name": "Ortodontia"})

        self.assertTrue(same.success, same.error)
        self.assertEqual(clash.error, "Já existe uma especialidade com este nome")

    def test_list_filters(self):
        make_specialty(self.clinic, name="Prótese", is_active=False)

        active = self.service.list_specialties(self.session, {"is_active": True})
        search = self.service.list_specialties(self.session, {"search": "orto"})

        self.assertNotIn("Prótese", [s.name for s in active.data])
        self.assertEqual([s.name for s in search.data], ["Ortodontia"])


class ProcedureCatalogTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clinic = make_clinic()
        cls.owner = make_user(cls.clinic, role=User.Role.OWNER)
        cls.specialty = make_specialty(cls.clinic, name="Dentística")

    def setUp(self):
        self.service = core_container().catalog_service()
        self.session = session_for(self.owner)

    def _create(self, **data):
        payload = {"specialty_id": str(self.specialty.id), "name": "Restauração", "base_value": "180.00"}
        payload.update(data)
        return self.service.create_procedure(self.session, payload)

    def test_create_procedure(self):
        result = self._create(commission_percentage="30")

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.base_value, Decimal("180.00"))
        self.assertEqual(result.data.commission_percentage, Decimal("30"))
        self.assertTrue(result.data.is_active)

    def test_specialty_must_belong_to_clinic(self):
        foreign = make_specialty(make_clinic())

        result = self._create(specialty_id=str(foreign.id))

        self.assertEqual(result.error, "Especialidade não encontrada")

    def test_value_limits(self):
        negative = self._create(base_value="-1")
        commission = self._create(commission_percentage="120")

        self.assertEqual(negative.error, "Dados inválidos: Valor base deve ser maior ou igual a 0")
        self.assertEqual(commission.error, "Dados inválidos: Comissão deve ser menor ou igual a 100")

    def test_deactivation_blocked_by_pending_appointments(self):
        procedure = make_procedure(self.clinic, specialty=self.specialty)
        dentist = make_dentist(self.clinic)
        appointment = make_appointment(
            self.clinic, make_patient(self.clinic), dentist, procedure=procedure, status=Appointment.Status.CONFIRMED
        )

        blocked = self.service.deactivate_procedure(self.session, procedure.id)
        Appointment.objects.filter(id=appointment.id).update(status=Appointment.Status.COMPLETED)
        allowed = self.service.deactivate_procedure(self.session, procedure.id)

        self.assertEqual(blocked.error, "Não é possível desativar procedimento com agendamentos pendentes")
        self.assertTrue(allowed.success, allowed.error)
        self.assertFalse(allowed.data.is_active)

    def test_activate_procedure(self):
        procedure = make_procedure(self.clinic, specialty=self.specialty, is_active=False)

        result = self.service.activate_procedure(self.session, procedure.id)

        self.assertTrue(result.data.is_active)

    def test_list_by_specialty_and_search(self):
        other = make_specialty(self.clinic, name="Cirurgia")
        make_procedure(self.clinic, specialty=other, name="Exodontia simples")
        make_procedure(self.clinic, specialty=self.specialty, name="Clareamento")

        by_specialty = self.service.list_procedures(self.session, {"specialty_id": str(other.id)})
        by_search = self.service.list_procedures(self.session, {"search": "clare"})

        self.assertEqual([p.name for p in by_specialty.data], ["Exodontia simples"])
        self.assertEqual([p.name for p in by_search.data], ["Clareamento"])

    def test_get_unknown_procedure(self):
        result = self.service.get_procedure(self.session, "1234")
        self.assertEqual(result.error, "Procedimento não encontrado")


class CidCatalogTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        call_command("seed_cids", stdout=StringIO())
        cls.owner = make_user(make_clinic(), role=User.Role.OWNER)

    def setUp(self):
        self.service = core_container().catalog_service()
        self.session = session_for(self.owner)

    def test_seed_is_idempotent(self):
        total = Cid.objects.count()

        call_command("seed_cids", stdout=StringIO())

        self.assertEqual(Cid.objects.count(), total)
        self.assertEqual(Cid.objects.get(code="K02.1").category, "Cárie Dentária")

    def test_search_by_code_prefix(self):
        result = self.service.search_cids(self.session, "k04")

        codes = [c.code for c in result.data]
        self.assertEqual(codes[0], "K04.0")
        self.assertTrue(all(code.startswith("K04") for code in codes))

    def test_search_by_description_with_limit(self):
        result = self.service.search_cids(self.session, "periodontite", limit=2)

        self.assertEqual(len(result.data), 2)
        self.assertTrue(all("eriodontite" in c.description for c in result.data))

    def test_limit_bounds(self):
        result = self.service.search_cids(self.session, "", limit=51)
        self.assertEqual(result.error, "Dados inválidos: Limite deve ser no máximo 50")


class RecordQueryTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clinic = make_clinic()
        cls.owner = make_user(cls.clinic, role=User.Role.OWNER)
        cls.dentist = make_dentist(cls.clinic)
        cls.patient = make_patient(cls.clinic, name="João Lima")
        cls.other_patient = make_patient(cls.clinic)
        now = timezone.now()
        cls.older = Record.objects.create(
            clinic=cls.clinic,
            patient=cls.patient,
            dentist=cls.dentist,
            date=now - timedelta(days=30),
            description="Consulta inicial",
        )
        cls.newer = Record.objects.create(
            clinic=cls.clinic,
            patient=cls.patient,
            dentist=cls.dentist,
            date=now,
            description="Retorno",
            procedures=[{"code": "REST", "description": "Restauração", "tooth": "16"}],
        )
        Record.objects.create(
            clinic=cls.clinic, patient=cls.other_patient, dentist=cls.dentist, date=now, description="Outro"
        )

    def setUp(self):
        self.service = core_container().record_service()
        self.session = session_for(self.owner)

    def test_list_by_patient_newest_first(self):
        result = self.service.list_records(self.session, patient_id=str(self.patient.id))
        self.assertEqual([r.id for r in result.data], [self.newer.id, self.older.id])

    def test_get_record_with_summaries(self):
        result = self.service.get_record(self.session, self.newer.id)

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.patient["name"], "João Lima")
        self.assertEqual(result.data.procedures[0]["tooth"], "16")

    def test_records_are_tenant_scoped(self):
        foreign_owner = make_user(make_clinic(), role=User.Role.OWNER)

        result = self.service.get_record(session_for(foreign_owner), self.newer.id)

        self.assertEqual(result.error, "Prontuário não encontrado")
