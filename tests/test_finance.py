"""Orçamentos (planos de tratamento) e pagamentos."""
from decimal import Decimal

from django.test import TestCase

from plugins.django_interface.models import PaymentTreatmentPlan, TreatmentPlan, User
from tests.helpers.builders import (
    core_container,
    link_procedure,
    make_clinic,
    make_dentist,
    make_patient,
    make_procedure,
    make_user,
    session_for,
)


class TreatmentPlanTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clinic = make_clinic()
        cls.owner = make_user(cls.clinic, role=User.Role.OWNER)
        cls.receptionist = make_user(cls.clinic, role=User.Role.RECEPTIONIST)
        cls.dentist = make_dentist(cls.clinic)
        cls.patient = make_patient(cls.clinic)
        cls.canal = make_procedure(cls.clinic, name="Tratamento de canal", base_value=Decimal("800.00"))
        link_procedure(cls.dentist, cls.canal)

    def setUp(self):
        self.service = core_container().finance_service()
        self.session = session_for(self.owner)

    def _plan(self, items=None, **extra):
        data = {
            "patient_id": str(self.patient.id),
            "dentist_id": str(self.dentist.id),
            "items": items or [{"description": "Limpeza", "value": "120.00", "quantity": 2}],
            **extra,
        }
        return self.service.create_treatment_plan(self.session, data)

    def test_total_is_sum_of_value_times_quantity(self):
        result = self._plan(
            [
                {"description": "Limpeza", "value": "120.00", "quantity": 2},
                {"description": "Tratamento de canal", "value": "800.00", "procedure_id": str(self.canal.id)},
            ]
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.status, "OPEN")
        self.assertEqual(result.data.total_amount, Decimal("1040.00"))
        self.assertEqual(len(result.data.items), 2)

    def test_items_are_required(self):
        result = self.service.create_treatment_plan(
            self.session,
            {"patient_id": str(self.patient.id), "dentist_id": str(self.dentist.id), "items": []},
        )

        self.assertEqual(result.error, "Dados inválidos: Deve haver pelo menos um item no orçamento")

    def test_linked_procedure_must_match_catalog_value(self):
        result = self._plan(
            [{"description": "Tratamento de canal", "value": "700.00", "procedure_id": str(self.canal.id)}]
        )

        self.assertFalse(result.success)
        self.assertIn("não corresponde ao valor cadastrado", result.error)

    def test_procedure_must_be_linked_to_plan_dentist(self):
        other = make_procedure(self.clinic, name="Clareamento", base_value=Decimal("500.00"))

        result = self._plan([{"description": "Clareamento", "value": "500.00", "procedure_id": str(other.id)}])

        self.assertEqual(result.error, 'Procedimento "Clareamento" não está vinculado ao dentista selecionado')

    def test_inactive_patient_is_rejected(self):
        inactive = make_patient(self.clinic, is_active=False)

        result = self._plan(patient_id=str(inactive.id))

        self.assertEqual(result.error, "Paciente está inativo")

    def test_update_items_recomputes_total(self):
        plan = self._plan().data

        result = self.service.update_treatment_plan(
            self.session, plan.id, {"items": [{"description": "Raspagem", "value": "90.50", "quantity": 3}]}
        )

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.data.total_amount, Decimal("271.50"))
        self.assertEqual([i.description for i in result.data.items], ["Raspagem"])

    def test_receptionist_cannot_approve(self):
        plan = self._plan().data

        result = self.service.update_treatment_plan(session_for(self.receptionist), plan.id, {"status": "APPROVED"})

        self.assertEqual(result.error, "Você não tem permissão para aprovar ou rejeitar orçamentos")

    def test_closed_plan_is_frozen(self):
        plan = self._plan().data
        self.assertTrue(self.service.update_treatment_plan(self.session, plan.id, {"status": "REJECTED"}).success)

        status = self.service.update_treatment_plan(self.session, plan.id, {"status": "APPROVED"})
        items = self.service.update_treatment_plan(
            self.session, plan.id, {"items": [{"description": "Limpeza", "value": "10"}]}
        )

        self.assertEqual(status.error, "Não é possível alterar o status de um orçamento rejeitado")
        self.assertEqual(
            items.error,
            "Não é possível editar os itens de um orçamento rejeitado. Apenas orçamentos em aberto podem ser editados.",
        )

    def test_list_filters_by_status(self):
        open_plan = self._plan().data
        rejected = self._plan().data
        self.service.update_treatment_plan(self.session, rejected.id, {"status": "REJECTED"})

        result = self.service.list_treatment_plans(self.session, {"status": "OPEN"})

        self.assertEqual([p.id for p in result.data], [open_plan.id])


class PaymentTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clinic = make_clinic()
        cls.owner = make_user(cls.clinic, role=User.Role.OWNER)
        cls.dentist = make_dentist(cls.clinic)
        cls.patient = make_patient(cls.clinic)

    def setUp(self):
        self.service = core_container().finance_service()
        self.session = session_for(self.owner)

    def _open_plan(self):
        return TreatmentPlan.objects.create(
            clinic=self.clinic, patient=self.patient, dentist=self.dentist, total_amount=Decimal("300.00")
        )

    def test_payment_approves_linked_open_plans(self):
        plan = self._open_plan()

        result = self.service.create_payment(
            self.session,
            {
                "amount": "300.00",
                "method": "PIX",
                "patient_id": str(self.patient.id),
                "treatment_plan_ids": [str(plan.id)],
            },
        )

        self.assertTrue(result.success, result.error)
        plan.refresh_from_db()
        self.assertEqual(plan.status, TreatmentPlan.Status.APPROVED)
        self.assertTrue(PaymentTreatmentPlan.objects.filter(payment_id=result.data.id, plan=plan).exists())
        self.assertEqual(result.data.treatment_plans[0]["id"], plan.id)

    def test_amount_limits(self):
        zero = self.service.create_payment(self.session, {"amount": "0", "method": "CASH"})
        huge = self.service.create_payment(self.session, {"amount": "1000000", "method": "CASH"})

        self.assertEqual(zero.error, "Dados inválidos: Valor deve ser positivo")
        self.assertEqual(huge.error, "Dados inválidos: Valor deve ser no máximo R$ 999.999,99")

    def test_method_must_be_known(self):
        result = self.service.create_payment(self.session, {"amount": "10", "method": "BOLETO"})
        self.assertEqual(result.error, "Dados inválidos: Forma de pagamento deve ser CASH, PIX ou CARD")

    def test_unknown_plan_fails_without_writing(self):
        result = self.service.create_payment(
            self.session,
            {"amount": "50", "method": "CARD", "treatment_plan_ids": ["5f0c8b7e-2b1a-4c61-9a43-000000000000"]},
        )

        self.assertEqual(result.error, "Um ou mais orçamentos não foram encontrados")
        self.assertEqual(self.service.list_payments(self.session).data, [])

    def test_list_rejects_inverted_date_range(self):
        result = self.service.list_payments(
            self.session, {"start_date": "2026-02-01T00:00:00", "end_date": "2026-01-01T00:00:00"}
        )
        self.assertEqual(result.error, "Dados inválidos: Data inicial deve ser anterior ou igual à data final")

    def test_list_filters_by_method(self):
        self.service.create_payment(self.session, {"amount": "10", "method": "CASH"})
        pix = self.service.create_payment(self.session, {"amount": "20", "method": "PIX"}).data

        result = self.service.list_payments(self.session, {"method": "PIX"})

        self.assertEqual([p.id for p in result.data], [pix.id])
