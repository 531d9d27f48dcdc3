import uuid
from typing import Annotated

from django.test import SimpleTestCase
from pydantic import BaseModel

from odonto_core.adapters.observability.decorators import INTERNAL_ERROR, as_operation_result
from odonto_core.adapters.observability.metrics import registry, render_latest
from odonto_core.core.application.cqrs import BaseService, CommandBus, OperationResult, QueryBus
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.validation import number, text
from odonto_core.core.domain.entities.user_entity import UserRole
from odonto_core.core.domain.exceptions import InvalidTransitionError


class _Payload(BaseModel):
    name: Annotated[str, text(min_length=2, min_message="Nome curto")]
    amount: Annotated[int, number(gt=0, gt_message="Valor deve ser positivo")]


class _ProbeService(BaseService):
    @as_operation_result("probe_validate")
    def validate(self, session, data):
        return _Payload.model_validate(data)

    @as_operation_result("probe_rule")
    def rule(self, session):
        raise InvalidTransitionError("Transição não permitida")

    @as_operation_result("probe_crash")
    def crash(self, session):
        raise RuntimeError("conexão perdida com detalhes internos")


class OperationResultTests(SimpleTestCase):
    def setUp(self):
        self.service = _ProbeService(CommandBus(), QueryBus())
        self.session = SessionContext(clinic_id=uuid.uuid4(), role="RECEPTIONIST", user_id=str(uuid.uuid4()))

    def _failures(self, operation, kind):
        value = registry.get_sample_value(
            "clinic_operation_failures_total", {"operation": operation, "kind": kind}
        )
        return value or 0.0

    def test_session_coerces_role_and_ids(self):
        self.assertIs(self.session.role, UserRole.RECEPTIONIST)
        self.assertIsInstance(self.session.user_id, uuid.UUID)
        self.assertFalse(self.session.is_manager)

    def test_success_wraps_data(self):
        result = self.service.validate(self.session, {"name": "Ana", "amount": 1})

        self.assertTrue(result.success)
        self.assertEqual(result.data.name, "Ana")

    def test_validation_messages_are_joined(self):
        before = self._failures("probe_validate", "validation")

        result = self.service.validate(self.session, {"name": "A", "amount": 0})

        self.assertEqual(result.error, "Dados inválidos: Nome curto, Valor deve ser positivo")
        self.assertEqual(self._failures("probe_validate", "validation"), before + 1)

    def test_missing_field_uses_fallback_message(self):
        result = self.service.validate(self.session, {"name": "Ana"})
        self.assertEqual(result.error, "Dados inválidos: Campo obrigatório: amount")

    def test_business_error_message_is_kept(self):
        result = self.service.rule(self.session)

        self.assertEqual(result.error, "Transição não permitida")
        self.assertGreaterEqual(self._failures("probe_rule", "InvalidTransitionError"), 1)

    def test_unexpected_error_is_hidden(self):
        result = self.service.crash(self.session)

        self.assertEqual(result.to_dict(), {"success": False, "error": INTERNAL_ERROR})
        self.assertGreaterEqual(self._failures("probe_crash", "internal"), 1)

    def test_to_dict_on_success(self):
        self.assertEqual(OperationResult.ok([1, 2]).to_dict(), {"success": True, "data": [1, 2]})

    def test_metrics_are_exposed(self):
        self.service.rule(self.session)

        body, content_type = render_latest()

        self.assertIn(b"clinic_operation_failures_total", body)
        self.assertIn(b"clinic_operation_duration_seconds", body)
        self.assertTrue(content_type.startswith("text/plain"))
